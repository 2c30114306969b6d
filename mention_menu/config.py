"""Configuration for the mention menu."""

import os
from dataclasses import dataclass

DEFAULT_ACCESS_WARNING = (
    "{user_name} won't be notified, as they do not have access to this document"
)


@dataclass
class MentionMenuConfig:
    """Settings shared by the API client, controller and resolver.

    Attributes:
        api_url: Base URL of the editor API (methods are appended).
        api_token: Optional bearer token sent with every request.
        timeout_seconds: Per-request timeout.
        notification_duration: Seconds an access warning stays visible.
        debounce_seconds: Delay before fetching, so fast typing supersedes
            pending requests instead of sending them (0 disables).
        refetch_on_search_change: Fetch again when the search term changes
            while the menu is already active.
        access_warning_template: Message for people without access; receives
            ``user_name``.
    """

    api_url: str = "http://localhost:3000/api"
    """Base URL of the editor API."""

    api_token: str | None = None
    """Bearer token, if the API requires one."""

    timeout_seconds: float = 10.0
    """Per-request timeout."""

    notification_duration: float = 10.0
    """Seconds an access warning stays visible."""

    debounce_seconds: float = 0.0
    """Delay before a fetch is sent."""

    refetch_on_search_change: bool = True
    """Fetch again when the search term changes while active."""

    access_warning_template: str = DEFAULT_ACCESS_WARNING
    """Message for a mentioned person who cannot see the document."""

    @classmethod
    def from_env(cls, prefix: str = "MENTION_MENU_") -> "MentionMenuConfig":
        """Build a config from environment variables.

        Recognized variables (with the default prefix): MENTION_MENU_API_URL,
        MENTION_MENU_API_TOKEN, MENTION_MENU_TIMEOUT,
        MENTION_MENU_NOTIFICATION_DURATION, MENTION_MENU_DEBOUNCE and
        MENTION_MENU_REFETCH_ON_SEARCH_CHANGE. Unset variables keep defaults.
        """
        config = cls()
        env = os.environ

        if url := env.get(f"{prefix}API_URL"):
            config.api_url = url
        if token := env.get(f"{prefix}API_TOKEN"):
            config.api_token = token
        if timeout := env.get(f"{prefix}TIMEOUT"):
            config.timeout_seconds = float(timeout)
        if duration := env.get(f"{prefix}NOTIFICATION_DURATION"):
            config.notification_duration = float(duration)
        if debounce := env.get(f"{prefix}DEBOUNCE"):
            config.debounce_seconds = float(debounce)
        if refetch := env.get(f"{prefix}REFETCH_ON_SEARCH_CHANGE"):
            config.refetch_on_search_change = refetch.lower() in ("1", "true", "yes")

        return config
