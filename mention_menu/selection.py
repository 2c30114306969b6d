"""
Selection handling.

Choosing a document is terminal. Choosing a person asks the API whether
that person can see the open document; if not, the author gets an advisory
notification that the mention will be silent. The mention is inserted
either way.
"""

import logging
from typing import Protocol

from .avatar import AvatarSize, resize_avatar
from .client import DOCUMENT_USERS_METHOD, MentionApiClient
from .config import MentionMenuConfig
from .errors import MalformedResponseError
from .models import AccessGrant, MentionCandidate, MentionKind, Notification

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    """Protocol for the host's toast collaborator."""

    async def notify(self, notification: Notification) -> None:
        """Show a notification to the author."""
        ...


class SelectionResolver:
    """Runs the post-selection access check for person mentions."""

    def __init__(
        self,
        api: MentionApiClient,
        notifier: Notifier | None = None,
        config: MentionMenuConfig | None = None,
    ) -> None:
        self.api = api
        self.notifier = notifier
        self.config = config or api.config

    async def check_access(self, document_id: str, user_id: str) -> list[AccessGrant]:
        """Return the grants that let ``user_id`` see ``document_id``.

        Raises:
            TransportError: The request failed.
            MalformedResponseError: A grant record was missing its id.
        """
        records = await self.api.list_document_users(document_id, user_id)

        try:
            return [AccessGrant.from_api(r) for r in records]
        except (KeyError, TypeError, AttributeError) as e:
            raise MalformedResponseError(
                f"Unexpected record in access listing: {e!r}",
                method=DOCUMENT_USERS_METHOD,
            ) from e

    def build_warning(
        self, candidate: MentionCandidate, document_id: str
    ) -> Notification:
        """Build the notice for a person who cannot see the document."""
        return Notification(
            message=self.config.access_warning_template.format(
                user_name=candidate.label
            ),
            icon=resize_avatar(candidate.icon, AvatarSize.TOAST),
            duration=self.config.notification_duration,
            data={"user_id": candidate.entity_id, "document_id": document_id},
        )

    async def on_select(
        self, candidate: MentionCandidate, document_id: str | None
    ) -> Notification | None:
        """
        React to a chosen candidate.

        Args:
            candidate: The selected menu entry
            document_id: The document open in the editor

        Returns:
            A Notification if the mentioned person lacks access, else None.

        Raises:
            TransportError: The access check failed.
        """
        if candidate.kind is MentionKind.DOCUMENT:
            return None

        if document_id is None:
            logger.warning(
                f"No open document, skipping access check for {candidate.entity_id}"
            )
            return None

        grants = await self.check_access(document_id, candidate.entity_id)
        if grants:
            return None

        notification = self.build_warning(candidate, document_id)
        logger.info(
            f"User {candidate.entity_id} has no access to document {document_id}"
        )

        if self.notifier is not None:
            await self.notifier.notify(notification)
        return notification
