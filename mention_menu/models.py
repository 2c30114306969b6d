"""
Data model for mention suggestions.

Entities come from the editor API, candidates are what the menu renders,
and snapshots are what the aggregator publishes. Everything here is
immutable: a new fetch produces new objects rather than patching old ones.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from uuid import UUID


class MentionKind(Enum):
    """Kinds of entity that can be mentioned."""

    USER = "user"
    """A person; selecting one triggers an access check."""

    DOCUMENT = "document"
    """A document; selection is terminal."""


class IconKind(Enum):
    """How the renderer should draw a candidate's icon."""

    AVATAR = "avatar"
    """A user's avatar image, falling back to initials."""

    CUSTOM = "custom"
    """A document's own icon (emoji or named icon)."""

    DOCUMENT = "document"
    """The default document glyph."""


@dataclass(frozen=True)
class IconRef:
    """Reference to an icon, resolved by the rendering layer.

    Attributes:
        kind: Which family of icon to draw.
        value: Avatar URL or custom icon value (None for the default glyph).
        color: Optional tint or initials background color.
        size: Pixel size hint for avatars.
        initials: Fallback text when an avatar image is unavailable.
        alt: Accessible label.
    """

    kind: IconKind
    value: str | None = None
    color: str | None = None
    size: int | None = None
    initials: str | None = None
    alt: str | None = None


@dataclass(frozen=True)
class UserEntity:
    """A user returned by the suggestion service."""

    id: str
    name: str
    avatar_url: str | None = None
    color: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "UserEntity":
        return cls(
            id=str(data["id"]),
            name=data.get("name") or "",
            avatar_url=data.get("avatarUrl"),
            color=data.get("color"),
        )


@dataclass(frozen=True)
class DocumentEntity:
    """A document returned by the suggestion service."""

    id: str
    title: str
    icon: str | None = None
    color: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "DocumentEntity":
        return cls(
            id=str(data["id"]),
            title=data.get("title") or "",
            icon=data.get("icon"),
            color=data.get("color"),
        )


@dataclass(frozen=True)
class RawSuggestionResult:
    """Users and documents for one query, in the service's ranking order."""

    users: tuple[UserEntity, ...] = ()
    documents: tuple[DocumentEntity, ...] = ()


@dataclass(frozen=True)
class AccessGrant:
    """A record that a user can view a document."""

    user_id: str
    name: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "AccessGrant":
        return cls(user_id=str(data["id"]), name=data.get("name"))


@dataclass(frozen=True)
class Query:
    """The suggestion surface's input: what was typed and whether it is shown."""

    search_term: str = ""
    active: bool = False


@dataclass(frozen=True)
class MentionCandidate:
    """One entry of the mention menu.

    ``mention_id`` is minted per aggregation pass. It identifies the mention
    node that will be inserted, not the underlying entity; callers must not
    use it as a stable entity key.
    """

    mention_id: UUID
    """Identity of the mention node to insert."""

    kind: MentionKind
    """Whether this is a person or a document."""

    entity_id: str
    """ID of the mentioned user or document."""

    label: str
    """Display text: the user's name or the document title."""

    icon: IconRef
    """Icon shown beside the label."""

    append_space: bool = True
    """Insert a trailing space after the mention."""

    actor_id: str | None = None
    """The user performing the mention, for auditing."""

    def to_attrs(self) -> dict[str, Any]:
        """Return the attributes stored on the editor's mention node."""
        attrs: dict[str, Any] = {
            "id": str(self.mention_id),
            "type": self.kind.value,
            "modelId": self.entity_id,
            "label": self.label,
        }
        if self.actor_id is not None:
            attrs["actorId"] = self.actor_id
        return attrs


@dataclass(frozen=True)
class SuggestionListState:
    """A published snapshot of the mention menu.

    Consumers render nothing while ``loaded`` is False, and the full
    ``candidates`` sequence otherwise.
    """

    loaded: bool = False
    """True once a complete list for some fetch has been incorporated."""

    candidates: tuple[MentionCandidate, ...] = ()
    """Ordered candidates: all users, then all documents."""

    search_term: str | None = None
    """Query the candidates were fetched for."""

    generation: int = 0
    """Fetch generation that produced this snapshot."""


@dataclass(frozen=True)
class Notification:
    """An advisory message for the host's toast collaborator."""

    message: str
    icon: IconRef | None = None
    duration: float = 10.0
    """Seconds the toast stays visible."""

    data: dict[str, Any] = field(default_factory=dict)
    """Structured context (user and document ids)."""
