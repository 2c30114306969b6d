"""
Mention identity building.

Turns raw entities into menu candidates. Each aggregation pass mints new
mention ids, even for entities seen before; the id names the mention node
about to be inserted, not the person or document behind it.
"""

import uuid
from typing import Callable, Iterable

from .avatar import AvatarSize, avatar_icon, document_icon
from .models import (
    DocumentEntity,
    MentionCandidate,
    MentionKind,
    RawSuggestionResult,
    UserEntity,
)

MentionIdFactory = Callable[[MentionKind, str, int, int], uuid.UUID]

MENTION_NAMESPACE = uuid.UUID("6f1c2d8e-3b7a-5e49-9a0d-4c2f8b1e7d35")


def random_mention_id(
    kind: MentionKind, entity_id: str, generation: int, index: int = 0
) -> uuid.UUID:
    """Mint an ephemeral random id (the default)."""
    return uuid.uuid4()


def deterministic_mention_id(
    kind: MentionKind, entity_id: str, generation: int, index: int = 0
) -> uuid.UUID:
    """Derive the id from kind, entity, fetch generation and list position.

    Stable for a given fetch, different across fetches. The position keeps
    ids distinct when the service returns the same entity twice.
    """
    return uuid.uuid5(
        MENTION_NAMESPACE, f"{kind.value}:{entity_id}:{generation}:{index}"
    )


class MentionIdentityBuilder:
    """Builds MentionCandidate objects from fetched entities."""

    def __init__(
        self,
        id_factory: MentionIdFactory = random_mention_id,
        avatar_size: AvatarSize = AvatarSize.SMALL,
    ) -> None:
        self.id_factory = id_factory
        self.avatar_size = avatar_size

    def build_people(
        self,
        users: Iterable[UserEntity],
        actor_id: str | None = None,
        generation: int = 0,
    ) -> tuple[MentionCandidate, ...]:
        return tuple(
            MentionCandidate(
                mention_id=self.id_factory(
                    MentionKind.USER, user.id, generation, index
                ),
                kind=MentionKind.USER,
                entity_id=user.id,
                label=user.name,
                icon=avatar_icon(user, self.avatar_size),
                append_space=True,
                actor_id=actor_id,
            )
            for index, user in enumerate(users)
        )

    def build_documents(
        self,
        documents: Iterable[DocumentEntity],
        actor_id: str | None = None,
        generation: int = 0,
    ) -> tuple[MentionCandidate, ...]:
        return tuple(
            MentionCandidate(
                mention_id=self.id_factory(
                    MentionKind.DOCUMENT, doc.id, generation, index
                ),
                kind=MentionKind.DOCUMENT,
                entity_id=doc.id,
                label=doc.title,
                icon=document_icon(doc),
                append_space=True,
                actor_id=actor_id,
            )
            for index, doc in enumerate(documents)
        )

    def build(
        self,
        result: RawSuggestionResult,
        actor_id: str | None = None,
        generation: int = 0,
    ) -> tuple[MentionCandidate, ...]:
        """Build all candidates for one fetch: people first, then documents."""
        return self.build_people(
            result.users, actor_id, generation
        ) + self.build_documents(result.documents, actor_id, generation)
