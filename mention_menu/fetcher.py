"""Suggestion fetching: one network query per call."""

import logging

from .client import SUGGESTIONS_METHOD, MentionApiClient
from .errors import MalformedResponseError
from .models import DocumentEntity, RawSuggestionResult, UserEntity

logger = logging.getLogger(__name__)


class SuggestionFetcher:
    """Resolves a search term into raw users and documents.

    Ranking and filtering belong to the service; results keep its order.
    The fetcher holds no state between calls and never retries.
    """

    def __init__(self, api: MentionApiClient) -> None:
        self.api = api

    async def fetch(self, search_term: str) -> RawSuggestionResult:
        """Query the suggestion service.

        Raises:
            TransportError: The request failed.
            MalformedResponseError: An entity was missing its id.
        """
        data = await self.api.suggest_mentions(search_term)

        try:
            users = tuple(UserEntity.from_api(u) for u in data.get("users") or [])
            documents = tuple(
                DocumentEntity.from_api(d) for d in data.get("documents") or []
            )
        except (KeyError, TypeError, AttributeError) as e:
            raise MalformedResponseError(
                f"Unexpected entity in suggestions: {e!r}", method=SUGGESTIONS_METHOD
            ) from e

        logger.debug(
            f"Fetched {len(users)} users and {len(documents)} documents "
            f"for {search_term!r}"
        )
        return RawSuggestionResult(users=users, documents=documents)
