"""
Result aggregation and snapshot publishing.

The aggregator owns the one piece of shared state in the menu: the current
SuggestionListState. It is only ever replaced, never patched, so a consumer
sees either "not loaded" or a complete list.

Example:
    aggregator = ResultAggregator()

    async for state in aggregator.subscribe():
        if state.loaded:
            render(state.candidates)

    # elsewhere
    aggregator.aggregate(people, documents, search_term="al", generation=1)
"""

import asyncio
import logging
from contextlib import aclosing
from typing import AsyncIterator, Iterable

from .models import MentionCandidate, MentionKind, SuggestionListState

logger = logging.getLogger(__name__)


class ResultAggregator:
    """
    Merges people and documents into one list and publishes snapshots.

    Ordering policy: all people precede all documents, and each group keeps
    the order the suggestion service returned. No re-ranking happens here.

    Subscribers each get their own queue. A subscriber that falls behind
    loses its oldest pending snapshot rather than blocking the publisher;
    the newest snapshot is always delivered.
    """

    def __init__(self) -> None:
        """Initialize with an unloaded state and no subscribers."""
        self._state = SuggestionListState()
        self._subscribers: list[asyncio.Queue[SuggestionListState]] = []

    @property
    def state(self) -> SuggestionListState:
        """The latest published snapshot."""
        return self._state

    @property
    def subscriber_count(self) -> int:
        """Return number of active subscriptions (for testing/monitoring)."""
        return len(self._subscribers)

    def aggregate(
        self,
        people: Iterable[MentionCandidate],
        documents: Iterable[MentionCandidate],
        search_term: str | None = None,
        generation: int = 0,
    ) -> SuggestionListState:
        """
        Merge one fetch's candidates and publish them as a loaded snapshot.

        Args:
            people: Person candidates in service order
            documents: Document candidates in service order
            search_term: Query the candidates answer
            generation: Fetch generation they came from

        Returns:
            The published snapshot.

        Raises:
            ValueError: If a candidate is passed in the wrong group.
        """
        people = tuple(people)
        documents = tuple(documents)

        if any(c.kind is not MentionKind.USER for c in people):
            raise ValueError("people must only contain user candidates")
        if any(c.kind is not MentionKind.DOCUMENT for c in documents):
            raise ValueError("documents must only contain document candidates")

        state = SuggestionListState(
            loaded=True,
            candidates=people + documents,
            search_term=search_term,
            generation=generation,
        )
        self._publish(state)
        logger.debug(
            f"Published {len(state.candidates)} candidates "
            f"(generation {generation}, query {search_term!r})"
        )
        return state

    def reset(self) -> SuggestionListState:
        """Publish an unloaded snapshot, hiding the menu."""
        state = SuggestionListState()
        self._publish(state)
        return state

    def _publish(self, state: SuggestionListState) -> None:
        self._state = state
        for queue in self._subscribers:
            if queue.full():
                queue.get_nowait()
                logger.warning("Suggestion subscriber is behind, dropped a snapshot")
            queue.put_nowait(state)

    async def subscribe(
        self, queue_size: int = 1
    ) -> AsyncIterator[SuggestionListState]:
        """
        Subscribe to snapshots.

        The current snapshot is yielded first, then every later one.

        Args:
            queue_size: Snapshots buffered before the oldest is dropped

        Yields:
            SuggestionListState objects as they are published.
        """
        queue: asyncio.Queue[SuggestionListState] = asyncio.Queue(maxsize=queue_size)
        queue.put_nowait(self._state)
        self._subscribers.append(queue)

        try:
            while True:
                yield await queue.get()
        finally:
            if queue in self._subscribers:
                self._subscribers.remove(queue)

    async def wait_until_loaded(
        self, timeout: float | None = None
    ) -> SuggestionListState | None:
        """
        Wait for a loaded snapshot.

        Args:
            timeout: Maximum seconds to wait (None = wait forever)

        Returns:
            The first loaded snapshot, or None if timeout occurred.
        """
        try:
            async with asyncio.timeout(timeout), aclosing(self.subscribe()) as states:
                async for state in states:
                    if state.loaded:
                        return state
        except TimeoutError:
            return None
        return None
