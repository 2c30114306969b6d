"""
Mention menu controller.

Drives the query lifecycle of the "@" suggestion surface:

    INACTIVE --activate--> FETCHING --fetch resolves--> LOADED
    LOADED --search changes while active--> FETCHING (new) --> LOADED
    any --deactivate--> INACTIVE

Every fetch runs as its own task tagged with a generation number. Starting
a new fetch or deactivating cancels the outstanding one, and a task whose
generation is no longer current never publishes, so an older response can
not overwrite a newer list.

Example:
    async with MentionApiClient(config) as api:
        controller = MentionMenuController(api, notifier=toasts, actor_id="u0")
        controller.navigate("/doc/roadmap-Xy12Ab")

        controller.update("al", active=True)
        state = await controller.wait()

        notification = await controller.select(state.candidates[0])
"""

import asyncio
import logging
from enum import Enum
from typing import AsyncIterator, Callable

from .aggregator import ResultAggregator
from .client import MentionApiClient
from .config import MentionMenuConfig
from .fetcher import SuggestionFetcher
from .identity import MentionIdentityBuilder
from .models import MentionCandidate, Notification, Query, SuggestionListState
from .routing import parse_document_slug
from .selection import Notifier, SelectionResolver

logger = logging.getLogger(__name__)


class QueryPhase(Enum):
    """Where the suggestion surface is in its lifecycle."""

    INACTIVE = "inactive"
    """Nothing to show: the surface is hidden, or its fetch failed."""

    FETCHING = "fetching"
    """A fetch for the current query is in flight."""

    LOADED = "loaded"
    """A complete list is published and the surface is active."""


class MentionMenuController:
    """
    Connects activation, fetching, aggregation and selection.

    All methods must be called from the event loop that runs the fetches.
    """

    def __init__(
        self,
        api: MentionApiClient,
        *,
        notifier: Notifier | None = None,
        config: MentionMenuConfig | None = None,
        actor_id: str | None = None,
        document_id: str | None = None,
        builder: MentionIdentityBuilder | None = None,
        aggregator: ResultAggregator | None = None,
        fetcher: SuggestionFetcher | None = None,
        resolver: SelectionResolver | None = None,
        error_handler: Callable[[BaseException], None] | None = None,
    ) -> None:
        """Initialize the controller.

        Args:
            api: Client for the editor API
            notifier: Receives access warnings after selection
            config: Settings (defaults to the client's config)
            actor_id: The user performing mentions
            document_id: The document open in the editor
            builder: Candidate builder (default: random mention ids)
            aggregator: Snapshot publisher
            fetcher: Suggestion fetcher (default: backed by ``api``)
            resolver: Selection resolver (default: backed by ``api``)
            error_handler: Called with fetch failures for the current query
        """
        self.config = config or api.config
        self.actor_id = actor_id
        self.document_id = document_id
        self.builder = builder or MentionIdentityBuilder()
        self.aggregator = aggregator or ResultAggregator()
        self.fetcher = fetcher or SuggestionFetcher(api)
        self.resolver = resolver or SelectionResolver(api, notifier, self.config)
        self.error_handler = error_handler

        self.last_error: BaseException | None = None
        self._query = Query()
        self._generation = 0
        self._task: asyncio.Task[SuggestionListState | None] | None = None

    @property
    def query(self) -> Query:
        return self._query

    @property
    def generation(self) -> int:
        """Generation of the most recent fetch (or invalidation)."""
        return self._generation

    @property
    def state(self) -> SuggestionListState:
        return self.aggregator.state

    @property
    def phase(self) -> QueryPhase:
        """Current lifecycle phase.

        There is no separate error phase: a failed fetch clears the published
        list, so an active surface whose fetch failed reads INACTIVE, the same
        as a hidden one. Check ``last_error`` to tell the two apart.
        """
        if not self._query.active:
            return QueryPhase.INACTIVE
        if self._task is not None and not self._task.done():
            return QueryPhase.FETCHING
        if self.aggregator.state.loaded:
            return QueryPhase.LOADED
        return QueryPhase.INACTIVE

    def subscribe(self) -> AsyncIterator[SuggestionListState]:
        """Subscribe to published suggestion snapshots."""
        return self.aggregator.subscribe()

    def navigate(self, location: str) -> str | None:
        """Update the open document from a navigation path or URL."""
        self.document_id = parse_document_slug(location)
        return self.document_id

    def update(
        self, search_term: str, active: bool
    ) -> asyncio.Task[SuggestionListState | None] | None:
        """
        Apply a new query state.

        Args:
            search_term: Text typed after the trigger character
            active: Whether the suggestion surface is shown

        Returns:
            The fetch task if this update started one, else None.
        """
        previous = self._query
        self._query = Query(search_term=search_term, active=active)

        if not active:
            if previous.active:
                logger.debug("Mention menu deactivated")
                self._invalidate()
                self.aggregator.reset()
            return None

        if not previous.active:
            return self._spawn(search_term)

        if (
            search_term != previous.search_term
            and self.config.refetch_on_search_change
        ):
            return self._spawn(search_term)

        return None

    async def wait(self) -> SuggestionListState:
        """
        Wait for the current query's fetch to settle.

        Returns:
            The latest published snapshot.

        Raises:
            MentionMenuError: The current query's fetch failed.
        """
        while self._task is not None and not self._task.done():
            await asyncio.wait([self._task])

        task = self._task
        if task is not None and not task.cancelled():
            error = task.exception()
            if error is not None:
                raise error
        return self.aggregator.state

    async def select(self, candidate: MentionCandidate) -> Notification | None:
        """Handle a candidate chosen in the menu."""
        return await self.resolver.on_select(candidate, self.document_id)

    async def close(self) -> None:
        """Cancel any in-flight fetch."""
        task = self._task
        self._invalidate()

        if task is not None and not task.done():
            try:
                await asyncio.wait_for(task, timeout=5.0)
            except (asyncio.CancelledError, asyncio.TimeoutError):
                pass

    def _invalidate(self) -> None:
        self._generation += 1
        if self._task is not None and not self._task.done():
            logger.debug("Cancelling superseded mention fetch")
            self._task.cancel()
        self._task = None

    def _spawn(self, search_term: str) -> asyncio.Task[SuggestionListState | None]:
        self._invalidate()
        generation = self._generation
        self.last_error = None

        task = asyncio.create_task(
            self._run_fetch(generation, search_term),
            name=f"mention-fetch-{generation}",
        )
        task.add_done_callback(lambda t: self._on_task_complete(generation, t))
        self._task = task

        logger.debug(f"Started mention fetch {generation} for {search_term!r}")
        return task

    async def _run_fetch(
        self, generation: int, search_term: str
    ) -> SuggestionListState | None:
        if self.config.debounce_seconds > 0:
            await asyncio.sleep(self.config.debounce_seconds)

        result = await self.fetcher.fetch(search_term)

        if generation != self._generation:
            logger.debug(
                f"Dropping stale mention fetch {generation} "
                f"(current is {self._generation})"
            )
            return None

        return self.aggregator.aggregate(
            self.builder.build_people(result.users, self.actor_id, generation),
            self.builder.build_documents(result.documents, self.actor_id, generation),
            search_term=search_term,
            generation=generation,
        )

    def _on_task_complete(self, generation: int, task: asyncio.Task) -> None:
        """Callback when a fetch task completes."""
        if task.cancelled():
            return

        error = task.exception()
        if error is None:
            return

        if generation != self._generation:
            logger.debug(f"Superseded mention fetch {generation} failed: {error}")
            return

        self.last_error = error
        self.aggregator.reset()
        logger.error(f"Mention fetch {generation} failed: {error}", exc_info=error)
        if self.error_handler is not None:
            self.error_handler(error)
