"""
Tests for result aggregation and snapshot publishing.
"""

import asyncio

import pytest

from mention_menu.aggregator import ResultAggregator
from mention_menu.identity import MentionIdentityBuilder
from mention_menu.models import DocumentEntity, SuggestionListState, UserEntity

builder = MentionIdentityBuilder()


def people(*names: str):
    return builder.build_people(
        [UserEntity(id=f"u-{n}", name=n) for n in names]
    )


def documents(*titles: str):
    return builder.build_documents(
        [DocumentEntity(id=f"d-{t}", title=t) for t in titles]
    )


# =============================================================================
# Aggregation
# =============================================================================


class TestAggregate:
    """Tests for merging candidate groups."""

    def test_initial_state_not_loaded(self):
        state = ResultAggregator().state

        assert state.loaded is False
        assert state.candidates == ()

    def test_people_precede_documents(self):
        """Test that the list is people then documents, each in source order."""
        aggregator = ResultAggregator()

        state = aggregator.aggregate(
            people("Zed", "Alice"), documents("B doc", "A doc"), search_term="a"
        )

        assert state.loaded is True
        assert [c.label for c in state.candidates] == ["Zed", "Alice", "B doc", "A doc"]
        assert state.search_term == "a"
        assert aggregator.state is state

    def test_length_is_sum_of_groups(self):
        state = ResultAggregator().aggregate(people("a", "b", "c"), documents("d"))

        assert len(state.candidates) == 4

    def test_empty_fetch_is_loaded(self):
        """Test that an empty result is a loaded, empty list."""
        state = ResultAggregator().aggregate([], [])

        assert state.loaded is True
        assert state.candidates == ()

    def test_superseding_pass_replaces_wholesale(self):
        aggregator = ResultAggregator()
        aggregator.aggregate(people("Alice"), documents("Doc"), generation=1)

        state = aggregator.aggregate(people("Bob"), [], generation=2)

        assert [c.label for c in state.candidates] == ["Bob"]
        assert state.generation == 2

    def test_rejects_misplaced_candidates(self):
        with pytest.raises(ValueError):
            ResultAggregator().aggregate(documents("Doc"), [])

        with pytest.raises(ValueError):
            ResultAggregator().aggregate([], people("Alice"))

    def test_reset_hides_list(self):
        aggregator = ResultAggregator()
        aggregator.aggregate(people("Alice"), [])

        assert aggregator.reset().loaded is False
        assert aggregator.state.loaded is False


# =============================================================================
# Subscription
# =============================================================================


class TestSubscribe:
    """Tests for snapshot subscription."""

    @pytest.mark.asyncio
    async def test_current_snapshot_first(self):
        """Test that a new subscriber immediately sees the current snapshot."""
        aggregator = ResultAggregator()
        aggregator.aggregate(people("Alice"), [])

        subscription = aggregator.subscribe()
        first = await asyncio.wait_for(anext(subscription), timeout=1.0)
        await subscription.aclose()

        assert first.loaded is True
        assert first.candidates[0].label == "Alice"

    @pytest.mark.asyncio
    async def test_only_complete_snapshots_observed(self):
        """Test that subscribers only see 'not loaded' or full lists."""
        aggregator = ResultAggregator()
        observed: list[SuggestionListState] = []

        async def collector():
            async for state in aggregator.subscribe(queue_size=10):
                observed.append(state)
                if len(observed) == 3:
                    break

        task = asyncio.create_task(collector())
        await asyncio.sleep(0.01)

        aggregator.aggregate(people("a", "b"), documents("c"))
        aggregator.aggregate(people("d"), documents("e", "f", "g"))

        await asyncio.wait_for(task, timeout=1.0)

        assert [s.loaded for s in observed] == [False, True, True]
        assert [len(s.candidates) for s in observed] == [0, 3, 4]

    @pytest.mark.asyncio
    async def test_slow_subscriber_gets_latest(self):
        """Test that a lagging subscriber drops old snapshots, not new ones."""
        aggregator = ResultAggregator()
        subscription = aggregator.subscribe(queue_size=1)

        initial = await anext(subscription)
        aggregator.aggregate(people("old"), [], generation=1)
        aggregator.aggregate(people("new"), [], generation=2)
        latest = await asyncio.wait_for(anext(subscription), timeout=1.0)
        await subscription.aclose()

        assert initial.loaded is False
        assert latest.generation == 2

    @pytest.mark.asyncio
    async def test_unsubscribe_on_close(self):
        aggregator = ResultAggregator()
        subscription = aggregator.subscribe()
        await anext(subscription)

        assert aggregator.subscriber_count == 1

        await subscription.aclose()

        assert aggregator.subscriber_count == 0

    @pytest.mark.asyncio
    async def test_wait_until_loaded(self):
        aggregator = ResultAggregator()

        async def publish_later():
            await asyncio.sleep(0.01)
            aggregator.aggregate(people("Alice"), [])

        asyncio.create_task(publish_later())
        state = await aggregator.wait_until_loaded(timeout=1.0)

        assert state is not None
        assert state.loaded is True

    @pytest.mark.asyncio
    async def test_wait_until_loaded_timeout(self):
        state = await ResultAggregator().wait_until_loaded(timeout=0.05)

        assert state is None

    @pytest.mark.asyncio
    async def test_wait_until_loaded_unsubscribes(self):
        """Test that waiting leaves no subscription behind."""
        aggregator = ResultAggregator()
        aggregator.aggregate(people("Alice"), [])

        state = await aggregator.wait_until_loaded(timeout=1.0)

        assert state is not None
        assert aggregator.subscriber_count == 0

    @pytest.mark.asyncio
    async def test_wait_until_loaded_timeout_unsubscribes(self):
        aggregator = ResultAggregator()

        assert await aggregator.wait_until_loaded(timeout=0.05) is None
        assert aggregator.subscriber_count == 0
