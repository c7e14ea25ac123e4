"""
Tests for composing stores into a StoreContainer.

Tests:
- Routing to member stores
- Shared dispatch counter and injected parent dispatcher
- Builder conflicts
- Teardown
"""
import pytest

from pystorecell import Effect, LogMode, ReducerResult, Store, StoreContainer, StoreError

from .models import (
    Chain, CounterState, Increment, OtherState, Rename, Unhandled, increment
)


def counter_store():
    return Store.builder().with_initial_state(CounterState()).register_reducer(Increment, increment).build()


def other_store():
    return (Store.builder()
            .with_initial_state(OtherState())
            .register_reducer(Rename, lambda state, action: OtherState(label=action.label))
            .build())


class TestRouting:
    """Actions reach the member stores that want them."""

    def test_unwanted_action(self):
        first, second = counter_store(), other_store()
        container = StoreContainer.builder().add_store(first).add_store(second).build()

        assert not container.wants(Unhandled())
        assert container.dispatch(Unhandled()) is False
        assert first.state == CounterState()
        assert second.state == OtherState()

    def test_only_wanting_store_changes(self):
        first, second = counter_store(), other_store()
        container = StoreContainer.builder().add_store(first).add_store(second).build()

        assert container.wants(Increment())
        assert container.dispatch(Increment()) is True
        assert first.state == CounterState(count=1)
        assert second.state == OtherState()

    def test_broadcasts_to_every_wanting_store(self):
        first, second = counter_store(), counter_store()
        container = StoreContainer.builder().add_store(first).add_store(second).build()

        container.dispatch(Increment())

        assert first.state.count == 1
        assert second.state.count == 1

    def test_follow_up_action_routed_through_container(self):
        chaining = (Store.builder()
                    .with_initial_state(CounterState())
                    .register_result_reducer(Chain, lambda state, action: ReducerResult(
                        state, action=Rename(label="chained")))
                    .build())
        renaming = other_store()
        StoreContainer.builder().add_store(chaining).add_store(renaming).build()

        assert chaining.dispatch(Chain()) is True
        assert renaming.state == OtherState(label="chained")

    def test_effect_receives_container(self):
        seen = []

        def chain(state, action):
            def code(effect_state, dispatcher):
                seen.append(dispatcher)
                dispatcher.dispatch(Rename(label="from effect"))
            return ReducerResult(state, effect=Effect(code))

        chaining = (Store.builder()
                    .with_initial_state(CounterState())
                    .register_result_reducer(Chain, chain)
                    .build())
        renaming = other_store()
        container = StoreContainer.builder().add_store(chaining).add_store(renaming).build()

        container.dispatch(Chain())

        assert seen == [container]
        assert renaming.state.label == "from effect"


class TestSharedCounter:
    """Members share the container's dispatch counter."""

    def test_counter_is_rebound(self):
        first, second = counter_store(), other_store()
        container = StoreContainer.builder().add_store(first).add_store(second).build()

        assert first.dispatch_counter is container.dispatch_counter
        assert second.dispatch_counter is container.dispatch_counter

    def test_counter_is_monotonic_across_members(self):
        first, second = counter_store(), other_store()
        container = StoreContainer.builder().add_store(first).add_store(second).build()

        first.dispatch(Increment())
        second.dispatch(Rename(label="x"))
        container.dispatch(Increment())

        # container dispatch labels once, then the store advances once more
        assert container.current_dispatch_count == 4

    def test_members_know_their_container(self):
        store = counter_store()
        assert not store.is_part_of_container()

        StoreContainer.builder().add_store(store).build()

        assert store.is_part_of_container()


class TestBuilder:
    """Soft conflicts are skipped with a warning."""

    def test_keeps_insertion_order(self):
        first, second = counter_store(), other_store()

        container = StoreContainer.builder().add_store(first).add_store(second).build()

        assert container.stores == (first, second)

    def test_duplicate_store_is_skipped(self, log_recorder):
        store = counter_store()

        container = (StoreContainer.builder()
                     .with_settings(log_recorder.settings(LogMode.MINIMAL))
                     .add_store(store)
                     .add_store(store)
                     .build())

        assert container.stores == (store,)
        assert log_recorder.warnings() == [
            "Store for CounterState has already been added to the store list -> Skipping add",
        ]

    def test_store_of_another_container_is_skipped(self, log_recorder):
        store = counter_store()
        StoreContainer.builder().add_store(store).build()

        container = (StoreContainer.builder()
                     .with_settings(log_recorder.settings(LogMode.MINIMAL))
                     .add_store(store)
                     .build())

        assert container.stores == ()
        assert len(log_recorder.warnings()) == 2

    def test_store_claimed_before_build_is_skipped(self):
        store = counter_store()
        late = StoreContainer.builder().add_store(store)
        early = StoreContainer.builder().add_store(store).build()

        container = late.build()

        assert container.stores == ()
        assert early.stores == (store,)
        assert container.dispatch(Increment()) is False

    def test_empty_container_warns(self, log_recorder):
        container = StoreContainer.builder().with_settings(log_recorder.settings(LogMode.MINIMAL)).build()

        assert container.stores == ()
        assert log_recorder.warnings() == ["No stores set in Builder -> Create empty StoreContainer"]

    def test_direct_construction_is_rejected(self):
        with pytest.raises(StoreError):
            StoreContainer(object(), [])


class TestTeardown:
    """Teardown cascades into every member store."""

    def test_teardown(self):
        first, second = counter_store(), other_store()
        container = StoreContainer.builder().add_store(first).add_store(second).build()

        container.teardown()

        assert container.stores == ()
        assert first.is_torn_down
        assert second.is_torn_down
        assert container.dispatch(Increment()) is False
