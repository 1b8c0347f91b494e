from __future__ import annotations

import pytest

from observatory import InvalidObserver, InvalidPriority, PriorityQueueStack, StackEntry


def first(event) -> None:
    pass


def second(event) -> None:
    pass


def third(event) -> None:
    pass


@pytest.fixture()
def stack() -> PriorityQueueStack:
    return PriorityQueueStack()


def test_starts_empty(stack: PriorityQueueStack) -> None:
    assert stack.size() == 0
    assert len(stack) == 0
    assert list(stack) == []


def test_push_returns_observer_and_grows(stack: PriorityQueueStack) -> None:
    assert stack.push(first) is first
    assert stack.size() == 1


def test_default_priority_keeps_insertion_order(stack: PriorityQueueStack) -> None:
    stack.push(first)
    stack.push(second)
    stack.push(third)

    assert list(stack) == [first, second, third]
    assert [entry.priority for entry in stack.entries()] == [1, 2, 3]


def test_explicit_priority_sorts_ascending(stack: PriorityQueueStack) -> None:
    stack.push(first, 1)
    stack.push(second, -1)

    assert list(stack) == [second, first]


def test_mixed_priorities(stack: PriorityQueueStack) -> None:
    stack.push(first, 10)
    stack.push(second, -10)
    stack.push(third)

    assert list(stack) == [second, third, first]


def test_explicit_priorities_do_not_advance_default_counter(stack: PriorityQueueStack) -> None:
    stack.push(first)
    stack.push(second, 50)
    stack.push(third)

    priorities = {entry.observer: entry.priority for entry in stack.entries()}
    assert priorities == {first: 1, second: 50, third: 2}


def test_entries_are_stack_entries(stack: PriorityQueueStack) -> None:
    stack.push(first, 7)
    assert stack.entries() == (StackEntry(observer=first, priority=7),)


def test_rejects_non_callable(stack: PriorityQueueStack) -> None:
    with pytest.raises(InvalidObserver):
        stack.push("foo")  # type: ignore[arg-type]
    assert stack.size() == 0


@pytest.mark.parametrize("priority", ["foo", 1.5, True])
def test_rejects_non_integer_priority(stack: PriorityQueueStack, priority) -> None:
    with pytest.raises(InvalidPriority):
        stack.push(first, priority)
    assert stack.size() == 0


def test_invalid_observer_is_a_type_error(stack: PriorityQueueStack) -> None:
    with pytest.raises(TypeError):
        stack.push(42)  # type: ignore[arg-type]


def test_delete_removes_observer(stack: PriorityQueueStack) -> None:
    stack.push(first)
    stack.push(second)

    assert stack.delete(first) is first
    assert stack.size() == 1
    assert list(stack) == [second]


def test_delete_unknown_returns_none(stack: PriorityQueueStack) -> None:
    stack.push(first)

    assert stack.delete(second) is None
    assert stack.size() == 1


def test_delete_removes_every_entry_for_observer(stack: PriorityQueueStack) -> None:
    stack.push(first)
    stack.push(first, 100)
    stack.push(second)

    assert stack.delete(first) is first
    assert list(stack) == [second]


def test_delete_matches_equal_bound_methods(stack: PriorityQueueStack) -> None:
    class Listener:
        def handle(self, event) -> None:
            pass

    listener = Listener()
    other = Listener()
    stack.push(listener.handle)
    stack.push(other.handle)

    assert listener.handle in stack
    assert stack.delete(listener.handle) is not None
    assert list(stack) == [other.handle]


def test_lambdas_are_distinct(stack: PriorityQueueStack) -> None:
    a = lambda event: None  # noqa: E731
    b = lambda event: None  # noqa: E731
    stack.push(a)
    stack.push(b)

    stack.delete(a)
    assert list(stack) == [b]


def test_iteration_is_restartable(stack: PriorityQueueStack) -> None:
    stack.push(first)
    stack.push(second)

    assert list(stack) == list(stack) == [first, second]


def test_iteration_uses_snapshot(stack: PriorityQueueStack) -> None:
    stack.push(first)
    stack.push(second)

    seen = []
    for observer in stack:
        seen.append(observer)
        if observer is first:
            stack.push(third, -100)
            stack.delete(second)

    assert seen == [first, second]
    assert list(stack) == [third, first]


def test_unlocked_stack_behaves_the_same() -> None:
    stack = PriorityQueueStack(thread_safe=False)
    stack.push(second, 5)
    stack.push(first, -5)

    assert stack.snapshot() == (first, second)
    assert repr(stack) == "PriorityQueueStack(size=2)"
