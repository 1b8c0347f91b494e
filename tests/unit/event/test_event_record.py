from __future__ import annotations

import pytest

from observatory import Event, InvalidArgument


@pytest.fixture()
def event() -> Event:
    return Event("observable", "signal", {"foo": "bar"})


def test_exposes_parameters(event: Event) -> None:
    assert event.parameters["foo"] == "bar"


def test_parameters_are_mutable(event: Event) -> None:
    event.parameters["seen_by"] = ["audit"]
    event.parameters["foo"] = "baz"

    assert event.parameters == {"foo": "baz", "seen_by": ["audit"]}


def test_parameters_are_copied_from_input() -> None:
    params = {"foo": "bar"}
    event = Event("observable", "signal", params)
    event.parameters["foo"] = "changed"

    assert params == {"foo": "bar"}


def test_parameters_default_to_empty_dict() -> None:
    event = Event("foo", "bar")
    assert event.parameters == {}


def test_not_processed_by_default(event: Event) -> None:
    assert event.processed is False


def test_mark_processed_is_idempotent(event: Event) -> None:
    assert event.mark_processed() is True
    assert event.mark_processed() is True
    assert event.processed is True


def test_requires_subject_and_signal() -> None:
    with pytest.raises(InvalidArgument):
        Event()
    with pytest.raises(InvalidArgument):
        Event("foo")
    with pytest.raises(InvalidArgument):
        Event("foo", None)


def test_subject_may_be_none() -> None:
    event = Event(None, "signal")

    assert event.subject is None
    assert event.signal == "signal"


def test_rejects_empty_signal() -> None:
    with pytest.raises(InvalidArgument):
        Event("foo", "")


def test_invalid_argument_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        Event("foo")


def test_signal_is_coerced_to_string() -> None:
    assert Event("foo", 123).signal == "123"


def test_subject_and_signal_are_read_only(event: Event) -> None:
    with pytest.raises(AttributeError):
        event.subject = "other"  # type: ignore[misc]
    with pytest.raises(AttributeError):
        event.signal = "other"  # type: ignore[misc]
    with pytest.raises(AttributeError):
        event.processed = False  # type: ignore[misc]

    assert event.subject == "observable"
    assert event.signal == "signal"


def test_return_value_slot(event: Event) -> None:
    assert event.return_value is None
    event.return_value = "foo"
    assert event.return_value == "foo"


def test_repr(event: Event) -> None:
    assert repr(event) == "Event(signal='signal', subject='observable', processed=False)"
