from __future__ import annotations

import pytest

from observatory import Dispatcher, Event, MissingDispatcher, Observable


class Post(Observable):
    def __init__(self, title: str, dispatcher: Dispatcher | None):
        self._title = title
        self.dispatcher = dispatcher  # type: ignore[assignment]


def test_notify_uses_self_as_subject(dispatcher: Dispatcher) -> None:
    post = Post("Hello", dispatcher)
    seen: list[Event] = []
    dispatcher.connect("post.publish", seen.append)

    event = post.notify("post.publish", title="Hello")

    assert seen == [event]
    assert event.subject is post
    assert event.signal == "post.publish"
    assert event.parameters == {"title": "Hello"}


def test_parameters_mapping_and_keywords_merge(dispatcher: Dispatcher) -> None:
    post = Post("Hello", dispatcher)

    event = post.notify("post.publish", {"title": "Hello", "draft": True}, draft=False)

    assert event.parameters == {"title": "Hello", "draft": False}


def test_notify_until(dispatcher: Dispatcher) -> None:
    post = Post("Hello", dispatcher)
    assert post.notify_until("post.save").processed is False

    dispatcher.connect("post.save", lambda event: True)
    assert post.notify_until("post.save").processed is True


def test_filter(dispatcher: Dispatcher) -> None:
    post = Post("Hello", dispatcher)
    dispatcher.connect("post.title", lambda event, value: f"{value}, {event.parameters['name']}")

    event = post.filter("post.title", "Hello", name="Ada")

    assert event.return_value == "Hello, Ada"
    assert event.subject is post


def test_missing_dispatcher_raises() -> None:
    post = Post("Hello", None)

    with pytest.raises(MissingDispatcher):
        post.notify("post.publish")


def test_missing_dispatcher_attribute_raises() -> None:
    class Bare(Observable):
        pass

    with pytest.raises(AttributeError):
        Bare().filter("post.title", "x")
