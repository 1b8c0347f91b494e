"""Minimal Dispatcher example covering registration and the three notify modes."""

from __future__ import annotations

from observatory import Dispatcher, Event

dispatcher = Dispatcher()


@dispatcher.on("post.publish", priority=10)
def announce(event: Event) -> None:
    print(f"Published: {event.parameters['title']}")


@dispatcher.on("post.publish", priority=-10)
def audit(event: Event) -> None:
    print(f"audit: publish requested by {event.subject}")


@dispatcher.on("post.save")
def save(event: Event) -> bool:
    print(f"Saving {event.parameters['title']}")
    return True


@dispatcher.on("post.title")
def shout(event: Event, value: str) -> str:
    return value.upper()


def main() -> None:
    dispatcher.notify(Event("editor", "post.publish", {"title": "Hello"}))

    saved = dispatcher.notify_until(Event("editor", "post.save", {"title": "Hello"}))
    print(f"processed={saved.processed}")

    title = dispatcher.filter(Event("editor", "post.title"), "hello").return_value
    print(title)


if __name__ == "__main__":
    main()
