"""Observable and Observer helpers wired through one Dispatcher."""

from __future__ import annotations

from observatory import Dispatcher, Event, Observable, Observer, observe


class Post(Observable):
    def __init__(self, title: str, dispatcher: Dispatcher):
        self._title = title
        self.dispatcher = dispatcher

    @property
    def title(self) -> str:
        return self.filter("post.title", self._title).return_value

    def publish(self) -> None:
        self.notify("post.publish", title=self._title)

    def save(self) -> None:
        if not self.notify_until("post.save", title=self._title).processed:
            raise RuntimeError("Saving is not implemented!")


class Spy(Observer):
    def __init__(self, dispatcher: Dispatcher):
        self.dispatcher = dispatcher
        self.lines: list[str] = []

    @observe("post.publish")
    def log_publication(self, event: Event) -> None:
        self.lines.append(f"Post titled {event.parameters['title']} was published")

    @observe("post.title")
    def title_filter(self, event: Event, value: str) -> str:
        return value.upper()

    @observe("post.save")
    def save_post(self, event: Event) -> bool:
        self.lines.append(f"Saving post titled {event.parameters['title']}")
        return True


def main() -> None:
    dispatcher = Dispatcher()
    post = Post("My new post", dispatcher)
    spy = Spy.create(dispatcher)

    print(post.title)
    post.publish()
    post.save()
    print("\n".join(spy.lines))


if __name__ == "__main__":
    main()
