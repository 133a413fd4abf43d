from grid_console.app.notifications import HISTORY_LIMIT, NOTIFICATION_SECONDS, NotificationChannel, Severity


class Clock:
    def __init__(self) -> None:
        self.value = 100.0

    def __call__(self) -> float:
        return self.value


def test_notification_expires_after_five_seconds() -> None:
    clock = Clock()
    channel = NotificationChannel(now=clock)

    channel.notify("Saved.", Severity.SUCCESS)
    clock.value += NOTIFICATION_SECONDS - 0.1
    assert channel.current().message == "Saved."

    clock.value += 0.2
    assert channel.current() is None


def test_new_notification_replaces_current() -> None:
    channel = NotificationChannel(now=Clock())

    channel.notify("first")
    channel.notify("second", "error")

    assert channel.current().message == "second"
    assert channel.current().severity is Severity.ERROR
    assert [n.message for n in channel.history] == ["first", "second"]


def test_sink_receives_every_notification() -> None:
    seen = []
    channel = NotificationChannel(sink=seen.append, now=Clock())

    channel.notify("hello")
    channel.dismiss()

    assert [n.message for n in seen] == ["hello"]
    assert channel.current() is None


def test_history_keeps_only_the_latest_notifications() -> None:
    channel = NotificationChannel(now=Clock())

    for number in range(HISTORY_LIMIT + 5):
        channel.notify(f"message {number}")

    assert len(channel.history) == HISTORY_LIMIT
    assert channel.history[0].message == "message 5"
    assert channel.history[-1].message == f"message {HISTORY_LIMIT + 4}"
