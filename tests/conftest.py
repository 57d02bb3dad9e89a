"""Pytest configuration and shared fixtures for notes-tags tests."""

import pytest

import notes_tags.io.logging_setup


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Keep settings and log files inside the test's tmp directory."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("NOTES_TAGS_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.delenv("NOTES_TAGS_LOG_FILE", raising=False)
    monkeypatch.delenv("NOTES_TAGS_LOG_LEVEL", raising=False)
    monkeypatch.delenv("NOTES_TAGS_SEED_HUE", raising=False)
    yield tmp_path
    notes_tags.io.logging_setup.reset()


# ---------------------------------------------------------------------------
# Timer doubles for HoverState
# ---------------------------------------------------------------------------

class FakeTimer:
    def __init__(self, delay, callback):
        self.delay = delay
        self.callback = callback
        self.stopped = False

    def stop(self):
        self.stopped = True

    def fire(self):
        """Run the callback as the event loop would, unless stopped."""
        if not self.stopped:
            self.callback()


class FakeScheduler:
    def __init__(self):
        self.timers: list[FakeTimer] = []

    def __call__(self, delay, callback):
        timer = FakeTimer(delay, callback)
        self.timers.append(timer)
        return timer

    @property
    def pending(self) -> list[FakeTimer]:
        return [t for t in self.timers if not t.stopped]


@pytest.fixture
def scheduler():
    return FakeScheduler()
