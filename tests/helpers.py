"""Shared test helpers for Pomocycle."""

from pomocycle.timer.session import TimerSession


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


class ManualSubscription:
    def __init__(self, callback):
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class ManualTickSource:
    """Tick source that only fires when the test says so."""

    def __init__(self):
        self.subscriptions: list[ManualSubscription] = []

    def subscribe(self, callback):
        sub = ManualSubscription(callback)
        self.subscriptions.append(sub)
        return sub

    @property
    def active(self) -> list[ManualSubscription]:
        return [s for s in self.subscriptions if not s.cancelled]

    def advance(self, seconds: int = 1) -> None:
        for _ in range(seconds):
            for sub in self.active:
                if not sub.cancelled:
                    sub.callback()


class DictStore:
    """In-memory key-value store."""

    def __init__(self, data: dict | None = None):
        self.data: dict = dict(data or {})
        self.writes = 0

    def get(self, key, default=None):
        return self.data.get(key, default)

    def set(self, key, value):
        self.writes += 1
        self.data[key] = value


class FailingStore(DictStore):
    """Store whose reads and/or writes blow up."""

    def __init__(self, data=None, *, fail_get=False, fail_set=False):
        super().__init__(data)
        self.fail_get = fail_get
        self.fail_set = fail_set

    def get(self, key, default=None):
        if self.fail_get:
            raise OSError("store unavailable")
        return super().get(key, default)

    def set(self, key, value):
        if self.fail_set:
            raise OSError("disk full")
        super().set(key, value)


class BatchStore(DictStore):
    """Store with an all-or-nothing ``set_many``.

    ``fail_on_write=n`` makes the n-th row of any batch raise, leaving
    ``data`` untouched.
    """

    def __init__(self, data=None, *, fail_on_write=None):
        super().__init__(data)
        self.fail_on_write = fail_on_write
        self.batches: list[dict] = []

    def set_many(self, values):
        staged = dict(self.data)
        for n, (key, value) in enumerate(values.items(), start=1):
            if n == self.fail_on_write:
                raise OSError("disk full")
            staged[key] = value
        self.data = staged
        self.writes += len(values)
        self.batches.append(dict(values))


def complete_interval(session: TimerSession) -> None:
    """Fast-complete the current interval by jumping to the last tick."""
    session._remaining = 1
    session.on_tick()
