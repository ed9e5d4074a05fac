import pytest


class FakeClock:
    """Manual nanosecond clock."""

    def __init__(self, now: int = 1_000):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, nanos: int) -> None:
        self.now += nanos


class NullWriter:
    """Accepts and discards everything."""

    def write(self, data):
        return len(data)


class BrokenWriter:
    def write(self, data):
        raise OSError("disk full")


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def null_writer():
    return NullWriter()


@pytest.fixture
def broken_writer():
    return BrokenWriter()
