from __future__ import annotations

import pytest


class Recorder:
    """Callable that records every argument it is called with.

    Stands in for a release primitive (free, close, delete, release...) so tests
    can count how many times, and with what, a resource was released.
    """

    def __init__(self) -> None:
        self.calls: list[object] = []

    def __call__(self, value: object) -> None:
        self.calls.append(value)


@pytest.fixture()
def released() -> Recorder:
    return Recorder()
