import pytest


class RemovalRecorder:
    """Collects on_entry_removed calls as tuples."""

    def __init__(self) -> None:
        self.calls = []

    def __call__(self, evicted, key, old_value, new_value):
        self.calls.append((evicted, key, old_value, new_value))

    @property
    def evicted_keys(self):
        return [key for evicted, key, _, _ in self.calls if evicted]


@pytest.fixture
def recorder():
    return RemovalRecorder()
