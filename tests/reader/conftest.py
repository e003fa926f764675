"""
Fixtures for reader tests: an in-memory renderer that records every call.
"""

from collections import defaultdict

import pytest


class FakeAnnotations:
    def __init__(self):
        self.added = []
        self.removed = []
        self.fail_add = False
        self.fail_remove = False

    def add(self, range_id, style):
        if self.fail_add:
            raise RuntimeError("paint failed")
        self.added.append((range_id, style))

    def remove(self, range_id, kind):
        if self.fail_remove:
            raise RuntimeError("retract failed")
        self.removed.append((range_id, kind))


class FakeBook:
    def __init__(self, positions=None, total=None, fail=False):
        self.positions = positions or {}
        self.total = len(self.positions) if total is None else total
        self.fail = fail
        self.generated_with = None

    async def generate_locations(self, chunk_size):
        if self.fail:
            raise RuntimeError("cannot paginate")
        self.generated_with = chunk_size

    def location_from_marker(self, marker):
        if marker == "explode":
            raise ValueError("bad marker")
        return self.positions.get(marker)

    def total_locations(self):
        return self.total


class FakeRenderer:
    def __init__(self, book=None):
        self.handlers = defaultdict(list)
        self.annotations = FakeAnnotations()
        self.book = book or FakeBook()
        self.displayed = []

    def on(self, event, handler):
        self.handlers[event].append(handler)

    def off(self, event, handler):
        self.handlers[event].remove(handler)

    def emit(self, event, *args):
        for handler in list(self.handlers[event]):
            handler(*args)

    def display(self, range_id):
        self.displayed.append(range_id)


class FakeContents:
    def __init__(self, text="selected text"):
        self.text = text
        self.cleared = 0

    def range(self, range_id):
        return self.text

    def clear_selection(self):
        self.cleared += 1


@pytest.fixture
def make_renderer():
    return FakeRenderer


@pytest.fixture
def make_book():
    return FakeBook


@pytest.fixture
def make_contents():
    return FakeContents


@pytest.fixture
def renderer():
    return FakeRenderer()
