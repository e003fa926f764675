"""Tests for ReaderSession."""

import pytest

from marginalia.config import ReaderConfig
from marginalia.reader import HighlightStore, ReaderSession, SyncState


class TestReaderSession:
    """Test session lifecycle and page tracking."""

    def test_attach_binds_synchronizer(self, renderer):
        session = ReaderSession()
        session.attach(renderer)

        assert session.synchronizer.state is SyncState.BOUND
        assert len(renderer.handlers["locationChanged"]) == 1

    def test_location_before_index_has_no_page(self, renderer):
        session = ReaderSession()
        session.attach(renderer)

        renderer.emit("locationChanged", "cfi-a")

        assert session.location == "cfi-a"
        assert session.page_label == ""

    @pytest.mark.asyncio
    async def test_prepare_locations_updates_pending_location(self, make_renderer, make_book):
        renderer = make_renderer(make_book({"cfi-a": 3}, total=20))
        session = ReaderSession(ReaderConfig(location_chunk_size=256))
        session.attach(renderer)
        renderer.emit("locationChanged", "cfi-a")

        assert await session.prepare_locations() is True

        assert renderer.book.generated_with == 256
        assert session.page_label == "Page 4 of 20"

    @pytest.mark.asyncio
    async def test_location_after_index(self, make_renderer, make_book):
        renderer = make_renderer(make_book({"cfi-a": 0, "cfi-b": 1}))
        session = ReaderSession()
        session.attach(renderer)
        await session.prepare_locations()

        renderer.emit("locationChanged", "cfi-b")

        assert session.page_label == "Page 2 of 2"

    @pytest.mark.asyncio
    async def test_prepare_without_renderer(self):
        assert await ReaderSession().prepare_locations() is False

    @pytest.mark.asyncio
    async def test_failed_index_build_leaves_locator_unready(self, make_renderer, make_book):
        session = ReaderSession()
        session.attach(make_renderer(make_book(fail=True)))

        assert await session.prepare_locations() is False
        assert session.locator.ready is False

    @pytest.mark.asyncio
    async def test_index_for_replaced_renderer_is_discarded(self, make_renderer, make_book):
        session = ReaderSession()
        first = make_renderer(make_book({"a": 0}))
        second = make_renderer(make_book({"a": 0}))
        session.attach(first)

        class SwitchingBook:
            async def generate_locations(self, chunk_size):
                session.attach(second)

            def location_from_marker(self, marker):
                return 0

            def total_locations(self):
                return 1

        first.book = SwitchingBook()

        assert await session.prepare_locations() is False
        assert session.locator.ready is False

    def test_reload_keeps_highlights(self, make_renderer, make_contents):
        store = HighlightStore()
        session = ReaderSession(store=store)
        first = make_renderer()
        session.attach(first)
        first.emit("selected", "cfi-1", make_contents())

        second = make_renderer()
        session.attach(second)

        assert len(store) == 1
        assert first.handlers["selected"] == []
        assert first.handlers["locationChanged"] == []
        assert second.annotations.added == [("cfi-1", {"fill": "yellow"})]
        assert session.locator.ready is False

    def test_default_color_from_config(self):
        session = ReaderSession(ReaderConfig(default_color="lightblue"))

        assert session.store.active_color.value == "lightblue"

    def test_detach_releases_everything(self, renderer):
        session = ReaderSession()
        session.attach(renderer)
        session.detach()

        assert renderer.handlers["selected"] == []
        assert renderer.handlers["locationChanged"] == []
        assert session.renderer is None
        assert session.location is None

    @pytest.mark.asyncio
    async def test_reload_forgets_previous_location(self, make_renderer, make_book):
        session = ReaderSession()
        session.attach(make_renderer())
        session.location_changed("old-doc-cfi")

        session.attach(make_renderer(make_book({"old-doc-cfi": 7}, total=20)))

        assert session.location is None
        assert await session.prepare_locations() is True
        assert session.page_label == ""
