"""Home section service tests against the in-memory store."""

import threading
from unittest.mock import patch

import httpx
import pytest

from catalog_admin.api.client import StoreClient
from catalog_admin.auth.session import Session, TokenStore
from catalog_admin.errors import AuthenticationError, SectionValidationError
from catalog_admin.models import HeroSliderData, OpaqueData, Slide
from catalog_admin.services.home import HomeService, new_section


def _hero(section_id: str, order: int) -> dict:
    return {
        "section": section_id,
        "type": "hero-slider",
        "isActive": True,
        "order": order,
        "data": {"slides": [{"image": f"{section_id}.png", "link": "", "order": 1}]},
    }


def _stats(section_id: str, order: int) -> dict:
    return {
        "section": section_id,
        "type": "stats",
        "isActive": True,
        "order": order,
        "data": {"stats": [{"number": "25", "label": {"de": "Jahre", "en": "Years"}}]},
    }


@pytest.fixture
def service(client, fake_store):
    fake_store.home["hero"] = _hero("hero", 1)
    fake_store.home["stats"] = _stats("stats", 2)
    fake_store.home["hero-2"] = _hero("hero-2", 3)
    return HomeService(client)


@pytest.mark.integration
class TestSaveGate:
    def test_empty_hero_slider_is_not_sent(self, service, fake_store):
        """Should block an empty slider before any request."""
        section = new_section("hero-slider", service.list_sections())

        with pytest.raises(SectionValidationError, match="at least one slide") as exc_info:
            service.save_section(section)

        assert exc_info.value.section_id == section.section
        assert fake_store.writes() == []

    def test_valid_after_adding_slide(self, service, fake_store):
        """Should save the slider once it has a slide."""
        section = new_section("hero-slider", service.list_sections())
        section.data.slides.append(Slide(image="x.png"))

        service.save_section(section)

        assert fake_store.home[section.section]["data"] == {
            "slides": [{"image": "x.png", "link": "", "order": 1}]
        }

    def test_legacy_slide_fields_are_dropped_on_save(self, service, fake_store):
        """Should write slides back without the old title fields."""
        fake_store.home["hero"]["data"]["slides"][0]["title"] = {"de": "Alt", "en": "Old"}

        section = service.list_sections()[0]
        service.save_section(section)

        assert "title" not in fake_store.home["hero"]["data"]["slides"][0]


@pytest.mark.integration
class TestNewSection:
    def test_order_follows_maximum(self, service):
        """Should use type plus epoch millis as id and order after the maximum."""
        with patch("catalog_admin.services.home.time.time", return_value=1700000000.0):
            section = new_section("features", service.list_sections())

        assert section.section == "features-1700000000000"
        assert section.order == 4
        assert section.is_active
        assert section.data.to_dict() == {"features": []}

    def test_first_section_gets_order_one(self):
        """Should start at order 1 on an empty page."""
        assert new_section("stats", []).order == 1

    def test_unknown_type_gets_empty_payload(self):
        """Should give unknown types an empty payload."""
        section = new_section("video", [])

        assert isinstance(section.data, OpaqueData)
        assert section.to_dict()["data"] == {}


@pytest.mark.integration
class TestReorder:
    def test_swap_persists_both_and_refetches(self, service, fake_store):
        """Should write both swapped sections and return the store order."""
        sections = service.list_sections()

        result = service.move_section(sections, 0, 1)

        assert result.success
        assert [s.section for s in result.sections] == ["stats", "hero", "hero-2"]
        assert fake_store.home["hero"]["order"] == 2
        assert fake_store.home["stats"]["order"] == 1
        assert len(fake_store.writes()) == 2

    def test_move_up(self, service):
        """Should move a section up one place."""
        result = service.move_section(service.list_sections(), 2, -1)

        assert [s.section for s in result.sections] == ["hero", "hero-2", "stats"]

    def test_partial_failure_reports_store_state(self, service, fake_store):
        """Should report the failed write and show the order the store holds."""
        fake_store.fail_writes.add("stats")
        sections = service.list_sections()

        result = service.move_section(sections, 0, 1)

        assert not result.success
        assert result.failures == ["stats: Write failed"]
        # Local copies were swapped, but the list comes from the store
        assert sections[1].order == 1
        assert {s.section: s.order for s in result.sections} == {"hero": 2, "stats": 2, "hero-2": 3}

    @pytest.mark.parametrize("index,direction", [(0, -1), (2, 1), (0, 2)])
    def test_invalid_moves_raise(self, service, fake_store, index, direction):
        """Should reject moves past either end."""
        with pytest.raises(ValueError):
            service.move_section(service.list_sections(), index, direction)
        assert fake_store.writes() == []

    def test_invalid_neighbour_blocks_both_writes(self, service, fake_store):
        """Should write nothing when either section is invalid."""
        sections = service.list_sections()
        sections[1].data.stats.clear()

        with pytest.raises(SectionValidationError):
            service.move_section(sections, 0, 1)

        assert fake_store.writes() == []
        assert sections[0].order == 1


@pytest.mark.integration
class TestToggleAndDelete:
    def test_toggle_saves_flag(self, service, fake_store):
        """Should save the flipped visibility flag."""
        section = service.get_section("stats")

        service.toggle_active(section)

        assert fake_store.home["stats"]["isActive"] is False

    def test_toggle_failure_restores_flag(self, service, fake_store):
        """Should restore the flag when the save fails."""
        fake_store.fail_writes.add("stats")
        section = service.get_section("stats")

        with pytest.raises(Exception):
            service.toggle_active(section)

        assert section.is_active is True

    def test_delete(self, service, fake_store):
        """Should remove the section from the store."""
        service.delete_section("hero-2")

        assert "hero-2" not in fake_store.home
        assert [s.section for s in service.list_sections()] == ["hero", "stats"]

    def test_get_missing_section(self, service):
        """Should raise KeyError for an unknown id."""
        with pytest.raises(KeyError):
            service.get_section("nope")


@pytest.mark.integration
def test_list_is_sorted_by_order(client, fake_store):
    """Should return sections sorted by order."""
    fake_store.home["b"] = _hero("b", 5)
    fake_store.home["a"] = _hero("a", 2)

    sections = HomeService(client).list_sections()

    assert [s.section for s in sections] == ["a", "b"]
    assert isinstance(sections[0].data, HeroSliderData)


@pytest.mark.integration
def test_reorder_with_both_writes_rejected_ends_session_cleanly(config, fake_store):
    """Should end the session without crashing when both reorder writes get a 401."""
    fake_store.home["hero"] = _hero("hero", 1)
    fake_store.home["stats"] = _stats("stats", 2)
    both_sent = threading.Barrier(2, timeout=5)

    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "POST":
            # Answer only once both writes are in flight
            both_sent.wait()
            return httpx.Response(401, json={"error": "Token expired"})
        return fake_store.handle(request)

    session = Session(TokenStore(config.token_file))
    with StoreClient(config, session, transport=httpx.MockTransport(handler)) as client:
        service = HomeService(client)
        for _ in range(20):
            session.set_token("test-token")
            sections = service.list_sections()

            with pytest.raises(AuthenticationError):
                service.move_section(sections, 0, 1)

            assert not session.is_authenticated
            assert session.error == "Session expired"
            assert not config.token_file.exists()
