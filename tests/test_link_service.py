"""
Tests for link service business logic.
"""
import string
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import MagicMock

import pytest

from shortlink_app.exceptions import (
    DuplicateCodeError,
    GenerationExhaustedError,
    InvalidInputError,
    LinkNotFoundError,
)
from shortlink_app.services.code_generator import ShortCodeGenerator
from shortlink_app.services.link_service import LinkService

ALPHANUMERIC = set(string.ascii_letters + string.digits)


class TestCreateLink:

    def test_create_with_custom_code_then_get(self, link_service):
        link_service.create_link("https://example.com", "abc123")

        link = link_service.get_link("abc123")
        assert link.target_url == "https://example.com"
        assert link.total_clicks == 0
        assert link.last_clicked_at is None

    def test_create_with_generated_code(self, link_service):
        link = link_service.create_link("https://example.com")

        assert len(link.code) == 6
        assert set(link.code) <= ALPHANUMERIC
        assert link_service.get_link(link.code).target_url == "https://example.com"

    def test_generated_codes_are_distinct(self, link_service):
        codes = {link_service.create_link("https://example.com").code for _ in range(20)}
        assert len(codes) == 20

    def test_duplicate_custom_code(self, link_service):
        link_service.create_link("https://example.com", "abc123")

        with pytest.raises(DuplicateCodeError):
            link_service.create_link("https://other.example.com", "abc123")

    @pytest.mark.parametrize("url, code", [
        ("not-a-valid-url", None),
        ("", None),
        (None, None),
        ("https://example.com", "abc"),
        ("https://example.com", "abc123456"),
        ("https://example.com", "abc-123"),
    ])
    def test_invalid_input(self, link_service, url, code):
        with pytest.raises(InvalidInputError):
            link_service.create_link(url, code)
        assert link_service.list_links() == []

    def test_generation_exhausted(self, link_store):
        generator = ShortCodeGenerator(max_attempts=3)
        generator.generate_unique = MagicMock(return_value=None)
        service = LinkService(link_store, generator)

        with pytest.raises(GenerationExhaustedError):
            service.create_link("https://example.com")
        assert link_store.list_all() == []

    def test_generated_code_taken_before_insert(self, link_store):
        """A code that passed the existence check but lost the insert race"""
        link_store.insert("raced1", "https://first.example.com")
        generator = ShortCodeGenerator()
        generator.generate_unique = MagicMock(return_value="raced1")
        service = LinkService(link_store, generator)

        with pytest.raises(GenerationExhaustedError):
            service.create_link("https://second.example.com")
        assert link_store.find_by_code("raced1").target_url == "https://first.example.com"

    def test_concurrent_creates_with_same_code(self, link_service):
        attempts = 10

        def create(_):
            try:
                return link_service.create_link("https://example.com", "same12")
            except DuplicateCodeError:
                return None

        with ThreadPoolExecutor(max_workers=attempts) as pool:
            results = list(pool.map(create, range(attempts)))

        assert sum(1 for result in results if result is not None) == 1
        assert len(link_service.list_links()) == 1


class TestResolveLink:

    def test_resolve_returns_target_and_counts_click(self, link_service):
        link_service.create_link("https://example.com", "abc123")

        target = link_service.resolve_link("abc123")

        assert target == "https://example.com"
        link = link_service.get_link("abc123")
        assert link.total_clicks == 1
        assert link.last_clicked_at is not None

    def test_each_resolve_adds_one(self, link_service):
        link_service.create_link("https://example.com", "abc123")

        for _ in range(5):
            link_service.resolve_link("abc123")

        assert link_service.get_link("abc123").total_clicks == 5

    def test_resolve_missing(self, link_service):
        with pytest.raises(LinkNotFoundError):
            link_service.resolve_link("nothere")

    def test_resolve_after_delete(self, link_service):
        link_service.create_link("https://example.com", "abc123")
        link_service.delete_link("abc123")

        with pytest.raises(LinkNotFoundError):
            link_service.resolve_link("abc123")

    def test_deleted_between_lookup_and_increment(self, link_store):
        link_store.insert("abc123", "https://example.com")
        original_find = link_store.find_by_code

        def find_then_delete(code):
            link = original_find(code)
            link_store.delete(code)
            return link

        link_store.find_by_code = find_then_delete
        service = LinkService(link_store)

        with pytest.raises(LinkNotFoundError):
            service.resolve_link("abc123")

    def test_concurrent_resolves_are_all_counted(self, link_service):
        link_service.create_link("https://example.com", "abc123")
        clicks = 30

        with ThreadPoolExecutor(max_workers=8) as pool:
            targets = list(pool.map(lambda _: link_service.resolve_link("abc123"), range(clicks)))

        assert targets == ["https://example.com"] * clicks
        assert link_service.get_link("abc123").total_clicks == clicks


class TestGetListDelete:

    def test_get_missing(self, link_service):
        with pytest.raises(LinkNotFoundError):
            link_service.get_link("nothere")

    def test_get_does_not_count_click(self, link_service):
        link_service.create_link("https://example.com", "abc123")

        link_service.get_link("abc123")

        assert link_service.get_link("abc123").total_clicks == 0

    def test_list_round_trip(self, link_service):
        created = [
            link_service.create_link(f"https://example.com/{i}", f"code{i:04d}")
            for i in range(5)
        ]
        link_service.resolve_link("code0002")

        listed = link_service.list_links()

        assert [link.code for link in listed] == [link.code for link in created]
        assert [link.target_url for link in listed] == [link.target_url for link in created]
        assert [link.total_clicks for link in listed] == [0, 0, 1, 0, 0]

    def test_delete_returns_code(self, link_service):
        link_service.create_link("https://example.com", "abc123")

        assert link_service.delete_link("abc123") == "abc123"
        with pytest.raises(LinkNotFoundError):
            link_service.get_link("abc123")

    def test_delete_missing(self, link_service):
        with pytest.raises(LinkNotFoundError):
            link_service.delete_link("nothere")
