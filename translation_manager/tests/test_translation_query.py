"""Tests for translation listing, filtering, search and pagination."""

from __future__ import annotations

import pytest

from translation_manager.exceptions import TranslationValidationError
from translation_manager.services import list_translations, search_translations
from translation_manager.services.translation_query import PagedResult, coerce_page

pytestmark = pytest.mark.django_db


def keys(result: PagedResult) -> list[str]:
    return [translation.key for translation in result.items]


def test_list_without_filters_returns_everything(make_translation) -> None:
    make_translation("a.one")
    make_translation("a.two")
    make_translation("a.three")

    result = list_translations()

    assert result.total == 3
    assert keys(result) == ["a.one", "a.two", "a.three"]


def test_key_filter_matches_substring_not_prefix(make_translation) -> None:
    make_translation("test.search.key")
    make_translation("other.key")

    result = list_translations({"key": "search"})

    assert keys(result) == ["test.search.key"]


def test_value_filter(make_translation) -> None:
    make_translation("a.one", value="Find this text")
    make_translation("a.two", value="Other text")

    assert keys(list_translations({"value": "Find"})) == ["a.one"]


def test_language_filter_is_exact(make_translation, spanish) -> None:
    make_translation("test.key1", value="Hola", language=spanish)
    make_translation("test.key2", value="Mundo", language=spanish)
    make_translation("test.key3", value="Hello")

    result = list_translations({"language": "es"})

    assert keys(result) == ["test.key1", "test.key2"]
    assert list_translations({"language": "e"}).total == 0


def test_tag_filter_requires_at_least_one_matching_tag(make_translation) -> None:
    """Test a translation tagged only "web" is excluded by tags=mobile."""
    make_translation("a.mobile", tags=["mobile"])
    make_translation("a.web", tags=["web"])
    make_translation("a.untagged")

    assert keys(list_translations({"tags": "mobile"})) == ["a.mobile"]


def test_tag_filter_is_or_within_and_distinct(make_translation) -> None:
    make_translation("a.both", tags=["mobile", "web"])
    make_translation("a.web", tags=["web"])
    make_translation("a.admin", tags=["admin"])

    result = list_translations({"tags": "mobile, web"})

    assert keys(result) == ["a.both", "a.web"]
    assert result.total == 2


def test_filters_are_combined_with_and(make_translation, spanish) -> None:
    make_translation("menu.title", value="Menu", tags=["web"])
    make_translation("menu.title", value="Menú", language=spanish, tags=["web"])
    make_translation("menu.subtitle", value="Sub", tags=["mobile"])

    result = list_translations({"key": "menu", "language": "en", "tags": "web"})

    assert [(t.key, t.language.code) for t in result.items] == [("menu.title", "en")]


def test_results_include_language_and_tags(make_translation, django_assert_max_num_queries) -> None:
    for index in range(5):
        make_translation(f"a.key{index}", tags=["web", "mobile"])

    # count + page + tags prefetch, regardless of row count
    with django_assert_max_num_queries(3):
        result = list_translations()
        for translation in result.items:
            assert translation.language.code == "en"
            assert {tag.name for tag in translation.tags.all()} == {"web", "mobile"}


def test_pagination_reports_page_details(make_translation) -> None:
    for index in range(5):
        make_translation(f"a.key{index}")

    result = list_translations(page=3, page_size=2)

    assert keys(result) == ["a.key4"]
    assert result.current_page == 3
    assert result.per_page == 2
    assert result.total == 5
    assert result.last_page == 3
    assert (result.from_index, result.to_index) == (5, 5)


def test_page_past_the_end_is_empty(make_translation) -> None:
    make_translation("a.key")

    result = list_translations(page=4, page_size=2)

    assert result.items == []
    assert result.total == 1
    assert result.from_index is None


@pytest.mark.parametrize("page", [None, "abc", "0", -2])
def test_invalid_page_falls_back_to_first(page) -> None:
    assert coerce_page(page) == 1


def test_empty_result_has_one_page(db) -> None:
    result = list_translations()

    assert result.total == 0
    assert result.last_page == 1


def test_to_payload_without_request() -> None:
    result = PagedResult(items=[], current_page=1, per_page=50, total=0)

    payload = result.to_payload([])

    assert payload["data"] == []
    assert payload["current_page"] == 1
    assert payload["last_page"] == 1
    assert payload["next_page_url"] is None


@pytest.mark.parametrize("query", [None, "", "a", " a", "a  ", "   "])
def test_search_rejects_short_queries(query, db) -> None:
    with pytest.raises(TranslationValidationError) as excinfo:
        search_translations(query)

    assert "query" in excinfo.value.errors


def test_search_matches_key_or_value(make_translation) -> None:
    make_translation("welcome.message", value="Hi there")
    make_translation("greeting.text", value="Welcome aboard")
    make_translation("other.text", value="Nothing")

    result = search_translations("welcome")

    assert keys(result) == ["welcome.message", "greeting.text"]


def test_search_trims_the_query(make_translation) -> None:
    make_translation("welcome.message", value="Hi there")

    assert keys(search_translations("  welcome  ")) == ["welcome.message"]


def test_search_with_language_filter(make_translation, spanish) -> None:
    make_translation("welcome.message", value="Welcome")
    make_translation("welcome.message", value="Bienvenido", language=spanish)

    result = search_translations("welcome", language_code="es")

    assert [t.value for t in result.items] == ["Bienvenido"]


def test_search_with_unknown_language_is_rejected(make_translation) -> None:
    make_translation("welcome.message", value="Welcome")

    with pytest.raises(TranslationValidationError) as excinfo:
        search_translations("welcome", language_code="xx")

    assert "language" in excinfo.value.errors
