"""HTTP tests for /api/translations/."""

from __future__ import annotations

from unittest import mock

import pytest
from django.db import DatabaseError

from translation_manager.models import Translation

pytestmark = pytest.mark.django_db

LIST_URL = "/api/translations/"
SEARCH_URL = "/api/translations/search/"


def detail_url(pk) -> str:
    return f"/api/translations/{pk}/"


def test_requires_authentication(api_client, make_translation) -> None:
    translation = make_translation("a.key")

    assert api_client.get(LIST_URL).status_code == 401
    assert api_client.get(detail_url(translation.pk)).status_code == 401
    assert api_client.post(LIST_URL, {}, format="json").status_code == 401
    assert api_client.get(SEARCH_URL, {"query": "key"}).status_code == 401


def test_rejects_unknown_token(api_client) -> None:
    api_client.credentials(HTTP_AUTHORIZATION="Bearer not-a-token")

    assert api_client.get(LIST_URL).status_code == 401


def test_list_returns_page_envelope(auth_client, make_translation) -> None:
    make_translation("menu.home.title", value="Home", tags=["web"])

    response = auth_client.get(LIST_URL)

    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 1
    assert body["current_page"] == 1
    assert body["last_page"] == 1
    assert body["from"] == 1
    assert body["to"] == 1
    assert body["next_page_url"] is None
    item = body["data"][0]
    assert item["key"] == "menu.home.title"
    assert item["language"]["code"] == "en"
    assert [tag["name"] for tag in item["tags"]] == ["web"]


def test_list_filters(auth_client, make_translation, spanish) -> None:
    make_translation("test.search.key", value="Hola", language=spanish, tags=["mobile"])
    make_translation("other.key", value="Hello", tags=["web"])

    response = auth_client.get(LIST_URL, {"key": "search", "language": "es", "tags": "mobile,admin"})

    assert [item["key"] for item in response.json()["data"]] == ["test.search.key"]


def test_list_pagination_links(auth_client, make_translation, settings) -> None:
    settings.TRANSLATION_PAGE_SIZE = 2
    for index in range(3):
        make_translation(f"a.key{index}")

    body = auth_client.get(LIST_URL, {"page": 2}).json()

    assert [item["key"] for item in body["data"]] == ["a.key2"]
    assert body["last_page"] == 2
    assert body["next_page_url"] is None
    assert "page=1" in body["prev_page_url"]


def test_create_translation(auth_client, english) -> None:
    response = auth_client.post(
        LIST_URL,
        {"language_id": english.pk, "key": "menu.home.title", "value": "Home", "tags": ["web", "mobile"]},
        format="json",
    )

    assert response.status_code == 201
    body = response.json()
    assert body["key"] == "menu.home.title"
    assert body["language_id"] == english.pk
    assert sorted(tag["name"] for tag in body["tags"]) == ["mobile", "web"]
    assert Translation.objects.filter(key="menu.home.title").exists()


def test_create_duplicate_key_is_rejected(auth_client, make_translation, english) -> None:
    make_translation("test.key1", value="Hello")

    response = auth_client.post(
        LIST_URL, {"language_id": english.pk, "key": "test.key1", "value": "Hello"}, format="json"
    )

    assert response.status_code == 422
    assert response.json() == {"message": "Translation key already exists for this language"}
    assert Translation.objects.filter(key="test.key1").count() == 1


@pytest.mark.parametrize(
    "payload, field",
    [
        ({"language_id": 9999, "key": "a.b", "value": "x"}, "language_id"),
        ({"key": "a.b", "value": "x"}, "language_id"),
        ({"language_id": None, "key": "a.b"}, "value"),
        ({"language_id": None, "value": "x"}, "key"),
        ({"language_id": None, "key": "k" * 256, "value": "x"}, "key"),
    ],
)
def test_create_validation_errors(auth_client, english, payload, field) -> None:
    if payload.get("language_id", 0) is None:
        payload = {**payload, "language_id": english.pk}

    response = auth_client.post(LIST_URL, payload, format="json")

    assert response.status_code == 422
    body = response.json()
    assert body["message"]
    assert field in body["errors"]


def test_retrieve_translation(auth_client, make_translation) -> None:
    translation = make_translation("menu.home.title", value="Home")

    response = auth_client.get(detail_url(translation.pk))

    assert response.status_code == 200
    assert response.json()["value"] == "Home"


def test_retrieve_missing_translation(auth_client, db) -> None:
    response = auth_client.get(detail_url(12345))

    assert response.status_code == 404
    assert response.json() == {"error": "Translation not found"}


def test_put_updates_value_and_tags(auth_client, make_translation) -> None:
    translation = make_translation("menu.home.title", value="Home", tags=["web"])

    response = auth_client.put(detail_url(translation.pk), {"value": "Start", "tags": ["mobile"]}, format="json")

    assert response.status_code == 200
    body = response.json()
    assert body["value"] == "Start"
    assert [tag["name"] for tag in body["tags"]] == ["mobile"]


def test_patch_value_keeps_tags(auth_client, make_translation) -> None:
    translation = make_translation("menu.home.title", value="Home", tags=["web"])

    response = auth_client.patch(detail_url(translation.pk), {"value": "Start"}, format="json")

    assert response.status_code == 200
    assert [tag["name"] for tag in response.json()["tags"]] == ["web"]


def test_update_missing_translation(auth_client, db) -> None:
    response = auth_client.put(detail_url(12345), {"value": "x"}, format="json")

    assert response.status_code == 404


def test_update_storage_failure_is_a_server_error(auth_client, make_translation) -> None:
    translation = make_translation("menu.home.title", value="Home")

    with mock.patch(
        "translation_manager.services.tag_sync.TagAssociationManager.sync",
        side_effect=DatabaseError("lost connection"),
    ):
        response = auth_client.put(detail_url(translation.pk), {"value": "Start", "tags": ["web"]}, format="json")

    assert response.status_code == 500
    assert "message" in response.json()
    translation.refresh_from_db()
    assert translation.value == "Home"


def test_delete_translation(auth_client, make_translation) -> None:
    translation = make_translation("menu.home.title", tags=["web"])

    response = auth_client.delete(detail_url(translation.pk))

    assert response.status_code == 204
    assert not Translation.objects.filter(pk=translation.pk).exists()
    assert auth_client.delete(detail_url(translation.pk)).status_code == 404


def test_search_requires_query(auth_client, db) -> None:
    response = auth_client.get(SEARCH_URL, {"query": "a"})

    assert response.status_code == 422
    assert "query" in response.json()["errors"]


def test_search_with_unknown_language(auth_client, db) -> None:
    response = auth_client.get(SEARCH_URL, {"query": "welcome", "language": "xx"})

    assert response.status_code == 422
    assert "language" in response.json()["errors"]


def test_search(auth_client, make_translation, spanish) -> None:
    make_translation("welcome.message", value="Welcome")
    make_translation("welcome.message", value="Bienvenido", language=spanish)
    make_translation("other", value="Nothing")

    body = auth_client.get(SEARCH_URL, {"query": "welcome"}).json()
    assert body["total"] == 2

    body = auth_client.get(SEARCH_URL, {"query": "welcome", "language": "es"}).json()
    assert [item["value"] for item in body["data"]] == ["Bienvenido"]
