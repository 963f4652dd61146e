from __future__ import annotations

import os

import pytest
from django.core.cache import caches
from rest_framework.authtoken.models import Token
from rest_framework.test import APIClient

from translation_manager.celery import app as celery_app
from translation_manager.models import Language, Tag, Translation
from translation_manager.services import ExportCache, NullExportCache, TranslationStore


@pytest.fixture(scope="session", autouse=True)
def in_memory_celery():
    """Tasks run in-process; no broker or result backend server is needed."""
    # Celery reads CELERY_BROKER_URL / CELERY_RESULT_BACKEND from the environment
    # ahead of any configured value, so the Django settings' redis URLs win otherwise.
    os.environ["CELERY_BROKER_URL"] = "memory://"
    os.environ["CELERY_RESULT_BACKEND"] = "cache+memory://"
    celery_app.conf.update(broker_url="memory://", result_backend="cache+memory://")
    yield


@pytest.fixture(autouse=True)
def clear_cache():
    """Every test starts and ends with an empty cache."""
    caches["default"].clear()
    yield
    caches["default"].clear()


@pytest.fixture
def english(db) -> Language:
    return Language.objects.create(code="en", name="English")


@pytest.fixture
def spanish(db) -> Language:
    return Language.objects.create(code="es", name="Spanish")


@pytest.fixture
def user(django_user_model):
    return django_user_model.objects.create_user(username="tester", password="not-a-real-password")


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def auth_client(user) -> APIClient:
    token = Token.objects.create(user=user)
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {token.key}")
    return client


@pytest.fixture
def export_cache() -> ExportCache:
    return ExportCache(backend=caches["default"], ttl=60)


@pytest.fixture
def store() -> TranslationStore:
    return TranslationStore(cache=NullExportCache())


@pytest.fixture
def make_translation(english):
    """Create a translation directly through the ORM, optionally tagged."""

    def _make(key: str, value: str = "Value", language: Language | None = None, tags=()) -> Translation:
        translation = Translation.objects.create(language=language or english, key=key, value=value)
        for name in tags:
            tag, _ = Tag.objects.get_or_create(name=name)
            translation.tags.add(tag)
        return translation

    return _make
