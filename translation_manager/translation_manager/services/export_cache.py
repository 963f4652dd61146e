import logging
from typing import Any, Callable, Iterable, Optional

from django.conf import settings
from django.core.cache import caches
from django.core.cache.backends.base import BaseCache
from django.core.cache.backends.dummy import DummyCache

from ..models import Language

logger = logging.getLogger(__name__)

FLAT_EXPORT_KEY = "translations.export.{code}"
NESTED_EXPORT_KEY = "translations.export.{code}.nested"


class ExportCache:
    """
    Cache for language exports.

    Entries live for ``TRANSLATION_EXPORT_CACHE_TTL`` seconds (60 by default). Reads are not
    transactional with the database, so an export can be stale for up to one TTL after a write
    unless the write invalidates it.
    """

    def __init__(self, backend: Optional[BaseCache] = None, ttl: Optional[int] = None):
        self.backend = backend if backend is not None else caches[settings.TRANSLATION_EXPORT_CACHE_ALIAS]
        self.ttl = ttl if ttl is not None else settings.TRANSLATION_EXPORT_CACHE_TTL

    @staticmethod
    def flat_key(language_code: str) -> str:
        return FLAT_EXPORT_KEY.format(code=language_code)

    @staticmethod
    def nested_key(language_code: str) -> str:
        return NESTED_EXPORT_KEY.format(code=language_code)

    def get(self, key: str, default: Any = None) -> Any:
        return self.backend.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self.backend.set(key, value, timeout=self.ttl)

    def get_or_set(self, key: str, producer: Callable[[], Any]) -> Any:
        return self.backend.get_or_set(key, producer, timeout=self.ttl)

    def invalidate(self, language_code: str) -> None:
        self.backend.delete_many([self.flat_key(language_code), self.nested_key(language_code)])

    def invalidate_languages(self, language_codes: Iterable[str]) -> None:
        keys = []
        for code in language_codes:
            keys.extend([self.flat_key(code), self.nested_key(code)])
        if keys:
            self.backend.delete_many(keys)

    def invalidate_all(self) -> None:
        """Forget the flat and nested exports of every known language."""
        codes = list(Language.objects.values_list("code", flat=True))
        self.invalidate_languages(codes)
        logger.debug("Invalidated export cache for %d languages", len(codes))


class NullExportCache(ExportCache):
    """An ExportCache that never stores anything."""

    def __init__(self):
        super().__init__(backend=DummyCache("null", {}), ttl=0)

    def invalidate_all(self) -> None:
        pass
