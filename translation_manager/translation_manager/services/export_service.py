import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ..exceptions import NotFound, TranslationValidationError
from ..models import Language, Translation
from .export_cache import ExportCache

logger = logging.getLogger(__name__)

KEY_SEPARATOR = "."


def build_nested_tree(pairs: Iterable[Tuple[str, str]]) -> Dict[str, Any]:
    """
    Turn ``(key, value)`` pairs into a tree by splitting keys on ``.``.

    ``[("menu.home.title", "Home"), ("menu.home.subtitle", "Welcome")]`` becomes
    ``{"menu": {"home": {"title": "Home", "subtitle": "Welcome"}}}``.

    Keys that collide (``a.b`` next to ``a.b.c``) are resolved in input order, the later key
    wins: a branch replaces an earlier leaf and a leaf replaces an earlier branch.
    """
    tree: Dict[str, Any] = {}
    for key, value in pairs:
        *branches, leaf = key.split(KEY_SEPARATOR)
        node = tree
        for segment in branches:
            child = node.get(segment)
            if not isinstance(child, dict):
                child = {}
                node[segment] = child
            node = child
        node[leaf] = value
    return tree


def flatten_tree(tree: Dict[str, Any], prefix: Optional[str] = None) -> Dict[str, str]:
    """Inverse of :func:`build_nested_tree` for trees without collisions."""
    flat: Dict[str, str] = {}
    for segment, node in tree.items():
        # an empty segment is a real level (".a" nests under ""), so only None means top level
        key = segment if prefix is None else f"{prefix}{KEY_SEPARATOR}{segment}"
        if isinstance(node, dict):
            flat.update(flatten_tree(node, key))
        else:
            flat[key] = node
    return flat


def split_language_codes(languages: Optional[str]) -> List[str]:
    return [code.strip() for code in (languages or "").split(",") if code.strip()]


class ExportService:
    """
    Read-only exports of a language's translations for front-end consumption.

    Only active languages can be exported. Results go through the injected
    :class:`ExportCache`; the flat entry is shared between :meth:`export_flat` and
    :meth:`export_multi`.
    """

    def __init__(self, cache: Optional[ExportCache] = None):
        self.cache = cache if cache is not None else ExportCache()

    def get_active_language(self, language_code: str) -> Language:
        language = Language.objects.filter(code=language_code, is_active=True).first()
        if language is None:
            raise NotFound("Language not found or inactive")
        return language

    @staticmethod
    def _load_flat(language: Language) -> List[Dict[str, str]]:
        rows = Translation.objects.filter(language=language).order_by("key").values_list("key", "value")
        return [{"key": key, "value": value} for key, value in rows]

    def _flat_translations(self, language: Language) -> List[Dict[str, str]]:
        return self.cache.get_or_set(self.cache.flat_key(language.code), lambda: self._load_flat(language))

    def export_flat(self, language_code: str) -> Dict[str, Any]:
        language = self.get_active_language(language_code)
        return {
            "language": {"code": language.code, "name": language.name},
            "translations": self._flat_translations(language),
        }

    def export_nested(self, language_code: str) -> Dict[str, Any]:
        language = self.get_active_language(language_code)

        def build():
            rows = Translation.objects.filter(language=language).order_by("key").values_list("key", "value")
            return build_nested_tree(rows)

        return self.cache.get_or_set(self.cache.nested_key(language.code), build)

    def export_multi(self, languages: Optional[str]) -> Dict[str, List[List[str]]]:
        """
        Flat exports for several comma separated language codes, as ``[key, value]`` pairs.
        Codes that are unknown or inactive are skipped.
        """
        codes = split_language_codes(languages)
        if not codes:
            raise TranslationValidationError({"languages": "The languages field is required."})

        active = {language.code: language for language in Language.objects.filter(code__in=codes, is_active=True)}
        result: Dict[str, List[List[str]]] = {}
        for code in codes:
            language = active.get(code)
            if language is None:
                logger.debug("Skipping unknown or inactive language %r in multi export", code)
                continue
            result[code] = [[item["key"], item["value"]] for item in self._flat_translations(language)]
        return result
