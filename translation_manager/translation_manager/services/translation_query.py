import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from django.conf import settings
from django.core.paginator import EmptyPage, Paginator
from django.db.models import Q, QuerySet
from rest_framework.utils.urls import replace_query_param

from ..exceptions import TranslationValidationError
from ..filters import TranslationFilter
from ..models import Language, Translation

MIN_SEARCH_LENGTH = 2


@dataclass
class PagedResult:
    items: List[Translation] = field(default_factory=list)
    current_page: int = 1
    per_page: int = 50
    total: int = 0

    @property
    def last_page(self) -> int:
        return max(1, math.ceil(self.total / self.per_page))

    @property
    def from_index(self) -> Optional[int]:
        if not self.items:
            return None
        return (self.current_page - 1) * self.per_page + 1

    @property
    def to_index(self) -> Optional[int]:
        if not self.items:
            return None
        return (self.current_page - 1) * self.per_page + len(self.items)

    def to_payload(self, data: List[Dict[str, Any]], request=None) -> Dict[str, Any]:
        """Render the page envelope around already serialized ``data``."""
        next_url = prev_url = path = None
        if request is not None:
            url = request.build_absolute_uri()
            path = request.build_absolute_uri(request.path)
            if self.current_page < self.last_page:
                next_url = replace_query_param(url, "page", self.current_page + 1)
            if self.current_page > 1:
                prev_url = replace_query_param(url, "page", min(self.current_page - 1, self.last_page))

        return {
            "current_page": self.current_page,
            "data": data,
            "from": self.from_index,
            "to": self.to_index,
            "last_page": self.last_page,
            "per_page": self.per_page,
            "total": self.total,
            "next_page_url": next_url,
            "prev_page_url": prev_url,
            "path": path,
        }


def coerce_page(page) -> int:
    try:
        page = int(page)
    except (TypeError, ValueError):
        return 1
    return page if page > 0 else 1


def base_queryset() -> QuerySet:
    return Translation.objects.select_related("language").prefetch_related("tags").order_by("id")


def paginate(queryset: QuerySet, page=1, page_size: Optional[int] = None) -> PagedResult:
    """
    Offset pagination. A page past the end is empty rather than an error.
    """
    page_size = page_size or settings.TRANSLATION_PAGE_SIZE
    page = coerce_page(page)
    paginator = Paginator(queryset, page_size)
    try:
        items = list(paginator.page(page).object_list)
    except EmptyPage:
        items = []
    return PagedResult(items=items, current_page=page, per_page=page_size, total=paginator.count)


def filter_translations(filters: Optional[Mapping[str, Any]] = None) -> QuerySet:
    filterset = TranslationFilter(data=filters or {}, queryset=base_queryset())
    if not filterset.is_valid():
        raise TranslationValidationError(
            {name: [str(message) for message in messages] for name, messages in filterset.errors.items()}
        )
    return filterset.qs


def list_translations(filters: Optional[Mapping[str, Any]] = None, page=1, page_size: Optional[int] = None) -> PagedResult:
    """
    List translations matching ``filters`` (``key``, ``value``, ``language``, ``tags``).
    """
    return paginate(filter_translations(filters), page=page, page_size=page_size)


def search_translations(query: Optional[str], language_code: Optional[str] = None, page=1,
                        page_size: Optional[int] = None) -> PagedResult:
    """
    Free text search over keys and values, optionally restricted to one language.
    """
    query = (query or "").strip()
    if len(query) < MIN_SEARCH_LENGTH:
        raise TranslationValidationError(
            {"query": f"The query field must be at least {MIN_SEARCH_LENGTH} characters."}
        )

    queryset = base_queryset().filter(Q(key__icontains=query) | Q(value__icontains=query))

    if language_code:
        if not Language.objects.filter(code=language_code).exists():
            raise TranslationValidationError({"language": "The selected language is invalid."})
        queryset = queryset.filter(language__code=language_code)

    return paginate(queryset, page=page, page_size=page_size)
