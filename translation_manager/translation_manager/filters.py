import django_filters
from django.db.models import Exists, OuterRef

from .models import Translation, TranslationTag


def split_tag_names(value):
    return [name.strip() for name in (value or '').split(',') if name.strip()]


class TranslationFilter(django_filters.FilterSet):
    """
    Filters for the translation listing. All filters are optional and combined with AND;
    ``tags`` matches translations carrying at least one of the comma separated names.
    """
    key = django_filters.CharFilter(field_name='key', lookup_expr='icontains')
    value = django_filters.CharFilter(field_name='value', lookup_expr='icontains')
    language = django_filters.CharFilter(field_name='language__code')
    tags = django_filters.CharFilter(method='filter_tags')

    class Meta:
        model = Translation
        fields = ['key', 'value', 'language', 'tags']

    def filter_tags(self, queryset, name, value):
        names = split_tag_names(value)
        if not names:
            return queryset
        # Exists() instead of a join keeps rows distinct without DISTINCT
        tagged = TranslationTag.objects.filter(translation=OuterRef('pk'), tag__name__in=names)
        return queryset.filter(Exists(tagged))
