from django.contrib import admin
from django.db import transaction

from .models import Language, Tag, Translation, TranslationTag
from .services.export_cache import ExportCache


class ExportInvalidatingAdmin(admin.ModelAdmin):
    """
    Drops the exports of every language once the admin transaction commits.
    A translation moved between languages, or a language recoded or deleted, leaves
    more than one export stale, so the codes are captured before the write.
    """

    def invalidate_exports_on_commit(self):
        codes = list(Language.objects.values_list('code', flat=True))
        transaction.on_commit(lambda: ExportCache().invalidate_languages(codes))

    def save_model(self, request, obj, form, change):
        self.invalidate_exports_on_commit()
        super().save_model(request, obj, form, change)

    def delete_model(self, request, obj):
        self.invalidate_exports_on_commit()
        super().delete_model(request, obj)

    def delete_queryset(self, request, queryset):
        self.invalidate_exports_on_commit()
        super().delete_queryset(request, queryset)


class TranslationTagInline(admin.TabularInline):
    model = TranslationTag
    extra = 0
    autocomplete_fields = ('tag',)


@admin.register(Language)
class LanguageAdmin(ExportInvalidatingAdmin):
    list_display = ('code', 'name', 'is_active')
    list_filter = ('is_active',)
    search_fields = ('code', 'name')


@admin.register(Tag)
class TagAdmin(admin.ModelAdmin):
    search_fields = ('name',)


@admin.register(Translation)
class TranslationAdmin(ExportInvalidatingAdmin):
    list_display = ('key', 'language', 'value', 'updated_at')
    list_filter = ('language',)
    search_fields = ('key', 'value')
    list_select_related = ('language',)
    inlines = [TranslationTagInline]
