from django.core.management.base import BaseCommand

from translation_manager.services.bulk_generator import (
    ensure_default_languages,
    ensure_default_tags,
    seed_sample_translations,
)
from translation_manager.services.export_cache import ExportCache


class Command(BaseCommand):
    help = "Seed default languages, tags and the sample translations"

    def handle(self, *args, **kwargs):
        languages = ensure_default_languages()
        tags = ensure_default_tags()
        rows = seed_sample_translations(languages, tags)
        ExportCache().invalidate_all()
        self.stdout.write(self.style.SUCCESS(f"Test data seeding completed! ({rows} translations)"))
