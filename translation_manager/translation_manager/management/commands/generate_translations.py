from django.core.management.base import BaseCommand, CommandError
from tqdm import tqdm

from translation_manager.models import Translation
from translation_manager.services.bulk_generator import (
    BulkTranslationGenerator,
    ensure_default_languages,
    ensure_default_tags,
)
from translation_manager.services.export_cache import ExportCache

MIN_COUNT = 1000


class TqdmProgress:
    """Progress callback that draws one tqdm bar per generation stage."""

    def __init__(self):
        self.bars = {}

    def __call__(self, event):
        bar = self.bars.get(event.stage)
        if bar is None:
            bar = self.bars[event.stage] = tqdm(total=event.total, desc=event.stage)
        bar.update(event.done - bar.n)
        if event.done >= event.total:
            bar.close()

    def close(self):
        for bar in self.bars.values():
            bar.close()


class Command(BaseCommand):
    help = "Generate test translation data"

    def add_arguments(self, parser):
        parser.add_argument(
            "count", type=int, nargs="?", default=5000, help="Number of translation keys to generate"
        )
        parser.add_argument(
            "--batch-size", type=int, default=1000, help="Rows per insert batch"
        )
        parser.add_argument(
            "--no-input", action="store_true", help="Do not ask for confirmation when translations already exist"
        )

    def handle(self, *args, **options):
        count = options["count"]
        if count < MIN_COUNT:
            raise CommandError(f"Please generate at least {MIN_COUNT:,} records for meaningful testing")

        if Translation.objects.exists() and not options["no_input"]:
            answer = input("There are existing translations. Do you want to proceed and add more? [y/N] ")
            if answer.strip().lower() not in {"y", "yes"}:
                self.stdout.write("Aborted.")
                return

        self.stdout.write(f"Generating {count} translation keys...")
        languages = ensure_default_languages()
        tags = ensure_default_tags()

        progress = TqdmProgress()
        generator = BulkTranslationGenerator(
            batch_size=options["batch_size"], progress=progress, cache=ExportCache()
        )
        try:
            result = generator.generate(count, languages, tags)
        except ValueError as e:
            raise CommandError(str(e))
        finally:
            progress.close()

        self.stdout.write(
            self.style.SUCCESS(
                f"Successfully generated {result.rows} translations for {result.keys} keys "
                f"({result.tagged_translations} tagged)"
            )
        )
