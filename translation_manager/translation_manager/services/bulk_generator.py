import logging
import random
from typing import Callable, Iterable, List, Optional, Sequence

from pydantic import BaseModel

from ..models import Language, Tag, Translation, TranslationTag
from .export_cache import ExportCache
from .sample_values import DEFAULT_LANGUAGES, DEFAULT_TAGS, FALLBACK_LANGUAGE, SAMPLE_VALUES
from .tag_sync import TagAssociationManager

logger = logging.getLogger(__name__)

SECTIONS_PER_PREFIX = 20
ITEMS_PER_SECTION = 100
MAX_TAGGED_TRANSLATIONS = 20000
TAGGED_SHARE = 0.2
TAG_CHUNK_SIZE = 1000
MAX_TAGS_PER_TRANSLATION = 3


class GenerationProgress(BaseModel):
    stage: str  # "translations" or "tags"
    done: int
    total: int


class GenerationResult(BaseModel):
    keys: int
    rows: int
    tagged_translations: int = 0
    tag_links: int = 0


ProgressCallback = Callable[[GenerationProgress], None]


def ensure_default_languages() -> List[Language]:
    """Create the default languages when there are none."""
    languages = list(Language.objects.all())
    if languages:
        return languages
    logger.info("Creating default languages...")
    Language.objects.bulk_create(
        [Language(code=code, name=name) for code, name in DEFAULT_LANGUAGES], ignore_conflicts=True
    )
    return list(Language.objects.all())


def ensure_default_tags() -> List[Tag]:
    """Create the default tags when there are none."""
    tags = list(Tag.objects.all())
    if tags:
        return tags
    logger.info("Creating default tags...")
    return TagAssociationManager().find_or_create_tags(DEFAULT_TAGS)


def sample_value(sample: dict, language_code: str) -> str:
    return sample.get(language_code, sample[FALLBACK_LANGUAGE])


class BulkTranslationGenerator:
    """
    Fills the database with synthetic translations for load testing.

    Keys look like ``common.section_7.item_42``. Inserts are batched and ignore rows that
    already exist, so running it again on a populated database is safe.
    """

    def __init__(self, batch_size: int = 1000, rng: Optional[random.Random] = None,
                 progress: Optional[ProgressCallback] = None, cache: Optional[ExportCache] = None):
        if batch_size < 1:
            raise ValueError("batch_size must be positive")
        self.batch_size = batch_size
        self.rng = rng or random.Random()
        self.progress = progress
        self.cache = cache
        self.prefixes = list(SAMPLE_VALUES)

    @property
    def key_space(self) -> int:
        return len(self.prefixes) * SECTIONS_PER_PREFIX * ITEMS_PER_SECTION

    def _report(self, stage: str, done: int, total: int) -> None:
        if self.progress is not None:
            self.progress(GenerationProgress(stage=stage, done=done, total=total))

    def _random_key(self) -> str:
        prefix = self.rng.choice(self.prefixes)
        section = self.rng.randint(1, SECTIONS_PER_PREFIX)
        item = self.rng.randint(1, ITEMS_PER_SECTION)
        return f"{prefix}.section_{section}.item_{item}"

    def generate_keys(self, count: int) -> List[str]:
        """Draw ``count`` distinct keys, retrying until an unseen one comes up."""
        if count > self.key_space:
            raise ValueError(f"Cannot generate {count} unique keys, only {self.key_space} are possible")
        used = set()
        keys = []
        while len(keys) < count:
            key = self._random_key()
            if key in used:
                continue
            used.add(key)
            keys.append(key)
        return keys

    def _insert(self, rows: List[Translation]) -> None:
        Translation.objects.bulk_create(rows, ignore_conflicts=True)

    def generate(self, count: int, languages: Sequence[Language], tags: Sequence[Tag]) -> GenerationResult:
        if count < 1:
            raise ValueError("count must be positive")
        if not languages:
            raise ValueError("At least one language is required")

        keys = self.generate_keys(count)
        total_rows = len(keys) * len(languages)
        logger.info("Generating %d translation rows for %d languages", total_rows, len(languages))

        done = 0
        batch: List[Translation] = []
        for key in keys:
            prefix = key.split(".", 1)[0]
            samples = SAMPLE_VALUES[prefix]
            sample = samples[self.rng.choice(list(samples))]
            for language in languages:
                batch.append(Translation(language_id=language.pk, key=key, value=sample_value(sample, language.code)))
                if len(batch) >= self.batch_size:
                    self._insert(batch)
                    done += len(batch)
                    batch = []
                    self._report("translations", done, total_rows)
        if batch:
            self._insert(batch)
            done += len(batch)
            self._report("translations", done, total_rows)

        tagged, links = self.assign_random_tags(count, tags)

        if self.cache is not None:
            self.cache.invalidate_all()

        logger.info("Generated %d keys, %d rows, tagged %d translations", len(keys), done, tagged)
        return GenerationResult(keys=len(keys), rows=done, tagged_translations=tagged, tag_links=links)

    def _random_tag_ids(self, tag_ids: List[int]) -> List[int]:
        how_many = self.rng.randint(1, min(MAX_TAGS_PER_TRANSLATION, len(tag_ids)))
        return self.rng.sample(tag_ids, how_many)

    def assign_random_tags(self, count: int, tags: Sequence[Tag]):
        """
        Give 1-3 random tags to a random sample of translations; the sample size is
        ``min(20000, 20% of count)``. Returns ``(translations tagged, links submitted)``.
        """
        sample_size = min(MAX_TAGGED_TRANSLATIONS, int(count * TAGGED_SHARE))
        tag_ids = [tag.pk for tag in tags]
        if sample_size < 1 or not tag_ids:
            return 0, 0

        translation_ids = list(Translation.objects.order_by("?").values_list("id", flat=True)[:sample_size])
        chunks = [translation_ids[i:i + TAG_CHUNK_SIZE] for i in range(0, len(translation_ids), TAG_CHUNK_SIZE)]

        links = 0
        for index, chunk in enumerate(chunks, start=1):
            rows = [
                TranslationTag(translation_id=translation_id, tag_id=tag_id)
                for translation_id in chunk
                for tag_id in self._random_tag_ids(tag_ids)
            ]
            TranslationTag.objects.bulk_create(rows, ignore_conflicts=True)
            links += len(rows)
            self._report("tags", index, len(chunks))

        return len(translation_ids), links


def seed_sample_translations(languages: Iterable[Language], tags: Sequence[Tag],
                             rng: Optional[random.Random] = None) -> int:
    """
    Insert every sample value as ``<prefix>.<item>`` for each language that has a value,
    then tag each seeded translation with 1-3 random tags. Returns the rows submitted.
    """
    rng = rng or random.Random()
    languages = list(languages)
    rows = [
        Translation(language_id=language.pk, key=f"{prefix}.{item}", value=values[language.code])
        for prefix, items in SAMPLE_VALUES.items()
        for item, values in items.items()
        for language in languages
        if language.code in values
    ]
    for start in range(0, len(rows), 100):
        Translation.objects.bulk_create(rows[start:start + 100], ignore_conflicts=True)

    tag_ids = [tag.pk for tag in tags]
    if tag_ids:
        seeded_keys = {row.key for row in rows}
        links = []
        for translation_id in Translation.objects.filter(key__in=seeded_keys).values_list("id", flat=True):
            how_many = rng.randint(1, min(MAX_TAGS_PER_TRANSLATION, len(tag_ids)))
            links.extend(
                TranslationTag(translation_id=translation_id, tag_id=tag_id)
                for tag_id in rng.sample(tag_ids, how_many)
            )
        TranslationTag.objects.bulk_create(links, ignore_conflicts=True)

    return len(rows)
