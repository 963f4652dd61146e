import logging
from typing import Iterable, List, Union

from django.db import transaction

from ..models import Tag, Translation, TranslationTag

logger = logging.getLogger(__name__)


def unique_names(names: Iterable[str]) -> List[str]:
    """Drop repeated names, keeping the first occurrence order."""
    seen = set()
    result = []
    for name in names:
        if name not in seen:
            seen.add(name)
            result.append(name)
    return result


def _translation_id(translation: Union[Translation, int]) -> int:
    return translation.pk if isinstance(translation, Translation) else int(translation)


class TagAssociationManager:
    """
    Keeps the many-to-many link between translations and tags.

    Tags are found or created by name against the unique constraint on ``Tag.name``
    (insert-ignore, then read back), so two writers racing on the same name end up
    sharing one row.
    """

    def find_or_create_tags(self, names: Iterable[str]) -> List[Tag]:
        names = unique_names(names)
        if not names:
            return []

        Tag.objects.bulk_create([Tag(name=name) for name in names], ignore_conflicts=True)
        existing = list(Tag.objects.filter(name__in=names))
        by_name = {tag.name: tag for tag in existing}
        # case-insensitive collations may hand back a differently cased row
        by_folded_name = {tag.name.casefold(): tag for tag in existing}
        return [by_name.get(name) or by_folded_name[name.casefold()] for name in names]

    def sync(self, translation: Union[Translation, int], tag_names: Iterable[str]) -> List[Tag]:
        """
        Make the translation's tags exactly ``tag_names``.

        Links outside the target set are removed, missing ones are added and the overlap is
        left untouched. Returns the tags in the order they were named.
        """
        translation_id = _translation_id(translation)
        with transaction.atomic():
            tags = self.find_or_create_tags(tag_names)
            target = {tag.pk for tag in tags}
            current = set(
                TranslationTag.objects.filter(translation_id=translation_id).values_list("tag_id", flat=True)
            )

            stale = current - target
            if stale:
                TranslationTag.objects.filter(translation_id=translation_id, tag_id__in=stale).delete()

            missing = target - current
            if missing:
                TranslationTag.objects.bulk_create(
                    [TranslationTag(translation_id=translation_id, tag_id=tag_id) for tag_id in missing],
                    ignore_conflicts=True,
                )

        logger.debug(
            "Synced tags for translation %s: +%d -%d", translation_id, len(missing), len(stale)
        )
        return tags

    def detach_all(self, translation: Union[Translation, int]) -> int:
        deleted, _ = TranslationTag.objects.filter(translation_id=_translation_id(translation)).delete()
        return deleted
