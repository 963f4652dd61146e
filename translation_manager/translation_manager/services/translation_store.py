import logging
from typing import Iterable, Optional

from django.db import DatabaseError, IntegrityError, transaction

from ..exceptions import Conflict, NotFound, TransactionFailure, TranslationValidationError
from ..models import Language, Translation
from .export_cache import ExportCache
from .tag_sync import TagAssociationManager

logger = logging.getLogger(__name__)

DUPLICATE_KEY_MESSAGE = "Translation key already exists for this language"


class TranslationStore:
    """
    Create, read, update and delete translations.

    Each write runs the row change and the tag change in one transaction and, once it
    commits, drops the export cache of every language.
    """

    def __init__(self, cache: Optional[ExportCache] = None, tag_manager: Optional[TagAssociationManager] = None):
        self.cache = cache if cache is not None else ExportCache()
        self.tag_manager = tag_manager if tag_manager is not None else TagAssociationManager()

    def get(self, translation_id) -> Translation:
        try:
            return (
                Translation.objects.select_related("language")
                .prefetch_related("tags")
                .get(pk=translation_id)
            )
        except (Translation.DoesNotExist, ValueError, TypeError):
            raise NotFound("Translation not found")

    def _get_row(self, translation_id) -> Translation:
        try:
            return Translation.objects.get(pk=translation_id)
        except (Translation.DoesNotExist, ValueError, TypeError):
            raise NotFound("Translation not found")

    def create(self, language_id, key: str, value: str, tags: Optional[Iterable[str]] = None) -> Translation:
        if not Language.objects.filter(pk=language_id).exists():
            raise TranslationValidationError({"language_id": "The selected language id is invalid."})

        # Friendly pre-flight check; the unique constraint below is what actually decides.
        if Translation.objects.filter(language_id=language_id, key=key).exists():
            raise Conflict(DUPLICATE_KEY_MESSAGE)

        try:
            with transaction.atomic():
                translation = Translation.objects.create(language_id=language_id, key=key, value=value)
                if tags:
                    self.tag_manager.sync(translation, tags)
                transaction.on_commit(self.cache.invalidate_all)
        except IntegrityError:
            logger.info("Lost create race for key %r in language %s", key, language_id)
            raise Conflict(DUPLICATE_KEY_MESSAGE)
        except DatabaseError as e:
            logger.exception("Error creating translation %r", key)
            raise TransactionFailure("Error creating translation") from e

        logger.info("Created translation %s (%r) in language %s", translation.pk, key, language_id)
        return self.get(translation.pk)

    def update(self, translation_id, value: Optional[str] = None, tags: Optional[Iterable[str]] = None) -> Translation:
        """
        Partial update: ``value=None`` keeps the current value, ``tags=None`` keeps the
        current tags and ``tags=[]`` removes them all.
        """
        translation = self._get_row(translation_id)

        try:
            with transaction.atomic():
                if value is not None:
                    translation.value = value
                    translation.save(update_fields=["value", "updated_at"])
                if tags is not None:
                    self.tag_manager.sync(translation, tags)
                transaction.on_commit(self.cache.invalidate_all)
        except DatabaseError as e:
            logger.exception("Error updating translation %s", translation.pk)
            raise TransactionFailure("Error updating translation") from e

        logger.info("Updated translation %s", translation.pk)
        return self.get(translation.pk)

    def delete(self, translation_id) -> None:
        translation = self._get_row(translation_id)
        pk = translation.pk

        try:
            with transaction.atomic():
                self.tag_manager.detach_all(translation)
                translation.delete()
                transaction.on_commit(self.cache.invalidate_all)
        except DatabaseError as e:
            logger.exception("Error deleting translation %s", pk)
            raise TransactionFailure("Error deleting translation") from e

        logger.info("Deleted translation %s", pk)
