from django.db import models

from .language import Language
from .tag import Tag


class Translation(models.Model):
    """
    A single translated string, identified by a dotted key (e.g. "menu.home.title")
    that is unique within its language.
    """
    language = models.ForeignKey(Language, on_delete=models.CASCADE, related_name='translations')
    key = models.CharField(max_length=255, db_index=True)
    value = models.TextField()
    tags = models.ManyToManyField(Tag, through='TranslationTag', related_name='translations')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['id']
        constraints = [
            models.UniqueConstraint(fields=['language', 'key'], name='unique_translation_key_per_language'),
        ]

    def __str__(self):
        return f"{self.key} ({self.language_id})"


class TranslationTag(models.Model):
    """
    Join row between a Translation and a Tag. A pair appears at most once.
    """
    translation = models.ForeignKey(Translation, on_delete=models.CASCADE)
    tag = models.ForeignKey(Tag, on_delete=models.CASCADE)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=['translation', 'tag'], name='unique_translation_tag'),
        ]

    def __str__(self):
        return f"{self.translation_id} <-> {self.tag_id}"
