from .language import LanguageSerializer, LanguageSummarySerializer
from .tag import TagSerializer, TagDetailSerializer, TagSummarySerializer
from .translation import (
    TranslationSerializer,
    TranslationCreateSerializer,
    TranslationUpdateSerializer,
)
