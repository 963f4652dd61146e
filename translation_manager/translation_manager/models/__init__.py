from .language import Language
from .tag import Tag
from .translation import Translation, TranslationTag
