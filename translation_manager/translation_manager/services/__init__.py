from .export_cache import ExportCache, NullExportCache
from .tag_sync import TagAssociationManager
from .translation_store import TranslationStore
from .translation_query import PagedResult, list_translations, search_translations
from .export_service import ExportService, build_nested_tree, flatten_tree
from .bulk_generator import BulkTranslationGenerator, GenerationProgress, GenerationResult
