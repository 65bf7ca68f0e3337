"""Model catalog package: cache, registry index, enrichment, options."""

from .cache import ModelCatalogCache, CatalogEntry, get_default_catalog_cache
from .registry import ModelRegistryIndex, get_default_registry
from .enrichment import enrich_models, model_from_registry
from .options import models_as_options, placeholder_catalog, NO_MODELS_OPTION

__all__ = [
    "ModelCatalogCache",
    "CatalogEntry",
    "get_default_catalog_cache",
    "ModelRegistryIndex",
    "get_default_registry",
    "enrich_models",
    "model_from_registry",
    "models_as_options",
    "placeholder_catalog",
    "NO_MODELS_OPTION",
]
