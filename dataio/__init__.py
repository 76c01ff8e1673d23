from .variant_config import (
    VariantConfig,
    VariantConfigError,
    load_variant_config,
    load_variant,
    list_available_variants,
)

# Lazy wrapper to avoid importing configuration at package import time (prevents circular imports)
def get_config(*args, **kwargs):
    from .configuration import get_config as _get_config
    return _get_config(*args, **kwargs)

__all__ = [
    "VariantConfig",
    "VariantConfigError",
    "load_variant_config",
    "load_variant",
    "list_available_variants",
    "get_config",
]
