from silkcss.runtime.cache import CacheStats, RuntimeCache, freeze_style
from silkcss.runtime.merge import merge_styles
from silkcss.runtime.pool import ObjectPool
from silkcss.runtime.system import StyleSystem, css, get_default_system, reset_default_system

__all__ = [
    "CacheStats",
    "ObjectPool",
    "RuntimeCache",
    "StyleSystem",
    "css",
    "freeze_style",
    "get_default_system",
    "merge_styles",
    "reset_default_system",
]
