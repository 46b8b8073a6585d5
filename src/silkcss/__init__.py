"""silkcss: atomic CSS generation and deduplication."""

__version__ = "0.1.0"

from silkcss.config import NamingMode, SilkConfig, load_config  # noqa: E402
from silkcss.errors import (  # noqa: E402
    ConfigError,
    HashCollisionError,
    ParseError,
    RegistryInvariantError,
    SilkError,
    ValidationError,
)
from silkcss.pipeline import (  # noqa: E402
    BuildOutput,
    StyleResult,
    UnitResult,
    build_output,
    compile_style,
    compile_unit,
    load_registry,
    save_registry,
)
from silkcss.registry import AtomicRegistry  # noqa: E402
from silkcss.runtime import StyleSystem, css, get_default_system, merge_styles, reset_default_system  # noqa: E402

__all__ = [
    "__version__",
    # config
    "NamingMode",
    "SilkConfig",
    "load_config",
    # errors
    "ConfigError",
    "HashCollisionError",
    "ParseError",
    "RegistryInvariantError",
    "SilkError",
    "ValidationError",
    # pipeline
    "BuildOutput",
    "StyleResult",
    "UnitResult",
    "build_output",
    "compile_style",
    "compile_unit",
    "load_registry",
    "save_registry",
    # registry / runtime
    "AtomicRegistry",
    "StyleSystem",
    "css",
    "get_default_system",
    "merge_styles",
    "reset_default_system",
]
