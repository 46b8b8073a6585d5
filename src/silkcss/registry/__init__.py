from silkcss.registry.registry import (
    AtomicRegistry,
    RegistryStats,
    TopAtom,
    build_rule,
)

__all__ = ["AtomicRegistry", "RegistryStats", "TopAtom", "build_rule"]
