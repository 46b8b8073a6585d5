from silkcss.optimizer.families import FAMILIES, Family, effective_values, expand_declaration
from silkcss.optimizer.optimizer import OptimizationResult, Optimizer, optimize_declarations

__all__ = [
    "FAMILIES",
    "Family",
    "OptimizationResult",
    "Optimizer",
    "effective_values",
    "expand_declaration",
    "optimize_declarations",
]
