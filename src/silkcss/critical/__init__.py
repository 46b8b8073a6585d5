from silkcss.critical.partitioner import (
    AUTO_CRITICAL_PATTERNS,
    CriticalPartitioner,
    ImpactEstimate,
    Partition,
    PartitionReport,
    estimate_impact,
    format_size,
    generate_report,
    is_auto_critical,
)

__all__ = [
    "AUTO_CRITICAL_PATTERNS",
    "CriticalPartitioner",
    "ImpactEstimate",
    "Partition",
    "PartitionReport",
    "estimate_impact",
    "format_size",
    "generate_report",
    "is_auto_critical",
]
