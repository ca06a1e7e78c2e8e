"""Martin coupling metrics over directory relation sets.

Computes per directory:
- Efferent Coupling (Ce): number of distinct directories it depends on
- Afferent Coupling (Ca): number of other directories depending on it
- Instability (I): Ce / (Ca + Ce), 0.0 if isolated

Afferent coupling needs every relation set, so this runs once after the
whole tree has been aggregated.
"""

from typing import Dict

from .models import CouplingMetrics, DirectoryRecord


def compute_afferent_counts(records: Dict[str, DirectoryRecord]) -> Dict[str, int]:
    """Count, for each record key, the other records whose relations contain it."""
    counts: Dict[str, int] = {key: 0 for key in records}
    for key, record in records.items():
        for target in record.relations:
            if target != key and target in counts:
                counts[target] += 1
    return counts


def compute_instability(ca: int, ce: int, precision: int = 3) -> float:
    """Compute instability I = Ce / (Ca + Ce).

    Args:
        ca: Afferent coupling (incoming)
        ce: Efferent coupling (outgoing)
        precision: Decimal places to round to

    Returns:
        Instability in [0, 1]; 0.0 for an isolated directory
    """
    total = ca + ce
    if total == 0:
        return 0.0
    return round(ce / total, precision)


def compute_coupling_metrics(records: Dict[str, DirectoryRecord], precision: int = 3) -> None:
    """Fill the metrics block of every record (mutates records in place)."""
    afferent = compute_afferent_counts(records)

    for key, record in records.items():
        ce = len(record.relations)
        ca = afferent[key]
        record.metrics = CouplingMetrics(
            efferent_coupling=ce,
            afferent_coupling=ca,
            instability=compute_instability(ca, ce, precision),
        )
