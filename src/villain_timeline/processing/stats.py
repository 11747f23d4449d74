from __future__ import annotations

import math
from typing import Dict, Iterable, List

from villain_timeline.registry.entities import VillainEntity, VillainStats


def generate_stats(villains: Iterable[VillainEntity]) -> VillainStats:
    """
    Totals for one processed series.

    most_frequent: highest frequency, first encountered wins a tie.
    first_appearances: first-appearance issue -> primary names debuting there.
    """
    villain_list = list(villains)

    most_frequent = None
    for v in villain_list:
        if most_frequent is None or v.frequency > most_frequent.frequency:
            most_frequent = v

    average = (
        sum(v.frequency for v in villain_list) / len(villain_list)
        if villain_list
        else 0.0
    )

    first_appearances: Dict[int, List[str]] = {}
    for v in villain_list:
        first_appearances.setdefault(v.first_appearance, []).append(v.name)

    return VillainStats(
        total_villains=len(villain_list),
        most_frequent=most_frequent,
        average_frequency=average,
        first_appearances=first_appearances,
    )


def round_frequency(value: float) -> float:
    """Two-decimal, half-up rounding used in every serialized stats block."""
    return math.floor(value * 100 + 0.5) / 100
