"""Raumauslastung: Anteil belegter Slots am Wochenraster."""

import math
from collections import Counter

from config.schema import TimeGridConfig
from models.classroom import Classroom
from models.schedule_item import ScheduleItem


def usage_percentage(used_slots: int, total_slots: int) -> int:
    """Prozentwert, kaufmännisch gerundet (0.5 → aufrunden), begrenzt auf 0..100."""
    if total_slots <= 0:
        return 0
    pct = math.floor(100 * used_slots / total_slots + 0.5)
    return max(0, min(100, pct))


def annotate_utilization(
    classrooms: list[Classroom],
    items: list[ScheduleItem],
    time_grid: TimeGridConfig,
) -> list[Classroom]:
    """Gibt neue Raum-Objekte mit berechneter Auslastung zurück.

    Die übergebenen Räume bleiben unverändert.
    """
    used = Counter(item.classroom_id for item in items)
    total = time_grid.total_slots
    return [
        room.model_copy(update={"usage_percentage": usage_percentage(used[room.id], total)})
        for room in classrooms
    ]
