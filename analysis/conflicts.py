"""Konflikt-Erkennung und -Auflösung für Wochenplan-Entwürfe.

Ein Konflikt ist eine Gruppe von Sitzungen, die dieselbe Lehrkraft
(per Name) bzw. denselben Raum (per ID) zur selben Zeit belegen.
Die Auflösung ist reihenfolgeabhängig: die zuerst gesehene Sitzung bleibt.
"""

from collections import defaultdict
from typing import Literal

from pydantic import BaseModel

from models.schedule_item import ScheduleItem


class ConflictGroup(BaseModel):
    """Alle Sitzungen, die sich eine Ressource zur selben Zeit teilen."""

    kind: Literal["teacher", "classroom"]
    entity: str          # teacher_name bzw. classroom_id
    day: str
    start_time: str
    items: list[ScheduleItem]

    @property
    def description(self) -> str:
        label = "Lehrkraft" if self.kind == "teacher" else "Raum"
        classes = ", ".join(i.class_name for i in self.items)
        return (
            f"{label} {self.entity} am {self.day} um {self.start_time} "
            f"mehrfach belegt: {classes}"
        )


def _group_by(
    items: list[ScheduleItem], kind: Literal["teacher", "classroom"]
) -> list[ConflictGroup]:
    """Gruppiert nach (Ressource, Tag, Beginn); dict behält Einfügereihenfolge."""
    seen: dict[tuple[str, str, str], list[ScheduleItem]] = defaultdict(list)
    for item in items:
        entity = item.teacher_name if kind == "teacher" else item.classroom_id
        seen[(entity, item.day, item.start_time)].append(item)

    return [
        ConflictGroup(kind=kind, entity=entity, day=day, start_time=start, items=group)
        for (entity, day, start), group in seen.items()
        if len(group) > 1
    ]


def find_conflicts(items: list[ScheduleItem]) -> list[ConflictGroup]:
    """Findet Doppelbelegungen: erst Lehrkräfte, dann Räume. Verändert nichts."""
    return _group_by(items, "teacher") + _group_by(items, "classroom")


def resolve_conflicts(
    items: list[ScheduleItem], conflicts: list[ConflictGroup]
) -> list[ScheduleItem]:
    """Behält pro Konfliktgruppe die erste Sitzung, entfernt alle weiteren.

    Die relative Reihenfolge der verbleibenden Sitzungen bleibt erhalten.
    """
    # Objekt-Identität statt Sitzungs-ID: ungeprüfte Entwürfe können IDs doppelt enthalten
    to_remove: set[int] = set()
    for group in conflicts:
        for item in group.items[1:]:
            to_remove.add(id(item))
    return [item for item in items if id(item) not in to_remove]
