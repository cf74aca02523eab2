"""Fehlstunden: Klassen mit weniger Sitzungen als Wochenstunden."""

from collections import Counter

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from models.schedule_item import ScheduleItem
from models.school_class import SchoolClass


class Shortfall(BaseModel):
    """Eine Klasse, die nicht vollständig eingeplant werden konnte."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    class_id: str
    class_name: str
    required_hours: int
    scheduled_hours: int

    @property
    def missing_hours(self) -> int:
        return self.required_hours - self.scheduled_hours


def find_shortfalls(
    classes: list[SchoolClass], items: list[ScheduleItem]
) -> list[Shortfall]:
    """Vergleicht Wochenstunden mit den tatsächlich eingeplanten Sitzungen."""
    scheduled = Counter(item.class_id for item in items)
    return [
        Shortfall(
            class_id=cls.id,
            class_name=cls.name,
            required_hours=cls.hours,
            scheduled_hours=scheduled[cls.id],
        )
        for cls in classes
        if scheduled[cls.id] < cls.hours
    ]
