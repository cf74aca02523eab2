"""Datenmodell für eine einzelne eingeplante Sitzung (Pydantic v2)."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from models.timeslot import TimeSlot


def make_item_id(class_id: str, day: str, start_time: str) -> str:
    """Abgeleitete ID einer Sitzung: Klasse + Tag + Beginn."""
    return f"{class_id}-{day}-{start_time}"


class ScheduleItem(BaseModel):
    """Eine Sitzung im Wochenplan. Nach dem Erzeugen unveränderlich.

    Alle Felder sind flache Strings, damit auch Kandidaten aus externen
    Quellen (JSON mit Zahlen-IDs) ohne Sonderbehandlung eingelesen werden.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        coerce_numbers_to_str=True,
    )

    id: str
    class_id: str
    class_name: str
    subject: str
    teacher_name: str
    day: str             # "Monday".."Friday"
    start_time: str      # "HH:MM"
    end_time: str        # "HH:MM"
    classroom_id: str
    classroom_name: str

    @property
    def slot(self) -> TimeSlot:
        return TimeSlot(self.day, self.start_time)
