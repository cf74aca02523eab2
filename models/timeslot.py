"""Datenmodell für einen Zeitslot im Wochenraster."""

from dataclasses import dataclass


@dataclass(frozen=True)
class TimeSlot:
    """Repräsentiert einen einzelnen Slot im Wochenraster.

    Kombination aus Wochentag und Beginn-Uhrzeit.
    Immutable (frozen=True) damit es als Dict-Key / Set-Element nutzbar ist.
    """

    # Wochentag ("Monday".."Friday")
    day: str
    # Beginn im Format "HH:MM"
    start_time: str

    @property
    def slot_id(self) -> str:
        """Eindeutiger String-Bezeichner (z.B. "Monday-08:00")."""
        return f"{self.day}-{self.start_time}"

    @property
    def day_short(self) -> str:
        """Abgekürzter Tagesname."""
        return self.day[:2]

    def __repr__(self) -> str:
        return f"TimeSlot({self.day}, {self.start_time})"

    def __str__(self) -> str:
        return f"{self.day_short} {self.start_time}"
