"""Datenmodell für eine Lehrkraft (Pydantic v2)."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Teacher(BaseModel):
    """Repräsentiert eine einzelne Lehrkraft.

    Leere Namen/Fächer werden hier bewusst NICHT abgelehnt – das erledigt
    der Eingabe-Check (analysis.input_validator) mit lesbarer Meldung.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str                  # "t1"
    name: str                # "Müller, Hans"
    subjects: list[str]      # Unterrichtbare Fächer, Reihenfolge bleibt erhalten
    availability: list[str]  # Verfügbare Wochentage ("Monday".."Friday")

    def is_available(self, day: str) -> bool:
        """True wenn die Lehrkraft an diesem Tag unterrichten kann."""
        return day in self.availability
