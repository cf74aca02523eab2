"""Datenmodell für einen Raum (Pydantic v2)."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Classroom(BaseModel):
    """Repräsentiert einen Unterrichtsraum mit Kapazität."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str                         # "1", "PH1"
    name: str                       # "Raum 101"
    capacity: int = Field(gt=0)     # Sitzplätze
    building: Optional[str] = None
    floor: Optional[int] = None
    # Auslastung in Prozent – wird nur vom Auslastungs-Rechner gesetzt
    usage_percentage: int = Field(0, ge=0, le=100)

    def fits(self, students: int) -> bool:
        """True wenn der Raum genug Plätze für die Klasse hat."""
        return self.capacity >= students
