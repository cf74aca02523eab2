"""ScheduleRequest: Eingabedatensatz für einen Planungslauf (Pydantic v2)."""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel

from models.teacher import Teacher
from models.school_class import SchoolClass
from models.classroom import Classroom


class ScheduleRequest(BaseModel):
    """Lehrkräfte, Klassen und (optional) Räume für eine Woche."""

    teachers: list[Teacher]
    classes: list[SchoolClass]
    # None = Standard-Räume aus der Konfiguration verwenden
    classrooms: Optional[list[Classroom]] = None

    def summary(self) -> str:
        """Kurze Übersicht über den Datensatz."""
        total_hours = sum(c.hours for c in self.classes)
        lines = [
            f"Lehrkräfte: {len(self.teachers)}",
            f"Klassen: {len(self.classes)} ({total_hours} Sitzungen/Woche)",
            f"Räume: {len(self.classrooms)}" if self.classrooms is not None
            else "Räume: Standard-Räume aus Konfiguration",
        ]
        return "\n".join(lines)

    # ─── Persistenz ────────────────────────────────────────────────────────

    def save_json(self, path: Path) -> None:
        """Speichert den Datensatz als JSON-Datei (camelCase-Felder)."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(self.model_dump_json(indent=2, by_alias=True, exclude_none=True))

    @classmethod
    def load_json(cls, path: Path) -> "ScheduleRequest":
        """Lädt einen Datensatz aus einer JSON-Datei."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"JSON-Datei nicht gefunden: {path}")
        with open(path, "r", encoding="utf-8") as f:
            return cls.model_validate_json(f.read())
