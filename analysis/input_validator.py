"""Eingabe-Check vor jedem Planungslauf.

Lehnt fehlerhafte Lehrkräfte/Klassen ab, bevor irgendeine Zuweisung
versucht wird. Der erste gefundene Fehler gewinnt (fail fast).
"""

from typing import Optional

from models.teacher import Teacher
from models.school_class import SchoolClass


class InputValidationError(ValueError):
    """Ungültige Eingabedaten. Der Lauf wird abgebrochen."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


def validate_teachers(teachers: list[Teacher]) -> Optional[str]:
    """Prüft die Lehrkräfte. Gibt die Fehlermeldung oder None zurück."""
    if not teachers:
        return "Keine Lehrkräfte angegeben."

    for teacher in teachers:
        if not teacher.name.strip():
            return f"Lehrkraft '{teacher.id}' hat keinen Namen."

        if not teacher.subjects or any(not s.strip() for s in teacher.subjects):
            return (
                f"Lehrkraft {teacher.name} braucht mindestens ein Fach "
                f"und darf keine leeren Fächer haben."
            )

        if not teacher.availability:
            return f"Lehrkraft {teacher.name} hat keine verfügbaren Tage."

    return None


def validate_classes(
    classes: list[SchoolClass], teachers: list[Teacher]
) -> Optional[str]:
    """Prüft die Klassen gegen die Lehrkräfte. Gibt Fehlermeldung oder None zurück."""
    if not classes:
        return "Keine Klassen angegeben."

    teacher_ids = {t.id for t in teachers}
    for cls in classes:
        if not cls.name.strip():
            return f"Klasse '{cls.id}' hat keinen Namen."

        if not cls.subject.strip():
            return f"Klasse {cls.name} hat kein Fach."

        if cls.hours <= 0:
            return f"Klasse {cls.name} hat ungültige Wochenstunden: {cls.hours}"

        if cls.students <= 0:
            return f"Klasse {cls.name} hat ungültige Schülerzahl: {cls.students}"

        if cls.teacher_id not in teacher_ids:
            return (
                f"Klasse {cls.name} verweist auf unbekannte Lehrkraft: "
                f"{cls.teacher_id}"
            )

    return None


def validate_input(
    teachers: list[Teacher], classes: list[SchoolClass]
) -> Optional[str]:
    """Führt alle Eingabe-Checks in fester Reihenfolge aus.

    Returns:
        Lesbare Fehlermeldung des ersten Problems oder None wenn alles ok ist.
    """
    return validate_teachers(teachers) or validate_classes(classes, teachers)
