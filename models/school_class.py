"""Datenmodell für eine Unterrichtseinheit / Klasse (Pydantic v2)."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class SchoolClass(BaseModel):
    """Eine Klasse mit einem Fach, einer Lehrkraft und festem Wochenbedarf."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str          # "c1"
    name: str        # "Mathe 7b"
    subject: str     # "Mathematik"
    teacher_id: str  # Verweis auf Teacher.id
    hours: int       # Wochenstunden (Anzahl Sitzungen)
    students: int    # Anzahl Schüler
