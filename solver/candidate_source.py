"""Kandidaten-Quellen: liefern einen (ungeprüften) Wochenplan-Entwurf.

Jede Quelle implementiert genau eine Methode, obtain_candidate(). Die
Heuristik ist immer verfügbar; externe Quellen werden als Dekorator um
eine Fallback-Quelle gelegt (siehe solver.oracle).
"""

from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel

from config.schema import TimeGridConfig
from models.classroom import Classroom
from models.schedule_item import ScheduleItem
from models.school_class import SchoolClass
from models.teacher import Teacher
from solver.heuristic import HeuristicGenerator


class CandidateSourceFailure(RuntimeError):
    """Kandidaten-Quelle konnte keinen verwertbaren Entwurf liefern."""


class Candidate(BaseModel):
    """Roh-Entwurf einer Quelle, noch nicht bereinigt."""

    items: list[ScheduleItem]
    # Raum-ID → Auslastung laut Quelle (nur informativ, wird neu berechnet)
    classroom_usage_hints: Optional[dict[str, int]] = None
    source: str  # "heuristic" / "oracle"


class CandidateSource(ABC):
    """Schnittstelle aller Kandidaten-Quellen."""

    @abstractmethod
    def obtain_candidate(
        self,
        teachers: list[Teacher],
        classes: list[SchoolClass],
        classrooms: list[Classroom],
    ) -> Candidate:
        """Liefert einen Entwurf für die gegebenen Eingaben."""


class HeuristicCandidateSource(CandidateSource):
    """Standard-Quelle: deterministischer Greedy-Planer."""

    def __init__(self, time_grid: Optional[TimeGridConfig] = None) -> None:
        self.generator = HeuristicGenerator(time_grid)

    def obtain_candidate(
        self,
        teachers: list[Teacher],
        classes: list[SchoolClass],
        classrooms: list[Classroom],
    ) -> Candidate:
        items = self.generator.generate(teachers, classes, classrooms)
        return Candidate(items=items, source="heuristic")
