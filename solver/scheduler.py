"""Wochenplaner: Einstiegspunkt für einen kompletten Planungslauf.

Pipeline:
  1. Eingabe-Check (InputValidationError bei Fehlern)
  2. Kandidaten-Quelle (extern zuerst, Heuristik als Fallback)
  3. Bereinigung des Entwurfs
  4. Konflikt-Erkennung + Auflösung (erste Sitzung gewinnt)
  5. Raumauslastung + Fehlstunden

Nur InputValidationError und echte Programmfehler verlassen create_schedule().
"""

import logging
import time
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from analysis.conflicts import find_conflicts, resolve_conflicts
from analysis.input_validator import InputValidationError, validate_input
from analysis.sanitizer import sanitize_candidate
from analysis.shortfall import Shortfall, find_shortfalls
from analysis.utilization import annotate_utilization
from config.defaults import default_scheduler_config
from config.schema import SchedulerConfig
from models.classroom import Classroom
from models.schedule_item import ScheduleItem
from models.school_class import SchoolClass
from models.teacher import Teacher
from solver.candidate_source import CandidateSource, HeuristicCandidateSource

logger = logging.getLogger(__name__)


# ─── Ergebnis-Modell ──────────────────────────────────────────────────────────

class ScheduleResult(BaseModel):
    """Konfliktfreier Wochenplan plus Raumauslastung und Hinweise."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    schedule_items: list[ScheduleItem]
    classrooms: list[Classroom]
    warnings: list[str] = []
    shortfalls: list[Shortfall] = []
    source: str = "heuristic"
    solve_time_seconds: float = 0.0

    @property
    def is_empty(self) -> bool:
        """True wenn keine einzige Sitzung eingeplant werden konnte."""
        return not self.schedule_items

    def get_class_schedule(self, class_id: str) -> list[ScheduleItem]:
        """Alle Sitzungen einer bestimmten Klasse."""
        return [i for i in self.schedule_items if i.class_id == class_id]

    def get_teacher_schedule(self, teacher_name: str) -> list[ScheduleItem]:
        """Alle Sitzungen einer bestimmten Lehrkraft."""
        return [i for i in self.schedule_items if i.teacher_name == teacher_name]

    def get_classroom_schedule(self, classroom_id: str) -> list[ScheduleItem]:
        """Alle Sitzungen in einem bestimmten Raum."""
        return [i for i in self.schedule_items if i.classroom_id == classroom_id]

    def save_json(self, path: Path) -> None:
        """Speichert das Ergebnis als JSON-Datei (camelCase-Felder)."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(self.model_dump_json(indent=2, by_alias=True))

    @classmethod
    def load_json(cls, path: Path) -> "ScheduleResult":
        """Lädt ein gespeichertes Ergebnis aus JSON."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Ergebnis nicht gefunden: {path}")
        with open(path, "r", encoding="utf-8") as f:
            return cls.model_validate_json(f.read())


# ─── Quellen-Auswahl ──────────────────────────────────────────────────────────

def build_candidate_source(config: SchedulerConfig) -> CandidateSource:
    """Heuristik, oder externer Dienst mit Heuristik-Fallback wenn aktiviert."""
    heuristic = HeuristicCandidateSource(config.time_grid)
    if not config.oracle.enabled:
        return heuristic

    from solver.oracle import GeminiTransport, OracleCandidateSource
    return OracleCandidateSource(
        GeminiTransport(config.oracle),
        fallback=heuristic,
        time_grid=config.time_grid,
    )


# ─── Haupt-Einstieg ───────────────────────────────────────────────────────────

def create_schedule(
    teachers: list[Teacher],
    classes: list[SchoolClass],
    classrooms: Optional[list[Classroom]] = None,
    *,
    config: Optional[SchedulerConfig] = None,
    source: Optional[CandidateSource] = None,
) -> ScheduleResult:
    """Erstellt einen konfliktfreien Wochenplan.

    Args:
        teachers: Lehrkräfte (werden nicht verändert).
        classes: Klassen in Planungsreihenfolge (werden nicht verändert).
        classrooms: Räume; None → config.default_classrooms.
        config: Planer-Konfiguration; None → Default-Konfiguration.
        source: Kandidaten-Quelle; None → abhängig von config.oracle.enabled.

    Raises:
        InputValidationError: wenn Lehrkräfte oder Klassen ungültig sind.
    """
    start = time.time()
    config = config or default_scheduler_config()

    reason = validate_input(teachers, classes)
    if reason:
        logger.error(f"Eingabe ungültig: {reason}")
        raise InputValidationError(reason)

    rooms = list(classrooms) if classrooms is not None else list(config.default_classrooms)
    source = source or build_candidate_source(config)
    tg = config.time_grid

    candidate = source.obtain_candidate(teachers, classes, rooms)
    warnings: list[str] = []

    items, dropped = sanitize_candidate(candidate.items, teachers, classes, rooms, tg)
    if dropped:
        warnings.append(
            f"{len(dropped)} ungültige Sitzung(en) aus dem Entwurf ({candidate.source}) verworfen"
        )

    conflicts = find_conflicts(items)
    if conflicts:
        for group in conflicts:
            logger.warning(f"Konflikt: {group.description}")
        items = resolve_conflicts(items, conflicts)
        warnings.append(
            f"Entwurf enthielt {len(conflicts)} Konflikt(e), die automatisch aufgelöst wurden"
        )

    annotated = annotate_utilization(rooms, items, tg)
    if candidate.classroom_usage_hints:
        for room in annotated:
            hint = candidate.classroom_usage_hints.get(room.id)
            if hint is not None and hint != room.usage_percentage:
                logger.debug(
                    f"Raum {room.id}: Quelle meldet {hint}%, berechnet {room.usage_percentage}%"
                )

    shortfalls = find_shortfalls(classes, items)
    if not items:
        warnings.append("Kein machbarer Wochenplan – Eingaben anpassen")

    elapsed = time.time() - start
    logger.info(
        f"Wochenplan: {len(items)} Sitzungen, {len(shortfalls)} Klasse(n) mit Fehlstunden "
        f"({candidate.source}, {elapsed:.2f}s)"
    )
    return ScheduleResult(
        schedule_items=items,
        classrooms=annotated,
        warnings=warnings,
        shortfalls=shortfalls,
        source=candidate.source,
        solve_time_seconds=elapsed,
    )
