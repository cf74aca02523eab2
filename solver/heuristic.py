"""Deterministischer Greedy-Planer (ohne Backtracking).

Ablauf pro Klasse (in Eingabereihenfolge):
  - Räume mit ausreichender Kapazität, aufsteigend nach Kapazität
    (engster Raum zuerst, große Räume bleiben für große Klassen frei)
  - Tage in fester Reihenfolge, höchstens eine Sitzung pro Klasse und Tag
  - Frühester gemeinsamer freier Slot von Lehrkraft und Raum

Die Slot-Verwaltung lebt nur innerhalb eines generate()-Aufrufs.
"""

import logging
from typing import Optional

from config.defaults import default_time_grid
from config.schema import TimeGridConfig
from models.classroom import Classroom
from models.schedule_item import ScheduleItem, make_item_id
from models.school_class import SchoolClass
from models.teacher import Teacher

logger = logging.getLogger(__name__)

# entity_id -> day -> noch freie Beginn-Uhrzeiten (in Raster-Reihenfolge)
OpenSlots = dict[str, dict[str, list[str]]]


class HeuristicGenerator:
    """Greedy-Planer: frühester gemeinsamer Slot, engster passender Raum.

    Verwendung:
        generator = HeuristicGenerator(time_grid)
        items = generator.generate(teachers, classes, classrooms)
    """

    def __init__(self, time_grid: Optional[TimeGridConfig] = None) -> None:
        self.time_grid = time_grid or default_time_grid()

    # ── Slot-Verwaltung ───────────────────────────────────────────────────────

    def _teacher_open_slots(self, teachers: list[Teacher]) -> OpenSlots:
        """Volles Raster für verfügbare Tage, leer für alle anderen."""
        tg = self.time_grid
        return {
            t.id: {
                day: list(tg.start_times) if t.is_available(day) else []
                for day in tg.days
            }
            for t in teachers
        }

    def _classroom_open_slots(self, classrooms: list[Classroom]) -> OpenSlots:
        tg = self.time_grid
        return {
            r.id: {day: list(tg.start_times) for day in tg.days}
            for r in classrooms
        }

    # ── Hauptlauf ─────────────────────────────────────────────────────────────

    def generate(
        self,
        teachers: list[Teacher],
        classes: list[SchoolClass],
        classrooms: list[Classroom],
    ) -> list[ScheduleItem]:
        """Erzeugt einen konfliktfreien Wochenplan (ggf. mit Fehlstunden)."""
        teacher_map = {t.id: t for t in teachers}
        teacher_slots = self._teacher_open_slots(teachers)
        room_slots = self._classroom_open_slots(classrooms)

        items: list[ScheduleItem] = []
        for cls in classes:
            teacher = teacher_map.get(cls.teacher_id)
            if teacher is None:
                logger.warning(
                    f"Klasse {cls.id}: Lehrkraft {cls.teacher_id} unbekannt – übersprungen"
                )
                continue

            # sorted() ist stabil: gleiche Kapazität behält Eingabereihenfolge
            candidates = sorted(
                (r for r in classrooms if r.fits(cls.students)),
                key=lambda r: r.capacity,
            )
            if not candidates:
                logger.info(
                    f"Klasse {cls.id}: kein Raum mit ≥ {cls.students} Plätzen"
                )
                continue

            placed = self._place_class(
                cls, teacher, candidates, teacher_slots[teacher.id], room_slots
            )
            items.extend(placed)
            if len(placed) < cls.hours:
                logger.info(
                    f"Klasse {cls.id}: {len(placed)}/{cls.hours} Sitzungen eingeplant"
                )

        logger.info(f"Heuristik: {len(items)} Sitzungen für {len(classes)} Klassen")
        return items

    def _place_class(
        self,
        cls: SchoolClass,
        teacher: Teacher,
        candidates: list[Classroom],
        teacher_days: dict[str, list[str]],
        room_slots: OpenSlots,
    ) -> list[ScheduleItem]:
        """Plant bis zu cls.hours Sitzungen, höchstens eine pro Tag."""
        placed: list[ScheduleItem] = []
        for day in self.time_grid.days:
            if len(placed) >= cls.hours:
                break
            if not teacher_days[day]:
                continue

            for room in candidates:
                room_day = room_slots[room.id][day]
                common = [t for t in teacher_days[day] if t in room_day]
                if not common:
                    continue

                # Listen bleiben in Raster-Reihenfolge → common[0] ist der früheste
                start_time = common[0]
                placed.append(self._make_item(cls, teacher, room, day, start_time))
                teacher_days[day].remove(start_time)
                room_day.remove(start_time)
                break

        return placed

    def _make_item(
        self,
        cls: SchoolClass,
        teacher: Teacher,
        room: Classroom,
        day: str,
        start_time: str,
    ) -> ScheduleItem:
        return ScheduleItem(
            id=make_item_id(cls.id, day, start_time),
            class_id=cls.id,
            class_name=cls.name,
            subject=cls.subject,
            teacher_name=teacher.name,
            day=day,
            start_time=start_time,
            end_time=self.time_grid.end_time_for(start_time),
            classroom_id=room.id,
            classroom_name=room.name,
        )
