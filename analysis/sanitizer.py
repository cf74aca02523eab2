"""Bereinigung ungeprüfter Entwürfe vor der Konfliktprüfung.

Entfernt Sitzungen, die eine Invariante des Wochenplans verletzen, die
nicht schon die Konfliktauflösung abdeckt:
  - unbekannte Klasse / unbekannter Raum
  - Tag oder Beginn außerhalb des Zeitrasters
  - Tag außerhalb der Verfügbarkeit der Lehrkraft
  - Raum zu klein für die Klasse
  - doppelte Sitzungs-ID (gleiche Klasse, gleicher Slot)
  - mehr Sitzungen als Wochenstunden (die ersten gewinnen)

Überlebende Sitzungen werden mit den maßgeblichen Stammdaten neu
aufgebaut (Namen, Lehrkraft, Ende, ID); Angaben der Quelle zählen nicht.
"""

import logging
from collections import Counter

from config.schema import TimeGridConfig
from models.classroom import Classroom
from models.schedule_item import ScheduleItem, make_item_id
from models.school_class import SchoolClass
from models.teacher import Teacher

logger = logging.getLogger(__name__)


def sanitize_candidate(
    items: list[ScheduleItem],
    teachers: list[Teacher],
    classes: list[SchoolClass],
    classrooms: list[Classroom],
    time_grid: TimeGridConfig,
) -> tuple[list[ScheduleItem], list[str]]:
    """Filtert und normalisiert einen Entwurf.

    Returns:
        (bereinigte Sitzungen, Liste der Gründe für entfernte Sitzungen)
    """
    teacher_map = {t.id: t for t in teachers}
    class_map = {c.id: c for c in classes}
    room_map = {r.id: r for r in classrooms}
    days = set(time_grid.days)
    start_times = set(time_grid.start_times)

    kept: list[ScheduleItem] = []
    dropped: list[str] = []
    seen_ids: set[str] = set()
    per_class: Counter = Counter()

    for item in items:
        cls = class_map.get(item.class_id)
        if cls is None:
            dropped.append(f"{item.id}: unbekannte Klasse {item.class_id}")
            continue
        room = room_map.get(item.classroom_id)
        if room is None:
            dropped.append(f"{item.id}: unbekannter Raum {item.classroom_id}")
            continue
        if item.day not in days or item.start_time not in start_times:
            dropped.append(
                f"{item.id}: Slot {item.day} {item.start_time} nicht im Zeitraster"
            )
            continue
        teacher = teacher_map.get(cls.teacher_id)
        if teacher is None or not teacher.is_available(item.day):
            dropped.append(
                f"{item.id}: Lehrkraft von {cls.name} am {item.day} nicht verfügbar"
            )
            continue
        if not room.fits(cls.students):
            dropped.append(
                f"{item.id}: Raum {room.name} ({room.capacity}) zu klein "
                f"für {cls.name} ({cls.students})"
            )
            continue

        item_id = make_item_id(cls.id, item.day, item.start_time)
        if item_id in seen_ids:
            dropped.append(f"{item_id}: doppelte Sitzung")
            continue
        if per_class[cls.id] >= cls.hours:
            dropped.append(f"{item_id}: mehr als {cls.hours} Wochenstunden")
            continue

        seen_ids.add(item_id)
        per_class[cls.id] += 1
        kept.append(ScheduleItem(
            id=item_id,
            class_id=cls.id,
            class_name=cls.name,
            subject=cls.subject,
            teacher_name=teacher.name,
            day=item.day,
            start_time=item.start_time,
            end_time=time_grid.end_time_for(item.start_time),
            classroom_id=room.id,
            classroom_name=room.name,
        ))

    for reason in dropped:
        logger.warning(f"Sitzung verworfen: {reason}")
    return kept, dropped
