"""Beispieldaten-Generator für den Wochenplaner.

Erzeugt reproduzierbare Eingaben (Seed) mit absichtlichen Engpässen:
  1. Eine Klasse größer als jeder normale Raum → nur der Hörsaal passt
  2. Teilzeit-Lehrkräfte mit nur 2-3 Tagen Verfügbarkeit
  3. Optional eine Klasse, die in keinen Raum passt (Fehlstunden-Demo)
"""

import random
from typing import Optional

from config.defaults import WEEKDAYS, default_classrooms
from models.classroom import Classroom
from models.schedule_request import ScheduleRequest
from models.school_class import SchoolClass
from models.teacher import Teacher

# ─── Namens-Listen ────────────────────────────────────────────────────────────

_FIRST_NAMES = [
    "Anna", "Bernd", "Christine", "Dieter", "Eva", "Franz", "Gabi", "Hans",
    "Iris", "Jürgen", "Karin", "Lena", "Markus", "Norbert", "Olga", "Peter",
]

_LAST_NAMES = [
    "Müller", "Schmidt", "Schneider", "Fischer", "Weber", "Meyer",
    "Wagner", "Becker", "Schulz", "Hoffmann", "Koch", "Bauer",
]

# ─── Fächerkombinationen (gewichtet) ─────────────────────────────────────────

_SUBJECT_COMBOS: list[tuple[list[str], int]] = [
    (["Mathematik", "Physik"], 5),
    (["Deutsch", "Geschichte"], 5),
    (["Englisch", "Französisch"], 4),
    (["Biologie", "Chemie"], 3),
    (["Informatik", "Mathematik"], 2),
    (["Kunst", "Musik"], 1),
]

_COMBO_WEIGHTS = [w for _, w in _SUBJECT_COMBOS]
_COMBO_SUBJECTS = [s for s, _ in _SUBJECT_COMBOS]


class SampleDataGenerator:
    """Generiert einen vollständigen ScheduleRequest."""

    def __init__(
        self,
        num_teachers: int = 8,
        classes_per_teacher: int = 2,
        seed: Optional[int] = None,
        include_oversized_class: bool = False,
    ) -> None:
        max_teachers = len(_FIRST_NAMES) * len(_LAST_NAMES)
        if not 1 <= num_teachers <= max_teachers:
            raise ValueError(f"num_teachers muss zwischen 1 und {max_teachers} liegen")
        self.num_teachers = num_teachers
        self.classes_per_teacher = classes_per_teacher
        self.include_oversized_class = include_oversized_class
        self.rng = random.Random(seed)

    # ─── Lehrkräfte ───────────────────────────────────────────────────────────

    def _generate_teachers(self) -> list[Teacher]:
        teachers = []
        used_names: set[str] = set()
        for i in range(1, self.num_teachers + 1):
            name = self._unique_name(used_names)
            subjects = self.rng.choices(_COMBO_SUBJECTS, weights=_COMBO_WEIGHTS, k=1)[0]
            # Jede vierte Lehrkraft ist Teilzeit mit 2-3 Tagen
            if i % 4 == 0:
                k = self.rng.randint(2, 3)
                availability = sorted(
                    self.rng.sample(WEEKDAYS, k), key=WEEKDAYS.index
                )
            else:
                availability = list(WEEKDAYS)
            teachers.append(Teacher(
                id=f"t{i}",
                name=name,
                subjects=list(subjects),
                availability=availability,
            ))
        return teachers

    def _unique_name(self, used: set[str]) -> str:
        while True:
            name = f"{self.rng.choice(_LAST_NAMES)}, {self.rng.choice(_FIRST_NAMES)}"
            if name not in used:
                used.add(name)
                return name

    # ─── Klassen ──────────────────────────────────────────────────────────────

    def _generate_classes(self, teachers: list[Teacher]) -> list[SchoolClass]:
        classes = []
        n = 1
        for teacher in teachers:
            for _ in range(self.classes_per_teacher):
                subject = self.rng.choice(teacher.subjects)
                grade = self.rng.randint(5, 10)
                label = self.rng.choice("abcd")
                classes.append(SchoolClass(
                    id=f"c{n}",
                    name=f"{subject} {grade}{label}",
                    subject=subject,
                    teacher_id=teacher.id,
                    hours=self.rng.randint(2, 4),
                    students=self.rng.randint(15, 32),
                ))
                n += 1

        # Engpass: Jahrgangsveranstaltung, passt nur in den Hörsaal
        first = teachers[0]
        classes.append(SchoolClass(
            id=f"c{n}",
            name=f"{first.subjects[0]} Jahrgang",
            subject=first.subjects[0],
            teacher_id=first.id,
            hours=2,
            students=80,
        ))
        n += 1

        if self.include_oversized_class:
            classes.append(SchoolClass(
                id=f"c{n}",
                name="Vollversammlung",
                subject=first.subjects[0],
                teacher_id=first.id,
                hours=1,
                students=500,
            ))
        return classes

    # ─── Gesamt ───────────────────────────────────────────────────────────────

    def generate(self, classrooms: Optional[list[Classroom]] = None) -> ScheduleRequest:
        """Erzeugt den vollständigen Datensatz."""
        teachers = self._generate_teachers()
        classes = self._generate_classes(teachers)
        return ScheduleRequest(
            teachers=teachers,
            classes=classes,
            classrooms=classrooms if classrooms is not None else default_classrooms(),
        )

    # ─── Ausgabe ──────────────────────────────────────────────────────────────

    def print_summary(self, data: ScheduleRequest) -> None:
        """Gibt eine Rich-Tabelle mit Übersicht der erzeugten Daten aus."""
        from rich.console import Console
        from rich.table import Table
        from rich import box

        console = Console()
        table = Table(title="Erzeugte Beispieldaten", box=box.ROUNDED)
        table.add_column("Kategorie", style="bold cyan")
        table.add_column("Anzahl", justify="right")
        table.add_column("Details")

        part_time = sum(1 for t in data.teachers if len(t.availability) < len(WEEKDAYS))
        table.add_row("Lehrkräfte", str(len(data.teachers)),
                      f"{part_time} Teilzeit")
        table.add_row("Klassen", str(len(data.classes)),
                      f"{sum(c.hours for c in data.classes)} Sitzungen/Woche")
        table.add_row("Räume", str(len(data.classrooms or [])), "")

        console.print(table)
