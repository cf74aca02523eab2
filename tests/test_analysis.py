"""Tests für Eingabe-Check, Konflikte, Bereinigung, Auslastung und Fehlstunden."""

import pytest

from analysis.conflicts import ConflictGroup, find_conflicts, resolve_conflicts
from analysis.input_validator import InputValidationError, validate_input
from analysis.sanitizer import sanitize_candidate
from analysis.shortfall import find_shortfalls
from analysis.utilization import annotate_utilization, usage_percentage
from config.defaults import default_time_grid
from models.classroom import Classroom
from models.schedule_item import ScheduleItem, make_item_id
from models.school_class import SchoolClass
from models.teacher import Teacher

ALL_DAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]


# ─── Hilfsfunktionen ──────────────────────────────────────────────────────────

def make_teacher(tid: str = "t1", name: str = "Müller, Anna", **kw) -> Teacher:
    data = dict(id=tid, name=name, subjects=["Mathematik"], availability=list(ALL_DAYS))
    data.update(kw)
    return Teacher(**data)


def make_class(cid: str = "c1", teacher_id: str = "t1", **kw) -> SchoolClass:
    data = dict(id=cid, name=f"Klasse {cid}", subject="Mathematik",
                teacher_id=teacher_id, hours=2, students=20)
    data.update(kw)
    return SchoolClass(**data)


def make_item(
    class_id: str = "c1",
    teacher_name: str = "Müller, Anna",
    day: str = "Monday",
    start_time: str = "08:00",
    classroom_id: str = "r1",
    end_time: str = "09:00",
) -> ScheduleItem:
    return ScheduleItem(
        id=make_item_id(class_id, day, start_time),
        class_id=class_id,
        class_name=f"Klasse {class_id}",
        subject="Mathematik",
        teacher_name=teacher_name,
        day=day,
        start_time=start_time,
        end_time=end_time,
        classroom_id=classroom_id,
        classroom_name=f"Raum {classroom_id}",
    )


# ─── EINGABE-CHECK ────────────────────────────────────────────────────────────

class TestInputValidator:

    def test_valid_input(self):
        assert validate_input([make_teacher()], [make_class()]) is None

    def test_no_teachers(self):
        reason = validate_input([], [make_class()])
        assert reason is not None
        assert "Keine Lehrkräfte" in reason

    def test_blank_teacher_name(self):
        reason = validate_input([make_teacher(name="   ")], [make_class()])
        assert "keinen Namen" in reason

    def test_teacher_without_subjects(self):
        reason = validate_input([make_teacher(subjects=[])], [make_class()])
        assert "Fach" in reason

    def test_teacher_with_blank_subject(self):
        reason = validate_input([make_teacher(subjects=["Mathematik", " "])], [make_class()])
        assert "Fach" in reason

    def test_teacher_without_availability_names_teacher(self):
        teacher = make_teacher(name="Schmidt, Hans", availability=[])
        reason = validate_input([teacher], [make_class()])
        assert "Schmidt, Hans" in reason
        assert "keine verfügbaren Tage" in reason

    def test_no_classes(self):
        reason = validate_input([make_teacher()], [])
        assert "Keine Klassen" in reason

    def test_class_blank_name(self):
        reason = validate_input([make_teacher()], [make_class(name="")])
        assert "keinen Namen" in reason

    def test_class_blank_subject(self):
        reason = validate_input([make_teacher()], [make_class(subject=" ")])
        assert "kein Fach" in reason

    @pytest.mark.parametrize("field,value,text", [
        ("hours", 0, "Wochenstunden: 0"),
        ("hours", -1, "Wochenstunden: -1"),
        ("students", 0, "Schülerzahl: 0"),
    ])
    def test_class_invalid_numbers(self, field, value, text):
        reason = validate_input([make_teacher()], [make_class(**{field: value})])
        assert text in reason

    def test_unknown_teacher_reference(self):
        reason = validate_input([make_teacher()], [make_class(teacher_id="t99")])
        assert "t99" in reason

    def test_teachers_checked_before_classes(self):
        """Erster Fehler gewinnt: Lehrkraft-Fehler vor Klassen-Fehler."""
        reason = validate_input([make_teacher(availability=[])], [])
        assert "keine verfügbaren Tage" in reason

    def test_input_is_not_modified(self):
        teachers = [make_teacher()]
        classes = [make_class()]
        before = [t.model_dump() for t in teachers], [c.model_dump() for c in classes]
        validate_input(teachers, classes)
        after = [t.model_dump() for t in teachers], [c.model_dump() for c in classes]
        assert before == after

    def test_error_carries_reason(self):
        err = InputValidationError("Keine Klassen angegeben.")
        assert err.reason == "Keine Klassen angegeben."
        assert str(err) == "Keine Klassen angegeben."
        assert isinstance(err, ValueError)


# ─── KONFLIKTE ────────────────────────────────────────────────────────────────

class TestConflictDetector:

    def test_no_conflicts(self):
        items = [
            make_item("c1", day="Monday"),
            make_item("c2", day="Tuesday"),
        ]
        assert find_conflicts(items) == []

    def test_teacher_conflict_group(self):
        items = [
            make_item("c1", classroom_id="r1"),
            make_item("c2", classroom_id="r2"),
        ]
        conflicts = find_conflicts(items)
        assert len(conflicts) == 1
        group = conflicts[0]
        assert group.kind == "teacher"
        assert group.entity == "Müller, Anna"
        assert len(group.items) == 2
        assert [i.class_id for i in group.items] == ["c1", "c2"]

    def test_classroom_conflict_group(self):
        items = [
            make_item("c1", teacher_name="A"),
            make_item("c2", teacher_name="B"),
        ]
        conflicts = find_conflicts(items)
        assert len(conflicts) == 1
        assert conflicts[0].kind == "classroom"
        assert conflicts[0].entity == "r1"

    def test_teacher_groups_before_classroom_groups(self):
        items = [
            make_item("c1", teacher_name="A", classroom_id="r1"),
            make_item("c2", teacher_name="B", classroom_id="r1"),
            make_item("c3", teacher_name="C", classroom_id="r2", day="Friday"),
            make_item("c4", teacher_name="C", classroom_id="r3", day="Friday"),
        ]
        kinds = [g.kind for g in find_conflicts(items)]
        assert kinds == ["teacher", "classroom"]

    def test_same_teacher_different_times_no_conflict(self):
        items = [
            make_item("c1", start_time="08:00"),
            make_item("c2", start_time="09:00", classroom_id="r2"),
        ]
        assert find_conflicts(items) == []

    def test_does_not_mutate_input(self):
        items = [make_item("c1"), make_item("c2")]
        snapshot = list(items)
        find_conflicts(items)
        assert items == snapshot

    def test_description_mentions_resource(self):
        group = find_conflicts([make_item("c1"), make_item("c2", classroom_id="r2")])[0]
        assert "Lehrkraft Müller, Anna" in group.description
        assert "Monday" in group.description


class TestConflictResolver:

    def test_forced_conflict_keeps_first(self):
        first = make_item("c1", classroom_id="r1")
        second = make_item("c2", classroom_id="r2")
        conflicts = find_conflicts([first, second])
        assert len(conflicts) == 1 and conflicts[0].kind == "teacher"
        assert resolve_conflicts([first, second], conflicts) == [first]

    def test_preserves_order_of_survivors(self):
        items = [
            make_item("c1", teacher_name="A", day="Monday"),
            make_item("c2", teacher_name="B", day="Tuesday", classroom_id="r2"),
            make_item("c3", teacher_name="A", day="Monday", classroom_id="r3"),
            make_item("c4", teacher_name="C", day="Wednesday"),
        ]
        resolved = resolve_conflicts(items, find_conflicts(items))
        assert [i.class_id for i in resolved] == ["c1", "c2", "c4"]

    def test_three_way_conflict(self):
        items = [make_item(f"c{i}", classroom_id=f"r{i}") for i in range(3)]
        resolved = resolve_conflicts(items, find_conflicts(items))
        assert [i.class_id for i in resolved] == ["c0"]

    def test_idempotent(self):
        items = [
            make_item("c1", teacher_name="A", classroom_id="r1"),
            make_item("c2", teacher_name="A", classroom_id="r2"),
            make_item("c3", teacher_name="B", classroom_id="r1"),
            make_item("c4", teacher_name="C", classroom_id="r1", day="Friday"),
        ]
        once = resolve_conflicts(items, find_conflicts(items))
        assert find_conflicts(once) == []
        twice = resolve_conflicts(once, find_conflicts(once))
        assert twice == once

    def test_no_conflicts_returns_equal_list(self):
        items = [make_item("c1"), make_item("c2", day="Tuesday")]
        assert resolve_conflicts(items, []) == items

    def test_duplicate_ids_keep_first(self):
        # gleiche Klasse, gleicher Slot, verschiedene Räume → gleiche Sitzungs-ID
        items = [make_item("c1", teacher_name="A", classroom_id="r1"),
                 make_item("c1", teacher_name="A", classroom_id="r2")]
        assert items[0].id == items[1].id
        conflicts = find_conflicts(items)
        assert [(g.kind, len(g.items)) for g in conflicts] == [("teacher", 2)]
        resolved = resolve_conflicts(items, conflicts)
        assert len(resolved) == 1
        assert resolved[0] is items[0]

    def test_explicit_group(self):
        a = make_item("c1")
        b = make_item("c2", classroom_id="r2")
        group = ConflictGroup(kind="teacher", entity=a.teacher_name,
                              day=a.day, start_time=a.start_time, items=[a, b])
        assert resolve_conflicts([a, b], [group]) == [a]


# ─── BEREINIGUNG ──────────────────────────────────────────────────────────────

class TestSanitizer:

    @pytest.fixture
    def setup(self):
        teachers = [
            make_teacher("t1", "Müller, Anna"),
            make_teacher("t2", "Weber, Eva", availability=["Monday"]),
        ]
        classes = [
            make_class("c1", "t1", hours=2, students=20),
            make_class("c2", "t2", hours=1, students=35),
        ]
        rooms = [
            Classroom(id="r1", name="Raum 101", capacity=30),
            Classroom(id="r2", name="Raum 201", capacity=40),
        ]
        return teachers, classes, rooms

    def sanitize(self, items, setup):
        teachers, classes, rooms = setup
        return sanitize_candidate(items, teachers, classes, rooms, default_time_grid())

    def test_valid_items_pass_unchanged(self, setup):
        items = [
            make_item("c1", day="Monday", classroom_id="r1"),
            make_item("c1", day="Tuesday", classroom_id="r1"),
        ]
        items = [i.model_copy(update={"class_name": "Klasse c1", "classroom_name": "Raum 101"})
                 for i in items]
        kept, dropped = self.sanitize(items, setup)
        assert kept == items
        assert dropped == []

    def test_rebuilds_derived_fields(self, setup):
        raw = ScheduleItem(
            id="x", class_id="c1", class_name="falsch", subject="falsch",
            teacher_name="falsch", day="Monday", start_time="16:00",
            end_time="23:00", classroom_id="r1", classroom_name="falsch",
        )
        kept, _ = self.sanitize([raw], setup)
        assert len(kept) == 1
        item = kept[0]
        assert item.id == "c1-Monday-16:00"
        assert item.class_name == "Klasse c1"
        assert item.teacher_name == "Müller, Anna"
        assert item.end_time == "17:00"
        assert item.classroom_name == "Raum 101"

    @pytest.mark.parametrize("overrides", [
        {"class_id": "c99"},
        {"classroom_id": "r99"},
        {"day": "Saturday"},
        {"start_time": "12:00"},
    ])
    def test_drops_invalid_references(self, setup, overrides):
        kept, dropped = self.sanitize([make_item(**overrides)], setup)
        assert kept == []
        assert len(dropped) == 1

    def test_drops_unavailable_day(self, setup):
        item = make_item("c2", teacher_name="Weber, Eva", day="Tuesday", classroom_id="r2")
        kept, dropped = self.sanitize([item], setup)
        assert kept == []
        assert "nicht verfügbar" in dropped[0]

    def test_drops_too_small_room(self, setup):
        item = make_item("c2", teacher_name="Weber, Eva", day="Monday", classroom_id="r1")
        kept, dropped = self.sanitize([item], setup)
        assert kept == []
        assert "zu klein" in dropped[0]

    def test_drops_sessions_beyond_hours(self, setup):
        items = [
            make_item("c1", day="Monday"),
            make_item("c1", day="Tuesday"),
            make_item("c1", day="Wednesday"),
        ]
        kept, dropped = self.sanitize(items, setup)
        assert [i.day for i in kept] == ["Monday", "Tuesday"]
        assert len(dropped) == 1

    def test_drops_duplicate_sessions(self, setup):
        items = [make_item("c1"), make_item("c1", classroom_id="r2")]
        kept, dropped = self.sanitize(items, setup)
        assert len(kept) == 1
        assert kept[0].classroom_id == "r1"
        assert "doppelte" in dropped[0]


# ─── AUSLASTUNG ───────────────────────────────────────────────────────────────

class TestUtilization:

    @pytest.mark.parametrize("used,total,expected", [
        (0, 40, 0),
        (2, 40, 5),
        (1, 40, 3),     # 2.5 → aufrunden
        (40, 40, 100),
        (50, 40, 100),  # begrenzt
        (3, 0, 0),
    ])
    def test_usage_percentage(self, used, total, expected):
        assert usage_percentage(used, total) == expected

    def test_annotate_counts_per_room(self):
        rooms = [
            Classroom(id="r1", name="A", capacity=30, usage_percentage=77),
            Classroom(id="r2", name="B", capacity=30),
        ]
        items = [make_item("c1", day=d) for d in ALL_DAYS[:4]]
        annotated = annotate_utilization(rooms, items, default_time_grid())
        assert [r.usage_percentage for r in annotated] == [10, 0]

    def test_annotate_does_not_mutate_input(self):
        rooms = [Classroom(id="r1", name="A", capacity=30, usage_percentage=50)]
        annotated = annotate_utilization(rooms, [], default_time_grid())
        assert rooms[0].usage_percentage == 50
        assert annotated[0].usage_percentage == 0
        assert annotated[0] is not rooms[0]


# ─── FEHLSTUNDEN ──────────────────────────────────────────────────────────────

class TestShortfall:

    def test_complete_class_has_no_shortfall(self):
        classes = [make_class("c1", hours=2)]
        items = [make_item("c1", day="Monday"), make_item("c1", day="Tuesday")]
        assert find_shortfalls(classes, items) == []

    def test_partial_and_missing_classes(self):
        classes = [make_class("c1", hours=3), make_class("c2", hours=1)]
        items = [make_item("c1", day="Monday")]
        shortfalls = find_shortfalls(classes, items)
        assert [(s.class_id, s.scheduled_hours, s.missing_hours) for s in shortfalls] == [
            ("c1", 1, 2),
            ("c2", 0, 1),
        ]
