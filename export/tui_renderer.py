"""Terminal-Anzeige des Wochenplans (Rich).

Wird vom CLI-Befehl solve verwendet.
"""

from typing import Callable, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from config.schema import TimeGridConfig
from models.schedule_item import ScheduleItem
from solver.scheduler import ScheduleResult


def _minutes(hhmm: str) -> int:
    hours, minutes = hhmm.split(":")
    return int(hours) * 60 + int(minutes)


def _pause_after(time_grid: TimeGridConfig) -> set[str]:
    """Beginn-Uhrzeiten, nach denen eine Pause (Lücke > 60 min) folgt."""
    starts = time_grid.start_times
    return {
        a for a, b in zip(starts, starts[1:])
        if _minutes(b) - _minutes(a) > 60
    }


def render_week_rows(
    items: list[ScheduleItem],
    time_grid: TimeGridConfig,
    cell: Callable[[ScheduleItem], str],
) -> list[list[str]]:
    """Gibt Tabellenzeilen für eine Wochenansicht zurück.

    Jede Zeile: [Uhrzeit, Tag1, Tag2, ...]. Pausen werden als eigene
    Zeile mit '─' in allen Tagen eingefügt. Mehrere Sitzungen im selben
    Slot werden untereinander aufgeführt.
    """
    slot_map: dict[tuple[str, str], list[ScheduleItem]] = {}
    for item in items:
        slot_map.setdefault((item.day, item.start_time), []).append(item)

    pauses = _pause_after(time_grid)
    rows: list[list[str]] = []
    for start in time_grid.start_times:
        cells = [f"{start}–{time_grid.end_time_for(start)}"]
        for day in time_grid.days:
            entries = slot_map.get((day, start))
            cells.append("\n".join(cell(e) for e in entries) if entries else "—")
        rows.append(cells)
        if start in pauses:
            rows.append(["Pause"] + ["─" * 8] * len(time_grid.days))
    return rows


def render_classroom_rows(
    classroom_id: str, result: ScheduleResult, time_grid: TimeGridConfig
) -> list[list[str]]:
    """Wochenansicht eines Raums: Klasse + Lehrkraft pro Slot."""
    return render_week_rows(
        result.get_classroom_schedule(classroom_id),
        time_grid,
        lambda e: f"{e.class_name}\n{e.teacher_name}",
    )


def render_teacher_rows(
    teacher_name: str, result: ScheduleResult, time_grid: TimeGridConfig
) -> list[list[str]]:
    """Wochenansicht einer Lehrkraft: Klasse + Raum pro Slot."""
    return render_week_rows(
        result.get_teacher_schedule(teacher_name),
        time_grid,
        lambda e: f"{e.class_name}\n{e.classroom_name}",
    )


def print_result(
    result: ScheduleResult,
    time_grid: TimeGridConfig,
    console: Optional[Console] = None,
    show_rooms: bool = True,
) -> None:
    """Gibt Ergebnis-Übersicht, Raumauslastung und Hinweise aus."""
    console = console or Console()

    if result.is_empty:
        status = "[bold red]✗ KEIN MACHBARER PLAN[/bold red]"
    elif result.shortfalls:
        status = "[bold yellow]● PLAN MIT FEHLSTUNDEN[/bold yellow]"
    else:
        status = "[bold green]✓ VOLLSTÄNDIG[/bold green]"
    lines = [
        status,
        f"Sitzungen: {len(result.schedule_items)} | Quelle: {result.source} | "
        f"Zeit: {result.solve_time_seconds:.2f}s",
    ]
    for w in result.warnings:
        lines.append(f"[yellow]• {w}[/yellow]")
    console.print(Panel("\n".join(lines), title="Wochenplan", border_style="cyan"))

    usage = Table(title="Raumauslastung", box=box.ROUNDED)
    usage.add_column("Raum", style="bold")
    usage.add_column("Kapazität", justify="right")
    usage.add_column("Sitzungen", justify="right")
    usage.add_column("Auslastung", justify="right")
    for room in result.classrooms:
        used = len(result.get_classroom_schedule(room.id))
        usage.add_row(room.name, str(room.capacity), str(used), f"{room.usage_percentage}%")
    console.print(usage)

    if result.shortfalls:
        table = Table(title="Fehlstunden", box=box.ROUNDED)
        table.add_column("Klasse", style="bold")
        table.add_column("Soll", justify="right")
        table.add_column("Ist", justify="right")
        table.add_column("Fehlt", justify="right")
        for s in result.shortfalls:
            table.add_row(s.class_name, str(s.required_hours),
                          str(s.scheduled_hours), f"[red]{s.missing_hours}[/red]")
        console.print(table)

    if not show_rooms:
        return

    for room in result.classrooms:
        if not result.get_classroom_schedule(room.id):
            continue
        table = Table(title=f"Raum {room.name}", box=box.ROUNDED, show_lines=True)
        table.add_column("Zeit")
        for day in time_grid.days:
            table.add_column(day[:2])
        for row in render_classroom_rows(room.id, result, time_grid):
            table.add_row(*row)
        console.print(table)
