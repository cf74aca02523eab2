"""Wochenplaner — Haupt-CLI.

Verwendung:
  python main.py sample -o input.json      Beispieldaten erzeugen
  python main.py validate input.json       Eingabe-Check
  python main.py solve input.json          Wochenplan berechnen
  python main.py solve input.json -o plan.json --oracle
  python main.py config init               Default-Konfiguration anlegen
  python main.py config show               Konfiguration anzeigen
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich import box

console = Console()

# Standard-Pfade
DEFAULT_INPUT_JSON = Path("output/input.json")
DEFAULT_RESULT_JSON = Path("output/schedule.json")


def _load_config(config_path: Optional[str]):
    """Lädt die Konfiguration (oder Defaults) oder bricht mit Fehlermeldung ab."""
    from config.manager import ConfigManager
    mgr = ConfigManager(Path(config_path) if config_path else None)
    try:
        return mgr.load_or_default()
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)


def _load_request_or_abort(datei: Path):
    """Lädt die Eingabedatei oder bricht mit Fehlermeldung ab."""
    from pydantic import ValidationError
    from models.schedule_request import ScheduleRequest
    try:
        return ScheduleRequest.load_json(datei)
    except ValidationError as e:
        console.print(f"[red bold]Eingabedatei ungültig:[/red bold] {datei}\n{e}")
        sys.exit(1)


# ─── SAMPLE ───────────────────────────────────────────────────────────────────

@click.command("sample")
@click.option("--seed", default=42, help="Zufalls-Seed für reproduzierbare Daten.")
@click.option("--teachers", "num_teachers", default=8, help="Anzahl Lehrkräfte.")
@click.option("--oversized", is_flag=True, default=False,
              help="Zusätzlich eine Klasse, die in keinen Raum passt.")
@click.option("--output", "-o", default=str(DEFAULT_INPUT_JSON),
              help="Pfad für die JSON-Eingabedatei.")
def cmd_sample(seed: int, num_teachers: int, oversized: bool, output: str):
    """Erzeugt Beispieldaten (Lehrkräfte, Klassen, Räume) als JSON."""
    from data.sample_data import SampleDataGenerator

    gen = SampleDataGenerator(
        num_teachers=num_teachers, seed=seed, include_oversized_class=oversized
    )
    data = gen.generate()
    gen.print_summary(data)

    out_path = Path(output)
    data.save_json(out_path)
    console.print(f"[green]✓[/green] Eingabedatei gespeichert: {out_path}")


# ─── VALIDATE ─────────────────────────────────────────────────────────────────

@click.command("validate")
@click.argument("datei", type=click.Path(exists=True, path_type=Path))
def cmd_validate(datei: Path):
    """Führt den Eingabe-Check auf einer JSON-Eingabedatei durch."""
    from analysis.input_validator import validate_input

    request = _load_request_or_abort(datei)
    console.print(f"\n{request.summary()}\n")

    reason = validate_input(request.teachers, request.classes)
    if reason:
        console.print(Panel(f"[bold red]✗ UNGÜLTIG[/bold red]\n{reason}",
                            title="Eingabe-Check", border_style="cyan"))
        sys.exit(1)
    console.print(Panel("[bold green]✓ GÜLTIG[/bold green]",
                        title="Eingabe-Check", border_style="cyan"))


# ─── SOLVE ────────────────────────────────────────────────────────────────────

@click.command("solve")
@click.argument("datei", type=click.Path(exists=True, path_type=Path))
@click.option("--output", "-o", default=None,
              help="Ergebnis als JSON speichern (z.B. output/schedule.json).")
@click.option("--oracle/--no-oracle", "use_oracle", default=None,
              help="Externen Dienst als erste Quelle nutzen (überschreibt Config).")
@click.option("--config", "config_path", default=None,
              help="Pfad zur Konfigurationsdatei (YAML).")
@click.option("--rooms/--no-rooms", "show_rooms", default=True,
              help="Wochenansicht je Raum anzeigen.")
def cmd_solve(datei: Path, output: Optional[str], use_oracle: Optional[bool],
              config_path: Optional[str], show_rooms: bool):
    """Berechnet den Wochenplan für eine JSON-Eingabedatei."""
    from analysis.input_validator import InputValidationError
    from export.tui_renderer import print_result
    from solver.scheduler import create_schedule

    config = _load_config(config_path)
    if use_oracle is not None:
        config = config.model_copy(update={
            "oracle": config.oracle.model_copy(update={"enabled": use_oracle})
        })

    request = _load_request_or_abort(datei)
    try:
        result = create_schedule(
            request.teachers, request.classes, request.classrooms, config=config
        )
    except InputValidationError as e:
        console.print(f"[red bold]Eingabe ungültig:[/red bold] {e.reason}")
        sys.exit(1)

    print_result(result, config.time_grid, console=console, show_rooms=show_rooms)
    if result.is_empty:
        console.print(
            "[yellow]Keine Sitzung konnte eingeplant werden. "
            "Räume, Schülerzahlen oder Verfügbarkeiten anpassen.[/yellow]"
        )

    if output:
        out_path = Path(output)
        result.save_json(out_path)
        console.print(f"[green]✓[/green] Ergebnis gespeichert: {out_path}")


# ─── CONFIG ───────────────────────────────────────────────────────────────────

@click.group("config")
def cmd_config():
    """Konfiguration anzeigen oder anlegen."""


@cmd_config.command("init")
@click.option("--path", "config_path", default=None, help="Zielpfad der YAML-Datei.")
@click.option("--force", is_flag=True, default=False,
              help="Bestehende Konfiguration überschreiben.")
def config_init(config_path: Optional[str], force: bool):
    """Legt eine Default-Konfiguration als YAML an."""
    from config.defaults import default_scheduler_config
    from config.manager import ConfigManager

    mgr = ConfigManager(Path(config_path) if config_path else None)
    if not mgr.first_run_check() and not force:
        console.print(
            "[yellow]Eine Konfiguration existiert bereits.[/yellow]\n"
            "Mit [bold]--force[/bold] überschreiben."
        )
        return
    mgr.save(default_scheduler_config())


@cmd_config.command("show")
@click.option("--path", "config_path", default=None, help="Pfad der YAML-Datei.")
def config_show(config_path: Optional[str]):
    """Zeigt die aktuelle (oder Default-)Konfiguration an."""
    config = _load_config(config_path)

    tg = config.time_grid
    table = Table(title="Zeitraster", box=box.ROUNDED)
    table.add_column("Beginn")
    table.add_column("Ende")
    for start in tg.start_times:
        table.add_row(start, tg.end_time_for(start))
    console.print(table)
    console.print(f"[bold]Tage:[/bold] {', '.join(tg.days)}")

    rooms = Table(title="Standard-Räume", box=box.ROUNDED)
    rooms.add_column("ID")
    rooms.add_column("Name")
    rooms.add_column("Kapazität", justify="right")
    rooms.add_column("Gebäude")
    for r in config.default_classrooms:
        rooms.add_row(r.id, r.name, str(r.capacity), r.building or "")
    console.print(rooms)

    oc = config.oracle
    console.print(
        f"[bold]Externe Quelle:[/bold] {'aktiv' if oc.enabled else 'inaktiv'} | "
        f"Modell {oc.model} | Zeitlimit {oc.timeout_seconds}s"
    )


# ─── HAUPT-CLI ────────────────────────────────────────────────────────────────

@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False,
              help="Ausführliche Log-Ausgabe.")
def cli(verbose: bool):
    """Wochenplaner: Sitzungen auf Zeitslots und Räume verteilen.

    Starten Sie mit: python main.py sample
    """
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def main():
    """Einstiegspunkt."""
    cli()


# Befehle registrieren
cli.add_command(cmd_sample)
cli.add_command(cmd_validate)
cli.add_command(cmd_solve)
cli.add_command(cmd_config)


if __name__ == "__main__":
    main()
