"""Standardwerte für den Wochenplaner: Zeitraster und Standard-Räume."""

from config.schema import (
    OracleConfig,
    SchedulerConfig,
    TimeGridConfig,
    standard_classrooms,
)
from models.classroom import Classroom


WEEKDAYS: list[str] = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]

# 8 Slots, keine 12:00-Stunde (Mittagspause)
START_TIMES: list[str] = [
    "08:00", "09:00", "10:00", "11:00",
    "13:00", "14:00", "15:00", "16:00",
]

CLOSING_TIME = "17:00"


def default_time_grid() -> TimeGridConfig:
    """Standard-Wochenraster Mo–Fr, 8 Slots, Schluss 17:00."""
    return TimeGridConfig(
        days=list(WEEKDAYS),
        start_times=list(START_TIMES),
        closing_time=CLOSING_TIME,
    )


def default_classrooms() -> list[Classroom]:
    """Die sechs Standard-Räume aus dem Schema."""
    return standard_classrooms()


def default_scheduler_config() -> SchedulerConfig:
    """Vollständige Default-Konfiguration (externer Dienst deaktiviert)."""
    return SchedulerConfig(
        time_grid=default_time_grid(),
        oracle=OracleConfig(),
        default_classrooms=default_classrooms(),
    )
