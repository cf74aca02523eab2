from pydantic import BaseModel, Field, model_validator

from models.classroom import Classroom


# ─── ZEITRASTER ───

class TimeGridConfig(BaseModel):
    """Festes Wochenraster: Unterrichtstage und Beginn-Uhrzeiten.

    Das Ende einer Sitzung ist der Beginn des nächsten Slots bzw.
    closing_time beim letzten Slot. Eine fehlende 12:00-Stunde
    modelliert die Mittagspause.
    """
    # Namen der Wochentage in fester Reihenfolge
    days: list[str] = Field(
        default=["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"],
        description="Unterrichtstage in fester Reihenfolge")
    # Beginn-Uhrzeiten im Format "HH:MM", chronologisch
    start_times: list[str] = Field(
        default=["08:00", "09:00", "10:00", "11:00",
                 "13:00", "14:00", "15:00", "16:00"],
        description="Beginn-Uhrzeiten (chronologisch)")
    # Ende des letzten Slots
    closing_time: str = Field("17:00",
        description="Ende des letzten Slots")

    @model_validator(mode='after')
    def validate_grid(self):
        """Prüfe dass Tage und Slots eindeutig und chronologisch sind."""
        if not self.days:
            raise ValueError("Zeitraster braucht mindestens einen Tag")
        if not self.start_times:
            raise ValueError("Zeitraster braucht mindestens einen Slot")
        if len(set(self.days)) != len(self.days):
            raise ValueError("Tage im Zeitraster sind nicht eindeutig")
        if sorted(set(self.start_times)) != self.start_times:
            raise ValueError(
                "Beginn-Uhrzeiten müssen eindeutig und aufsteigend sein")
        if self.closing_time <= self.start_times[-1]:
            raise ValueError(
                f"closing_time {self.closing_time} liegt nicht nach "
                f"dem letzten Slot {self.start_times[-1]}")
        return self

    @property
    def slots_per_day(self) -> int:
        return len(self.start_times)

    @property
    def total_slots(self) -> int:
        """Anzahl Slots pro Raum und Woche (Tage × Slots)."""
        return len(self.days) * len(self.start_times)

    def end_time_for(self, start_time: str) -> str:
        """Ende einer Sitzung: nächster Slot oder closing_time."""
        idx = self.start_times.index(start_time)
        if idx + 1 < len(self.start_times):
            return self.start_times[idx + 1]
        return self.closing_time


# ─── EXTERNE KANDIDATEN-QUELLE ───

class OracleConfig(BaseModel):
    """Externer Textgenerierungs-Dienst als optionale Kandidaten-Quelle.

    Das Ergebnis ist ungeprüft und läuft immer durch Bereinigung und
    Konfliktauflösung. Bei jedem Fehler greift die Heuristik.
    """
    # Externen Dienst überhaupt fragen?
    enabled: bool = Field(False,
        description="Externen Dienst als erste Kandidaten-Quelle nutzen")
    # Basis-URL des generateContent-Endpunkts
    endpoint: str = Field(
        "https://generativelanguage.googleapis.com/v1beta/models",
        description="Basis-URL des Dienstes")
    # Modellname (wird an die URL angehängt)
    model: str = Field("gemini-1.5-flash",
        description="Modellname")
    # Name der Umgebungsvariable mit dem API-Schlüssel
    api_key_env: str = Field("GEMINI_API_KEY",
        description="Umgebungsvariable mit API-Schlüssel")
    # Harte Obergrenze für den Netzwerkaufruf
    timeout_seconds: float = Field(5.0, gt=0, le=120,
        description="Zeitlimit für den Aufruf (Sekunden)")
    # Generierungsparameter
    temperature: float = Field(0.2, ge=0.0, le=2.0)
    top_p: float = Field(0.95, ge=0.0, le=1.0)
    top_k: int = Field(64, ge=1)
    max_output_tokens: int = Field(8192, ge=256)


# ─── STANDARD-RÄUME ───

# (id, name, capacity, building, floor)
DEFAULT_CLASSROOM_DATA: list[tuple[str, str, int, str, int]] = [
    ("1", "Room 101",     30,  "Main Building", 1),
    ("2", "Room 102",     25,  "Main Building", 1),
    ("3", "Room 201",     40,  "Main Building", 2),
    ("4", "Room 202",     35,  "Main Building", 2),
    ("5", "Lab 301",      20,  "Science Wing",  3),
    ("6", "Lecture Hall", 100, "Main Building", 1),
]


def standard_classrooms() -> list[Classroom]:
    """Standard-Raumliste (neue Objekte bei jedem Aufruf)."""
    return [
        Classroom(id=rid, name=name, capacity=cap, building=building, floor=floor)
        for rid, name, cap, building, floor in DEFAULT_CLASSROOM_DATA
    ]


# ─── GESAMT-CONFIG ───

class SchedulerConfig(BaseModel):
    """Gesamtkonfiguration des Wochenplaners."""
    # Wochenraster
    time_grid: TimeGridConfig = Field(default_factory=TimeGridConfig)
    # Externe Kandidaten-Quelle
    oracle: OracleConfig = Field(default_factory=OracleConfig)
    # Räume, wenn der Aufrufer keine eigenen angibt
    default_classrooms: list[Classroom] = Field(default_factory=standard_classrooms,
        description="Standard-Räume, falls keine angegeben")
