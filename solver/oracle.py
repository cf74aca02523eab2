"""Externer Textgenerierungs-Dienst als optionale Kandidaten-Quelle.

Der Dienst bekommt einen einzelnen Text-Prompt und soll ein JSON-Objekt
mit "scheduleItems" (und optional "classroomUsage") zurückliefern. Die
Antwort gilt als unzuverlässig:
  - umgebender Freitext wird toleriert (erstes JSON-Objekt zählt)
  - jede Abweichung vom erwarteten Format → CandidateSourceFailure
  - jeder Fehler führt still (nur Log-Warnung) zur Fallback-Quelle
"""

import json
import logging
import os
import urllib.error
import urllib.request
from typing import Callable, Optional

from pydantic import ValidationError

from config.defaults import default_time_grid
from config.schema import OracleConfig, TimeGridConfig
from models.classroom import Classroom
from models.schedule_item import ScheduleItem
from models.school_class import SchoolClass
from models.teacher import Teacher
from solver.candidate_source import (
    Candidate,
    CandidateSource,
    CandidateSourceFailure,
    HeuristicCandidateSource,
)

logger = logging.getLogger(__name__)

# prompt -> Antworttext des Dienstes
Transport = Callable[[str], str]


# ─── Prompt ───────────────────────────────────────────────────────────────────

def build_prompt(
    teachers: list[Teacher],
    classes: list[SchoolClass],
    classrooms: list[Classroom],
    time_grid: TimeGridConfig,
) -> str:
    """Strukturierte Beschreibung der Eingaben plus gewünschtes Antwortformat."""

    def dump(records) -> str:
        return json.dumps(
            [r.model_dump(by_alias=True, exclude_none=True) for r in records],
            indent=2,
            ensure_ascii=False,
        )

    return f"""\
Create a conflict-free weekly classroom schedule from the following data.

TEACHERS:
{dump(teachers)}

CLASSES:
{dump(classes)}

CLASSROOMS:
{dump(classrooms)}

DAYS: {", ".join(time_grid.days)}
START TIMES: {", ".join(time_grid.start_times)} (last session ends {time_grid.closing_time})

Rules:
1. A teacher cannot teach two sessions at the same day and start time.
2. A classroom cannot host two sessions at the same day and start time.
3. Only schedule a class on days listed in its teacher's availability.
4. The classroom capacity must be at least the class's student count.
5. Schedule at most "hours" sessions per class and spread them over the week.

Answer with one JSON object with two keys:
- "scheduleItems": array of objects with the string fields id, classId,
  className, subject, teacherName, day, startTime, endTime, classroomId,
  classroomName
- "classroomUsage": array of objects {{"id": classroomId, "usagePercentage": 0-100}}
"""


# ─── Antwort-Auswertung ───────────────────────────────────────────────────────

def extract_json_object(text: str) -> dict:
    """Findet das erste vollständige JSON-Objekt auf oberster Ebene im Text."""
    decoder = json.JSONDecoder()
    idx = text.find("{")
    while idx != -1:
        try:
            obj, _end = decoder.raw_decode(text, idx)
        except json.JSONDecodeError:
            idx = text.find("{", idx + 1)
            continue
        if isinstance(obj, dict):
            return obj
        idx = text.find("{", idx + 1)
    raise CandidateSourceFailure("Kein JSON-Objekt in der Antwort gefunden")


def _parse_usage_hints(raw) -> Optional[dict[str, int]]:
    """Liest "classroomUsage"; fehlerhafte Einträge werden ignoriert."""
    if not isinstance(raw, list):
        return None
    hints: dict[str, int] = {}
    for entry in raw:
        if not isinstance(entry, dict) or "id" not in entry:
            continue
        try:
            hints[str(entry["id"])] = int(round(float(entry.get("usagePercentage", 0))))
        except (TypeError, ValueError):
            continue
    return hints


def parse_oracle_response(text: str) -> Candidate:
    """Wandelt den Antworttext in einen Candidate um.

    Raises:
        CandidateSourceFailure: wenn Struktur oder Einträge nicht passen.
    """
    data = extract_json_object(text)

    raw_items = data.get("scheduleItems")
    if not isinstance(raw_items, list):
        raise CandidateSourceFailure("Antwort enthält kein 'scheduleItems'-Array")
    if not raw_items:
        raise CandidateSourceFailure("Antwort enthält keine Sitzungen")

    try:
        items = [ScheduleItem.model_validate(raw) for raw in raw_items]
    except ValidationError as e:
        raise CandidateSourceFailure(
            f"Ungültige Sitzung in der Antwort: {e.error_count()} Fehler"
        ) from e

    return Candidate(
        items=items,
        classroom_usage_hints=_parse_usage_hints(data.get("classroomUsage")),
        source="oracle",
    )


# ─── HTTP-Transport ───────────────────────────────────────────────────────────

class GeminiTransport:
    """POST an einen generateContent-Endpunkt mit festem Zeitlimit."""

    def __init__(self, config: OracleConfig, api_key: Optional[str] = None) -> None:
        self.config = config
        self.api_key = api_key if api_key is not None else os.environ.get(config.api_key_env)

    @property
    def url(self) -> str:
        return f"{self.config.endpoint.rstrip('/')}/{self.config.model}:generateContent"

    def _request_body(self, prompt: str) -> bytes:
        cfg = self.config
        body = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": cfg.temperature,
                "topP": cfg.top_p,
                "topK": cfg.top_k,
                "maxOutputTokens": cfg.max_output_tokens,
            },
        }
        return json.dumps(body).encode("utf-8")

    def __call__(self, prompt: str) -> str:
        if not self.api_key:
            raise CandidateSourceFailure(
                f"Kein API-Schlüssel gesetzt (Umgebungsvariable {self.config.api_key_env})"
            )

        request = urllib.request.Request(
            self.url,
            data=self._request_body(prompt),
            headers={
                "Content-Type": "application/json",
                "x-goog-api-key": self.api_key,
            },
            method="POST",
        )
        try:
            with urllib.request.urlopen(request, timeout=self.config.timeout_seconds) as resp:
                payload = json.loads(resp.read().decode("utf-8"))
        except urllib.error.HTTPError as e:
            raise CandidateSourceFailure(f"Dienst antwortet mit Status {e.code}") from e
        except (urllib.error.URLError, TimeoutError, OSError) as e:
            raise CandidateSourceFailure(f"Dienst nicht erreichbar: {e}") from e
        except ValueError as e:
            raise CandidateSourceFailure("Antwort des Dienstes ist kein JSON") from e

        return self.extract_text(payload)

    @staticmethod
    def extract_text(payload: dict) -> str:
        """Text aus candidates[0].content.parts zusammensetzen."""
        try:
            parts = payload["candidates"][0]["content"]["parts"]
            return "".join(part.get("text", "") for part in parts)
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            raise CandidateSourceFailure("Unerwartetes Antwortformat des Dienstes") from e


# ─── Dekorator-Quelle ─────────────────────────────────────────────────────────

class OracleCandidateSource(CandidateSource):
    """Fragt zuerst den externen Dienst, bei jedem Fehler die Fallback-Quelle.

    Verwendung:
        source = OracleCandidateSource(GeminiTransport(config.oracle))
        candidate = source.obtain_candidate(teachers, classes, classrooms)
    """

    def __init__(
        self,
        transport: Transport,
        fallback: Optional[CandidateSource] = None,
        time_grid: Optional[TimeGridConfig] = None,
    ) -> None:
        self.transport = transport
        self.time_grid = time_grid or default_time_grid()
        self.fallback = fallback or HeuristicCandidateSource(self.time_grid)

    def obtain_candidate(
        self,
        teachers: list[Teacher],
        classes: list[SchoolClass],
        classrooms: list[Classroom],
    ) -> Candidate:
        prompt = build_prompt(teachers, classes, classrooms, self.time_grid)
        try:
            candidate = parse_oracle_response(self.transport(prompt))
        except Exception as e:
            logger.warning(
                f"Externe Quelle fehlgeschlagen ({e}) – "
                f"Fallback auf {type(self.fallback).__name__}"
            )
            return self.fallback.obtain_candidate(teachers, classes, classrooms)

        logger.info(f"Externe Quelle: {len(candidate.items)} Sitzungen erhalten")
        return candidate
