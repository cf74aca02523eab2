"""Solver-Modul: Kandidaten-Quellen, Greedy-Heuristik und Planungs-Pipeline."""

from .heuristic import HeuristicGenerator
from .candidate_source import (
    Candidate,
    CandidateSource,
    CandidateSourceFailure,
    HeuristicCandidateSource,
)
from .oracle import GeminiTransport, OracleCandidateSource
from .scheduler import ScheduleResult, build_candidate_source, create_schedule

__all__ = [
    "HeuristicGenerator",
    "Candidate",
    "CandidateSource",
    "CandidateSourceFailure",
    "HeuristicCandidateSource",
    "GeminiTransport",
    "OracleCandidateSource",
    "ScheduleResult",
    "build_candidate_source",
    "create_schedule",
]
