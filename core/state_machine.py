# core/state_machine.py
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, FrozenSet


class RevealPhase(str, Enum):
    IDLE = "Idle"
    RESEARCHING_DONE = "ResearchingDone"
    MAPPING_SKILLS = "MappingSkills"
    TYPING_REPORT = "TypingReport"
    COMPLETE = "Complete"


# Forward moves within one generation. Starting a new generation
# (-> RESEARCHING_DONE) and tearing down (-> IDLE) are allowed from anywhere.
TRANSITIONS: Dict[RevealPhase, FrozenSet[RevealPhase]] = {
    RevealPhase.IDLE: frozenset(),
    RevealPhase.RESEARCHING_DONE: frozenset({RevealPhase.MAPPING_SKILLS}),
    RevealPhase.MAPPING_SKILLS: frozenset({RevealPhase.TYPING_REPORT}),
    RevealPhase.TYPING_REPORT: frozenset({RevealPhase.COMPLETE}),
    RevealPhase.COMPLETE: frozenset(),
}
ALWAYS_ALLOWED = frozenset({RevealPhase.IDLE, RevealPhase.RESEARCHING_DONE})


@dataclass(frozen=True)
class RevealState:
    phase: RevealPhase = RevealPhase.IDLE
    skills_typed: str = ""
    report_typed: str = ""
    generation: int = 0

    @property
    def show_mapping_line(self) -> bool:
        return self.phase in (RevealPhase.MAPPING_SKILLS, RevealPhase.TYPING_REPORT, RevealPhase.COMPLETE)


def can_advance(current: RevealPhase, target: RevealPhase) -> bool:
    return target in ALWAYS_ALLOWED or target in TRANSITIONS[current]


def advance_phase(state: RevealState, target: RevealPhase) -> RevealState:
    """Return a copy of `state` in `target`, refusing moves that skip a phase."""
    if not can_advance(state.phase, target):
        raise ValueError(f"Illegal reveal transition {state.phase.value} -> {target.value}")
    return replace(state, phase=target)
