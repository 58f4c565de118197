# core/reveal.py
"""
Progressive reveal of a project recommendation.

One generation runs at a time on the asyncio loop:

    ResearchingDone --mapping_delay--> MappingSkills --typing_delay--> type skillsRequired
    --(skills fully typed)--> TypingReport --> type report --> Complete

Every scheduled step carries the generation id it was created for and is a
no-op once a newer generation (or a cancel) has bumped the id.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, replace
from typing import Callable, Optional

from core.state_machine import RevealPhase, RevealState, advance_phase
from models.project import ProjectRecommendation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RevealTimings:
    mapping_delay: float = 1.0
    typing_delay: float = 0.5
    skills_interval: float = 0.015
    report_interval: float = 0.010


def build_report_text(recommendation: ProjectRecommendation) -> str:
    """The markdown the reveal types out; computed once per generation."""
    title = recommendation.projectTitle or ""
    description = recommendation.projectDescription or ""

    if recommendation.error:
        return f"# {title or 'Error from AI'}\n\n{description or recommendation.error}"
    if recommendation.markdownReport:
        return recommendation.markdownReport

    skills = "\n".join(f"- {s}" for s in recommendation.keySkillsDemonstrated)
    checklist = "\n".join(f"- [ ] {c}" for c in recommendation.projectChecklist)

    return (
        f"# 🚀 {title}\n\n"
        f"{description}\n\n"
        f"## Why this project will impress\n{recommendation.projectAppeal or ''}\n\n"
        f"### Key skills\n{skills}\n\n"
        f"### Project checklist\n{checklist}"
    )


class RevealScheduler:
    def __init__(
        self,
        on_change: Optional[Callable[[RevealState], None]] = None,
        timings: Optional[RevealTimings] = None,
    ):
        self.on_change = on_change
        self.timings = timings or RevealTimings()
        self.state = RevealState()

        self._skills_target = ""
        self._report_target = ""
        self._pending: Optional[asyncio.TimerHandle] = None
        self._done: Optional[asyncio.Event] = None

    # ----------------------------
    # Public API
    # ----------------------------
    @property
    def skills_target(self) -> str:
        return self._skills_target

    @property
    def report_target(self) -> str:
        return self._report_target

    @property
    def skills_complete(self) -> bool:
        return len(self.state.skills_typed) >= len(self._skills_target)

    @property
    def report_complete(self) -> bool:
        return len(self.state.report_typed) >= len(self._report_target)

    def start(self, recommendation: ProjectRecommendation) -> int:
        """Supersede any running reveal and begin a new one. Must run inside the event loop."""
        self._cancel_pending()
        self._release_waiters()

        generation = self.state.generation + 1
        self._skills_target = recommendation.skillsRequired or ""
        self._report_target = build_report_text(recommendation)
        self._done = asyncio.Event()

        self._set(
            advance_phase(
                RevealState(phase=self.state.phase, generation=generation),
                RevealPhase.RESEARCHING_DONE,
            )
        )
        logger.debug(
            "reveal generation=%d started (skills=%d chars, report=%d chars)",
            generation,
            len(self._skills_target),
            len(self._report_target),
        )
        self._schedule(generation, self.timings.mapping_delay, self._show_mapping)
        return generation

    def cancel(self) -> None:
        """Tear down: drop pending timers and invalidate the current generation."""
        self._cancel_pending()
        self._release_waiters()
        self._set(advance_phase(RevealState(generation=self.state.generation + 1), RevealPhase.IDLE))

    async def wait_until_complete(self) -> RevealState:
        """Resolve when the current generation completes or is superseded."""
        if self._done is not None:
            await self._done.wait()
        return self.state

    # ----------------------------
    # Timer plumbing
    # ----------------------------
    def _schedule(self, generation: int, delay: float, step: Callable[[int], None]) -> None:
        loop = asyncio.get_running_loop()
        self._pending = loop.call_later(delay, self._fire, generation, step)

    def _fire(self, generation: int, step: Callable[[int], None]) -> None:
        self._pending = None
        if generation != self.state.generation:
            return
        step(generation)

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _release_waiters(self) -> None:
        if self._done is not None:
            self._done.set()
            self._done = None

    def _set(self, state: RevealState) -> None:
        self.state = state
        if self.on_change is not None:
            self.on_change(state)

    # ----------------------------
    # Steps
    # ----------------------------
    def _show_mapping(self, generation: int) -> None:
        self._set(advance_phase(self.state, RevealPhase.MAPPING_SKILLS))
        self._schedule(generation, self.timings.typing_delay, self._type_skills)

    def _type_skills(self, generation: int) -> None:
        if not self.skills_complete:
            typed = self._skills_target[: len(self.state.skills_typed) + 1]
            self._set(replace(self.state, skills_typed=typed))

        if self.skills_complete:
            self._begin_report(generation)
        else:
            self._schedule(generation, self.timings.skills_interval, self._type_skills)

    def _begin_report(self, generation: int) -> None:
        self._set(advance_phase(self.state, RevealPhase.TYPING_REPORT))
        if self.report_complete:
            self._finish()
        else:
            self._schedule(generation, self.timings.report_interval, self._type_report)

    def _type_report(self, generation: int) -> None:
        typed = self._report_target[: len(self.state.report_typed) + 1]
        self._set(replace(self.state, report_typed=typed))

        if self.report_complete:
            self._finish()
        else:
            self._schedule(generation, self.timings.report_interval, self._type_report)

    def _finish(self) -> None:
        self._set(advance_phase(self.state, RevealPhase.COMPLETE))
        logger.debug("reveal generation=%d complete", self.state.generation)
        self._release_waiters()
