import asyncio

import pytest

from core.reveal import RevealScheduler, RevealTimings, build_report_text
from core.session import fallback_recommendation
from core.state_machine import RevealPhase, RevealState, advance_phase
from models.project import ProjectRecommendation

FAST = RevealTimings(mapping_delay=0, typing_delay=0, skills_interval=0, report_interval=0)


def _rec(skills="Python, SQL", report="# Report\n\n- [ ] ship it", **kwargs):
    fields = dict(
        projectTitle="Title",
        projectDescription="Description",
        projectAppeal="Appeal",
        keySkillsDemonstrated=["Python"],
        projectChecklist=["step"],
        skillsRequired=skills,
        markdownReport=report,
    )
    fields.update(kwargs)
    return ProjectRecommendation(**fields)


def _run_to_completion(rec, snapshots):
    async def run():
        scheduler = RevealScheduler(on_change=snapshots.append, timings=FAST)
        scheduler.start(rec)
        return await scheduler.wait_until_complete()

    return asyncio.run(run())


def test_full_sequence_reaches_complete():
    snapshots = []
    rec = _rec()
    final = _run_to_completion(rec, snapshots)

    assert final.phase == RevealPhase.COMPLETE
    assert final.skills_typed == rec.skillsRequired
    assert final.report_typed == rec.markdownReport
    assert final.generation == 1

    phases = [s.phase for s in snapshots]
    assert phases[0] == RevealPhase.RESEARCHING_DONE
    first_seen = list(dict.fromkeys(phases))
    assert first_seen == [
        RevealPhase.RESEARCHING_DONE,
        RevealPhase.MAPPING_SKILLS,
        RevealPhase.TYPING_REPORT,
        RevealPhase.COMPLETE,
    ]


def test_skills_complete_before_report_grows():
    snapshots = []
    rec = _rec(skills="abcdefghij", report="0123456789")
    _run_to_completion(rec, snapshots)

    for s in snapshots:
        if s.report_typed or s.phase == RevealPhase.TYPING_REPORT:
            assert s.skills_typed == rec.skillsRequired


def test_typing_is_one_character_per_step():
    snapshots = []
    rec = _rec(skills="abc", report="xy")
    _run_to_completion(rec, snapshots)

    skills_prefixes = [s.skills_typed for s in snapshots if s.phase == RevealPhase.MAPPING_SKILLS]
    assert list(dict.fromkeys(skills_prefixes)) == ["", "a", "ab", "abc"]
    report_prefixes = [s.report_typed for s in snapshots if s.phase == RevealPhase.TYPING_REPORT]
    assert list(dict.fromkeys(report_prefixes)) == ["", "x", "xy"]


def test_empty_skills_goes_straight_to_report():
    snapshots = []
    final = _run_to_completion(_rec(skills=""), snapshots)
    assert final.phase == RevealPhase.COMPLETE
    assert final.skills_typed == ""
    assert final.report_typed == "# Report\n\n- [ ] ship it"


def test_new_generation_cancels_previous_output():
    snapshots = []
    first = _rec(skills="x" * 50, report="X" * 50)
    second = _rec(skills="y" * 5, report="Y" * 5)

    async def run():
        scheduler = RevealScheduler(on_change=snapshots.append, timings=FAST)
        scheduler.start(first)
        while len(scheduler.state.skills_typed) < 3:
            await asyncio.sleep(0)

        mark = len(snapshots)
        gen2 = scheduler.start(second)
        final = await scheduler.wait_until_complete()
        # Let any straggling timers from the first run fire.
        for _ in range(20):
            await asyncio.sleep(0)
        return mark, gen2, final

    mark, gen2, final = asyncio.run(run())

    assert gen2 == 2
    assert final.report_typed == "Y" * 5
    after = snapshots[mark:]
    assert after
    for s in after:
        assert s.generation == gen2
        assert "x" not in s.skills_typed
        assert "X" not in s.report_typed
        assert second.skillsRequired.startswith(s.skills_typed)
    assert snapshots[-1].phase == RevealPhase.COMPLETE


def test_cancel_stops_pending_timers():
    snapshots = []

    async def run():
        scheduler = RevealScheduler(on_change=snapshots.append, timings=FAST)
        scheduler.start(_rec(skills="z" * 100))
        while not scheduler.state.skills_typed:
            await asyncio.sleep(0)
        scheduler.cancel()
        mark = len(snapshots)
        for _ in range(20):
            await asyncio.sleep(0)
        return scheduler, mark

    scheduler, mark = asyncio.run(run())
    assert len(snapshots) == mark
    assert scheduler.state.phase == RevealPhase.IDLE
    assert scheduler.state.generation == 2


def test_waiters_of_superseded_generation_are_released():
    async def run():
        scheduler = RevealScheduler(timings=RevealTimings(mapping_delay=10))
        scheduler.start(_rec())
        waiter = asyncio.ensure_future(scheduler.wait_until_complete())
        await asyncio.sleep(0)
        scheduler.cancel()
        return await asyncio.wait_for(waiter, timeout=1)

    state = asyncio.run(run())
    assert state.phase == RevealPhase.IDLE


def test_report_prefers_markdown_report():
    assert build_report_text(_rec(report="# Given")) == "# Given"


def test_report_synthesized_without_markdown_report():
    rec = _rec(report=None, keySkillsDemonstrated=["Python", "SQL"], projectChecklist=["Plan", "Build"])
    text = build_report_text(rec)

    assert text.startswith("# 🚀 Title\n\nDescription\n\n")
    assert "## Why this project will impress\nAppeal" in text
    assert "### Key skills\n- Python\n- SQL" in text
    assert text.endswith("### Project checklist\n- [ ] Plan\n- [ ] Build")


def test_report_for_degraded_record():
    rec = fallback_recommendation("Could not parse.", "raw")
    assert build_report_text(rec) == (
        "# Error from AI\n\nThe AI couldn't generate a structured project idea. Could not parse."
    )


def test_state_machine_rejects_skipping_phases():
    with pytest.raises(ValueError):
        advance_phase(RevealState(phase=RevealPhase.RESEARCHING_DONE), RevealPhase.TYPING_REPORT)
    with pytest.raises(ValueError):
        advance_phase(RevealState(phase=RevealPhase.IDLE), RevealPhase.COMPLETE)


def test_state_machine_restart_allowed_from_any_phase():
    for phase in RevealPhase:
        state = advance_phase(RevealState(phase=phase), RevealPhase.RESEARCHING_DONE)
        assert state.phase == RevealPhase.RESEARCHING_DONE


def test_cancel_notifies_subscriber_with_cleared_state():
    snapshots = []

    async def run():
        scheduler = RevealScheduler(on_change=snapshots.append, timings=FAST)
        scheduler.start(_rec(skills="z" * 100))
        while not scheduler.state.skills_typed:
            await asyncio.sleep(0)
        scheduler.cancel()
        return scheduler.state

    state = asyncio.run(run())
    assert snapshots[-1] == state
    assert state.phase == RevealPhase.IDLE
    assert (state.skills_typed, state.report_typed) == ("", "")


def test_report_for_bare_degraded_record_has_no_none():
    rec = ProjectRecommendation(error="Failed to parse project idea", rawResponse="{")
    assert build_report_text(rec) == "# Error from AI\n\nFailed to parse project idea"


def test_synthesized_report_skips_missing_narrative():
    rec = ProjectRecommendation(projectTitle="Title", keySkillsDemonstrated=["SQL"], projectChecklist=["Plan"])
    text = build_report_text(rec)
    assert "None" not in text
    assert text.startswith("# 🚀 Title\n\n")
