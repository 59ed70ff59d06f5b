"""Tests for the application state controller."""

from __future__ import annotations

import asyncio

import pytest

from conftest import DEBOUNCE, FakeAnalyzer, MemoryStorage, make_result

from jobmatch.domain.enums import ScoreBand
from jobmatch.domain.errors import (
    ANALYSIS_FAILED_MESSAGE,
    NO_JOBS_MESSAGE,
    VALIDATION_MESSAGE,
    AnalysisError,
    AnalysisInProgressError,
)
from jobmatch.domain.models import JobDescription
from jobmatch.services.persistence_service import PersistenceService, default_jobs
from jobmatch.services.session_service import MatchSession

RESUME = "Jane Doe\nPython, FastAPI, PostgreSQL, 6 years backend."


def _jobs() -> list[JobDescription]:
    return [
        JobDescription(id="a", title="Backend Engineer", description="Python APIs"),
        JobDescription(id="b", title="Platform Engineer", description="Kubernetes"),
        JobDescription(id="c", title="Data Engineer", description="Spark, SQL"),
    ]


def _session(
    analyzer: FakeAnalyzer,
    storage: MemoryStorage | None = None,
    resume: str = RESUME,
    jobs: list[JobDescription] | None = None,
) -> MatchSession:
    return MatchSession(
        analyzer,
        PersistenceService(storage or MemoryStorage()),
        resume=resume,
        jobs=_jobs() if jobs is None else jobs,
        debounce_seconds=DEBOUNCE,
    )


# ── Validation ────────────────────────────────────────────────


def test_valid_form_calls_analyzer_exactly_once(analyzer: FakeAnalyzer) -> None:
    analyzer.results = [make_result("a", 70), make_result("b", 50), make_result("c", 30)]
    session = _session(analyzer)

    state = asyncio.run(session.submit_analysis())

    assert len(analyzer.calls) == 1
    resume, jobs = analyzer.calls[0]
    assert resume == RESUME
    assert [job.id for job in jobs] == ["a", "b", "c"]
    assert state.error is None
    assert state.is_loading is False


@pytest.mark.parametrize("resume", ["", "   ", "\n\t"])
def test_blank_resume_is_rejected_before_any_call(analyzer: FakeAnalyzer, resume: str) -> None:
    session = _session(analyzer, resume=resume)

    state = asyncio.run(session.submit_analysis())

    assert analyzer.calls == []
    assert state.error == VALIDATION_MESSAGE
    assert state.is_loading is False


@pytest.mark.parametrize("field", ["title", "description"])
def test_blank_job_field_is_rejected(analyzer: FakeAnalyzer, field: str) -> None:
    jobs = _jobs()
    jobs[1] = jobs[1].model_copy(update={field: "  "})
    session = _session(analyzer, jobs=jobs)

    state = asyncio.run(session.submit_analysis())

    assert analyzer.calls == []
    assert state.error == VALIDATION_MESSAGE


def test_empty_job_list_is_rejected(analyzer: FakeAnalyzer) -> None:
    session = _session(analyzer, jobs=[])

    state = asyncio.run(session.submit_analysis())

    assert analyzer.calls == []
    assert state.error == NO_JOBS_MESSAGE


def test_validation_error_keeps_previous_results(analyzer: FakeAnalyzer) -> None:
    analyzer.results = [make_result("a", 80)]
    session = _session(analyzer)

    async def scenario():
        await session.submit_analysis()
        session.set_resume("")
        state = await session.submit_analysis()
        session.close()
        return state

    state = asyncio.run(scenario())
    assert state.error == VALIDATION_MESSAGE
    assert [r.job_id for r in state.results] == ["a"]
    assert len(analyzer.calls) == 1


# ── Results ───────────────────────────────────────────────────


def test_results_sorted_descending_with_stable_ties(analyzer: FakeAnalyzer) -> None:
    analyzer.results = [make_result("a", 42), make_result("b", 91), make_result("c", 91)]
    session = _session(analyzer)

    state = asyncio.run(session.submit_analysis())

    assert [r.job_id for r in state.results] == ["b", "c", "a"]


def test_analysis_failure_sets_generic_error_and_clears_results() -> None:
    analyzer = FakeAnalyzer(results=[make_result("a", 60)])
    session = _session(analyzer)
    asyncio.run(session.submit_analysis())

    analyzer.error = AnalysisError()
    state = asyncio.run(session.submit_analysis())

    assert state.error == ANALYSIS_FAILED_MESSAGE
    assert state.results == []
    assert state.is_loading is False


def test_unexpected_analyzer_exception_is_not_leaked() -> None:
    analyzer = FakeAnalyzer(error=ConnectionResetError("tcp reset by 10.0.0.7"))
    session = _session(analyzer)

    state = asyncio.run(session.submit_analysis())

    assert state.error == ANALYSIS_FAILED_MESSAGE
    assert "10.0.0.7" not in state.error


def test_success_clears_previous_error(analyzer: FakeAnalyzer) -> None:
    analyzer.results = [make_result("a", 10)]
    session = _session(analyzer, resume="")

    async def scenario():
        await session.submit_analysis()
        session.set_resume(RESUME)
        state = await session.submit_analysis()
        session.close()
        return state

    state = asyncio.run(scenario())
    assert state.error is None
    assert len(state.results) == 1


def test_loading_flag_and_single_flight() -> None:
    gate = asyncio.Event()
    analyzer = FakeAnalyzer(results=[make_result("a", 50)], gate=gate)
    session = _session(analyzer)

    async def scenario():
        running = asyncio.create_task(session.submit_analysis())
        while not analyzer.calls:
            await asyncio.sleep(0)
        during = session.state
        with pytest.raises(AnalysisInProgressError):
            await session.submit_analysis()
        gate.set()
        return during, await running

    during, after = asyncio.run(scenario())
    assert during.is_loading is True
    assert during.results == []
    assert during.error is None
    assert after.is_loading is False
    assert len(analyzer.calls) == 1


def test_result_views_join_job_text_and_band(analyzer: FakeAnalyzer) -> None:
    analyzer.results = [make_result("a", 85), make_result("b", 65), make_result("gone", 20)]
    session = _session(analyzer)

    asyncio.run(session.submit_analysis())
    views = session.result_views()

    assert [v.result.job_id for v in views] == ["a", "b", "gone"]
    assert views[0].job_description == "Python APIs"
    assert views[2].job_description == "Description not found."
    assert [v.band for v in views] == [ScoreBand.STRONG, ScoreBand.FAIR, ScoreBand.WEAK]


# ── Job edits ─────────────────────────────────────────────────


def test_add_then_remove_restores_job_list(analyzer: FakeAnalyzer) -> None:
    session = _session(analyzer)
    before = session.state.jobs

    async def scenario():
        job = session.add_job()
        assert job.title == "" and job.description == ""
        assert session.state.jobs[-1].id == job.id
        session.remove_job(job.id)
        session.close()

    asyncio.run(scenario())
    assert session.state.jobs == before


def test_added_job_ids_are_unique(analyzer: FakeAnalyzer) -> None:
    session = _session(analyzer, jobs=[])

    async def scenario():
        ids = {session.add_job().id for _ in range(20)}
        session.close()
        return ids

    assert len(asyncio.run(scenario())) == 20


def test_update_job_replaces_one_field(analyzer: FakeAnalyzer) -> None:
    session = _session(analyzer)

    async def scenario():
        session.update_job("b", "title", "Staff Platform Engineer")
        session.update_job("c", "description", "dbt, Airflow")
        session.close()

    asyncio.run(scenario())
    jobs = {job.id: job for job in session.state.jobs}
    assert jobs["b"].title == "Staff Platform Engineer"
    assert jobs["b"].description == "Kubernetes"
    assert jobs["c"].description == "dbt, Airflow"


def test_unknown_ids_are_ignored(analyzer: FakeAnalyzer) -> None:
    storage = MemoryStorage()
    session = _session(analyzer, storage=storage)
    before = session.state.jobs

    async def scenario():
        session.update_job("nope", "title", "x")
        session.remove_job("nope")
        assert not session.has_pending_writes

    asyncio.run(scenario())
    assert session.state.jobs == before


def test_update_job_rejects_unknown_field(analyzer: FakeAnalyzer) -> None:
    session = _session(analyzer)
    with pytest.raises(ValueError):
        session.update_job("a", "id", "hijack")


def test_last_job_can_be_removed(analyzer: FakeAnalyzer) -> None:
    session = _session(analyzer, jobs=[JobDescription(id="only", title="t", description="d")])

    async def scenario():
        session.remove_job("only")
        session.close()

    asyncio.run(scenario())
    assert session.state.jobs == []


# ── Persistence ───────────────────────────────────────────────


def test_edits_reach_storage_and_survive_restore(analyzer: FakeAnalyzer) -> None:
    storage = MemoryStorage()

    async def scenario():
        session = _session(analyzer, storage=storage, resume="", jobs=default_jobs())
        session.set_resume("X")
        session.update_job("job-1", "title", "SRE")
        await session.wait_for_writes()
        return await MatchSession.restore(analyzer, PersistenceService(storage), DEBOUNCE)

    restored = asyncio.run(scenario())
    assert restored.state.resume == "X"
    assert restored.state.jobs == [JobDescription(id="job-1", title="SRE", description="")]


def test_only_final_resume_value_is_persisted(analyzer: FakeAnalyzer) -> None:
    storage = MemoryStorage()
    session = _session(analyzer, storage=storage)

    async def scenario():
        session.set_resume("draft")
        await asyncio.sleep(DEBOUNCE / 5)
        session.set_resume("final")
        await session.wait_for_writes()

    asyncio.run(scenario())
    assert storage.writes == [("resume", "final")]


def test_close_cancels_pending_writes(analyzer: FakeAnalyzer) -> None:
    storage = MemoryStorage()
    session = _session(analyzer, storage=storage)

    async def scenario():
        session.set_resume("unsaved")
        session.add_job()
        session.close()
        await asyncio.sleep(DEBOUNCE * 3)

    asyncio.run(scenario())
    assert storage.writes == []


def test_restore_from_malformed_store_uses_default_job(analyzer: FakeAnalyzer) -> None:
    storage = MemoryStorage({"resume": "kept", "jobs": "{broken"})

    session = asyncio.run(MatchSession.restore(analyzer, PersistenceService(storage), DEBOUNCE))

    assert session.state.resume == "kept"
    assert session.state.jobs == default_jobs()
