"""
Match session — the application state controller.

Owns the form model (résumé, jobs, results, loading flag, error), applies
edits, runs the analysis and keeps the résumé/job slots mirrored to storage
through one debounced writer per slot.

State machine for a submission:
    idle → loading → (results ready | error) → idle
Validation failures short-circuit before `loading` is ever set.
"""

import logging
import uuid

from jobmatch.domain.enums import ScoreBand
from jobmatch.domain.errors import (
    ANALYSIS_FAILED_MESSAGE,
    NO_JOBS_MESSAGE,
    VALIDATION_MESSAGE,
    AnalysisInProgressError,
    InputValidationError,
)
from jobmatch.domain.models import JobDescription, ResultView, SessionState
from jobmatch.ports.analysis_port import MatchAnalysisPort
from jobmatch.services.debounce import Debouncer
from jobmatch.services.persistence_service import PersistenceService

logger = logging.getLogger(__name__)

_JOB_FIELDS = ("title", "description")
_MISSING_DESCRIPTION = "Description not found."


def new_job_id() -> str:
    return f"job-{uuid.uuid4().hex[:12]}"


class MatchSession:
    """Single-owner form state for the lifetime of the service process."""

    def __init__(
        self,
        analyzer: MatchAnalysisPort,
        persistence: PersistenceService,
        resume: str = "",
        jobs: list[JobDescription] | None = None,
        debounce_seconds: float = 2.0,
    ) -> None:
        self._analyzer = analyzer
        self._state = SessionState(resume=resume, jobs=list(jobs or []))
        self._resume_writer: Debouncer[str] = Debouncer(
            "resume", debounce_seconds, persistence.save_resume
        )
        self._jobs_writer: Debouncer[list[JobDescription]] = Debouncer(
            "jobs", debounce_seconds, persistence.save_jobs
        )

    @classmethod
    async def restore(
        cls,
        analyzer: MatchAnalysisPort,
        persistence: PersistenceService,
        debounce_seconds: float = 2.0,
    ) -> "MatchSession":
        """Build a session from whatever the store holds (defaults if nothing usable)."""
        resume = await persistence.load_resume()
        jobs = await persistence.load_jobs()
        logger.info(f"Session restored: {len(resume)} résumé chars, {len(jobs)} job(s)")
        return cls(analyzer, persistence, resume, jobs, debounce_seconds)

    # ── Read side ─────────────────────────────────────────────

    @property
    def state(self) -> SessionState:
        """A snapshot; mutating it does not affect the session."""
        return self._state.model_copy(deep=True)

    def result_views(self) -> list[ResultView]:
        """Results best-first, each joined with the full text of its job."""
        descriptions = {job.id: job.description for job in self._state.jobs}
        return [
            ResultView(
                result=result.model_copy(deep=True),
                job_description=descriptions.get(result.job_id, _MISSING_DESCRIPTION),
                band=ScoreBand.for_score(result.match_percentage),
            )
            for result in self._state.results
        ]

    # ── Edits ─────────────────────────────────────────────────

    def set_resume(self, resume: str) -> None:
        self._state.resume = resume
        self._resume_writer.push(resume)

    def add_job(self) -> JobDescription:
        job = JobDescription(id=new_job_id(), title="", description="")
        self._set_jobs([*self._state.jobs, job])
        return job.model_copy()

    def remove_job(self, job_id: str) -> None:
        remaining = [job for job in self._state.jobs if job.id != job_id]
        if len(remaining) != len(self._state.jobs):
            self._set_jobs(remaining)

    def update_job(self, job_id: str, field: str, value: str) -> None:
        if field not in _JOB_FIELDS:
            raise ValueError(f"Unknown job field '{field}'. Expected one of: {', '.join(_JOB_FIELDS)}")
        if not any(job.id == job_id for job in self._state.jobs):
            return
        self._set_jobs(
            [
                job.model_copy(update={field: value}) if job.id == job_id else job
                for job in self._state.jobs
            ]
        )

    def _set_jobs(self, jobs: list[JobDescription]) -> None:
        self._state.jobs = jobs
        self._jobs_writer.push(list(jobs))

    # ── Analysis ──────────────────────────────────────────────

    def validate(self) -> None:
        """Raise InputValidationError unless the form can be submitted."""
        if not self._state.resume.strip():
            raise InputValidationError(VALIDATION_MESSAGE)
        if not self._state.jobs:
            raise InputValidationError(NO_JOBS_MESSAGE)
        if any(not job.title.strip() or not job.description.strip() for job in self._state.jobs):
            raise InputValidationError(VALIDATION_MESSAGE)

    async def submit_analysis(self) -> SessionState:
        """
        Validate, call the analyzer once, and store results best-first.

        Validation and analysis failures are recorded in `error` rather than
        raised. Only a submission overlapping a running one raises.
        """
        if self._state.is_loading:
            raise AnalysisInProgressError("An analysis is already running.")

        try:
            self.validate()
        except InputValidationError as exc:
            self._state.error = str(exc)
            return self.state

        self._state.error = None
        self._state.is_loading = True
        self._state.results = []
        resume = self._state.resume
        jobs = [job.model_copy() for job in self._state.jobs]

        try:
            results = await self._analyzer.analyze(resume, jobs)
        except Exception as exc:
            logger.error(f"Analysis of {len(jobs)} job(s) failed: {type(exc).__name__}: {exc}")
            self._state.error = ANALYSIS_FAILED_MESSAGE
        else:
            # sorted() is stable, so equal scores keep the service's order
            self._state.results = sorted(
                results, key=lambda r: r.match_percentage, reverse=True
            )
            logger.info(f"Analysis complete: {len(results)} result(s)")
        finally:
            self._state.is_loading = False

        return self.state

    # ── Lifecycle ─────────────────────────────────────────────

    @property
    def has_pending_writes(self) -> bool:
        return self._resume_writer.pending or self._jobs_writer.pending

    async def wait_for_writes(self) -> None:
        """Let both pending timers run out and their writes finish."""
        await self._resume_writer.wait()
        await self._jobs_writer.wait()

    def close(self) -> None:
        """Cancel pending debounce timers; their values are never written."""
        self._resume_writer.cancel()
        self._jobs_writer.cancel()
