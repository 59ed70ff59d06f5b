"""
Pydantic models for requests, responses, and internal data transfer.
Pure data — no I/O, no side effects.

Field names travel as camelCase on the wire and in storage
(``jobId``, ``matchPercentage`` ...); both spellings are accepted on input.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from jobmatch.domain.enums import ScoreBand


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ── Jobs ──────────────────────────────────────────────────────


class JobDescription(_WireModel):
    """A job the user wants their résumé scored against."""

    id: str
    title: str = ""
    description: str = ""


class JobUpdate(_WireModel):
    """Request body for PATCH /session/jobs/{id}."""

    field: Literal["title", "description"]
    value: str


# ── Analysis ──────────────────────────────────────────────────


class MissingSkill(_WireModel):
    """A skill absent from the résumé, with why it matters for the job."""

    skill: str = Field(..., description="The missing skill")
    context: str = Field(
        ...,
        description="One sentence explaining why this skill is important for the job",
    )


class MatchResult(_WireModel):
    """Structured fit of the résumé against a single job."""

    job_id: str = Field(..., description="The id of the job this result refers to")
    job_title: str = Field(..., description="The title of the job")
    match_percentage: float = Field(
        ...,
        ge=0,
        le=100,
        description="How well the résumé matches the job, from 0 to 100",
    )
    summary: str = Field(..., description="Concise rationale for the score")
    matching_skills: list[str] = Field(
        ...,
        description="Up to 5 key skills present in both the résumé and the job",
    )
    missing_skills: list[MissingSkill] = Field(
        ...,
        description="Up to 5 key skills required by the job but absent from the résumé",
    )


class MatchAnalysis(_WireModel):
    """Schema enforced by Instructor for structured AI output."""

    results: list[MatchResult] = Field(
        ...,
        description="Exactly one result per submitted job",
    )


class ResultView(_WireModel):
    """A result joined with the job it was produced for."""

    result: MatchResult
    job_description: str
    band: ScoreBand


# ── Session ───────────────────────────────────────────────────


class SessionState(_WireModel):
    """Response model for GET /session — the whole form model."""

    resume: str = ""
    jobs: list[JobDescription] = Field(default_factory=list)
    results: list[MatchResult] = Field(default_factory=list)
    is_loading: bool = False
    error: str | None = None


class ResumeUpdate(_WireModel):
    """Request body for PUT /session/resume."""

    resume: str


class ResumeUploadResponse(_WireModel):
    """Response after successful resume upload."""

    message: str = "Resume processed successfully"
    characters_extracted: int
