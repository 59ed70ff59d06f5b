"""Shared fakes for the storage and analysis ports."""

from __future__ import annotations

import asyncio

import pytest

from jobmatch.domain.models import JobDescription, MatchResult, MissingSkill
from jobmatch.ports.analysis_port import MatchAnalysisPort
from jobmatch.ports.storage_port import StoragePort

# Short enough to keep the suite fast, long enough to edit "within" it
DEBOUNCE = 0.05


class MemoryStorage(StoragePort):
    """Dict-backed store that records every write."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})
        self.writes: list[tuple[str, str]] = []

    async def load(self, key: str) -> str | None:
        return self.data.get(key)

    async def save(self, key: str, value: str) -> None:
        self.writes.append((key, value))
        self.data[key] = value


class FakeAnalyzer(MatchAnalysisPort):
    """Returns canned results (or raises) and remembers what it was asked."""

    def __init__(
        self,
        results: list[MatchResult] | None = None,
        error: Exception | None = None,
        gate: asyncio.Event | None = None,
    ) -> None:
        self.results = results or []
        self.error = error
        self.gate = gate
        self.calls: list[tuple[str, list[JobDescription]]] = []

    async def analyze(self, resume: str, jobs: list[JobDescription]) -> list[MatchResult]:
        self.calls.append((resume, jobs))
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return list(self.results)


def make_result(job_id: str, score: float, title: str = "") -> MatchResult:
    return MatchResult(
        job_id=job_id,
        job_title=title or f"Role {job_id}",
        match_percentage=score,
        summary=f"Fit for {job_id}.",
        matching_skills=["Python"],
        missing_skills=[MissingSkill(skill="Kubernetes", context="Deployments run on it.")],
    )


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def analyzer() -> FakeAnalyzer:
    return FakeAnalyzer()
