"""
Persistence service — mirrors the résumé and job list into durable storage.

Reads are forgiving: an unreachable store or a malformed `jobs` slot is
logged and replaced by defaults so startup never fails. The form always
comes back with at least one (possibly blank) job row.
"""

import logging

from pydantic import TypeAdapter, ValidationError

from jobmatch.domain.enums import StorageKey
from jobmatch.domain.models import JobDescription
from jobmatch.ports.storage_port import StoragePort

logger = logging.getLogger(__name__)

DEFAULT_JOB_ID = "job-1"

_JOBS_ADAPTER = TypeAdapter(list[JobDescription])


def default_jobs() -> list[JobDescription]:
    """A single empty job row, shown on first run."""
    return [JobDescription(id=DEFAULT_JOB_ID, title="", description="")]


def serialize_jobs(jobs: list[JobDescription]) -> str:
    return _JOBS_ADAPTER.dump_json(jobs, by_alias=True).decode("utf-8")


def deserialize_jobs(raw: str | None) -> list[JobDescription]:
    """Parse the stored job list, falling back to default_jobs() on anything odd."""
    if not raw:
        return default_jobs()
    try:
        jobs = _JOBS_ADAPTER.validate_json(raw)
    except ValidationError as exc:
        logger.warning(f"Stored jobs are malformed, using defaults: {exc.error_count()} error(s)")
        return default_jobs()
    return jobs or default_jobs()


class PersistenceService:
    """Loads and saves the two form slots through a StoragePort."""

    def __init__(self, storage: StoragePort) -> None:
        self._storage = storage

    async def load_resume(self) -> str:
        return await self._load(StorageKey.RESUME) or ""

    async def load_jobs(self) -> list[JobDescription]:
        return deserialize_jobs(await self._load(StorageKey.JOBS))

    async def save_resume(self, resume: str) -> None:
        await self._storage.save(StorageKey.RESUME.value, resume)

    async def save_jobs(self, jobs: list[JobDescription]) -> None:
        await self._storage.save(StorageKey.JOBS.value, serialize_jobs(jobs))

    async def _load(self, key: StorageKey) -> str | None:
        try:
            return await self._storage.load(key.value)
        except Exception as exc:
            logger.warning(f"Could not read '{key.value}' from storage: {type(exc).__name__}: {exc}")
            return None
