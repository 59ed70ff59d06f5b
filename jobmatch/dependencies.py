"""
Dependency Injection container.

Wires abstract ports → concrete adapters. To swap a provider
(e.g., Gemini → OpenAI, file → Supabase), change the setting;
nothing else in the codebase changes.
"""

import logging
from functools import lru_cache

from supabase import create_client

from jobmatch.adapters.document_adapter import DocumentAdapter
from jobmatch.adapters.file_storage_adapter import FileStorageAdapter
from jobmatch.adapters.gemini_adapter import GeminiAdapter
from jobmatch.adapters.openai_adapter import OpenAIAdapter
from jobmatch.adapters.supabase_kv_adapter import SupabaseKVAdapter
from jobmatch.config import settings
from jobmatch.ports.analysis_port import MatchAnalysisPort
from jobmatch.ports.document_port import DocumentPort
from jobmatch.ports.storage_port import StoragePort
from jobmatch.services.persistence_service import PersistenceService
from jobmatch.services.session_service import MatchSession

logger = logging.getLogger(__name__)


# ── Singletons (cached) ──────────────────────────────────────


@lru_cache(maxsize=1)
def _get_analysis_adapter() -> MatchAnalysisPort:
    if settings.ai_provider == "openai":
        return OpenAIAdapter(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            timeout=settings.analysis_timeout_seconds,
        )
    return GeminiAdapter(
        api_key=settings.gemini_api_key,
        model=settings.gemini_model,
        timeout=settings.analysis_timeout_seconds,
    )


@lru_cache(maxsize=1)
def _get_storage_adapter() -> StoragePort:
    if settings.storage_backend == "supabase":
        client = create_client(settings.supabase_url, settings.supabase_key)
        return SupabaseKVAdapter(client=client, table=settings.supabase_table)
    return FileStorageAdapter(settings.storage_path)


@lru_cache(maxsize=1)
def _get_document_adapter() -> DocumentAdapter:
    return DocumentAdapter()


# ── Ports (return abstract types) ─────────────────────────────


def get_analysis_service() -> MatchAnalysisPort:
    """Inject the AI match analysis adapter."""
    return _get_analysis_adapter()


def get_storage() -> StoragePort:
    """Inject the durable key-value store."""
    return _get_storage_adapter()


def get_document_parser() -> DocumentPort:
    """Inject the résumé document text extractor (PDF + DOCX)."""
    return _get_document_adapter()


# ── Session (one per process) ─────────────────────────────────

_session: MatchSession | None = None


async def open_session() -> MatchSession:
    """Restore the process-wide session from storage. Called at startup."""
    global _session
    _session = await MatchSession.restore(
        analyzer=get_analysis_service(),
        persistence=PersistenceService(get_storage()),
        debounce_seconds=settings.persist_debounce_seconds,
    )
    return _session


def close_session() -> None:
    """Tear the session down, cancelling any pending debounced writes."""
    global _session
    if _session is not None:
        _session.close()
        _session = None
        logger.info("Session closed")


def get_session() -> MatchSession:
    """Inject the live session."""
    if _session is None:
        raise RuntimeError("Session is not open; the app lifespan has not started.")
    return _session
