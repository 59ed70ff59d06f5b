"""
Abstract interface for résumé-to-job match analysis.
Concrete implementations (Gemini, OpenAI, etc.) must implement this port.
"""

from abc import ABC, abstractmethod

from jobmatch.domain.models import JobDescription, MatchResult


class MatchAnalysisPort(ABC):
    """Port for AI-powered résumé/job fit scoring."""

    @abstractmethod
    async def analyze(
        self, resume: str, jobs: list[JobDescription]
    ) -> list[MatchResult]:
        """
        Score the résumé against every job in a single remote call.

        Returns one MatchResult per job in the order the service produced
        them; callers are responsible for any reordering.

        Raises:
            AnalysisError: on any failure, with transport detail logged only.
        """
        ...
