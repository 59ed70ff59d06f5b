"""
Concrete implementation of MatchAnalysisPort using OpenAI GPT-4o-mini + Instructor.
"""

import logging

import instructor
from openai import AsyncOpenAI

from jobmatch.adapters.match_prompt import SYSTEM_PROMPT, build_user_prompt
from jobmatch.domain.errors import AnalysisError
from jobmatch.domain.models import JobDescription, MatchAnalysis, MatchResult
from jobmatch.ports.analysis_port import MatchAnalysisPort

logger = logging.getLogger(__name__)


class OpenAIAdapter(MatchAnalysisPort):
    """Talks to OpenAI's chat completions API for structured output."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        timeout: float = 60.0,
        instructor_client: instructor.AsyncInstructor | None = None,
    ) -> None:
        self._api_key = api_key
        self._timeout = timeout
        self._instructor_client = instructor_client
        self._model = model

    async def analyze(
        self, resume: str, jobs: list[JobDescription]
    ) -> list[MatchResult]:
        """Use Instructor to force GPT output into the MatchAnalysis schema."""
        try:
            analysis = await self._get_client().chat.completions.create(
                model=self._model,
                response_model=MatchAnalysis,
                # A single attempt: a reply that fails validation is an error
                max_retries=1,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": build_user_prompt(resume, jobs)},
                ],
            )
        except Exception as exc:
            logger.error(
                f"OpenAI analysis failed for {len(jobs)} job(s): "
                f"{type(exc).__name__}: {exc}"
            )
            raise AnalysisError() from exc

        logger.info(f"OpenAI returned {len(analysis.results)} match result(s)")
        return analysis.results

    def _get_client(self) -> instructor.AsyncInstructor:
        if self._instructor_client is None:
            if not self._api_key:
                raise ValueError("OPENAI_API_KEY is not configured")
            raw_client = AsyncOpenAI(
                api_key=self._api_key, timeout=self._timeout, max_retries=0
            )
            self._instructor_client = instructor.from_openai(raw_client)
        return self._instructor_client
