"""
Concrete implementation of MatchAnalysisPort using Google Gemini (google-genai).

The response is constrained to a JSON array via `response_schema` and then
parsed from raw text, so a malformed reply surfaces as AnalysisError.
"""

import asyncio
import logging

from google import genai
from google.genai import types

from jobmatch.adapters.match_prompt import SYSTEM_PROMPT, build_user_prompt, parse_match_results
from jobmatch.domain.errors import AnalysisError
from jobmatch.domain.models import JobDescription, MatchResult
from jobmatch.ports.analysis_port import MatchAnalysisPort

logger = logging.getLogger(__name__)

# Gemini's OpenAPI-style schema for the array of match results
RESPONSE_SCHEMA = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "jobId": {"type": "STRING", "description": "The id of the job."},
            "jobTitle": {"type": "STRING", "description": "The title of the job."},
            "matchPercentage": {
                "type": "NUMBER",
                "description": "Match score from 0 to 100.",
            },
            "summary": {
                "type": "STRING",
                "description": "Concise rationale for the score.",
            },
            "matchingSkills": {
                "type": "ARRAY",
                "items": {"type": "STRING"},
                "description": "Up to 5 key matching skills.",
            },
            "missingSkills": {
                "type": "ARRAY",
                "description": "Up to 5 key missing skills.",
                "items": {
                    "type": "OBJECT",
                    "properties": {
                        "skill": {"type": "STRING"},
                        "context": {
                            "type": "STRING",
                            "description": "Why this skill matters for the job, in one sentence.",
                        },
                    },
                    "required": ["skill", "context"],
                },
            },
        },
        "required": [
            "jobId",
            "jobTitle",
            "matchPercentage",
            "summary",
            "matchingSkills",
            "missingSkills",
        ],
    },
}


class GeminiAdapter(MatchAnalysisPort):
    """Talks to Gemini's generate_content API with a JSON response schema."""

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-flash",
        timeout: float = 60.0,
        client: genai.Client | None = None,
    ) -> None:
        self._api_key = api_key
        self._client = client
        self._model = model
        self._timeout = timeout

    async def analyze(
        self, resume: str, jobs: list[JobDescription]
    ) -> list[MatchResult]:
        """One generate_content call for all jobs; any failure → AnalysisError."""
        try:
            response = await asyncio.wait_for(
                self._get_client().aio.models.generate_content(
                    model=self._model,
                    contents=build_user_prompt(resume, jobs),
                    config=types.GenerateContentConfig(
                        system_instruction=SYSTEM_PROMPT,
                        response_mime_type="application/json",
                        response_schema=RESPONSE_SCHEMA,
                    ),
                ),
                timeout=self._timeout,
            )
            results = parse_match_results(response.text)
        except Exception as exc:
            logger.error(
                f"Gemini analysis failed for {len(jobs)} job(s): "
                f"{type(exc).__name__}: {exc}"
            )
            raise AnalysisError() from exc

        logger.info(f"Gemini returned {len(results)} match result(s)")
        return results

    def _get_client(self) -> genai.Client:
        if self._client is None:
            if not self._api_key:
                raise ValueError("GEMINI_API_KEY is not configured")
            self._client = genai.Client(api_key=self._api_key)
        return self._client
