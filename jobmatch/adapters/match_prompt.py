"""
Prompt and response handling shared by every MatchAnalysisPort adapter.

The request carries the résumé verbatim and the jobs reduced to
id/title/description; the response must be a bare JSON array of
MatchResult objects.
"""

import json

from pydantic import TypeAdapter

from jobmatch.domain.models import JobDescription, MatchResult

SYSTEM_PROMPT = (
    "You are an expert technical recruiter and career coach. "
    "You compare a candidate's resume against several job descriptions at once "
    "and judge how well the candidate fits each role relative to the others. "
    "Be specific, honest and critical. Never invent experience the resume does not show."
)

_RESULTS_ADAPTER = TypeAdapter(list[MatchResult])


def build_user_prompt(resume: str, jobs: list[JobDescription]) -> str:
    """Embed the résumé and the job list into the analysis instruction."""
    jobs_payload = json.dumps(
        [job.model_dump(include={"id", "title", "description"}) for job in jobs],
        indent=2,
        ensure_ascii=False,
    )
    return f"""Analyze the following resume against each of the job descriptions provided.

For each job description, perform the following steps:
1. Identify the key skills, qualifications, and experience required by the job.
2. Identify the skills, qualifications, and experience present in the resume.
3. Compute a match percentage from 0 to 100 for how well the resume fits the job.
4. Write a concise summary explaining the rationale for the score.
5. List up to 5 of the most important matching skills.
6. List up to 5 of the most important missing skills. For each one, add a
   one-sentence context explaining why that skill is important for the job.

Use the job's "id" as "jobId" and its "title" as "jobTitle" in your answer.
Return exactly one result per job. Return ONLY JSON that matches the response
schema, with no markdown fences and no text before or after it.

## Resume
{resume}

## Job Descriptions
{jobs_payload}
"""


def parse_match_results(raw_text: str | None) -> list[MatchResult]:
    """
    Trim and parse the model's raw text into MatchResult objects.

    Raises ValueError if the text is not JSON or is not an array of
    objects carrying every MatchResult field.
    """
    if raw_text is None:
        raise ValueError("Model returned an empty response.")
    text = raw_text.strip()
    if not text:
        raise ValueError("Model returned an empty response.")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Model response is not valid JSON: {exc}") from exc
    if not isinstance(data, list):
        raise ValueError(
            f"Model response is a {type(data).__name__}, expected a JSON array."
        )
    # pydantic.ValidationError is a ValueError subclass
    return _RESULTS_ADAPTER.validate_python(data)
