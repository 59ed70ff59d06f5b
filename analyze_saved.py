"""
Run one analysis against the saved résumé and jobs (no server needed).
Run from the project folder: python analyze_saved.py
"""

import asyncio
import sys

from jobmatch.dependencies import close_session, open_session
from jobmatch.domain.enums import ScoreBand


async def analyze_saved() -> int:
    print("Restoring saved session...")
    session = await open_session()
    state = session.state
    print(f"  Résumé: {len(state.resume)} chars, jobs: {len(state.jobs)}")

    print("Analyzing...")
    try:
        state = await session.submit_analysis()
    finally:
        close_session()

    if state.error:
        print(f"FAILED: {state.error}")
        return 1

    for rank, result in enumerate(state.results, 1):
        band = ScoreBand.for_score(result.match_percentage).value
        print(f"\n[{rank}] {result.job_title} — {result.match_percentage:g}% ({band})")
        print(f"    {result.summary}")
        print(f"    + {', '.join(result.matching_skills) or '-'}")
        for missing in result.missing_skills:
            print(f"    - {missing.skill}: {missing.context}")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(analyze_saved()))
