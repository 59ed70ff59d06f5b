"""Enums shared across the domain layer."""

from enum import Enum


class ScoreBand(str, Enum):
    STRONG = "strong"
    FAIR = "fair"
    WEAK = "weak"

    @classmethod
    def for_score(cls, score: float) -> "ScoreBand":
        if score >= 80:
            return cls.STRONG
        if score >= 60:
            return cls.FAIR
        return cls.WEAK


class StorageKey(str, Enum):
    RESUME = "resume"
    JOBS = "jobs"
