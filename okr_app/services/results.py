from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ScoreResult:
    score: float
    level: str
    color: str
    percentage: float


@dataclass(frozen=True)
class DepartmentScoreResult:
    automatic_okr_score: float
    automatic_okr_percentage: float
    score_level: str
    color: str
    director_evaluation: Optional[float] = None
    director_stars: Optional[int] = None
    director_comment: Optional[str] = None
    hr_evaluation_letter: Optional[str] = None
    hr_evaluation_numeric: Optional[float] = None
    hr_comment: Optional[str] = None
    business_block_evaluation: Optional[float] = None
    business_block_comment: Optional[str] = None
    final_combined_score: Optional[float] = None
    final_percentage: Optional[float] = None

    @property
    def has_director_evaluation(self) -> bool:
        return self.director_evaluation is not None

    @property
    def has_hr_evaluation(self) -> bool:
        return self.hr_evaluation_numeric is not None

    @property
    def has_business_block_evaluation(self) -> bool:
        return self.business_block_evaluation is not None
