from __future__ import annotations

import logging

from okr_app.models import Department, Evaluation, EvaluationStatus, EvaluatorType, TargetType
from okr_app.services.evaluation_lifecycle import DIRECTOR_MAX_RATING, DIRECTOR_MIN_RATING, STAR_STEP
from okr_app.services.objective_math import calculate_department_okr_score
from okr_app.services.results import DepartmentScoreResult
from okr_app.services.score_levels import ScoringContext, scoring_context, round_half_up

logger = logging.getLogger(__name__)

AUTOMATIC_WEIGHT = 0.60
DIRECTOR_WEIGHT = 0.20
HR_WEIGHT = 0.20

HR_LETTER_SCORES = {"A": 5.0, "B": 4.75, "C": 4.5, "D": 4.25}


def hr_letter_to_numeric(letter: str | None) -> float | None:
    return HR_LETTER_SCORES.get(letter) if letter is not None else None


def numeric_to_stars(score: float | None) -> int | None:
    """Director 4.25..5.0 back to 1..5 stars for display."""
    if score is None or score < DIRECTOR_MIN_RATING or score > DIRECTOR_MAX_RATING:
        return None
    return int(round_half_up(1 + (score - DIRECTOR_MIN_RATING) / STAR_STEP, "1"))


def submitted_evaluations_by_type(target_type: str, target_id) -> dict[str, Evaluation]:
    """SUBMITTED evaluations of one target keyed by evaluator type; the earliest one wins."""
    evaluations = list(
        Evaluation.objects.filter(
            target_type=target_type,
            target_id=target_id,
            status=EvaluationStatus.SUBMITTED,
        ).order_by("created_at")
    )
    logger.debug("Found %d submitted evaluations for %s:%s", len(evaluations), target_type, target_id)

    by_type: dict[str, Evaluation] = {}
    for evaluation in evaluations:
        by_type.setdefault(evaluation.evaluator_type, evaluation)
    return by_type


def blend_scores(automatic: float | None, director: float | None, hr: float | None) -> float | None:
    """60% automatic + 20% director + 20% HR, only when all three are known."""
    if automatic is None or director is None or hr is None:
        return None
    return round_half_up(
        automatic * AUTOMATIC_WEIGHT + director * DIRECTOR_WEIGHT + hr * HR_WEIGHT
    )


def calculate_department_score_with_evaluations(
    department: Department,
    ctx: ScoringContext | None = None,
) -> DepartmentScoreResult:
    """
    Automatic OKR score of a department combined with its submitted
    Director and HR evaluations. The Business Block rating is reported
    alongside but is not part of the blend.
    """
    with scoring_context(ctx) as ctx:
        automatic = calculate_department_okr_score(department, ctx)
        evals = submitted_evaluations_by_type(TargetType.DEPARTMENT, department.pk)

        director_eval = evals.get(EvaluatorType.DIRECTOR)
        director_score = director_eval.numeric_rating if director_eval else None

        hr_eval = evals.get(EvaluatorType.HR)
        hr_letter = hr_eval.letter_rating if hr_eval else None
        hr_score = hr_letter_to_numeric(hr_letter)

        bb_eval = evals.get(EvaluatorType.BUSINESS_BLOCK)

        final_score = blend_scores(automatic.score, director_score, hr_score)
        score_level = ctx.level_for_score(final_score) if final_score is not None else automatic.level

        return DepartmentScoreResult(
            automatic_okr_score=automatic.score,
            automatic_okr_percentage=automatic.percentage,
            director_evaluation=director_score,
            director_stars=numeric_to_stars(director_score),
            director_comment=director_eval.comment if director_eval else None,
            hr_evaluation_letter=hr_letter,
            hr_evaluation_numeric=hr_score,
            hr_comment=hr_eval.comment if hr_eval else None,
            business_block_evaluation=bb_eval.numeric_rating if bb_eval else None,
            business_block_comment=bb_eval.comment if bb_eval else None,
            final_combined_score=final_score,
            final_percentage=ctx.score_to_percentage(final_score) if final_score is not None else None,
            score_level=score_level,
            color=ctx.color_for_level(score_level),
        )
