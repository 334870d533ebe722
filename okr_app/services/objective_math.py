from __future__ import annotations

from typing import Iterable
import logging

from okr_app.models import Department, Objective
from okr_app.services.key_result_math import calculate_key_result_score
from okr_app.services.results import ScoreResult
from okr_app.services.score_levels import ScoringContext, scoring_context, round_half_up

logger = logging.getLogger(__name__)

TOTAL_WEIGHT = 100.0
EMPTY_SCORE = 3.0
EMPTY_LEVEL = "below"


def empty_score(ctx: ScoringContext) -> ScoreResult:
    """Score reported for an objective or department with nothing to measure."""
    return ScoreResult(
        score=EMPTY_SCORE,
        level=EMPTY_LEVEL,
        color=ctx.color_for_level(EMPTY_LEVEL),
        percentage=0.0,
    )


def score_result_for(score: float, ctx: ScoringContext) -> ScoreResult:
    """Level and percentage follow the unrounded score; the score itself is rounded to 2dp."""
    level = ctx.level_for_score(score)
    return ScoreResult(
        score=round_half_up(score),
        level=level,
        color=ctx.color_for_level(level),
        percentage=ctx.score_to_percentage(score),
    )


def _key_results_of(objective) -> list:
    krs = objective.key_results
    return list(krs.all() if hasattr(krs, "all") else krs)


def calculate_objective_score(key_results: Iterable, ctx: ScoringContext | None = None) -> ScoreResult:
    """
    Objective score = plain mean of its key result scores.

    KeyResult.weight is deliberately not applied here.
    """
    key_results = list(key_results or [])
    with scoring_context(ctx) as ctx:
        if not key_results:
            return empty_score(ctx)
        total = sum(calculate_key_result_score(kr, ctx).score for kr in key_results)
        return score_result_for(total / len(key_results), ctx)


def calculate_department_score(objectives: Iterable[Objective], ctx: ScoringContext | None = None) -> ScoreResult:
    """
    Department score = weighted mean of objective scores.

    - Objectives without key results are left out entirely.
    - An objective without a weight gets 100 / (objectives that have key results).
    - Nothing left to average -> the empty score.
    """
    scored = [(obj, _key_results_of(obj)) for obj in (objectives or [])]
    scored = [(obj, krs) for obj, krs in scored if krs]

    with scoring_context(ctx) as ctx:
        if not scored:
            return empty_score(ctx)

        default_weight = TOTAL_WEIGHT / len(scored)
        weighted_sum = 0.0
        total_weight = 0.0
        for obj, krs in scored:
            weight = float(obj.weight) if obj.weight is not None else default_weight
            weighted_sum += calculate_objective_score(krs, ctx).score * weight
            total_weight += weight

        if total_weight <= 0:
            logger.warning("Objectives of department have zero total weight; using 0 as mean")
        avg = weighted_sum / total_weight if total_weight > 0 else 0.0
        return score_result_for(avg, ctx)


def calculate_department_okr_score(department: Department, ctx: ScoringContext | None = None) -> ScoreResult:
    objectives = department.objectives.prefetch_related("key_results")
    return calculate_department_score(objectives, ctx)
