from __future__ import annotations

import logging

from okr_app.models import KeyResult, MetricType
from okr_app.services.results import ScoreResult
from okr_app.services.score_levels import ScoringContext, scoring_context, round_half_up

logger = logging.getLogger(__name__)

# letter -> (score, level)
QUALITATIVE_GRADES = {
    "A": (5.00, "exceptional"),
    "B": (4.75, "very_good"),
    "C": (4.50, "good"),
    "D": (4.25, "meets"),
    "E": (3.00, "below"),
}
WORST_GRADE = "E"

# Floor on a segment's spread; keeps the ratio finite when two thresholds coincide.
MIN_SEGMENT_SPREAD = 1


def parse_actual_value(value) -> float:
    """Numeric actual value; anything unparseable counts as 0.0."""
    if value is None:
        return 0.0
    try:
        return float(str(value).strip())
    except ValueError:
        logger.debug("Unparseable actual value %r scored as 0.0", value)
        return 0.0


def _threshold(value) -> float:
    return float(value) if value is not None else 0.0


def calculate_qualitative_score(grade, ctx: ScoringContext) -> ScoreResult:
    normalized = grade.strip().upper() if grade is not None else WORST_GRADE
    score, level = QUALITATIVE_GRADES.get(normalized, QUALITATIVE_GRADES[WORST_GRADE])
    return ScoreResult(
        score=score,
        level=level,
        color=ctx.color_for_level(level),
        percentage=ctx.score_to_percentage(score),
    )


def _segment_bands(ctx: ScoringContext, segment: int) -> tuple[int, int]:
    """
    Band indexes a threshold segment interpolates between.

    Segment 0 runs below->meets, 3 runs very_good->exceptional. With fewer
    than five bands the upper segments collapse onto the lowest ones; with
    more, the bands above index 4 are only reached past ``exceptional``.
    """
    last = ctx.last_index
    start = max(0, min(last - (4 - segment), segment))
    return start, min(start + 1, last)


def interpolate_score(actual: float, metric_type: str, thresholds, ctx: ScoringContext) -> tuple[float, str]:
    """
    Piecewise-linear score for ``actual`` against five ordered thresholds.

    Returns the unrounded, unclamped score and the level name of the band
    the segment starts from.
    """
    bounds = [_threshold(t) for t in thresholds]
    bands = ctx.bands
    top = bands[ctx.last_index]
    lower_is_better = metric_type == MetricType.LOWER_BETTER

    def reached(boundary: float) -> bool:
        return actual <= boundary if lower_is_better else actual >= boundary

    if reached(bounds[4]):
        return top.score_value, top.level

    # walk down from very_good (3) to below (0)
    for segment in (3, 2, 1, 0):
        lower, upper = bounds[segment], bounds[segment + 1]
        if not reached(lower):
            continue
        if lower_is_better:
            ratio = 1 - (actual - upper) / max(lower - upper, MIN_SEGMENT_SPREAD)
        else:
            ratio = (actual - lower) / max(upper - lower, MIN_SEGMENT_SPREAD)
        start, end = _segment_bands(ctx, segment)
        start_score = bands[start].score_value
        end_score = bands[end].score_value
        return start_score + ratio * (end_score - start_score), bands[start].level

    return bands[0].score_value, bands[0].level


def calculate_quantitative_score(actual: float, metric_type: str, thresholds, ctx: ScoringContext) -> ScoreResult:
    score, level = interpolate_score(actual, metric_type, thresholds, ctx)
    score = min(max(score, ctx.min_score), ctx.max_score)
    score = round_half_up(score)
    return ScoreResult(
        score=score,
        level=level,
        color=ctx.color_for_level(level),
        percentage=ctx.score_to_percentage(score),
    )


def calculate_key_result_score(kr: KeyResult, ctx: ScoringContext | None = None) -> ScoreResult:
    """
    Normalized score of one key result.

    - QUALITATIVE: letter A..E mapped to a fixed score, unknown letters count as E.
    - HIGHER_BETTER / LOWER_BETTER: actual value interpolated between the
      thresholds onto the configured score levels, clamped to the level range
      and rounded to 2dp.
    """
    with scoring_context(ctx) as ctx:
        if kr.metric_type == MetricType.QUALITATIVE:
            return calculate_qualitative_score(kr.actual_value, ctx)
        return calculate_quantitative_score(
            parse_actual_value(kr.actual_value),
            kr.metric_type,
            kr.thresholds,
            ctx,
        )
