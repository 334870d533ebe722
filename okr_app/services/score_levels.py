from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterator, Sequence
import logging

from okr_app.models import ScoreLevel

logger = logging.getLogger(__name__)


def round_half_up(x: float, places: str = "0.01") -> float:
    return float(Decimal(str(x)).quantize(Decimal(places), rounding=ROUND_HALF_UP))


def normalize_level_name(name: str) -> str:
    """'Very Good' -> 'very_good'"""
    return name.strip().lower().replace(" ", "_")


@dataclass(frozen=True)
class Band:
    name: str
    score_value: float
    color: str
    display_order: int = 0

    @property
    def level(self) -> str:
        return normalize_level_name(self.name)


# Used when the score_level table is empty.
DEFAULT_BANDS: tuple[Band, ...] = (
    Band("below",       3.00, "#d9534f", 1),
    Band("meets",       4.25, "#f0ad4e", 2),
    Band("good",        4.50, "#5cb85c", 3),
    Band("very_good",   4.75, "#28a745", 4),
    Band("exceptional", 5.00, "#1e7b34", 5),
)


@dataclass
class ScoringContext:
    """
    Snapshot of the score level directory for one scoring pass.

    Built once and handed to every key result / objective / department
    computation of the pass so the directory is read a single time.
    """
    bands: Sequence[Band] = field(default_factory=lambda: DEFAULT_BANDS)
    is_default: bool = True

    @classmethod
    def load(cls) -> "ScoringContext":
        rows = list(ScoreLevel.objects.order_by("display_order"))
        if not rows:
            return cls()
        bands = tuple(Band(r.name, r.score_value, r.color, r.display_order) for r in rows)
        return cls(bands=bands, is_default=False)

    @classmethod
    def from_levels(cls, levels) -> "ScoringContext":
        """Build a context from unsaved ScoreLevel-like objects (tests, previews)."""
        bands = tuple(
            Band(lv.name, lv.score_value, lv.color, getattr(lv, "display_order", 0))
            for lv in levels
        )
        if not bands:
            return cls()
        return cls(bands=bands, is_default=False)

    # ── band lookups ────────────────────────────────────────────────

    @property
    def min_score(self) -> float:
        return self.bands[0].score_value

    @property
    def max_score(self) -> float:
        return self.bands[-1].score_value

    @property
    def last_index(self) -> int:
        return len(self.bands) - 1

    def level_for_score(self, score: float) -> str:
        """Highest band whose value the score reaches; the lowest band otherwise."""
        for band in reversed(self.bands):
            if score >= band.score_value:
                return band.level
        return self.bands[0].level

    def color_for_level(self, level: str) -> str:
        wanted = level.replace("_", " ").lower()
        for band in self.bands:
            if band.name.replace("_", " ").lower() == wanted:
                return band.color
        return self.bands[0].color

    def score_to_percentage(self, score: float) -> float:
        span = self.max_score - self.min_score
        if span == 0:
            return 0.0
        return round_half_up((score - self.min_score) / span * 1000, "1") / 10


@contextmanager
def scoring_context(ctx: ScoringContext | None = None) -> Iterator[ScoringContext]:
    """
    Open a scoring pass.

    Reuses ``ctx`` when the caller already holds one, otherwise loads a
    fresh snapshot and drops it when the block exits, errors included.
    """
    if ctx is not None:
        yield ctx
        return

    snapshot = ScoringContext.load()
    logger.debug("Scoring pass opened with %d score levels (default=%s)",
                 len(snapshot.bands), snapshot.is_default)
    try:
        yield snapshot
    finally:
        logger.debug("Scoring pass closed")
