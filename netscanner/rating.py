"""Map elapsed time to a quality tier shared by every category."""

from __future__ import annotations

from netscanner.config import (
    EXCELLENT_BELOW_MS,
    FAIR_BELOW_MS,
    GOOD_BELOW_MS,
    POOR_BELOW_MS,
    TIER_CLASSES,
    TIER_COLORS,
)
from netscanner.models import Rating, RatingTier

# (exclusive upper bound, tier, stars); checked in order
_TIERS = [
    (EXCELLENT_BELOW_MS, RatingTier.EXCELLENT, 5),
    (GOOD_BELOW_MS, RatingTier.GOOD, 4),
    (FAIR_BELOW_MS, RatingTier.FAIR, 3),
    (POOR_BELOW_MS, RatingTier.POOR, 2),
]


def _rating(tier: RatingTier, stars: int) -> Rating:
    return Rating(
        tier=tier,
        stars=stars,
        label=tier.value,
        color=TIER_COLORS[tier.value],
        css_class=TIER_CLASSES[tier.value],
    )


_RATINGS = {tier: _rating(tier, stars) for _, tier, stars in _TIERS}
_BAD = _rating(RatingTier.BAD, 1)


def classify(elapsed_ms: float) -> Rating:
    """Return the rating for *elapsed_ms*.

    Bounds are inclusive-lower/exclusive-upper, so 49 is Excellent and 50
    is Good.  The failure sentinel always lands in the Bad tier.
    """
    for upper, tier, _stars in _TIERS:
        if elapsed_ms < upper:
            return _RATINGS[tier]
    return _BAD


def star_bar(count: int, total: int = 5) -> str:
    """Render *count* filled stars out of *total* (e.g. ``★★★☆☆``)."""
    return "★" * count + "☆" * (total - count)


def stars_text(rating: Rating, total: int = 5) -> str:
    return star_bar(rating.stars, total)
