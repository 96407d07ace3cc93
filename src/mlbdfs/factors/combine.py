"""Combine factor adjustments into rates and confidence."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Sequence

from mlbdfs.config.settings import DEFAULT_WEIGHTS, ConfidenceWeights
from mlbdfs.models.factors import FactorAdjustment, FactorKind
from mlbdfs.numeric import clamp


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedFactors:
    adjustments: tuple[FactorAdjustment, ...]
    substituted: tuple[FactorKind, ...]


def combine_rate(base_rate: float, adjustments: Iterable[FactorAdjustment], category: str) -> float:
    """Apply adjustments to a per-opportunity rate.

    Multiplier kinds compound by product; additive kinds are summed on top of
    the multiplied rate. The result never goes below zero.
    """

    multiplier = 1.0
    delta = 0.0
    for adjustment in adjustments:
        value = adjustment.value_for(category)
        if adjustment.is_multiplier:
            multiplier *= value
        else:
            delta += value
    return max(0.0, base_rate * multiplier + delta)


def resolve_factors(
    adjustments: Iterable[FactorAdjustment],
    kinds: Sequence[FactorKind] = tuple(FactorKind),
) -> ResolvedFactors:
    """Fill every kind in ``kinds`` that has no adjustment with a neutral one."""

    provided = list(adjustments)
    seen: set[FactorKind] = set()
    for adjustment in provided:
        if adjustment.kind in seen:
            raise ValueError(f"Duplicate factor adjustment for kind {adjustment.kind.value!r}")
        seen.add(adjustment.kind)

    substituted: list[FactorKind] = []
    for kind in kinds:
        kind = FactorKind(kind)
        if kind not in seen:
            substituted.append(kind)
            provided.append(FactorAdjustment.neutral(kind, note="missing input"))
    if substituted:
        logger.debug("Substituted neutral factors: %s", ", ".join(kind.value for kind in substituted))
    return ResolvedFactors(adjustments=tuple(provided), substituted=tuple(substituted))


def aggregate_confidence(
    sample_confidence: float,
    adjustments: Iterable[FactorAdjustment],
    weights: ConfidenceWeights = DEFAULT_WEIGHTS,
) -> float:
    """Weighted mean of sample and factor confidences over the full weight total.

    Missing kinds count as zero, so absent or thin data can only lower the
    result.
    """

    weighted = weights.sample * clamp(sample_confidence, 0.0, 100.0)
    for adjustment in adjustments:
        weighted += weights.weight_for(adjustment.kind) * adjustment.confidence_contribution
    return clamp(weighted / weights.total, 0.0, 100.0)
