"""Work order loading utilities (JSON documents, YAML for hand-written fixtures)."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from pathlib import Path

import yaml

from roborate.scenario.contract.models import WorkOrder
from roborate.scheduling.bands import BandResolver, BandSet, RateBand
from roborate.scheduling.calendar import DayClassifier, TieredBandSet, WeekdayClassifier

__all__ = ["parse_work_order", "load_work_order", "tier_of", "build_resolver"]

logger = logging.getLogger(__name__)

_TIER_RE = re.compile(r"^([a-z0-9]+)(?:[A-Z_\-]|$)")


def parse_work_order(text: str) -> WorkOrder:
    """Parse a JSON work order document."""
    return WorkOrder.model_validate_json(text)


def load_work_order(path: str | Path) -> WorkOrder:
    """Load a work order from ``.json`` or ``.yaml``/``.yml``.

    In YAML, quote the ``HH:MM:SS`` band boundaries to keep them as strings.
    """
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in {".yaml", ".yml"}:
        data = yaml.safe_load(text)
        if not isinstance(data, dict):
            raise ValueError(f"Work order {path} must contain a mapping")
        return WorkOrder.model_validate(data)
    return parse_work_order(text)


def tier_of(label: str) -> str | None:
    """Return the leading lowercase word of a band label (``standardDay`` -> ``standard``)."""
    match = _TIER_RE.match(label)
    return match.group(1) if match else None


def _group_by_tier(bands: Mapping[str, RateBand]) -> dict[str | None, dict[str, RateBand]]:
    grouped: dict[str | None, dict[str, RateBand]] = {}
    for label, band in bands.items():
        grouped.setdefault(tier_of(label), {})[label] = band
    return grouped


def build_resolver(
    order: WorkOrder,
    classifier: DayClassifier | None = None,
    *,
    strict: bool = True,
) -> BandResolver:
    """Build the band resolver for ``order``.

    When labels cover every tier the classifier emits (``standard*`` and ``extra*`` for the
    default weekday classifier) the result is a :class:`TieredBandSet`; otherwise all bands
    form one flat :class:`BandSet` and the day classification does not apply.
    """
    bands = order.bands()
    classifier = classifier or WeekdayClassifier()
    grouped = _group_by_tier(bands)
    resolver: BandSet | TieredBandSet
    if all(tier in grouped for tier in classifier.tiers):
        resolver = TieredBandSet(
            {tier: BandSet(grouped[tier]) for tier in classifier.tiers}, classifier
        )
        ignored = [
            label
            for tier, labelled in grouped.items()
            if tier not in classifier.tiers
            for label in labelled
        ]
        if ignored:
            logger.warning("Ignoring bands outside tiers %s: %s", classifier.tiers, ignored)
        logger.debug("Using tiered bands for tiers %s", classifier.tiers)
    else:
        matched = [tier for tier in classifier.tiers if tier in grouped]
        if matched:
            missing = [tier for tier in classifier.tiers if tier not in grouped]
            logger.warning(
                "Bands only cover tier(s) %s (missing %s); billing every day with one flat band set",
                matched,
                missing,
            )
        resolver = BandSet(bands)
        logger.debug("Using flat band set %s", list(bands))
    if strict:
        resolver.check_partition()
    return resolver
