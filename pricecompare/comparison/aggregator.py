"""
Cross-Country Aggregator

Groups normalized records by match key across countries. Reads a snapshot
and writes nothing, so it can be re-run against overlapping data.

Ordering of the emitted groups is fully determined by the input:
1. more countries first
2. higher match tier first
3. representative name, ascending (match key breaks remaining ties)
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Tuple

from ..models import ComparisonGroup, NormalizedRecord

logger = logging.getLogger(__name__)

MIN_COUNTRIES = 2


def latest_per_country(
    records: Iterable[NormalizedRecord],
) -> Dict[str, Dict[str, NormalizedRecord]]:
    """
    Keep the most recently captured record per (match key, country).

    Ties on capture time go to the record that arrived last.

    Returns:
        Mapping match key -> country -> record, in first-seen key order
    """
    by_key: Dict[str, Dict[str, NormalizedRecord]] = {}

    for record in records:
        countries = by_key.setdefault(record.match_key, {})
        current = countries.get(record.country)
        if current is None or record.captured_at >= current.captured_at:
            countries[record.country] = record

    return by_key


def _representative(per_country: Dict[str, NormalizedRecord]) -> NormalizedRecord:
    """Most recent record of a group; country code breaks capture-time ties."""
    return max(per_country.values(), key=lambda r: (r.captured_at, r.country))


def _sort_key(group: ComparisonGroup) -> Tuple[int, int, str, str]:
    return (-group.country_count, -group.match_tier.value, group.representative_name,
            group.match_key)


def aggregate(records: Iterable[NormalizedRecord]) -> List[ComparisonGroup]:
    """
    Build comparison groups from a set of normalized records.

    Keys seen in fewer than two countries are dropped.

    Args:
        records: Records for the time window, in arrival order

    Returns:
        Ordered list of ComparisonGroups
    """
    groups: List[ComparisonGroup] = []
    single_country = 0

    for match_key, per_country in latest_per_country(records).items():
        if len(per_country) < MIN_COUNTRIES:
            single_country += 1
            continue

        head = _representative(per_country)
        groups.append(ComparisonGroup(
            match_key=match_key,
            match_tier=head.match_tier,
            representative_name=head.name,
            brand=head.brand,
            category=head.category,
            unit_base=head.unit_base,
            per_country=dict(per_country),
        ))

    groups.sort(key=_sort_key)
    logger.debug("Built %d comparison groups (%d single-country keys dropped)",
                 len(groups), single_country)
    return groups


def groups_to_dicts(groups: Iterable[ComparisonGroup]) -> List[dict]:
    """Serialize groups for the query layer, preserving order."""
    return [group.to_dict() for group in groups]
