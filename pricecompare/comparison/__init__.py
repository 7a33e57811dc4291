"""
Cross-country comparison of normalized records.

Modules:
    aggregator - Group records by match key into ComparisonGroups
"""

from .aggregator import MIN_COUNTRIES, aggregate, groups_to_dicts, latest_per_country

__all__ = [
    'MIN_COUNTRIES',
    'aggregate',
    'groups_to_dicts',
    'latest_per_country',
]
