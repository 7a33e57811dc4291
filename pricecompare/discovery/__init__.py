"""
URL Discovery modules for Lidl storefronts.

Modules:
    lidl_discoverer - LidlURLDiscoverer (sitemap first, category fallback)
"""

from typing import Optional

import requests

from ..common.config_loader import load_countries
from .lidl_discoverer import LidlURLDiscoverer, decode_sitemap, pick_product_urls


def get_discoverer_for_country(country: str, session: Optional[requests.Session] = None) -> LidlURLDiscoverer:
    """
    Get a URL discoverer configured for a country.

    Args:
        country: Country code (e.g., "hr")
        session: Optional shared HTTP session

    Returns:
        LidlURLDiscoverer for the country's storefront

    Raises:
        ValueError: If the country is not configured
    """
    country = country.lower().strip()
    countries = load_countries()

    if country not in countries:
        raise ValueError(f"Unsupported country: {country}. Supported: {', '.join(countries)}")

    return LidlURLDiscoverer(dict(countries[country], code=country), session=session)


def get_supported_countries() -> list:
    """Return list of configured country codes."""
    return list(load_countries().keys())


__all__ = [
    'LidlURLDiscoverer',
    'decode_sitemap',
    'pick_product_urls',
    'get_discoverer_for_country',
    'get_supported_countries',
]
