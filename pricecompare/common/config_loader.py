"""
Configuration Loader

Loads YAML configuration files for storefront countries, the brand
vocabulary, product-type and category keyword tables, and page selectors.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml


def _get_config_dir() -> Path:
    """Get the config directory path."""
    # Try relative to this file first
    module_dir = Path(__file__).parent.parent.parent
    config_dir = module_dir / 'config'

    if config_dir.exists():
        return config_dir

    # Try current working directory
    cwd_config = Path.cwd() / 'config'
    if cwd_config.exists():
        return cwd_config

    raise FileNotFoundError(
        f"Config directory not found. Tried: {config_dir}, {cwd_config}"
    )


def load_config(filename: str) -> Dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        filename: Name of the config file (e.g., 'countries.yaml')

    Returns:
        Parsed YAML content as dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
    """
    config_path = _get_config_dir() / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


def load_countries() -> Dict[str, Dict[str, Any]]:
    """
    Load storefront configuration per country code.

    Returns:
        Dictionary mapping country code to its storefront settings

    Example:
        {
            'hr': {
                'name': 'Hrvatska',
                'host': 'https://www.lidl.hr',
                'sitemap': '/p/export/HR/hr/product_sitemap.xml.gz',
                'fallback_paths': ['/c/hrana-s7', ...],
                'accept_language': 'hr-HR,hr;q=0.9,en;q=0.8',
            },
            ...
        }
    """
    config = load_config('countries.yaml')
    return config.get('countries', {})


def load_known_brands() -> List[str]:
    """
    Load the curated brand vocabulary for name substring matching.

    Order matters: the first brand found in a product name wins.

    Returns:
        List of brand names (canonical capitalization)
    """
    config = load_config('known_brands.yaml')
    return list(config.get('brands', []))


def load_product_types() -> List[Dict[str, Any]]:
    """
    Load the ordered product family table.

    Returns:
        List of families, evaluated in order

    Example:
        [
            {
                'type': 'milk',
                'keywords': {'en': ['milk'], 'de': ['milch'], ...},
                'subtypes': [{'type': 'fresh-milk', 'keywords': {...}}],
            },
            ...
        ]
    """
    config = load_config('product_types.yaml')
    return list(config.get('product_types', []))


def load_categories() -> List[Dict[str, Any]]:
    """
    Load the ordered coarse category table.

    Returns:
        List of categories, each with a 'category' name and
        'keywords' mapping language code to keyword list
    """
    config = load_config('categories.yaml')
    return list(config.get('categories', []))


def load_selectors() -> Dict[str, Any]:
    """
    Load DOM selector lists and text markers for listing extraction.

    Returns:
        Dictionary with keys such as 'name', 'brand', 'gtin', 'price',
        'unit', 'loyalty', 'promo' and 'deposit'
    """
    return load_config('selectors.yaml')


def get_brands_lowercase_map(brands: Optional[List[str]] = None) -> Dict[str, str]:
    """
    Get mapping from lowercase brand name to canonical form.

    Args:
        brands: Brand names (if None, loads from config)

    Returns:
        Dictionary mapping lowercase brand to canonical form, in input order

    Example:
        {
            'milbona': 'Milbona',
            'chef select': 'Chef Select',
            ...
        }
    """
    if brands is None:
        brands = load_known_brands()

    return {brand.lower(): brand for brand in brands}
