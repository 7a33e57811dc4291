"""
Specialized parsers for listing extraction.

Each parser handles a specific data source:
- StructuredDataParser: JSON-LD structured data (schema.org)
- HTMLContentParser: HTML element extraction
- PageTextParser: Regex patterns over visible page text
"""

from .html_parser import HTMLContentParser
from .page_text import PageTextParser
from .structured_data import StructuredDataParser

__all__ = [
    'StructuredDataParser',
    'HTMLContentParser',
    'PageTextParser',
]
