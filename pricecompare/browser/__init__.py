"""
Browser page sessions.

Modules:
    page_session - PageSession protocol and the scoped Playwright implementation
"""

from .page_session import PageSession, PlaywrightPageSession, open_page

__all__ = [
    'PageSession',
    'PlaywrightPageSession',
    'open_page',
]
