"""Abigael Awino portfolio - static site build pipeline."""

__version__ = "1.0.0"

SITE_TITLE = "Abigael Awino Portfolio"


def get_site_title() -> str:
    """Website title used by the page shell"""
    return SITE_TITLE
