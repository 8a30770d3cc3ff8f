"""
Medicine Lookup Adapters

Implementations of MedicineLookupPort.
"""

from .link_lookup import LinkMedicineLookup, build_search_links

__all__ = [
    "LinkMedicineLookup",
    "build_search_links",
]
