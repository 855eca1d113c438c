"""
Key giveaway handling.

Claim coordination, per-client throttling, operator curation and cover
lookup for a first-come pool of redemption keys.
"""
from .version import __version__, __author__, __license__

__all__ = [
    "__version__",
    "__author__",
    "__license__"
]
