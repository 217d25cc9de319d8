"""PMD Rules KO: the Korean PMD Java rule catalogue.

This package converts PMD's Korean rule-definition XML files into a single
``rules_data.js`` catalogue module, annotates every rule with a review tier
from a curated table, and offers search, filtering and paging over the result.
"""

__version__ = "0.1.0"

from .main import main

__all__ = ["main"]
