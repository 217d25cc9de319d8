"""Annotate catalogue rules with their review tier.

Every rule in the catalogue must have exactly one entry in the tier table.
A rule without an entry stops the run: publishing an unreviewed rule is
worse than failing the build. Entries without a rule are only reported.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .constants import TIER_VALUES

if TYPE_CHECKING:
    from .data_module import RulesDataModule
    from .rule import Rules
    from .tier_table import TierTable

# Configure logging
logger = logging.getLogger(__name__)


class MissingTierError(ValueError):
    """Catalogue rules have no entry in the tier table.

    Attributes:
        names: Names of the rules without an entry, in catalogue order.

    """

    def __init__(self, names: list[str]) -> None:
        """Initialize the error with the offending rule names.

        Args:
            names: Names of the rules without an entry.

        """
        self.names = names
        super().__init__(
            f"{len(names)} rules missing from tier table: {', '.join(names)}"
        )


class TierAnnotator:
    """Set tier and claude_comment on every rule from a TierTable."""

    def __init__(self, *, rules: Rules, table: TierTable) -> None:
        """Initialize the TierAnnotator.

        Args:
            rules: Rules object to annotate in place.
            table: Tier table to annotate from.

        """
        self.rules = rules
        self.table = table

    def missing_names(self) -> list[str]:
        """Get catalogue rules with no tier entry.

        Returns:
            Rule names in catalogue order.

        """
        return [name for name in self.rules.names() if name not in self.table]

    def stale_names(self) -> list[str]:
        """Get tier entries with no catalogue rule.

        Returns:
            Sorted rule names.

        """
        return sorted(self.table.names() - set(self.rules.names()))

    def annotate(self) -> dict[int | str, int]:
        """Annotate every rule in place.

        No rule is modified unless all of them have an entry.

        Returns:
            Number of rules per tier.

        Raises:
            MissingTierError: If any rule has no tier entry.

        """
        missing = self.missing_names()
        if missing:
            logger.error("%d rules missing from tier table:", len(missing))
            for name in missing:
                logger.error("  %s", name)
            raise MissingTierError(missing)

        stale = self.stale_names()
        if stale:
            logger.warning(
                "%d extra entries in tier table not found in rules: %s",
                len(stale),
                ", ".join(stale),
            )

        distribution: dict[int | str, int] = dict.fromkeys(TIER_VALUES, 0)
        for rule in self.rules:
            entry = self.table.get(rule.name)
            if entry is None:
                continue
            rule.tier = entry.tier
            rule.claude_comment = entry.claude_comment
            distribution[entry.tier] += 1

        logger.info("Annotated %d rules with tiers", len(self.rules))
        return distribution


def annotate_module(
    *,
    module: RulesDataModule,
    table: TierTable,
) -> tuple[dict[int | str, int], list[str]]:
    """Annotate a catalogue module file in place.

    The file is only rewritten after every rule has been annotated, so a
    failed run leaves it untouched.

    Args:
        module: Catalogue module to read and rewrite.
        table: Tier table to annotate from.

    Returns:
        Tuple of (rules per tier, stale table entries).

    """
    rules = module.read()
    annotator = TierAnnotator(rules=rules, table=table)
    distribution = annotator.annotate()
    module.write(rules)
    return distribution, annotator.stale_names()
