"""Build the rule catalogue from a directory of PMD category XML files."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .constants import CATEGORY_MAP
from .rule import Rules
from .rule_parser import RuleParser

if TYPE_CHECKING:
    from pathlib import Path

# Configure logging
logger = logging.getLogger(__name__)


@dataclass
class CatalogueBuilder:
    """Parses every recognized category file and merges the results.

    Attributes:
        resources_dir: Directory holding the category XML files.
        category_map: Mapping of XML file name to catalogue category.
        file_counts: Number of rules parsed per file during the last build.

    """

    resources_dir: Path
    category_map: dict[str, str] = field(default_factory=lambda: dict(CATEGORY_MAP))
    file_counts: dict[str, int] = field(default_factory=dict, init=False)

    def build(self) -> Rules:
        """Parse all recognized files into a sorted catalogue.

        Files missing from the category map are skipped with a warning.

        Returns:
            Rules sorted by category, priority and name.

        Raises:
            FileNotFoundError: If the resources directory does not exist.

        """
        if not self.resources_dir.is_dir():
            msg = f"Resources directory not found: {self.resources_dir}"
            raise FileNotFoundError(msg)

        logger.info("Building rule catalogue from %s", self.resources_dir)

        all_rules = Rules()
        self.file_counts = {}

        for xml_file in sorted(self.resources_dir.glob("*.xml")):
            category = self.category_map.get(xml_file.name)
            if category is None:
                logger.warning("Unknown XML file: %s, skipping", xml_file.name)
                continue

            rules = RuleParser(category=category).parse_file(xml_file)
            self.file_counts[xml_file.name] = len(rules)
            logger.info(
                "%s: %d rules parsed (%s)", xml_file.name, len(rules), category
            )
            all_rules.extend(rules)

        all_rules.sort()
        logger.info("Total: %d rules", len(all_rules))
        return all_rules
