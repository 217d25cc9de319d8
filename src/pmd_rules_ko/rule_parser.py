"""Parse PMD rule-definition XML into Rule objects."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from .constants import (
    DEFAULT_PRIORITY,
    MAX_PRIORITY,
    MIN_PRIORITY,
    PMD_WEBSITE_BASEURL,
    PMD_WEBSITE_BASEURL_TOKEN,
)
from .rule import Rule, RuleProperty, Rules
from .xml_extractor import PMD_XML, RuleBlock

if TYPE_CHECKING:
    from pathlib import Path

# Configure logging
logger = logging.getLogger(__name__)

_INTEGER_PREFIX = re.compile(r"^\s*([+-]?\d+)")


def parse_priority(text: str) -> int:
    """Parse a ``<priority>`` value leniently.

    Leading digits are taken as the value, so ``"2"`` and ``"2 "`` both give
    2. Missing, non-numeric or out of range values give the default.

    Args:
        text: Raw element text.

    Returns:
        Priority between 1 and 5.

    """
    match = _INTEGER_PREFIX.match(text)
    if not match:
        return DEFAULT_PRIORITY
    priority = int(match.group(1))
    if not MIN_PRIORITY <= priority <= MAX_PRIORITY:
        return DEFAULT_PRIORITY
    return priority


class RuleParser:
    """Extract rule definitions from one PMD category XML document."""

    def __init__(self, *, category: str) -> None:
        """Initialize the RuleParser for a catalogue category.

        Args:
            category: Category assigned to every rule parsed from the document.

        """
        self.category = category

    def parse(self, xml_text: str) -> Rules:
        """Parse every rule definition in a document.

        Rule references (``<rule ref="..."/>``) and rules without a name are
        skipped. Malformed fields degrade to empty values; this never raises.

        Args:
            xml_text: Raw XML document.

        Returns:
            Rules object in document order.

        """
        rules = Rules()
        category_name = PMD_XML.extract_ruleset_name(xml_text) or self.category

        for block in PMD_XML.iter_rule_blocks(xml_text):
            if PMD_XML.has_ref(block.attributes):
                logger.debug("Skipping rule reference: %s", block.attributes.strip())
                continue

            rule = self._parse_block(block=block, category_name=category_name)
            if rule is None:
                continue

            rules.add_rule(rule)
            logger.debug("Found rule: %s (%s)", rule.name, self.category)

        return rules

    def parse_file(self, path: Path) -> Rules:
        """Read and parse one XML file.

        Args:
            path: Path to the category XML file.

        Returns:
            Rules object in document order.

        """
        return self.parse(path.read_text(encoding="utf-8"))

    def _parse_block(self, *, block: RuleBlock, category_name: str) -> Rule | None:
        """Build a Rule from a single ``<rule>`` element.

        Args:
            block: The rule element's attributes and body.
            category_name: Localized label of the enclosing ruleset.

        Returns:
            Rule, or None when the element has no name.

        """
        attrs = block.attributes
        name = PMD_XML.extract_attr(attrs, "name")
        if not name:
            return None

        external_info_url = PMD_XML.extract_attr(attrs, "externalInfoUrl").replace(
            PMD_WEBSITE_BASEURL_TOKEN, PMD_WEBSITE_BASEURL
        )

        properties = [
            RuleProperty(
                default_value=prop["default_value"],
                description=prop["description"],
                name=prop["name"],
            )
            for prop in PMD_XML.extract_properties(block.body)
        ]

        return Rule(
            category=self.category,
            category_name=category_name,
            description=PMD_XML.extract_first_element(block.body, "description"),
            examples=PMD_XML.extract_examples(block.body),
            external_info_url=external_info_url,
            max_language_version=PMD_XML.extract_attr(attrs, "maximumLanguageVersion"),
            message=PMD_XML.extract_attr(attrs, "message"),
            min_language_version=PMD_XML.extract_attr(attrs, "minimumLanguageVersion"),
            name=name,
            priority=parse_priority(
                PMD_XML.extract_first_element(block.body, "priority")
            ),
            properties=properties,
            rule_class=PMD_XML.extract_attr(attrs, "class"),
            since=PMD_XML.extract_attr(attrs, "since"),
        )
