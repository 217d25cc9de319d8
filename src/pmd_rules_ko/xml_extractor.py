"""Regular expression extraction for PMD rule-definition XML.

PMD ships its rule catalogue as a small, hand-authored XML dialect: a
``<ruleset>`` root holding ``<rule>`` elements whose children are
``<description>``, ``<priority>``, ``<example>`` and ``<property>``. This module
pulls fields out of that dialect with pre-compiled regular expressions. It is
not a general XML parser: entities are not unescaped, namespaces
are ignored and nested elements with the same tag name are not supported.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .constants import EXCLUDED_PROPERTIES

if TYPE_CHECKING:
    from collections.abc import Iterator
    from re import Pattern

CDATA_OPEN = "<![CDATA["
CDATA_CLOSE = "]]>"


@dataclass
class RuleBlock:
    """Raw text of one ``<rule>`` element.

    Attributes:
        attributes: Attribute string of the opening tag.
        body: Inner text of the element, empty for a self-closing rule.

    """

    attributes: str
    body: str = ""


class PmdXmlExtractor:
    """Pre-compiled patterns for the PMD rule-definition XML dialect."""

    def __init__(self) -> None:
        """Initialize the PmdXmlExtractor with compiled patterns."""
        self._ruleset_name_pattern = re.compile(
            r"<ruleset\s+[^>]*?\bname\s*=\s*\"([^\"]*)\""
        )

        # A self-closing <rule .../> must not run on into the next rule's body
        self._rule_pattern = re.compile(
            r"<rule\s+([^>]*?)(?:/>|>(.*?)</rule>)", re.DOTALL
        )

        self._ref_pattern = re.compile(r"\bref\s*=")

        self._example_pattern = re.compile(
            r"<example>(.*?)</example>", re.DOTALL | re.IGNORECASE
        )

        self._property_pattern = re.compile(
            r"<property\s+([^>]*?)(?:/>|>(.*?)</property>)",
            re.DOTALL | re.IGNORECASE,
        )

        self._value_element_pattern = re.compile(
            r"<value>(.*?)</value>", re.DOTALL | re.IGNORECASE
        )

    def build_attr_pattern(self, attr_name: str) -> Pattern[str]:
        """Build a regex pattern matching ``attr_name="..."``.

        Args:
            attr_name: Name of the attribute.

        Returns:
            Compiled, case-insensitive pattern capturing the quoted value.

        Examples:
            >>> pattern = PMD_XML.build_attr_pattern("since")
            >>> pattern.search('name="Foo" since="1.0"').group(1)
            '1.0'

        """
        escaped_name = re.escape(attr_name)
        return re.compile(rf"\b{escaped_name}\s*=\s*\"([^\"]*)\"", re.IGNORECASE)

    def build_element_pattern(self, tag_name: str) -> Pattern[str]:
        """Build a non-greedy regex pattern for ``<tag>...</tag>``.

        The match stops at the first closing tag, so nested elements of the
        same name are not supported.

        Args:
            tag_name: Element name.

        Returns:
            Compiled pattern capturing the inner text.

        """
        escaped_tag = re.escape(tag_name)
        return re.compile(
            rf"<{escaped_tag}(?:\s[^>]*)?>(.*?)</{escaped_tag}>",
            re.DOTALL | re.IGNORECASE,
        )

    def extract_attr(self, source: str, attr_name: str) -> str:
        """Return the first value of ``attr_name`` in an attribute string.

        Args:
            source: Attribute string of a tag.
            attr_name: Attribute to look up, matched case-insensitively.

        Returns:
            The raw attribute value, or an empty string when absent.

        """
        match = self.build_attr_pattern(attr_name).search(source)
        return match.group(1) if match else ""

    def strip_cdata(self, text: str) -> str:
        """Remove CDATA markers, leaving the inner text verbatim.

        Args:
            text: Text that may contain CDATA sections.

        Returns:
            The text without ``<![CDATA[`` and ``]]>`` markers.

        Examples:
            >>> PMD_XML.strip_cdata("<![CDATA[a < b]]>")
            'a < b'

        """
        return text.replace(CDATA_OPEN, "").replace(CDATA_CLOSE, "")

    def extract_first_element(self, source: str, tag_name: str) -> str:
        """Return the inner text of the first ``<tag_name>`` element.

        Args:
            source: XML fragment to search.
            tag_name: Element name.

        Returns:
            Trimmed, CDATA-stripped inner text, or an empty string.

        """
        match = self.build_element_pattern(tag_name).search(source)
        if not match:
            return ""
        return self.strip_cdata(match.group(1)).strip()

    def extract_examples(self, source: str) -> list[str]:
        """Return every non-empty ``<example>`` body in document order.

        Args:
            source: XML fragment to search.

        Returns:
            Trimmed, CDATA-stripped example texts.

        """
        examples = []
        for match in self._example_pattern.finditer(source):
            example = self.strip_cdata(match.group(1)).strip()
            if example:
                examples.append(example)
        return examples

    def extract_properties(self, source: str) -> list[dict[str, str]]:
        """Return the documented ``<property>`` declarations of a rule.

        Both ``<property name="x" value="1"/>`` and the block form with a
        nested ``<value>`` element are recognized. Properties named ``xpath``
        or ``version`` are PMD directives and are skipped, as are properties
        without a name.

        Args:
            source: Body of a ``<rule>`` element.

        Returns:
            Property descriptors with ``name``, ``default_value`` and
            ``description`` keys, in document order.

        """
        properties = []
        for match in self._property_pattern.finditer(source):
            attributes = match.group(1)
            body = match.group(2) or ""

            name = self.extract_attr(attributes, "name")
            if not name or name in EXCLUDED_PROPERTIES:
                continue

            # An explicit value="" wins over a nested <value> element
            value_attr = self.build_attr_pattern("value").search(attributes)
            default_value = value_attr.group(1) if value_attr else ""
            if value_attr is None and body:
                value_match = self._value_element_pattern.search(body)
                if value_match:
                    default_value = self.strip_cdata(value_match.group(1)).strip()

            properties.append(
                {
                    "default_value": default_value,
                    "description": self.extract_attr(attributes, "description"),
                    "name": name,
                }
            )
        return properties

    def extract_ruleset_name(self, source: str) -> str:
        """Return the ``name`` attribute of the ``<ruleset>`` root element.

        Args:
            source: Full XML document.

        Returns:
            The ruleset label, or an empty string when absent.

        """
        match = self._ruleset_name_pattern.search(source)
        return match.group(1) if match else ""

    def iter_rule_blocks(self, source: str) -> Iterator[RuleBlock]:
        """Yield every ``<rule>`` element of a document.

        Args:
            source: Full XML document.

        Yields:
            RuleBlock for each rule, self-closing or block form.

        """
        for match in self._rule_pattern.finditer(source):
            yield RuleBlock(attributes=match.group(1), body=match.group(2) or "")

    def has_ref(self, attributes: str) -> bool:
        """Check whether a rule's opening tag assigns ``ref=``.

        Args:
            attributes: Attribute string of a ``<rule>`` tag.

        Returns:
            True for rule references, which are not rule definitions.

        """
        return self._ref_pattern.search(attributes) is not None


# Global instance for convenience
PMD_XML = PmdXmlExtractor()
