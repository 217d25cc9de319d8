"""Rule and Rules dataclasses for the PMD rule catalogue."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from .constants import DEFAULT_PRIORITY, TIER_SKIP, TIER_VALUES

if TYPE_CHECKING:
    from collections.abc import Iterator


def is_valid_tier(value: object) -> bool:
    """Check that a value is an integer tier or the skip marker.

    Booleans and floats are rejected even when they compare equal to a tier.

    Args:
        value: Candidate tier value.

    Returns:
        True for 1, 2, 3 or 'skip'.

    """
    if value == TIER_SKIP:
        return True
    return type(value) is int and value in TIER_VALUES


@dataclass
class RuleProperty:
    """A user-configurable property of a PMD rule.

    Attributes:
        name: Property name (e.g., 'minimum')
        default_value: Default value as written in the rule definition
        description: Property description

    """

    name: str
    default_value: str = ""
    description: str = ""

    def to_dict(self) -> dict[str, str]:
        """Convert property to dictionary for serialization.

        Returns:
            Dictionary representation of the property.

        """
        return {
            "name": self.name,
            "defaultValue": self.default_value,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RuleProperty:
        """Create property from dictionary.

        Args:
            data: Dictionary representation of the property.

        Returns:
            RuleProperty instance.

        """
        return cls(
            default_value=data.get("defaultValue", ""),
            description=data.get("description", ""),
            name=data.get("name", ""),
        )


@dataclass
class Rule:
    """Data structure for a single PMD rule with all metadata.

    Attributes:
        name: Unique rule name (e.g., 'AvoidReassigningParameters')
        category: Catalogue category derived from the source file
        category_name: Localized category label from the ruleset root
        since: PMD version that introduced the rule
        message: Violation message
        rule_class: Implementing class
        external_info_url: Link to the PMD documentation page
        description: Rule description
        priority: PMD priority from 1 (highest) to 5
        examples: Code samples in document order
        properties: Documented configuration properties
        max_language_version: Highest Java version the rule applies to
        min_language_version: Lowest Java version the rule applies to
        tier: Review tier (1, 2, 3 or 'skip'), set by the tier annotator
        claude_comment: Localized review comment, set by the tier annotator

    """

    name: str
    category: str = ""
    category_name: str = ""
    since: str = ""
    message: str = ""
    rule_class: str = ""
    external_info_url: str = ""
    description: str = ""
    priority: int = DEFAULT_PRIORITY
    examples: list[str] = field(default_factory=list)
    properties: list[RuleProperty] = field(default_factory=list)
    max_language_version: str = ""
    min_language_version: str = ""
    tier: int | str | None = None
    claude_comment: str | None = None

    @property
    def is_annotated(self) -> bool:
        """Check if the rule carries a tier annotation.

        Returns:
            True if tier and claude_comment are set.

        """
        return self.tier is not None and self.claude_comment is not None

    def matches(self, term: str) -> bool:
        """Check if a lowercase search term occurs in the rule's text fields.

        Args:
            term: Lowercase search term.

        Returns:
            True if the term is found in name, message, description or
            category name.

        """
        return (
            term in self.name.lower()
            or term in self.message.lower()
            or term in self.description.lower()
            or term in self.category_name.lower()
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert rule to dictionary for serialization.

        Optional fields are left out entirely when empty.

        Returns:
            Dictionary representation of the rule.

        """
        data: dict[str, Any] = {
            "name": self.name,
            "category": self.category,
            "categoryName": self.category_name,
            "since": self.since,
            "message": self.message,
            "ruleClass": self.rule_class,
            "externalInfoUrl": self.external_info_url,
            "description": self.description,
            "priority": self.priority,
            "examples": list(self.examples),
        }
        if self.properties:
            data["properties"] = [prop.to_dict() for prop in self.properties]
        if self.max_language_version:
            data["maxLanguageVersion"] = self.max_language_version
        if self.min_language_version:
            data["minLanguageVersion"] = self.min_language_version
        if self.tier is not None:
            data["tier"] = self.tier
        if self.claude_comment is not None:
            data["claude_comment"] = self.claude_comment
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Rule:
        """Create rule from dictionary.

        Args:
            data: Dictionary representation of the rule.

        Returns:
            Rule instance.

        """
        tier = data.get("tier")
        if tier is not None and not is_valid_tier(tier):
            tier = None

        return cls(
            category=data.get("category", ""),
            category_name=data.get("categoryName", ""),
            claude_comment=data.get("claude_comment"),
            description=data.get("description", ""),
            examples=list(data.get("examples", [])),
            external_info_url=data.get("externalInfoUrl", ""),
            max_language_version=data.get("maxLanguageVersion", ""),
            message=data.get("message", ""),
            min_language_version=data.get("minLanguageVersion", ""),
            name=data.get("name", ""),
            priority=data.get("priority", DEFAULT_PRIORITY),
            properties=[
                RuleProperty.from_dict(prop) for prop in data.get("properties", [])
            ],
            rule_class=data.get("ruleClass", ""),
            since=data.get("since", ""),
            tier=tier,
        )

    @staticmethod
    def sort_key(rule: Rule) -> tuple[str, int, str]:
        """Return the catalogue ordering key of a rule.

        Args:
            rule: Rule to order.

        Returns:
            Tuple of category, priority and name.

        """
        return (rule.category, rule.priority, rule.name)


@dataclass
class Rules:
    """Ordered collection of Rule objects.

    Attributes:
        rules: List of Rule objects

    """

    rules: list[Rule] = field(default_factory=list)

    def add_rule(self, rule: Rule) -> None:
        """Add a rule to the end of the collection.

        Args:
            rule: Rule to add.

        """
        self.rules.append(rule)

    def extend(self, rules: Rules | list[Rule]) -> None:
        """Append several rules, keeping their order.

        Args:
            rules: Rules to append.

        """
        self.rules.extend(rules)

    def sort(self) -> None:
        """Sort by category, then priority, then name."""
        self.rules.sort(key=Rule.sort_key)

    def get_by_name(self, name: str) -> Rule | None:
        """Get rule by name.

        Args:
            name: The rule name to find.

        Returns:
            Rule if found, None otherwise.

        """
        for rule in self.rules:
            if rule.name == name:
                return rule
        return None

    def names(self) -> list[str]:
        """Get rule names in catalogue order.

        Returns:
            List of rule names.

        """
        return [rule.name for rule in self.rules]

    def filter_by_category(self, category: str) -> Rules:
        """Get rules from a specific category.

        Args:
            category: Category to filter by (e.g., 'design').

        Returns:
            New Rules instance with only rules from the specified category.

        """
        return Rules(rules=[r for r in self.rules if r.category == category])

    def filter_by_tier(self, tier: int | str) -> Rules:
        """Get rules annotated with a specific tier.

        Args:
            tier: Tier to filter by (1, 2, 3 or 'skip').

        Returns:
            New Rules instance with only rules of the specified tier.

        """
        return Rules(rules=[r for r in self.rules if r.tier == tier])

    def get_statistics(self) -> dict[str, Any]:
        """Get statistics about the rules.

        Returns:
            Dictionary with totals per category, priority and tier.

        """
        categories: dict[str, int] = {}
        priorities: dict[int, int] = {}
        tiers: dict[int | str, int] = {}
        for rule in self.rules:
            categories[rule.category] = categories.get(rule.category, 0) + 1
            priorities[rule.priority] = priorities.get(rule.priority, 0) + 1
            if rule.tier is not None:
                tiers[rule.tier] = tiers.get(rule.tier, 0) + 1

        return {
            "total_rules": len(self.rules),
            "categories": categories,
            "priorities": priorities,
            "tiers": tiers,
        }

    def to_list(self) -> list[dict[str, Any]]:
        """Convert to a list of dictionaries for serialization.

        Returns:
            List of rule dictionaries in catalogue order.

        """
        return [rule.to_dict() for rule in self.rules]

    @classmethod
    def from_list(cls, data: list[dict[str, Any]]) -> Rules:
        """Create Rules from a list of dictionaries.

        Args:
            data: List of rule dictionaries.

        Returns:
            Rules instance preserving the given order.

        """
        return cls(rules=[Rule.from_dict(rule_data) for rule_data in data])

    def __len__(self) -> int:
        """Return number of rules."""
        return len(self.rules)

    def __iter__(self) -> Iterator[Rule]:
        """Iterate over rules."""
        return iter(self.rules)

    def __bool__(self) -> bool:
        """Return True if rules exist."""
        return bool(self.rules)
