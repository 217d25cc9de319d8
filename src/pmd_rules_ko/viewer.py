"""Search, filter, paginate and describe catalogue rules.

The viewer is a read-only consumer of the finished catalogue. Every query is
recomputed from scratch over the full rule list; the catalogue holds a few
hundred rules, so there is no index.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from bs4 import BeautifulSoup

from .constants import (
    CATEGORIES,
    CATEGORY_NAMES,
    MAX_VISIBLE_PAGES,
    PRIORITIES,
    PRIORITY_NAMES,
    RULES_PER_PAGE,
    TIER_LABELS,
)
from .rule import Rules

if TYPE_CHECKING:
    from .rule import Rule, RuleProperty

# Configure logging
logger = logging.getLogger(__name__)

NO_DESCRIPTION = "<p>설명이 없습니다.</p>"
_HTML_MARKERS = ("<p>", "<ul>", "<h")
_PARAGRAPH_SPLIT = re.compile(r"\n\n+")
_INLINE_CODE = re.compile(r"`([^`]+)`")


def is_html(text: str) -> bool:
    """Check whether a description is already written in HTML.

    Args:
        text: Description text.

    Returns:
        True if the text contains paragraph, list or heading tags.

    """
    return any(marker in text for marker in _HTML_MARKERS)


def format_description(text: str) -> str:
    """Convert a plain-text description to HTML paragraphs.

    Paragraphs are separated by blank lines and backtick spans become
    ``<code>`` elements. Descriptions already in HTML are returned as is.

    Args:
        text: Description text.

    Returns:
        HTML fragment.

    Examples:
        >>> format_description("Use `final`.\\n\\nAlways.")
        '<p>Use <code>final</code>.</p>\\n<p>Always.</p>'

    """
    if not text:
        return NO_DESCRIPTION
    if is_html(text):
        return text

    paragraphs = []
    for para in _PARAGRAPH_SPLIT.split(text):
        trimmed = para.strip()
        if trimmed:
            with_code = _INLINE_CODE.sub(r"<code>\1</code>", trimmed)
            paragraphs.append(f"<p>{with_code}</p>")
    return "\n".join(paragraphs)


def description_text(rule: Rule) -> str:
    """Return a rule description as plain text for terminal output.

    Args:
        rule: Rule to describe.

    Returns:
        The description with any HTML markup flattened.

    """
    if not is_html(rule.description):
        return rule.description
    soup = BeautifulSoup(rule.description, "html.parser")
    return soup.get_text("\n", strip=True)


@dataclass
class RuleQuery:
    """Search term and filter selection.

    An empty category or priority selection matches every rule.

    Attributes:
        search: Case-insensitive substring to search for
        categories: Selected categories
        priorities: Selected priorities

    """

    search: str = ""
    categories: set[str] = field(default_factory=set)
    priorities: set[int] = field(default_factory=set)

    @property
    def term(self) -> str:
        """Normalized search term."""
        return self.search.strip().lower()

    def matches_category(self, rule: Rule) -> bool:
        """Check the category selection."""
        return not self.categories or rule.category in self.categories

    def matches_priority(self, rule: Rule) -> bool:
        """Check the priority selection."""
        return not self.priorities or rule.priority in self.priorities

    def matches(self, rule: Rule) -> bool:
        """Check the search term and both selections.

        Args:
            rule: Rule to test.

        Returns:
            True if the rule passes every filter.

        """
        term = self.term
        return (
            self.matches_category(rule)
            and self.matches_priority(rule)
            and (not term or rule.matches(term))
        )


@dataclass
class Page:
    """One page of filtered rules.

    Attributes:
        items: Rules on this page
        number: 1-based page number
        total_pages: Number of pages, 0 when nothing matched
        total: Number of matching rules

    """

    items: list[Rule]
    number: int
    total_pages: int
    total: int


@dataclass(frozen=True)
class PageControl:
    """One pagination control.

    Attributes:
        kind: 'prev', 'next', 'page' or 'ellipsis'
        page: Target page, None for an ellipsis
        active: True for the current page
        disabled: True for prev/next at either end

    """

    kind: str
    page: int | None = None
    active: bool = False
    disabled: bool = False

    @property
    def label(self) -> str:
        """Display text of the control."""
        if self.kind == "prev":
            return "◀"
        if self.kind == "next":
            return "▶"
        if self.kind == "ellipsis":
            return "..."
        return str(self.page)


@dataclass
class RuleDetail:
    """Content of the four detail tabs for one rule.

    Attributes:
        rule: The rule shown
        description_html: Formatted description tab
        examples: Example code tab
        properties: Properties tab
        info: Version and reference lines of the info tab

    """

    rule: Rule
    description_html: str
    examples: list[str]
    properties: list[RuleProperty]
    info: list[str]

    @property
    def category_label(self) -> str:
        """Localized category label."""
        return self.rule.category_name or CATEGORY_NAMES.get(
            self.rule.category, self.rule.category
        )

    @property
    def priority_label(self) -> str:
        """Localized priority label."""
        return PRIORITY_NAMES.get(self.rule.priority, f"P{self.rule.priority}")

    @property
    def tier_label(self) -> str:
        """Localized tier label, empty when the rule is not annotated."""
        if self.rule.tier is None:
            return ""
        return TIER_LABELS.get(self.rule.tier, str(self.rule.tier))


class RuleViewer:
    """Query interface over an in-memory catalogue."""

    def __init__(self, rules: Rules) -> None:
        """Initialize the viewer.

        Args:
            rules: The full catalogue in display order.

        """
        self.rules = rules

    def apply(self, query: RuleQuery) -> Rules:
        """Filter the catalogue.

        Args:
            query: Search term and filter selection.

        Returns:
            Matching rules in catalogue order.

        """
        filtered = Rules(rules=[rule for rule in self.rules if query.matches(rule)])
        logger.debug("Query %s matched %d rules", query, len(filtered))
        return filtered

    def facet_counts(
        self, query: RuleQuery
    ) -> tuple[dict[str, int], dict[int, int]]:
        """Count rules per category and per priority.

        Category counts honor the priority selection and priority counts
        honor the category selection; the search term is ignored.

        Args:
            query: Current filter selection.

        Returns:
            Tuple of (category counts, priority counts).

        """
        category_counts = dict.fromkeys(CATEGORIES, 0)
        priority_counts = dict.fromkeys(PRIORITIES, 0)

        for rule in self.rules:
            if query.matches_priority(rule):
                category_counts[rule.category] = (
                    category_counts.get(rule.category, 0) + 1
                )
            if query.matches_category(rule):
                priority_counts[rule.priority] = (
                    priority_counts.get(rule.priority, 0) + 1
                )

        return category_counts, priority_counts

    def page(
        self,
        filtered: Rules,
        number: int = 1,
        *,
        per_page: int = RULES_PER_PAGE,
    ) -> Page:
        """Slice one page out of filtered rules.

        Args:
            filtered: Rules returned by :meth:`apply`.
            number: Requested 1-based page, clamped to the valid range.
            per_page: Rules per page.

        Returns:
            Page instance.

        """
        total = len(filtered)
        total_pages = math.ceil(total / per_page)
        number = max(1, min(number, total_pages or 1))
        start = (number - 1) * per_page
        return Page(
            items=filtered.rules[start : start + per_page],
            number=number,
            total=total,
            total_pages=total_pages,
        )

    def page_controls(self, page: Page) -> list[PageControl]:
        """Build pagination controls for a page.

        A window of at most five page numbers is shown around the current
        page, with links to the first and last pages and ellipses for gaps.

        Args:
            page: Current page.

        Returns:
            Controls in display order, empty for a single page.

        """
        current = page.number
        total_pages = page.total_pages
        if total_pages <= 1:
            return []

        controls = [PageControl(disabled=current == 1, kind="prev", page=current - 1)]

        start = max(1, current - MAX_VISIBLE_PAGES // 2)
        end = min(total_pages, start + MAX_VISIBLE_PAGES - 1)
        if end - start + 1 < MAX_VISIBLE_PAGES:
            start = max(1, end - MAX_VISIBLE_PAGES + 1)

        if start > 1:
            controls.append(PageControl(kind="page", page=1))
            if start > 2:  # noqa: PLR2004
                controls.append(PageControl(kind="ellipsis"))

        controls.extend(
            PageControl(active=number == current, kind="page", page=number)
            for number in range(start, end + 1)
        )

        if end < total_pages:
            if end < total_pages - 1:
                controls.append(PageControl(kind="ellipsis"))
            controls.append(PageControl(kind="page", page=total_pages))

        controls.append(
            PageControl(disabled=current == total_pages, kind="next", page=current + 1)
        )
        return controls

    def detail(self, name: str) -> RuleDetail:
        """Build the detail view of one rule.

        Args:
            name: Rule name.

        Returns:
            RuleDetail instance.

        Raises:
            KeyError: If no rule has this name.

        """
        rule = self.rules.get_by_name(name)
        if rule is None:
            raise KeyError(name)

        info = []
        if rule.since:
            info.append(f"PMD {rule.since}부터 사용 가능")
        if rule.max_language_version:
            info.append(f"Java {rule.max_language_version} 이하에서만 적용")
        if rule.min_language_version:
            info.append(f"Java {rule.min_language_version} 이상에서 적용")

        return RuleDetail(
            description_html=format_description(rule.description),
            examples=list(rule.examples),
            info=info,
            properties=list(rule.properties),
            rule=rule,
        )


def render_card(rule: Rule) -> str:
    """Render one rule as a single summary line.

    Args:
        rule: Rule to render.

    Returns:
        Summary line with priority, name, category and message.

    """
    tier = ""
    if rule.tier is not None:
        tier = f" [{TIER_LABELS.get(rule.tier, rule.tier)}]"
    return (
        f"P{rule.priority} {rule.name} ({rule.category_name}, v{rule.since})"
        f"{tier} - {rule.message}"
    )


def render_page(page: Page, controls: list[PageControl]) -> str:
    """Render a page of rules and its controls as text.

    Args:
        page: Page to render.
        controls: Controls returned by :meth:`RuleViewer.page_controls`.

    Returns:
        Multi-line text.

    """
    if not page.items:
        return "검색 결과가 없습니다"

    lines = [render_card(rule) for rule in page.items]
    if controls:
        labels = []
        for control in controls:
            if control.kind in {"prev", "next"}:
                continue
            labels.append(f"[{control.label}]" if control.active else control.label)
        lines.append("")
        lines.append(f"{' '.join(labels)}  ({page.number} / {page.total_pages})")
    lines.append(f"{page.total}개 규칙")
    return "\n".join(lines)


def render_detail(detail: RuleDetail) -> str:
    """Render the detail view of a rule as text.

    Args:
        detail: Detail returned by :meth:`RuleViewer.detail`.

    Returns:
        Multi-line text with one section per tab.

    """
    rule = detail.rule
    lines = [
        f"{rule.name} - {rule.message}",
        f"{detail.category_label} | {detail.priority_label}",
    ]
    if detail.tier_label:
        lines.append(f"Tier: {detail.tier_label} - {rule.claude_comment}")

    lines.extend(["", "[설명]", description_text(rule) or "설명이 없습니다."])

    lines.extend(["", "[예제 코드]"])
    if detail.examples:
        for example in detail.examples:
            lines.extend([example, ""])
    else:
        lines.append("예제 코드가 없습니다.")

    lines.extend(["", "[속성]"])
    if detail.properties:
        lines.extend(
            f"{prop.name} = {prop.default_value}  {prop.description}".rstrip()
            for prop in detail.properties
        )
    else:
        lines.append("설정 가능한 속성이 없습니다.")

    lines.extend(["", "[추가 정보]", *detail.info])
    if rule.rule_class:
        lines.append(f"규칙 클래스: {rule.rule_class}")
    if rule.external_info_url:
        lines.append(f"PMD 공식 문서: {rule.external_info_url}")

    return "\n".join(lines).rstrip() + "\n"
