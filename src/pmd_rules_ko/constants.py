"""Constants for the pmd-rules-ko tool."""

from __future__ import annotations

from typing import Final

# Source XML file name -> catalogue category
CATEGORY_MAP: Final[dict[str, str]] = {
    "bestpractices_ko.xml": "bestpractices",
    "codestyle_ko.xml": "codestyle",
    "design_ko.xml": "design",
    "documentation_ko.xml": "documentation",
    "errorprone_ko.xml": "errorprone",
    "multithreading_ko.xml": "multithreading",
    "performance_ko.xml": "performance",
    "security_ko.xml": "security",
}

CATEGORIES: Final[tuple[str, ...]] = tuple(sorted(CATEGORY_MAP.values()))

# externalInfoUrl values reference the PMD site through a build placeholder
PMD_WEBSITE_BASEURL_TOKEN = "${pmd.website.baseurl}"
PMD_WEBSITE_BASEURL = "https://docs.pmd-code.org/latest"

# Structural PMD properties, not user options
EXCLUDED_PROPERTIES: Final[frozenset[str]] = frozenset({"xpath", "version"})

DEFAULT_PRIORITY = 3
MIN_PRIORITY = 1
MAX_PRIORITY = 5
PRIORITIES: Final[tuple[int, ...]] = tuple(range(MIN_PRIORITY, MAX_PRIORITY + 1))

# Name of the constant bound in the generated data module
RULES_DATA_VARIABLE = "RULES_DATA"

TIER_SKIP = "skip"
TIER_VALUES: Final[tuple[int | str, ...]] = (1, 2, 3, TIER_SKIP)
TIER_LABELS: Final[dict[int | str, str]] = {
    1: "필수",
    2: "권장",
    3: "선택",
    TIER_SKIP: "제외",
}

# Viewer
RULES_PER_PAGE = 20
MAX_VISIBLE_PAGES = 5

CATEGORY_NAMES: Final[dict[str, str]] = {
    "bestpractices": "모범 사례",
    "codestyle": "코드 스타일",
    "design": "설계",
    "documentation": "문서화",
    "errorprone": "오류 가능성",
    "multithreading": "멀티스레딩",
    "performance": "성능",
    "security": "보안",
}

PRIORITY_NAMES: Final[dict[int, str]] = {
    1: "P1 - 즉시 수정",
    2: "P2 - 높음",
    3: "P3 - 보통",
    4: "P4 - 낮음",
    5: "P5 - 참고",
}
