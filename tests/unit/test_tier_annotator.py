"""Test module for TierAnnotator functionality."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from pmd_rules_ko.data_module import RulesDataModule
from pmd_rules_ko.rule import Rule, Rules
from pmd_rules_ko.tier_annotator import (
    MissingTierError,
    TierAnnotator,
    annotate_module,
)
from pmd_rules_ko.tier_table import TierEntry, TierTable

if TYPE_CHECKING:
    from pathlib import Path


def create_table() -> TierTable:
    """Create a TierTable for testing.

    Returns:
        TierTable with three entries, one of them stale.

    """
    return TierTable(
        {
            "Alpha": TierEntry(claude_comment="필수 - a", tier=1),
            "Beta": TierEntry(claude_comment="제외 - b", tier="skip"),
            "Stale": TierEntry(claude_comment="선택 - s", tier=3),
        }
    )


def create_rules(*names: str) -> Rules:
    """Create a Rules object for testing.

    Args:
        names: Rule names.

    Returns:
        Rules object with one design rule per name.

    """
    return Rules(rules=[Rule(category="design", name=name) for name in names])


def test_missing_and_stale_names() -> None:
    """Test both directions of the name cross-check."""
    annotator = TierAnnotator(
        rules=create_rules("Gamma", "Alpha", "Delta"), table=create_table()
    )

    assert annotator.missing_names() == ["Gamma", "Delta"]
    assert annotator.stale_names() == ["Beta", "Stale"]


def test_annotate_sets_fields_and_counts() -> None:
    """Test every rule receives its tier and comment."""
    rules = create_rules("Alpha", "Beta")

    distribution = TierAnnotator(rules=rules, table=create_table()).annotate()

    assert distribution == {1: 1, 2: 0, 3: 0, "skip": 1}
    alpha, beta = rules.rules
    assert (alpha.tier, alpha.claude_comment) == (1, "필수 - a")
    assert (beta.tier, beta.claude_comment) == ("skip", "제외 - b")


def test_annotate_missing_entry_fails_without_changes(
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Test a rule without an entry stops the run before any mutation.

    Args:
        caplog: Pytest log capture fixture.

    """
    rules = create_rules("Alpha", "Unknown")

    with pytest.raises(MissingTierError) as exc_info:
        TierAnnotator(rules=rules, table=create_table()).annotate()

    assert exc_info.value.names == ["Unknown"]
    assert "Unknown" in str(exc_info.value)
    assert all(rule.tier is None for rule in rules)
    errors = [r.getMessage() for r in caplog.records if r.levelno == logging.ERROR]
    assert "  Unknown" in errors


def test_annotate_warns_on_stale_entries(caplog: pytest.LogCaptureFixture) -> None:
    """Test stale table entries are reported but do not fail.

    Args:
        caplog: Pytest log capture fixture.

    """
    with caplog.at_level(logging.WARNING):
        TierAnnotator(rules=create_rules("Alpha"), table=create_table()).annotate()

    warnings = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
    assert warnings == ["2 extra entries in tier table not found in rules: Beta, Stale"]


def test_annotate_is_idempotent() -> None:
    """Test annotating twice gives the same result."""
    rules = create_rules("Alpha", "Beta")
    table = create_table()

    first = TierAnnotator(rules=rules, table=table).annotate()
    snapshot = rules.to_list()
    second = TierAnnotator(rules=rules, table=table).annotate()

    assert first == second
    assert rules.to_list() == snapshot


def test_annotate_overwrites_previous_annotation() -> None:
    """Test existing tier values are replaced, not kept."""
    rules = create_rules("Alpha")
    rules.rules[0].tier = 3
    rules.rules[0].claude_comment = "old"

    TierAnnotator(rules=rules, table=create_table()).annotate()

    assert rules.rules[0].tier == 1
    assert rules.rules[0].claude_comment == "필수 - a"


def test_annotate_module(tmp_path: Path) -> None:
    """Test annotating a module file in place.

    Args:
        tmp_path: Pytest temporary directory.

    """
    module = RulesDataModule(tmp_path / "rules_data.js")
    module.write(create_rules("Alpha", "Beta"))

    distribution, stale = annotate_module(module=module, table=create_table())

    assert distribution["skip"] == 1
    assert stale == ["Stale"]
    rules = module.read()
    assert [rule.tier for rule in rules] == [1, "skip"]
    assert all(rule.is_annotated for rule in rules)

    before = module.path.read_text(encoding="utf-8")
    annotate_module(module=module, table=create_table())
    assert module.path.read_text(encoding="utf-8") == before


def test_annotate_module_failure_leaves_file_untouched(tmp_path: Path) -> None:
    """Test a failed annotation does not rewrite the module.

    Args:
        tmp_path: Pytest temporary directory.

    """
    module = RulesDataModule(tmp_path / "rules_data.js")
    module.write(create_rules("Alpha", "Unknown"))
    before = module.path.read_text(encoding="utf-8")

    with pytest.raises(MissingTierError):
        annotate_module(module=module, table=create_table())

    assert module.path.read_text(encoding="utf-8") == before
