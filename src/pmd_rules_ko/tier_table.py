"""Tier classification table loaded from ``tiers.toml``.

Each top-level table of the file is named after a PMD rule and holds the
review tier and a localized comment::

    [AvoidReassigningParameters]
    tier = 2
    claude_comment = "권장 - ..."

The table is validated when loaded so that a malformed entry fails before
any catalogue record is touched.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

import tomlkit
from tomlkit.exceptions import TOMLKitError

from .rule import is_valid_tier

if TYPE_CHECKING:
    from collections.abc import Iterable

# Configure logging
logger = logging.getLogger(__name__)

DEFAULT_TIERS_PATH = Path(__file__).parent / "data" / "tiers.toml"


class TierTableError(ValueError):
    """The tier table is malformed."""


@dataclass(frozen=True)
class TierEntry:
    """Tier annotation for one rule.

    Attributes:
        tier: 1, 2, 3 or 'skip'
        claude_comment: Localized rationale for the tier

    """

    tier: int | str
    claude_comment: str

    @classmethod
    def from_dict(cls, name: str, data: Any) -> TierEntry:
        """Create and validate an entry from a TOML table.

        Args:
            name: Rule name the entry belongs to.
            data: Parsed TOML table.

        Returns:
            TierEntry instance.

        Raises:
            TierTableError: If the tier or comment is missing or invalid.

        """
        if not isinstance(data, dict):
            msg = f"Entry '{name}' must be a table"
            raise TierTableError(msg)

        tier = data.get("tier")
        if not is_valid_tier(tier):
            msg = f"Entry '{name}' has invalid tier {tier!r}"
            raise TierTableError(msg)

        comment = data.get("claude_comment")
        if not isinstance(comment, str) or not comment.strip():
            msg = f"Entry '{name}' is missing claude_comment"
            raise TierTableError(msg)

        return cls(claude_comment=comment, tier=tier)


class TierTable:
    """Mapping of rule name to TierEntry."""

    def __init__(self, entries: dict[str, TierEntry] | None = None) -> None:
        """Initialize the TierTable.

        Args:
            entries: Entries keyed by rule name.

        """
        self.entries: dict[str, TierEntry] = dict(entries or {})

    @classmethod
    def from_toml(cls, content: str) -> TierTable:
        """Parse and validate TOML text.

        Args:
            content: TOML document text.

        Returns:
            TierTable instance.

        Raises:
            TierTableError: If the document is not valid TOML or an entry is
                malformed.

        """
        try:
            data = tomlkit.parse(content).unwrap()
        except TOMLKitError as exc:
            msg = f"Invalid TOML in tier table: {exc}"
            raise TierTableError(msg) from exc

        return cls(
            {name: TierEntry.from_dict(name, entry) for name, entry in data.items()}
        )

    @classmethod
    def load(cls, path: Path = DEFAULT_TIERS_PATH) -> TierTable:
        """Load the tier table from a TOML file.

        Args:
            path: Path to the TOML file.

        Returns:
            TierTable instance.

        Raises:
            FileNotFoundError: If the file does not exist.
            TierTableError: If the file is malformed.

        """
        if not path.exists():
            msg = f"Tier table not found: {path}"
            raise FileNotFoundError(msg)

        try:
            table = cls.from_toml(path.read_text(encoding="utf-8"))
        except TierTableError as exc:
            msg = f"{path}: {exc}"
            raise TierTableError(msg) from exc

        logger.info("Loaded %d tier entries from %s", len(table), path)
        return table

    @staticmethod
    def prune(path: Path, names: Iterable[str]) -> int:
        """Remove entries from a tier table file in place.

        Comments and formatting of the remaining entries are preserved.

        Args:
            path: Path to the TOML file.
            names: Rule names whose entries should be removed.

        Returns:
            Number of entries removed.

        """
        doc = tomlkit.parse(path.read_text(encoding="utf-8"))
        removed = 0
        for name in names:
            if name in doc:
                del doc[name]
                removed += 1
                logger.debug("Removed stale tier entry: %s", name)

        if removed:
            path.write_text(tomlkit.dumps(doc), encoding="utf-8")
            logger.info("Removed %d stale entries from %s", removed, path)
        return removed

    def get(self, name: str) -> TierEntry | None:
        """Get the entry for a rule.

        Args:
            name: Rule name.

        Returns:
            TierEntry if found, None otherwise.

        """
        return self.entries.get(name)

    def names(self) -> set[str]:
        """Get all rule names in the table.

        Returns:
            Set of rule names.

        """
        return set(self.entries)

    def __contains__(self, name: object) -> bool:
        """Return True if the table has an entry for ``name``."""
        return name in self.entries

    def __len__(self) -> int:
        """Return number of entries."""
        return len(self.entries)
