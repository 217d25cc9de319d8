"""Read and write the generated ``rules_data.js`` catalogue module."""

from __future__ import annotations

import json
import logging
import re
from typing import TYPE_CHECKING

from .constants import RULES_DATA_VARIABLE
from .rule import Rules

if TYPE_CHECKING:
    from pathlib import Path

# Configure logging
logger = logging.getLogger(__name__)

_PREFIX_PATTERN = re.compile(rf"^\s*const\s+{RULES_DATA_VARIABLE}\s*=\s*")
_SUFFIX_PATTERN = re.compile(r";\s*$")


class DataModuleError(ValueError):
    """The catalogue module could not be parsed."""


def dumps(rules: Rules) -> str:
    """Render rules as a module binding ``RULES_DATA`` to a JSON array.

    Args:
        rules: Rules to serialize, in the order given.

    Returns:
        Module source text.

    """
    payload = json.dumps(rules.to_list(), ensure_ascii=False, indent=2)
    return f"const {RULES_DATA_VARIABLE} =\n{payload};\n"


def loads(text: str) -> Rules:
    """Parse module source text produced by :func:`dumps`.

    Args:
        text: Module source text.

    Returns:
        Rules in file order.

    Raises:
        DataModuleError: If the assignment or the JSON array is malformed.

    """
    if not _PREFIX_PATTERN.match(text):
        msg = f"Missing 'const {RULES_DATA_VARIABLE} =' assignment"
        raise DataModuleError(msg)

    json_text = _SUFFIX_PATTERN.sub("", _PREFIX_PATTERN.sub("", text, count=1))
    try:
        data = json.loads(json_text)
    except json.JSONDecodeError as exc:
        msg = f"Invalid JSON in catalogue module: {exc}"
        raise DataModuleError(msg) from exc

    if not isinstance(data, list):
        msg = f"Expected a JSON array, found {type(data).__name__}"
        raise DataModuleError(msg)

    for index, record in enumerate(data):
        if not isinstance(record, dict):
            msg = f"Record {index} is not a JSON object"
            raise DataModuleError(msg)

    return Rules.from_list(data)


class RulesDataModule:
    """Manages the catalogue module file on disk."""

    def __init__(self, path: Path) -> None:
        """Initialize the data module.

        Args:
            path: Path to the ``rules_data.js`` file.

        """
        self.path = path

    def exists(self) -> bool:
        """Check if the module file exists.

        Returns:
            True if the module file exists, False otherwise.

        """
        return self.path.exists()

    def read(self) -> Rules:
        """Load rules from the module file.

        Returns:
            Rules in file order.

        Raises:
            FileNotFoundError: If the module file does not exist.
            DataModuleError: If the module content is malformed.

        """
        logger.debug("Loading catalogue module: %s", self.path)

        if not self.path.exists():
            msg = f"Catalogue module not found: {self.path}"
            raise FileNotFoundError(msg)

        try:
            rules = loads(self.path.read_text(encoding="utf-8"))
        except DataModuleError as exc:
            msg = f"Failed to parse {self.path}: {exc}"
            raise DataModuleError(msg) from exc

        logger.info("Loaded %d rules from %s", len(rules), self.path)
        return rules

    def write(self, rules: Rules) -> None:
        """Write rules to the module file, replacing it entirely.

        Args:
            rules: Rules to write.

        Raises:
            OSError: If there's an error creating directories or writing the file.

        """
        logger.debug("Writing catalogue module: %s", self.path)

        self.path.parent.mkdir(parents=True, exist_ok=True)

        try:
            self.path.write_text(dumps(rules), encoding="utf-8")
        except OSError as e:
            logger.warning("Failed to write catalogue module %s: %s", self.path, e)
            raise

        logger.info("Wrote %d rules to %s", len(rules), self.path)
