"""Main module for pmd-rules-ko application."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .catalogue_builder import CatalogueBuilder
from .constants import CATEGORIES, PRIORITIES, TIER_LABELS, TIER_VALUES
from .data_module import DataModuleError, RulesDataModule
from .tier_annotator import MissingTierError, TierAnnotator, annotate_module
from .tier_table import DEFAULT_TIERS_PATH, TierTable, TierTableError
from .viewer import RuleQuery, RuleViewer, render_detail, render_page

# Configure logging
logger = logging.getLogger(__name__)


class Application:
    """Main application class for the pmd-rules-ko tool.

    Holds the parsed arguments and lazily loads the tier table and the
    catalogue module shared by the subcommands.
    """

    def __init__(self, *, args: argparse.Namespace) -> None:
        """Initialize the application with parsed command line arguments.

        Args:
            args: Parsed command line arguments from argparse.

        """
        self.args = args
        self.module = RulesDataModule(args.output)
        self._tier_table: TierTable | None = None

    @property
    def tiers_path(self) -> Path:
        """Get the tier table path, the packaged table unless --tiers is given.

        Returns:
            Path to the tier table file.

        """
        return self.args.tiers or DEFAULT_TIERS_PATH

    @property
    def tier_table(self) -> TierTable:
        """Get the tier table, loading it on first use.

        Returns:
            TierTable loaded from the configured path.

        """
        if self._tier_table is None:
            self._tier_table = TierTable.load(self.tiers_path)
        return self._tier_table

    def build(self) -> int:
        """Build the catalogue module from the resources directory.

        The catalogue is annotated before it is written, so a rule without a
        tier entry fails the build and leaves the previous module in place.

        Returns:
            Exit code.

        """
        builder = CatalogueBuilder(resources_dir=self.args.resources_dir)
        rules = builder.build()

        if not self.args.no_annotate:
            distribution = TierAnnotator(rules=rules, table=self.tier_table).annotate()
            _log_distribution(distribution)

        self.module.write(rules)
        return 0

    def annotate(self) -> int:
        """Annotate the existing catalogue module in place.

        Returns:
            Exit code.

        """
        distribution, stale = annotate_module(
            module=self.module, table=self.tier_table
        )
        _log_distribution(distribution)

        if self.args.prune_stale:
            TierTable.prune(self.tiers_path, stale)
        return 0

    def search(self) -> int:
        """Print one page of rules matching the query.

        Returns:
            Exit code.

        """
        viewer = RuleViewer(self.module.read())
        query = RuleQuery(
            categories=set(self.args.category or []),
            priorities=set(self.args.priority or []),
            search=self.args.term,
        )
        page = viewer.page(viewer.apply(query), self.args.page)
        print(render_page(page, viewer.page_controls(page)))  # noqa: T201
        return 0

    def show(self) -> int:
        """Print the detail view of one rule.

        Returns:
            Exit code.

        """
        viewer = RuleViewer(self.module.read())
        try:
            detail = viewer.detail(self.args.name)
        except KeyError:
            logger.error("Rule not found: %s", self.args.name)  # noqa: TRY400
            return 1
        print(render_detail(detail), end="")  # noqa: T201
        return 0

    def run(self) -> int:
        """Run the selected subcommand.

        Returns:
            Exit code (0 for success, non-zero for failure).

        """
        commands = {
            "annotate": self.annotate,
            "build": self.build,
            "search": self.search,
            "show": self.show,
        }
        try:
            return commands[self.args.command]()
        except MissingTierError as exc:
            logger.error(  # noqa: TRY400
                "Add tier entries for %d rules to %s", len(exc.names), self.tiers_path
            )
            return 1
        except (DataModuleError, TierTableError, FileNotFoundError) as exc:
            logger.error("%s", exc)  # noqa: TRY400
            return 1
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 130
        except Exception:
            logger.exception("Unexpected error occurred")
            return 1


def _log_distribution(distribution: dict[int | str, int]) -> None:
    """Log the number of rules per tier.

    Args:
        distribution: Rule count per tier value.

    """
    logger.info("Tier distribution:")
    for tier in TIER_VALUES:
        logger.info("  %s (%s): %d", tier, TIER_LABELS[tier], distribution.get(tier, 0))
    logger.info("  Total: %d", sum(distribution.values()))


def _setup_logging(*, verbose: bool = False) -> None:
    """Set up logging configuration.

    Args:
        verbose: If True, enable debug logging.

    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        datefmt="%Y-%m-%d %H:%M:%S",
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=level,
    )


def _setup_argument_parser() -> argparse.ArgumentParser:
    """Set up command line argument parser.

    Returns:
        Configured ArgumentParser instance.

    """
    parser = argparse.ArgumentParser(
        description="Build and browse the Korean PMD Java rule catalogue",
        epilog="""
Examples:
  # Build rules_data.js from resources/*.xml and annotate tiers
  pmd-rules-ko build

  # Re-apply tiers.toml to an existing rules_data.js
  pmd-rules-ko annotate

  # Drop entries for removed rules from a working copy of the tier table
  pmd-rules-ko annotate --tiers tiers.toml --prune-stale

  # Search security rules with priority 1 or 2
  pmd-rules-ko search crypto --category security --priority 1 --priority 2

  # Show one rule
  pmd-rules-ko show AvoidReassigningParameters
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging output",
    )

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--output",
        default=Path("rules_data.js"),
        help="Path to the catalogue module (default: %(default)s)",
        type=Path,
    )

    tiers = argparse.ArgumentParser(add_help=False)
    tiers.add_argument(
        "--tiers",
        default=None,
        help="Path to the tier table (default: packaged tiers.toml)",
        type=Path,
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    build = subparsers.add_parser(
        "build",
        help="Build the catalogue module from PMD XML files",
        parents=[common, tiers],
    )
    build.add_argument(
        "--resources-dir",
        default=Path("resources"),
        help="Directory with the category XML files (default: %(default)s)",
        type=Path,
    )
    build.add_argument(
        "--no-annotate",
        action="store_true",
        help="Write the catalogue without tier annotations",
    )

    annotate = subparsers.add_parser(
        "annotate",
        help="Add tier annotations to an existing catalogue module",
        parents=[common, tiers],
    )
    annotate.add_argument(
        "--prune-stale",
        action="store_true",
        help="Remove tier entries that match no rule from the tier table",
    )

    search = subparsers.add_parser(
        "search", help="Search and filter the catalogue", parents=[common]
    )
    search.add_argument("term", default="", help="Search term", nargs="?")
    search.add_argument(
        "--category",
        action="append",
        choices=CATEGORIES,
        help="Only show rules of this category (repeatable)",
    )
    search.add_argument(
        "--priority",
        action="append",
        choices=PRIORITIES,
        help="Only show rules of this priority (repeatable)",
        type=int,
    )
    search.add_argument(
        "--page",
        default=1,
        help="Page number (default: %(default)s)",
        type=int,
    )

    show = subparsers.add_parser(
        "show", help="Show the details of one rule", parents=[common]
    )
    show.add_argument("name", help="Rule name")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the pmd-rules-ko tool.

    Args:
        argv: Command line arguments, defaults to sys.argv.

    Returns:
        Exit code (0 for success, non-zero for failure).

    """
    parser = _setup_argument_parser()
    args = parser.parse_args(argv)

    # The packaged table is read-only
    if args.command == "annotate" and args.prune_stale and args.tiers is None:
        parser.error("--prune-stale requires an explicit --tiers path")

    _setup_logging(verbose=args.verbose)

    # Create application instance and run
    app = Application(args=args)
    return app.run()


if __name__ == "__main__":
    sys.exit(main())
