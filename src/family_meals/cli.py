"""CLI entry point for the family meal planner."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

logger = logging.getLogger(__name__)


def cmd_shopping_list(args: argparse.Namespace) -> None:
    from family_meals.checklist import add_manual_item, parse_manual_item
    from family_meals.config import apply_cli_overrides, load_config
    from family_meals.loader import load_recipes, load_weekly_plan
    from family_meals.shopping import (
        format_shopping_json,
        format_shopping_markdown,
        generate_shopping_list,
    )

    config = load_config(Path(args.config) if args.config else None)
    config = apply_cli_overrides(config, show_sources=args.sources, title=args.title)

    plan = load_weekly_plan(Path(args.plan))
    recipes = load_recipes(Path(args.recipes))

    items = generate_shopping_list(plan, recipes)

    manual = config["manual_items"]
    for raw in args.add or []:
        name, quantity, unit = parse_manual_item(raw)
        items = add_manual_item(
            items,
            name,
            quantity,
            unit=unit,
            category_name=manual["default_category"],
            source_label=manual["source_label"],
        )

    if not items:
        logger.warning("No ingredients to list")

    if args.format == "json":
        print(format_shopping_json(items))
    else:
        print(format_shopping_markdown(items, config))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="family-meals",
        description="Shopping lists from a weekly family meal plan",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to a YAML preferences file (default: ~/.config/family-meals/config.yaml)",
    )
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error"],
        default="info",
        help="Logging verbosity (default: info)",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Also write logs to this file",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    # shopping-list
    p_shop = sub.add_parser("shopping-list", help="Generate shopping list from a weekly plan")
    p_shop.add_argument(
        "--plan", type=str, required=True, help="Weekly plan file (.json or .yaml)"
    )
    p_shop.add_argument(
        "--recipes",
        type=str,
        required=True,
        help="Recipe file (.json or .yaml) or directory of Markdown recipe notes",
    )
    p_shop.add_argument(
        "--format", type=str, choices=["json", "markdown"], default="markdown"
    )
    p_shop.add_argument(
        "--sources",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Show the recipes each item comes from (default: from config)",
    )
    p_shop.add_argument(
        "--add",
        action="append",
        default=[],
        help='Add an item by hand. Format: "Name:quantity" or "Name:quantity:unit". '
             "Repeatable.",
    )
    p_shop.add_argument("--title", type=str, default=None, help="Heading for markdown output")
    p_shop.set_defaults(func=cmd_shopping_list)

    return parser


def main(argv: list[str] | None = None) -> int:
    from family_meals.log import setup_logging

    parser = build_parser()
    args = parser.parse_args(argv)

    log_file = Path(args.log_file) if args.log_file else None
    setup_logging(level=args.log_level, log_file=log_file)

    try:
        args.func(args)
    except (OSError, ValueError) as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
