#!/usr/bin/env python3

import sys
import json

from config import get_seed_file
from errors import CategoryInUseError, DuplicateNameError, LedgerError
from logger import get_logger

logger = get_logger()


def cmd_list(args, ledger):
    """List all categories."""
    categories = ledger.list_categories()

    if not categories:
        logger.info("No categories found.")
        return

    logger.info("\nCategories:")
    logger.info("=" * 80)
    for category in categories:
        logger.info(f"ID: {category.id}")
        logger.info(f"Name: {category.name}")
        if category.description:
            logger.info(f"Description: {category.description}")
        logger.info("-" * 80)

    logger.info(f"\nTotal categories: {len(categories)}")


def cmd_create(args, ledger):
    """Create a new category."""
    description = args.description.strip() if args.description else None

    try:
        category = ledger.add_category(args.name, description or None)
    except LedgerError as e:
        logger.error(f"Error creating category: {e}")
        sys.exit(1)

    logger.info(f"\n✓ Category created successfully with ID: {category.id}")
    logger.info(f"  Name: {category.name}")
    if category.description:
        logger.info(f"  Description: {category.description}")


def cmd_delete(args, ledger):
    """Delete a category by ID."""
    try:
        category = ledger.get_category(args.category_id)
    except LedgerError as e:
        logger.error(str(e))
        sys.exit(1)

    logger.info("\nCategory to delete:")
    logger.info(f"  ID: {category.id}")
    logger.info(f"  Name: {category.name}")
    if category.description:
        logger.info(f"  Description: {category.description}")

    if not args.yes:
        confirm = (
            input("\nAre you sure you want to delete this category? (yes/no): ")
            .strip()
            .lower()
        )
        if confirm != "yes":
            logger.info("Deletion cancelled.")
            return

    try:
        ledger.delete_category(args.category_id)
    except CategoryInUseError as e:
        logger.error(f"Cannot delete category: {e}")
        logger.info("Move or delete its transactions first.")
        sys.exit(1)
    except LedgerError as e:
        logger.error(f"Error deleting category: {e}")
        sys.exit(1)

    logger.info(f"✓ Category '{category.name}' deleted successfully.")


def cmd_seed(args, ledger):
    """Seed the default categories from JSON file."""
    seed_file = get_seed_file()

    if not seed_file.exists():
        logger.error(f"Seed file not found: {seed_file}")
        sys.exit(1)

    try:
        with open(seed_file, "r", encoding="utf-8") as f:
            categories_data = json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f"Error parsing JSON file: {e}")
        sys.exit(1)

    logger.info("\nSeeding categories from db/seed/categories.json")
    logger.info("=" * 80)

    created_count = 0
    skipped_count = 0

    for category_data in categories_data:
        name = category_data.get("name")
        if not name:
            logger.warning("Skipping category with no name")
            continue

        try:
            category = ledger.add_category(name, category_data.get("description"))
        except DuplicateNameError:
            logger.info(f"⊘ Skipped '{name}' (already exists)")
            skipped_count += 1
            continue
        except LedgerError as e:
            logger.error(f"Error creating category '{name}': {e}")
            continue

        logger.info(f"✓ Created '{name}' (ID: {category.id})")
        created_count += 1

    logger.info("=" * 80)
    logger.info("\nSeeding complete!")
    logger.info(f"Created: {created_count}")
    logger.info(f"Skipped: {skipped_count}")


def setup_parser(subparsers):
    """Setup categories subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "categories",
        help="Manage categories",
        description="Create, list, and delete transaction categories",
    )

    categories_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available category commands",
        dest="subcommand",
        required=True,
    )

    # categories list
    list_parser = categories_subparsers.add_parser("list", help="List all categories")
    list_parser.set_defaults(func=cmd_list)

    # categories create
    create_parser = categories_subparsers.add_parser(
        "create", help="Create a new category"
    )
    create_parser.add_argument("name", help="Category name (e.g., Groceries)")
    create_parser.add_argument("--description", "-d", help="Optional description")
    create_parser.set_defaults(func=cmd_create)

    # categories delete
    delete_parser = categories_subparsers.add_parser(
        "delete", help="Delete an unused category by ID"
    )
    delete_parser.add_argument(
        "category_id",
        type=int,
        help="ID of the category to delete",
    )
    delete_parser.add_argument(
        "--yes", "-y", action="store_true", help="Skip the confirmation prompt"
    )
    delete_parser.set_defaults(func=cmd_delete)

    # categories seed
    seed_parser = categories_subparsers.add_parser(
        "seed", help="Seed the default categories"
    )
    seed_parser.set_defaults(func=cmd_seed)
