"""Storefront order service management CLI.

Creates, drops or resets the ordering database schema and seeds the demo
catalogue. Only meaningful when PROTEAN_ENV selects a SQL provider; the
default memory provider keeps nothing between processes.

Usage:
    PROTEAN_ENV=production python src/manage.py setup-db
    PROTEAN_ENV=production python src/manage.py seed-catalogue
    PROTEAN_ENV=production python src/manage.py reset-db
    PROTEAN_ENV=production python src/manage.py drop-db
"""

import argparse


def _initialized_domain():
    from ordering.domain import ordering

    ordering.init()
    return ordering


def setup_database():
    from ordering.utils.db import setup_db

    setup_db(_initialized_domain())
    print("Ordering schema created.")


def drop_database():
    from ordering.utils.db import drop_db

    drop_db(_initialized_domain())
    print("Ordering schema dropped.")


def reset_database():
    from ordering.utils.db import reset_db

    reset_db(_initialized_domain())
    print("Ordering schema recreated.")


def seed_demo_catalogue():
    from ordering.product.registration import seed_catalogue

    ordering = _initialized_domain()
    with ordering.domain_context():
        product_ids = seed_catalogue()
    print(f"Seeded {len(product_ids)} products.")


COMMANDS = {
    "setup-db": (setup_database, "Create all database tables"),
    "drop-db": (drop_database, "Drop all database tables"),
    "reset-db": (reset_database, "Drop and recreate all database tables"),
    "seed-catalogue": (seed_demo_catalogue, "Register the demo shirt catalogue"),
}


def main(argv=None):
    parser = argparse.ArgumentParser(description="Storefront order service management")
    subparsers = parser.add_subparsers(dest="command", required=True)
    for name, (_, help_text) in COMMANDS.items():
        subparsers.add_parser(name, help=help_text)

    args = parser.parse_args(argv)
    handler, _ = COMMANDS[args.command]
    handler()


if __name__ == "__main__":
    main()
