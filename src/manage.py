"""Shopfront database management CLI.

Usage:
    python src/manage.py setup-db   # Create the ordering tables
    python src/manage.py drop-db    # Drop them again
"""

import argparse


def _schema_command(action: str) -> None:
    from ordering.domain import ordering
    from ordering.utils.db import drop_db, setup_db

    ordering.init()
    if action == "setup-db":
        print("Creating ordering database schema...")
        setup_db(ordering)
    else:
        print("Dropping ordering database schema...")
        drop_db(ordering)
    print("Done.")


def main():
    parser = argparse.ArgumentParser(description="Shopfront database management")
    parser.add_argument("command", choices=["setup-db", "drop-db"])
    _schema_command(parser.parse_args().command)


if __name__ == "__main__":
    main()
