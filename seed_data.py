"""Seed script to populate database with sample data."""

import sys

from snackspot import create_app
from snackspot.seed import seed


def seed_database(reset=False):
    """Seed the database with sample data."""
    app = create_app()

    with app.app_context():
        seed(reset=reset)


if __name__ == '__main__':
    seed_database(reset='--reset' in sys.argv[1:])
