"""Seed script: populates the database with demo subscriptions.

Usage:
    flask shell
    >>> exec(open('seed.py').read())

Or run directly:
    python seed.py
"""

import uuid

from subtracker import create_app
from subtracker.domain.dates import parse_month_year
from subtracker.domain.models import Subscription
from subtracker.extensions import db

ALICE = uuid.UUID("60601fee-2bf1-4721-ae6f-7636e79a0cba")
BOB = uuid.UUID("7d9f4b3e-8a52-4c1d-9e0f-2b6a1c3d5e7f")


def seed():
    """Insert a handful of subscriptions for two demo users."""
    app = create_app("development")

    with app.app_context():
        db.create_all()

        # Check if already seeded
        if Subscription.query.first():
            print("Seed data already exists, skipping.")
            return

        rows = [
            (ALICE, "Yandex Plus", 400, "01-2025", None),
            (ALICE, "Spotify", 299, "03-2025", "12-2025"),
            (ALICE, "Kinopoisk", 349, "06-2025", None),
            (BOB, "Yandex Plus", 400, "02-2025", "08-2025"),
            (BOB, "YouTube Premium", 199, "04-2025", None),
        ]
        db.session.add_all([
            Subscription(
                user_id=user_id,
                service_name=service_name,
                price=price,
                start_date=parse_month_year(start),
                end_date=parse_month_year(end) if end else None,
            )
            for user_id, service_name, price, start, end in rows
        ])

        db.session.commit()
        print(f"Inserted {len(rows)} subscriptions.")


if __name__ == "__main__":
    seed()
