"""Flask extension singletons.

``db`` backs the subscriptions table; ``migrate`` exposes the Alembic
revisions under ``migrations/`` through ``flask db``. Both are bound to
the app in ``create_app``.
"""

from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()
migrate = Migrate(directory="migrations")
