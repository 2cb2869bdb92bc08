"""ORM Models: SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - User is shared by the rental store and the social service

Design Decisions:
    - One file per entity
    - All models imported here so string-based relationship() references resolve
      before any query runs
"""

from bookpost.models.user import User  # noqa: F401
from bookpost.models.author import Author  # noqa: F401
from bookpost.models.category import Category  # noqa: F401
from bookpost.models.book import Book  # noqa: F401
from bookpost.models.cart import Cart  # noqa: F401
from bookpost.models.rental import Rental  # noqa: F401
from bookpost.models.rental_detail import RentalDetail  # noqa: F401
from bookpost.models.payment import Payment  # noqa: F401
from bookpost.models.post import Post  # noqa: F401
from bookpost.models.comment import Comment  # noqa: F401
from bookpost.models.user_activity_log import UserActivityLog  # noqa: F401
