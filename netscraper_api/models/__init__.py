"""ORM Models — SQLAlchemy declarative models for search groups and terms.

Invariants:
    - All models inherit from Base (db/base.py)
    - SearchGroup is the aggregate root; every SearchTerm is scoped by search_group_id

Design Decisions:
    - One file per entity
    - All models imported here so string-based relationship() references
      resolve before any query runs
"""

from netscraper_api.models.search_group import SearchGroup  # noqa: F401
from netscraper_api.models.search_term import SearchTerm  # noqa: F401
