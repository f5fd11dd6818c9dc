"""
Enum models for SQLAlchemy

Defines the string enums stored in the database.
"""

from enum import Enum


class BundleType(str, Enum):
    """Origin of a bundle definition"""

    MANUAL = "manual"
    ML = "ml"
    AI_SUGGESTED = "ai_suggested"


class BundleStatus(str, Enum):
    """Bundle lifecycle status"""

    ACTIVE = "active"
    DRAFT = "draft"
    PAUSED = "paused"
    ARCHIVED = "archived"


class BundleAssignmentType(str, Enum):
    """Which product pages a bundle is shown on"""

    ALL = "all"
    SPECIFIC = "specific"


class CustomerBundleAction(str, Enum):
    """Customer interactions with a bundle"""

    VIEW = "view"
    ADD_TO_CART = "add_to_cart"
    PURCHASE = "purchase"
