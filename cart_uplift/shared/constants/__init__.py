"""
Application constants for the Cart Uplift worker
"""

from . import app, redis, tracking
from .app import *
from .redis import *
from .tracking import *

__all__ = app.__all__ + redis.__all__ + tracking.__all__
