"""
Configuration errors
"""

from .base import CartUpliftException


class ConfigurationError(CartUpliftException):
    """Settings that load but cannot work together"""

    code = "CONFIGURATION_ERROR"
