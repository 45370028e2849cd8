"""
Configuration package for uploadhandler.
"""

from .config import config

__all__ = ["config"]
