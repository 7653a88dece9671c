"""
Models package for ReqBeam.

Exports all SQLAlchemy models for database operations.
"""

from .request import Request
from .environment import Environment, Variable
from .history import History

__all__ = [
    "Request",
    "Environment",
    "Variable",
    "History",
]
