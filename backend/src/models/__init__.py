"""SQLAlchemy Models for ContactFlow"""

from .base import Base, utcnow
from .submitter import Submitter
from .message import Message

__all__ = [
    "Base",
    "utcnow",
    "Submitter",
    "Message",
]
