"""
Log line parsing: classification and group matching.
"""

from .classifier import LineClassifier, LogLine, MessageKind
from .matcher import EVERYONE, Group, is_eligible, keep, matches

__all__ = [
    "LineClassifier",
    "LogLine",
    "MessageKind",
    "EVERYONE",
    "Group",
    "is_eligible",
    "keep",
    "matches",
]
