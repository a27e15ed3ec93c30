"""
Group definitions and the name matcher that decides which lines are kept.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable

from .classifier import LineClassifier, LogLine, MessageKind


@dataclass(frozen=True)
class Group:
    """A named set of character full names to filter a log for."""

    short_name: str
    label: str
    members: FrozenSet[str] = field(default_factory=frozenset)
    everyone: bool = False

    @classmethod
    def of(cls, short_name: str, label: str, members: Iterable[str]) -> "Group":
        """Build a group, normalizing member names the way speakers are normalized."""
        names = frozenset(
            name for name in (LineClassifier.normalize_name(m) for m in members) if name
        )
        return cls(short_name=short_name, label=label, members=names)

    def __repr__(self) -> str:
        if self.everyone:
            return f"Group({self.short_name!r}, everyone)"
        return f"Group({self.short_name!r}, {len(self.members)} members)"


EVERYONE = Group(short_name="everyone", label="Everyone", everyone=True)


def matches(line: LogLine, group: Group) -> bool:
    """Check whether the line's speaker belongs to the group."""
    if group.everyone:
        return True
    return line.speaker in group.members


def is_eligible(line: LogLine, include_emotes: bool) -> bool:
    """Check whether the line's kind can be kept at all."""
    if line.kind is MessageKind.SAY:
        return True
    return line.kind is MessageKind.EMOTE and include_emotes


def keep(line: LogLine, group: Group, include_emotes: bool) -> bool:
    """Decide whether a classified line belongs in the transcript."""
    return is_eligible(line, include_emotes) and matches(line, group)
