"""
Line classifier for ACT network log lines.
"""

import re
from datetime import datetime
from typing import Dict, List, Optional
from dataclasses import dataclass
from enum import Enum

from logparse.exceptions import LineParseError


class MessageKind(Enum):
    """What kind of message a log line carries."""

    SAY = "say"
    EMOTE = "emote"
    OTHER = "other"


@dataclass(frozen=True)
class LogLine:
    """Represents a classified log line."""

    raw_line: str
    timestamp: datetime
    line_type: str
    code: str
    speaker: str
    kind: MessageKind
    message: str


class LineClassifier:
    """
    Classifies individual lines from ACT network logs.

    Lines are pipe delimited:
    "00|2022-03-05T20:30:46.0000000-08:00|000A|Jane Doe|Hello there|6b1cc1e5d4f3a2b1"
    i.e. line type, timestamp, chat code, speaker, message and a trailing checksum.
    """

    DELIMITER = "|"

    # Line type, timestamp, code, speaker, message; the checksum is optional
    MIN_FIELDS = 5

    CHAT_LINE_TYPE = "00"

    SAY_CODES = frozenset({"000A"})
    EMOTE_CODES = frozenset({"001C", "001D"})  # custom and standard emotes

    # ACT writes 7 fractional digits, more than strptime's %f accepts
    TIMESTAMP_PATTERN = re.compile(
        r"^(\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})(?:\.(\d+))?(Z|[+-]\d{2}:?\d{2})?$"
    )

    # Game font glyphs (world and party icons) live in the private use area
    PRIVATE_USE_PATTERN = re.compile("[\ue000-\uf8ff]")

    def __init__(self):
        self.lines_seen = 0
        self.error_count = 0

    def classify(self, line: str) -> LogLine:
        """
        Parse a single log line into a LogLine.

        Args:
            line: Raw line from the log file, with or without its terminator

        Returns:
            The classified LogLine

        Raises:
            LineParseError: if the line has too few fields or a bad timestamp
        """
        self.lines_seen += 1
        raw_line = line.rstrip("\r\n")

        fields = raw_line.split(self.DELIMITER)
        if len(fields) < self.MIN_FIELDS:
            self.error_count += 1
            raise LineParseError(
                f"Expected at least {self.MIN_FIELDS} fields, found {len(fields)}", raw_line
            )

        timestamp = self.parse_timestamp(fields[1])
        if timestamp is None:
            self.error_count += 1
            raise LineParseError(f"Unparseable timestamp: {fields[1]!r}", raw_line)

        line_type = fields[0].strip()
        code = fields[2].strip().upper()
        speaker = self.normalize_name(fields[3])
        message = self._message_from(fields)

        return LogLine(
            raw_line=raw_line,
            timestamp=timestamp,
            line_type=line_type,
            code=code,
            speaker=speaker,
            kind=self.kind_for(line_type, code),
            message=message,
        )

    def _message_from(self, fields: List[str]) -> str:
        # The message may itself contain the delimiter; the checksum is always last
        if len(fields) == self.MIN_FIELDS:
            return fields[4]
        return self.DELIMITER.join(fields[4:-1])

    @classmethod
    def kind_for(cls, line_type: str, code: str) -> MessageKind:
        """Determine the message kind from the line type and chat code."""
        if line_type != cls.CHAT_LINE_TYPE:
            return MessageKind.OTHER
        if code in cls.SAY_CODES:
            return MessageKind.SAY
        if code in cls.EMOTE_CODES:
            return MessageKind.EMOTE
        return MessageKind.OTHER

    @classmethod
    def parse_timestamp(cls, value: str) -> Optional[datetime]:
        """
        Parse an ACT timestamp such as "2022-03-05T20:30:46.0000000-08:00".

        Returns:
            datetime (timezone aware when the log carries an offset) or None
        """
        match = cls.TIMESTAMP_PATTERN.match(value.strip())
        if not match:
            return None

        base, fraction, offset = match.groups()
        fraction = (fraction or "0")[:6].ljust(6, "0")

        try:
            if offset:
                return datetime.strptime(f"{base}.{fraction}{offset}", "%Y-%m-%dT%H:%M:%S.%f%z")
            return datetime.strptime(f"{base}.{fraction}", "%Y-%m-%dT%H:%M:%S.%f")
        except ValueError:
            return None

    @classmethod
    def normalize_name(cls, name: str) -> str:
        """Strip icon glyphs and collapse whitespace in a speaker name."""
        name = cls.PRIVATE_USE_PATTERN.sub("", name)
        return " ".join(name.split())

    def get_stats(self) -> Dict[str, int]:
        """
        Get classification statistics.

        Returns:
            Dictionary with lines_seen and errors
        """
        return {
            "lines_seen": self.lines_seen,
            "errors": self.error_count,
        }
