"""
LogParse - chat transcript extractor for ACT game logs

Filters Advanced Combat Tracker log files down to the conversation of a
chosen group of characters and writes the result as plain text.
"""

__version__ = "1.4.0"
__author__ = "LogParse Team"
