"""
Parser States - Values returned by every event hook.

RUNNING keeps the value loop going; FINISHED ends the current (nested)
parse. Sub-parsers use FINISHED to stop after exactly one value.
"""

from enum import Enum


class ParserState(Enum):
    RUNNING = "running"
    FINISHED = "finished"
