"""Container types and enums."""

from enum import Enum, auto


class Scope(Enum):
    """Service lifecycle scope."""

    SINGLETON = auto()
    PROTOTYPE = auto()
