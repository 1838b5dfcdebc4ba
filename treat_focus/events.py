from dataclasses import dataclass

from .config import MSG_FAILED


@dataclass(frozen=True)
class Start:
    pass


@dataclass(frozen=True)
class Tick:
    pass


@dataclass(frozen=True)
class GiveUp:
    note: str = MSG_FAILED


@dataclass(frozen=True)
class VisibilityLost:
    pass


@dataclass(frozen=True)
class Reset:
    pass


SessionEvent = Start | Tick | GiveUp | VisibilityLost | Reset
