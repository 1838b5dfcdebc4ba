from __future__ import annotations

import enum
from dataclasses import dataclass, field

from .config import (
    DEFAULT_DURATION_SEC,
    DEFAULT_PLEDGE_RATE_CENTS,
    DEFAULT_SHELTER,
    DEFAULT_STRICT_MODE,
    DEFAULT_TREATS_PER_SUCCESS,
    SHELTER_URL_PLACEHOLDER,
)


class SessionStatus(str, enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class Shelter:
    name: str = DEFAULT_SHELTER["name"]
    url: str = DEFAULT_SHELTER["url"]

    @property
    def has_url(self) -> bool:
        url = (self.url or "").strip()
        return bool(url) and url != SHELTER_URL_PLACEHOLDER

    def to_dict(self) -> dict:
        return {"name": self.name, "url": self.url}

    @classmethod
    def from_dict(cls, data: dict) -> Shelter:
        return cls(name=str(data.get("name", "")), url=str(data.get("url", "")))


@dataclass
class SessionConfig:
    duration_seconds: int = DEFAULT_DURATION_SEC
    strict_mode: bool = DEFAULT_STRICT_MODE
    treats_per_success: int = DEFAULT_TREATS_PER_SUCCESS
    pledge_rate_cents: int = DEFAULT_PLEDGE_RATE_CENTS
    shelter: Shelter = field(default_factory=Shelter)

    def validate(self) -> None:
        if self.duration_seconds <= 0:
            raise ValueError("duration_seconds must be > 0")
        if self.treats_per_success < 0:
            raise ValueError("treats_per_success must be >= 0")
        if self.pledge_rate_cents < 0:
            raise ValueError("pledge_rate_cents must be >= 0")


@dataclass(frozen=True)
class HistoryEntry:
    timestamp: str
    duration: int
    success: bool
    earned_treats: int | None = None

    def to_dict(self) -> dict:
        data = {"at": self.timestamp, "duration": self.duration, "success": self.success}
        if self.success:
            data["earnedTreats"] = self.earned_treats
        return data

    @classmethod
    def from_dict(cls, data: dict) -> HistoryEntry:
        success = data["success"]
        if not isinstance(success, bool):
            raise ValueError("success must be a bool")
        earned = int(data["earnedTreats"]) if success else None
        return cls(
            timestamp=str(data["at"]),
            duration=int(data["duration"]),
            success=success,
            earned_treats=earned,
        )


@dataclass(frozen=True)
class SessionSnapshot:
    status: SessionStatus
    remaining: int
    duration: int
    message: str = ""

    @property
    def running(self) -> bool:
        return self.status is SessionStatus.RUNNING

    @property
    def progress(self) -> float:
        if self.duration <= 0:
            return 0.0
        return 1.0 - self.remaining / self.duration


@dataclass(frozen=True)
class LedgerSnapshot:
    treats: int
    donated_cents: int
    pledged_cents: int
    outstanding_cents: int
    history: tuple[HistoryEntry, ...] = ()
