import logging
from typing import Callable

from .config import MSG_FAILED, MSG_LEFT_TAB
from .errors import InvalidTransitionError
from .events import GiveUp, Reset, SessionEvent, Start, Tick, VisibilityLost
from .models import SessionConfig, SessionSnapshot, SessionStatus


class SessionMachine:
    def __init__(
        self,
        config: SessionConfig,
        clock,
        logger: logging.Logger,
        on_completed: Callable[[int, int], None] | None = None,
        on_failed: Callable[[int], None] | None = None,
        post: Callable[[SessionEvent], None] | None = None,
    ):
        self._config = config
        self._clock = clock
        self._logger = logger
        self._on_completed = on_completed
        self._on_failed = on_failed
        self._post = post

        self._status = SessionStatus.IDLE
        self._remaining = int(config.duration_seconds)
        self._planned = int(config.duration_seconds)
        self._message = ""
        self._ticker = None

    @property
    def status(self) -> SessionStatus:
        return self._status

    @property
    def remaining(self) -> int:
        return self._remaining

    @property
    def message(self) -> str:
        return self._message

    @property
    def running(self) -> bool:
        return self._status is SessionStatus.RUNNING

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            status=self._status,
            remaining=self._remaining,
            duration=self._planned,
            message=self._message,
        )

    def handle(self, event: SessionEvent) -> None:
        if isinstance(event, Start):
            self.start()
        elif isinstance(event, Tick):
            self.tick()
        elif isinstance(event, GiveUp):
            self.give_up(event.note)
        elif isinstance(event, VisibilityLost):
            self.visibility_lost()
        elif isinstance(event, Reset):
            self.reset()
        else:
            raise TypeError(f"unknown session event {event!r}")

    def start(self) -> None:
        if self._status is not SessionStatus.IDLE:
            raise InvalidTransitionError("start", self._status.value)
        if self._ticker is not None:
            raise InvalidTransitionError("start", "clock already subscribed")

        self._planned = int(self._config.duration_seconds)
        self._remaining = self._planned
        self._status = SessionStatus.RUNNING
        self._message = ""
        self._ticker = self._clock.every_second(self._on_clock)
        self._logger.info(f"Session start duration={self._planned} strict={self._config.strict_mode}")

    def tick(self) -> None:
        if not self.running:
            raise InvalidTransitionError("tick", self._status.value)

        self._remaining = max(0, self._remaining - 1)
        if self._remaining > 0:
            return

        self._release_clock()
        treats = int(self._config.treats_per_success)
        self._status = SessionStatus.DONE
        self._message = f"Nice! +{treats} 🦴 earned"
        self._logger.info(f"Session completed duration={self._planned} treats={treats}")
        if self._on_completed is not None:
            self._on_completed(self._planned, treats)

    def give_up(self, note: str = "") -> None:
        if not self.running:
            raise InvalidTransitionError("give up", self._status.value)

        self._release_clock()
        elapsed = self._planned - self._remaining
        self._status = SessionStatus.FAILED
        self._message = note or MSG_FAILED
        self._logger.info(f"Session failed elapsed={elapsed} note={self._message}")
        if self._on_failed is not None:
            self._on_failed(elapsed)

    def visibility_lost(self) -> None:
        if self.running and self._config.strict_mode:
            self.give_up(MSG_LEFT_TAB)

    def reset(self) -> None:
        self._release_clock()
        self._status = SessionStatus.IDLE
        self._planned = int(self._config.duration_seconds)
        self._remaining = self._planned
        self._message = ""
        self._logger.info("Session reset")

    def sync_duration(self) -> None:
        if self._status is SessionStatus.IDLE:
            self._planned = int(self._config.duration_seconds)
            self._remaining = self._planned

    def announce(self, message: str) -> None:
        self._message = message

    def _on_clock(self) -> None:
        if self._post is not None:
            self._post(Tick())
        else:
            self.tick()

    def _release_clock(self) -> None:
        if self._ticker is not None:
            self._ticker.cancel()
            self._ticker = None
