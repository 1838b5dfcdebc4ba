import logging
from collections import deque
from dataclasses import replace
from typing import Callable

from .config import (
    DEFAULT_DURATION_SEC,
    DEFAULT_PLEDGE_RATE_CENTS,
    DEFAULT_SHELTER,
    DEFAULT_STRICT_MODE,
    DEFAULT_TREATS_PER_SUCCESS,
    KEY_DURATION,
    KEY_PLEDGE_RATE_CENTS,
    KEY_SHELTER,
    KEY_STRICT,
    KEY_TREATS_PER_SUCCESS,
)
from .donation import DonationRecorder
from .errors import InvalidTransitionError, SessionRunningError
from .events import GiveUp, Reset, SessionEvent, Start, VisibilityLost
from .ledger import RewardLedger
from .models import LedgerSnapshot, SessionConfig, SessionSnapshot, Shelter
from .session import SessionMachine
from .utils import cents_to_dollars


def load_config(store) -> SessionConfig:
    duration = store.load(KEY_DURATION, DEFAULT_DURATION_SEC)
    treats = store.load(KEY_TREATS_PER_SUCCESS, DEFAULT_TREATS_PER_SUCCESS)
    rate = store.load(KEY_PLEDGE_RATE_CENTS, DEFAULT_PLEDGE_RATE_CENTS)
    shelter = store.load(KEY_SHELTER, dict(DEFAULT_SHELTER))
    if not all(isinstance(shelter.get(k), str) for k in ("name", "url")):
        shelter = dict(DEFAULT_SHELTER)

    return SessionConfig(
        duration_seconds=duration if duration > 0 else DEFAULT_DURATION_SEC,
        strict_mode=store.load(KEY_STRICT, DEFAULT_STRICT_MODE),
        treats_per_success=treats if treats >= 0 else DEFAULT_TREATS_PER_SUCCESS,
        pledge_rate_cents=rate if rate >= 0 else DEFAULT_PLEDGE_RATE_CENTS,
        shelter=Shelter.from_dict(shelter),
    )


def save_config(store, config: SessionConfig) -> None:
    store.save(KEY_DURATION, config.duration_seconds)
    store.save(KEY_STRICT, config.strict_mode)
    store.save(KEY_TREATS_PER_SUCCESS, config.treats_per_success)
    store.save(KEY_PLEDGE_RATE_CENTS, config.pledge_rate_cents)
    store.save(KEY_SHELTER, config.shelter.to_dict())


class AppContext:
    def __init__(self, store, clock, donations: DonationRecorder, logger: logging.Logger):
        self._store = store
        self._logger = logger
        self._donations = donations

        self.config = load_config(store)
        self.ledger = RewardLedger.from_store(store, logger)
        self.machine = SessionMachine(
            self.config,
            clock,
            logger,
            on_completed=self._on_completed,
            on_failed=self._on_failed,
            post=self.post,
        )

        self._queue: deque[SessionEvent] = deque()
        self._draining = False
        self._observers: list[Callable[[SessionSnapshot, LedgerSnapshot], None]] = []

    # Observation
    def subscribe(self, observer: Callable[[SessionSnapshot, LedgerSnapshot], None]) -> None:
        self._observers.append(observer)

    def session_snapshot(self) -> SessionSnapshot:
        return self.machine.snapshot()

    def ledger_snapshot(self) -> LedgerSnapshot:
        return self.ledger.snapshot(self.config.pledge_rate_cents)

    def _notify(self) -> None:
        session = self.session_snapshot()
        ledger = self.ledger_snapshot()
        for observer in list(self._observers):
            observer(session, ledger)

    # Event loop
    def post(self, event: SessionEvent) -> None:
        self._queue.append(event)
        if self._draining:
            return
        self._draining = True
        try:
            while self._queue:
                current = self._queue.popleft()
                try:
                    self.machine.handle(current)
                except InvalidTransitionError as e:
                    self._logger.warning(f"Ignored event {type(current).__name__}: {e}")
                    continue
                self._notify()
        except Exception:
            dropped = len(self._queue)
            self._queue.clear()
            if dropped:
                self._logger.warning(f"Dropped {dropped} queued event(s) after handler error")
            raise
        finally:
            self._draining = False

    def start(self) -> None:
        self.post(Start())

    def give_up(self, note: str = "") -> None:
        self.post(GiveUp(note))

    def visibility_lost(self) -> None:
        self.post(VisibilityLost())

    def reset(self) -> None:
        self.post(Reset())

    # Ledger side effects
    def _on_completed(self, duration: int, treats: int) -> None:
        self.ledger.on_success(duration, treats)
        self.ledger.persist(self._store)

    def _on_failed(self, elapsed: int) -> None:
        self.ledger.on_failure(elapsed)
        self.ledger.persist(self._store)

    # User actions outside the session
    def donate_now(self) -> int:
        outstanding = self.ledger.outstanding_cents(self.config.pledge_rate_cents)
        amount = self._donations.donate_now(self.config.shelter, outstanding)
        if amount > 0:
            self.ledger.record_donation(amount)
            self.ledger.persist(self._store)
            self.machine.announce(f"Marked {cents_to_dollars(amount)} donated 🐶❤️")
            self._notify()
        return amount

    def update_settings(self, **changes) -> SessionConfig:
        if self.machine.running:
            raise SessionRunningError("Settings are locked while a session is running.")

        updated = replace(self.config, **changes)
        updated.validate()
        for name, value in changes.items():
            setattr(self.config, name, value)
        save_config(self._store, self.config)
        self.machine.sync_duration()
        self._logger.info(f"Settings updated {', '.join(sorted(changes))}")
        self._notify()
        return self.config

    def shutdown(self) -> None:
        if self.machine.running:
            self._logger.info("Shutdown with a running session, discarding it")
        self.machine.reset()
        save_config(self._store, self.config)
        self.ledger.persist(self._store)
