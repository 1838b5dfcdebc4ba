import logging
from typing import Callable

from .config import KEY_DONATED_CENTS, KEY_HISTORY, KEY_TREATS
from .models import HistoryEntry, LedgerSnapshot
from .utils import utc_now_iso


class RewardLedger:
    def __init__(
        self,
        logger: logging.Logger,
        treats: int = 0,
        donated_cents: int = 0,
        history: list[HistoryEntry] | None = None,
        now: Callable[[], str] = utc_now_iso,
    ):
        if treats < 0 or donated_cents < 0:
            raise ValueError("ledger totals must be >= 0")
        self._logger = logger
        self._treats = int(treats)
        self._donated_cents = int(donated_cents)
        self._history: list[HistoryEntry] = list(history or [])
        self._now = now

    @property
    def treats(self) -> int:
        return self._treats

    @property
    def donated_cents(self) -> int:
        return self._donated_cents

    @property
    def history(self) -> tuple[HistoryEntry, ...]:
        return tuple(self._history)

    def on_success(self, session_duration: int, treats_per_success: int) -> HistoryEntry:
        entry = HistoryEntry(
            timestamp=self._now(),
            duration=int(session_duration),
            success=True,
            earned_treats=int(treats_per_success),
        )
        self._treats += int(treats_per_success)
        self._history.insert(0, entry)
        self._logger.info(f"LEDGER success treats+={treats_per_success} total={self._treats}")
        return entry

    def on_failure(self, elapsed_seconds: int) -> HistoryEntry:
        entry = HistoryEntry(timestamp=self._now(), duration=int(elapsed_seconds), success=False)
        self._history.insert(0, entry)
        self._logger.info(f"LEDGER failure elapsed={elapsed_seconds}")
        return entry

    def record_donation(self, cents: int) -> None:
        if cents < 0:
            raise ValueError("donation must be >= 0 cents")
        self._donated_cents += int(cents)
        self._logger.info(f"LEDGER donation cents={cents} donated_total={self._donated_cents}")

    def pledged_cents(self, pledge_rate_cents: int) -> int:
        return self._treats * int(pledge_rate_cents)

    def outstanding_cents(self, pledge_rate_cents: int) -> int:
        return max(0, self.pledged_cents(pledge_rate_cents) - self._donated_cents)

    def snapshot(self, pledge_rate_cents: int) -> LedgerSnapshot:
        return LedgerSnapshot(
            treats=self._treats,
            donated_cents=self._donated_cents,
            pledged_cents=self.pledged_cents(pledge_rate_cents),
            outstanding_cents=self.outstanding_cents(pledge_rate_cents),
            history=self.history,
        )

    # Persistence
    @classmethod
    def from_store(cls, store, logger: logging.Logger, **kwargs) -> "RewardLedger":
        treats = store.load(KEY_TREATS, 0)
        donated = store.load(KEY_DONATED_CENTS, 0)
        raw_history = store.load(KEY_HISTORY, [])

        history: list[HistoryEntry] = []
        for item in raw_history:
            try:
                history.append(HistoryEntry.from_dict(item))
            except (KeyError, TypeError, ValueError, AttributeError):
                logger.warning(f"Dropping malformed history entry {item!r}")

        return cls(
            logger,
            treats=max(0, treats),
            donated_cents=max(0, donated),
            history=history,
            **kwargs,
        )

    def persist(self, store) -> None:
        store.save(KEY_TREATS, self._treats)
        store.save(KEY_DONATED_CENTS, self._donated_cents)
        store.save(KEY_HISTORY, [e.to_dict() for e in self._history])
