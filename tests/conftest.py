"""Shared fixtures: a manual clock, a temp-file store and a quiet logger."""

import logging

import pytest

from treat_focus.context import AppContext
from treat_focus.donation import DonationRecorder
from treat_focus.settings_store import SettingsStore


class FakeTicker:
    def __init__(self, callback):
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeClock:
    """Collects subscriptions; `advance` fires the live one like a 1 s timer would."""

    def __init__(self):
        self.tickers: list[FakeTicker] = []

    def every_second(self, callback) -> FakeTicker:
        ticker = FakeTicker(callback)
        self.tickers.append(ticker)
        return ticker

    @property
    def live(self) -> list[FakeTicker]:
        return [t for t in self.tickers if not t.cancelled]

    def advance(self, seconds: int) -> None:
        for _ in range(seconds):
            for ticker in self.live:
                ticker.callback()


@pytest.fixture
def logger() -> logging.Logger:
    return logging.getLogger("TreatFocus.tests")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(tmp_path, logger) -> SettingsStore:
    s = SettingsStore(str(tmp_path / "settings.json"), logger)
    s.refresh()
    return s


@pytest.fixture
def opened_urls() -> list:
    return []


@pytest.fixture
def confirm_answers() -> list:
    return [True]


@pytest.fixture
def donations(logger, opened_urls, confirm_answers) -> DonationRecorder:
    return DonationRecorder(
        confirm=lambda prompt: confirm_answers.pop(0),
        logger=logger,
        open_url=opened_urls.append,
    )


@pytest.fixture
def ctx(store, clock, donations, logger) -> AppContext:
    return AppContext(store, clock, donations, logger)
