import datetime

import pytest

from treat_focus.models import SessionSnapshot, SessionStatus
from treat_focus.utils import (
    cents_to_dollars,
    clamp,
    seconds_to_mmss,
    stage_label,
    tray_status,
    utc_now_iso,
)


@pytest.mark.parametrize("seconds, text", [(0, "00:00"), (59, "00:59"), (1500, "25:00"), (-4, "00:00")])
def test_seconds_to_mmss(seconds, text) -> None:
    assert seconds_to_mmss(seconds) == text


def test_cents_to_dollars() -> None:
    assert cents_to_dollars(0) == "$0.00"
    assert cents_to_dollars(1234) == "$12.34"


def test_clamp() -> None:
    assert clamp(5, 1, 3) == 3
    assert clamp(-1, 0, 3) == 0
    assert clamp(2, 0, 3) == 2


def test_utc_now_iso_is_parseable() -> None:
    stamp = utc_now_iso()

    assert stamp.endswith("Z")
    parsed = datetime.datetime.fromisoformat(stamp.replace("Z", "+00:00"))
    assert parsed.tzinfo is not None


@pytest.mark.parametrize(
    "status, remaining, label",
    [
        (SessionStatus.DONE, 0, "🌳 Success!"),
        (SessionStatus.FAILED, 30, "💀 Failed"),
        (SessionStatus.RUNNING, 40, "🌱 Growing…"),
        (SessionStatus.RUNNING, 60, "⏳"),
        (SessionStatus.IDLE, 100, "⏳"),
    ],
)
def test_stage_label(status, remaining, label) -> None:
    assert stage_label(SessionSnapshot(status, remaining, 100)) == label


@pytest.mark.parametrize(
    "status, remaining, text",
    [
        (SessionStatus.RUNNING, 754, "focusing, 12:34 left | 15 🦴"),
        (SessionStatus.IDLE, 1500, "idle | 15 🦴"),
        (SessionStatus.DONE, 0, "session done | 15 🦴"),
        (SessionStatus.FAILED, 30, "session failed | 15 🦴"),
    ],
)
def test_tray_status(status, remaining, text) -> None:
    assert tray_status(SessionSnapshot(status, remaining, 1500), 15) == text
