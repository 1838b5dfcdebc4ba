import os
import datetime

from .models import SessionSnapshot, SessionStatus


def ensure_dir(path: str) -> None:
    os.makedirs(path, exist_ok=True)


def seconds_to_mmss(seconds: float) -> str:
    seconds = max(0, int(seconds))
    m, s = divmod(seconds, 60)
    return f"{m:02d}:{s:02d}"


def cents_to_dollars(cents: int) -> str:
    return f"${cents / 100:.2f}"


def clamp(n: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, n))


def utc_now_iso() -> str:
    now = datetime.datetime.now(datetime.timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def stage_label(snap: SessionSnapshot) -> str:
    if snap.status is SessionStatus.DONE:
        return "🌳 Success!"
    if snap.status is SessionStatus.FAILED:
        return "💀 Failed"
    if snap.progress > 0.5:
        return "🌱 Growing…"
    return "⏳"


def tray_status(snap: SessionSnapshot, treats: int) -> str:
    if snap.status is SessionStatus.RUNNING:
        state = f"focusing, {seconds_to_mmss(snap.remaining)} left"
    elif snap.status is SessionStatus.DONE:
        state = "session done"
    elif snap.status is SessionStatus.FAILED:
        state = "session failed"
    else:
        state = "idle"
    return f"{state} | {treats} 🦴"
