import threading

import pystray
from PIL import Image, ImageDraw

from .models import LedgerSnapshot, SessionSnapshot, SessionStatus
from .utils import tray_status

BONE_COLORS = {
    SessionStatus.IDLE: (120, 80, 50),
    SessionStatus.RUNNING: (46, 204, 113),
    SessionStatus.DONE: (52, 152, 219),
    SessionStatus.FAILED: (192, 57, 43),
}


def bone_icon(status: SessionStatus) -> Image.Image:
    img = Image.new("RGB", (64, 64), color=(250, 235, 210))
    draw = ImageDraw.Draw(img)
    color = BONE_COLORS[status]
    draw.rounded_rectangle((16, 27, 48, 37), radius=4, fill=color)
    for cx, cy in ((14, 25), (14, 39), (50, 25), (50, 39)):
        draw.ellipse((cx - 6, cy - 6, cx + 6, cy + 6), fill=color)
    return img


class TrayController:
    def __init__(self, title: str, on_show, on_quit):
        self._title = title
        self._on_show = on_show
        self._on_quit = on_quit

        self._icon: pystray.Icon | None = None
        self._status = SessionStatus.IDLE
        self._status_text = "idle"

    def follow(self, session: SessionSnapshot, ledger: LedgerSnapshot) -> None:
        self._status_text = tray_status(session, ledger.treats)
        status_changed = session.status is not self._status
        self._status = session.status

        icon = self._icon
        if icon is None:
            return
        icon.title = f"{self._title} – {self._status_text}"
        if status_changed:
            icon.icon = bone_icon(self._status)
        icon.update_menu()

    def ensure_running(self) -> None:
        if self._icon is not None:
            return

        menu = pystray.Menu(
            pystray.MenuItem(lambda item: self._status_text, None, enabled=False),
            pystray.Menu.SEPARATOR,
            pystray.MenuItem("Show", lambda icon, item: self._on_show(), default=True),
            pystray.MenuItem("Quit", lambda icon, item: self._on_quit()),
        )
        self._icon = pystray.Icon(
            "TreatFocus",
            bone_icon(self._status),
            f"{self._title} – {self._status_text}",
            menu,
        )
        threading.Thread(target=self._icon.run, daemon=True).start()

    def stop(self) -> None:
        icon, self._icon = self._icon, None
        if icon is None:
            return
        try:
            icon.stop()
        except Exception:
            pass
