import datetime
from tkinter import messagebox

import customtkinter as ctk

from .config import (
    APP_TITLE,
    APPDATA_DIR,
    SETTINGS_FILE,
    MIN_DURATION_MIN,
    MAX_DURATION_MIN,
    MAX_TREATS_PER_SUCCESS,
    MAX_PLEDGE_RATE_CENTS,
    MSG_STOPPED_EARLY,
)
from .clock import TkClock
from .context import AppContext
from .donation import DonationRecorder
from .errors import TreatFocusError
from .logging_setup import setup_logger
from .models import LedgerSnapshot, SessionSnapshot, SessionStatus, Shelter
from .settings_store import SettingsStore
from .tray import TrayController
from .utils import cents_to_dollars, clamp, ensure_dir, seconds_to_mmss, stage_label


ctk.set_appearance_mode("Dark")
ctk.set_default_color_theme("blue")


def _read_int(entry: ctk.CTkEntry, lo: int, hi: int, fallback: int) -> int:
    try:
        return int(clamp(int(float(entry.get().strip())), lo, hi))
    except Exception:
        return fallback


def _history_line(entry) -> str:
    try:
        at = datetime.datetime.fromisoformat(entry.timestamp.replace("Z", "+00:00"))
        when = at.astimezone().strftime("%Y-%m-%d %H:%M:%S")
    except ValueError:
        when = entry.timestamp
    outcome = f"+{entry.earned_treats} 🦴" if entry.success else "Failed"
    return f"{when} – {outcome}"


class TreatFocusApp:
    def __init__(self):
        ensure_dir(APPDATA_DIR)

        self.logger = setup_logger()
        self.logger.info("App start")

        self.root = ctk.CTk()
        self.root.title(APP_TITLE)
        self.root.geometry("440x780")
        self.root.minsize(440, 780)
        self.root.protocol("WM_DELETE_WINDOW", self.hide_to_tray)
        self.root.bind("<Unmap>", self._on_unmap)

        self.store = SettingsStore(SETTINGS_FILE, self.logger)
        self.store.refresh()

        self.ctx = AppContext(
            self.store,
            TkClock(self.root),
            DonationRecorder(confirm=self._confirm, logger=self.logger),
            self.logger,
        )
        self.ctx.subscribe(self._render)

        self.tray = TrayController(
            title=APP_TITLE,
            on_show=self.show_from_tray,
            on_quit=self.quit_app,
        )
        self.tray.follow(self.ctx.session_snapshot(), self.ctx.ledger_snapshot())
        self.ctx.subscribe(self.tray.follow)

        self._build_ui()
        self._load_settings_fields()
        self._render(self.ctx.session_snapshot(), self.ctx.ledger_snapshot())

    # UI
    def _build_ui(self) -> None:
        self.header = ctk.CTkLabel(self.root, text=f"🐶 {APP_TITLE}", font=("Roboto", 26, "bold"))
        self.header.pack(pady=(18, 2))
        ctk.CTkLabel(
            self.root,
            text="Stay focused → earn treats → donate to a shelter.",
            text_color="gray",
        ).pack(pady=(0, 8))

        self.frame_timer = ctk.CTkFrame(self.root)
        self.frame_timer.pack(padx=18, pady=6, fill="x")

        self.time_label = ctk.CTkLabel(self.frame_timer, text="00:00", font=("Roboto", 48, "bold"))
        self.time_label.pack(pady=(12, 4))

        self.progress_bar = ctk.CTkProgressBar(self.frame_timer)
        self.progress_bar.pack(fill="x", padx=24, pady=4)
        self.progress_bar.set(0.0)

        self.action_btn = ctk.CTkButton(self.frame_timer, text="Start Focus", command=self._on_action)
        self.action_btn.pack(pady=8)

        self.stage_label = ctk.CTkLabel(self.frame_timer, text="⏳", font=("Arial", 22))
        self.stage_label.pack()

        self.message_label = ctk.CTkLabel(self.frame_timer, text="", text_color="gray")
        self.message_label.pack(pady=(0, 10))

        self.frame_rewards = ctk.CTkFrame(self.root)
        self.frame_rewards.pack(padx=18, pady=6, fill="x")

        ctk.CTkLabel(self.frame_rewards, text="Rewards", font=("Arial", 16, "bold")).grid(
            row=0, column=0, sticky="w", padx=12, pady=(10, 4)
        )
        self.treats_label = ctk.CTkLabel(self.frame_rewards, text="Total treats: 0 🦴", anchor="w")
        self.treats_label.grid(row=1, column=0, sticky="w", padx=12, pady=2)
        self.pledged_label = ctk.CTkLabel(self.frame_rewards, text="Pledged: $0.00", anchor="w")
        self.pledged_label.grid(row=2, column=0, sticky="w", padx=12, pady=2)
        self.donated_label = ctk.CTkLabel(self.frame_rewards, text="Donated: $0.00", anchor="w")
        self.donated_label.grid(row=1, column=1, sticky="e", padx=12, pady=2)
        self.outstanding_label = ctk.CTkLabel(self.frame_rewards, text="Outstanding: $0.00", anchor="w")
        self.outstanding_label.grid(row=2, column=1, sticky="e", padx=12, pady=2)

        self.donate_btn = ctk.CTkButton(
            self.frame_rewards,
            text="Donate Now",
            fg_color="#c0392b",
            hover_color="#e74c3c",
            command=self._on_donate,
        )
        self.donate_btn.grid(row=3, column=0, columnspan=2, sticky="ew", padx=12, pady=(6, 12))
        self.frame_rewards.grid_columnconfigure(0, weight=1)
        self.frame_rewards.grid_columnconfigure(1, weight=1)

        self.frame_settings = ctk.CTkFrame(self.root)
        self.frame_settings.pack(padx=18, pady=6, fill="x")

        ctk.CTkLabel(self.frame_settings, text="Session minutes:").grid(row=0, column=0, sticky="w", padx=12, pady=(10, 4))
        self.minutes_entry = ctk.CTkEntry(self.frame_settings, width=90, justify="center")
        self.minutes_entry.grid(row=0, column=1, sticky="e", padx=12, pady=(10, 4))

        ctk.CTkLabel(self.frame_settings, text="Treats per success:").grid(row=1, column=0, sticky="w", padx=12, pady=4)
        self.treats_entry = ctk.CTkEntry(self.frame_settings, width=90, justify="center")
        self.treats_entry.grid(row=1, column=1, sticky="e", padx=12, pady=4)

        ctk.CTkLabel(self.frame_settings, text="Pledge per treat (cents):").grid(row=2, column=0, sticky="w", padx=12, pady=4)
        self.rate_entry = ctk.CTkEntry(self.frame_settings, width=90, justify="center")
        self.rate_entry.grid(row=2, column=1, sticky="e", padx=12, pady=4)

        self.shelter_name_entry = ctk.CTkEntry(self.frame_settings, placeholder_text="Shelter name")
        self.shelter_name_entry.grid(row=3, column=0, columnspan=2, sticky="ew", padx=12, pady=4)
        self.shelter_url_entry = ctk.CTkEntry(self.frame_settings, placeholder_text="https://shelter.example/donate")
        self.shelter_url_entry.grid(row=4, column=0, columnspan=2, sticky="ew", padx=12, pady=4)

        self._strict_var = ctk.BooleanVar(value=self.ctx.config.strict_mode)
        self.strict_switch = ctk.CTkSwitch(
            self.frame_settings,
            text="Strict mode (minimizing kills the session)",
            variable=self._strict_var,
        )
        self.strict_switch.grid(row=5, column=0, columnspan=2, sticky="w", padx=12, pady=4)

        self.save_btn = ctk.CTkButton(
            self.frame_settings,
            text="Save settings",
            fg_color="#555555",
            hover_color="#777777",
            command=self._on_save_settings,
        )
        self.save_btn.grid(row=6, column=0, columnspan=2, sticky="ew", padx=12, pady=(6, 12))
        self.frame_settings.grid_columnconfigure(0, weight=1)

        self.frame_history = ctk.CTkFrame(self.root)
        self.frame_history.pack(padx=18, pady=6, fill="both", expand=True)

        ctk.CTkLabel(self.frame_history, text="History", anchor="w", font=("Arial", 16, "bold")).pack(
            fill="x", padx=12, pady=(10, 4)
        )
        self.history_box = ctk.CTkTextbox(self.frame_history, height=140)
        self.history_box.pack(fill="both", expand=True, padx=12, pady=(0, 12))
        self.history_box.configure(state="disabled")

        self.footer = ctk.CTkLabel(
            self.root,
            text='Tip: Click "X" to hide to tray. Use tray menu to show or quit.',
            text_color="gray",
        )
        self.footer.pack(pady=(0, 12))

    def _load_settings_fields(self) -> None:
        cfg = self.ctx.config
        for entry, value in (
            (self.minutes_entry, max(MIN_DURATION_MIN, cfg.duration_seconds // 60)),
            (self.treats_entry, cfg.treats_per_success),
            (self.rate_entry, cfg.pledge_rate_cents),
            (self.shelter_name_entry, cfg.shelter.name),
            (self.shelter_url_entry, cfg.shelter.url),
        ):
            entry.delete(0, "end")
            entry.insert(0, str(value))
        self._strict_var.set(cfg.strict_mode)

    def _render(self, session: SessionSnapshot, ledger: LedgerSnapshot) -> None:
        self.time_label.configure(text=seconds_to_mmss(session.remaining))
        self.progress_bar.set(clamp(session.progress, 0.0, 1.0))
        self.stage_label.configure(text=stage_label(session))
        self.message_label.configure(text=session.message)

        if session.running:
            self.action_btn.configure(text="Give Up", fg_color="#7f8c8d", hover_color="#95a5a6")
        elif session.status is SessionStatus.IDLE:
            self.action_btn.configure(text="Start Focus", fg_color="#2ecc71", hover_color="#27ae60")
        else:
            self.action_btn.configure(text="Reset", fg_color="#3498db", hover_color="#2980b9")

        locked = "disabled" if session.running else "normal"
        for widget in (
            self.minutes_entry,
            self.treats_entry,
            self.rate_entry,
            self.shelter_name_entry,
            self.shelter_url_entry,
            self.strict_switch,
            self.save_btn,
        ):
            widget.configure(state=locked)

        self.treats_label.configure(text=f"Total treats: {ledger.treats} 🦴")
        self.pledged_label.configure(text=f"Pledged: {cents_to_dollars(ledger.pledged_cents)}")
        self.donated_label.configure(text=f"Donated: {cents_to_dollars(ledger.donated_cents)}")
        self.outstanding_label.configure(text=f"Outstanding: {cents_to_dollars(ledger.outstanding_cents)}")

        lines = [_history_line(e) for e in ledger.history] or ["(no sessions yet)"]
        self.history_box.configure(state="normal")
        self.history_box.delete("1.0", "end")
        self.history_box.insert("1.0", "\n".join(lines))
        self.history_box.configure(state="disabled")

    # Actions
    def _on_action(self) -> None:
        status = self.ctx.machine.status
        if status is SessionStatus.RUNNING:
            self.ctx.give_up(MSG_STOPPED_EARLY)
        elif status is SessionStatus.IDLE:
            self.ctx.start()
        else:
            self.ctx.reset()

    def _on_donate(self) -> None:
        try:
            self.ctx.donate_now()
        except TreatFocusError as e:
            messagebox.showwarning(APP_TITLE, str(e), parent=self.root)

    def _confirm(self, prompt: str) -> bool:
        return bool(messagebox.askyesno(APP_TITLE, prompt, parent=self.root))

    def _on_save_settings(self) -> None:
        cfg = self.ctx.config
        minutes = _read_int(self.minutes_entry, MIN_DURATION_MIN, MAX_DURATION_MIN, cfg.duration_seconds // 60)
        try:
            self.ctx.update_settings(
                duration_seconds=max(MIN_DURATION_MIN, minutes) * 60,
                strict_mode=bool(self._strict_var.get()),
                treats_per_success=_read_int(self.treats_entry, 0, MAX_TREATS_PER_SUCCESS, cfg.treats_per_success),
                pledge_rate_cents=_read_int(self.rate_entry, 0, MAX_PLEDGE_RATE_CENTS, cfg.pledge_rate_cents),
                shelter=Shelter(
                    name=self.shelter_name_entry.get().strip(),
                    url=self.shelter_url_entry.get().strip(),
                ),
            )
        except (TreatFocusError, ValueError) as e:
            messagebox.showwarning(APP_TITLE, str(e), parent=self.root)
        self._load_settings_fields()

    # Visibility
    def _on_unmap(self, event) -> None:
        if event.widget is not self.root:
            return
        self.logger.info("Window hidden")
        self.ctx.visibility_lost()

    # Tray
    def hide_to_tray(self) -> None:
        self.logger.info("Hide to tray")
        self.ctx.visibility_lost()
        self.tray.ensure_running()
        self.root.withdraw()

    def show_from_tray(self) -> None:
        self.logger.info("Show from tray")

        def _do():
            try:
                self.root.deiconify()
                self.root.lift()
                self.root.focus_force()
            except Exception:
                pass

        self.root.after(0, _do)

    def quit_app(self) -> None:
        self.logger.info("Quit requested")

        def _do():
            self.ctx.shutdown()
            try:
                self.tray.stop()
                self.root.destroy()
            except Exception:
                pass
            self.logger.info("App stopped")

        self.root.after(0, _do)

    def run(self) -> None:
        self.root.mainloop()
