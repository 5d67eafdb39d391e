"""
Tkinter UI for a best-of tic-tac-toe series.
The window is a thin layer over SeriesGame: it renders a GameView after every change
and forwards cell clicks, history jumps and resets back to the game.
"""

import argparse
import atexit
import logging
import random
import tkinter as tk
from tkinter import ttk
from typing import List, Optional, Tuple

from .ai import Difficulty
from .config import Mode
from .logs import init_logger, shutdown_logger
from .scheduling import TkScheduler
from .series import Phase, SeriesGame
from .settings import load_settings, resolve_settings_path
from .setup_flow import SetupFlow
from .view import GameView, build_view, score_text

PALETTE = {
    "BG": "#0f172a",
    "PANEL": "#1e293b",
    "ACCENT": "#38bdf8",
    "TEXT": "#e2e8f0",
    "MUTED": "#94a3b8",
    "BTN": "#0ea5e9",
    "O": "#f97316",
    "CELL": "#233244",
    "WIN": "#22c55e",
}

FONTS = {
    "board": ("Segoe UI", 22, "bold"),
    "text": ("Segoe UI", 11, "normal"),
    "title": ("Segoe UI", 13, "bold"),
}

MODE_LABELS = {mode.label: mode for mode in Mode}
DIFFICULTY_LABELS = {level.label: level for level in Difficulty}

logger = logging.getLogger(__name__)


class SeriesGUI:
    def __init__(self, root: tk.Tk, settings: Optional[dict] = None, rng: Optional[random.Random] = None) -> None:
        self.root = root
        self.root.title("Tic-Tac-Toe Series")
        self.root.configure(bg=PALETTE["BG"])
        self.root.minsize(720, 520)
        self.settings = settings or load_settings(resolve_settings_path())
        self.flow = SetupFlow(
            series_lengths=tuple(self.settings["series_lengths"]),
            default_series_length=self.settings["default_series_length"],
            default_difficulty=Difficulty.parse(self.settings["default_difficulty"]),
        )
        self.game = SeriesGame(
            TkScheduler(root),
            ai_delay_ms=self.settings["ai_delay_ms"],
            settle_delay_ms=self.settings["settle_delay_ms"],
            rng=rng,
        )

        self.mode_var = tk.StringVar(value=Mode.HUMAN_VS_COMPUTER.label)
        self.name1_var = tk.StringVar(value="")
        self.name2_var = tk.StringVar(value="")
        self.difficulty_var = tk.StringVar(value=self.flow.default_difficulty.label)
        self.length_var = tk.StringVar(value=str(self.flow.default_series_length))
        self.symbol_var = tk.StringVar(value="X")
        self.status_var = tk.StringVar(value="Set up a new game.")
        self.score_var = tk.StringVar(value="")
        self.setup_error_var = tk.StringVar(value="")

        self._configure_style()
        self._build_layout()
        self.game.subscribe(lambda _game: self._refresh())
        self._refresh()

    def _configure_style(self) -> None:
        style = ttk.Style(self.root)
        style.configure("App.TFrame", background=PALETTE["BG"])
        style.configure("Panel.TFrame", background=PALETTE["PANEL"])
        style.configure("App.TLabel", background=PALETTE["PANEL"], foreground=PALETTE["TEXT"], font=FONTS["text"])
        style.configure("Title.TLabel", background=PALETTE["PANEL"], foreground=PALETTE["ACCENT"], font=FONTS["title"])
        style.configure("Muted.TLabel", background=PALETTE["PANEL"], foreground=PALETTE["MUTED"], font=FONTS["text"])

    def _build_layout(self) -> None:
        outer = ttk.Frame(self.root, padding=10, style="App.TFrame")
        outer.grid(row=0, column=0, sticky="nsew")
        self.root.columnconfigure(0, weight=1)
        self.root.rowconfigure(0, weight=1)
        outer.columnconfigure((0, 1, 2), weight=1)
        outer.rowconfigure(0, weight=1)
        self._build_setup(outer)
        self._build_board(outer)
        self._build_info(outer)

    def _build_setup(self, parent: tk.Widget) -> None:
        self.setup_frame = ttk.Frame(parent, padding=12, style="Panel.TFrame")
        self.setup_frame.grid(row=0, column=0, sticky="nsew", padx=(0, 8))
        frame = self.setup_frame
        ttk.Label(frame, text="New series", style="Title.TLabel").grid(row=0, column=0, columnspan=2, sticky="w", pady=(0, 8))

        lengths = [str(n) for n in self.flow.series_lengths]
        rows = [
            ("Mode", ttk.Combobox(frame, textvariable=self.mode_var, values=list(MODE_LABELS), width=18), "readonly"),
            ("Player 1", ttk.Entry(frame, textvariable=self.name1_var, width=18), "normal"),
            ("Player 2", ttk.Entry(frame, textvariable=self.name2_var, width=18), "normal"),
            ("Difficulty", ttk.Combobox(frame, textvariable=self.difficulty_var, values=list(DIFFICULTY_LABELS), width=18), "readonly"),
            ("Best of", ttk.Combobox(frame, textvariable=self.length_var, values=lengths, width=18), "normal"),
            ("Your symbol", ttk.Combobox(frame, textvariable=self.symbol_var, values=["X", "O"], width=18), "readonly"),
        ]
        # (widget, state while setup is editable)
        self.setup_widgets: List[Tuple[tk.Widget, str]] = []
        for i, (label, widget, enabled) in enumerate(rows, start=1):
            ttk.Label(frame, text=label, style="App.TLabel").grid(row=i, column=0, sticky="w", pady=2, padx=(0, 6))
            widget.grid(row=i, column=1, sticky="ew", pady=2)
            widget.configure(state=enabled)
            self.setup_widgets.append((widget, enabled))

        self.start_btn = ttk.Button(frame, text="Start", command=self.start_series)
        self.start_btn.grid(row=len(rows) + 1, column=0, columnspan=2, sticky="ew", pady=(10, 4))
        ttk.Label(frame, textvariable=self.setup_error_var, style="Muted.TLabel", wraplength=220).grid(
            row=len(rows) + 2, column=0, columnspan=2, sticky="w"
        )

    def _build_board(self, parent: tk.Widget) -> None:
        board_frame = ttk.Frame(parent, padding=6, style="Panel.TFrame")
        board_frame.grid(row=0, column=1, sticky="nsew")
        board_frame.columnconfigure((0, 1, 2), weight=1)
        board_frame.rowconfigure((1, 2, 3), weight=1)

        ttk.Label(board_frame, textvariable=self.status_var, style="Title.TLabel", wraplength=260).grid(
            row=0, column=0, columnspan=3, sticky="w", pady=(0, 6)
        )

        self.buttons: List[tk.Button] = []
        for idx in range(9):
            r, c = divmod(idx, 3)
            btn = tk.Button(
                board_frame,
                text="",
                command=lambda i=idx: self._handle_cell(i),
                width=3,
                height=1,
                font=FONTS["board"],
                bg=PALETTE["CELL"],
                fg=PALETTE["TEXT"],
                activebackground=PALETTE["ACCENT"],
                activeforeground=PALETTE["BG"],
                relief="raised",
                bd=2,
                cursor="hand2",
            )
            btn.grid(row=r + 1, column=c, padx=6, pady=6, sticky="nsew")
            self.buttons.append(btn)

        ttk.Label(board_frame, textvariable=self.score_var, style="App.TLabel").grid(
            row=4, column=0, columnspan=3, sticky="w", pady=(8, 0)
        )
        ttk.Button(board_frame, text="New series", command=self.new_series).grid(
            row=5, column=0, columnspan=3, sticky="ew", pady=(8, 0)
        )

    def _build_info(self, parent: tk.Widget) -> None:
        info = ttk.Frame(parent, padding=12, style="Panel.TFrame")
        info.grid(row=0, column=2, sticky="nsew", padx=(8, 0))
        info.columnconfigure(0, weight=1)
        info.rowconfigure(1, weight=1)
        ttk.Label(info, text="Game history", style="Title.TLabel").grid(row=0, column=0, sticky="w")
        self.history_listbox = tk.Listbox(
            info,
            height=10,
            bg=PALETTE["PANEL"],
            fg=PALETTE["TEXT"],
            highlightthickness=1,
            highlightbackground=PALETTE["ACCENT"],
            selectbackground=PALETTE["ACCENT"],
            activestyle="none",
            relief="flat",
            exportselection=False,
        )
        self.history_listbox.grid(row=1, column=0, sticky="nsew", pady=(4, 0))
        self.history_listbox.bind("<<ListboxSelect>>", self._on_history_select)

    def start_series(self) -> None:
        """Feed the setup widgets through the setup flow and start the series."""
        mode = MODE_LABELS[self.mode_var.get()]
        answers = [mode, [self.name1_var.get(), self.name2_var.get()] if mode is Mode.HUMAN_VS_HUMAN else self.name1_var.get()]
        if mode is Mode.HUMAN_VS_COMPUTER:
            answers += [DIFFICULTY_LABELS[self.difficulty_var.get()], self.length_var.get(), self.symbol_var.get()]
        self.flow.restart()
        try:
            for answer in answers:
                self.flow.submit(answer)
            config = self.flow.config()
        except ValueError as exc:
            self.setup_error_var.set(str(exc))
            return
        self.setup_error_var.set("")
        self.game.start(config)

    def new_series(self) -> None:
        self.game.reset()

    def _handle_cell(self, idx: int) -> None:
        self.game.play(idx)

    def _on_history_select(self, _event=None) -> None:
        selection = self.history_listbox.curselection()
        if selection and selection[0] != self.game.current_move:
            self.game.jump_to(int(selection[0]))

    def _refresh(self) -> None:
        view = build_view(self.game)
        self.status_var.set(view.status)
        self.score_var.set(score_text(view))
        self._refresh_board(view)
        self._refresh_history(view)
        editable = view.phase is Phase.SETUP
        self.start_btn.configure(state="normal" if editable else "disabled")
        for widget, enabled in self.setup_widgets:
            widget.configure(state=enabled if editable else "disabled")

    def _refresh_board(self, view: GameView) -> None:
        highlighted = set(view.winning_line or ())
        for idx, btn in enumerate(self.buttons):
            val = view.cells[idx]
            btn["text"] = val
            fg = PALETTE["ACCENT"] if val == "X" else PALETTE["O"] if val == "O" else PALETTE["TEXT"]
            bg = PALETTE["WIN"] if idx in highlighted else PALETTE["CELL"]
            btn.configure(fg=fg, bg=bg)

    def _refresh_history(self, view: GameView) -> None:
        self.history_listbox.delete(0, tk.END)
        for entry in view.history:
            self.history_listbox.insert(tk.END, entry.label)
            if entry.current:
                self.history_listbox.selection_set(entry.move)
                self.history_listbox.see(entry.move)


def _parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Tkinter GUI for a Tic-Tac-Toe series")
    parser.add_argument("--headless", action="store_true", help="Start GUI in withdrawn mode (no visible window).")
    parser.add_argument("--settings", help="Path to a JSON settings file.")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log debug detail.")
    return parser.parse_args(argv)


def main(argv=None) -> None:
    args = _parse_args(argv)
    settings = load_settings(resolve_settings_path(args.settings))
    init_logger(settings["log_dir"], verbose=args.verbose)
    atexit.register(shutdown_logger)
    root = tk.Tk()
    if args.headless:
        root.withdraw()
    SeriesGUI(root, settings)
    logger.info("GUI started")
    root.mainloop()


if __name__ == "__main__":
    main()
