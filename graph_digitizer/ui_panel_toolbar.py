from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from typing import Callable


class ToolbarPanel:
    def __init__(
        self,
        owner,
        parent: tk.Widget,
        *,
        on_load_image: Callable[[], None],
        on_calibrate: Callable[[], None],
        on_apply_calibration: Callable[[], None],
        on_auto_trace: Callable[[], None],
        on_load_json: Callable[[], None],
        on_save_json: Callable[[], None],
        on_save_csv: Callable[[], None],
    ) -> None:
        self.owner = owner
        self.frame = ttk.Frame(parent)
        self.frame.pack(side="top", fill="x")

        for lbl, cmd in [
            ("Load Image", on_load_image),
            ("Calibrate Clicks", on_calibrate),
            ("Apply Calibration", on_apply_calibration),
            ("Auto Trace Active Dataset", on_auto_trace),
        ]:
            ttk.Button(self.frame, text=lbl, command=cmd).pack(side="left", padx=(0, 8))

        ttk.Separator(self.frame, orient="vertical").pack(side="left", fill="y", padx=10)

        for lbl, cmd in [
            ("Load JSON", on_load_json),
            ("Save JSON", on_save_json),
            ("Save CSV", on_save_csv),
        ]:
            ttk.Button(self.frame, text=lbl, command=cmd).pack(side="left", padx=(0, 8))
