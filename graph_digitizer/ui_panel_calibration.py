from __future__ import annotations

import tkinter as tk
from tkinter import ttk


class CalibrationPanel:
    def __init__(self, owner, parent: tk.Widget) -> None:
        self.owner = owner
        frame = ttk.LabelFrame(parent, text="Graph", padding=8)
        self.frame = frame
        frame.pack(side="top", fill="x", pady=(8, 0))

        grid = ttk.Frame(frame)
        grid.pack(fill="x")
        for col in (1, 3):
            grid.columnconfigure(col, weight=1)

        rows = [
            ("Title", owner.var_title, "X min", owner.var_x_min),
            ("X label", owner.var_xlabel, "X max", owner.var_x_max),
            ("Y label", owner.var_ylabel, "Y min", owner.var_y_min),
            (None, None, "Y max", owner.var_y_max),
        ]
        for r, (lbl_a, var_a, lbl_b, var_b) in enumerate(rows):
            if lbl_a is not None:
                ttk.Label(grid, text=lbl_a).grid(row=r, column=0, sticky="w")
                ttk.Entry(grid, textvariable=var_a).grid(row=r, column=1, sticky="ew", padx=(6, 12), pady=2)
            ttk.Label(grid, text=lbl_b).grid(row=r, column=2, sticky="w")
            ttk.Entry(grid, textvariable=var_b, width=12).grid(row=r, column=3, sticky="ew", padx=(6, 0), pady=2)

        log_row = ttk.Frame(frame)
        log_row.pack(fill="x", pady=(8, 0))
        ttk.Checkbutton(log_row, text="X log", variable=owner.var_x_log).pack(side="left")
        ttk.Checkbutton(log_row, text="Y log", variable=owner.var_y_log).pack(side="left", padx=(12, 0))


class Calibrator:
    def __init__(self, owner) -> None:
        object.__setattr__(self, "owner", owner)

    def __getattr__(self, name):
        return getattr(self.owner, name)

    def __setattr__(self, name, value) -> None:
        if name == "owner":
            object.__setattr__(self, name, value)
            return
        setattr(self.owner, name, value)

    def _begin_calibration(self):
        if self.digitizer.begin_calibration():
            self.canvas.focus_set()
        self.canvas_actor._redraw_overlay()

    def _cancel_calibration(self):
        self.digitizer.cancel_calibration()
        self.canvas_actor._redraw_overlay()

    def _apply_calibration(self):
        self.digitizer.apply_calibration(
            self.var_x_min.get(),
            self.var_x_max.get(),
            self.var_y_min.get(),
            self.var_y_max.get(),
            x_log=self.var_x_log.get(),
            y_log=self.var_y_log.get(),
        )
        self.canvas_actor._redraw_overlay()

    def _sync_labels(self, *_):
        self.digitizer.set_labels(self.var_title.get(), self.var_xlabel.get(), self.var_ylabel.get())

    def _load_form_from_state(self):
        """Push title/labels/axis bounds from the state into the entry widgets."""
        st = self.digitizer.state
        r = st.axis_range
        self.var_title.set(st.title)
        self.var_xlabel.set(st.xlabel)
        self.var_ylabel.set(st.ylabel)
        self.var_x_min.set(f"{r.x_min:g}")
        self.var_x_max.set(f"{r.x_max:g}")
        self.var_y_min.set(f"{r.y_min:g}")
        self.var_y_max.set(f"{r.y_max:g}")
        self.var_x_log.set(r.x_log)
        self.var_y_log.set(r.y_log)
