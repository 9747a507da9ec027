from __future__ import annotations

import tkinter as tk
from tkinter import ttk, messagebox
from typing import Optional

from .data_model import DEFAULT_COLORS
from .digitizer import Digitizer
from .ui_panel_toolbar import ToolbarPanel
from .ui_panel_calibration import CalibrationPanel, Calibrator
from .ui_panel_dataset import DatasetPanel, DatasetActor
from .ui_panel_export import Exporter
from .ui_panel_canvas import CanvasPanel, CanvasActor

APP_TITLE = "Graph Digitizer"


class GraphDigitizerWindow(tk.Tk):
    def __init__(self, *, digitizer: Optional[Digitizer] = None):
        super().__init__()
        self.title(APP_TITLE)
        self.geometry("1100x820")
        self.resizable(True, True)

        self.status_var = tk.StringVar(value="No image loaded.")
        self.digitizer = digitizer if digitizer is not None else Digitizer()
        self.digitizer.on_status = self.set_status

        # Graph form
        self.var_title = tk.StringVar(value="")
        self.var_xlabel = tk.StringVar(value="")
        self.var_ylabel = tk.StringVar(value="")
        self.var_x_min = tk.StringVar(value="0")
        self.var_x_max = tk.StringVar(value="1")
        self.var_y_min = tk.StringVar(value="0")
        self.var_y_max = tk.StringVar(value="1")
        self.var_x_log = tk.BooleanVar(value=False)
        self.var_y_log = tk.BooleanVar(value=False)

        # Active dataset row
        self.var_ds_name = tk.StringVar(value="Dataset 1")
        self.var_ds_color = tk.StringVar(value=DEFAULT_COLORS[0])
        self.var_magnifier = tk.BooleanVar(value=True)

        self._last_mouse_canvas = None
        self._render_after_id = None

        self.canvas_actor = CanvasActor(self)
        self.calibrator = Calibrator(self)
        self.dataset_actor = DatasetActor(self)
        self.exporter = Exporter(self)

        self._build_ui()
        self._bind_accelerators()
        self.protocol("WM_DELETE_WINDOW", self._on_close)

        self.dataset_actor._sync_dataset_row()
        self.canvas_actor._render_image()

    # ---------- UI ----------
    def _build_ui(self):
        root = ttk.Frame(self, padding=12)
        root.pack(fill="both", expand=True)

        self.toolbar_panel = ToolbarPanel(
            self,
            root,
            on_load_image=self.exporter._load_image,
            on_calibrate=self.calibrator._begin_calibration,
            on_apply_calibration=self.calibrator._apply_calibration,
            on_auto_trace=self.exporter._auto_trace,
            on_load_json=self.exporter._load_json,
            on_save_json=self.exporter._save_json,
            on_save_csv=self.exporter._save_csv,
        )
        self.calibration_panel = CalibrationPanel(self, root)
        self.dataset_panel = DatasetPanel(self, root, actor=self.dataset_actor)
        self.canvas_panel = CanvasPanel(self, root, actor=self.canvas_actor)

        ttk.Label(root, textvariable=self.status_var, anchor="w").pack(side="bottom", fill="x", pady=(8, 0))

        for var in (self.var_title, self.var_xlabel, self.var_ylabel):
            var.trace_add("write", self.calibrator._sync_labels)

    def _bind_accelerators(self):
        self.bind_all("<Control-o>", lambda _e: self.exporter._load_image())
        self.bind_all("<Control-s>", lambda _e: self.exporter._save_json())
        self.bind_all("<Control-S>", lambda _e: self.exporter._save_csv())
        self.bind_all("<Control-q>", lambda _e: self._on_close())

    def set_status(self, msg: str) -> None:
        self.status_var.set(msg)

    def open_image(self, path: str) -> bool:
        return self.exporter._open_image_path(path)

    def _on_close(self):
        if self.digitizer.has_data():
            answer = messagebox.askyesnocancel(
                "Exit",
                "Save current datasets before exiting?",
                parent=self,
            )
            if answer is None:
                return
            if answer and not self.exporter._save_json():
                return
        self.destroy()
