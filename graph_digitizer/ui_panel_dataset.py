from __future__ import annotations

import tkinter as tk
from tkinter import ttk

from .colors import rgb_to_hex
from .data_model import MAX_DATASETS


class DatasetPanel:
    def __init__(self, owner, parent: tk.Widget, *, actor) -> None:
        self.owner = owner
        frame = ttk.LabelFrame(parent, text="Dataset", padding=8)
        self.frame = frame
        frame.pack(side="top", fill="x", pady=(8, 0))

        owner.cmb_dataset = ttk.Combobox(
            frame,
            state="readonly",
            width=14,
            values=[f"Dataset {i + 1}" for i in range(MAX_DATASETS)],
        )
        owner.cmb_dataset.current(0)
        owner.cmb_dataset.pack(side="left")
        owner.cmb_dataset.bind("<<ComboboxSelected>>", actor._on_dataset_selected)

        ttk.Label(frame, text="Name").pack(side="left", padx=(12, 0))
        ent_name = ttk.Entry(frame, textvariable=owner.var_ds_name, width=20)
        ent_name.pack(side="left", padx=(6, 0))
        ent_name.bind("<Return>", actor._on_name_entered)

        ttk.Label(frame, text="Color").pack(side="left", padx=(12, 0))
        ent_color = ttk.Entry(frame, textvariable=owner.var_ds_color, width=10)
        ent_color.pack(side="left", padx=(6, 0))
        ent_color.bind("<Return>", actor._on_color_entered)
        owner.color_swatch = tk.Canvas(frame, width=18, height=18, highlightthickness=1, highlightbackground="#666")
        owner.color_swatch.pack(side="left", padx=(6, 0))

        owner.lbl_point_count = ttk.Label(frame, text="")
        owner.lbl_point_count.pack(side="left", padx=(12, 0))

        ttk.Checkbutton(
            frame,
            text="Magnifier",
            variable=owner.var_magnifier,
            command=owner.canvas_actor._redraw_overlay,
        ).pack(side="right")
        ttk.Button(frame, text="Delete Selected Point", command=actor._delete_selected).pack(side="right", padx=(0, 12))


class DatasetActor:
    def __init__(self, owner) -> None:
        object.__setattr__(self, "owner", owner)

    def __getattr__(self, name):
        return getattr(self.owner, name)

    def __setattr__(self, name, value) -> None:
        if name == "owner":
            object.__setattr__(self, name, value)
            return
        setattr(self.owner, name, value)

    def _on_dataset_selected(self, _evt=None):
        if self.digitizer.select_dataset(self.cmb_dataset.current()):
            self._sync_dataset_row()

    def _on_name_entered(self, _evt=None):
        self.digitizer.rename_active(self.var_ds_name.get())
        self._sync_dataset_row()
        self.canvas_actor._redraw_overlay()

    def _on_color_entered(self, _evt=None):
        self.digitizer.recolor_active(self.var_ds_color.get())
        self._sync_dataset_row()
        self.canvas_actor._redraw_overlay()

    def _delete_selected(self):
        self.digitizer.delete_selected()
        self.canvas_actor._redraw_overlay()
        self._sync_dataset_row()

    def _sync_dataset_row(self):
        store = self.digitizer.state.datasets
        ds = store.active
        self.cmb_dataset.configure(values=[d.name for d in store])
        self.cmb_dataset.current(store.active_index)
        self.var_ds_name.set(ds.name)
        self.var_ds_color.set(ds.color)
        self.color_swatch.delete("all")
        self.color_swatch.create_rectangle(0, 0, 20, 20, fill=rgb_to_hex(ds.color_rgb), outline="")
        self.lbl_point_count.configure(text=f"{len(ds.points)} pts")
