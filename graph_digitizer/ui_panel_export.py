from __future__ import annotations

from tkinter import filedialog, messagebox

from .image_utils import IMAGE_PATTERNS


class Exporter:
    def __init__(self, owner) -> None:
        object.__setattr__(self, "owner", owner)

    def __getattr__(self, name):
        return getattr(self.owner, name)

    def __setattr__(self, name, value) -> None:
        if name == "owner":
            object.__setattr__(self, name, value)
            return
        setattr(self.owner, name, value)

    def _load_image(self):
        path = filedialog.askopenfilename(
            parent=self.owner,
            title="Open Image",
            filetypes=[("Images", " ".join(IMAGE_PATTERNS)), ("All files", "*.*")],
        )
        if not path:
            return
        self._open_image_path(path)

    def _open_image_path(self, path: str) -> bool:
        if not self.digitizer.load_image(path):
            messagebox.showerror("Load image failed", self.digitizer.last_status, parent=self.owner)
            return False
        self.canvas_actor._render_image()
        return True

    def _load_json(self):
        path = filedialog.askopenfilename(
            parent=self.owner,
            title="Open JSON File",
            filetypes=[("JSON files", "*.json"), ("All files", "*.*")],
        )
        if not path:
            return
        if not self.digitizer.load_json(path):
            messagebox.showerror("Load JSON failed", self.digitizer.last_status, parent=self.owner)
            return
        self.calibrator._load_form_from_state()
        self.dataset_actor._sync_dataset_row()
        self.canvas_actor._redraw_overlay()

    def _ask_save_path(self, title: str, ext: str, label: str):
        default = self.digitizer.default_save_path(ext)
        path = filedialog.asksaveasfilename(
            parent=self.owner,
            title=title,
            initialdir=str(default.parent),
            initialfile=default.name,
            defaultextension="." + ext,
            filetypes=[(label, "*." + ext), ("All files", "*.*")],
        )
        if not path:
            return None
        if not path.lower().endswith("." + ext):
            path += "." + ext
        return path

    def _save_json(self) -> bool:
        path = self._ask_save_path("Save JSON File", "json", "JSON files")
        if path is None:
            return False
        if not self.digitizer.save_json(path):
            messagebox.showerror("Save failed", self.digitizer.last_status, parent=self.owner)
            return False
        return True

    def _save_csv(self) -> bool:
        path = self._ask_save_path("Save CSV File", "csv", "CSV files")
        if path is None:
            return False
        if not self.digitizer.save_csv(path):
            messagebox.showerror("Save failed", self.digitizer.last_status, parent=self.owner)
            return False
        return True

    def _auto_trace(self):
        self.digitizer.auto_trace()
        self.canvas_actor._redraw_overlay()
        self.dataset_actor._sync_dataset_row()
