from __future__ import annotations

import tkinter as tk
from tkinter import ttk

from PIL import Image, ImageTk

from .digitizer import BUTTON_PRIMARY, BUTTON_SECONDARY
from .render import build_overlay

MAGNIFIER_SIZE = 140
MAGNIFIER_ZOOM = 6.0


class CanvasPanel:
    def __init__(self, owner, parent: tk.Widget, *, actor) -> None:
        self.owner = owner
        self.actor = actor

        frame = ttk.Frame(parent)
        self.frame = frame
        frame.pack(side="top", fill="both", expand=True)

        owner.canvas = tk.Canvas(
            frame,
            background="white",
            width=1000,
            height=520,
            highlightthickness=1,
            highlightbackground="#333",
        )
        owner.canvas.configure(takefocus=1)
        owner.canvas.pack(side="top", fill="both", expand=True, pady=(8, 0))
        owner.canvas.bind("<Configure>", actor._on_canvas_configure)
        owner.canvas.bind("<ButtonPress-1>", lambda e: actor._on_press(e, BUTTON_PRIMARY))
        owner.canvas.bind("<ButtonPress-3>", lambda e: actor._on_press(e, BUTTON_SECONDARY))
        owner.canvas.bind("<B1-Motion>", actor._on_drag)
        owner.canvas.bind("<ButtonRelease-1>", actor._on_release)
        owner.canvas.bind("<Motion>", actor._on_motion)
        owner.canvas.bind("<Leave>", actor._on_canvas_leave)
        owner.canvas.bind("<Delete>", lambda _e: owner.dataset_actor._delete_selected())
        owner.canvas.bind("<BackSpace>", lambda _e: owner.dataset_actor._delete_selected())
        owner.canvas.bind("<Escape>", lambda _e: owner.calibrator._cancel_calibration())


class CanvasActor:
    def __init__(self, owner) -> None:
        object.__setattr__(self, "owner", owner)

    def __getattr__(self, name):
        return getattr(self.owner, name)

    def __setattr__(self, name, value) -> None:
        if name == "owner":
            object.__setattr__(self, name, value)
            return
        setattr(self.owner, name, value)

    def _on_canvas_configure(self, _evt=None):
        # Avoid thrashing when resizing: schedule a single re-render
        if getattr(self, "_render_after_id", None) is not None:
            self.after_cancel(self._render_after_id)
        self._render_after_id = self.after(30, self._render_image)

    def _render_image(self):
        self._render_after_id = None
        self.canvas.delete("all")
        st = self.digitizer.state
        if st.image is None:
            self._photo = None
            self.canvas.create_text(
                10, 30, text="Load an image to begin.", anchor="w", font=("Sans", 16), fill="black"
            )
            return

        cw = max(10, self.canvas.winfo_width())
        ch = max(10, self.canvas.winfo_height())
        geom = self.digitizer.update_geometry(cw, ch)

        disp_w = max(1, int(round(st.image.width * geom.scale)))
        disp_h = max(1, int(round(st.image.height * geom.scale)))
        disp = st.image.pil.resize((disp_w, disp_h), Image.BILINEAR)
        self._photo = ImageTk.PhotoImage(disp)
        self.canvas.create_image(geom.offset_x, geom.offset_y, image=self._photo, anchor="nw", tags=("img",))

        self._redraw_overlay()

    def _redraw_overlay(self):
        self.canvas.delete("overlay")
        for m in build_overlay(self.digitizer.state):
            x0, y0, x1, y1 = m.x - m.radius, m.y - m.radius, m.x + m.radius, m.y + m.radius
            if m.kind == "drag":
                self.canvas.create_oval(x0, y0, x1, y1, outline=m.color, width=2, tags=("overlay",))
                continue
            self.canvas.create_oval(x0, y0, x1, y1, fill=m.color, outline="", tags=("overlay",))
            if m.label:
                self.canvas.create_text(
                    m.x + 8, m.y - 8, text=m.label, anchor="sw", fill=m.color, tags=("overlay",)
                )
        if self._last_mouse_canvas is not None and self.var_magnifier.get():
            self._draw_magnifier(*self._last_mouse_canvas)

    def _refresh(self):
        self._redraw_overlay()
        self.dataset_actor._sync_dataset_row()

    # ---------- pointer ----------

    def _on_press(self, event, button: int):
        self.canvas.focus_set()
        if self.digitizer.press(float(event.x), float(event.y), button):
            self._refresh()

    def _on_drag(self, event):
        self._last_mouse_canvas = (event.x, event.y)
        if self.digitizer.drag(float(event.x), float(event.y)):
            self._redraw_overlay()

    def _on_release(self, _event):
        if self.digitizer.release():
            self._refresh()

    # ---------- magnifier ----------

    def _on_motion(self, event):
        self._last_mouse_canvas = (event.x, event.y)
        if self.var_magnifier.get():
            self._draw_magnifier(event.x, event.y)

    def _on_canvas_leave(self, _event):
        self._last_mouse_canvas = None
        self.canvas.delete("magnifier")

    def _draw_magnifier(self, x: float, y: float):
        self.canvas.delete("magnifier")
        st = self.digitizer.state
        geom = st.geometry
        if st.image is None or geom.scale == 0:
            return
        # region of the source image shown in the loupe, in image pixels
        span = MAGNIFIER_SIZE / (MAGNIFIER_ZOOM * geom.scale)
        ix, iy = geom.to_image(x, y)
        sx = max(0.0, min(st.image.width - span - 1, ix - span / 2))
        sy = max(0.0, min(st.image.height - span - 1, iy - span / 2))
        box = (int(sx), int(sy), max(int(sx) + 1, int(sx + span)), max(int(sy) + 1, int(sy + span)))
        crop = st.image.pil.crop(box).resize((MAGNIFIER_SIZE, MAGNIFIER_SIZE), Image.NEAREST)
        self._magnifier_photo = ImageTk.PhotoImage(crop)

        left, top = x + 12, y + 12
        self.canvas.create_rectangle(
            left, top, left + MAGNIFIER_SIZE + 4, top + MAGNIFIER_SIZE + 4,
            fill="white", outline="black", tags=("magnifier",),
        )
        self.canvas.create_image(left + 2, top + 2, image=self._magnifier_photo, anchor="nw", tags=("magnifier",))
        # crosshair at the cursor position inside the loupe
        k = MAGNIFIER_SIZE / span
        cx = left + 2 + (ix - box[0]) * k
        cy = top + 2 + (iy - box[1]) * k
        self.canvas.create_line(cx, top + 2, cx, top + 2 + MAGNIFIER_SIZE, fill="red", tags=("magnifier",))
        self.canvas.create_line(left + 2, cy, left + 2 + MAGNIFIER_SIZE, cy, fill="red", tags=("magnifier",))
