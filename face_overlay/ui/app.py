from typing import Optional

import cv2
import numpy as np
import tkinter as tk
from tkinter import messagebox

from ..assets import AssetLoadError, StyleCatalog
from ..config import (
    ASSETS_DIR,
    CAMERA_INDEX,
    CAMERA_WIDTH,
    CAMERA_HEIGHT,
    CAMERA_FPS,
    CAMERA_BUFFERSIZE,
    DEFAULT_STYLE,
    WINDOW_NAME,
)
from ..face_mesh import FaceMeshDetector, MEDIAPIPE_AVAILABLE
from ..logging_utils import log
from ..session import OverlaySession
from ..tracker import OverlayTracker


class OverlayApp:
    def __init__(self, assets_dir: str = ASSETS_DIR) -> None:
        self.catalog = StyleCatalog(assets_dir)
        self.tracker = OverlayTracker()
        self.session: Optional[OverlaySession] = None
        self.detector: Optional[FaceMeshDetector] = None
        self._cap = None
        self._closed = False

        self.root = tk.Tk()
        self.root.title("Face Overlay")
        self.status_var = tk.StringVar(value="Ready - Click Start Camera")
        self._build_ui()
        self.root.protocol("WM_DELETE_WINDOW", self._quit)

        self._load_styles()
        log("=== App started ===")

    def _build_ui(self) -> None:
        frame = tk.Frame(self.root, padx=12, pady=12)
        frame.pack(fill="both", expand=True)

        tk.Label(frame, text="Face Overlay", font=("Segoe UI", 14, "bold")).pack(pady=(0, 8))
        info_text = (
            "P - pause / resume\n"
            "N - next style\n"
            "Q / Esc - stop camera"
        )
        tk.Label(frame, text=info_text, justify="left", fg="#555").pack(pady=(0, 10))

        tk.Button(frame, text="Start Camera", command=self._start_camera, bg="#4CAF50", fg="white").pack(fill="x", pady=4)
        tk.Button(frame, text="Stop Camera", command=self._stop_camera).pack(fill="x", pady=4)

        tk.Label(frame, text="Style:").pack(anchor="w", pady=(8, 0))
        self.style_list = tk.Listbox(frame, height=6, exportselection=False)
        self.style_list.pack(fill="x", pady=4)
        self.style_list.bind("<<ListboxSelect>>", self._on_style_selected)

        tk.Button(frame, text="Exit", command=self._quit).pack(fill="x", pady=(12, 0))

        if not MEDIAPIPE_AVAILABLE:
            tk.Label(frame, text="MediaPipe not installed!", fg="red").pack(anchor="w")

        tk.Label(frame, textvariable=self.status_var, fg="#444").pack(pady=(10, 0))

    def _load_styles(self) -> None:
        names = self.catalog.discover()
        for name in names:
            self.style_list.insert(tk.END, name)
        if not names:
            self.status_var.set(f"No overlay images in {self.catalog.directory}")
            return
        self._select_style(DEFAULT_STYLE if DEFAULT_STYLE in names else names[0])

    def _select_style(self, name: str) -> None:
        try:
            asset = self.catalog.select(name)
        except (KeyError, AssetLoadError) as exc:
            log(f"Style selection failed: {exc}", "ERROR")
            self.status_var.set(f"Failed to load style: {name}")
            return
        self.tracker.set_asset(asset)
        names = self.catalog.names()
        self.style_list.selection_clear(0, tk.END)
        self.style_list.selection_set(names.index(name))
        self.status_var.set(f"Selected: {name}")
        log(f"Selected style {name} ({asset.width}x{asset.height})")

    def _on_style_selected(self, _event) -> None:
        selection = self.style_list.curselection()
        if selection:
            self._select_style(self.style_list.get(selection[0]))

    def _next_style(self) -> None:
        current = self.tracker.asset.name if self.tracker.asset is not None else None
        name = self.catalog.next_name(current)
        if name is not None:
            self._select_style(name)

    def _display(self, output: np.ndarray) -> bool:
        cv2.imshow(WINDOW_NAME, output)

        try:
            self.root.update_idletasks()
            self.root.update()
        except tk.TclError:
            return False

        key = cv2.waitKey(1) & 0xFF
        if key == 27 or key == ord("q"):
            return False
        if key == ord("p") and self.session is not None:
            if self.session.paused:
                self.session.resume()
                self.status_var.set("Face detection running")
            else:
                self.session.pause()
                self.status_var.set("Paused")
        elif key == ord("n"):
            self._next_style()
        return True

    def _start_camera(self) -> None:
        if not MEDIAPIPE_AVAILABLE:
            messagebox.showerror("Error", "MediaPipe not installed")
            return
        if self.session is not None and self.session.active:
            messagebox.showinfo("Camera", "Already running")
            return

        self.status_var.set("Loading AI model...")
        try:
            if self.detector is None:
                self.detector = FaceMeshDetector()
        except Exception as exc:
            log(f"Model loading failed: {exc}", "ERROR")
            self.status_var.set("Model loading failed")
            messagebox.showerror("Error", f"AI model loading failed:\n{exc}")
            return

        cap = cv2.VideoCapture(CAMERA_INDEX)
        if not cap.isOpened():
            log(f"Camera {CAMERA_INDEX} could not be opened", "ERROR")
            self.status_var.set("Camera failed")
            messagebox.showerror("Error", "Could not open camera")
            return
        cap.set(cv2.CAP_PROP_FRAME_WIDTH, CAMERA_WIDTH)
        cap.set(cv2.CAP_PROP_FRAME_HEIGHT, CAMERA_HEIGHT)
        cap.set(cv2.CAP_PROP_FPS, CAMERA_FPS)
        cap.set(cv2.CAP_PROP_BUFFERSIZE, CAMERA_BUFFERSIZE)
        self._cap = cap
        log("Camera opened")

        cv2.namedWindow(WINDOW_NAME, cv2.WINDOW_NORMAL)
        self.session = OverlaySession(self.detector, self.tracker)
        self.session.start()
        self.status_var.set("Face detection running")

        self.session.run(cap, self._display)

        self._release_camera()
        if not self._closed:
            self.status_var.set("Camera stopped")

    def _stop_camera(self) -> None:
        if self.session is not None:
            self.session.stop()

    def _release_camera(self) -> None:
        if self._cap is not None:
            self._cap.release()
            self._cap = None
        cv2.destroyAllWindows()

    def _quit(self) -> None:
        self._closed = True
        self._stop_camera()
        self._release_camera()
        if self.detector is not None:
            self.detector.close()
            self.detector = None
        self.root.destroy()

    def run(self) -> None:
        self.root.mainloop()


def main() -> None:
    app = OverlayApp()
    app.run()
