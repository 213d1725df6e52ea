from __future__ import annotations

import threading
import time
from typing import Any, Optional

from bhashasetu.contracts import Sample


class CameraError(RuntimeError):
    pass


def _import_cv2():
    try:
        import cv2
    except ImportError as e:
        raise CameraError(
            "opencv-python is not installed. Install with: python -m pip install opencv-python"
        ) from e
    return cv2


def encode_frame(frame: Any, *, mirror: bool = True, jpeg_quality: int = 90) -> Sample:
    """
    Encode a BGR frame as a JPEG Sample.
    Mirrored horizontally by default so the payload matches the self-view the signer sees.
    """
    cv2 = _import_cv2()
    if frame is None or getattr(frame, "size", 0) == 0:
        raise CameraError("empty frame")
    if mirror:
        frame = cv2.flip(frame, 1)
    quality = max(1, min(100, int(jpeg_quality)))
    ok, buf = cv2.imencode(".jpg", frame, [int(cv2.IMWRITE_JPEG_QUALITY), quality])
    if not ok:
        raise CameraError("JPEG encoding failed")
    return Sample(data=buf.tobytes(), mime_type="image/jpeg", captured_at=time.time())


class OpenCVCameraSource:
    """
    Webcam source using OpenCV's VideoCapture.
    open() acquires the device and close() releases it; capture() never reopens
    a closed device, so a late capture after close() fails instead.
    """

    def __init__(
        self,
        *,
        device: int = 0,
        jpeg_quality: int = 90,
        mirror: bool = True,
        width: Optional[int] = None,
        height: Optional[int] = None,
    ) -> None:
        if device < 0:
            raise ValueError("device must be >= 0")
        if not 1 <= jpeg_quality <= 100:
            raise ValueError("jpeg_quality must be in 1..100")

        self.device = int(device)
        self.jpeg_quality = int(jpeg_quality)
        self.mirror = bool(mirror)
        self.width = width
        self.height = height
        self._cap = None
        self._lock = threading.Lock()

    @staticmethod
    def list_devices(max_index: int = 6) -> str:
        cv2 = _import_cv2()
        found = []
        for idx in range(max_index):
            cap = cv2.VideoCapture(idx)
            try:
                if cap.isOpened():
                    w = int(cap.get(cv2.CAP_PROP_FRAME_WIDTH))
                    h = int(cap.get(cv2.CAP_PROP_FRAME_HEIGHT))
                    found.append(f"{idx}: {w}x{h}")
            finally:
                cap.release()
        return "\n".join(found) if found else "No cameras found."

    @property
    def is_open(self) -> bool:
        return self._cap is not None

    def open(self) -> None:
        with self._lock:
            self._open_locked()

    def _open_locked(self) -> None:
        if self._cap is not None:
            return
        cv2 = _import_cv2()
        cap = cv2.VideoCapture(self.device)
        if not cap.isOpened():
            cap.release()
            raise CameraError(
                f"Failed to open camera {self.device}. "
                "Try --list-cameras and select a device id with --camera."
            )
        if self.width:
            cap.set(cv2.CAP_PROP_FRAME_WIDTH, int(self.width))
        if self.height:
            cap.set(cv2.CAP_PROP_FRAME_HEIGHT, int(self.height))
        self._cap = cap

    def close(self) -> None:
        with self._lock:
            if self._cap is not None:
                self._cap.release()
                self._cap = None

    def read_frame(self) -> Any:
        with self._lock:
            if self._cap is None:
                raise CameraError(f"Camera {self.device} is off. Start the camera first.")
            ok, frame = self._cap.read()
        if not ok or frame is None:
            raise CameraError(f"Camera {self.device} returned no frame")
        return frame

    def capture(self) -> Sample:
        return encode_frame(self.read_frame(), mirror=self.mirror, jpeg_quality=self.jpeg_quality)

    def __enter__(self) -> "OpenCVCameraSource":
        self.open()
        return self

    def __exit__(self, *exc) -> None:
        self.close()
