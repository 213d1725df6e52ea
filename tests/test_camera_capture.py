from __future__ import annotations

import cv2
import numpy as np
import pytest

from bhashasetu.camera.capture import CameraError, OpenCVCameraSource, encode_frame


def _half_white_frame() -> np.ndarray:
    frame = np.zeros((48, 96, 3), dtype=np.uint8)
    frame[:, 48:] = 255
    return frame


def _decode(data: bytes) -> np.ndarray:
    return cv2.imdecode(np.frombuffer(data, dtype=np.uint8), cv2.IMREAD_COLOR)


def test_encode_frame_mirrors_by_default() -> None:
    sample = encode_frame(_half_white_frame())
    img = _decode(sample.data)
    assert sample.mime_type == "image/jpeg"
    assert sample.data_uri.startswith("data:image/jpeg;base64,")
    assert img[:, :40].mean() > 200
    assert img[:, 56:].mean() < 50


def test_encode_frame_without_mirror() -> None:
    img = _decode(encode_frame(_half_white_frame(), mirror=False).data)
    assert img[:, :40].mean() < 50
    assert img[:, 56:].mean() > 200


def test_encode_frame_rejects_empty() -> None:
    with pytest.raises(CameraError):
        encode_frame(np.zeros((0, 0, 3), dtype=np.uint8))


def test_camera_source_validates_arguments() -> None:
    with pytest.raises(ValueError):
        OpenCVCameraSource(device=-1)
    with pytest.raises(ValueError):
        OpenCVCameraSource(jpeg_quality=0)


class _FakeCapture:
    instances: list["_FakeCapture"] = []

    def __init__(self, index: int, opened: bool = True) -> None:
        self.index = index
        self.opened = opened
        self.released = False
        _FakeCapture.instances.append(self)

    def isOpened(self) -> bool:
        return self.opened

    def read(self):
        return True, _half_white_frame()

    def set(self, prop, value) -> bool:
        return True

    def release(self) -> None:
        self.released = True


def test_camera_source_captures_and_releases(monkeypatch) -> None:
    _FakeCapture.instances.clear()
    monkeypatch.setattr(cv2, "VideoCapture", _FakeCapture)
    cam = OpenCVCameraSource(device=2)
    cam.open()

    sample = cam.capture()
    cam.capture()

    assert len(_FakeCapture.instances) == 1
    assert _FakeCapture.instances[0].index == 2
    assert _decode(sample.data)[:, :40].mean() > 200
    cam.close()
    assert _FakeCapture.instances[0].released
    assert not cam.is_open


def test_camera_source_open_failure(monkeypatch) -> None:
    monkeypatch.setattr(cv2, "VideoCapture", lambda idx: _FakeCapture(idx, opened=False))
    cam = OpenCVCameraSource()
    with pytest.raises(CameraError, match="Failed to open camera 0"):
        cam.open()
    assert not cam.is_open


def test_capture_after_close_does_not_reopen(monkeypatch) -> None:
    _FakeCapture.instances.clear()
    monkeypatch.setattr(cv2, "VideoCapture", _FakeCapture)
    cam = OpenCVCameraSource()
    with cam:
        cam.capture()

    with pytest.raises(CameraError, match="is off"):
        cam.capture()

    assert len(_FakeCapture.instances) == 1
    assert _FakeCapture.instances[0].released
    assert not cam.is_open


def test_capture_before_open_raises(monkeypatch) -> None:
    _FakeCapture.instances.clear()
    monkeypatch.setattr(cv2, "VideoCapture", _FakeCapture)
    with pytest.raises(CameraError, match="Camera 0 is off"):
        OpenCVCameraSource().capture()
    assert _FakeCapture.instances == []
