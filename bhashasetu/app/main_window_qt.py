from __future__ import annotations

from PyQt6 import QtCore, QtWidgets

from bhashasetu.languages import LANGUAGES
from bhashasetu.live.engine import EngineSnapshot
from bhashasetu.ui.bridge import Notice


class MainWindow(QtWidgets.QMainWindow):
    camera_toggle_requested = QtCore.pyqtSignal()
    language_changed = QtCore.pyqtSignal(str)
    context_submitted = QtCore.pyqtSignal(str)
    speak_requested = QtCore.pyqtSignal()
    clear_requested = QtCore.pyqtSignal()
    recognize_once_requested = QtCore.pyqtSignal()
    translate_requested = QtCore.pyqtSignal()

    def __init__(self) -> None:
        super().__init__()
        self.setWindowTitle("Bhasha Setu")
        self.resize(760, 520)
        self._camera_on = False
        self._busy_speaking = False

        root = QtWidgets.QWidget(self)
        self.setCentralWidget(root)
        lay = QtWidgets.QVBoxLayout(root)
        lay.setContentsMargins(22, 20, 22, 20)
        lay.setSpacing(14)

        title = QtWidgets.QLabel("Bhasha Setu", root)
        title.setObjectName("title")
        lay.addWidget(title)
        subtitle = QtWidgets.QLabel("Your friendly sign language interpreter.", root)
        subtitle.setObjectName("status")
        lay.addWidget(subtitle)

        self.status_label = QtWidgets.QLabel("", root)
        self.status_label.setObjectName("status")
        self.status_label.setWordWrap(True)
        lay.addWidget(self.status_label)

        controls = QtWidgets.QFrame(root)
        controls.setObjectName("card")
        form = QtWidgets.QFormLayout(controls)
        form.setContentsMargins(14, 12, 14, 12)
        self.btn_camera = QtWidgets.QPushButton("Start Camera", controls)
        self.btn_camera.setObjectName("primary")
        self.language_combo = QtWidgets.QComboBox(controls)
        for key, lang in LANGUAGES.items():
            self.language_combo.addItem(lang.name, key)
        self.context_edit = QtWidgets.QLineEdit(controls)
        self.context_edit.setPlaceholderText("Optional context, e.g. 'at a hospital reception'")
        form.addRow("Camera", self.btn_camera)
        form.addRow("Translate to", self.language_combo)
        form.addRow("Context", self.context_edit)
        lay.addWidget(controls)

        output = QtWidgets.QFrame(root)
        output.setObjectName("card")
        out_lay = QtWidgets.QVBoxLayout(output)
        out_lay.setContentsMargins(14, 12, 14, 12)
        head = QtWidgets.QLabel("Translation Output", output)
        head.setObjectName("subhead")
        self.words_label = QtWidgets.QLabel("", output)
        self.words_label.setObjectName("status")
        self.utterance_label = QtWidgets.QLabel("", output)
        self.utterance_label.setObjectName("utterance")
        self.utterance_label.setWordWrap(True)
        self.utterance_label.setTextInteractionFlags(QtCore.Qt.TextInteractionFlag.TextSelectableByMouse)
        out_lay.addWidget(head)
        out_lay.addWidget(self.utterance_label, 1)
        out_lay.addWidget(self.words_label)
        lay.addWidget(output, 1)

        btn_row = QtWidgets.QHBoxLayout()
        btn_row.setSpacing(10)
        self.btn_speak = QtWidgets.QPushButton("Play Audio", root)
        self.btn_recognize = QtWidgets.QPushButton("Recognize Once", root)
        self.btn_translate = QtWidgets.QPushButton("Retranslate", root)
        self.btn_clear = QtWidgets.QPushButton("Clear Conversation", root)
        for b in (self.btn_speak, self.btn_recognize, self.btn_translate, self.btn_clear):
            btn_row.addWidget(b)
        btn_row.addStretch(1)
        lay.addLayout(btn_row)

        self.btn_camera.clicked.connect(self.camera_toggle_requested.emit)
        self.language_combo.currentIndexChanged.connect(
            lambda _i: self.language_changed.emit(str(self.language_combo.currentData()))
        )
        self.context_edit.editingFinished.connect(
            lambda: self.context_submitted.emit(self.context_edit.text())
        )
        self.btn_speak.clicked.connect(self.speak_requested.emit)
        self.btn_clear.clicked.connect(self.clear_requested.emit)
        self.btn_recognize.clicked.connect(self.recognize_once_requested.emit)
        self.btn_translate.clicked.connect(self.translate_requested.emit)

        self.setStyleSheet(
            """
            QMainWindow { background: #121416; color: #e8ecef; }
            QLabel { color: #e8ecef; }
            QLabel#title { font-size: 34px; font-weight: 700; letter-spacing: 0.3px; }
            QLabel#status { color: #a7b0b8; font-size: 13px; }
            QLabel#subhead { color: #b8c1c8; font-size: 12px; font-weight: 600; }
            QLabel#utterance { font-size: 28px; font-weight: 600; }
            QFrame#card {
                background: #1a1e22;
                border: 1px solid #2a3138;
                border-radius: 14px;
            }
            QPushButton {
                background: #22272d;
                border: 1px solid #313840;
                border-radius: 10px;
                color: #e7edf3;
                padding: 10px 16px;
                font-size: 13px;
                font-weight: 600;
            }
            QPushButton:hover { background: #2a3037; }
            QPushButton:disabled { color: #66707a; }
            QPushButton#primary {
                background: #c8f25f;
                color: #172005;
                border-color: #c8f25f;
            }
            QPushButton#primary:hover { background: #d3f67f; border-color: #d3f67f; }
            """
        )
        self.show_snapshot(EngineSnapshot(epoch=0, tokens=(), utterance="", language=None))

    def set_camera_on(self, on: bool) -> None:
        self._camera_on = on
        self.btn_camera.setText("Stop Camera" if on else "Start Camera")
        self.btn_recognize.setEnabled(on)
        if not self.utterance_label.text() or self.utterance_label.property("placeholder"):
            self._show_placeholder()

    def set_language(self, key: str) -> None:
        idx = self.language_combo.findData(key)
        if idx >= 0:
            self.language_combo.blockSignals(True)
            self.language_combo.setCurrentIndex(idx)
            self.language_combo.blockSignals(False)

    def set_context(self, text: str) -> None:
        self.context_edit.setText(text)

    def set_status_text(self, text: str) -> None:
        self.status_label.setText(text)

    def set_speaking(self, speaking: bool) -> None:
        self._busy_speaking = speaking
        self.btn_speak.setEnabled(not speaking and self.utterance_label.property("placeholder") is False)
        self.btn_speak.setText("Speaking..." if speaking else "Play Audio")

    def _show_placeholder(self) -> None:
        hint = "Start signing." if self._camera_on else "Enable your camera to start."
        self.utterance_label.setText(hint)
        self.utterance_label.setProperty("placeholder", True)

    def show_snapshot(self, snap: EngineSnapshot) -> None:
        self.words_label.setText(f"Signed words: {snap.joined_text}" if snap.tokens else "")
        if snap.utterance:
            self.utterance_label.setText(snap.utterance)
            self.utterance_label.setProperty("placeholder", False)
        else:
            self._show_placeholder()
        self.btn_speak.setEnabled(bool(snap.utterance) and not self._busy_speaking)
        self.btn_translate.setEnabled(bool(snap.tokens))

    def show_notice(self, notice: Notice) -> None:
        if notice.level == "warning":
            QtWidgets.QMessageBox.warning(self, notice.title, notice.message)
        else:
            self.set_status_text(f"{notice.title}: {notice.message}")
