from __future__ import annotations

import signal
import sys
import threading
import traceback

from dotenv import load_dotenv

from bhashasetu.app import actions
from bhashasetu.app.config import resolve_args, save_user_config
from bhashasetu.app.diagnostics import hint_for_exception, summarize_exception
from bhashasetu.app.logging_setup import setup_app_logger
from bhashasetu.app.runtime import _drain_update_bus, build_session, run_action_async
from bhashasetu.app.services import build_interpreter_services
from bhashasetu.app.state import RuntimeStateTracker
from bhashasetu.camera.capture import CameraError, OpenCVCameraSource
from bhashasetu.ui.bridge import Notice, UpdateBus


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = resolve_args(argv)
    logger, _log_dir, log_path = setup_app_logger(debug=bool(args.debug))
    logger.info("app_start", extra={"config_path": str(getattr(args, "config", "")), "argv": argv or []})

    if args.list_cameras:
        print(OpenCVCameraSource.list_devices())
        return 0

    from PyQt6 import QtCore, QtWidgets
    from bhashasetu.app.main_window_qt import MainWindow

    app = QtWidgets.QApplication(sys.argv)
    main_window = MainWindow()
    main_window.set_language(str(args.target_language))
    main_window.set_context(str(args.context or ""))

    bus = UpdateBus(maxsize=max(1, int(args.queue_maxsize)))
    state = RuntimeStateTracker()
    services = build_interpreter_services(args)
    session = build_session(args, services, bus)

    def _build_status_line() -> str:
        return (
            f"Camera: {int(args.camera)} ({state.state.value}) | Every {int(args.interval_ms)} ms | "
            f"Model: {str(args.model)} | Mode: {str(args.translation_mode)}"
        )

    def _sync_window_state() -> None:
        main_window.set_camera_on(state.active)
        main_window.set_status_text(_build_status_line())

    def _start_camera() -> None:
        state.set_starting()
        try:
            session.start_capture()
        except CameraError:
            detail = traceback.format_exc()
            logger.exception("camera_open_failed")
            state.set_error(detail)
            summary = summarize_exception(detail)
            QtWidgets.QMessageBox.warning(
                main_window,
                "Camera Access Denied",
                f"{summary}\n{hint_for_exception(summary)}\nSee log: {log_path}",
            )
            _sync_window_state()
            return
        state.set_running()
        _sync_window_state()

    def _stop_camera() -> None:
        session.stop_capture()
        state.set_stopped()
        _sync_window_state()

    def _toggle_camera() -> None:
        if state.active:
            _stop_camera()
        else:
            _start_camera()

    def _on_language_changed(key: str) -> None:
        result = actions.select_language(session, key)
        if not result.success:
            main_window.show_notice(result.notice("Language"))
            return
        args.target_language = key
        save_user_config({"target_language": key}, config_path=args.config)
        logger.info("language_saved", extra={"language": key})

    def _on_context_submitted(text: str) -> None:
        if text == session.engine.context:
            return
        session.set_context(text)
        args.context = text
        save_user_config({"context": text}, config_path=args.config)

    speak_done = threading.Event()
    speaking = False

    def _on_speak() -> None:
        nonlocal speaking
        if speaking:
            return
        speaking = True
        speak_done.clear()
        main_window.set_speaking(True)
        run_action_async(
            lambda: actions.speak_utterance(session, services.player),
            bus,
            title="Audio Error",
            on_done=lambda _res: speak_done.set(),
        )

    def _on_clear() -> None:
        result = actions.clear_conversation(session)
        main_window.show_notice(result.notice("Cleared"))

    def _on_recognize_once() -> None:
        run_action_async(lambda: actions.recognize_once(session), bus, title="Recognition Error")

    def _on_translate() -> None:
        context = main_window.context_edit.text()
        run_action_async(lambda: actions.translate_current(session, context), bus, title="Translation Error")

    main_window.camera_toggle_requested.connect(_toggle_camera)
    main_window.language_changed.connect(_on_language_changed)
    main_window.context_submitted.connect(_on_context_submitted)
    main_window.speak_requested.connect(_on_speak)
    main_window.clear_requested.connect(_on_clear)
    main_window.recognize_once_requested.connect(_on_recognize_once)
    main_window.translate_requested.connect(_on_translate)

    timer = QtCore.QTimer()

    def _on_tick() -> None:
        nonlocal speaking
        _drain_update_bus(bus, main_window, max(1, int(args.max_updates_per_tick)))
        if speak_done.is_set():
            speak_done.clear()
            speaking = False
            main_window.set_speaking(False)

    timer.timeout.connect(_on_tick)
    timer.start(max(10, int(args.poll_ms)))

    def _on_about_to_quit() -> None:
        logger.info("app_quit")
        session.stop_capture()
        services.player.stop()

    app.aboutToQuit.connect(_on_about_to_quit)
    signal.signal(signal.SIGINT, lambda *_: app.quit())

    _sync_window_state()
    main_window.show()
    if args.autostart:
        _start_camera()
    else:
        bus.push(Notice(title="Ready", message="Enable your camera to start."))

    print("Bhasha Setu ready. Start the camera and begin signing.")
    print(f"Logs: {log_path}")
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
