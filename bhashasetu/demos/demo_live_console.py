from __future__ import annotations

import time

from dotenv import load_dotenv

from bhashasetu.app.config import resolve_args
from bhashasetu.app.runtime import format_snapshot
from bhashasetu.app.services import build_interpreter_services
from bhashasetu.live.session import InterpreterSession


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = resolve_args(argv)

    if args.list_cameras:
        from bhashasetu.camera.capture import OpenCVCameraSource

        print(OpenCVCameraSource.list_devices())
        return 0

    services = build_interpreter_services(args)
    session = InterpreterSession(
        camera=services.camera,
        recognizer=services.recognizer,
        engine=services.engine,
        speech=services.speech,
        interval_ms=max(200, int(args.interval_ms)),
        on_update=lambda snap: print(format_snapshot(snap)),
    )

    print("Bhasha Setu: live camera -> console translation")
    print(f"Language: {args.target_language} | every {int(args.interval_ms)} ms | mode: {args.translation_mode}")
    print("Press Ctrl+C to stop.")
    session.start_capture()
    try:
        while True:
            time.sleep(0.5)
    except KeyboardInterrupt:
        print("\nStopped.")
    finally:
        session.stop_capture()
    snap = session.snapshot()
    if snap.utterance:
        print(f"Final: {snap.utterance}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
