from __future__ import annotations

import argparse

import cv2
from dotenv import load_dotenv

from bhashasetu.camera.capture import encode_frame
from bhashasetu.contracts import RecognitionRequest
from bhashasetu.recognizer.factory import get_recognizer


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("image", help="path to a photo of a single sign")
    ap.add_argument("--no-mirror", action="store_true", help="send the image as-is")
    ap.add_argument("--provider", default=None, help="gemini | stub (or set BHASHASETU_RECOGNIZER)")
    ap.add_argument("--model", default=None, help="override the Gemini model")
    args = ap.parse_args(argv)

    frame = cv2.imread(args.image)
    if frame is None:
        raise SystemExit(f"Could not read image: {args.image}")

    load_dotenv()
    sample = encode_frame(frame, mirror=not args.no_mirror)
    recognizer = get_recognizer(args.provider, model=args.model)
    res = recognizer.recognize(RecognitionRequest(sample=sample))

    print(f"[provider] {res.provider}")
    print(f"[bytes] {len(sample.data)}")
    print(f"sign: {res.token or '(no gesture recognized)'}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
