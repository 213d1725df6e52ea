from __future__ import annotations
import argparse
from dotenv import load_dotenv
from bhashasetu.languages import LANGUAGE_KEYS
from bhashasetu.live.engine import AccumulationEngine, TranslationMode
from bhashasetu.translator.factory import get_translator

def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("words", nargs="+", help="signed words in order, e.g. home peace")
    ap.add_argument("--language", default="hindi", choices=list(LANGUAGE_KEYS))
    ap.add_argument("--context", default="", help="optional context for the translation")
    ap.add_argument("--mode", default="full", choices=["full", "incremental"])
    ap.add_argument("--provider", default=None, help="gemini | stub (or set BHASHASETU_TRANSLATOR)")
    args = ap.parse_args(argv)

    load_dotenv()
    tr = get_translator(args.provider)
    engine = AccumulationEngine(
        translator=tr,
        language=args.language,
        context=args.context,
        mode=TranslationMode(args.mode),
    )
    for word in args.words:
        engine.on_recognition_result(word)
        print(f"+ {word:<12} -> {engine.utterance}")

    print(f"[provider] {tr.name}")
    print("---- signed ----")
    print(engine.joined_text)
    print(f"---- {args.language} ----")
    print(engine.utterance)
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
