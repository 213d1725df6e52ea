from __future__ import annotations

import argparse
import copy
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir

from bhashasetu.languages import LANGUAGE_KEYS
from bhashasetu.live.engine import TranslationMode

DEFAULTS: dict[str, Any] = {
    "list_cameras": False,
    "camera": 0,
    "jpeg_quality": 90,
    "mirror": True,
    "interval_ms": 1500,
    "target_language": "english",
    "context": "",
    "translation_mode": "full",
    "recognizer": "gemini",
    "translator": "gemini",
    "speech": "gemini",
    "model": "gemini-2.5-flash",
    "tts_model": "gemini-2.5-flash-preview-tts",
    "voice": "Algenib",
    "poll_ms": 60,
    "queue_maxsize": 100,
    "max_updates_per_tick": 20,
    "print_console": True,
    "autostart": True,
    "debug": False,
}
CONFIG_KEYS: tuple[str, ...] = tuple(DEFAULTS.keys())
PROVIDERS: tuple[str, ...] = ("gemini", "stub")


@dataclass(frozen=True)
class AppPaths:
    config_dir: Path
    config_path: Path


def default_asset_config_path() -> Path:
    return Path(__file__).resolve().parents[2] / "assets" / "config" / "default.json"


def app_paths() -> AppPaths:
    config_dir = Path(user_config_dir("BhashaSetu", "BhashaSetu"))
    return AppPaths(config_dir=config_dir, config_path=config_dir / "config.json")


def _load_json_dict(path: Path) -> dict[str, Any]:
    # Accept UTF-8 with or without BOM for Windows-edited config files.
    with path.open("r", encoding="utf-8-sig") as f:
        loaded = json.load(f)
    if not isinstance(loaded, dict):
        raise ValueError(f"config must be a JSON object: {path}")
    return loaded


def _write_json_dict(path: Path, payload: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)
        f.write("\n")


def _known_only(payload: dict[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for key in CONFIG_KEYS:
        if key in payload:
            out[key] = payload[key]
    return out


def load_default_config() -> dict[str, Any]:
    path = default_asset_config_path()
    if not path.exists():
        return copy.deepcopy(DEFAULTS)
    loaded = _load_json_dict(path)
    out = copy.deepcopy(DEFAULTS)
    for key in DEFAULTS.keys():
        if key in loaded:
            out[key] = loaded[key]
    return out


def load_user_config(config_path: str | None = None) -> tuple[dict[str, Any], Path]:
    defaults = load_default_config()
    if config_path:
        chosen = Path(config_path)
        if not chosen.exists():
            raise SystemExit(f"Config file not found: {chosen}")
    else:
        chosen = ensure_user_config_exists(defaults)
    loaded = _known_only(_load_json_dict(chosen))
    merged = dict(defaults)
    merged.update(loaded)
    return merged, chosen


def save_user_config(values: dict[str, Any], config_path: str | None = None) -> Path:
    payload = _known_only(values)
    defaults = load_default_config()
    if config_path:
        path = Path(config_path)
        existing = _known_only(_load_json_dict(path)) if path.exists() else {}
    else:
        path = ensure_user_config_exists(defaults)
        existing = _known_only(_load_json_dict(path))
    merged = dict(defaults)
    merged.update(existing)
    merged.update(payload)
    _write_json_dict(path, _known_only(merged))
    return path


def ensure_user_config_exists(defaults: dict[str, Any] | None = None) -> Path:
    paths = app_paths()
    if paths.config_path.exists():
        return paths.config_path
    _write_json_dict(paths.config_path, defaults or load_default_config())
    return paths.config_path


def resolve_defaults(config_path: str | None = None) -> tuple[dict[str, Any], Path]:
    return load_user_config(config_path=config_path)


def parser_with_defaults(defaults: dict[str, Any]) -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="bhashasetu")
    p.add_argument("--config", default=None, help="JSON config path (CLI flags override config)")
    p.add_argument("--list-cameras", action="store_true", help="print camera devices and exit")
    p.add_argument("--camera", type=int, default=defaults["camera"], help="OpenCV camera index")
    p.add_argument(
        "--jpeg-quality",
        type=int,
        default=defaults["jpeg_quality"],
        help="JPEG quality of frames sent for recognition (1-100)",
    )
    p.add_argument(
        "--mirror",
        action=argparse.BooleanOptionalAction,
        default=defaults["mirror"],
        help="mirror frames horizontally before sending (self-view)",
    )
    p.add_argument(
        "--interval-ms",
        type=int,
        default=defaults["interval_ms"],
        help="capture interval while the camera is on (ms)",
    )
    p.add_argument(
        "--target-language",
        default=defaults["target_language"],
        choices=list(LANGUAGE_KEYS),
        help="language of the translated sentence",
    )
    p.add_argument("--context", default=defaults["context"], help="optional context for translation")
    p.add_argument(
        "--translation-mode",
        default=defaults["translation_mode"],
        choices=[m.value for m in TranslationMode],
        help="full: retranslate all words; incremental: newest word + prior sentence; "
        "combined: recognizer appends directly",
    )
    p.add_argument("--recognizer", default=defaults["recognizer"], choices=list(PROVIDERS), help="recognizer provider")
    p.add_argument("--translator", default=defaults["translator"], choices=list(PROVIDERS), help="translator provider")
    p.add_argument("--speech", default=defaults["speech"], choices=list(PROVIDERS), help="speech provider")
    p.add_argument("--model", default=defaults["model"], help="Gemini model for recognition and translation")
    p.add_argument("--tts-model", default=defaults["tts_model"], help="Gemini text-to-speech model")
    p.add_argument("--voice", default=defaults["voice"], help="prebuilt TTS voice name")
    p.add_argument("--poll-ms", type=int, default=defaults["poll_ms"], help="UI queue poll interval (ms)")
    p.add_argument(
        "--queue-maxsize",
        type=int,
        default=defaults["queue_maxsize"],
        help="max update queue size between workers and UI",
    )
    p.add_argument(
        "--max-updates-per-tick",
        type=int,
        default=defaults["max_updates_per_tick"],
        help="max queued updates to apply per UI timer tick",
    )
    p.add_argument(
        "--print-console",
        action=argparse.BooleanOptionalAction,
        default=defaults["print_console"],
        help="print each new utterance to the console",
    )
    p.add_argument(
        "--autostart",
        action=argparse.BooleanOptionalAction,
        default=defaults["autostart"],
        help="turn the camera on at launch",
    )
    p.add_argument("--debug", action="store_true", help="verbose logging")
    return p


def resolve_args(argv: list[str] | None = None) -> argparse.Namespace:
    pre = argparse.ArgumentParser(add_help=False)
    pre.add_argument("--config", default=None)
    pre_args, _ = pre.parse_known_args(argv)
    defaults, _ = resolve_defaults(config_path=pre_args.config)
    parser = parser_with_defaults(defaults)
    args = parser.parse_args(argv)
    if defaults.get("list_cameras"):
        args.list_cameras = True
    if defaults.get("debug"):
        args.debug = True
    return args
