from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from bhashasetu.audio.playback import SoundDevicePlayer
from bhashasetu.camera.capture import OpenCVCameraSource
from bhashasetu.live.engine import AccumulationEngine, TranslationMode
from bhashasetu.recognizer.base import Recognizer
from bhashasetu.recognizer.factory import get_recognizer
from bhashasetu.speech.base import SpeechSynthesizer
from bhashasetu.speech.factory import get_speech
from bhashasetu.translator.base import Translator
from bhashasetu.translator.factory import get_translator


@dataclass(frozen=True)
class InterpreterServices:
    camera: OpenCVCameraSource
    recognizer: Recognizer
    translator: Translator
    speech: SpeechSynthesizer
    player: SoundDevicePlayer
    engine: AccumulationEngine


def build_interpreter_services(args: Any, *, client: Any = None) -> InterpreterServices:
    mode = TranslationMode(str(args.translation_mode))
    camera = OpenCVCameraSource(
        device=int(args.camera),
        jpeg_quality=int(args.jpeg_quality),
        mirror=bool(args.mirror),
    )
    recognizer = get_recognizer(
        str(args.recognizer),
        model=str(args.model),
        combined=mode == TranslationMode.COMBINED,
        client=client,
    )
    translator = get_translator(str(args.translator), model=str(args.model), client=client)
    speech = get_speech(str(args.speech), model=str(args.tts_model), voice=str(args.voice), client=client)
    engine = AccumulationEngine(
        translator=translator,
        language=str(args.target_language),
        context=str(args.context or ""),
        mode=mode,
    )
    return InterpreterServices(
        camera=camera,
        recognizer=recognizer,
        translator=translator,
        speech=speech,
        player=SoundDevicePlayer(),
        engine=engine,
    )
