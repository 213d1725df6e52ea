from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from bhashasetu.contracts import TranslationRequest
from bhashasetu.languages import DEFAULT_LANGUAGE, Language, needs_translation, resolve_language
from bhashasetu.translator.base import Translator

logger = logging.getLogger(__name__)


class TranslationMode(str, Enum):
    FULL = "full"
    INCREMENTAL = "incremental"
    COMBINED = "combined"


@dataclass(frozen=True)
class EngineSnapshot:
    epoch: int
    tokens: tuple[str, ...]
    utterance: str
    language: Optional[str]

    @property
    def joined_text(self) -> str:
        return " ".join(self.tokens)


def join_tokens(tokens: "list[str] | tuple[str, ...]") -> str:
    return " ".join(tokens)


class AccumulationEngine:
    """
    Single writer for the token sequence and the translated utterance.

    Every state-changing call captures the session epoch before any external
    call and re-checks it before writing, so results computed against a
    cleared session (reset or language change) are dropped.
    """

    def __init__(
        self,
        *,
        translator: Translator,
        language: "str | Language | None" = DEFAULT_LANGUAGE,
        context: str = "",
        mode: "TranslationMode | str" = TranslationMode.FULL,
    ) -> None:
        self.translator = translator
        self.mode = TranslationMode(mode)
        self._language: Optional[Language] = resolve_language(language)
        self._context = context or ""
        self._tokens: list[str] = []
        self._utterance = ""
        # Number of leading tokens the current utterance was derived from.
        self._covered = 0
        self._epoch = 0
        self._lock = threading.Lock()

    @property
    def epoch(self) -> int:
        return self._epoch

    @property
    def tokens(self) -> tuple[str, ...]:
        return tuple(self._tokens)

    @property
    def joined_text(self) -> str:
        return join_tokens(self._tokens)

    @property
    def utterance(self) -> str:
        return self._utterance

    @property
    def language(self) -> Optional[Language]:
        return self._language

    @property
    def context(self) -> str:
        return self._context

    def set_context(self, context: str) -> None:
        # Context only shapes future translations; it does not invalidate tokens.
        self._context = context or ""

    def snapshot(self) -> EngineSnapshot:
        with self._lock:
            return EngineSnapshot(
                epoch=self._epoch,
                tokens=tuple(self._tokens),
                utterance=self._utterance,
                language=None if self._language is None else self._language.name,
            )

    def reset(self) -> None:
        with self._lock:
            self._tokens = []
            self._utterance = ""
            self._covered = 0
            self._epoch += 1
            epoch = self._epoch
        logger.info("session_reset", extra={"epoch": epoch})

    def on_target_language_changed(self, new_language: "str | Language | None") -> None:
        lang = resolve_language(new_language)
        with self._lock:
            self._tokens = []
            self._utterance = ""
            self._covered = 0
            self._epoch += 1
            self._language = lang
            epoch = self._epoch
        logger.info(
            "target_language_changed",
            extra={"epoch": epoch, "language": None if lang is None else lang.key},
        )

    def on_recognition_result(
        self,
        token: str,
        target_language: "str | Language | None" = None,
        context: Optional[str] = None,
        *,
        epoch: Optional[int] = None,
        combined_text: Optional[str] = None,
        is_current: Optional[Callable[[], bool]] = None,
    ) -> bool:
        """
        Fold one recognized token into the session.

        Returns True when the utterance was updated. `is_current` is asked
        again right before the write; a False answer drops the result.
        Raises the translator's error when translation fails; the token stays
        appended and the previous utterance is kept.
        """
        token = (token or "").strip()
        if not token:
            return False
        override = None if target_language is None else resolve_language(target_language)

        with self._lock:
            if epoch is not None and epoch != self._epoch:
                stale_epoch = self._epoch
                accepted = False
            else:
                accepted = True
                lang = self._language if override is None else override
                ctx = self._context if context is None else context
                # The utterance only extends cleanly if it covers every earlier token.
                in_sync = self._covered == len(self._tokens)
                prior_utterance = self._utterance
                self._tokens.append(token)
                joined = join_tokens(self._tokens)
                count = len(self._tokens)
                run_epoch = self._epoch
        if not accepted:
            logger.info(
                "stale_result_dropped",
                extra={"stage": "recognition", "epoch": epoch, "current_epoch": stale_epoch},
            )
            return False

        if not needs_translation(lang):
            return self._apply(run_epoch, count, joined, stage="identity", is_current=is_current)

        if self.mode == TranslationMode.COMBINED and (combined_text or "").strip():
            return self._apply(
                run_epoch, count, str(combined_text).strip(), stage="combined", is_current=is_current
            )

        if self.mode == TranslationMode.INCREMENTAL and in_sync:
            req = TranslationRequest(
                text=token,
                target_language=lang.name,
                context=ctx,
                previous_text=prior_utterance,
            )
        else:
            if self.mode == TranslationMode.INCREMENTAL:
                logger.info("incremental_resync", extra={"epoch": run_epoch, "tokens": count})
            req = TranslationRequest(text=joined, target_language=lang.name, context=ctx)
        return self._translate_and_apply(run_epoch, count, req, is_current=is_current)

    def retranslate(self, context: Optional[str] = None) -> bool:
        """Re-run translation of the whole token sequence, e.g. after the context changed."""
        if context is not None:
            self.set_context(context)
        with self._lock:
            joined = join_tokens(self._tokens)
            count = len(self._tokens)
            run_epoch = self._epoch
            lang = self._language
            ctx = self._context
        if not joined:
            return False
        if not needs_translation(lang):
            return self._apply(run_epoch, count, joined, stage="identity")
        req = TranslationRequest(text=joined, target_language=lang.name, context=ctx)
        return self._translate_and_apply(run_epoch, count, req)

    def _translate_and_apply(
        self,
        run_epoch: int,
        count: int,
        req: TranslationRequest,
        *,
        is_current: Optional[Callable[[], bool]] = None,
    ) -> bool:
        try:
            res = self.translator.translate(req)
        except Exception:
            logger.warning(
                "translation_failed",
                extra={"epoch": run_epoch, "chars": len(req.text), "language": req.target_language},
                exc_info=True,
            )
            raise
        return self._apply(run_epoch, count, res.translated_text.strip(), stage="translation", is_current=is_current)

    def _apply(
        self,
        run_epoch: int,
        count: int,
        utterance: str,
        *,
        stage: str,
        is_current: Optional[Callable[[], bool]] = None,
    ) -> bool:
        if is_current is not None and not is_current():
            logger.info("stale_result_dropped", extra={"stage": stage, "epoch": run_epoch, "loop_stopped": True})
            return False
        with self._lock:
            if run_epoch != self._epoch:
                current = self._epoch
                applied = False
            else:
                self._utterance = utterance
                self._covered = count
                applied = True
        if not applied:
            logger.info(
                "stale_result_dropped",
                extra={"stage": stage, "epoch": run_epoch, "current_epoch": current},
            )
        return applied
