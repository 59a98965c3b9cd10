"""Coqui TTS wrapper that sanitizes input before synthesis."""

from __future__ import annotations

import logging
import os
from contextlib import contextmanager, redirect_stdout
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Generator, Protocol, Tuple

import numpy as np
import soundfile as sf

from speakable.textnorm.pipeline import sanitize
from speakable.textnorm.quotes import BoundaryPolicy


_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SynthesisResult:
    wav_path: str | None
    text: str
    skipped: bool
    meta: Dict[str, Any]


class TTSBackend(Protocol):
    """Protocol for TTS backend implementations."""

    def synthesize(self, text: str) -> Tuple[np.ndarray, int]: ...


@contextmanager
def _quiet_stdout() -> Generator[None, None, None]:
    # Coqui prints model summaries and timings straight to stdout.
    with open(os.devnull, "w", encoding="utf-8") as devnull, redirect_stdout(devnull):
        yield


class CoquiBackend:
    """Coqui TTS backend.

    Loading a model takes several seconds; build one backend and reuse it.
    """

    def __init__(self, model_name: str, gpu: bool = True) -> None:
        try:
            from TTS.api import TTS  # type: ignore
        except Exception as exc:  # pragma: no cover
            raise RuntimeError(
                "Coqui TTS is not available. Install it with `pip install coqui-tts`."
            ) from exc

        with _quiet_stdout():
            self._tts = TTS(model_name=model_name, progress_bar=False).to("cuda" if gpu else "cpu")

    def synthesize(self, text: str) -> Tuple[np.ndarray, int]:
        with _quiet_stdout():
            samples = self._tts.tts(text=text)
        sample_rate = self._tts.synthesizer.output_sample_rate
        return np.asarray(samples, dtype=np.float32), int(sample_rate)


class Synthesizer:
    """Sanitize text, synthesize it, and write the result as a WAV file."""

    def __init__(
        self,
        model_name: str,
        backend: TTSBackend | None = None,
        gpu: bool = True,
        filter_input: bool = True,
        boundary_policy: BoundaryPolicy = BoundaryPolicy.ALWAYS,
    ) -> None:
        """Initialize the synthesizer.

        Parameters
        ----------
        model_name : str
            Coqui model identifier.
        backend : TTSBackend | None
            Optional backend implementation; defaults to `CoquiBackend`, which
            loads the model immediately.
        gpu : bool
            Run the default backend on CUDA.
        filter_input : bool
            Default for `generate`; sanitize input before synthesis.
        boundary_policy : BoundaryPolicy
            Boundary handling used by the quote stripper.
        """
        self._model_name = model_name
        self._backend = backend or CoquiBackend(model_name, gpu=gpu)
        self._filter_input = filter_input
        self._boundary_policy = boundary_policy

    def generate(
        self,
        text: str,
        wav_path: str | Path,
        filter_input: bool | None = None,
    ) -> SynthesisResult:
        """Synthesize `text` into `wav_path`.

        Parameters
        ----------
        text : str
            Raw text to speak.
        wav_path : str | pathlib.Path
            Destination WAV file. Parent directories are created.
        filter_input : bool | None
            Override the instance default for input sanitization. Junk input
            can crash the synthesizer, so filtering is recommended.

        Returns
        -------
        SynthesisResult
            Result describing the spoken text and output path. When the text is
            empty after filtering nothing is written and `skipped` is True.
        """
        use_filter = self._filter_input if filter_input is None else filter_input
        meta: Dict[str, Any] = {"model_name": self._model_name, "filtered": use_filter}
        speak = text
        if use_filter:
            result = sanitize(text, policy=self._boundary_policy)
            speak = result.text
            meta.update(result.meta)
            if result.meta["removed_chars"]:
                _logger.debug("synth.filtered removed=%d", result.meta["removed_chars"])

        if not speak:
            _logger.info("synth.skipped_empty input_len=%d", len(text))
            return SynthesisResult(wav_path=None, text="", skipped=True, meta=meta)

        audio, sample_rate = self._backend.synthesize(speak)
        audio = np.asarray(audio, dtype=np.float32)
        peak = float(np.max(np.abs(audio))) if audio.size else 0.0
        if peak > 1.0:
            audio = audio / peak

        out_path = Path(wav_path)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        sf.write(out_path, audio, samplerate=sample_rate, format="WAV", subtype="PCM_16")
        meta.update({"sample_rate": sample_rate, "num_frames": int(audio.shape[0])})
        _logger.info("synth.written path=%s frames=%d", out_path, audio.shape[0])
        return SynthesisResult(wav_path=str(out_path), text=speak, skipped=False, meta=meta)
