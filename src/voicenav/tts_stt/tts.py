# tts.py
# Text-to-speech output backed by pyttsx3.
# Each utterance runs in its own interpreter so it can be cut off:
# pyttsx3's runAndWait() cannot be interrupted from another thread.

import logging
import queue
import subprocess
import sys
import threading
from typing import Callable, List, Optional, Tuple

import pyttsx3

from ..router.nav_config import NavConfig

logger = logging.getLogger(__name__)


_SPEAK_SCRIPT = (
    "import pyttsx3\n"
    "engine = pyttsx3.init()\n"
    "engine.setProperty('rate', {rate})\n"
    "engine.setProperty('volume', {volume})\n"
    "{voice_line}"
    "engine.say({text!r})\n"
    "engine.runAndWait()"
)

PREFERRED_VOICES: List[str] = ["Samantha", "Victoria", "Ava", "Moira", "Karen", "Tessa", "Kathy"]


def preferred_voice_id(preferred: Optional[List[str]] = None) -> Optional[str]:
    """
    Id of the first installed voice whose name matches a preferred name.

    Returns:
        Voice id, or None if no match or no TTS driver is available.
    """
    preferred = preferred or PREFERRED_VOICES
    try:
        engine = pyttsx3.init()
        voices = engine.getProperty("voices")
    except (RuntimeError, OSError) as e:
        logger.warning(f"[TTS] Could not query voices: {e}")
        return None
    for v in voices:
        if any(p.lower() in (v.name or "").lower() for p in preferred):
            return v.id
    return None


class SpeechOutput:
    """
    Queue based speech output.

    speak() cancels pending and in-progress speech before queueing the new
    text; only the latest message is ever heard.

    Args:
        config:       NavConfig instance (rate, volume).
        on_speaking:  Called with True/False when speech starts/stops,
                      from the worker thread.
        voice_id:     pyttsx3 voice id; see preferred_voice_id().
    """

    def __init__(
        self,
        config: Optional[NavConfig] = None,
        on_speaking: Optional[Callable[[bool], None]] = None,
        voice_id: Optional[str] = None,
    ) -> None:
        self.config = config or NavConfig()
        self.on_speaking = on_speaking
        self.voice_id = voice_id

        # items are (generation, text); cancel() bumps the generation
        self._queue: "queue.Queue[Optional[Tuple[int, str]]]" = queue.Queue()
        self._lock = threading.Lock()
        self._generation = 0
        self._proc: Optional[subprocess.Popen] = None
        self._thread = threading.Thread(target=self._worker, daemon=True)
        self._thread.start()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def speak(self, text: str) -> None:
        text = (text or "").strip()
        if not text:
            return
        self.cancel()
        logger.debug(f"[TTS] {text}")
        with self._lock:
            generation = self._generation
        self._queue.put((generation, text))

    def cancel(self) -> None:
        """Drop queued text and stop the utterance being spoken."""
        while True:
            try:
                self._queue.get_nowait()
            except queue.Empty:
                break
            self._queue.task_done()
        with self._lock:
            self._generation += 1
            if self._proc is not None and self._proc.poll() is None:
                self._proc.terminate()

    @property
    def is_speaking(self) -> bool:
        with self._lock:
            return self._proc is not None and self._proc.poll() is None

    def wait(self) -> None:
        """Block until everything queued has been spoken."""
        self._queue.join()

    def close(self, timeout: float = 5.0) -> None:
        self.cancel()
        self._queue.put(None)
        self._thread.join(timeout=timeout)

    # ------------------------------------------------------------------
    # Worker thread
    # ------------------------------------------------------------------

    def _worker(self) -> None:
        while True:
            item = self._queue.get()
            if item is None:
                self._queue.task_done()
                break
            generation, text = item
            script = _SPEAK_SCRIPT.format(
                rate=self.config.speech_rate,
                volume=self.config.speech_volume,
                voice_line=self._voice_line(),
                text=text,
            )
            with self._lock:
                # cancelled after it was dequeued
                if generation != self._generation:
                    self._queue.task_done()
                    continue
                try:
                    proc = self._proc = subprocess.Popen([sys.executable, "-c", script])
                except OSError as e:
                    logger.error(f"[TTS] Speech failed: {e}")
                    self._queue.task_done()
                    continue
            self._notify(True)
            try:
                proc.wait()
            finally:
                with self._lock:
                    self._proc = None
                self._notify(False)
                self._queue.task_done()

    def _voice_line(self) -> str:
        if not self.voice_id:
            return ""
        return f"engine.setProperty('voice', {self.voice_id!r})\n"

    def _notify(self, speaking: bool) -> None:
        if self.on_speaking is not None:
            self.on_speaking(speaking)
