# stt.py
# Single-shot speech capture backed by SpeechRecognition.
# start() captures one phrase with Recognizer.listen_in_background and
# reports it through the on_start / on_result / on_end / on_error callbacks.
# stop() releases the microphone right away through the returned stopper.

import logging
import threading
from typing import Callable, Optional

import speech_recognition as sr

from ..errors import ListeningError, ListeningUnavailable
from ..router.nav_config import NavConfig

logger = logging.getLogger(__name__)


class Listener:
    """
    Microphone listener.

    Callbacks run on the capture or timer thread, or on the caller's thread
    for stop(); VoiceNavigator re-queues them so the session is only
    touched from its own thread.

    Args:
        config:     NavConfig instance (language, timeouts).
        recognizer: Optional sr.Recognizer override.
    """

    def __init__(
        self,
        config: Optional[NavConfig] = None,
        recognizer: Optional[sr.Recognizer] = None,
    ) -> None:
        self.config = config or NavConfig()
        self.recognizer = recognizer or sr.Recognizer()

        self.on_start: Optional[Callable[[], None]] = None
        self.on_result: Optional[Callable[[str], None]] = None
        self.on_end: Optional[Callable[[], None]] = None
        self.on_error: Optional[Callable[[str], None]] = None

        self._lock = threading.Lock()
        self._active = False
        self._stopper: Optional[Callable[..., None]] = None
        self._timer: Optional[threading.Timer] = None

    @staticmethod
    def check_available() -> None:
        """Raise ListeningUnavailable if no microphone can be opened."""
        try:
            names = sr.Microphone.list_microphone_names()
        except (AttributeError, OSError) as e:
            # AttributeError: PyAudio missing
            raise ListeningUnavailable(str(e)) from e
        if not names:
            raise ListeningUnavailable("No microphone found")

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def is_active(self) -> bool:
        with self._lock:
            return self._active

    def start(self) -> None:
        with self._lock:
            if self._active:
                return
            self._active = True
        self._emit(self.on_start)

        try:
            microphone = sr.Microphone()
            with microphone as source:
                self.recognizer.adjust_for_ambient_noise(source, duration=0.5)
            stopper = self.recognizer.listen_in_background(
                microphone,
                self._on_audio,
                phrase_time_limit=self.config.phrase_time_limit_s,
            )
        except (AttributeError, OSError) as e:
            # AttributeError: PyAudio missing
            if self._claim():
                self._report(error=ListeningError("audio-capture", str(e)))
            return

        # no phrase within listen_timeout_s (plus its own duration) = no-speech
        timer = threading.Timer(
            self.config.listen_timeout_s + self.config.phrase_time_limit_s,
            self._on_timeout,
        )
        timer.daemon = True
        with self._lock:
            finished = not self._active
            if not finished:
                self._stopper = stopper
                self._timer = timer
        if finished:
            stopper(wait_for_stop=False)
        else:
            timer.start()

    def stop(self) -> None:
        """End capture now and discard whatever was heard."""
        if self._claim():
            self._report(error=ListeningError("aborted"))

    # ------------------------------------------------------------------
    # Background callbacks
    # ------------------------------------------------------------------

    def _on_audio(self, recognizer: sr.Recognizer, audio: sr.AudioData) -> None:
        if not self._claim():
            return
        try:
            transcript = self._recognize(audio)
        except ListeningError as e:
            self._report(error=e)
        else:
            self._report(transcript=transcript)

    def _on_timeout(self) -> None:
        if self._claim():
            self._report(error=ListeningError("no-speech"))

    def _claim(self) -> bool:
        """Finish the session once; releases the microphone and the timer."""
        with self._lock:
            if not self._active:
                return False
            self._active = False
            stopper, self._stopper = self._stopper, None
            timer, self._timer = self._timer, None
        if timer is not None:
            timer.cancel()
        if stopper is not None:
            # may run on the capture thread itself, which cannot join itself
            stopper(wait_for_stop=False)
        return True

    def _recognize(self, audio: sr.AudioData) -> str:
        try:
            return self.recognizer.recognize_google(audio, language=self.config.language).strip()
        except sr.UnknownValueError as e:
            raise ListeningError("no-match") from e
        except sr.RequestError as e:
            raise ListeningError("network", str(e)) from e

    def _report(self, transcript: Optional[str] = None, error: Optional[ListeningError] = None) -> None:
        if error is not None:
            logger.warning(f"[STT] {error}")
            self._emit(self.on_error, error.code)
        else:
            self._emit(self.on_result, transcript)
        self._emit(self.on_end)

    @staticmethod
    def _emit(callback, *args) -> None:
        if callback is not None:
            callback(*args)
