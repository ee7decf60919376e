# errors.py
# Exceptions raised by the capability adapters.
# None of them is fatal: VoiceNavigator catches each one and turns it into
# a status line or a spoken message.


class VoiceNavError(Exception):
    """Base class for all voice navigation errors."""
    pass


class ListeningUnavailable(VoiceNavError):
    """No microphone or speech recognition backend."""
    pass


class ListeningError(VoiceNavError):
    """The recognizer reported an error mid-session."""

    def __init__(self, code: str, detail: str = "") -> None:
        self.code = code
        self.detail = detail
        super().__init__(f"{code}: {detail}" if detail else code)


class LocationUnavailable(VoiceNavError):
    """One-shot location fix failed or timed out."""
    pass


class AlertTransportFailure(VoiceNavError):
    """Emergency alert could not be delivered."""
    pass
