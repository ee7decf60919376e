# command_interpreter.py
# Turns a spoken or typed utterance into a navigation command.

from typing import Tuple

from .models import CommandResult


# Checked in this order; the first phrase found wins
NAVIGATION_PHRASES: Tuple[str, ...] = ("take me to", "navigate to", "go to")

EMERGENCY_KEYWORD = "emergency"

MIN_DESTINATION_LENGTH = 2


class CommandInterpreter:
    """
    Rule based utterance parser.

        "Take me to the airport"  → NAVIGATE("the airport")
        "emergency"               → EMERGENCY
        "City Mall"               → NAVIGATE("City Mall")
        "a"                       → REJECTED

    Navigation phrases are checked before the emergency keyword, so
    "go to emergency room" navigates.
    """

    def interpret(self, utterance: str) -> CommandResult:
        lowered = utterance.lower()

        for phrase in NAVIGATION_PHRASES:
            if phrase in lowered:
                destination = lowered.replace(phrase, "", 1).strip()
                return self._checked(destination)

        if EMERGENCY_KEYWORD in lowered:
            return CommandResult.emergency()

        return self._checked(utterance.strip())

    @staticmethod
    def _checked(destination: str) -> CommandResult:
        if len(destination) < MIN_DESTINATION_LENGTH:
            return CommandResult.rejected()
        return CommandResult.navigate(destination)
