from dataclasses import dataclass, replace
from typing import Dict
from enum import Enum

class Phase(Enum):
    PLAYING = "playing"
    CORRECT = "correct"    # Flash, then next word
    WRONG = "wrong"        # Shake, then back to playing

class Fx(Enum):
    NONE = "none"
    SHAKE = "shake"
    POP = "pop"

class ActionType(Enum):
    NEW_WORD = "new_word"
    STOP_ANIM = "stop_anim"
    SET_INPUT = "set_input"
    CHECK_START = "check_start"
    CHECK_OK = "check_ok"
    CHECK_FAIL = "check_fail"
    RESET_TO_PLAYING = "reset_to_playing"
    CLEAR_FX = "clear_fx"

@dataclass(frozen=True)
class Action:
    type: ActionType
    value: str = ""  # SET_INPUT only

    @classmethod
    def set_input(cls, value: str) -> 'Action':
        return cls(ActionType.SET_INPUT, value)

NEW_WORD = Action(ActionType.NEW_WORD)
STOP_ANIM = Action(ActionType.STOP_ANIM)
CHECK_START = Action(ActionType.CHECK_START)
CHECK_OK = Action(ActionType.CHECK_OK)
CHECK_FAIL = Action(ActionType.CHECK_FAIL)
RESET_TO_PLAYING = Action(ActionType.RESET_TO_PLAYING)
CLEAR_FX = Action(ActionType.CLEAR_FX)

@dataclass(frozen=True)
class GameState:
    current_word: str
    scrambled_word: str
    user_input: str = ""
    score: int = 0
    attempts: int = 0
    phase: Phase = Phase.PLAYING
    animating: bool = True
    fx: Fx = Fx.NONE

    def is_playing(self) -> bool:
        return self.phase is Phase.PLAYING

    def evolve(self, **changes) -> 'GameState':
        return replace(self, **changes)

    def to_dict(self) -> Dict:
        return {
            "current_word": self.current_word,
            "scrambled_word": self.scrambled_word,
            "user_input": self.user_input,
            "score": self.score,
            "attempts": self.attempts,
            "phase": self.phase.value,
            "animating": self.animating,
            "fx": self.fx.value,
        }
