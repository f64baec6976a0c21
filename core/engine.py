from typing import List, Optional, Tuple
from config import Config
from .state import (
    GameState, Phase, Fx, Action, ActionType,
    CHECK_START, CHECK_OK, CHECK_FAIL,
)
from .words import WordSource
from .scrambler import Scrambler
from .parser import GuessParser

class GameEngine:
    """
    Pure reducer for the scramble game.

    apply() never mutates the incoming state and never raises: every action
    either produces a new state or returns the old one untouched. The only
    randomness is the word draw on NEW_WORD, delegated to the injected
    WordSource and Scrambler.
    """

    def __init__(self, words: Optional[WordSource] = None, scrambler: Optional[Scrambler] = None,
                 score_per_letter: int = Config.SCORE_PER_LETTER):
        self.words = words or WordSource()
        self.scrambler = scrambler or Scrambler()
        self.score_per_letter = score_per_letter

    def draw(self) -> Tuple[str, str]:
        word = self.words.pick_word()
        return word, self.scrambler.scramble_distinct(word)

    def initial_state(self) -> GameState:
        word, scrambled = self.draw()
        return GameState(current_word=word, scrambled_word=scrambled)

    def points_for(self, word: str) -> int:
        return len(word) * self.score_per_letter

    def apply(self, state: GameState, action: Action) -> GameState:
        kind = action.type

        if kind is ActionType.NEW_WORD:
            word, scrambled = self.draw()
            return state.evolve(
                current_word=word,
                scrambled_word=scrambled,
                user_input="",
                attempts=state.attempts + 1,
                phase=Phase.PLAYING,
                animating=True,
                fx=Fx.NONE,
            )

        if kind is ActionType.STOP_ANIM:
            return state.evolve(animating=False)

        if kind is ActionType.SET_INPUT:
            # Input is frozen while a judged guess is on screen
            if not state.is_playing():
                return state
            return state.evolve(user_input=action.value)

        if kind is ActionType.CHECK_START:
            return state.evolve(attempts=state.attempts + 1)

        if kind is ActionType.CHECK_OK:
            return state.evolve(
                phase=Phase.CORRECT,
                score=state.score + self.points_for(state.current_word),
                fx=Fx.POP,
            )

        if kind is ActionType.CHECK_FAIL:
            return state.evolve(phase=Phase.WRONG, fx=Fx.SHAKE)

        if kind is ActionType.RESET_TO_PLAYING:
            return state.evolve(phase=Phase.PLAYING, user_input="")

        if kind is ActionType.CLEAR_FX:
            return state.evolve(fx=Fx.NONE)

        return state

    def judge(self, state: GameState, raw_input: Optional[str]) -> List[Action]:
        """Actions for a submitted guess; empty when the submit is ignored"""
        if not state.is_playing():
            return []

        guess = GuessParser.normalize(raw_input)
        if guess is None:
            return []

        if guess == state.current_word:
            return [CHECK_START, CHECK_OK]
        return [CHECK_START, CHECK_FAIL]
