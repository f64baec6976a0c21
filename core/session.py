import asyncio
import time
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Deque, List, Optional
from utils.logger import logger
from .state import GameState, Action, ActionType, NEW_WORD
from .engine import GameEngine
from .timers import TimerCoordinator

class NoticeKind(Enum):
    SUCCESS = "success"
    FAILURE = "failure"

@dataclass(frozen=True)
class Notice:
    kind: NoticeKind
    title: str
    description: str
    points: int = 0

# Action is None for the initial snapshot emitted by start()
StateListener = Callable[[GameState, Optional[Action]], None]
NoticeListener = Callable[[Notice], None]

class GameSession:
    """
    Host for one running game.

    Player intents and timer callbacks share a single FIFO queue, and only
    the queue drain applies actions, so the state always has exactly one
    writer.
    """

    def __init__(self, engine: GameEngine, session_id: str = "local",
                 loop: Optional[asyncio.AbstractEventLoop] = None):
        self.engine = engine
        self.session_id = session_id
        self.state: GameState = engine.initial_state()
        self.timers = TimerCoordinator(self.dispatch, loop=loop)
        self.last_activity = time.time()
        self.closed = False
        self._queue: Deque[Action] = deque()
        self._draining = False
        self._listeners: List[StateListener] = []
        self._notice_listeners: List[NoticeListener] = []

    def subscribe(self, listener: StateListener):
        self._listeners.append(listener)

    def on_notice(self, listener: NoticeListener):
        self._notice_listeners.append(listener)

    def start(self):
        """Kick off the first word's entry animation and emit the opening snapshot"""
        logger.info(f"Session {self.session_id} started ({len(self.state.current_word)}-letter word)")
        self.timers.start_entry_animation()
        self._emit(None)

    def dispatch(self, *actions: Action):
        """Queue actions back to back, draining unless a drain is already running"""
        if self.closed:
            logger.debug(f"Session {self.session_id}: dropped {len(actions)} action(s) after close")
            return

        self._queue.extend(actions)
        if self._draining:
            return

        self._draining = True
        try:
            while self._queue:
                self._apply(self._queue.popleft())
        finally:
            self._draining = False

    def _apply(self, action: Action):
        previous = self.state
        self.state = self.engine.apply(previous, action)
        self.timers.on_transition(previous, self.state, action)
        self._emit(action)

    def _emit(self, action: Optional[Action]):
        for listener in list(self._listeners):
            try:
                listener(self.state, action)
            except Exception as e:
                logger.error(f"Session {self.session_id}: state listener failed: {e}", exc_info=True)

    # Player intents

    def edit_input(self, value: str):
        self.last_activity = time.time()
        self.dispatch(Action.set_input(value))

    def request_new_word(self):
        self.last_activity = time.time()
        self.dispatch(NEW_WORD)

    def submit_guess(self, raw_input: Optional[str] = None) -> bool:
        """
        Judge a guess against the current word.
        Uses the buffered input when raw_input is None. Returns False when
        the submit was ignored (blank guess, or not in the playing phase).
        """
        self.last_activity = time.time()
        state = self.state
        guess = state.user_input if raw_input is None else raw_input

        actions = self.engine.judge(state, guess)
        if not actions:
            return False

        self.dispatch(*actions)

        correct = actions[-1].type is ActionType.CHECK_OK
        logger.info(
            f"Session {self.session_id}: guess {'correct' if correct else 'wrong'} "
            f"(score={self.state.score}, attempts={self.state.attempts})"
        )
        self._notify(self._notice_for(state, correct))
        return True

    def _notice_for(self, judged: GameState, correct: bool) -> Notice:
        if correct:
            points = self.engine.points_for(judged.current_word)
            return Notice(NoticeKind.SUCCESS, "Correct! Well done! 🎉", f"+{points} points", points)
        return Notice(NoticeKind.FAILURE, "Try again! 💪", "Keep going, you can do it!")

    def _notify(self, notice: Notice):
        for listener in list(self._notice_listeners):
            try:
                listener(notice)
            except Exception as e:
                logger.error(f"Session {self.session_id}: notice listener failed: {e}", exc_info=True)

    def close(self):
        if self.closed:
            return
        cancelled = self.timers.cancel_all()
        self.timers.close()
        self.closed = True
        self._queue.clear()
        logger.info(f"Session {self.session_id} closed ({cancelled} timers cancelled)")
