import asyncio
from enum import Enum
from typing import Callable, Dict, List, Optional
from config import Config
from utils.logger import logger
from .state import (
    GameState, Fx, Action, ActionType,
    NEW_WORD, STOP_ANIM, RESET_TO_PLAYING, CLEAR_FX,
)

class TimerSlot(Enum):
    ANIMATION = "animation"   # entry animation -> STOP_ANIM
    FX = "fx"                 # pop/shake -> CLEAR_FX
    ADVANCE = "advance"       # correct -> NEW_WORD, wrong -> RESET_TO_PLAYING

DEFAULT_DURATIONS = {
    TimerSlot.ANIMATION: Config.ENTRY_ANIMATION_SEC,
    TimerSlot.FX: Config.FX_SEC,
}

class TimerCoordinator:
    """
    Delayed follow-up actions for a game session.

    Every timer only hands an action back to `dispatch`; the coordinator
    never reads or writes game state on its own. At most one timer is
    outstanding per slot, and scheduling into a busy slot cancels the
    superseded one.
    """

    def __init__(self, dispatch: Callable[[Action], None],
                 loop: Optional[asyncio.AbstractEventLoop] = None,
                 durations: Optional[Dict[TimerSlot, float]] = None,
                 celebrate_sec: float = Config.CELEBRATE_SEC,
                 retry_sec: float = Config.RETRY_SEC):
        self.dispatch = dispatch
        self._loop = loop
        self.durations = {**DEFAULT_DURATIONS, **(durations or {})}
        self.celebrate_sec = celebrate_sec
        self.retry_sec = retry_sec
        self._handles: Dict[TimerSlot, asyncio.TimerHandle] = {}
        self.closed = False

    @property
    def loop(self):
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def on_transition(self, previous: GameState, current: GameState, action: Action):
        """Schedule whatever follow-ups a committed transition calls for"""
        kind = action.type

        if kind is ActionType.NEW_WORD:
            # A pending advance/reset belongs to the round that just ended
            self.cancel(TimerSlot.ADVANCE)
            self.start_entry_animation()

        if kind in (ActionType.CHECK_OK, ActionType.CHECK_FAIL) and current.fx is not Fx.NONE:
            self.schedule(TimerSlot.FX, self.durations[TimerSlot.FX], CLEAR_FX)

        if kind is ActionType.CHECK_OK:
            self.schedule(TimerSlot.ADVANCE, self.celebrate_sec, NEW_WORD)
        elif kind is ActionType.CHECK_FAIL:
            self.schedule(TimerSlot.ADVANCE, self.retry_sec, RESET_TO_PLAYING)

    def start_entry_animation(self):
        self.schedule(TimerSlot.ANIMATION, self.durations[TimerSlot.ANIMATION], STOP_ANIM)

    def schedule(self, slot: TimerSlot, delay: float, action: Action) -> Optional[asyncio.TimerHandle]:
        if self.closed:
            logger.debug(f"Timer {slot.value} not scheduled: coordinator closed")
            return None

        self.cancel(slot)
        handle = self.loop.call_later(delay, self._fire, slot, action)
        self._handles[slot] = handle
        logger.debug(f"Timer {slot.value} set: {action.type.value} in {delay:.2f}s")
        return handle

    def _fire(self, slot: TimerSlot, action: Action):
        self._handles.pop(slot, None)
        if self.closed:
            return
        logger.debug(f"Timer {slot.value} fired: {action.type.value}")
        self.dispatch(action)

    def cancel(self, slot: TimerSlot) -> bool:
        handle = self._handles.pop(slot, None)
        if handle is None:
            return False
        handle.cancel()
        logger.debug(f"Timer {slot.value} cancelled")
        return True

    def cancel_all(self) -> int:
        slots = list(self._handles)
        for slot in slots:
            self.cancel(slot)
        return len(slots)

    def pending(self) -> List[TimerSlot]:
        return list(self._handles)

    def close(self):
        self.cancel_all()
        self.closed = True
