import os
import random
import sys
import pytest

# Make the repo root importable when pytest runs without the package installed
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from core.engine import GameEngine
from core.scrambler import Scrambler
from core.session import GameSession
from core.words import WordSource


class FakeTimerHandle:
    def __init__(self, when, callback, args):
        self.when = when
        self.callback = callback
        self.args = args
        self._cancelled = False

    def cancel(self):
        self._cancelled = True

    def cancelled(self):
        return self._cancelled


class FakeLoop:
    """Deterministic stand-in for the asyncio loop's call_later"""

    def __init__(self):
        self.now = 0.0
        self.handles = []

    def time(self):
        return self.now

    def call_later(self, delay, callback, *args):
        handle = FakeTimerHandle(self.now + delay, callback, args)
        self.handles.append(handle)
        return handle

    def pending(self):
        return [h for h in self.handles if not h.cancelled()]

    def advance(self, seconds):
        target = self.now + seconds
        while True:
            due = [h for h in self.pending() if h.when <= target]
            if not due:
                break
            handle = min(due, key=lambda h: h.when)
            self.handles.remove(handle)
            self.now = handle.when
            handle.callback(*handle.args)
        self.now = target


@pytest.fixture()
def rng():
    return random.Random(1234)


@pytest.fixture()
def fake_loop():
    return FakeLoop()


@pytest.fixture()
def make_engine(rng):
    def _make(words=("CODE", "GAME", "BUILD")):
        return GameEngine(WordSource(words, rng=rng), Scrambler(rng=rng))
    return _make


@pytest.fixture()
def engine(make_engine):
    return make_engine()


@pytest.fixture()
def make_session(make_engine, fake_loop):
    sessions = []

    def _make(words=("CODE",)):
        session = GameSession(make_engine(words), session_id="test", loop=fake_loop)
        session.start()
        sessions.append(session)
        return session

    yield _make
    for session in sessions:
        session.close()
