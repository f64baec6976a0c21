import asyncio
import random
import time
from typing import Callable, Dict, Optional
from config import Config
from core.engine import GameEngine
from core.scrambler import Scrambler
from core.session import GameSession
from core.words import WordSource
from utils.logger import logger

class GameManager:
    """One in-memory game per chat; nothing survives a restart"""

    def __init__(self, rng: Optional[random.Random] = None,
                 loop: Optional[asyncio.AbstractEventLoop] = None):
        self.rng = rng or random.Random()
        self.loop = loop
        self.sessions: Dict[int, GameSession] = {}  # key: chat_id

    def _build_engine(self) -> GameEngine:
        return GameEngine(
            words=WordSource(Config.WORDS, rng=self.rng),
            scrambler=Scrambler(rng=self.rng),
        )

    def create_session(self, chat_id: int,
                       attach: Optional[Callable[[GameSession], None]] = None) -> GameSession:
        """Replace the chat's game; `attach` wires listeners before the opening snapshot"""
        self.close_session(chat_id)

        session = GameSession(self._build_engine(), session_id=str(chat_id), loop=self.loop)
        self.sessions[chat_id] = session
        if attach is not None:
            attach(session)
        session.start()
        return session

    def get_session(self, chat_id: int) -> Optional[GameSession]:
        session = self.sessions.get(chat_id)
        if session is None or session.closed:
            return None
        return session

    def get_or_create_session(self, chat_id: int) -> GameSession:
        return self.get_session(chat_id) or self.create_session(chat_id)

    def close_session(self, chat_id: int) -> bool:
        session = self.sessions.pop(chat_id, None)
        if session is None:
            return False
        session.close()
        return True

    def close_all(self) -> int:
        chat_ids = list(self.sessions)
        for chat_id in chat_ids:
            self.close_session(chat_id)
        if chat_ids:
            logger.info(f"Closed {len(chat_ids)} game sessions")
        return len(chat_ids)

    def close_stale_sessions(self, now: Optional[float] = None) -> int:
        if now is None:
            now = time.time()
        stale = [
            chat_id for chat_id, sess in self.sessions.items()
            if (now - sess.last_activity) > Config.SESSION_TIMEOUT
        ]
        for chat_id in stale:
            self.close_session(chat_id)
            logger.debug(f"Cleaned stale session: {chat_id}")
        return len(stale)

    async def cleanup_stale_sessions(self):
        """Background task to close idle games"""
        while True:
            await asyncio.sleep(Config.CLEANUP_INTERVAL)
            self.close_stale_sessions()
