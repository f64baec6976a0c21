import os
from dotenv import load_dotenv

load_dotenv()

class Config:
    # Telegram
    BOT_TOKEN = os.getenv("BOT_TOKEN", "")
    FORCE_JOIN_CHAT = os.getenv("FORCE_JOIN_CHAT", "")  # @channel username

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_DIR = os.getenv("LOG_DIR", "logs")

    # Sessions
    SESSION_TIMEOUT = int(os.getenv("SESSION_TIMEOUT", "3600"))  # seconds idle before cleanup
    CLEANUP_INTERVAL = int(os.getenv("CLEANUP_INTERVAL", "300"))

    # Game rules (fixed)
    SCORE_PER_LETTER = 10
    WORDS = (
        "REACT", "JAVASCRIPT", "COMPUTER", "DEVELOP", "PROGRAM", "DESIGN", "CREATE",
        "BUILD", "SOLVE", "THINK", "LEARN", "STUDY", "WRITE", "CODE", "GAME",
    )

    # Feedback windows (seconds)
    ENTRY_ANIMATION_SEC = 0.6
    FX_SEC = 0.6
    CELEBRATE_SEC = 1.4   # correct -> next word
    RETRY_SEC = 0.9       # wrong -> back to playing

    @classmethod
    def validate(cls):
        if not cls.BOT_TOKEN:
            raise ValueError("BOT_TOKEN environment variable required")
        os.makedirs(cls.LOG_DIR, exist_ok=True)
