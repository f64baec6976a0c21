import asyncio
from typing import Optional, Set
from telegram import Update, InlineKeyboardButton, InlineKeyboardMarkup
from telegram.ext import ContextTypes, CommandHandler, MessageHandler, filters
from config import Config
from core.parser import GuessParser
from core.session import GameSession, Notice, NoticeKind
from core.state import GameState, Action, ActionType
from game_manager import GameManager
from utils.logger import logger

manager = GameManager()

def format_tiles(state: GameState) -> str:
    return "  ".join(f"[{letter}]" for letter in state.scrambled_word)

def format_status(state: GameState) -> str:
    return f"🏆 Score: {state.score} | ✅ Attempts: {state.attempts}"

def format_score(state: GameState) -> str:
    return f"{format_status(state)} | 🎯 Phase: {state.phase.value}"

def format_round(state: GameState) -> str:
    return (
        "🔤 Unscramble these letters:\n\n"
        f"{format_tiles(state)}\n\n"
        f"{format_status(state)}"
    )

def format_hint(state: GameState) -> str:
    return f"💡 Hint: This is a {len(state.current_word)}-letter word"

def format_notice(notice: Notice) -> str:
    icon = "✅" if notice.kind is NoticeKind.SUCCESS else "❌"
    return f"{icon} {notice.title}\n{notice.description}"

class ChatRenderer:
    """Pushes new rounds and judge notices of one session into its chat"""

    def __init__(self, bot, chat_id: int):
        self.bot = bot
        self.chat_id = chat_id
        self._tasks: Set[asyncio.Task] = set()

    def attach(self, session: GameSession):
        session.subscribe(self.on_state)
        session.on_notice(self.on_notice)

    def on_state(self, state: GameState, action: Optional[Action]):
        # None is the opening snapshot of a fresh game
        if action is None or action.type is ActionType.NEW_WORD:
            self._send(format_round(state))

    def on_notice(self, notice: Notice):
        self._send(format_notice(notice))

    def _send(self, text: str):
        task = asyncio.get_running_loop().create_task(self.bot.send_message(self.chat_id, text))
        self._tasks.add(task)
        task.add_done_callback(self._done)

    def _done(self, task: asyncio.Task):
        self._tasks.discard(task)
        if not task.cancelled() and task.exception():
            logger.error(f"Send to chat {self.chat_id} failed: {task.exception()}")

def start_game(bot, chat_id: int) -> GameSession:
    return manager.create_session(chat_id, attach=ChatRenderer(bot, chat_id).attach)

async def check_force_join(update: Update) -> bool:
    """Verify user is member of required channel"""
    if not Config.FORCE_JOIN_CHAT:
        return True

    user_id = update.effective_user.id
    try:
        chat_member = await update.get_bot().get_chat_member(Config.FORCE_JOIN_CHAT, user_id)
        if chat_member.status in ['member', 'administrator', 'creator']:
            return True

        await update.effective_message.reply_text(
            f"🔒 Please join {Config.FORCE_JOIN_CHAT} to play",
            reply_markup=InlineKeyboardMarkup([[
                InlineKeyboardButton("Join Channel", url=f"https://t.me/{Config.FORCE_JOIN_CHAT.lstrip('@')}"),
            ]])
        )
        return False
    except Exception as e:
        logger.error(f"Force join check failed: {e}")
        return False

async def start_handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
    if not await check_force_join(update):
        return

    welcome_text = (
        "🎮 Word Scramble\n\n"
        "Type the word hidden in the letters to score "
        f"{Config.SCORE_PER_LETTER} points per letter.\n\n"
        "Commands:\n"
        "/new - Skip to a new word\n"
        "/score - Show score, attempts and phase\n"
        "/hint - Show the word length\n"
        "/quit - End the game\n"
    )
    chat_id = update.effective_chat.id
    try:
        await update.effective_message.reply_text(welcome_text)
        # The renderer posts the opening round
        start_game(context.bot, chat_id)
        logger.info(f"Chat {chat_id} started a game")
    except Exception as e:
        logger.error(f"Start failed for chat {chat_id}: {e}", exc_info=True)
        await update.effective_message.reply_text("❌ Could not start a game, try /start again")

async def new_word_handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
    if not await check_force_join(update):
        return

    chat_id = update.effective_chat.id
    session = manager.get_session(chat_id)
    if session is None:
        start_game(context.bot, chat_id)
        return

    # The renderer posts the new round
    session.request_new_word()

async def score_handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
    session = manager.get_session(update.effective_chat.id)
    if session is None:
        await update.effective_message.reply_text("📭 No game running. Use /start")
        return
    await update.effective_message.reply_text(format_score(session.state))

async def hint_handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
    session = manager.get_session(update.effective_chat.id)
    if session is None:
        await update.effective_message.reply_text("📭 No game running. Use /start")
        return
    await update.effective_message.reply_text(format_hint(session.state))

async def quit_handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
    chat_id = update.effective_chat.id
    session = manager.get_session(chat_id)
    if session is None:
        await update.effective_message.reply_text("⚠️ No game to end")
        return

    final = session.state
    manager.close_session(chat_id)
    await update.effective_message.reply_text(f"⏹️ Game over\n{format_status(final)}")
    logger.info(f"Chat {chat_id} ended the game")

async def guess_handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
    session = manager.get_session(update.effective_chat.id)
    if session is None:
        await update.effective_message.reply_text("Use /start to play")
        return

    # Letters are locked while the last guess is being shown
    if not session.state.is_playing():
        return

    text = update.effective_message.text
    if GuessParser.is_blank(text):
        return

    session.edit_input(text)
    session.submit_guess()

# Handler registration
def register_bot_handlers(application):
    application.add_handler(CommandHandler("start", start_handler))
    application.add_handler(CommandHandler("new", new_word_handler))
    application.add_handler(CommandHandler("score", score_handler))
    application.add_handler(CommandHandler("hint", hint_handler))
    application.add_handler(CommandHandler("quit", quit_handler))
    application.add_handler(MessageHandler(
        filters.UpdateType.MESSAGE & filters.TEXT & ~filters.COMMAND, guess_handler
    ))
