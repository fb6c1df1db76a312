"""Telegram trigger: resolve each text message and reply with the skill template."""
import asyncio

from telegram import Update
from telegram.error import NetworkError
from telegram.ext import Application, CommandHandler, ContextTypes, MessageHandler, filters

from skillrouter.config import (
    TELEGRAM_ALLOWED_USER_ID,
    TELEGRAM_BOT_TOKEN,
    TELEGRAM_CONNECT_TIMEOUT,
    TELEGRAM_PROXY,
    TELEGRAM_READ_TIMEOUT,
)
from skillrouter.gateway import handle_message
from skillrouter.logging_utils import get_logger
from skillrouter.skills import SkillRouterError, get_catalog

logger = get_logger(__name__)


def _is_allowed(update: Update) -> bool:
    user_id = update.effective_user.id if update.effective_user else None
    return TELEGRAM_ALLOWED_USER_ID is None or user_id == TELEGRAM_ALLOWED_USER_ID


async def _reply(update: Update, text: str) -> None:
    try:
        await update.message.reply_text(text)
    except NetworkError as e:
        logger.warning("telegram_network_error_reply", error=str(e))


async def handle_telegram_message(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    if not update.message or not update.message.text:
        return
    if not _is_allowed(update):
        await _reply(update, "Unauthorized.")
        return
    text = update.message.text.strip()
    try:
        loop = asyncio.get_running_loop()
        reply, _ = await loop.run_in_executor(None, lambda: handle_message(text, trigger="telegram"))
    except SkillRouterError as e:
        logger.error("telegram_registry_error", error=str(e))
        await _reply(update, f"Skill registry is unavailable: {e}")
        return
    except Exception as e:
        logger.exception("telegram_handler_error")
        await _reply(update, f"Something went wrong: {e!s}")
        return
    await _reply(update, reply)


async def handle_refresh(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """/refresh: load the skills directory again and swap the snapshot in."""
    if not update.message or not _is_allowed(update):
        return
    try:
        loop = asyncio.get_running_loop()
        registry = await loop.run_in_executor(None, get_catalog().refresh)
    except SkillRouterError as e:
        logger.error("telegram_refresh_failed", error=str(e))
        await _reply(update, f"Refresh failed, keeping the previous skills: {e}")
        return
    await _reply(update, f"Reloaded {len(registry)} skills.")


async def handle_list(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """/skills: list the ids in the current snapshot."""
    if not update.message or not _is_allowed(update):
        return
    try:
        registry = get_catalog().current()
    except SkillRouterError as e:
        await _reply(update, f"Skill registry is unavailable: {e}")
        return
    lines = [f"{skill_id} ({registry[skill_id].category.value})" for skill_id in sorted(registry)]
    await _reply(update, "\n".join(lines) or "No skills loaded.")


def run_telegram() -> None:
    """Start the Telegram bot with long-polling."""
    builder = (
        Application.builder()
        .token(TELEGRAM_BOT_TOKEN)
        .connect_timeout(TELEGRAM_CONNECT_TIMEOUT)
        .read_timeout(TELEGRAM_READ_TIMEOUT)
        .get_updates_connect_timeout(TELEGRAM_CONNECT_TIMEOUT)
        .get_updates_read_timeout(TELEGRAM_READ_TIMEOUT)
    )
    if TELEGRAM_PROXY:
        builder = builder.proxy(TELEGRAM_PROXY).get_updates_proxy(TELEGRAM_PROXY)

    # Fail fast if we cannot reach Telegram after a few retries (e.g. proxy/firewall/DNS)
    _max_startup_retries = 3
    _startup_retry_delay_s = 2.0

    async def post_init(application: Application) -> None:
        # Surface broken skill documents before accepting messages
        get_catalog().current()
        for attempt in range(1, _max_startup_retries + 1):
            try:
                await application.bot.get_me()
                return
            except NetworkError as e:
                if attempt < _max_startup_retries:
                    logger.warning(
                        "telegram_startup_retry",
                        attempt=attempt,
                        max=_max_startup_retries,
                        error=str(e),
                    )
                    await asyncio.sleep(_startup_retry_delay_s)
                else:
                    logger.error("telegram_startup_connection_failed", error=str(e))
                    raise RuntimeError(
                        "Cannot reach Telegram API after %d attempts. "
                        "Check TELEGRAM_PROXY, firewall, and DNS." % _max_startup_retries
                    ) from e

    app = builder.post_init(post_init).build()
    app.add_handler(CommandHandler("refresh", handle_refresh))
    app.add_handler(CommandHandler("skills", handle_list))
    app.add_handler(MessageHandler(filters.TEXT & ~filters.COMMAND, handle_telegram_message))
    app.run_polling(allowed_updates=Update.ALL_TYPES, bootstrap_retries=_max_startup_retries)
