# savebot/main.py
from __future__ import annotations
import logging
from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode
from .config import Settings, settings
from .db import init_db
from .handlers import save, settings as chat_settings, start
from .scheduler import Sweeper
from .state.store import SaveStore
from .utils.logging import setup_logging

log = logging.getLogger("savebot.main")

def build_store(cfg: Settings = settings) -> SaveStore:
    return SaveStore(
        max_content=cfg.max_content,
        owner_cap=cfg.owner_cap,
        preview_len=cfg.preview_len,
        page_limit=cfg.page_limit,
        code_prefix=cfg.code_prefix,
    )

def build_dispatcher(store: SaveStore, sweeper: Sweeper) -> Dispatcher:
    # store попадает в хендлеры через workflow data (аргумент ``store``)
    dp = Dispatcher(store=store)
    dp.include_routers(start.router, save.router, chat_settings.router)

    async def on_startup():
        await init_db()
        sweeper.start()

    async def on_shutdown():
        await sweeper.stop()
        await store.clear()

    dp.startup.register(on_startup)
    dp.shutdown.register(on_shutdown)
    return dp

def main():
    setup_logging()
    if not settings.bot_token:
        raise SystemExit("BOT_TOKEN is not set (see .env)")
    store = build_store()
    sweeper = Sweeper(store, interval=settings.sweep_interval,
                      batch=settings.sweep_batch, budget=settings.sweep_budget)
    log.info("Bot is running… sweep every %ss, cap %d per owner",
             settings.sweep_interval, settings.owner_cap)
    bot = Bot(token=settings.bot_token, default=DefaultBotProperties(parse_mode=ParseMode.HTML))
    dp = build_dispatcher(store, sweeper)
    dp.run_polling(bot)

if __name__ == "__main__":
    main()
