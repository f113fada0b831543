# savebot/handlers/save.py
from __future__ import annotations
import logging
from aiogram import Router, types, F
from aiogram.filters import Command, CommandObject

from ..db import count_users
from ..keyboards import pages_kb
from ..post.template import make_page, make_record, make_saved
from ..state.errors import AccessDenied, Expired, NotFound, StoreError, ValidationError
from ..state.store import SaveStore
from ..utils.args import parse_page, parse_save_args

router = Router()
log = logging.getLogger("savebot.handlers.save")

SAVE_USAGE = "Что сохранить? Пример: <code>/save 2h #заметки текст</code> или ответьте /save на сообщение."
GET_USAGE = "Укажите код: <code>/get SAVE-XXXXXX</code>"

def error_text(e: StoreError) -> str:
    if isinstance(e, ValidationError):
        if e.code == "MISSING_CONTENT":
            return SAVE_USAGE
        if e.code == "CONTENT_TOO_LARGE":
            return "Слишком длинный текст 😔 " + e.message
        return "Некорректный запрос: " + e.message
    if isinstance(e, Expired):
        return "⌛ Срок хранения истёк, сохранение удалено."
    if isinstance(e, NotFound):
        return "Такого кода нет (или он уже истёк)."
    if isinstance(e, AccessDenied):
        return "🔒 Это приватное сохранение, его видит только автор."
    return "Что-то пошло не так: " + e.message

@router.message(Command("save"))
async def save_cmd(m: types.Message, command: CommandObject, store: SaveStore):
    args = parse_save_args(command.args)
    content = args.content
    reply = m.reply_to_message
    if not content and reply is not None:
        content = reply.text or reply.caption or ""
    try:
        res = await store.put(content, str(m.from_user.id), ttl=args.ttl,
                              tags=args.tags, is_public=args.is_public)
    except StoreError as e:
        await m.answer(error_text(e)); return
    log.info("User %s saved %s", m.from_user.id, res.code)
    await m.answer(make_saved(res.code, res.expires_at, content, args.is_public))

@router.message(Command("get"))
async def get_cmd(m: types.Message, command: CommandObject, store: SaveStore):
    code = (command.args or "").strip()
    if not code:
        await m.answer(GET_USAGE); return
    try:
        rec = await store.get(code.split()[0], str(m.from_user.id))
    except StoreError as e:
        await m.answer(error_text(e)); return
    await m.answer(make_record(rec))

@router.message(Command("mysaves"))
async def mysaves_cmd(m: types.Message, command: CommandObject, store: SaveStore):
    page = await store.list(str(m.from_user.id), parse_page(command.args))
    await m.answer(make_page(page), reply_markup=pages_kb(page))

@router.callback_query(F.data.startswith("saves:"))
async def saves_page(cq: types.CallbackQuery, store: SaveStore):
    try:
        n = int((cq.data or "").split(":", 1)[1])
    except (IndexError, ValueError):
        await cq.answer("Некорректная кнопка", show_alert=True); return
    page = await store.list(str(cq.from_user.id), n)
    await cq.answer()
    await cq.message.edit_text(make_page(page), reply_markup=pages_kb(page))

@router.message(Command("stats"))
async def stats_cmd(m: types.Message, store: SaveStore):
    st = await store.stats()
    users = await count_users()
    await m.answer(f"📊 Сохранений: {st['records']}, авторов: {st['owners']}, пользователей бота: {users}")
