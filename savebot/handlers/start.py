from aiogram import Router, types
from aiogram.filters import CommandStart, Command
from ..db import add_user

router = Router()

WELCOME = (
    "Привет! Я сохраняю текст и выдаю короткий код, по которому его можно достать.\n\n"
    "Команды:\n"
    "/save [срок] [public] [#тег] текст — сохранить (или ответьте /save на сообщение)\n"
    "/get КОД — получить сохранение\n"
    "/mysaves [стр] — список ваших сохранений\n"
    "/settings — функции чата, /toggle функция on|off\n"
    "/help — подсказка\n\n"
    "Срок: 30m, 2h, 7d (по умолчанию 7 дней). Храню до 50 записей на человека, "
    "старые вытесняются. Приватные сохранения видит только автор."
)

@router.message(CommandStart())
async def start(m: types.Message):
    await add_user(m.from_user.id)
    await m.answer(WELCOME)

@router.message(Command("help"))
async def help_cmd(m: types.Message):
    await m.answer(WELCOME)
