from aiogram import Router, types, F
from aiogram.filters import Command, CommandObject
from ..db import FEATURES, get_features, set_feature
from ..keyboards import toggle_kb

router = Router()

ON = {"on", "1", "yes", "вкл"}
OFF = {"off", "0", "no", "выкл"}

def features_text(flags: dict[str, bool]) -> str:
    lines = ["⚙️ Функции чата:"]
    for name in FEATURES:
        lines.append(f"{'✅' if flags.get(name) else '❌'} {name}")
    lines.append("\nИзменить: /toggle функция on|off")
    return "\n".join(lines)

@router.message(Command("settings"))
async def settings_cmd(m: types.Message):
    flags = await get_features(m.chat.id)
    await m.answer(features_text(flags))

@router.message(Command("toggle"))
async def toggle_cmd(m: types.Message, command: CommandObject):
    parts = (command.args or "").lower().split()
    if not parts or parts[0] not in FEATURES:
        await m.answer("Доступные функции: " + ", ".join(FEATURES)); return
    feature = parts[0]
    if len(parts) < 2:
        flags = await get_features(m.chat.id)
        state = flags[feature]
        await m.answer(f"{feature}: {'вкл' if state else 'выкл'}", reply_markup=toggle_kb(feature, state))
        return
    if parts[1] in ON:
        enabled = True
    elif parts[1] in OFF:
        enabled = False
    else:
        await m.answer("Укажите on или off"); return
    await set_feature(m.chat.id, feature, enabled, m.from_user.id)
    await m.answer(f"{feature}: {'включено ✅' if enabled else 'выключено ❌'}")

@router.callback_query(F.data.startswith("tg:"))
async def toggle_cb(cq: types.CallbackQuery):
    try:
        _, feature, value = (cq.data or "").split(":")
    except ValueError:
        await cq.answer("Некорректная кнопка", show_alert=True); return
    if feature not in FEATURES:
        await cq.answer("Неизвестная функция", show_alert=True); return
    enabled = value == "on"
    await set_feature(cq.message.chat.id, feature, enabled, cq.from_user.id)
    await cq.answer("Сохранено")
    await cq.message.edit_text(f"{feature}: {'вкл' if enabled else 'выкл'}",
                               reply_markup=toggle_kb(feature, enabled))
