from aiogram.utils.keyboard import InlineKeyboardBuilder
from aiogram.types import InlineKeyboardMarkup

from .models import Page

def pages_kb(page: Page) -> InlineKeyboardMarkup | None:
    if not (page.has_prev or page.has_next):
        return None
    kb = InlineKeyboardBuilder()
    if page.has_prev:
        kb.button(text="◀️ Назад", callback_data=f"saves:{page.page - 1}")
    if page.has_next:
        kb.button(text="Вперёд ▶️", callback_data=f"saves:{page.page + 1}")
    kb.adjust(2)
    return kb.as_markup()

def toggle_kb(feature: str, enabled: bool) -> InlineKeyboardMarkup:
    kb = InlineKeyboardBuilder()
    if enabled:
        kb.button(text="Выключить", callback_data=f"tg:{feature}:off")
    else:
        kb.button(text="Включить", callback_data=f"tg:{feature}:on")
    return kb.as_markup()
