# savebot/post/template.py
from __future__ import annotations
from datetime import datetime
from html import escape

from ..models import Page, RecordView

def _fmt_dt(dt: datetime | None) -> str:
    if dt is None:
        return "—"
    return dt.strftime("%d.%m.%Y %H:%M UTC")

def _smart_trim(text: str, limit: int = 100) -> str:
    """Обрезаем по границе слов, без «оборванных» окончаний."""
    t = " ".join((text or "").split())
    if len(t) <= limit:
        return t
    cut = t[:limit].rstrip()
    p = cut.rfind(" ")
    if p >= int(limit * 0.6):
        return cut[:p].rstrip() + "…"
    return cut + "…"

# лимит Telegram на длину сообщения
MAX_MESSAGE = 4096
MAX_TAGS_LINE = 300

def _tags(tags) -> str:
    return escape(_smart_trim(" ".join(f"#{t}" for t in tags), MAX_TAGS_LINE))

def _u16(s: str) -> int:
    return len(s.encode("utf-16-le")) // 2

def _fit_escaped(text: str, limit: int) -> tuple[str, bool]:
    """Escape ``text`` and cut it to at most ``limit`` UTF-16 units (as Telegram counts)."""
    full = escape(text)
    if _u16(full) <= limit:
        return full, False
    out, size = [], 0
    for ch in text:
        e = escape(ch)
        if size + _u16(e) > limit - 1:
            break
        out.append(e)
        size += _u16(e)
    return "".join(out) + "…", True

def make_saved(code: str, expires_at: datetime, content: str, is_public: bool = False) -> str:
    parts = [
        "💾 <b>Сохранено!</b>",
        f"📦 <b>Код:</b> <code>{escape(code)}</code>",
        f"📅 <b>Истекает:</b> {_fmt_dt(expires_at)}",
        "🌐 Публичное" if is_public else "🔒 Приватное",
        f"📝 <b>Превью:</b> {escape(_smart_trim(content))}",
        f"🔗 Получить: <code>/get {escape(code)}</code>",
    ]
    return "\n".join(parts)

def make_record(rec: RecordView) -> str:
    parts = [
        f"📂 <b>Сохранение {escape(rec.id)}</b>",
        f"📅 <b>Создано:</b> {_fmt_dt(rec.created_at)}",
        f"⏰ <b>Истекает:</b> {_fmt_dt(rec.expires_at)}",
        f"👁️ <b>Просмотров:</b> {rec.views}",
    ]
    if rec.tags:
        parts.append(f"🏷️ <b>Теги:</b> {_tags(rec.tags)}")
    head = "\n".join(parts)
    footer = "🌐 Публичное" if rec.is_public else "🔒 Приватное"
    note = f"✂️ Показано начало, всего символов: {len(rec.content)}"
    # эмодзи в UTF-16 длиннее, поэтому с запасом
    room = MAX_MESSAGE - len(head) - len(footer) - len(note) - len("\n\n<pre></pre>\n\n") - 64
    body, cut = _fit_escaped(rec.content, max(room, 0))
    tail = [footer, note] if cut else [footer]
    return "\n".join([head, f"\n<pre>{body}</pre>", *tail])

def make_page(page: Page) -> str:
    if not page.total:
        return "У вас пока нет сохранений. Отправьте /save текст, чтобы добавить."
    if not page.items:
        return f"Страница {page.page} пуста (всего страниц: {page.total_pages})."
    lines = [f"🗂 <b>Ваши сохранения</b> ({page.total}), стр. {page.page}/{page.total_pages}:"]
    size = len(lines[0])
    for it in page.items:
        line = f"\n<code>{escape(it.id)}</code> • 👁️ {it.views} • до {_fmt_dt(it.expires_at)}"
        if it.tags:
            line += f" • {_tags(it.tags)}"
        chunk = line + "\n" + escape(it.preview)
        if size + len(chunk) + 64 > MAX_MESSAGE:
            lines.append("\n…")
            break
        lines.append(chunk)
        size += len(chunk) + 1
    return "\n".join(lines)
