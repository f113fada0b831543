from __future__ import annotations

from datetime import datetime, timedelta, timezone

from savebot.models import Page, Preview, RecordView, TtlSpec
from savebot.post.template import MAX_MESSAGE, make_page, make_record, make_saved
from savebot.utils.args import parse_page, parse_save_args

NOW = datetime(2026, 3, 1, 9, 30, tzinfo=timezone.utc)


def test_plain_text():
    args = parse_save_args("buy milk")
    assert args.content == "buy milk"
    assert args.ttl is None
    assert not args.is_public
    assert args.tags == []


def test_options_in_any_order_then_content():
    args = parse_save_args("public #shop 2h #home buy milk\nand bread")
    assert args.is_public
    assert args.ttl == TtlSpec(2, "hour")
    assert args.tags == ["shop", "home"]
    assert args.content == "buy milk\nand bread"


def test_options_stop_at_first_content_word():
    args = parse_save_args("note 2h #tag")
    assert args.content == "note 2h #tag"
    assert args.ttl is None


def test_second_ttl_is_content():
    args = parse_save_args("1d 2h")
    assert args.ttl == TtlSpec(1, "day")
    assert args.content == "2h"


def test_options_only():
    args = parse_save_args("private 30m")
    assert args.content == ""
    assert args.ttl == TtlSpec(30, "minute")


def test_empty_args():
    assert parse_save_args(None).content == ""


def test_parse_page():
    assert parse_page("3") == 3
    assert parse_page("0") == 1
    assert parse_page("abc") == 1
    assert parse_page(None) == 1


def test_make_saved_escapes_html():
    text = make_saved("SAVE-ABC234", NOW, "<b>hi</b>", is_public=True)
    assert "SAVE-ABC234" in text
    assert "&lt;b&gt;hi&lt;/b&gt;" in text
    assert "01.03.2026 09:30 UTC" in text
    assert "Публичное" in text


def test_make_record():
    rec = RecordView(
        id="SAVE-ABC234", content="a < b", owner_id="1", created_at=NOW,
        expires_at=NOW + timedelta(days=7), tags=("x",), is_public=False,
        views=3, last_accessed=NOW,
    )
    text = make_record(rec)
    assert "<pre>a &lt; b</pre>" in text
    assert "#x" in text
    assert "Просмотров:</b> 3" in text
    assert "Приватное" in text


def test_make_page_variants():
    assert "нет сохранений" in make_page(Page())
    empty = Page(items=[], page=5, limit=10, total=3, total_pages=1, has_prev=True)
    assert "пуста" in make_page(empty)

    item = Preview(id="SAVE-ABC234", preview="hello", created_at=NOW,
                   expires_at=NOW, tags=(), views=0)
    full = Page(items=[item], page=1, limit=10, total=1, total_pages=1)
    text = make_page(full)
    assert "SAVE-ABC234" in text and "hello" in text


def _long_record(content: str) -> RecordView:
    return RecordView(
        id="SAVE-ABC234", content=content, owner_id="1", created_at=NOW,
        expires_at=NOW + timedelta(days=7), tags=("a",) * 200, is_public=False,
        views=1, last_accessed=NOW,
    )


def test_make_record_fits_message_limit():
    text = make_record(_long_record("<&>" * 3000))
    assert len(text.encode("utf-16-le")) // 2 <= MAX_MESSAGE
    assert "всего символов: 9000" in text
    # never cut inside an HTML entity
    body = text.split("<pre>", 1)[1].split("</pre>", 1)[0]
    assert body.endswith("&gt;…") or body.endswith("&lt;…") or body.endswith("&amp;…")


def test_make_record_fits_with_wide_characters():
    text = make_record(_long_record("😀" * 4000))
    assert len(text.encode("utf-16-le")) // 2 <= MAX_MESSAGE


def test_make_record_short_content_is_untouched():
    text = make_record(_long_record("short"))
    assert "<pre>short</pre>" in text
    assert "всего символов" not in text


def test_make_page_fits_message_limit():
    items = [
        Preview(id=f"SAVE-AAAA{i:02d}", preview="x" * 103, created_at=NOW,
                expires_at=NOW, tags=("tag",) * 30, views=0)
        for i in range(50)
    ]
    text = make_page(Page(items=items, page=1, limit=50, total=50, total_pages=1))
    assert len(text) <= MAX_MESSAGE
    assert text.endswith("…")
