import os
import aiosqlite
from .config import settings

DB_PATH = settings.db_path

FEATURES = (
    "alwaysonline", "antibot", "antilink", "autorecording",
    "autorespond", "autotyping", "banwords",
)

CREATE_SQL = '''
PRAGMA journal_mode=WAL;
CREATE TABLE IF NOT EXISTS users (
  user_id INTEGER PRIMARY KEY,
  created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);
CREATE TABLE IF NOT EXISTS chat_settings (
  chat_id INTEGER NOT NULL,
  feature TEXT NOT NULL,        -- см. FEATURES
  enabled INTEGER NOT NULL,     -- 0 | 1
  updated_by INTEGER,
  updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
  PRIMARY KEY (chat_id, feature)
);
'''

async def init_db():
    folder = os.path.dirname(DB_PATH)
    if folder:
        os.makedirs(folder, exist_ok=True)
    async with aiosqlite.connect(DB_PATH) as db:
        await db.executescript(CREATE_SQL)
        await db.commit()

async def add_user(user_id: int):
    async with aiosqlite.connect(DB_PATH) as db:
        await db.execute("INSERT OR IGNORE INTO users(user_id) VALUES (?)", (user_id,))
        await db.commit()

async def count_users() -> int:
    async with aiosqlite.connect(DB_PATH) as db:
        cur = await db.execute("SELECT COUNT(*) FROM users")
        row = await cur.fetchone()
        return row[0]

async def set_feature(chat_id: int, feature: str, enabled: bool, user_id: int | None = None):
    if feature not in FEATURES:
        raise ValueError(f"unknown feature: {feature}")
    async with aiosqlite.connect(DB_PATH) as db:
        await db.execute(
            "INSERT INTO chat_settings(chat_id, feature, enabled, updated_by) VALUES (?, ?, ?, ?) "
            "ON CONFLICT(chat_id, feature) DO UPDATE SET enabled=excluded.enabled, "
            "updated_by=excluded.updated_by, updated_at=CURRENT_TIMESTAMP",
            (chat_id, feature, int(enabled), user_id),
        )
        await db.commit()

async def get_features(chat_id: int) -> dict[str, bool]:
    """All known features for the chat; missing rows mean off."""
    result = {f: False for f in FEATURES}
    async with aiosqlite.connect(DB_PATH) as db:
        cur = await db.execute(
            "SELECT feature, enabled FROM chat_settings WHERE chat_id=?", (chat_id,))
        for feature, enabled in await cur.fetchall():
            if feature in result:
                result[feature] = bool(enabled)
    return result
