import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv(os.path.join(os.getcwd(), ".env"))

@dataclass
class Settings:
    bot_token: str = os.getenv("BOT_TOKEN", "")
    db_path: str = os.getenv("DB_PATH", "data/db.sqlite3")
    sweep_interval: float = float(os.getenv("SWEEP_INTERVAL", "3600"))
    sweep_batch: int = int(os.getenv("SWEEP_BATCH", "500"))
    sweep_budget: float = float(os.getenv("SWEEP_BUDGET", "2.0"))
    owner_cap: int = int(os.getenv("OWNER_CAP", "50"))
    max_content: int = int(os.getenv("MAX_CONTENT", "10000"))
    preview_len: int = int(os.getenv("PREVIEW_LEN", "100"))
    page_limit: int = int(os.getenv("PAGE_LIMIT", "10"))
    code_prefix: str = os.getenv("CODE_PREFIX", "SAVE")

settings = Settings()
