import logging, os, sys

FMT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
# aiogram на INFO пишет каждый апдейт
QUIET = ("aiogram.event", "aiosqlite")

def setup_logging(level: str | None = None):
    level_name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    lvl = getattr(logging, level_name, logging.INFO)
    root = logging.getLogger()
    if getattr(setup_logging, "_configured", False):
        root.setLevel(lvl)
        return
    h = logging.StreamHandler(sys.stdout)
    h.setFormatter(logging.Formatter(FMT))
    root.handlers[:] = [h]
    root.setLevel(lvl)
    for name in QUIET:
        logging.getLogger(name).setLevel(max(lvl, logging.WARNING))
    setup_logging._configured = True
