import asyncio, logging
from .state.store import SaveStore

log = logging.getLogger("savebot.sweep")

class Sweeper:
    """Periodic expiry sweep running on the bot's event loop.

    Uses the store's own lock, so a pass is serialized with ordinary
    requests instead of racing them from a separate thread.
    """

    def __init__(self, store: SaveStore, interval: float = 3600, batch: int = 500,
                 budget: float | None = 2.0):
        self.store = store
        self.interval = interval
        self.batch = batch
        self.budget = budget
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def run_once(self) -> int:
        removed = await self.store.sweep(batch=self.batch, budget=self.budget)
        if removed:
            log.info("Sweep removed %d expired saves", removed)
        return removed

    async def _loop(self):
        while True:
            await asyncio.sleep(self.interval)
            try:
                await self.run_once()
            except Exception:
                # проход упал — следующий всё подчистит
                log.exception("Sweep pass failed")

    def start(self):
        if self.running:
            return
        log.info("Sweeper started, interval=%ss", self.interval)
        self._task = asyncio.create_task(self._loop(), name="savebot-sweep")

    async def stop(self):
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        log.info("Sweeper stopped")
