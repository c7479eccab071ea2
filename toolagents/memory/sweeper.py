import logging
import threading
from typing import Optional

from .store import KnowledgeStore

logger = logging.getLogger(__name__)


class ExpirySweeper:
    """
    Background thread that purges expired knowledge nodes on a fixed
    cadence.

    Reads already hide expired nodes, so the sweep only reclaims
    memory. The store takes its lock once per removed node, which keeps
    concurrent readers from stalling behind a long sweep.
    """

    def __init__(self, store: KnowledgeStore, interval: float = 60.0) -> None:
        if interval <= 0:
            raise ValueError("Sweep interval must be positive")

        self._store = store
        self._interval = interval
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return

        self._stop.clear()
        self._thread = threading.Thread(
            target=self._run,
            name="knowledge-expiry-sweeper",
            daemon=True,
        )
        self._thread.start()
        logger.info("[SWEEPER] Started | interval=%.1fs", self._interval)

    def stop(self, timeout: Optional[float] = 5.0) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
            logger.info("[SWEEPER] Stopped")

    def run_once(self) -> int:
        return self._store.sweep_expired()

    def _run(self) -> None:
        while not self._stop.wait(self._interval):
            try:
                self.run_once()
            except Exception:
                logger.exception("[SWEEPER] Sweep failed")
