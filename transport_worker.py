import logging
import queue
import threading

from errors import TransportError

logger = logging.getLogger(__name__)


def _log_unexpected(exc):
    if not isinstance(exc, TransportError):
        logger.error("store call failed unexpectedly", exc_info=exc)


class InlineRunner:
    """Runs store calls on the calling thread and completes them immediately."""

    def submit(self, fn, on_done, on_error):
        try:
            result = fn()
        except Exception as exc:
            _log_unexpected(exc)
            on_error(exc)
            return
        on_done(result)

    def drain(self) -> int:
        return 0

    def join(self, timeout=None) -> bool:
        return True


class TransportWorker:
    """Runs store calls on daemon threads.

    Completions are queued and only applied when the host loop calls
    ``drain()``, so session state is never touched off the host thread.
    """

    def __init__(self):
        self._results = queue.Queue()
        self._threads: list[threading.Thread] = []
        self._lock = threading.Lock()

    def submit(self, fn, on_done, on_error):
        t = threading.Thread(target=self._run, args=(fn, on_done, on_error), daemon=True)
        with self._lock:
            self._threads = [th for th in self._threads if th.is_alive()]
            self._threads.append(t)
        t.start()

    def _run(self, fn, on_done, on_error):
        try:
            result = fn()
        except Exception as exc:
            _log_unexpected(exc)
            self._results.put((on_error, exc))
        else:
            self._results.put((on_done, result))

    def drain(self) -> int:
        handled = 0
        while True:
            try:
                callback, value = self._results.get_nowait()
            except queue.Empty:
                break
            callback(value)
            handled += 1
        return handled

    def join(self, timeout=None) -> bool:
        with self._lock:
            threads = list(self._threads)
        for t in threads:
            t.join(timeout)
        with self._lock:
            self._threads = [th for th in self._threads if th.is_alive()]
            return not self._threads
