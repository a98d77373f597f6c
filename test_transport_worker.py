import pytest

from errors import TransportError
from transport_worker import InlineRunner, TransportWorker


def _fail():
    raise TransportError("down")


def _crash():
    raise ValueError("bug")


def test_inline_runner_completes_immediately():
    done, failed = [], []
    InlineRunner().submit(lambda: 5, done.append, failed.append)

    assert done == [5]
    assert failed == []


def test_inline_runner_reports_transport_errors():
    done, failed = [], []
    InlineRunner().submit(_fail, done.append, failed.append)

    assert done == []
    assert isinstance(failed[0], TransportError)


def test_inline_runner_reports_unexpected_errors():
    done, failed = [], []
    InlineRunner().submit(_crash, done.append, failed.append)

    assert done == []
    assert isinstance(failed[0], ValueError)


def test_inline_runner_lets_callback_errors_propagate():
    def on_done(_):
        raise RuntimeError("callback")

    with pytest.raises(RuntimeError):
        InlineRunner().submit(lambda: 1, on_done, lambda _: None)


def test_worker_defers_callbacks_until_drain():
    worker = TransportWorker()
    done = []
    worker.submit(lambda: "rows", done.append, lambda _: None)

    assert worker.join(timeout=5)
    assert done == []
    assert worker.drain() == 1
    assert done == ["rows"]
    assert worker.drain() == 0


def test_worker_routes_transport_errors():
    worker = TransportWorker()
    done, failed = [], []
    worker.submit(_fail, done.append, failed.append)
    worker.join(timeout=5)

    worker.drain()

    assert done == []
    assert str(failed[0]) == "down"


def test_worker_routes_unexpected_errors():
    worker = TransportWorker()
    done, failed = [], []
    worker.submit(_crash, done.append, failed.append)
    worker.join(timeout=5)

    assert worker.drain() == 1
    assert done == []
    assert str(failed[0]) == "bug"
