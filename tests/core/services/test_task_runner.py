import threading

from outline_navigator.core.services.task_runner import InlineTaskRunner, ThreadedTaskRunner


def test_inline_runner_reports_success_and_error():
    runner = InlineTaskRunner()
    results, errors = [], []

    runner.submit(lambda: 42, results.append, errors.append)
    runner.submit(lambda: 1 / 0, results.append, errors.append)

    assert results == [42]
    assert len(errors) == 1 and isinstance(errors[0], ZeroDivisionError)


def test_threaded_runner_delivers_through_dispatch():
    dispatched = []
    done = threading.Event()
    outcome = {}

    def dispatch(fn):
        dispatched.append(fn)
        fn()
        done.set()

    runner = ThreadedTaskRunner(dispatch=dispatch)
    runner.submit(lambda: "outline", lambda r: outcome.setdefault("result", r), lambda e: outcome.setdefault("error", e))

    assert done.wait(timeout=5)
    assert outcome == {"result": "outline"}
    assert len(dispatched) == 1


def test_threaded_runner_reports_errors_once():
    done = threading.Event()
    errors = []

    def on_error(exc):
        errors.append(exc)
        done.set()

    def work():
        raise OSError("disk gone")

    ThreadedTaskRunner().submit(work, lambda r: None, on_error)

    assert done.wait(timeout=5)
    assert len(errors) == 1 and isinstance(errors[0], OSError)
