"""
Console session tests, driven by a scripted evaluator.

- Submission echo, results and exceptions
- Degraded behaviour without an evaluator
- Reset and the console log
"""

import pytest

from scriptconsole.config import Config
from scriptconsole.exception_renderer import ExceptionRecord
from scriptconsole.session import (
    INSPECT_FAILED_MESSAGE,
    NO_EVALUATOR_MESSAGE,
    ConsoleSession,
    InputUpdate,
)
from scriptconsole.transcript import ConsoleLog


class ScriptedEvaluator:
    """Evaluator stand-in that replays queued outcomes, one per evaluate()"""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.lineno = 1
        self.exception: ExceptionRecord | None = None
        self.evaluated: list[str] = []
        self.cleared = 0

    def evaluate(self, line):
        self.evaluated.append(line)
        self.lineno += 1
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, ExceptionRecord):
            self.exception = outcome
            return None, False
        return outcome, True

    def current_exception(self):
        return self.exception

    def clear_exception(self):
        self.exception = None
        self.cleared += 1

    def line_counter(self):
        return self.lineno

    def inspect(self, value):
        if value is UNINSPECTABLE:
            return "", False
        return str(value), True


UNINSPECTABLE = object()
BOOM = ExceptionRecord("RuntimeError", "boom", ("main.rb:3",))


@pytest.fixture
def config():
    cfg = Config()
    cfg.build_year = 2026
    return cfg


# 1. Submission


def test_submit_success(config):
    evaluator = ScriptedEvaluator(2)
    session = ConsoleSession(config, evaluator)

    update = session.submit("1+1")

    assert update.output == "01>> 1+1\n=> 2\n"
    assert update.prompt == "02>>"
    assert update.input_text == ""
    assert session.prompt == "02>>"
    assert session.text.endswith(">> 1+1\n=> 2\n")


def test_submit_exception_then_recover(config):
    evaluator = ScriptedEvaluator(BOOM, "ok")
    session = ConsoleSession(config, evaluator)

    update = session.submit("raise X")
    assert update.output == "01>> raise X\nRuntimeError: boom\n    from main.rb:3\n"
    assert evaluator.exception is None
    assert evaluator.cleared == 1

    update = session.submit("'ok'")
    assert update.output == "02>> 'ok'\n=> ok\n"
    assert update.prompt == "03>>"


def test_submit_uninspectable_result(config):
    session = ConsoleSession(config, ScriptedEvaluator(UNINSPECTABLE))
    update = session.submit("thing")
    assert update.output == "01>> thing\n" + INSPECT_FAILED_MESSAGE


def test_submit_without_evaluator(config):
    session = ConsoleSession(config)
    session.reset()
    before = session.text

    update = session.submit("puts 1")

    assert update.output == NO_EVALUATOR_MESSAGE
    assert session.text == before + NO_EVALUATOR_MESSAGE
    assert list(session.history) == ["puts 1"]
    assert update.prompt == "01>>"


def test_submit_records_history(config):
    session = ConsoleSession(config, ScriptedEvaluator(1, 2))
    session.note_edit("1")
    session.submit("1")
    session.submit("2")
    assert list(session.history) == ["1", "2"]
    assert session.history.at_live_edit
    assert session.history.live_edit == ""


def test_bind_and_unbind(config):
    session = ConsoleSession(config)
    assert not session.has_evaluator
    evaluator = ScriptedEvaluator(5)
    session.bind(evaluator)
    assert session.has_evaluator
    assert session.submit("5").output.endswith("=> 5\n")
    session.unbind()
    assert session.submit("5").output == NO_EVALUATOR_MESSAGE
    assert evaluator.evaluated == ["5"]


# 2. Navigation


def test_navigation_returns_input_updates(config):
    session = ConsoleSession(config, ScriptedEvaluator(1, 2))
    session.submit("first")
    session.submit("second")
    session.note_edit("thi")

    update = session.navigate_back()
    assert update == InputUpdate("second")
    assert update.caret == len("second")
    assert session.navigate_back() == InputUpdate("first")
    assert session.navigate_back() is None
    assert session.navigate_forward() == InputUpdate("second")
    assert session.navigate_forward() == InputUpdate("thi")
    assert session.navigate_forward() is None


# 3. Reset


def test_reset_prints_preamble_and_clears_history(config):
    evaluator = ScriptedEvaluator(1)
    session = ConsoleSession(config, evaluator)
    session.submit("1")

    update = session.reset()

    assert update.output == config.preamble()
    assert session.text == config.preamble()
    assert len(session.history) == 0
    assert update.prompt == "02>>"


def test_reset_without_evaluator_falls_back(config):
    session = ConsoleSession(config)
    first = session.reset()
    second = session.reset()
    assert first == second
    assert first.prompt == "01>>"


def test_session_mirrors_console_log(config, tmp_path):
    log_path = tmp_path / "console.log"
    with ConsoleSession(config, ScriptedEvaluator(2), ConsoleLog(str(log_path))) as session:
        session.reset()
        session.submit("1+1")

    content = log_path.read_text(encoding="utf-8")
    assert content.startswith("--- Logfile opened on ")
    assert "\n--- Console Reset ---\n" + config.preamble() in content
    assert "01>> 1+1\n=> 2\n" in content
    assert content.rstrip("\n").splitlines()[-1].startswith("--- Logfile closed on ")
    assert session.transcript.log.closed
