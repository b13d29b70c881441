"""Evaluator capability and the embedded Python evaluator that implements it."""

import ast
import traceback
from itertools import dropwhile
from typing import Any, Protocol

from scriptconsole.exception_renderer import ExceptionRecord
from scriptconsole.globals import log_exception

CONSOLE_FILENAME = "<console>"


class Evaluator(Protocol):
    """What the console session needs from an embedded interpreter"""

    def evaluate(self, line: str) -> tuple[Any, bool]: ...

    def current_exception(self) -> ExceptionRecord: ...

    def clear_exception(self): ...

    def line_counter(self) -> int: ...

    def inspect(self, value: Any) -> tuple[str, bool]: ...


def _format_frame(frame: traceback.FrameSummary) -> str:
    return f"{frame.filename}:{frame.lineno}:in {frame.name}"


class PythonEvaluator:
    """
    Runs console lines as Python in a persistent namespace.
    - Expressions return their value, statements return None
    - Line numbers in tracebacks follow the console counter
    - Exceptions are held until clear_exception() instead of raised
    """

    def __init__(self, namespace: dict | None = None):
        self.namespace: dict = {"__name__": "__console__", "__doc__": None}
        if namespace:
            self.namespace.update(namespace)
        self.lineno: int = 1
        self.exception: ExceptionRecord | None = None

    def _compile(self, source: str):
        """Compiles as an expression if possible, otherwise as statements."""
        try:
            tree = ast.parse(source, CONSOLE_FILENAME, mode="eval")
            mode = "eval"
        except SyntaxError:
            try:
                tree = ast.parse(source, CONSOLE_FILENAME, mode="exec")
            except SyntaxError as e:
                # compile() errors below already carry console line numbers
                if e.lineno:
                    e.lineno += self.lineno - 1
                raise
            mode = "exec"
        ast.increment_lineno(tree, self.lineno - 1)
        return compile(tree, CONSOLE_FILENAME, mode), mode

    def evaluate(self, line: str) -> tuple[Any, bool]:
        self.exception = None
        try:
            code, mode = self._compile(line)
            if mode == "eval":
                result = eval(code, self.namespace)
                if result is not None:
                    self.namespace["_"] = result
            else:
                exec(code, self.namespace)
                result = None
        except (Exception, KeyboardInterrupt, SystemExit) as e:
            self.exception = self._record(e)
            return None, False
        finally:
            self.lineno += max(1, len(line.splitlines()))
        return result, True

    def _record(self, e: BaseException) -> ExceptionRecord:
        """Builds a record from a caught exception, starting at the console code."""
        frames = [
            _format_frame(f)
            for f in dropwhile(
                lambda f: f.filename != CONSOLE_FILENAME,
                traceback.extract_tb(e.__traceback__),
            )
        ]
        try:
            message = str(e)
        except Exception:
            message = "<exception str() failed>"
        if isinstance(e, SyntaxError):
            message = e.msg
            # Errors from parsing the line itself have no frames of their own
            if not frames and e.filename == CONSOLE_FILENAME and e.lineno:
                frames.append(f"{CONSOLE_FILENAME}:{e.lineno}")
        return ExceptionRecord(type(e).__name__, message, tuple(frames))

    def current_exception(self) -> ExceptionRecord:
        if self.exception is None:
            raise RuntimeError("No exception pending")
        return self.exception

    def clear_exception(self):
        self.exception = None

    def line_counter(self) -> int:
        return self.lineno

    def inspect(self, value: Any) -> tuple[str, bool]:
        """repr() of the value, or ("", False) when __repr__ fails or returns a non-string"""
        try:
            return repr(value), True
        except Exception as e:
            log_exception(e, f"repr() failed for {type(value).__name__}")
            return "", False
