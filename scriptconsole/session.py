"""The console session: history, prompt and transcript state for one console."""

from dataclasses import dataclass

from scriptconsole.config import Config
from scriptconsole.evaluator import Evaluator
from scriptconsole.exception_renderer import render_exception
from scriptconsole.history import HistoryRing
from scriptconsole.line_counter import LineCounter
from scriptconsole.transcript import ConsoleLog, TranscriptSink

NO_EVALUATOR_MESSAGE = "ERROR: No active evaluation context!\n"
INSPECT_FAILED_MESSAGE = "(inspect did not return a string)\n"


@dataclass(frozen=True)
class PromptUpdate:
    """What the UI shows after a submit or reset"""

    prompt: str
    input_text: str
    output: str


@dataclass(frozen=True)
class InputUpdate:
    """Replacement input box content, with the caret at the end"""

    text: str

    @property
    def caret(self) -> int:
        return len(self.text)


class ConsoleSession:
    """
    Owns the state of a single console
    - Command history and live edit
    - Prompt line counter
    - Transcript and its console log
    """

    def __init__(
        self,
        config: Config,
        evaluator: Evaluator | None = None,
        log: ConsoleLog | None = None,
    ):
        self.config = config
        self.evaluator = evaluator
        self.history = HistoryRing()
        self.counter = LineCounter()
        self.transcript = TranscriptSink(log)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, exc_tb):
        self.close()

    # <~~HELPERS~~>
    @property
    def has_evaluator(self) -> bool:
        return self.evaluator is not None

    @property
    def prompt(self) -> str:
        return self.counter.format()

    @property
    def text(self) -> str:
        """The full transcript as displayed"""
        return self.transcript.text

    def bind(self, evaluator: Evaluator):
        self.evaluator = evaluator

    def unbind(self):
        self.evaluator = None

    def _sync_counter(self):
        if self.evaluator is None:
            self.counter.sync(None)
        else:
            self.counter.sync(self.evaluator.line_counter())

    def _update(self, start: int) -> PromptUpdate:
        """Builds the prompt update from everything appended since `start`"""
        return PromptUpdate(self.prompt, "", self.text[start:])

    # <~~OPERATIONS~~>
    def reset(self) -> PromptUpdate:
        """Clear screen, print the preamble and resync the prompt. Also clears history."""
        self.transcript.clear()
        if self.transcript.log:
            self.transcript.log.mark_reset()
        self.transcript.append(self.config.preamble())
        self._sync_counter()
        self.history.reset()
        return self._update(0)

    def submit(self, line: str) -> PromptUpdate:
        """Echo, evaluate and render one line, then return the next prompt"""
        start = len(self.text)
        self.history.push(line)

        if self.evaluator is None:
            self.transcript.append(NO_EVALUATOR_MESSAGE)
            self.counter.sync(None)
            return self._update(start)

        # Echo user input back
        self._sync_counter()
        self.transcript.append(f"{self.prompt} {line}\n")

        value, ok = self.evaluator.evaluate(line)
        if ok:
            text, inspected = self.evaluator.inspect(value)
            if inspected:
                self.transcript.append(f"=> {text}\n")
            else:
                self.transcript.append(INSPECT_FAILED_MESSAGE)
        else:
            try:
                self.transcript.append(
                    render_exception(self.evaluator.current_exception())
                )
            finally:
                # Clear the pending exception so evaluation can continue
                self.evaluator.clear_exception()

        self._sync_counter()
        return self._update(start)

    def navigate_back(self) -> InputUpdate | None:
        text = self.history.back()
        return None if text is None else InputUpdate(text)

    def navigate_forward(self) -> InputUpdate | None:
        text = self.history.forward()
        return None if text is None else InputUpdate(text)

    def note_edit(self, current: str):
        """Feed the post-edit input box content for live-edit capture"""
        self.history.note_live_edit(current)

    def close(self):
        """Flushes and closes the console log, if any"""
        if self.transcript.log:
            self.transcript.log.close()
