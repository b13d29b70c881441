"""Prompt display mirroring the evaluator's statement counter."""

# Shown as 01>> like any other counter, not the bare 1>> of older consoles
DEFAULT_LINE = 1
PROMPT_MARKER = ">>"


class LineCounter:
    """Mirror of the evaluator's line counter, read-only from the session's side"""

    def __init__(self):
        self.value: int = DEFAULT_LINE

    def sync(self, value: int | None):
        """Takes the evaluator's counter, or None when no evaluator is bound."""
        self.value = DEFAULT_LINE if value is None else value

    def format(self) -> str:
        # Output example: 03>>
        return f"{self.value:02d}{PROMPT_MARKER}"
