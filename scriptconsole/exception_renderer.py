"""Converts evaluator-reported exceptions into transcript text."""

from dataclasses import dataclass, field

FRAME_PREFIX = "    from "


@dataclass(frozen=True)
class ExceptionRecord:
    """An exception as reported by an evaluator after a failed evaluation"""

    class_name: str
    message: str
    frames: tuple[str, ...] = field(default_factory=tuple)


def render_exception(record: ExceptionRecord) -> str:
    """
    Renders a record as newline-terminated transcript lines:\n
    RuntimeError: boom
        from main.rb:3
    """
    lines = [f"{record.class_name}: {record.message}\n"]
    for frame in record.frames:
        lines.append(f"{FRAME_PREFIX}{frame}\n")
    return "".join(lines)
