"""Command history with live-edit preservation."""


class HistoryRing:
    """
    Submitted commands plus a cursor into them.

    The cursor ranges over [0, len(entries)]. len(entries) is the live
    position: the command still being typed, which is kept in live_edit
    so that walking back through history and returning does not lose it.
    """

    def __init__(self):
        self.entries: list[str] = []
        self.cursor: int = 0
        self.live_edit: str = ""

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    @property
    def at_live_edit(self) -> bool:
        """True while the cursor sits past the newest entry"""
        return self.cursor == len(self.entries)

    def push(self, command: str):
        """Remember a submitted command and return to the live position"""
        self.entries.append(command)
        self.cursor = len(self.entries)
        self.live_edit = ""

    def note_live_edit(self, current: str):
        """Record the in-progress command, only while at the live position"""
        if self.at_live_edit:
            self.live_edit = current

    def back(self) -> str | None:
        """Returns the previous command, or None when already at the oldest."""
        if self.cursor > 0:
            self.cursor -= 1
            return self.entries[self.cursor]
        return None

    def forward(self) -> str | None:
        """
        Returns the next command, or None when already at the live position.\n
        Stepping onto the live position restores live_edit.
        """
        if self.at_live_edit:
            return None
        self.cursor += 1
        if self.at_live_edit:
            return self.live_edit
        return self.entries[self.cursor]

    def reset(self):
        """Forget all commands"""
        self.entries = []
        self.cursor = 0
        self.live_edit = ""
