#!/usr/bin/env python3

# <~~~~~~~~~~~~~~>
#  SCRIPT CONSOLE
# <~~~~~~~~~~~~~~>

"""Terminal host: decodes key events for the console session and shows its output."""

import sys

import pyperclip
from prompt_toolkit import PromptSession
from prompt_toolkit.buffer import Buffer
from prompt_toolkit.document import Document
from prompt_toolkit.key_binding import KeyBindings

from scriptconsole.config import Config
from scriptconsole.evaluator import PythonEvaluator
from scriptconsole.globals import (
    COMMAND_COMPLETER,
    COMPLETER_STYLER,
    CONSOLE,
    RESULT_PATTERN,
    init_logger,
    log_exception,
    prompt_prefix,
)
from scriptconsole.session import ConsoleSession, InputUpdate
from scriptconsole.transcript import ConsoleLog
from scriptconsole.ui import GlobalPanels, UIConstructor


class ConsoleApp:
    """Runs the prompt loop and handles all meta command input"""

    def __init__(self, config: Config, session: ConsoleSession, panel: GlobalPanels):
        self.config = config
        self.session = session
        self.panel = panel
        self.running: bool = False

        # Command dict
        self.commands = {
            "!h": self.panel.spawn_help_chart,
            "!help": self.panel.spawn_help_chart,
            "!config": self.panel.spawn_settings_chart,
            "!reset": self.reset_console,
            "!clear": CONSOLE.clear,
            "!cp": self.copy_last_result,
            "!q": self.quit,
            "!quit": self.quit,
        }

        self.prompt_session = PromptSession(
            key_bindings=self._key_bindings(),
            completer=COMMAND_COMPLETER,
            complete_while_typing=False,
            style=COMPLETER_STYLER,
        )
        self.prompt_session.default_buffer.on_text_changed += self._on_text_changed

    # <~~KEY EVENTS~~>
    def _key_bindings(self) -> KeyBindings:
        """Up and Down walk the session's history instead of prompt_toolkit's"""
        bindings = KeyBindings()

        @bindings.add("up")
        def _history_back(event):
            self._replace_input(event.current_buffer, self.session.navigate_back())

        @bindings.add("down")
        def _history_forward(event):
            self._replace_input(event.current_buffer, self.session.navigate_forward())

        return bindings

    def _replace_input(self, buffer: Buffer, update: InputUpdate | None):
        if update is None:
            return
        buffer.document = Document(update.text, cursor_position=update.caret)

    def _on_text_changed(self, buffer: Buffer):
        # Fires after the edit, so the snapshot includes the latest keystroke
        self.session.note_edit(buffer.text)

    # <~~COMMANDS~~>
    def handle_input(self, user_input: str) -> bool:
        """Parse user input for a meta command & handle it"""
        cmd = user_input.strip().lower()
        if cmd in self.commands:
            self.commands[cmd]()
            return True
        return False  # No command detected, evaluate it

    def reset_console(self):
        """Clears the screen and resets the session."""
        CONSOLE.clear()
        self.panel.spawn_output(self.session.reset().output)

    def copy_last_result(self):
        """Copies the last '=>' result in the transcript to the clipboard"""
        results = RESULT_PATTERN.findall(self.session.text)
        if not results:
            CONSOLE.print("[dim]No result found to copy.[/dim]\n")
            return
        try:
            pyperclip.copy(results[-1])
            self.panel.spawn_copy_panel(results[-1])
        except Exception as e:
            log_exception(e, "Error in copy_last_result()")
            self.panel.spawn_error_panel(
                "CLIPBOARD ERROR", f"Could not copy to clipboard: {e}"
            )

    def quit(self):
        self.running = False

    # <~~MAIN LOOP~~>
    def run(self):
        """Shows the preamble, then prompts until the user quits"""
        self.running = True
        self.panel.spawn_output(self.session.reset().output)
        while self.running:
            try:
                line = self.prompt_session.prompt(prompt_prefix(self.session.prompt))
            except (KeyboardInterrupt, EOFError):  # Ctrl + c/d exits
                break
            if not line.strip():
                continue
            if self.handle_input(line):
                continue
            self.panel.spawn_output(self.session.submit(line).output)


# <~~MAIN FLOW~~>
def main():
    config = Config()
    panel = GlobalPanels(config, UIConstructor(config))
    try:
        init_logger()  # Initialize the log file
        try:
            config.load()  # Loads config variables from file
        except FileNotFoundError:
            config.save()  # Generates a config file if one does not exist
        log = ConsoleLog(config.console_log_path)
        with ConsoleSession(config, PythonEvaluator(), log) as session:
            ConsoleApp(config, session, panel).run()
        CONSOLE.print("[yellow]✨ Farewell![/yellow]\n")
    except (KeyboardInterrupt, EOFError):
        CONSOLE.print("[yellow]✨ Farewell![/yellow]\n")
    except Exception as e:
        log_exception(e, "Critical startup error")  # Log any critical errors
        panel.spawn_error_panel("CRITICAL ERROR", f"{e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
