"""Builds and spawns UI objects. UIConstructor and GlobalPanels live here."""

import os
import textwrap

from rich import box
from rich.markdown import Markdown
from rich.panel import Panel
from rich.text import Text

from scriptconsole.globals import CONFIG_FILE, CONSOLE, LOG_DIR


class UIConstructor:
    """Constructs and returns various UI objects"""

    def __init__(self, config):
        self.config = config

    def error_panel_constructor(self, error: str, exception: str) -> Panel:
        return Panel(
            exception,
            title=Text(f"❌ {error}", style="bold red"),
            title_align="left",
            border_style="red",
            expand=False,
        )

    def copy_panel_constructor(self, result: str) -> Panel:
        return Panel(
            Text(result),
            title=Text("📋 Copied to clipboard", style="bold orange1"),
            title_align="left",
            border_style="orange1",
            box=box.HORIZONTALS,
            padding=(0, 0),
        )

    def help_chart_constructor(self) -> Markdown:
        return Markdown(
            textwrap.dedent("""
            | **Console** | *Anything else is evaluated as code* |
            | --- | ----------- |
            | `Up` / `Down` | Walk back and forth through submitted lines. Your unsent line is kept. |
            | `!reset` | Clear the transcript, show the banner again and forget history. |
            | `!clear` | Clear the terminal window. The transcript is kept. |
            | `!cp` | Copy the last `=>` result to the clipboard. |
            | `!config` | Display your current configuration and default directories. |
            | `!h` or `!help` | Show this chart. |
            | `!q` or `!quit` | Exit the console. |
            | | |
            | `Ctrl + C` | Interrupt running code. At the prompt, exits the console. |
            """)
        )

    def settings_chart_constructor(self) -> Markdown:
        postfix = self.config.version_postfix or "-"
        return Markdown(
            textwrap.dedent(f"""
            | **Current Settings** | *Your current persistent settings* |
            | --- | ----------- |
            | **Program**: | *{self.config.program_name}* |
            | | |
            | **Version**: | *{self.config.version}* |
            | | |
            | **Version Postfix**: | *{postfix}* |
            | | |
            | **Copyright**: | *{self.config.copyright_start}-{self.config.build_year} {self.config.copyright_holder}* |
            - Your configuration file is located at: `{CONFIG_FILE}`
            - Your console log is located at:        `{self.config.console_log_path}`
            - Your error logs are located at:        `{LOG_DIR}`
            - The current working directory is:      `{os.getcwd()}`
            """)
        )


class GlobalPanels:
    """Global panel spawner"""

    def __init__(self, config, ui: UIConstructor):
        self.config = config
        self.ui: UIConstructor = ui

    def spawn_output(self, text: str):
        """Prints transcript output exactly as appended"""
        if text:
            CONSOLE.print(text, end="", markup=False, highlight=False)

    def spawn_help_chart(self):
        CONSOLE.print(self.ui.help_chart_constructor())
        CONSOLE.print()

    def spawn_settings_chart(self):
        CONSOLE.print(self.ui.settings_chart_constructor())
        CONSOLE.print()

    def spawn_error_panel(self, error: str, exception: str):
        """Error panel template, used in ConsoleApp and main()"""
        CONSOLE.print(self.ui.error_panel_constructor(error, exception))
        CONSOLE.print()

    def spawn_copy_panel(self, result: str):
        CONSOLE.print(self.ui.copy_panel_constructor(result))
        CONSOLE.print()
