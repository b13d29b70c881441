"""Global functions and variables, used across various modules."""

import logging
import os
import re
from datetime import datetime
from logging.handlers import RotatingFileHandler

from platformdirs import user_data_dir
from prompt_toolkit.completion import (
    WordCompleter,
)
from prompt_toolkit.formatted_text import HTML
from prompt_toolkit.styles import Style
from rich.console import Console

# Default directories
APP_DIR = user_data_dir("ScriptConsole")
CONFIG_DIR = os.path.join(APP_DIR, "config")
LOG_DIR = os.path.join(APP_DIR, "logs")
CONFIG_FILE = os.path.join(CONFIG_DIR, "settings.json")
CONSOLE_LOG_FILE = os.path.join(LOG_DIR, "console.log")

os.makedirs(CONFIG_DIR, exist_ok=True)
os.makedirs(LOG_DIR, exist_ok=True)

# Compiled regex used to find evaluation results in the transcript
RESULT_PATTERN = re.compile(r"^=> (.*)$", re.MULTILINE)

# Terminal integration
CONSOLE = Console()

# Dark style for the prompt and its completer
COMPLETER_STYLER = Style.from_dict(
    {
        "prompt": "#2e8b57 bold",
        # Completions
        "completion-menu.completion": "bg:#202020 #ffffff",
        "completion-menu.completion.current": "bg:#024a1a #000000",  # 2E8B57
        # Tooltips
        "completion-menu.meta.completion": "bg:#202020 #aaaaaa",
        "completion-menu.meta.completion.current": "bg:#024a1a #000000",
    }
)

# Meta command completer, only offered on Tab
COMMAND_COMPLETER = WordCompleter(
    [
        "!clear",
        "!config",
        "!cp",
        "!h",
        "!help",
        "!q",
        "!quit",
        "!reset",
    ],
    WORD=True,
)


def prompt_prefix(prompt: str) -> HTML:
    """Wraps a line counter prompt such as '03>>' for prompt_toolkit."""
    return HTML("<prompt>{}</prompt> ").format(prompt)


def timestamp() -> str:
    """Local time as YYYY-MM-DD HH:MM:SS, used for console log markers."""
    return datetime.now().strftime("%Y-%m-%d %H:%M:%S")


def init_logger():
    """Initializes the logging system."""
    date_str = datetime.now().strftime("%Y%m%d")
    # Output example: scriptconsole_20261019.log
    log_path = os.path.join(LOG_DIR, f"scriptconsole_{date_str}.log")
    # Max of 3 backups, max size of 1MB
    handler = RotatingFileHandler(
        log_path, maxBytes=1_000_000, backupCount=3, encoding="utf-8"
    )
    logging.basicConfig(
        level=logging.ERROR,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[handler],
    )


def log_exception(e: BaseException, context: str = ""):
    """Creates a full formatted traceback string and writes it to a log file"""
    import traceback

    # Format the traceback (exception class, exception instance, traceback object)
    tb = "".join(traceback.format_exception(type(e), e, e.__traceback__))
    # Add optional context provided by error catchers ('except Exception as e:' blocks)
    msg = f"{context}\n{tb}" if context else tb
    logging.error(msg)
