"""Handles all user-facing configuration, including the console preamble."""

import json
import os
from datetime import datetime

from scriptconsole import __version__
from scriptconsole.globals import CONFIG_FILE, CONSOLE_LOG_FILE

# Taken from the installed package on every run, never from settings.json
BUILD_FIELDS = ("build_year", "version")

BANNER_TEMPLATE = (
    "{program_name}\n"
    "Copyright © {copyright_start}-{build_year} {copyright_holder}\n"
    "\n"
    "This program comes with ABSOLUTELY NO WARRANTY; for details\n"
    "see the file COPYING. This is free software, and you are\n"
    "welcome to redistribute it under certain conditions; see the\n"
    "aforementioned file for details.\n"
)


class Config:
    """User-facing configuration variables"""

    def __init__(self):
        # Default values
        self.program_name: str = "Script Console"
        self.copyright_holder: str = "The Script Console Contributors"
        self.copyright_start: int = 2012
        self.build_year: int = datetime.now().year
        self.version: str = __version__
        self.version_postfix: str = ""
        # Empty means the default location in the app data directory
        self.log_file: str = ""

    def save(self):
        """Saves any config changes to the config file."""
        os.makedirs(os.path.dirname(CONFIG_FILE), exist_ok=True)
        with open(CONFIG_FILE, "w", encoding="utf-8") as f:
            data = {k: v for k, v in self.__dict__.items() if k not in BUILD_FIELDS}
            json.dump(data, f, indent=2)

    def load(self):
        """Loads the config file."""
        if not os.path.exists(CONFIG_FILE):
            self.save()
        with open(CONFIG_FILE, "r", encoding="utf-8") as f:
            data = json.load(f)
        for key, val in data.items():
            if key not in BUILD_FIELDS:
                setattr(self, key, val)

    @property
    def console_log_path(self) -> str:
        """Returns the path of the append-only console log"""
        if self.log_file:
            return os.path.abspath(os.path.expanduser(self.log_file))
        return CONSOLE_LOG_FILE

    def banner(self) -> str:
        return BANNER_TEMPLATE.format(
            program_name=self.program_name,
            copyright_start=self.copyright_start,
            build_year=self.build_year,
            copyright_holder=self.copyright_holder,
        )

    def version_line(self) -> str:
        """e.g. 'You are running Script Console version 1.0.0-dev.'"""
        version = self.version
        if self.version_postfix:
            version += f"-{self.version_postfix}"
        return f"You are running {self.program_name} version {version}.\n"

    def preamble(self) -> str:
        """Banner, a blank line, then the version line."""
        return self.banner() + "\n" + self.version_line()
