# logger_utils.py - logging for the study: messages, timings, timestamps etc

from __future__ import annotations

import os
import time
from datetime import datetime
from typing import Optional

from colorama import Fore, Style, init as colorama_init

# Directory where log files will be stored, created on first write
LOG_DIR = "logs"

# Path to the default log file, can be overriden
DEFAULT_LOG_PATH = os.path.join(LOG_DIR, "study.log")

colorama_init()


class Log:
    """Lightweight logger for writing messages and tracking timings."""

    COLORS = {
        "DEBUG": Style.DIM,
        "INFO": Fore.BLUE,
        "WARNING": Fore.YELLOW,
        "ERROR": Fore.RED,
    }

    def __init__(
        self,
        path: Optional[str] = None,
        use_color: bool = True,
        echo: bool = True,
    ) -> None:
        self.path = path or DEFAULT_LOG_PATH
        self.use_color = use_color
        # the Textual front end owns the terminal, so it turns echo off
        self.echo = echo

    def write(self, level: str, msg: str) -> None:
        """
        Append a log message to the log file with a timestamp.
        Each entry is written as: [YYYY-MM-DD HH:MM:SS] LEVEL   | message
        """
        ts = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        line = f"[{ts}] {level:<7} | {msg}"

        folder = os.path.dirname(self.path)
        if folder:
            os.makedirs(folder, exist_ok=True)
        with open(self.path, "a", encoding="utf-8") as f:
            f.write(line + "\n")

        if not self.echo:
            return
        if self.use_color and level in self.COLORS:
            print(f"{self.COLORS[level]}{line}{Style.RESET_ALL}")
        else:
            print(line)

    # Public logging methods
    def debug(self, msg: str) -> None:
        self.write("DEBUG", msg)

    def info(self, msg: str) -> None:
        self.write("INFO", msg)

    def warning(self, msg: str) -> None:
        self.write("WARNING", msg)

    def error(self, msg: str) -> None:
        self.write("ERROR", msg)

    def metric(self, tag: str, value, unit: str = "") -> None:
        """
        Record a metric (like timing or counts).
        Example: [2025-01-01 12:45:02] INFO    | sample_block: 0.002s
        """
        self.info(f"{tag}: {value}{unit}")

    def time_block(self, label: str) -> "_Timer":
        """
        Helper for measuring execution time of a code block.
        To use:
            with log.time_block("build_dictionary"):
                do_some_work()
        """
        return _Timer(self, label)


class _Timer:
    """Context manager used internally to measure time for a code block."""

    def __init__(self, log: Log, label: str) -> None:
        self.log = log
        self.label = label
        self.start = time.perf_counter()

    def __enter__(self) -> "_Timer":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        dur = round(time.perf_counter() - self.start, 4)
        self.log.metric(f"{self.label} done", dur, "s")


# shared default instance, modules take an optional Log so tests can redirect it
log = Log()
