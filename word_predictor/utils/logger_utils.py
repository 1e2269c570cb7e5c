# logger_utils.py - for logging messages and timing metrics with timestamps

import os
import sys
import time
from datetime import datetime
from typing import Optional, TextIO

# Directory where log files are stored unless a path is given
LOG_DIR = "logs"
DEFAULT_LOG_PATH = os.path.join(LOG_DIR, "word_predictor.log")


class Log:
    """Lightweight logger for writing messages and tracking metrics."""
    COLORS = {
        "DEBUG": "\033[90m",   # gray
        "INFO": "\033[94m",    # blue
        "WARNING": "\033[93m", # yellow
        "ERROR": "\033[91m",   # red
        "RESET": "\033[0m",
    }

    def __init__(
        self,
        path: Optional[str] = None,
        use_color: bool = True,
        echo: bool = False,
        stream: Optional[TextIO] = None,
    ):
        self.path = path or DEFAULT_LOG_PATH
        self.use_color = use_color
        self.echo = echo
        self.stream = stream

    def write(self, level: str, msg: str):
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
        out = self.stream or sys.stderr
        if self.use_color and level in self.COLORS:
            print(f"{self.COLORS[level]}{line}{self.COLORS['RESET']}", file=out)
        else:
            print(line, file=out)

    def debug(self, msg: str):
        self.write("DEBUG", msg)

    def info(self, msg: str):
        self.write("INFO", msg)

    def warning(self, msg: str):
        self.write("WARNING", msg)

    def error(self, msg: str):
        self.write("ERROR", msg)

    def metric(self, tag: str, value, unit: str = ""):
        """
        Record a metric (timing, counts...) as an INFO line.
        Example: [2024-01-01 12:45:02] INFO    | add_text done: 0.012s
        """
        self.write("INFO", f"{tag}: {value}{unit}")

    def time_block(self, label: str):
        """
        Helper for measuring execution time of a code block.
        To use:
            with log.time_block("add_text"):
                index.insert_many(words)
        """
        return _Timer(self, label)


class _Timer:
    """Context manager used by Log.time_block to time a code block."""
    def __init__(self, log: Log, label: str):
        self.log = log
        self.label = label
        self.start = time.perf_counter()
        self.elapsed = 0.0

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.elapsed = time.perf_counter() - self.start
        self.log.metric(f"{self.label} done", round(self.elapsed, 6), "s")
