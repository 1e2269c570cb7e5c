# config_manager.py - JSON config manager

import json
import os
from typing import Optional

from word_predictor.core.alphabet import (
    Alphabet,
    DEFAULT_END,
    DEFAULT_START,
    DEFAULT_TERMINATOR,
)
from word_predictor.utils.logger_utils import DEFAULT_LOG_PATH

DEFAULTS = {
    "alphabet_start": DEFAULT_START,
    "alphabet_end": DEFAULT_END,
    "terminator": DEFAULT_TERMINATOR,
    "lowercase_input": False,
    "log_path": DEFAULT_LOG_PATH,
    "log_echo": False,
    "metrics_path": None,  # None = keep metrics in memory
}

ALPHABET_KEYS = ("alphabet_start", "alphabet_end", "terminator")
TRUE_WORDS = ("1", "true", "yes", "on")
FALSE_WORDS = ("0", "false", "no", "off")


def _coerce(key, val):
    """Convert `val` to the type of the option's default, ValueError if it can't be."""
    default = DEFAULTS[key]
    if isinstance(default, bool):
        if isinstance(val, bool):
            return val
        if isinstance(val, str):
            word = val.strip().lower()
            if word in TRUE_WORDS:
                return True
            if word in FALSE_WORDS:
                return False
        raise ValueError(f"{key} expects true/false, got {val!r}")
    if default is None:
        # optional path
        if val is None or isinstance(val, str):
            return val
        raise ValueError(f"{key} expects a path or null, got {val!r}")
    if not isinstance(val, str):
        raise ValueError(f"{key} expects a string, got {val!r}")
    return val


class Config:
    def __init__(self, path: Optional[str] = "config.json"):
        self.path = path
        self.data = dict(DEFAULTS)
        # load warnings, logged by the caller once its logger exists
        self.problems = []
        self._load()

    def _load(self):
        if not self.path or not os.path.exists(self.path):
            return
        try:
            with open(self.path, "r", encoding="utf8") as f:
                loaded = json.load(f)
            if not isinstance(loaded, dict):
                raise ValueError("top level must be an object")
        except (OSError, ValueError) as e:
            self.problems.append(f"ignoring unreadable config {self.path}: {e}")
            return
        for key, val in loaded.items():
            if key not in self.data:
                self.problems.append(f"unknown config option {key!r} ignored")
                continue
            try:
                self.data[key] = _coerce(key, val)
            except ValueError as e:
                self.problems.append(f"ignoring config option: {e}")

        try:
            self.alphabet()
        except ValueError as e:
            self.problems.append(f"ignoring alphabet settings, using defaults: {e}")
            for key in ALPHABET_KEYS:
                self.data[key] = DEFAULTS[key]

    def save(self):
        if not self.path:
            return
        with open(self.path, "w", encoding="utf8") as f:
            json.dump(self.data, f, indent=2)

    def show(self, out=print):
        for k, v in self.data.items():
            out(f"{k:15} = {v}")

    def get(self, key):
        return self.data[key]

    def set(self, key, val):
        if key not in self.data:
            raise KeyError(f"No such option: {key}")
        val = _coerce(key, val)
        old = self.data[key]
        self.data[key] = val
        if key in ALPHABET_KEYS:
            try:
                self.alphabet()
            except ValueError:
                self.data[key] = old
                raise
        self.save()

    def alphabet(self) -> Alphabet:
        return Alphabet(
            self.data["alphabet_start"],
            self.data["alphabet_end"],
            self.data["terminator"],
        )
