"""
cli.py - command loop for the word predictor
Features:
- add single words or whole lines of text to the vocabulary
- predict the most frequent completion of a prefix
- continue the previous prediction with newly typed symbols
- per-command latency metrics and file logging
- Uses Rich for formatting
"""

import argparse
import sys
import time
from typing import List, Optional, TextIO

from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt

from word_predictor.core.tokenizer import first_word, split_words
from word_predictor.core.trie import InvalidWordError, PrefixFrequencyIndex
from word_predictor.utils.config_manager import Config
from word_predictor.utils.logger_utils import Log
from word_predictor.utils.metrics_tracker import Metrics

RULES = (
    "Enter one of the commands:\n"
    " exit - quit\n"
    " add_word - add a word to the vocabulary\n"
    " add_text - add several words to the vocabulary\n"
    " predict - predict a word\n"
    " predict_prev_with_new_symbols - predict the previous word again, "
    "with new symbols appended to its prefix\n"
)


class _LineStream:
    """Wraps an input stream so end of input raises EOFError, like input() does."""

    def __init__(self, stream: TextIO):
        self.stream = stream

    def readline(self) -> str:
        line = self.stream.readline()
        if line == "":
            raise EOFError
        return line


class CLI:
    """Command-line loop wrapping one PrefixFrequencyIndex."""

    def __init__(
        self,
        index: PrefixFrequencyIndex,
        log: Log,
        metrics: Optional[Metrics] = None,
        lowercase: bool = False,
        stdin: Optional[TextIO] = None,
        console: Optional[Console] = None,
    ):
        self.index = index
        self.log = log
        self.metrics = metrics or Metrics(log=log)
        self.lowercase = lowercase
        self.stdin = _LineStream(stdin or sys.stdin)
        self.console = console or Console(highlight=False)
        self.running = True
        self.handlers = {
            "exit": self._exit,
            "add_word": self._add_word,
            "add_text": self._add_text,
            "predict": self._predict,
            "predict_prev_with_new_symbols": self._predict_prev,
        }

    def run(self):
        """
        Main loop: read a command, then (for everything but exit)
        one more line with its argument. EOF behaves like exit.
        """
        self.console.print(escape(RULES), end="")
        while self.running:
            line = self._ask("[green]command[/green]")
            if line is None:
                self._exit()
                break
            command = first_word(line)
            if not command:
                continue
            handler = self.handlers.get(command)
            if handler is None:
                self.log.warning(f"unknown command {command!r}")
                self.console.print("[red]Command not understood[/red]")
                self.console.print(escape(RULES), end="")
                continue

            t0 = time.perf_counter()
            handler()
            self.metrics.record(f"{command}_time", time.perf_counter() - t0)

    def _ask(self, prompt: str) -> Optional[str]:
        """One line of input via a rich prompt, None once input is exhausted."""
        try:
            return Prompt.ask(prompt, console=self.console, stream=self.stdin)
        except (EOFError, KeyboardInterrupt):
            return None

    # COMMANDS ------------------------------------------------------------------
    def _add_word(self):
        # blank lines are skipped until a word arrives
        word = ""
        while not word:
            line = self._ask("Enter a word to add")
            if line is None:
                self._exit()
                return
            word = first_word(line, lowercase=self.lowercase)
        try:
            self.index.insert(word)
        except InvalidWordError as e:
            self._reject(e)
            return
        self.log.debug(f"added word {word!r} (count={self.index.count(word)})")
        self.console.print("[green]Word added[/green]")

    def _add_text(self):
        line = self._ask("Enter a sequence of words to add")
        if line is None:
            self._exit()
            return
        words = split_words(line, lowercase=self.lowercase)
        try:
            with self.log.time_block("add_text"):
                self.index.insert_many(words)
        except InvalidWordError as e:
            self._reject(e)
            return
        self.log.debug(f"added {len(words)} words, vocabulary size {len(self.index)}")
        self.console.print("[green]Words added[/green]")

    def _predict(self):
        line = self._ask("Enter a word prefix to predict")
        if line is None:
            self._exit()
            return
        prefix = first_word(line, lowercase=self.lowercase)
        result = self.index.predict(prefix)
        self._show_prediction(prefix, result)

    def _predict_prev(self):
        line = self._ask("Enter the continuation of the previous word's prefix")
        if line is None:
            self._exit()
            return
        extra = first_word(line, lowercase=self.lowercase)
        result = self.index.predict_incremental(extra)
        self._show_prediction(self.index.cursor_prefix, result)

    def _show_prediction(self, prefix: str, result: str):
        self.log.debug(
            f"prefix {prefix!r} -> {result!r} ({self.index.cursor_state.value})"
        )
        self.console.print(f"Predicted word: [bold]{escape(result)}[/bold]")

    def _reject(self, err: InvalidWordError):
        self.log.error(str(err))
        self.console.print(f"[red]Rejected:[/red] {escape(str(err))}")

    def _exit(self):
        if not self.running:
            return
        self.running = False
        self.console.print("Program finished")
        self.log.info(
            f"session closed: {len(self.index)} words, {self.index.node_count} nodes"
        )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="word-predictor",
        description="Interactive most-frequent-word prediction over a prefix tree.",
    )
    p.add_argument("--config", default=None, help="JSON config file")
    p.add_argument("--log-file", default=None, help="override the log file path")
    p.add_argument(
        "--lowercase",
        action="store_true",
        help="fold input to lowercase before it reaches the vocabulary",
    )
    return p


def main(argv: Optional[List[str]] = None, stdin: Optional[TextIO] = None,
         console: Optional[Console] = None) -> int:
    args = build_parser().parse_args(argv)

    cfg = Config(args.config)
    log = Log(
        path=args.log_file or cfg.get("log_path"),
        echo=cfg.get("log_echo"),
    )
    for msg in cfg.problems:
        log.warning(msg)

    index = PrefixFrequencyIndex(cfg.alphabet())
    metrics = Metrics(cfg.get("metrics_path"), log=log)
    lowercase = args.lowercase or cfg.get("lowercase_input")

    log.info(f"starting with {index.alphabet!r}")
    CLI(index, log, metrics, lowercase=lowercase, stdin=stdin, console=console).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
