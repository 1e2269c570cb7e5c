# test_cli.py - drive the command loop with scripted input
import io
import json

import pytest
from rich.console import Console

from word_predictor.cli import main
from word_predictor.cli.cli import CLI
from word_predictor.core.trie import PrefixFrequencyIndex
from word_predictor.utils.logger_utils import Log


@pytest.fixture
def run_cli(tmp_path):
    log_file = tmp_path / "cli.log"

    def run(script, *args):
        out = io.StringIO()
        console = Console(file=out, width=200, highlight=False)
        code = main(
            ["--log-file", str(log_file), *args],
            stdin=io.StringIO(script),
            console=console,
        )
        assert code == 0
        return out.getvalue()

    run.log_file = log_file
    return run


def test_add_text_then_predict(run_cli):
    out = run_cli(
        "add_text\n"
        "cat cat  cat car car car car car cart\n"
        "predict\n"
        "ca\n"
        "exit\n"
    )
    assert "Words added" in out
    assert "Predicted word: car" in out
    assert out.rstrip().endswith("Program finished")


def test_predict_prev_with_new_symbols(run_cli):
    out = run_cli(
        "add_text\ncar car cat\n"
        "predict\nc\n"
        "predict_prev_with_new_symbols\nat\n"
        "exit\n"
    )
    assert "Predicted word: car" in out
    assert "Predicted word: cat" in out


def test_unknown_prefix_echoed(run_cli):
    out = run_cli("add_word\ncat\npredict\ndog\npredict_prev_with_new_symbols\ns\nexit\n")
    assert "Predicted word: dog\n" in out
    assert "Predicted word: dogs\n" in out


def test_unknown_command_shows_rules_again(run_cli):
    out = run_cli("hello\nexit\n")
    assert "Command not understood" in out
    assert out.count("Enter one of the commands") == 2
    assert "unknown command 'hello'" in run_cli.log_file.read_text(encoding="utf-8")


def test_invalid_word_reported_and_loop_continues(run_cli):
    out = run_cli("add_word\nCat\nadd_word\ncat\npredict\nc\nexit\n")
    assert "Rejected:" in out
    assert "Predicted word: cat" in out
    assert "ERROR" in run_cli.log_file.read_text(encoding="utf-8")


def test_lowercase_flag(run_cli):
    out = run_cli("add_word\nCat\npredict\nC\nexit\n", "--lowercase")
    assert "Rejected" not in out
    assert "Predicted word: cat" in out


def test_eof_ends_session(run_cli):
    out = run_cli("add_word\ncat\n")
    assert out.rstrip().endswith("Program finished")


def test_config_file_alphabet(run_cli, tmp_path):
    cfg = tmp_path / "config.json"
    cfg.write_text(json.dumps({"alphabet_start": "0", "alphabet_end": "9"}), encoding="utf8")
    out = run_cli("add_text\n123 124 124\npredict\n12\nexit\n", "--config", str(cfg))
    assert "Predicted word: 124" in out


def test_metrics_recorded(tmp_path):
    index = PrefixFrequencyIndex()
    cli = CLI(
        index,
        Log(str(tmp_path / "a.log")),
        stdin=io.StringIO("add_word\nhi\npredict\nh\nexit\n"),
        console=Console(file=io.StringIO()),
    )
    cli.run()
    assert cli.metrics.count("add_word_time") == 1
    assert cli.metrics.count("predict_time") == 1
    assert index.count("hi") == 1


def test_blank_lines_never_add_the_empty_word(tmp_path):
    index = PrefixFrequencyIndex()
    out = io.StringIO()
    cli = CLI(
        index,
        Log(str(tmp_path / "a.log")),
        stdin=io.StringIO("add_word\ncat\nadd_word\n\n   \ndog\nadd_word\n\npredict\n\nexit\n"),
        console=Console(file=out, width=200, highlight=False),
    )
    cli.run()
    assert index.count("") == 0
    assert index.count("dog") == 1
    # the last add_word swallowed the remaining lines waiting for a word
    assert index.count("predict") == 1


def test_blank_prefix_predicts_most_frequent_word(run_cli):
    out = run_cli("add_text\ncat cat dog\nadd_word\n\ncat\npredict\n\nexit\n")
    assert "Predicted word: cat\n" in out


def test_invalid_alphabet_config_falls_back(run_cli, tmp_path):
    cfg = tmp_path / "config.json"
    cfg.write_text(json.dumps({"terminator": "m"}), encoding="utf8")
    out = run_cli("add_word\nmoon\npredict\nmo\nexit\n", "--config", str(cfg))
    assert "Predicted word: moon" in out
    assert "ignoring alphabet settings" in run_cli.log_file.read_text(encoding="utf-8")


def test_string_false_keeps_case_folding_off(run_cli, tmp_path):
    cfg = tmp_path / "config.json"
    cfg.write_text(json.dumps({"lowercase_input": "false"}), encoding="utf8")
    out = run_cli("add_word\nCat\nexit\n", "--config", str(cfg))
    assert "Rejected:" in out
    assert "Word added" not in out
