"""
tests/test_cli.py: tests for the morse command line front end.

main() is driven directly with an argv list; stdin is replaced with an
in-memory stream where the input is piped.
"""

import io

import pytest

import morse

HELLO = ".... . .-.. .-.. ---"
WORLD = ".-- --- .-. .-.. -.."


def _run(capsys, argv):
    assert morse.main(argv) == 0
    return capsys.readouterr().out


@pytest.fixture
def stdin(monkeypatch):
    def _set(text):
        if isinstance(text, str):
            text = text.encode("utf-8")
        monkeypatch.setattr("sys.stdin", io.TextIOWrapper(io.BytesIO(text), encoding="utf-8"))
    return _set


def test_text_argument(capsys):
    assert _run(capsys, ["HELLO"]) == HELLO + "\n"


def test_morse_argument(capsys):
    assert _run(capsys, [HELLO]) == "HELLO\n"


def test_single_morse_word_starting_with_dash(capsys):
    assert _run(capsys, ["-.--"]) == "Y\n"


def test_reads_stdin_without_text(capsys, stdin):
    stdin("Hello World\n")
    assert _run(capsys, []) == HELLO + " \\ " + WORLD + "\n"


def test_empty_text_reads_stdin(capsys, stdin):
    stdin("")
    assert _run(capsys, [""]) == "\n"


def test_options_with_equals(capsys):
    out = _run(capsys, ["Hi! Bye?", "--sentence-delim=//", "--unknown=X"])
    assert out == ".... .. // \\ -... -.-- . //\n"


def test_options_with_separate_value(capsys):
    assert _run(capsys, ["--word-boundary", "|", "HELLO WORLD"]) == HELLO + " | " + WORLD + "\n"


def test_unknown_option(capsys):
    assert _run(capsys, ["--unknown=X", "....."]) == "X\n"


def test_dash_delimiter_needs_equals_form(capsys):
    out = _run(capsys, ["--sentence-delim=-", "A. B"])
    assert out == ".- - \\ -...\n"


def test_unrecognized_option_is_a_usage_error(capsys):
    with pytest.raises(SystemExit) as exc:
        morse.main(["--bogus", "HELLO"])
    assert exc.value.code == 2
    assert "unrecognized arguments" in capsys.readouterr().err


def test_help_exits_cleanly(capsys):
    with pytest.raises(SystemExit) as exc:
        morse.main(["--help"])
    assert exc.value.code == 0
    out = capsys.readouterr().out
    assert "Auto-detection" in out
    assert "--sentence-delim" in out


def test_version(capsys):
    with pytest.raises(SystemExit) as exc:
        morse.main(["--version"])
    assert exc.value.code == 0
    assert morse.__version__ in capsys.readouterr().out


def test_unreadable_stdin(capsys, monkeypatch):
    class BrokenBuffer:
        def read(self):
            raise IOError("boom")

    class BrokenStream:
        buffer = BrokenBuffer()

    monkeypatch.setattr("sys.stdin", BrokenStream())
    assert morse.main([]) == 1
    assert "cannot read input" in capsys.readouterr().err


def test_pipeline_round_trip(capsys, stdin):
    encoded = _run(capsys, ["test test"])
    stdin(encoded)
    assert _run(capsys, []) == "TEST TEST\n"


def test_latin1_stdin_is_encoded_without_the_bad_byte(capsys, stdin):
    stdin(b"Caf\xe9 ok.")
    assert _run(capsys, []) == "-.-. .- ..-. \\ --- -.- /\n"


def test_latin1_stdin_in_morse_becomes_unknown(capsys, stdin):
    stdin(b".- \xe9 -...")
    assert _run(capsys, []) == "A?B\n"


def test_several_words_are_joined(capsys):
    assert _run(capsys, ["Hello", "world"]) == HELLO + " \\ " + WORLD + "\n"


def test_words_after_an_option_are_kept(capsys):
    assert _run(capsys, ["Hello", "--unknown=X", "world"]) == HELLO + " \\ " + WORLD + "\n"


def test_morse_words_keep_their_order(capsys):
    assert _run(capsys, [".-", "-.--", "-..."]) == "AYB\n"
