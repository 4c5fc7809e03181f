import pytest

from utils import console_ui


@pytest.mark.parametrize("answer", ["Y", "y"])
def test_ask_yes_no_accepts_y(answer):
    assert console_ui.ask_yes_no("Encrypt?", lambda prompt: answer)


@pytest.mark.parametrize("answer", [" y ", "y ", "yes", "N", "", "q"])
def test_ask_yes_no_rejects_everything_else(answer):
    assert not console_ui.ask_yes_no("Encrypt?", lambda prompt: answer)


def test_ask_yes_no_uses_input_by_default(monkeypatch):
    monkeypatch.setattr("builtins.input", lambda prompt="": "Y")
    assert console_ui.ask_yes_no("Encrypt?")


def test_plain_mode_symbols(capsys):
    console_ui.init(plain=True)
    console_ui.success("done")
    console_ui.warning("careful")
    console_ui.error("broken")
    captured = capsys.readouterr()
    assert "[OK] done" in captured.out
    assert "[!] careful" in captured.out
    assert "[X] broken" in captured.err
    assert console_ui.preview("x" * 60) == "x" * 50 + "..."
