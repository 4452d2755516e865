"""Test the blessed/curtsies terminal wrapper without a real tty."""

import io
from unittest.mock import MagicMock, Mock

from curtsies.events import PasteEvent

from kestrel.terminal import TerminalInterface


def make_terminal(does_styling=True):
    term = MagicMock()
    term.does_styling = does_styling
    term.width, term.height = 100, 30
    term.move_xy.side_effect = lambda x, y: f"<move {x},{y}>"
    term.color_rgb.side_effect = lambda r, g, b: f"<fg {r},{g},{b}>"
    term.on_color_rgb.side_effect = lambda r, g, b: f"<bg {r},{g},{b}>"
    term.clear_eol = "<eol>"
    term.hide_cursor = "<hide>"
    term.normal_cursor = "<show>"
    stream = io.StringIO()
    return TerminalInterface(terminal=term, stream=stream), stream


def test_output_is_queued_until_flush():
    terminal, stream = make_terminal()
    terminal.hide_cursor()
    terminal.move_cursor(2, 3)
    terminal.write("hi")
    terminal.clear_line()
    assert stream.getvalue() == ""
    terminal.flush()
    assert stream.getvalue() == "<hide><move 2,3>hi<eol>"
    terminal.flush()
    assert stream.getvalue() == "<hide><move 2,3>hi<eol>"


def test_colors():
    terminal, stream = make_terminal()
    terminal.set_foreground((1, 2, 3))
    terminal.set_background((4, 5, 6))
    terminal.reset_foreground()
    terminal.reset_background()
    terminal.flush()
    assert stream.getvalue() == "<fg 1,2,3><bg 4,5,6>\x1b[39m\x1b[49m"


def test_color_resets_skipped_without_styling():
    terminal, stream = make_terminal(does_styling=False)
    terminal.reset_foreground()
    terminal.reset_background()
    terminal.flush()
    assert stream.getvalue() == ""


def test_size():
    terminal, _ = make_terminal()
    assert terminal.size() == (100, 30)


def test_get_key_before_setup_returns_none():
    terminal, _ = make_terminal()
    assert terminal.get_key(timeout=0) is None


def test_get_key_reads_from_input():
    terminal, _ = make_terminal()
    terminal._input = Mock()
    terminal._input.send.side_effect = ['a', '<UP>', None]
    assert terminal.get_key(0) == 'a'
    assert terminal.get_key(0) == '<UP>'
    assert terminal.get_key(0) is None


def test_paste_is_delivered_key_by_key():
    terminal, _ = make_terminal()
    paste = PasteEvent()
    paste.events.extend(['x', 'y', 'z'])
    terminal._input = Mock()
    terminal._input.send.side_effect = [paste]
    assert [terminal.get_key(0) for _ in range(3)] == ['x', 'y', 'z']
    assert terminal._input.send.call_count == 1


def test_cleanup_restores_terminal():
    terminal, stream = make_terminal()
    terminal.term.enter_fullscreen = "<enter>"
    terminal.term.exit_fullscreen = "<exit>"
    terminal.term.clear = "<clear>"
    terminal.term.normal = "<normal>"
    terminal.is_fullscreen = True
    fake_input = MagicMock()
    terminal._input = fake_input
    terminal.cleanup()
    fake_input.__exit__.assert_called_once_with(None, None, None)
    assert terminal._input is None
    assert not terminal.is_fullscreen
    assert stream.getvalue() == "<normal><exit><show>"
