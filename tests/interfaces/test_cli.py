"""Unit tests for gravity4/interfaces/cli.py"""

import io

import pytest

from gravity4.debug import debug, DebugLevel
from gravity4.interfaces.cli import SimpleCLI, main


def scripted(*lines):
    """Input function replaying ``lines``, then behaving like a closed stdin."""
    remaining = iter(lines)

    def _input(prompt=""):
        try:
            return next(remaining)
        except StopIteration:
            raise EOFError
    return _input


def run_cli(argv, *lines):
    output = io.StringIO()
    cli = SimpleCLI(input_func=scripted(*lines), output=output, sleep=lambda seconds: None)
    code = cli.run(argv)
    return code, output.getvalue()


HUMANS = ['play', '--ai', 'none', '--no-auto-gravity', '--delay', '0']


def test_quit_immediately():
    code, out = run_cli(['play', '--delay', '0', '--seed', '1'], 'q')

    assert code == 0
    assert "Starting a new gravity Connect Four game!" in out
    assert "Quitting game." in out


def test_end_of_input_quits():
    code, out = run_cli(['play', '--delay', '0'])

    assert code == 0
    assert out.rstrip().endswith("Quitting game.")


def test_bad_input_messages():
    _, out = run_cli(HUMANS, 'abc', '9', '-1', 'q')

    assert "Invalid input." in out
    assert out.count("Column must be between 0 and 6.") == 2


def test_full_column_message():
    _, out = run_cli(HUMANS, *(['0'] * 7), 'q')

    assert "Column 0 is full." in out


def test_two_player_win_and_reset():
    _, out = run_cli(HUMANS, '0', '0', '1', '1', '2', '2', '3', '4', 'r', 'q')

    assert "X wins! Score X 1 - 0 O" in out
    assert "The game is over. Press r to play again." in out
    assert "Board reset." in out


def test_toggle_commands():
    _, out = run_cli(['play', '--delay', '0', '--seed', '2'], 'a', 'a', 'i', 'g', 's', 'h', 'q')

    assert "Auto gravity OFF" in out
    assert "Auto gravity ON" in out
    assert "AI (O) OFF" in out
    assert "Gravity flips: pieces now fall Up." in out
    assert "Scores reset." in out
    assert "Commands:" in out


def test_ai_answers_in_play_mode():
    _, out = run_cli(['play', '--delay', '0', '--seed', '3', '--no-auto-gravity'], '0', 'q')

    # Board printed for the human move and again for the AI reply
    assert out.count("|X") >= 2
    assert "O" in out.split("Quitting game.")[0]


def test_demo_reports_each_game():
    code, out = run_cli(['demo', '--games', '2', '--quiet', '--seed', '1'])

    assert code == 0
    assert "Game 1:" in out
    assert "Game 2:" in out
    assert "Game 3:" not in out


def test_benchmark():
    code, out = run_cli(['benchmark', '--iterations', '10', '--seed', '2'])

    assert code == 0
    assert "Running benchmark with 10 iterations..." in out
    assert "Played 1 full games" in out


def test_no_command():
    code, out = run_cli([])

    assert code == 1
    assert "Please specify a command" in out


def test_debug_flags_configure_logging():
    cli = SimpleCLI(output=io.StringIO())

    cli.parse_args(['--debug-level', 'info', 'benchmark'])
    assert debug.level == DebugLevel.INFO

    cli.parse_args(['--debug', 'demo'])
    assert debug.level == DebugLevel.DEBUG


def test_main_rejects_unknown_command():
    with pytest.raises(SystemExit):
        main(['fly'])


def test_move_while_settling_is_not_reported_as_full_column():
    output = io.StringIO()
    cli = SimpleCLI(output=output)
    cli.parse_args(['play', '--ai', 'none', '--delay', '0'])
    session = cli.make_session()
    cli.handle_column(session, '0')

    cli.handle_column(session, '1')

    assert "Pieces are still settling." in output.getvalue()
    assert "is full" not in output.getvalue()
    assert session.board.piece_count() == 1
