"""
This is a collection of simple end-to-end tests. These should
validate the correctness of any interaction loop that the user
can initiate.
"""
import pytest

from .context import (IndexShell, ShellConfig, MetaCommandResult, Pipe, parse_args_and_start, run_file,
                      EXIT_FAILURE, EXIT_SUCCESS, NOT_FOUND_MSG)


@pytest.fixture
def shell():
    """
    Return shell with a few entries loaded
    """
    shell = IndexShell()
    commands = [
        "insert 1 'one'",
        "insert 3 'three'",
        "insert 5 'five'",
        "insert 2 'two'",
    ]
    for cmd in commands:
        resp = shell.handle_input(cmd)
        assert resp.success, f"{cmd} failed with {resp.error_message}"

    return shell


def test_search(shell):
    pipe = shell.get_pipe()
    for key, expected in [(1, "one"), (2, "two"), (3, "three"), (5, "five"), (4, NOT_FOUND_MSG)]:
        resp = shell.handle_input(f"search {key}")
        assert resp.success
        assert pipe.has_msgs(), "expected messages"
        assert pipe.read() == expected
    assert not pipe.has_msgs()


def test_multi_stmnt_output_order():
    shell = IndexShell()
    resp = shell.handle_input("empty; insert 5 'first'; insert 5 'second'; find 5; empty")
    assert resp.success
    assert resp.body == 5
    assert shell.get_pipe().read_all() == [True, "first", False]


def test_empty_input_is_noop():
    shell = IndexShell()
    resp = shell.handle_input("   ")
    assert resp.success
    assert shell.tree.is_empty()


def test_parse_failure():
    shell = IndexShell()
    resp = shell.handle_input("insert 5")
    assert not resp.success
    assert "parse failed" in resp.error_message
    assert shell.tree.is_empty()


def test_incomparable_key_stops_execution():
    shell = IndexShell()
    resp = shell.handle_input("insert 5 five; insert abc def; insert 6 six")
    assert not resp.success
    assert resp.body == 1
    assert shell.tree.search(5) == "five"
    assert shell.tree.search(6) is None


def test_meta_commands(shell, capsys):
    resp = shell.handle_input(".validate")
    assert resp.success
    assert resp.status == MetaCommandResult.Success

    resp = shell.handle_input(".btree")
    assert resp.success
    assert "0-key: 3" in capsys.readouterr().out

    resp = shell.handle_input(".help")
    assert resp.success
    assert ".validate" in capsys.readouterr().out


def test_unrecognized_meta_command(shell):
    resp = shell.handle_input(".frobnicate")
    assert not resp.success
    assert resp.status == MetaCommandResult.UnrecognizedCommand


def test_validate_meta_command_reports_failure(shell):
    shell.tree.root.children[0].keys.reverse()
    resp = shell.handle_input(".validate")
    assert not resp.success
    assert resp.status == MetaCommandResult.ValidationFailed


def test_nuke(shell):
    resp = shell.handle_input(".nuke")
    assert resp.success
    shell.handle_input("empty; search 1")
    assert shell.get_pipe().read_all() == [True, NOT_FOUND_MSG]


def test_quit(shell):
    with pytest.raises(SystemExit):
        shell.handle_input(".quit")


def test_degree_from_config():
    shell = IndexShell(ShellConfig(degree=4))
    assert shell.tree.degree == 4
    shell.handle_input(".nuke")
    assert shell.tree.degree == 4


def test_pipe():
    pipe = Pipe()
    assert not pipe.has_msgs()
    pipe.write(1)
    pipe.write(2)
    assert pipe.read() == 1
    pipe.write(3)
    assert pipe.read_all() == [2, 3]
    assert not pipe.has_msgs()


def test_run_file(tmp_path, capsys):
    commands = tmp_path / "commands.txt"
    commands.write_text("insert 1 'one';\ninsert 2 'two';\nsearch 2;\nsearch 9;\n")

    resp = run_file(str(commands))
    assert resp.success
    out = capsys.readouterr().out
    assert "two" in out
    assert NOT_FOUND_MSG in out


def test_run_file_missing(tmp_path):
    resp = run_file(str(tmp_path / "missing.txt"))
    assert not resp.success
    assert "not found" in resp.error_message


def test_parse_args_and_start(tmp_path):
    commands = tmp_path / "commands.txt"
    commands.write_text("insert 1 'one'; search 1")

    assert parse_args_and_start(["file", str(commands)]) == EXIT_SUCCESS
    assert parse_args_and_start(["--degree", "3", "--verbose", "file", str(commands)]) == EXIT_SUCCESS
    assert parse_args_and_start(["--degree", "1", "file", str(commands)]) == EXIT_FAILURE
    assert parse_args_and_start(["--degree", "two", "file", str(commands)]) == EXIT_FAILURE
    assert parse_args_and_start(["--bogus", "file", str(commands)]) == EXIT_FAILURE
    assert parse_args_and_start([]) == EXIT_FAILURE
    assert parse_args_and_start(["file"]) == EXIT_FAILURE
    assert parse_args_and_start(["devloop"]) == EXIT_FAILURE
