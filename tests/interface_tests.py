"""
Tests the shell, i.e. commands are parsed, executed by the
virtual machine, and results returned as responses
"""
import pytest

from .context import (
    BPTreeShell, MetaCommandResult, ExecuteResult, parse_args_and_start, repl, run_demo, run_file
)


@pytest.fixture
def shell():
    shell = BPTreeShell(branching_factor=3)
    resp = shell.handle_input("insert 0.0 0.0; insert 0.5 0.5; insert 0.2 0.2; insert 0.8 0.8")
    assert resp.success, resp.error_message
    return shell


def bodies(resp):
    return [stmnt_resp.body for stmnt_resp in resp.body]


def test_queries(shell):
    resp = shell.handle_input("get 0.2; range <= 0.5; range >= 0.8; range == 0.5; size")
    assert resp.success
    assert bodies(resp) == [0.2, [0.0, 0.2, 0.5], [0.8], [0.5], 2]


def test_get_missing_key(shell):
    resp = shell.handle_input("get 3")
    assert resp.success
    assert bodies(resp) == [None]


def test_scan(shell):
    resp = shell.handle_input("scan")
    assert resp.success
    assert bodies(resp) == [[(0.0, 0.0), (0.2, 0.2), (0.5, 0.5), (0.8, 0.8)]]


def test_null_key_insert_fails(shell):
    resp = shell.handle_input("insert null 1")
    assert not resp.success
    assert resp.body[0].status == ExecuteResult.InvalidArgument


def test_incomparable_key_fails(shell):
    resp = shell.handle_input("insert 'text' 1")
    assert not resp.success
    assert resp.body[0].status == ExecuteResult.IncomparableKey
    # tree is unchanged
    assert shell.tree.num_entries() == 4


def test_parse_failure(shell):
    resp = shell.handle_input("range < 1")
    assert not resp.success
    assert resp.error_message.startswith("parse failed")


def test_meta_commands(shell, capsys):
    assert shell.handle_input(".validate").success
    assert shell.handle_input(".btree").success
    assert "leaf" in capsys.readouterr().out
    assert shell.handle_input(".help").success

    resp = shell.handle_input(".bogus")
    assert not resp.success
    assert resp.status == MetaCommandResult.UnrecognizedCommand


def test_validate_failure(shell):
    # break ordering between the leaves
    shell.tree.first_leaf().keys[0] = 100
    resp = shell.handle_input(".validate")
    assert not resp.success
    assert resp.status == MetaCommandResult.ValidationFailed
    assert resp.error_message.startswith("validation failed")


def test_reset(shell):
    assert shell.handle_input(".reset").success
    resp = shell.handle_input("size")
    assert bodies(resp) == [0]


def test_quit(shell):
    with pytest.raises(SystemExit):
        shell.handle_input(".quit")


def test_run_file(tmp_path, capsys):
    path = tmp_path / "commands.txt"
    path.write_text("insert 1 'a';\ninsert 1 'b';\nrange == 1;\n")
    resp = run_file(str(path), branching_factor=3)
    assert resp.success
    assert bodies(resp)[-1] == ["a", "b"]
    assert "Response(success" in capsys.readouterr().out


def test_run_file_missing(tmp_path):
    resp = run_file(str(tmp_path / "missing.txt"))
    assert not resp.success


def test_run_file_invalid_branching_factor(tmp_path):
    path = tmp_path / "commands.txt"
    path.write_text("insert 1 'a'")
    resp = run_file(str(path), branching_factor=2)
    assert not resp.success
    assert "branching factor" in resp.error_message


def test_repl_invalid_branching_factor(capsys):
    # returns before reading any input
    repl(branching_factor=2)
    assert "Unable to start repl" in capsys.readouterr().out


@pytest.mark.parametrize("args", [
    ["repl", "three"],
    ["file", "commands.txt", "3.5"],
])
def test_parse_args_non_integer_branching_factor(args, capsys):
    parse_args_and_start(args)
    out = capsys.readouterr().out
    assert "branching factor must be an integer" in out
    assert "Usage:" in out


def test_parse_args_out_of_range_branching_factor(tmp_path, capsys):
    path = tmp_path / "commands.txt"
    path.write_text("insert 1 'a'")
    parse_args_and_start(["file", str(path), "1"])
    assert "Error: Illegal branching factor" in capsys.readouterr().out


def test_run_demo(capsys):
    tree = run_demo(seed=1)
    assert tree.num_entries() == 10
    assert tree.validate()
    out = capsys.readouterr().out
    assert "Tree structure:" in out
    assert f"Size (Number of LeafNodes): {tree.size()}" in out
