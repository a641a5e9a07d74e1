import io
import os
from pathlib import Path

import pytest

from minishell.builtins import (
    ExitRequest,
    cd,
    exit_shell,
    export,
    is_builtin,
    print_env,
    pwd,
    unset,
)
from minishell.env import Environment
from minishell.errors import ShellError


@pytest.mark.parametrize("name", ["cd", "pwd", "exit", "env", "export", "unset"])
def test_is_builtin_true(name):
    assert is_builtin(name) is True


@pytest.mark.parametrize("name", ["ls", "echo", "", None, "CD"])
def test_is_builtin_false(name):
    assert is_builtin(name) is False


def test_pwd_writes_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    out = io.StringIO()
    pwd(out)
    assert out.getvalue() == os.getcwd() + "\n"
    assert Path(out.getvalue().strip()).samefile(tmp_path)


def test_cd_absolute(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = tmp_path / "abs"
    target.mkdir()
    out = io.StringIO()
    cd(["cd", str(target)], Environment(), out)
    assert Path(os.getcwd()).samefile(target)
    assert out.getvalue() == os.getcwd() + "\n"


def test_cd_relative(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "sub").mkdir()
    out = io.StringIO()
    cd(["cd", "sub"], Environment(), out)
    assert Path(out.getvalue().strip()).samefile(tmp_path / "sub")
    assert Path(os.getcwd()).samefile(tmp_path / "sub")


def test_cd_home_without_argument(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    home = tmp_path / "home"
    home.mkdir()
    out = io.StringIO()
    cd(["cd"], Environment({"HOME": str(home)}), out)
    assert Path(out.getvalue().strip()).samefile(home)
    assert Path(os.getcwd()).samefile(home)


def test_cd_tilde_goes_home(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    home = tmp_path / "home"
    home.mkdir()
    out = io.StringIO()
    cd(["cd", "~"], Environment({"HOME": str(home)}), out)
    assert Path(out.getvalue().strip()).samefile(home)
    assert Path(os.getcwd()).samefile(home)


def test_cd_missing_directory_raises(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(ShellError):
        cd(["cd", "does-not-exist"], Environment(), io.StringIO())
    assert Path(os.getcwd()).samefile(tmp_path)


def test_cd_home_not_set_raises(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(ShellError):
        cd(["cd"], Environment(), io.StringIO())


def test_exit_without_status():
    out = io.StringIO()
    with pytest.raises(ExitRequest) as info:
        exit_shell(["exit"], out)
    assert info.value.status == 0
    assert out.getvalue() == ""


def test_exit_with_status_prints_exit():
    out = io.StringIO()
    with pytest.raises(ExitRequest) as info:
        exit_shell(["exit", "3"], out)
    assert info.value.status == 3
    assert out.getvalue() == "exit\n"


def test_exit_non_numeric_status_is_zero():
    with pytest.raises(ExitRequest) as info:
        exit_shell(["exit", "abc"], io.StringIO())
    assert info.value.status == 0


def test_print_env_lists_all_variables():
    env = Environment([("A", "1"), ("B", "two")])
    out = io.StringIO()
    print_env(env, out)
    assert out.getvalue().splitlines() == env.to_strings()


def test_export_adds_variable():
    env = Environment([("A", "1")])
    export(env, "NEW=value=x")
    assert env.get("NEW") == "value=x"
    assert len(env) == 2


def test_export_replaces_existing():
    env = Environment([("A", "1")])
    export(env, "A=2")
    assert env.to_strings() == ["A=2"]


@pytest.mark.parametrize("assignment", ["NOEQUALS", None])
def test_export_invalid_raises(assignment):
    with pytest.raises(ShellError):
        export(Environment(), assignment)


def test_unset_removes_variable():
    env = Environment([("A", "1"), ("B", "2")])
    unset(env, "A")
    assert "A" not in env
    assert len(env) == 1


def test_unset_missing_is_ignored():
    env = Environment([("A", "1")])
    unset(env, "ZZZ")
    unset(env, None)
    assert env.to_strings() == ["A=1"]