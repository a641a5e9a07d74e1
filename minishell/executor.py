"""Run a syntax tree: builtins in-process, other commands as child processes."""

from __future__ import annotations

import io
import os
import subprocess
import sys
import threading
from collections.abc import Iterator, Sequence
from typing import IO, TextIO, Union

from .ast import AstNode, NodeType
from .builtins import (
    ExitRequest,
    cd,
    exit_shell,
    export,
    is_builtin,
    print_env,
    pwd,
    unset,
)
from .env import Environment
from .errors import COMMAND_NOT_FOUND, ShellError, print_shell_error
from .path import get_path

NOT_FOUND_STATUS = 127
NOT_EXECUTABLE_STATUS = 126

_Upstream = Union[None, bytes, IO[bytes]]


def _exit_status(returncode: int) -> int:
    """Map a child's return code to a shell status (128 + signal when killed)."""
    return returncode if returncode >= 0 else 128 - returncode


def _resolve(name: str, env: Environment) -> str | None:
    if "/" in name:
        return name if os.access(name, os.F_OK | os.X_OK) else None
    return get_path(env.to_strings(), name)


def _report_missing(name: str) -> None:
    print_shell_error(name, COMMAND_NOT_FOUND)


def execute(node: AstNode | None, env: Environment) -> int:
    """Run a tree and return its exit status."""
    if node is None:
        return 0
    if node.type is NodeType.PIPE:
        return execute_pipeline(node, env)
    if node.type is NodeType.COMMAND:
        return execute_command(node, env)
    status = execute(node.left, env)
    if (node.type is NodeType.AND) == (status == 0):
        status = execute(node.right, env)
    return status


def execute_builtin(args: Sequence[str], env: Environment, out: TextIO) -> int:
    """Run a builtin command writing its output to ``out``; return 0 on success."""
    name = args[0]
    operand = args[1] if len(args) > 1 else None
    if name == "pwd":
        pwd(out)
    elif name == "cd":
        cd(args, env, out)
    elif name == "env":
        print_env(env, out)
    elif name == "export":
        export(env, operand)
    elif name == "unset":
        unset(env, operand)
    elif name == "exit":
        exit_shell(args, out)
    else:
        raise ShellError(COMMAND_NOT_FOUND, source=name, exit_code=NOT_FOUND_STATUS)
    return 0


def execute_command(node: AstNode, env: Environment) -> int:
    """Run one command: a builtin in the shell itself, anything else as a child."""
    if not node.args:
        return 0
    name = node.args[0]
    if is_builtin(name):
        try:
            return execute_builtin(node.args, env, sys.stdout)
        except ShellError as exc:
            print_shell_error(exc.source, exc.message)
            return exc.exit_code
    path = _resolve(name, env)
    if path is None:
        _report_missing(name)
        return NOT_FOUND_STATUS
    sys.stdout.flush()
    try:
        completed = subprocess.run(node.args, executable=path, env=dict(env), check=False)
    except OSError as exc:
        print_shell_error(name, exc.strerror or str(exc))
        return NOT_EXECUTABLE_STATUS
    return _exit_status(completed.returncode)


def pipeline_commands(node: AstNode | None) -> Iterator[AstNode]:
    """Yield the commands of a right-nested pipeline from left to right."""
    while node is not None:
        if node.type is NodeType.PIPE:
            if node.left is not None:
                yield node.left
            node = node.right
        else:
            yield node
            node = None


def _run_isolated(args: Sequence[str], env: Environment, out: TextIO) -> int:
    """Run a builtin on a copy of the environment, as a pipeline stage does."""
    try:
        return execute_builtin(args, Environment(env), out)
    except ExitRequest as request:
        return request.status
    except ShellError as exc:
        print_shell_error(exc.source, exc.message)
        return exc.exit_code


def _feed(stream: IO[bytes], data: bytes) -> None:
    try:
        stream.write(data)
    except BrokenPipeError:
        pass
    finally:
        try:
            stream.close()
        except BrokenPipeError:
            pass


def _discard(upstream: _Upstream) -> None:
    if upstream is not None and not isinstance(upstream, bytes):
        upstream.close()


def execute_pipeline(node: AstNode, env: Environment) -> int:
    """Run the commands of a pipeline connected output to input; return the last status."""
    commands = list(pipeline_commands(node))
    processes: list[subprocess.Popen] = []
    feeders: list[threading.Thread] = []
    upstream: _Upstream = None
    last_process: subprocess.Popen | None = None
    status = 0
    for index, command in enumerate(commands):
        last = index == len(commands) - 1
        name = command.args[0] if command.args else None
        if name is None or is_builtin(name):
            buffer = io.StringIO()
            status = _run_isolated(command.args, env, buffer) if name else 0
            _discard(upstream)
            if last:
                sys.stdout.write(buffer.getvalue())
                sys.stdout.flush()
            upstream = buffer.getvalue().encode()
            continue
        path = _resolve(name, env)
        if path is None:
            _report_missing(name)
            _discard(upstream)
            upstream = b""
            status = NOT_FOUND_STATUS
            continue
        stdin = subprocess.PIPE if isinstance(upstream, bytes) else upstream
        sys.stdout.flush()
        try:
            process = subprocess.Popen(
                command.args,
                executable=path,
                stdin=stdin,
                stdout=None if last else subprocess.PIPE,
                env=dict(env),
            )
        except OSError as exc:
            print_shell_error(name, exc.strerror or str(exc))
            _discard(upstream)
            upstream = b""
            status = NOT_EXECUTABLE_STATUS
            continue
        if isinstance(upstream, bytes):
            feeder = threading.Thread(
                target=_feed, args=(process.stdin, upstream), daemon=True
            )
            feeder.start()
            feeders.append(feeder)
        else:
            _discard(upstream)
        upstream = process.stdout
        processes.append(process)
        if last:
            last_process = process
    _discard(upstream)
    for process in processes:
        process.wait()
    for feeder in feeders:
        feeder.join()
    if last_process is not None:
        status = _exit_status(last_process.returncode)
    return status