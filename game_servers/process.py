"""Thin layer over subprocess with simple exit handling for single commands

A command is either a shell string, which runs through ``/bin/sh``, or a list
of arguments, which is executed directly. Pipes between commands are not
supported, use a shell string for those.

"""
import os
import shlex
import subprocess
from time import sleep
from typing import Dict, Optional, Sequence, Union

from . import log
from .errors import NonZeroExit, SpawnError

Command = Union[str, Sequence[str]]


def command_text(command: Command) -> str:
    if isinstance(command, str):
        return command
    return shlex.join(str(arg) for arg in command)


class Cmd:

    def __init__(self, command: Command, *, cwd: Optional[str] = None, env: Optional[Dict[str, str]] = None, capture: bool = True):
        self.command = command
        self.cwd = cwd
        self.env = dict(env or {})
        self.capture = capture

    @property
    def text(self) -> str:
        return command_text(self.command)

    def run(self) -> subprocess.CompletedProcess:
        """Runs the command and returns the result, even for non-zero exit codes"""
        env = None
        if self.env:
            env = dict(os.environ)
            env.update(self.env)

        log.trace(f'Running: {self.text}')
        try:
            return subprocess.run(
                self.command,
                shell=isinstance(self.command, str),
                cwd=self.cwd,
                env=env,
                stdout=subprocess.PIPE if self.capture else None,
                stderr=subprocess.PIPE if self.capture else None,
                universal_newlines=True)
        except OSError as e:
            raise SpawnError(self.text, e) from e

    def run_success(self) -> subprocess.CompletedProcess:
        result = self.run()
        if result.returncode:
            output = (result.stderr or '') if self.capture else ''
            raise NonZeroExit(self.text, result.returncode, output)
        return result


class Runner:
    """Entry point used by sessions and games to execute commands

    Tests replace it with a recording fake.
    """

    def run(self, command: Command, *, cwd: Optional[str] = None, env: Optional[Dict[str, str]] = None, capture: bool = True) -> subprocess.CompletedProcess:
        return Cmd(command, cwd=cwd, env=env, capture=capture).run()

    def run_success(self, command: Command, *, cwd: Optional[str] = None, env: Optional[Dict[str, str]] = None, capture: bool = True) -> subprocess.CompletedProcess:
        return Cmd(command, cwd=cwd, env=env, capture=capture).run_success()


def sleep_seconds(seconds: float):
    log.debug(f'Waiting {seconds} seconds')
    sleep(seconds)
