from typing import Dict, List, Optional

from . import log
from .errors import ConfigError, NonZeroExit, SessionAlreadyOpen, SessionNotOpen, SessionSpawnError, wrap_error
from .process import Runner


class SessionBackend:
    """Named sessions of a terminal multiplexer

    The multiplexer is the system of record, nothing about a session is kept
    on this side. Every operation shells out through the runner.
    """

    name = ''

    def __init__(self, runner: Optional[Runner] = None):
        self.runner = runner or Runner()

    def start_session(self, session: str, cwd: str, env: Optional[Dict[str, str]] = None):
        """Creates a detached session, raises SessionAlreadyOpen on a name collision

        Variables in env are set in the environment of the shell inside the session.
        """
        raise NotImplementedError()

    def is_session_open(self, session: str) -> bool:
        raise NotImplementedError()

    def send_input(self, session: str, text: str):
        raise NotImplementedError()

    def send_newline(self, session: str, env: Optional[Dict[str, str]] = None):
        raise NotImplementedError()

    def send_ctrl_c(self, session: str):
        raise NotImplementedError()

    def pane_pids(self, session: str) -> List[int]:
        return []

    def ensure_session_not_open(self, session: str):
        if self.is_session_open(session):
            raise SessionAlreadyOpen(session)

    def ensure_session_is_open(self, session: str):
        if not self.is_session_open(session):
            raise SessionNotOpen(session)

    def send_input_newline(self, session: str, text: str):
        self.send_input(session, text)
        self.send_newline(session)

    def send_input_newline_with_env(self, session: str, text: str, env: Dict[str, str]):
        self.send_input(session, text)
        self.send_newline(session, env)


class Tmux(SessionBackend):
    name = 'tmux'

    @staticmethod
    def session_target(session: str) -> str:
        # Exact match, tmux would match on a name prefix otherwise
        return f'={session}'

    @staticmethod
    def pane_target(session: str) -> str:
        return f'={session}:'

    def start_session(self, session: str, cwd: str, env: Optional[Dict[str, str]] = None):
        command = ['tmux', 'new-session', '-d', '-s', session, '-c', cwd]
        for key, value in (env or {}).items():
            command.extend(('-e', f'{key}={value}'))
        result = self.runner.run(command, cwd=cwd)
        if not result.returncode:
            log.debug(f'Created tmux session {session} in {cwd}')
            return
        stderr = result.stderr or ''
        if 'duplicate session' in stderr:
            raise SessionAlreadyOpen(session)
        raise SessionSpawnError(f'Failed to spawn session {session}: {stderr.strip()}')

    def is_session_open(self, session: str) -> bool:
        result = self.runner.run(['tmux', 'has-session', '-t', self.session_target(session)])
        return result.returncode == 0

    def send_input(self, session: str, text: str):
        with wrap_error(f'Failed to send input to session {session}: {text}'):
            self.runner.run_success(['tmux', 'send-keys', '-t', self.pane_target(session), '-l', text])

    def send_newline(self, session: str, env: Optional[Dict[str, str]] = None):
        with wrap_error(f'Failed to send newline to {session}'):
            self.runner.run_success(['tmux', 'send-keys', '-t', self.pane_target(session), 'Enter'], env=env)

    def send_ctrl_c(self, session: str):
        with wrap_error(f'Failed to send Ctrl-C to session {session}'):
            self.runner.run_success(['tmux', 'send-keys', '-t', self.pane_target(session), 'C-c'])

    def pane_pids(self, session: str) -> List[int]:
        result = self.runner.run(['tmux', 'list-panes', '-s', '-t', self.session_target(session), '-F', '#{pane_pid}'])
        if result.returncode:
            return []
        return [int(line) for line in result.stdout.split() if line.isdigit()]


class Zellij(SessionBackend):
    name = 'zellij'

    def start_session(self, session: str, cwd: str, env: Optional[Dict[str, str]] = None):
        if self.is_session_open(session):
            raise SessionAlreadyOpen(session)
        try:
            # The session server is forked from this client and inherits its environment
            self.runner.run_success(['zellij', 'attach', '--create-background', session], cwd=cwd, env=env)
        except NonZeroExit as e:
            raise SessionSpawnError(f'Failed to spawn session {session}: {e.output.strip()}') from e

    def is_session_open(self, session: str) -> bool:
        result = self.runner.run(['zellij', 'list-sessions', '--short', '--no-formatting'])
        if result.returncode:
            return False
        return any(line.strip() == session for line in result.stdout.splitlines())

    def send_input(self, session: str, text: str):
        with wrap_error(f'Failed to send input to session {session}: {text}'):
            self.runner.run_success(['zellij', '-s', session, 'action', 'write-chars', text])

    def send_newline(self, session: str, env: Optional[Dict[str, str]] = None):
        with wrap_error(f'Failed to send newline to {session}'):
            self.runner.run_success(['zellij', '-s', session, 'action', 'write', '10'], env=env)

    def send_ctrl_c(self, session: str):
        with wrap_error(f'Failed to send Ctrl-C to session {session}'):
            self.runner.run_success(['zellij', '-s', session, 'action', 'write', '3'])


BACKENDS = {backend.name: backend for backend in (Tmux, Zellij)}


def get_backend(name: str, runner: Optional[Runner] = None) -> SessionBackend:
    backend = BACKENDS.get(name)
    if backend is None:
        raise ConfigError(f'Unknown terminal multiplexer: {name}, expected one of: {", ".join(sorted(BACKENDS))}')
    return backend(runner)
