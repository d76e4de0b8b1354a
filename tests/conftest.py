import subprocess
from typing import Dict, List, Optional

import pytest

from game_servers import log
from game_servers.config import Config
from game_servers.errors import NonZeroExit, SessionAlreadyOpen
from game_servers.process import command_text
from game_servers.session import SessionBackend


class RecordingRunner:
    """Records commands instead of running them

    ``results`` maps the first words of a command to the return code, stdout
    and stderr it should produce.
    """

    def __init__(self):
        self.commands: List[dict] = []
        self.results: Dict[str, tuple] = {}

    def result_for(self, command) -> subprocess.CompletedProcess:
        text = command_text(command)
        for prefix, (returncode, stdout, stderr) in self.results.items():
            if text.startswith(prefix):
                return subprocess.CompletedProcess(command, returncode, stdout, stderr)
        return subprocess.CompletedProcess(command, 0, '', '')

    def run(self, command, *, cwd=None, env=None, capture=True) -> subprocess.CompletedProcess:
        self.commands.append(dict(command=command, cwd=cwd, env=env, capture=capture))
        return self.result_for(command)

    def run_success(self, command, *, cwd=None, env=None, capture=True) -> subprocess.CompletedProcess:
        result = self.run(command, cwd=cwd, env=env, capture=capture)
        if result.returncode:
            raise NonZeroExit(command_text(command), result.returncode, result.stderr)
        return result

    @property
    def texts(self) -> List[str]:
        return [command_text(c['command']) for c in self.commands]


class FakeSessions(SessionBackend):
    """In-memory multiplexer, ``exit`` typed into a session closes it

    ``environments`` holds the variables the shell of each session was started with.
    """

    name = 'fake'

    def __init__(self):
        super().__init__(RecordingRunner())
        self.open: Dict[str, str] = {}
        self.environments: Dict[str, Dict[str, str]] = {}
        self.events: List[tuple] = []

    def start_session(self, session: str, cwd: str, env: Optional[Dict[str, str]] = None):
        if session in self.open:
            raise SessionAlreadyOpen(session)
        self.open[session] = cwd
        self.environments[session] = dict(env or {})
        self.events.append(('start', session, cwd))

    def is_session_open(self, session: str) -> bool:
        return session in self.open

    def send_input(self, session: str, text: str):
        self.events.append(('input', session, text))

    def send_newline(self, session: str, env: Optional[Dict[str, str]] = None):
        self.events.append(('newline', session, env))
        last_input = [e for e in self.events if e[0] == 'input'][-1]
        if last_input[2] == 'exit':
            self.open.pop(session, None)

    def send_ctrl_c(self, session: str):
        self.events.append(('ctrl-c', session))

    @property
    def lines(self) -> List[str]:
        """Text sent with a trailing newline, in order"""
        return [e[2] for e in self.events if e[0] == 'input']


class Sleeps(list):

    def __call__(self, seconds: float):
        self.append(seconds)


@pytest.fixture(autouse=True)
def log_level(monkeypatch):
    monkeypatch.setattr(log, 'level', log.INFO)


@pytest.fixture
def runner() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture
def sessions() -> FakeSessions:
    return FakeSessions()


@pytest.fixture
def sleeps() -> Sleeps:
    return Sleeps()


@pytest.fixture
def config(tmp_path) -> Config:
    templates = tmp_path / 'templates'
    templates.mkdir()
    data = {
        'game_files': str(tmp_path / 'games'),
        'game_files_backup': str(tmp_path / 'game_files_backup'),
        'backup_root': str(tmp_path / 'backups'),
        'temp_dir': str(tmp_path / 'tmp'),
        'default_configs': str(templates),
        'default_password': 'hunter2',
    }
    return Config('test', data, str(tmp_path / 'games.json'))


@pytest.fixture
def make_config(config):
    """Config of another game sharing the temporary directories"""
    def make(game_name: str, **sections) -> Config:
        data = dict(config.data)
        data.update(sections)
        return Config(game_name, data, config.path)
    return make
