r"""Lifecycle of a game server running inside a terminal multiplexer session

Every game derives from GameServer. The public operations (startup, shutdown,
backup, update) log around a game specific ``*_inner`` implementation:

    startup:  session must be closed -> deploy configs -> new session -> launch command
    shutdown: session must be open -> stop signal(s) -> ``exit`` closes the session
    update:   shutdown if running -> wait -> update client -> startup

Optional operations are declared in ``operations``, so the CLI and callers can
ask ``supports()`` instead of finding out by a failing call.

"""
import os
from typing import Callable, Dict, Optional, Sequence

from . import log
from .command_line import CommandLine
from .config import Config
from .errors import NotImplementedOperation, wrap_error
from .process import Runner, sleep_seconds
from .secret import copy_secret_file
from .session import SessionBackend, get_backend

STARTUP = 'startup'
SHUTDOWN = 'shutdown'
BACKUP = 'backup'
UPDATE = 'update'

OPERATIONS = (STARTUP, SHUTDOWN, BACKUP, UPDATE)


class GameServer:
    name = ''
    title = ''

    # Lifecycle operations this game supports
    operations: Sequence[str] = (STARTUP, SHUTDOWN)

    # Game modes selectable on startup, empty if the game has none
    modes: Sequence[str] = ()
    default_mode: Optional[str] = None

    # The game requires an instance name, one session per instance
    instanced = False

    # Update takes a version argument
    update_takes_version = False

    # Steam application ID of the dedicated server, used by steam_update()
    steam_app_id: Optional[str] = None
    restart_after_update = True

    # Seconds to let the game flush its state before continuing
    settle_delay = 10

    # Some games do not always react to the first Ctrl-C
    stop_signals = 1

    def __init__(self,
                 config: Config,
                 sessions: Optional[SessionBackend] = None,
                 runner: Optional[Runner] = None,
                 mode: Optional[str] = None,
                 sleep: Callable[[float], None] = sleep_seconds):
        if mode is not None and mode not in self.modes:
            raise ValueError(f'Unknown game mode for {self.name}: {mode}')
        self.config = config
        self.runner = runner or Runner()
        self.sessions = sessions or get_backend(config.multiplexer, self.runner)
        self.mode = mode or self.default_mode
        self.sleep = sleep

    @classmethod
    def supports(cls, operation: str) -> bool:
        return operation in cls.operations

    @property
    def session_name(self) -> str:
        return self.config.session_name

    @property
    def game_dir(self) -> str:
        return self.config.game_dir

    @property
    def session_dir(self) -> str:
        """Working directory of the session"""
        return self.game_dir

    def is_running(self) -> bool:
        return self.sessions.is_session_open(self.session_name)

    # Public operations

    def startup(self):
        log.info(f'{self.session_name} - Starting up server')
        self.startup_inner()
        log.info(f'{self.session_name} - Server has started')

    def shutdown(self):
        log.info(f'{self.session_name} - Shutting down server')
        self.shutdown_inner()
        log.info(f'{self.session_name} - Server has been shut down')

    def backup(self):
        if not self.supports(BACKUP):
            raise NotImplementedOperation(BACKUP, self.session_name)
        log.info(f'{self.session_name} - Backing up server')
        self.backup_inner()
        log.info(f'{self.session_name} - Backup has been created')

    def update(self, version: Optional[str] = None):
        if not self.supports(UPDATE):
            raise NotImplementedOperation(UPDATE, self.session_name)
        log.info(f'{self.session_name} - Updating server')
        self.update_inner(version)
        log.info(f'{self.session_name} - Server has been updated')

    # Game specific implementations

    def startup_inner(self):
        self.sessions.ensure_session_not_open(self.session_name)
        with wrap_error('Failed while deploying server config'):
            self.deploy_config()
        self.prepare()
        command = self.server_command()
        self.sessions.start_session(self.session_name, self.session_dir, command.env)
        self.launch(command)

    def shutdown_inner(self):
        self.sessions.ensure_session_is_open(self.session_name)
        self.send_stop_signals()
        self.sessions.send_input_newline(self.session_name, 'exit')

    def backup_inner(self):
        raise NotImplementedOperation(BACKUP, self.session_name)

    def update_inner(self, version: Optional[str] = None):
        raise NotImplementedOperation(UPDATE, self.session_name)

    # Hooks

    def secrets(self) -> Dict[str, str]:
        return {'password': self.config.default_password}

    def deploy_config(self):
        """Copies the server config templates into the game directory"""

    def prepare(self):
        """Anything that has to happen on disk right before the session starts"""

    def server_command(self) -> CommandLine:
        raise NotImplementedError()

    # Helpers

    def deploy(self, src: str, relative_dest: str):
        dest = os.path.join(self.game_dir, relative_dest)
        log.debug(f'{self.session_name} - Deploying {src} to {dest}')
        copy_secret_file(src, dest, self.secrets())

    def default_config(self, *parts: str) -> str:
        return os.path.join(self.config.default_config_dir, *parts)

    def launch(self, command: CommandLine):
        text = command.render()
        log.debug(f'{self.session_name} - Launching: {text}')
        if command.env:
            self.sessions.send_input_newline_with_env(self.session_name, text, command.env)
        else:
            self.sessions.send_input_newline(self.session_name, text)

    def send_stop_signals(self):
        for number in range(self.stop_signals):
            if number:
                self.sleep(1)
            self.sessions.send_ctrl_c(self.session_name)

    def say(self, text: str):
        self.sessions.send_input_newline(self.session_name, text)

    def shutdown_if_running(self):
        if self.is_running():
            log.info(f'{self.session_name} - Shutting down running server')
            self.shutdown()
            self.sleep(self.settle_delay)

    def steam_update(self, app_id: str, install_dir: Optional[str] = None):
        self.shutdown_if_running()

        install_dir = install_dir or self.game_dir
        with wrap_error(f'Failed to update {self.name} with steamcmd'):
            self.runner.run_success(
                ['steamcmd',
                 '+force_install_dir', install_dir,
                 '+login', 'anonymous',
                 '+app_update', app_id, 'validate',
                 '+quit'],
                capture=False)

        if self.restart_after_update:
            self.startup()


class SteamGameServer(GameServer):
    """Game installed and updated through steamcmd"""

    operations = (STARTUP, SHUTDOWN, UPDATE)

    def update_inner(self, version: Optional[str] = None):
        self.steam_update(self.steam_app_id)
