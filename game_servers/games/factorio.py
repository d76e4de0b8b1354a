import os
import shutil
import tarfile
import urllib.request
from typing import Optional

from .. import log
from ..backup import backup_file
from ..command_line import CommandLine
from ..errors import GameServerError, wrap_error
from ..paths import get_newest_file
from ..server import OPERATIONS, GameServer

DOWNLOAD_URL = 'https://factorio.com/get-download/{version}/headless/linux64'

# Survive an update, everything else in the game directory is replaced
PRESERVED_FILES = ('saves', 'config', 'mods', 'mod-settings.json')


class Factorio(GameServer):
    name = 'factorio'
    title = 'Factorio'
    operations = OPERATIONS
    update_takes_version = True
    settle_delay = 5

    @property
    def server_config_path(self) -> str:
        return os.path.join(self.game_dir, 'config/custom-server-config.json')

    def deploy_config(self):
        self.deploy(self.config.section('factorio').path('server_config'), 'config/custom-server-config.json')

    def server_command(self) -> CommandLine:
        return CommandLine(
            os.path.join(self.game_dir, 'bin/x64/factorio'),
            '--start-server-load-latest',
            '--use-server-whitelist',
            '--server-whitelist', os.path.join(self.game_dir, 'config/server-whitelist.json'),
            '--server-settings', self.server_config_path,
        )

    def shutdown_inner(self):
        self.sessions.ensure_session_is_open(self.session_name)

        # Factorio saves the map when interrupted
        self.send_stop_signals()
        self.sleep(self.settle_delay)

        with wrap_error('Failed during backup'):
            self.backup()

        self.sessions.send_input_newline(self.session_name, 'exit')

    def backup_inner(self):
        saves_dir = os.path.join(self.game_dir, 'saves')
        save_file = get_newest_file(saves_dir) if os.path.isdir(saves_dir) else None
        if save_file is None:
            log.warn(f'{self.session_name} - No save file found, nothing to back up')
            return
        backup_file(save_file, self.config.backup_dir, self.name, 'zip')

    def update_inner(self, version: Optional[str] = None):
        if not version:
            raise GameServerError('Factorio updates need a version, like 1.1.34')

        with wrap_error('Failed during shutdown'):
            self.shutdown_if_running()

        temp_dir = self.config.game_temp_dir
        download_dir = self.config.game_files_backup_dir
        os.makedirs(temp_dir, exist_ok=True)
        os.makedirs(download_dir, exist_ok=True)

        self.move_preserved_files(self.game_dir, temp_dir)

        tar_path = os.path.join(download_dir, f'factorio_headless_x64_{version}.tar.xz')
        with wrap_error(f'Failed to download Factorio {version}'):
            self.download(DOWNLOAD_URL.format(version=version), tar_path)

        if os.path.isdir(self.game_dir):
            shutil.rmtree(self.game_dir)

        # The tarball contains a top level "factorio" folder
        extract_dir = os.path.dirname(self.game_dir.rstrip('/'))
        with wrap_error(f'Failed to extract {tar_path}'):
            try:
                with tarfile.open(tar_path, 'r:xz') as tf:
                    tf.extractall(extract_dir)
            except tarfile.TarError as e:
                raise GameServerError(f'Invalid Factorio archive {tar_path}: [{e.__class__.__name__}] {e}') from e

        self.move_preserved_files(temp_dir, self.game_dir)

        with wrap_error('Failed during startup'):
            self.startup()

    @staticmethod
    def move_preserved_files(src_dir: str, dst_dir: str):
        os.makedirs(dst_dir, exist_ok=True)
        for name in PRESERVED_FILES:
            src = os.path.join(src_dir, name)
            dst = os.path.join(dst_dir, name)
            if not os.path.exists(src):
                continue
            if os.path.isdir(dst):
                shutil.rmtree(dst)
            elif os.path.exists(dst):
                os.remove(dst)
            log.info(f'Moving {src} to {dst}')
            shutil.move(src, dst)

    @staticmethod
    def download(url: str, path: str):
        log.info(f'Downloading {url}')
        with urllib.request.urlopen(urllib.request.Request(url, method='GET')) as connection:
            with open(path, 'wb') as f:
                shutil.copyfileobj(connection, f)
        log.info(f'Downloaded {path}')
