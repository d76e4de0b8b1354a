import os
from typing import Dict

from ..backup import backup_file
from ..command_line import CommandLine
from ..errors import GameServerError
from ..server import BACKUP, SHUTDOWN, STARTUP, GameServer


class Terraria(GameServer):
    name = 'terraria'
    title = 'Terraria'
    operations = (STARTUP, SHUTDOWN, BACKUP)
    settle_delay = 5

    @property
    def server_config_path(self) -> str:
        return os.path.join(self.game_dir, 'config.txt')

    def secrets(self) -> Dict[str, str]:
        section = self.config.section('terraria')
        return {
            'password': self.config.default_password,
            'port': str(section['port']),
            'world_name': section['world_name'],
            'world_path': section.path('world_path'),
        }

    def deploy_config(self):
        self.deploy(self.config.section('terraria').path('server_config'), 'config.txt')

    def server_command(self) -> CommandLine:
        return CommandLine('terraria-server', '-config', self.server_config_path)

    def shutdown_inner(self):
        self.sessions.ensure_session_is_open(self.session_name)
        # The console "exit" command saves the world before quitting
        self.say('exit')
        self.sleep(self.settle_delay)
        self.say('exit')

    def backup_inner(self):
        if self.is_running():
            self.say('save')
            self.sleep(2)

        section = self.config.section('terraria')
        world_path = section.path('world_path')
        if not os.path.isfile(world_path):
            raise GameServerError(f'World file not found: {world_path}')

        backup_file(world_path, self.config.backup_dir, section['world_name'], 'wld')
