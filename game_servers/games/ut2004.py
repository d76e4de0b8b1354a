import os

from ..command_line import CommandLine
from ..secret import render_secrets
from ..server import GameServer

ARENA_MASTER = 'am'
TEAM_ARENA_MASTER = 'tam'

GAME_TYPES = {
    ARENA_MASTER: '3SPNv3141.ArenaMaster',
    TEAM_ARENA_MASTER: '3SPNv3141.TeamArenaMaster',
}


class Ut2004(GameServer):
    name = 'ut'
    title = 'UT2004'
    modes = (ARENA_MASTER, TEAM_ARENA_MASTER)
    default_mode = ARENA_MASTER

    @property
    def session_dir(self) -> str:
        return os.path.join(self.game_dir, 'System')

    def server_command(self) -> CommandLine:
        url = f'DM-Asbestos?game={GAME_TYPES[self.mode]}?AdminName=private?AdminPassword={{{{ password }}}}'
        return CommandLine(
            './ucc-bin', 'server',
            render_secrets(url, self.secrets()),
            'ini=ut2004.ini',
            '-nohomedir',
        )
