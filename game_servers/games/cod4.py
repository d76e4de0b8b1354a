from ..command_line import CommandLine
from ..server import GameServer

NORMAL = 'normal'
PROMOD = 'promod'


class Cod4(GameServer):
    name = 'cod'
    title = 'CoD4'
    modes = (NORMAL, PROMOD)
    default_mode = NORMAL

    def deploy_config(self):
        section = self.config.section('cod4')
        self.deploy(section.path('default_config'), 'main/default.cfg')
        if self.mode == PROMOD:
            self.deploy(section.path('promod_config'), 'main/promod.cfg')

    def server_command(self) -> CommandLine:
        command = CommandLine('./cod4x18_dedrun', '+exec', 'default.cfg')
        if self.mode == PROMOD:
            command.arg('+exec', 'promod.cfg')
        command.arg('+set', 'fs_homepath', './')
        if self.mode == PROMOD:
            command.arg('+set', 'fs_game', 'mods/pml220')
        return command.arg('+set', 'sv_punkbuster', '0', '+map_rotate')
