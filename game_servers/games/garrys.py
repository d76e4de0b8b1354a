import os

from ..command_line import CommandLine, EnvRef
from ..errors import wrap_error
from ..server import SteamGameServer

TTT = 'ttt'
PROPHUNT = 'prophunt'
ZOMBIE = 'zombie'

# gamemode, map, workshop collection, config template
GAME_MODES = {
    TTT: ('terrortown', 'ttt_rooftops_2016_v1', '2089206449', 'ttt.cfg'),
    PROPHUNT: ('prop_hunt', 'ph_indoorpool', '2090357275', 'prop_hunt.cfg'),
    ZOMBIE: ('zombiesurvival', 'zs_cleanoffice_v2', '157384458', None),
}


class Garrys(SteamGameServer):
    name = 'garrys'
    title = "Garry's mod"
    modes = (TTT, PROPHUNT, ZOMBIE)
    default_mode = TTT
    steam_app_id = '4020'
    restart_after_update = False

    def deploy_config(self):
        # A stale compiled config would override the deployed one
        server_vdf = os.path.join(self.game_dir, 'garrysmod/cfg/server.vdf')
        if os.path.exists(server_vdf):
            os.remove(server_vdf)

        template = GAME_MODES[self.mode][3]
        if template is not None:
            with wrap_error(f'Failed to copy {self.mode} server config'):
                self.deploy(self.default_config('garrys', template), 'garrysmod/cfg/server.cfg')

    def server_command(self) -> CommandLine:
        gamemode, map_name, collection, _ = GAME_MODES[self.mode]
        command = CommandLine(
            './srcds_run',
            '-game', 'garrysmod',
            '-usercon',
            '-authkey', EnvRef('STEAM_WEB_API_KEY'),
            '+gamemode', gamemode,
            '+hostname', 'Nukesors_garry_playground',
            '+map', map_name,
            '+host_workshop_collection', collection,
        )
        return command.setenv('STEAM_WEB_API_KEY', self.config.section('garrys')['steam_web_api_key'])
