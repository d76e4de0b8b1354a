from ..command_line import CommandLine
from ..paths import ensure_steam_client_link
from ..server import SteamGameServer


class CsGo(SteamGameServer):
    name = 'csgo'
    title = 'CS:GO'
    steam_app_id = '740'

    def deploy_config(self):
        self.deploy(self.config.section('cs_go').path('server_config'), 'csgo/cfg/server.cfg')

    def prepare(self):
        # srcds looks for the 32 bit steamclient.so in the SDK folder
        ensure_steam_client_link('~/.steam/sdk32/', '~/.steam/steamcmd/linux32/steamclient.so')

    def server_command(self) -> CommandLine:
        return CommandLine(
            './srcds_run',
            '-console',
            '-game', 'csgo',
            '-ip', '0.0.0.0',
            '-usercon',
            '+map', 'de_dust2',
            '+game_type', '0',
            '+game_mode', '1',
            '+mapgroup', 'mg_active',
            '+sv_setsteamaccount', self.config.section('cs_go')['login_token'],
        )
