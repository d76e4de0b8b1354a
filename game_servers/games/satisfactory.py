from ..command_line import CommandLine
from ..paths import ensure_steam_client_link
from ..server import SteamGameServer


class Satisfactory(SteamGameServer):
    name = 'satisfactory'
    title = 'Satisfactory'
    steam_app_id = '1690800'

    def prepare(self):
        ensure_steam_client_link('~/.steam/steamcmd/sdk64/', '~/.steam/steamcmd/linux64/steamclient.so')

    def server_command(self) -> CommandLine:
        return CommandLine('./FactoryServer.sh')
