from ..command_line import CommandLine
from ..server import SteamGameServer


class Unturned(SteamGameServer):
    name = 'unturned'
    title = 'Unturned'
    steam_app_id = '1110390'

    def server_command(self) -> CommandLine:
        return CommandLine('./ServerHelper.sh', '+InternetServer/Jarvis')
