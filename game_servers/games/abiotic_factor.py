from ..command_line import CommandLine
from ..server import SteamGameServer


class AbioticFactor(SteamGameServer):
    name = 'abiotic-factor'
    title = 'Abiotic Factor'
    steam_app_id = '2857200'

    def server_command(self) -> CommandLine:
        return CommandLine(
            './AbioticFactorServer.sh',
            '-log',
            '-newconsole',
            '-useperfthreads',
            "-SteamServerName=Nukes's Playground",
            '-PORT=40450',
            '-QueryPort=40451',
            '-MaxServerPlayers=6',
            f'-ServerPassword={self.config.default_password}',
        )
