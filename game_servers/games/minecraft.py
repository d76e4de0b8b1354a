from ..backup import backup_directory
from ..command_line import CommandLine
from ..server import BACKUP, SHUTDOWN, STARTUP, GameServer


class Minecraft(GameServer):
    name = 'minecraft'
    title = 'Minecraft'
    operations = (STARTUP, SHUTDOWN, BACKUP)
    instanced = True

    # Minecraft needs a while to write all dimensions to disk
    settle_delay = 60

    def server_command(self) -> CommandLine:
        return CommandLine('./ServerStart.sh')

    def backup_inner(self):
        if self.is_running():
            self.say('/say Running full backup')
            self.say('/save-all flush')
            self.sleep(self.settle_delay)

        backup_directory(self.game_dir, self.config.backup_dir, self.session_name, runner=self.runner)

    def shutdown_inner(self):
        self.sessions.ensure_session_is_open(self.session_name)

        self.backup()

        self.say('/say Server is gracefully shutting down')
        self.say('/stop')
        self.sleep(self.settle_delay)

        self.say('exit')
