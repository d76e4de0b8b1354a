# PYTHON_ARGCOMPLETE_OK
r"""Command line entry points, one script per game plus the generic ``game-server``

    factorio-server startup
    factorio-server update 1.1.34
    minecraft-server shutdown survival
    game-server cod startup promod

Mutating commands of the same session are serialized with a file lock.
Set LOGLEVEL=0..3 for warn, info (default), debug or trace output.

"""
import argparse
import os
import sys
from typing import List, Optional, Type

import argcomplete
import filelock
import psutil

from . import log
from .config import Config
from .errors import GameServerError, PreconditionError
from .games import GAMES
from .server import BACKUP, SHUTDOWN, STARTUP, UPDATE, GameServer

LOCK_DIR = os.path.expanduser('~/.local/game-servers')


def get_file_lock_path(session_name: str) -> str:
    return os.path.join(LOCK_DIR, f'{session_name}.lock')


def command_status(server: GameServer) -> int:
    if not server.is_running():
        print('stopped')
        return 0

    print('running')
    for pane_pid in server.sessions.pane_pids(server.session_name):
        try:
            children = psutil.Process(pane_pid).children(recursive=True)
        except psutil.NoSuchProcess:
            continue
        for process in children:
            try:
                print(f'{process.pid} {" ".join(process.cmdline())}')
            except (psutil.NoSuchProcess, psutil.AccessDenied):
                continue
    return 0


def add_game_commands(parser: argparse.ArgumentParser, game: Type[GameServer]):
    parser.set_defaults(game=game.name)

    subparsers = parser.add_subparsers(
        title='commands',
        description='server management command',
        help='server management command')

    def add_command(name: str, command, description: str) -> argparse.ArgumentParser:
        subparser = subparsers.add_parser(name, description=description)
        subparser.set_defaults(command=command)
        if game.instanced:
            subparser.add_argument('instance', type=str, help='Name of the server instance (world)')
        return subparser

    subparser = add_command(STARTUP, GameServer.startup, f'Starts the {game.title} server, fails if already running')
    if game.modes:
        subparser.add_argument('mode', type=str, nargs='?', choices=game.modes, default=game.default_mode, help=f'Game mode (default: {game.default_mode})')

    add_command(SHUTDOWN, GameServer.shutdown, f'Gracefully stops the {game.title} server, fails if not running')

    if game.supports(BACKUP):
        add_command(BACKUP, GameServer.backup, f'Backs up the {game.title} save files')

    if game.supports(UPDATE):
        subparser = add_command(UPDATE, GameServer.update, f'Updates the {game.title} server, restarts it if it was running')
        if game.update_takes_version:
            subparser.add_argument('version', type=str, help='Version to install, like 1.1.34')

    add_command('status', command_status, f'Prints whether the {game.title} server is running and its processes')


def build_parser(game: Optional[str] = None) -> argparse.ArgumentParser:
    if game is not None:
        game_class = GAMES[game]
        parser = argparse.ArgumentParser(description=f'Manages the {game_class.title} server')
        add_game_commands(parser, game_class)
    else:
        parser = argparse.ArgumentParser(prog='game-server', description='Manages personal game servers running in tmux sessions')
        subparsers = parser.add_subparsers(title='games', description='game to manage', help='game to manage')
        for name, game_class in sorted(GAMES.items()):
            add_game_commands(subparsers.add_parser(name, description=f'Manages the {game_class.title} server'), game_class)

    parser.add_argument('-c', '--config', type=str, default=None, help='Path of the config file (default: ~/.config/games.json)')
    return parser


def load_server(args: argparse.Namespace) -> GameServer:
    game = GAMES[args.game]
    config = Config.load(game.name, args.config)
    if game.instanced:
        config.instance = args.instance
    return game(config, mode=getattr(args, 'mode', None))


def run_command(server: GameServer, args: argparse.Namespace) -> int:
    command = args.command

    if command is command_status:
        return command_status(server)

    lock_path = get_file_lock_path(server.session_name)
    os.makedirs(os.path.dirname(lock_path), exist_ok=True)
    with filelock.FileLock(lock_path):
        if command is GameServer.update:
            server.update(getattr(args, 'version', None))
        else:
            command(server)

    return 0


def main(argv: Optional[List[str]] = None, game: Optional[str] = None) -> int:
    parser = build_parser(game)
    argcomplete.autocomplete(parser)

    args = parser.parse_args(argv)

    if 'command' not in args:
        parser.print_usage()
        return 0

    try:
        log.configure(os.getenv('LOGLEVEL', '1'))
        server = load_server(args)
        return run_command(server, args)
    except PreconditionError as e:
        print(e, file=sys.stderr)
        return 1
    except GameServerError as e:
        log.error(str(e))
        return 1
    except OSError as e:
        log.error(f'[{e.__class__.__name__}] {e}')
        return 1


def entry_point(game: Optional[str] = None):
    def run():
        sys.exit(main(game=game))
    return run


game_server = entry_point()
abiotic_factor = entry_point('abiotic-factor')
cod4 = entry_point('cod')
cs_go = entry_point('csgo')
factorio = entry_point('factorio')
garrys = entry_point('garrys')
minecraft = entry_point('minecraft')
satisfactory = entry_point('satisfactory')
terraria = entry_point('terraria')
unturned = entry_point('unturned')
ut2004 = entry_point('ut')


if __name__ == '__main__':
    game_server()
