"""Tests for the argument parsers and the main entry point."""

import argparse
import os

import pytest

from game_servers import cli, log
from game_servers.games.factorio import Factorio
from game_servers.games.ut2004 import Ut2004
from game_servers.server import GameServer


@pytest.fixture(autouse=True)
def lock_dir(tmp_path, monkeypatch):
    path = tmp_path / 'locks'
    monkeypatch.setattr(cli, 'LOCK_DIR', str(path))
    monkeypatch.delenv('LOGLEVEL', raising=False)
    return path


@pytest.fixture
def ut(make_config, sessions, runner, sleeps, monkeypatch):
    server = Ut2004(make_config('ut'), sessions, runner, sleep=sleeps)
    monkeypatch.setattr(cli, 'load_server', lambda args: server)
    return server


class TestParser:

    def test_update_with_version(self):
        args = cli.build_parser('factorio').parse_args(['update', '1.1.34'])
        assert args.command is GameServer.update
        assert args.version == '1.1.34'
        assert args.game == 'factorio'

    def test_mode_defaults(self):
        parser = cli.build_parser('cod')
        assert parser.parse_args(['startup']).mode == 'normal'
        assert parser.parse_args(['startup', 'promod']).mode == 'promod'

    def test_unknown_mode_is_rejected(self):
        with pytest.raises(SystemExit):
            cli.build_parser('cod').parse_args(['startup', 'hardcore'])

    def test_unsupported_operation_has_no_command(self):
        with pytest.raises(SystemExit):
            cli.build_parser('cod').parse_args(['backup'])

    def test_instance_argument(self):
        args = cli.build_parser('minecraft').parse_args(['shutdown', 'survival'])
        assert args.command is GameServer.shutdown
        assert args.instance == 'survival'

    def test_generic_parser(self):
        args = cli.build_parser().parse_args(['-c', '/tmp/games.json', 'garrys', 'startup', 'prophunt'])
        assert args.game == 'garrys'
        assert args.mode == 'prophunt'
        assert args.config == '/tmp/games.json'

    def test_status_command(self):
        args = cli.build_parser('satisfactory').parse_args(['status'])
        assert args.command is cli.command_status


class TestMain:

    def test_no_command_prints_usage(self, capsys):
        assert cli.main([], game='ut') == 0
        assert 'usage:' in capsys.readouterr().out

    def test_startup(self, ut, sessions, lock_dir):
        assert cli.main(['startup'], game='ut') == 0
        assert sessions.is_session_open('ut')
        assert os.path.isdir(lock_dir)

    def test_precondition_failure(self, ut, capsys):
        assert cli.main(['shutdown'], game='ut') == 1
        assert 'Instance ut is not running' in capsys.readouterr().err

    def test_startup_twice(self, ut, sessions, capsys):
        assert cli.main(['startup'], game='ut') == 0
        assert cli.main(['startup'], game='ut') == 1
        assert 'Instance ut already running' in capsys.readouterr().err
        assert len(sessions.lines) == 1

    def test_invalid_log_level(self, ut, monkeypatch, capsys):
        monkeypatch.setenv('LOGLEVEL', 'loud')
        assert cli.main(['startup'], game='ut') == 1
        assert 'Found unexpected log level loud' in capsys.readouterr().err

    def test_log_level_is_set_from_environment(self, ut, monkeypatch):
        monkeypatch.setenv('LOGLEVEL', '2')
        assert cli.main(['status'], game='ut') == 0
        assert log.level == log.DEBUG

    def test_status(self, ut, sessions, capsys):
        cli.main(['status'], game='ut')
        assert capsys.readouterr().out == 'stopped\n'

        sessions.open['ut'] = ut.game_dir
        cli.main(['status'], game='ut')
        assert capsys.readouterr().out.splitlines()[0] == 'running'

    def test_update_passes_version(self, make_config, sessions, monkeypatch):
        versions = []
        server = Factorio(make_config('factorio'), sessions)
        monkeypatch.setattr(server, 'update_inner', versions.append)
        monkeypatch.setattr(cli, 'load_server', lambda args: server)
        assert cli.main(['update', '2.0.7'], game='factorio') == 0
        assert versions == ['2.0.7']


class TestLoadServer:

    def test_instanced_game(self, tmp_path):
        args = argparse.Namespace(game='minecraft', config=str(tmp_path / 'games.json'), instance='creative')
        server = cli.load_server(args)
        assert server.session_name == 'minecraft-creative'
        assert os.path.exists(tmp_path / 'games.json')

    def test_mode_is_passed(self, tmp_path):
        args = argparse.Namespace(game='garrys', config=str(tmp_path / 'games.json'), mode='zombie')
        assert cli.load_server(args).mode == 'zombie'
