import collections.abc
import copy
import json
import os
from typing import Any, Dict, Iterator, Mapping, Optional

from . import log
from .errors import ConfigError

CONFIG_FILENAME = 'games.json'

DEFAULT_CONFIG: Dict[str, Any] = {
    # Root directory of all game installations
    'game_files': '~/game_servers/games/',
    # Copies of downloaded game files, kept during updates
    'game_files_backup': '/var/lib/backup/games/game_files',
    # Root directory the games write their backups to
    'backup_root': '/var/lib/backup/games/',
    # Scratch space for updates
    'temp_dir': '~/game_servers/tmp/',
    # Templates of server configs, with {{ placeholders }}
    'default_configs': '~/game_servers/default_configs/',
    'default_password': 'your pass',
    'multiplexer': 'tmux',
    'factorio': {
        'server_config': '~/game_servers/default_configs/factorio/server-settings.json',
    },
    'cs_go': {
        # https://steamcommunity.com/dev/managegameservers with app ID 730
        'login_token': '',
        'server_config': '~/game_servers/default_configs/csgo/server.cfg',
    },
    'garrys': {
        'steam_web_api_key': '',
    },
    'terraria': {
        'port': 7777,
        'world_path': '~/.local/share/Terraria/Worlds/world.wld',
        'world_name': 'world',
        'server_config': '~/game_servers/default_configs/terraria/config.txt',
    },
    'cod4': {
        'default_config': '~/game_servers/default_configs/cod4/default.cfg',
        'promod_config': '~/game_servers/default_configs/cod4/promod.cfg',
    },
}


def default_config_path() -> str:
    config_home = os.getenv('XDG_CONFIG_HOME') or os.path.expanduser('~/.config')
    return os.path.join(config_home, CONFIG_FILENAME)


def expand(path: str) -> str:
    return os.path.expanduser(str(path))


def merge_defaults(data: Dict[str, Any], defaults: Mapping[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(dict(defaults))
    for key, value in data.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_defaults(value, merged[key])
        else:
            merged[key] = value
    return merged


class Section(collections.abc.Mapping):
    """Game specific part of the configuration"""

    def __init__(self, name: str, data: Dict[str, Any]):
        self.name = name
        self.data = data

    def __getitem__(self, key: str) -> Any:
        try:
            return self.data[key]
        except KeyError:
            raise ConfigError(f'Missing setting {self.name}.{key}') from None

    def __iter__(self) -> Iterator[str]:
        return iter(self.data)

    def __len__(self) -> int:
        return len(self.data)

    def path(self, key: str) -> str:
        return expand(self[key])


class Config:

    def __init__(self, game_name: str, data: Optional[Dict[str, Any]] = None, path: Optional[str] = None):
        self.game_name = game_name
        self.data = merge_defaults(data or {}, DEFAULT_CONFIG)
        self.path = path
        self.instance: Optional[str] = None

    @classmethod
    def load(cls, game_name: str, path: Optional[str] = None) -> 'Config':
        """Loads the config file, or creates it with defaults when missing"""
        path = path or os.getenv('GAME_SERVERS_CONFIG') or default_config_path()

        if not os.path.exists(path):
            config = cls(game_name, path=path)
            config.write()
            log.info(f'Created default config at {path}')
            return config

        try:
            with open(path, 'rt', encoding='utf8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f'Invalid config file {path}: {e}') from e
        except OSError as e:
            raise ConfigError(f'Failed to read config file {path}: {e}') from e

        if not isinstance(data, dict):
            raise ConfigError(f'Invalid config file {path}: expected a JSON object')

        return cls(game_name, data, path)

    def write(self):
        path = self.path or default_config_path()
        try:
            os.makedirs(os.path.dirname(path) or '.', exist_ok=True)
            with open(path, 'wt', encoding='utf8') as f:
                json.dump(self.data, f, indent=4)
                f.write('\n')
        except OSError as e:
            raise ConfigError(f'Failed to write config file {path}: {e}') from e
        self.path = path

    def section(self, name: str) -> Section:
        data = self.data.get(name)
        if not isinstance(data, dict):
            raise ConfigError(f'Missing config section: {name}')
        return Section(name, data)

    @property
    def default_password(self) -> str:
        return self.data['default_password']

    @property
    def multiplexer(self) -> str:
        return self.data['multiplexer']

    @property
    def game_files(self) -> str:
        return expand(self.data['game_files'])

    @property
    def game_files_backup(self) -> str:
        return expand(self.data['game_files_backup'])

    @property
    def backup_root(self) -> str:
        return expand(self.data['backup_root'])

    @property
    def temp_dir(self) -> str:
        return expand(self.data['temp_dir'])

    @property
    def default_config_dir(self) -> str:
        return expand(self.data['default_configs'])

    @property
    def game_subpath(self) -> str:
        if self.instance:
            return os.path.join(self.game_name, self.instance)
        return self.game_name

    @property
    def session_name(self) -> str:
        if self.instance:
            return f'{self.game_name}-{self.instance}'
        return self.game_name

    @property
    def game_dir(self) -> str:
        return os.path.join(self.game_files, self.game_subpath)

    @property
    def backup_dir(self) -> str:
        return os.path.join(self.backup_root, self.game_subpath)

    @property
    def game_temp_dir(self) -> str:
        return os.path.join(self.temp_dir, self.game_subpath)

    @property
    def game_files_backup_dir(self) -> str:
        return os.path.join(self.game_files_backup, self.game_subpath)
