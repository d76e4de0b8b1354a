import os
from typing import Optional

from . import log


def expand_home(path: str) -> str:
    return os.path.expanduser(str(path))


def get_newest_file(dir_path: str) -> Optional[str]:
    """Returns the most recently modified entry of a directory, None if it is empty"""
    newest = None
    newest_mtime = 0.0
    for entry in os.scandir(dir_path):
        mtime = entry.stat().st_mtime
        if newest is None or mtime > newest_mtime:
            newest = entry.path
            newest_mtime = mtime
    return newest


def ensure_steam_client_link(sdk_dir: str, steamclient_path: str):
    """Links steamclient.so into the SDK folder some dedicated servers load it from"""
    sdk_dir = expand_home(sdk_dir)
    steamclient_path = expand_home(steamclient_path)
    os.makedirs(sdk_dir, exist_ok=True)

    link_path = os.path.join(sdk_dir, 'steamclient.so')
    if os.path.exists(steamclient_path) and not os.path.lexists(link_path):
        log.debug(f'Linking {steamclient_path} to {link_path}')
        os.symlink(steamclient_path, link_path)
