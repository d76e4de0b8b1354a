import datetime
import os
import shutil
from typing import Optional

from . import log
from .process import Runner

DATEFORMAT = '%Y-%m-%d_%H-%M'


def timestamp_for_filename(now: Optional[datetime.datetime] = None) -> str:
    return (now or datetime.datetime.now()).strftime(DATEFORMAT)


def backup_path(target_dir: str, save_name: str, extension: str, now: Optional[datetime.datetime] = None) -> str:
    """Path of a backup stamped to the minute, an older backup with the same name is removed"""
    os.makedirs(target_dir, exist_ok=True)
    dest = os.path.join(target_dir, f'{save_name}_{timestamp_for_filename(now)}.{extension}')
    if os.path.exists(dest):
        os.remove(dest)
    return dest


def backup_file(file_path: str, target_dir: str, save_name: str, extension: str, *, now: Optional[datetime.datetime] = None) -> str:
    dest = backup_path(target_dir, save_name, extension, now)
    log.info(f'Copying {file_path} to {dest}')
    shutil.copyfile(file_path, dest)
    return dest


def backup_directory(dir_path: str, target_dir: str, save_name: str, *, runner: Optional[Runner] = None, now: Optional[datetime.datetime] = None) -> str:
    """Archives a directory as zstd compressed tarball"""
    dest = backup_path(target_dir, save_name, 'tar.zst', now)
    log.info(f'Backing up {dir_path} to {dest}')
    (runner or Runner()).run_success(['tar', '-I', 'zstd', '-cf', dest, dir_path])
    return dest
