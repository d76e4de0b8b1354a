import sys
from datetime import datetime

from .errors import ConfigError

WARN = 0
INFO = 1
DEBUG = 2
TRACE = 3

LEVEL_NAMES = {
    'ERROR': WARN,
    'WARN': WARN,
    'INFO': INFO,
    'DEBUG': DEBUG,
    'TRACE': TRACE,
}

level = INFO


def configure(value: str) -> int:
    """Sets the verbosity from a LOGLEVEL value: 0=warn, 1=info, 2=debug, 3=trace"""
    global level
    if value not in ('0', '1', '2', '3'):
        raise ConfigError(f'Found unexpected log level {value}')
    level = int(value)
    return level


def timestamp() -> str:
    return datetime.now().strftime('%H:%M:%S')


def log(name: str, message: str):
    if LEVEL_NAMES[name] > level:
        return
    print(f'{timestamp()} {name}: {message}', file=sys.stderr)


def trace(message: str):
    log('TRACE', message)


def debug(message: str):
    log('DEBUG', message)


def info(message: str):
    log('INFO', message)


def warn(message: str):
    log('WARN', message)


def error(message: str):
    log('ERROR', message)
