import os
from typing import Mapping

from . import log
from .errors import DestinationDeleteError, DestinationWriteError, SourceNotFound, SourceUnreadable


def render_secrets(text: str, secrets: Mapping[str, str]) -> str:
    """Replaces each ``{{ name }}`` placeholder with its secret, one pass per secret

    Placeholders without a secret are left untouched.
    """
    for key, value in secrets.items():
        text = text.replace('{{ %s }}' % key, str(value))
    return text


def copy_secret_file(src: str, dest: str, secrets: Mapping[str, str]):
    """Renders the template at src with the given secrets and writes it to dest

    An existing dest is removed before writing, the replacement is not atomic.
    """
    try:
        with open(src, 'rt', encoding='utf8', newline='') as f:
            content = f.read()
    except FileNotFoundError as e:
        raise SourceNotFound('Template not found', src, e) from e
    except (OSError, UnicodeDecodeError) as e:
        raise SourceUnreadable('Failed to read template', src, e) from e

    content = render_secrets(content, secrets)

    if os.path.lexists(dest):
        try:
            os.remove(dest)
        except OSError as e:
            raise DestinationDeleteError('Failed to remove existing file', dest, e) from e

    try:
        with open(dest, 'wt', encoding='utf8', newline='') as f:
            f.write(content)
    except OSError as e:
        raise DestinationWriteError('Failed to write file', dest, e) from e

    log.debug(f'Deployed {src} to {dest}')
