from contextlib import contextmanager
from typing import List, Optional


class GameServerError(Exception):
    """Base error, carries a chain of context lines added on the way up"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
        self.contexts: List[str] = []

    def add_context(self, message: str) -> 'GameServerError':
        self.contexts.append(message)
        return self

    def __str__(self) -> str:
        lines = list(reversed(self.contexts))
        lines.append(self.message)
        return '\n  caused by: '.join(lines)


class ConfigError(GameServerError):
    pass


class SpawnError(GameServerError):

    def __init__(self, command: str, error: OSError):
        super().__init__(f'Failed during: {command}\nCritical error: {error}')
        self.command = command
        self.error = error


class NonZeroExit(GameServerError):

    def __init__(self, command: str, returncode: int, output: str = ''):
        message = f'Failed during: {command}\nGot non-zero exit code: {returncode}'
        if output:
            message += f'\n{output.rstrip()}'
        super().__init__(message)
        self.command = command
        self.returncode = returncode
        self.output = output


class SessionSpawnError(GameServerError):
    pass


class PreconditionError(GameServerError):
    """Operator error, the session is not in the state the operation needs"""


class SessionAlreadyOpen(PreconditionError):

    def __init__(self, session: str):
        super().__init__(f'Instance {session} already running')
        self.session = session


class SessionNotOpen(PreconditionError):

    def __init__(self, session: str):
        super().__init__(f'Instance {session} is not running')
        self.session = session


class TemplateError(GameServerError):

    def __init__(self, message: str, path: str, error: Optional[Exception] = None):
        if error is not None:
            message = f'{message}: {path}; [{error.__class__.__name__}] {error}'
        else:
            message = f'{message}: {path}'
        super().__init__(message)
        self.path = path
        self.error = error


class SourceNotFound(TemplateError):
    pass


class SourceUnreadable(TemplateError):
    pass


class DestinationWriteError(TemplateError):
    pass


class DestinationDeleteError(TemplateError):
    pass


class NotImplementedOperation(GameServerError):

    def __init__(self, operation: str, session: str):
        super().__init__(f'{session} - {operation.capitalize()} functionality is not implemented')
        self.operation = operation
        self.session = session


@contextmanager
def wrap_error(message: str):
    """Adds a context line to errors passing through, turns OSError into GameServerError"""
    try:
        yield
    except GameServerError as e:
        e.add_context(message)
        raise
    except OSError as e:
        raise GameServerError(f'{message}: [{e.__class__.__name__}] {e}') from e
