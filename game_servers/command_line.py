import shlex
from typing import Dict, List, Optional, Union


class EnvRef:
    """Reference to an environment variable, expanded by the shell inside the session"""

    def __init__(self, name: str):
        self.name = name

    def __eq__(self, other) -> bool:
        return isinstance(other, EnvRef) and other.name == self.name

    def __repr__(self) -> str:
        return f'EnvRef({self.name!r})'

    def render(self) -> str:
        return f'"${self.name}"'


Token = Union[str, EnvRef]


class CommandLine:
    """Server launch command as an ordered list of tokens plus environment variables

    Tokens are quoted one by one when rendered, so values with spaces or
    quotes need no escaping by the caller.
    """

    def __init__(self, program: str, *args: Token, env: Optional[Dict[str, str]] = None):
        self.tokens: List[Token] = [program]
        self.tokens.extend(args)
        self.env: Dict[str, str] = dict(env or {})

    def __repr__(self) -> str:
        return f'CommandLine({self.render()!r})'

    def arg(self, *tokens: Token) -> 'CommandLine':
        self.tokens.extend(tokens)
        return self

    def setenv(self, key: str, value: str) -> 'CommandLine':
        self.env[key] = value
        return self

    @staticmethod
    def quote(token: Token) -> str:
        if isinstance(token, EnvRef):
            return token.render()
        return shlex.quote(str(token))

    def render(self) -> str:
        return ' '.join(self.quote(token) for token in self.tokens)
