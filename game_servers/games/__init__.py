from typing import Dict, Type

from ..server import GameServer
from .abiotic_factor import AbioticFactor
from .cod4 import Cod4
from .cs_go import CsGo
from .factorio import Factorio
from .garrys import Garrys
from .minecraft import Minecraft
from .satisfactory import Satisfactory
from .terraria import Terraria
from .unturned import Unturned
from .ut2004 import Ut2004

GAMES: Dict[str, Type[GameServer]] = {
    game.name: game for game in (
        AbioticFactor,
        Cod4,
        CsGo,
        Factorio,
        Garrys,
        Minecraft,
        Satisfactory,
        Terraria,
        Unturned,
        Ut2004,
    )
}
