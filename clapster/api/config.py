from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass
class EngineConfig:
    screen_size: Tuple[int, int]
    mirror: bool = False
    debug: bool = False
    seed: Optional[int] = None
    tick_interval: Optional[float] = None   # None: use the game's manifest/default
    sound: bool = True
