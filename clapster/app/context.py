from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple
from clapster.api.config import EngineConfig


@dataclass
class Context:
    screen: Any            # pygame.Surface; None when driven headless
    cfg: EngineConfig
    # engine internals exposed read-only for games if needed:
    resources: dict[str, Any]
    screen_size: Tuple[int, int]
    # seconds; FrameData.timestamp uses the same clock
    clock: Optional[Callable[[], float]] = None
