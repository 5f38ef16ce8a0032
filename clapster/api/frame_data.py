from __future__ import annotations
from dataclasses import dataclass, field
from typing import List


@dataclass
class Point:
    x: float
    y: float


@dataclass
class FrameData:
    timestamp: float   # seconds, same clock the game's engine runs on
    # taps registered since the previous frame, in logical (unmirrored) screen coords
    taps: List[Point] = field(default_factory=list)
