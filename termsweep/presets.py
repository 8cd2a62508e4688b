from __future__ import annotations
from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class Preset:
    name: str
    size: int
    mines: int


PRESETS: Dict[str, Preset] = {
    p.name: p for p in (
        Preset('beginner', 9, 10),
        Preset('intermediate', 16, 40),
        Preset('expert', 22, 99),
    )
}
