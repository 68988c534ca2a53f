from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional
import random
import time

from .errors import BasicRuntimeError
from .types import Value, default_value


@dataclass
class LoopFrame:
    """Saved state of an active FOR loop."""
    variable: str
    current: float
    end: float
    step: float
    line_num: int


class Environment:
    """Execution state of a single program run.

    Variable names are stored uppercased, so ``a`` and ``A`` are the same
    variable. The random generator is owned here so that a seeded run is
    reproducible.
    """
    def __init__(self, seed: Optional[int] = None):
        self.variables: Dict[str, Value] = {}
        self.program_counter = 0
        self.loop_frames: List[LoopFrame] = []
        self.random_seed = time.time_ns() if seed is None else seed
        self.rng = random.Random(self.random_seed)
        # per-step control flags read by the interpreter loop
        self.jumped = False
        self.halted = False

    def get(self, name: str) -> Value:
        key = name.upper()
        if key in self.variables:
            return self.variables[key]
        return default_value(key)

    def set(self, name: str, value: Value):
        if not name:
            raise BasicRuntimeError('invalid variable name')
        self.variables[name.upper()] = value

    def push_loop(self, frame: LoopFrame):
        self.loop_frames.append(frame)

    def top_loop(self) -> Optional[LoopFrame]:
        if self.loop_frames:
            return self.loop_frames[-1]
        return None

    def pop_loop(self) -> LoopFrame:
        return self.loop_frames.pop()
