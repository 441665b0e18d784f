"""
Utility functions for game mechanics
"""

from __future__ import annotations
import random
from typing import Optional
import numpy as np

from .entities import Entity


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def aabb_overlap(a: Entity, b: Entity) -> bool:
    """Check if two center-anchored bounding boxes overlap (edges touching do not count)"""
    return (abs(a.x - b.x) < (a.width + b.width) / 2 and
            abs(a.y - b.y) < (a.height + b.height) / 2)


def manhattan_distance(a: Entity, b: Entity) -> float:
    """Manhattan distance between two entity centers"""
    return abs(a.x - b.x) + abs(a.y - b.y)


def seed_everything(py_seed: Optional[int]):
    """Seed all random number generators"""
    if py_seed is None:
        return
    random.seed(py_seed)
    np.random.seed(py_seed)
