"""
Vector helpers for arena mechanics
"""

from __future__ import annotations
import math
from typing import NamedTuple, Tuple


class Vec2(NamedTuple):
    """2D value type (arena coordinates, y grows downward)"""
    x: float
    y: float


ZERO = Vec2(0.0, 0.0)
UP = Vec2(0.0, -1.0)


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def vec_len(x: float, y: float) -> float:
    """Calculate vector length (magnitude)"""
    return math.hypot(x, y)


def normalize(x: float, y: float, eps: float = 1e-8) -> Tuple[float, float]:
    """Normalize a vector to unit length; zero-length input gives (0, 0)"""
    l = math.hypot(x, y)
    if l < eps:
        return 0.0, 0.0
    return x / l, y / l


def direction(src: Vec2, dst: Vec2) -> Vec2:
    """Unit vector from src to dst, or ZERO when the points coincide.

    Callers treat ZERO as "no preferred heading".
    """
    return Vec2(*normalize(dst[0] - src[0], dst[1] - src[1]))


def distance(a: Vec2, b: Vec2) -> float:
    """Euclidean distance between two points"""
    return math.hypot(a[0] - b[0], a[1] - b[1])


def rotate(x: float, y: float, angle: float) -> Tuple[float, float]:
    """Rotate a vector by angle radians"""
    c = math.cos(angle)
    s = math.sin(angle)
    return x * c - y * s, x * s + y * c


def circle_collide(x1, y1, r1, x2, y2, r2) -> bool:
    """Check if two circles overlap (touching edges do not count)"""
    dx = x1 - x2
    dy = y1 - y2
    rr = r1 + r2
    return (dx * dx + dy * dy) < (rr * rr)
