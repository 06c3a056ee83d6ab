"""Vibenator - wave survival arena simulation core"""

from .config import DEFAULT_BALANCE, BalanceConfig, WeaponKind, WeaponSpec
from .session import Phase, WaveSession
from .snapshots import EnemySnapshot, FrameResult, GameOver, ProjectileSnapshot, WaveCleared
from .upgrades import DOUBLE_SCORE, EXTRA_LIFE, RAPID_FIRE, SPEED_UP, UPGRADES, offer_upgrades

__all__ = [
    'BalanceConfig',
    'DEFAULT_BALANCE',
    'WeaponKind',
    'WeaponSpec',
    'Phase',
    'WaveSession',
    'FrameResult',
    'EnemySnapshot',
    'ProjectileSnapshot',
    'WaveCleared',
    'GameOver',
    'UPGRADES',
    'RAPID_FIRE',
    'SPEED_UP',
    'EXTRA_LIFE',
    'DOUBLE_SCORE',
    'offer_upgrades',
]
