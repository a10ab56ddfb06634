# -- Wave Model Protocol -- #

'''
Protocol defining the query interface any surface wave model must satisfy.

Allows the Gerstner evaluator to be swapped for another height-field
model without changing WaterSurface or its callers.
'''

from __future__ import annotations

from typing import Protocol, TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from waterSurface.waves.waveField import WaveField


class WaveModel(Protocol):
    '''
    Protocol for procedural surface wave models.

    Points are (x, y, z) with y up, given either as a single (3,)
    point or an (M, 3) batch. Points are relative to the surface
    origin; the y component is ignored.
    '''

    def heightAt(
        self, waveField: WaveField, t: float, points: np.ndarray, waveStrength: float = 1.0
    ) -> float | np.ndarray:
        '''Vertical displacement above the baseline [m].'''
        ...

    def normalAt(
        self, waveField: WaveField, t: float, points: np.ndarray
    ) -> np.ndarray:
        '''Unit surface normal, shape (3,) or (M, 3).'''
        ...

    def displacementAt(
        self, waveField: WaveField, t: float, points: np.ndarray, waveStrength: float = 1.0
    ) -> np.ndarray:
        '''Full (x, y, z) displacement [m], shape (3,) or (M, 3).'''
        ...
