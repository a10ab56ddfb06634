# -- Water Surface -- #

'''
One procedural water surface: wave field, animation clock, and the
splash / wake / foam manager, behind a single query API.

Lifecycle is explicit: construct, call update(deltaTime) once per
tick, then dispose(). All queries are pure reads of the state left by
the last update.

Query points are world-space (x, y, z) with y up. Wave phases are
evaluated relative to the configured origin, and heights are returned
in world space (baseElevation + wave height).
'''

from __future__ import annotations

import numpy as np

from waterSurface.config import SurfaceConfig
from waterSurface.interaction.foamPool import FoamParticle
from waterSurface.interaction.interactionManager import InteractionManager
from waterSurface.waves.clock import WaveClock
from waterSurface.waves.gerstner import UP, GerstnerEvaluator
from waterSurface.waves.protocols import WaveModel
from waterSurface.waves.waveField import WaveField


class WaterSurface:
    '''
    Procedural water surface instance.

    Parameters:
    -----------
    config : SurfaceConfig | None
        Surface configuration; the ocean preset when None. The surface
        owns it (and its wave field) from here on.
    clock : WaveClock | None
        Shared animation clock; a private clock when None
    ownsClock : bool
        Whether this surface advances the clock in update(). For a
        shared clock exactly one surface should own it.
    waveModel : WaveModel | None
        Height-field model; GerstnerEvaluator when None
    rng : np.random.Generator | None
        Foam random source; seeded from config.seed when None
    '''

    def __init__(
        self,
        config: SurfaceConfig | None = None,
        clock: WaveClock | None = None,
        ownsClock: bool = True,
        waveModel: WaveModel | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.config = config if config is not None else SurfaceConfig.ocean()
        self.config.waves.validate()

        self.clock = clock if clock is not None else WaveClock()
        self.ownsClock = ownsClock
        self.waveModel = waveModel if waveModel is not None else GerstnerEvaluator()

        if rng is None:
            rng = np.random.default_rng(self.config.seed)
        self.interactions = InteractionManager(
            rng=rng, enabled=self.config.enableInteractions
        )

    #--------------------------------------------------------------------#
    # -- Properties -- #
    #--------------------------------------------------------------------#
    @property
    def waveField(self) -> WaveField:
        '''The live wave field; edit it through its mutation API.'''
        return self.config.waves

    @property
    def time(self) -> float:
        '''Current animation time [s].'''
        return self.clock.time

    @property
    def baseElevation(self) -> float:
        return self.config.baseElevation

    def _syncInteractionFlag(self) -> None:
        self.interactions.enabled = self.config.enableInteractions

    def _toLocal(self, point) -> np.ndarray:
        pts = np.asarray(point, dtype=float)
        offset = np.array([self.config.origin[0], 0.0, self.config.origin[1]])
        return pts - offset

    #--------------------------------------------------------------------#
    # -- Tick -- #
    #--------------------------------------------------------------------#
    def update(self, deltaTime: float) -> None:
        '''
        Advance the surface by one tick.

        The clock advances by deltaTime * waveSpeed only when waves are
        enabled and this surface owns the clock. Interactions and foam
        age only when interactions are enabled.

        Parameters:
        -----------
        deltaTime : float
            Frame time step [s]
        '''
        if self.config.enableWaves and self.ownsClock:
            self.clock.advance(deltaTime, self.config.waveSpeed)

        self._syncInteractionFlag()
        self.interactions.update(deltaTime)

    #--------------------------------------------------------------------#
    # -- Surface Queries -- #
    #--------------------------------------------------------------------#
    def getHeightAtPosition(self, point) -> float | np.ndarray:
        '''
        World-space surface height below/above a point.

        Parameters:
        -----------
        point : array-like
            World position(s) (x, y, z), (3,) or (M, 3); y is ignored

        Returns:
        --------
        float | np.ndarray : Surface height [m], float or (M,)
        '''
        base = self.config.baseElevation
        local = self._toLocal(point)

        if not self.config.enableWaves:
            return base if local.ndim == 1 else np.full(len(local), base)

        height = self.waveModel.heightAt(
            self.waveField, self.clock.time, local, self.config.waveStrength
        )
        return base + height

    def getNormalAtPosition(self, point) -> np.ndarray:
        '''
        Unit surface normal at a point.

        Parameters:
        -----------
        point : array-like
            World position(s) (x, y, z), (3,) or (M, 3)

        Returns:
        --------
        np.ndarray : Unit normal, (3,) or (M, 3); straight up when waves
            are disabled
        '''
        local = self._toLocal(point)

        if not self.config.enableWaves:
            return UP.copy() if local.ndim == 1 else np.tile(UP, (len(local), 1))

        return self.waveModel.normalAt(self.waveField, self.clock.time, local)

    def getDisplacementAtPosition(self, point) -> np.ndarray:
        '''
        Full Gerstner (x, y, z) displacement of the surface sample at a point.

        The y component is relative to baseElevation.

        Parameters:
        -----------
        point : array-like
            World position(s) (x, y, z), (3,) or (M, 3)

        Returns:
        --------
        np.ndarray : Displacement [m], (3,) or (M, 3)
        '''
        local = self._toLocal(point)

        if not self.config.enableWaves:
            return np.zeros(local.shape)

        return self.waveModel.displacementAt(
            self.waveField, self.clock.time, local, self.config.waveStrength
        )

    def isUnderwater(self, point) -> bool | np.ndarray:
        '''
        Whether a point lies below the surface.

        Parameters:
        -----------
        point : array-like
            World position(s) (x, y, z), (3,) or (M, 3)

        Returns:
        --------
        bool | np.ndarray : True where y < surface height
        '''
        pts = np.asarray(point, dtype=float)
        heights = self.getHeightAtPosition(pts)
        if pts.ndim == 1:
            return bool(pts[1] < heights)
        return pts[:, 1] < heights

    #--------------------------------------------------------------------#
    # -- Interactions -- #
    #--------------------------------------------------------------------#
    def createSplash(self, position, intensity: float, radius: float = 1.0) -> bool:
        '''Start a splash; see InteractionManager.createSplash.'''
        self._syncInteractionFlag()
        return self.interactions.createSplash(position, intensity, radius)

    def createWake(self, position, velocity, intensity: float) -> bool:
        '''Start a wake; see InteractionManager.createWake.'''
        self._syncInteractionFlag()
        return self.interactions.createWake(position, velocity, intensity)

    def getInteractionsForShader(self) -> tuple[np.ndarray, np.ndarray]:
        return self.interactions.getInteractionsForShader()

    def getFoamParticles(self) -> tuple[FoamParticle, ...]:
        return self.interactions.getFoamParticles()

    def dispose(self) -> None:
        '''Release interaction and foam state. The clock is left alone.'''
        self.interactions.dispose()
