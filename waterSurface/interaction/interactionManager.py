# -- Interaction Manager -- #

'''
Creation API and per-tick lifecycle for splashes, wakes and foam.

Owns one InteractionPool (64 disturbances) and one FoamPool (1000
particles). Requests are best-effort: a disabled manager, a full pool
or a too-slow wake simply drops the request, as does any non-finite
position, intensity or radius.
'''

from __future__ import annotations

import logging
import math

import numpy as np

from waterSurface import constants as const
from waterSurface.interaction.foamPool import FoamParticle, FoamPool
from waterSurface.interaction.interactionPool import (
    Interaction,
    InteractionPool,
    InteractionType,
)

logger = logging.getLogger(__name__)


class InteractionManager:
    '''
    Splash / wake / foam orchestration for one water surface.

    Parameters:
    -----------
    rng : np.random.Generator | None
        Random source handed to the foam pool
    enabled : bool
        Initial enabled state; while False, creation and update are
        no-ops and existing state is kept
    '''

    def __init__(
        self,
        rng: np.random.Generator | None = None,
        enabled: bool = True,
    ) -> None:
        self.enabled = enabled
        self._interactions = InteractionPool(const.maxActiveInteractions)
        self._foam = FoamPool(const.maxFoamParticles, rng=rng)

    @property
    def activeInteractionCount(self) -> int:
        return self._interactions.count

    @property
    def foamParticleCount(self) -> int:
        return self._foam.count

    @property
    def interactionPool(self) -> InteractionPool:
        return self._interactions

    @property
    def foamPool(self) -> FoamPool:
        return self._foam

    ######################################################################
    # -- Creation -- #
    ######################################################################

    def createSplash(self, position, intensity: float, radius: float = 1.0) -> bool:
        '''
        Start an expanding splash ring and spawn foam around it.

        Parameters:
        -----------
        position : array-like
            Splash center (x, y, z) [m]
        intensity : float
            Initial ring amplitude [m]; foam amount is half of it
        radius : float
            Initial ring radius and foam spread [m]

        Returns:
        --------
        bool : True if the splash was created
        '''
        if not self.enabled:
            return False

        position = np.asarray(position, dtype=float).reshape(3).copy()
        intensity = float(intensity)
        radius = float(radius)
        if not (math.isfinite(intensity) and math.isfinite(radius) and np.all(np.isfinite(position))):
            logger.debug('Splash dropped: non-finite input')
            return False

        splash = Interaction(
            position=position,
            interactionType=InteractionType.SPLASH,
            initialAmplitude=intensity,
            currentAmplitude=intensity,
            initialRadius=radius,
            currentRadius=radius,
            expansionRate=const.splashExpansionRate,
            decayRate=const.splashDecayRate,
            remainingLifetime=const.splashLifetime,
        )
        if not self._interactions.add(splash):
            return False

        self._foam.createFoamAtPosition(position, intensity * const.splashFoamFactor, radius)
        return True

    def createWake(self, position, velocity, intensity: float) -> bool:
        '''
        Start a wake ring behind a moving object.

        Objects slower than 0.1 m/s leave no wake.

        Parameters:
        -----------
        position : array-like
            Wake origin (x, y, z) [m]
        velocity : array-like
            Object velocity (x, y, z) [m/s]
        intensity : float
            Wake strength; ring amplitude is half of it

        Returns:
        --------
        bool : True if the wake was created
        '''
        if not self.enabled:
            return False

        speed = float(np.linalg.norm(np.asarray(velocity, dtype=float)))
        if not speed >= const.minWakeSpeed:
            logger.debug('Wake dropped: speed %.3f m/s below %.2f m/s', speed, const.minWakeSpeed)
            return False

        position = np.asarray(position, dtype=float).reshape(3).copy()
        intensity = float(intensity)
        if not (math.isfinite(intensity) and np.all(np.isfinite(position))):
            logger.debug('Wake dropped: non-finite input')
            return False

        amplitude = intensity * const.wakeAmplitudeFactor
        wake = Interaction(
            position=position,
            interactionType=InteractionType.WAKE,
            initialAmplitude=amplitude,
            currentAmplitude=amplitude,
            initialRadius=const.wakeInitialRadius,
            currentRadius=const.wakeInitialRadius,
            expansionRate=const.wakeExpansionRate,
            decayRate=const.wakeDecayRate,
            remainingLifetime=const.wakeLifetime,
        )
        if not self._interactions.add(wake):
            return False

        self._foam.createFoamAtPosition(
            position, intensity * const.wakeFoamFactor, const.wakeFoamSpread
        )
        return True

    ######################################################################
    # -- Lifecycle -- #
    ######################################################################

    def update(self, deltaTime: float) -> None:
        '''Age interactions, then foam. Skipped entirely while disabled.'''
        if not self.enabled:
            return
        self._interactions.update(deltaTime)
        self._foam.update(deltaTime)

    def getInteractionsForShader(self) -> tuple[np.ndarray, np.ndarray]:
        '''
        Fixed-size interaction snapshot for upload.

        Returns:
        --------
        tuple[np.ndarray, np.ndarray] : (positions, params), each (32, 4)
            float32. positions rows are (x, y, z, type); params rows are
            (amplitude, radius, lifetime, 0). Rows past the active count
            are zero.
        '''
        return self._interactions.packForShader(const.shaderInteractionLimit)

    def getFoamParticles(self) -> tuple[FoamParticle, ...]:
        return self._foam.particles

    def dispose(self) -> None:
        '''Drop every interaction and foam particle.'''
        self._interactions.clear()
        self._foam.clear()
