# -- Surface Interaction Pool -- #

'''
Bounded pool of transient surface disturbances (splashes, wakes, ripples).

Each interaction is a ring that expands at a constant rate while its
amplitude decays exponentially, and is retired once its lifetime runs
out. The pool is a dense list with swap-remove on retirement, so
iteration order is not insertion order once anything has expired.
'''

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import IntEnum

import numpy as np

from waterSurface import constants as const

logger = logging.getLogger(__name__)


######################################################################
# -- Interaction Data -- #
######################################################################

class InteractionType(IntEnum):
    '''Disturbance kind; the integer value is what the shader receives.'''
    SPLASH = 0
    WAKE = 1
    RIPPLE = 2


@dataclass
class Interaction:
    '''
    A single expanding, decaying surface disturbance.

    Parameters:
    -----------
    position : np.ndarray
        World position of the disturbance center (x, y, z) [m]
    interactionType : InteractionType
        Splash, wake, or ripple
    initialAmplitude : float
        Amplitude at creation [m]
    currentAmplitude : float
        Amplitude after decay [m]
    initialRadius : float
        Ring radius at creation [m]
    currentRadius : float
        Ring radius after expansion [m]
    expansionRate : float
        Radius growth rate [m/s]
    decayRate : float
        Exponential amplitude decay rate [1/s]
    remainingLifetime : float
        Time until retirement [s]
    '''

    position: np.ndarray
    interactionType: InteractionType
    initialAmplitude: float
    currentAmplitude: float
    initialRadius: float
    currentRadius: float
    expansionRate: float
    decayRate: float
    remainingLifetime: float

    @property
    def isAlive(self) -> bool:
        '''True until the lifetime has run out.'''
        return self.remainingLifetime > 0.0

    def advance(self, deltaTime: float) -> bool:
        '''
        Age the interaction by one tick.

        Parameters:
        -----------
        deltaTime : float
            Time step [s]

        Returns:
        --------
        bool : False if the interaction expired this tick
        '''
        self.remainingLifetime -= deltaTime
        if self.remainingLifetime <= 0.0:
            return False

        self.currentRadius += self.expansionRate * deltaTime
        self.currentAmplitude *= math.exp(-self.decayRate * deltaTime)
        return True


######################################################################
# -- Interaction Pool -- #
######################################################################

class InteractionPool:
    '''
    Fixed-capacity set of active interactions.

    Parameters:
    -----------
    capacity : int
        Maximum simultaneously active interactions (default 64)
    '''

    def __init__(self, capacity: int = const.maxActiveInteractions) -> None:
        self._capacity = int(capacity)
        self._interactions: list[Interaction] = []

    @property
    def capacity(self) -> int:
        '''Maximum number of active interactions.'''
        return self._capacity

    @property
    def count(self) -> int:
        '''Number of active interactions.'''
        return len(self._interactions)

    @property
    def isFull(self) -> bool:
        '''True when no further interaction can be added.'''
        return len(self._interactions) >= self._capacity

    @property
    def interactions(self) -> tuple[Interaction, ...]:
        '''Active interactions (order not guaranteed).'''
        return tuple(self._interactions)

    def __len__(self) -> int:
        return len(self._interactions)

    def add(self, interaction: Interaction) -> bool:
        '''
        Insert an interaction if there is room.

        Parameters:
        -----------
        interaction : Interaction
            Interaction to insert

        Returns:
        --------
        bool : False if the pool was full (nothing inserted)
        '''
        if self.isFull:
            logger.debug('Interaction pool full (%d); dropping %s',
                         self._capacity, interaction.interactionType.name)
            return False

        self._interactions.append(interaction)
        return True

    def update(self, deltaTime: float) -> int:
        '''
        Age every interaction and retire the expired ones.

        Expired entries are swap-removed with the last entry, so the
        survivors do not keep their insertion order.

        Parameters:
        -----------
        deltaTime : float
            Time step [s]

        Returns:
        --------
        int : Number of interactions retired this tick
        '''
        retired = 0
        i = 0
        while i < len(self._interactions):
            if self._interactions[i].advance(deltaTime):
                i += 1
                continue

            # Swap-remove; re-examine index i, which now holds the old last entry
            last = self._interactions.pop()
            if i < len(self._interactions):
                self._interactions[i] = last
            retired += 1

        return retired

    def packForShader(
        self, limit: int = const.shaderInteractionLimit
    ) -> tuple[np.ndarray, np.ndarray]:
        '''
        Pack the first `limit` interactions into shader arrays.

        positions[i] = (x, y, z, type)
        params[i]    = (currentAmplitude, currentRadius, remainingLifetime, 0)

        Parameters:
        -----------
        limit : int
            Shader array length (default 32)

        Returns:
        --------
        tuple[np.ndarray, np.ndarray] : (positions, params), each
            (limit, 4) float32, zero past the active count
        '''
        positions = np.zeros((limit, 4), dtype=np.float32)
        params = np.zeros((limit, 4), dtype=np.float32)

        for i, interaction in enumerate(self._interactions[:limit]):
            positions[i, :3] = interaction.position
            positions[i, 3] = float(interaction.interactionType)
            params[i] = (
                interaction.currentAmplitude,
                interaction.currentRadius,
                interaction.remainingLifetime,
                0.0,
            )

        return positions, params

    def clear(self) -> None:
        '''Retire every interaction immediately.'''
        self._interactions.clear()
