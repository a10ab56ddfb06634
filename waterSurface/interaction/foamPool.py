# -- Foam Particle Pool -- #

'''
Bounded pool of decorative foam particles.

Particles are stored as contiguous NumPy arrays (one row per live
particle) so aging, drifting and fading are single vectorized passes.
Expired rows are compacted out after every update; row order is an
implementation detail and not part of the contract.

Randomness comes from an injected numpy Generator, so a seeded pool
reproduces the same foam exactly.
'''

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from waterSurface import constants as const


@dataclass(frozen=True)
class FoamParticle:
    '''
    Read-only snapshot of one foam particle.

    Parameters:
    -----------
    position : tuple[float, float, float]
        World position [m]
    velocity : tuple[float, float, float]
        Horizontal drift velocity [m/s]; the y component is always 0
    size : float
        Billboard size [m]
    alpha : float
        Opacity in [0, 1]
    decayRate : float
        Exponential fade rate [1/s]
    remainingLifetime : float
        Time until removal [s]
    '''

    position: tuple[float, float, float]
    velocity: tuple[float, float, float]
    size: float
    alpha: float
    decayRate: float
    remainingLifetime: float


class FoamPool:
    '''
    Fixed-capacity foam particle arena.

    Parameters:
    -----------
    capacity : int
        Maximum number of live particles (default 1000)
    rng : np.random.Generator | None
        Random source; a fresh unseeded generator when None
    '''

    def __init__(
        self,
        capacity: int = const.maxFoamParticles,
        rng: np.random.Generator | None = None,
    ) -> None:
        self._capacity = int(capacity)
        self._rng = rng if rng is not None else np.random.default_rng()
        self._allocate()

    def _allocate(self) -> None:
        self._positions = np.zeros((self._capacity, 3))
        self._velocities = np.zeros((self._capacity, 3))
        self._sizes = np.zeros(self._capacity)
        self._alphas = np.zeros(self._capacity)
        self._decayRates = np.zeros(self._capacity)
        self._lifetimes = np.zeros(self._capacity)
        self._count = 0

    ######################################################################
    # -- Properties -- #
    ######################################################################

    @property
    def capacity(self) -> int:
        '''Maximum number of live particles.'''
        return self._capacity

    @property
    def count(self) -> int:
        '''Number of live particles.'''
        return self._count

    @property
    def remainingCapacity(self) -> int:
        return max(0, self._capacity - self._count)

    def __len__(self) -> int:
        return self._count

    @staticmethod
    def _readOnly(array: np.ndarray) -> np.ndarray:
        view = array.view()
        view.flags.writeable = False
        return view

    @property
    def positions(self) -> np.ndarray:
        '''Live particle positions, read-only view of shape (count, 3).'''
        return self._readOnly(self._positions[:self._count])

    @property
    def alphas(self) -> np.ndarray:
        '''Live particle opacities, read-only view of shape (count,).'''
        return self._readOnly(self._alphas[:self._count])

    @property
    def sizes(self) -> np.ndarray:
        '''Live particle sizes, read-only view of shape (count,).'''
        return self._readOnly(self._sizes[:self._count])

    @property
    def particles(self) -> tuple[FoamParticle, ...]:
        '''Snapshot of every live particle.'''
        return tuple(
            FoamParticle(
                position=tuple(float(v) for v in self._positions[i]),
                velocity=tuple(float(v) for v in self._velocities[i]),
                size=float(self._sizes[i]),
                alpha=float(self._alphas[i]),
                decayRate=float(self._decayRates[i]),
                remainingLifetime=float(self._lifetimes[i]),
            )
            for i in range(self._count)
        )

    ######################################################################
    # -- Spawning -- #
    ######################################################################

    def createFoamAtPosition(self, origin, amount: float, spread: float) -> int:
        '''
        Spawn round(amount * 20) particles in a horizontal disk around origin.

        The request is clipped to the remaining capacity. Each particle
        gets a uniform random offset within radius `spread`, a horizontal
        drift in [-0.5, 0.5] m/s per axis, size in [0.1, 0.3] m, full
        opacity, a fade rate in [0.5, 2] 1/s and a lifetime in [2, 5] s.

        Parameters:
        -----------
        origin : array-like
            Disk center (x, y, z) [m]
        amount : float
            Foam amount; particles requested = round(amount * 20)
        spread : float
            Disk radius [m]

        Returns:
        --------
        int : Number of particles actually created
        '''
        scaled = float(amount) * const.foamParticlesPerUnit
        if not math.isfinite(scaled):
            return 0

        # Python's round() is round-half-to-even
        requested = int(round(scaled))
        n = min(requested, self.remainingCapacity)
        if n <= 0:
            return 0

        rng = self._rng
        origin = np.asarray(origin, dtype=float).reshape(3)
        spread = float(spread)
        spread = max(0.0, spread) if math.isfinite(spread) else 0.0

        # Uniform over the disk area: r = R * sqrt(u)
        radii = spread * np.sqrt(rng.random(n))
        angles = rng.uniform(0.0, const.twoPi, n)

        start, stop = self._count, self._count + n

        self._positions[start:stop] = origin
        self._positions[start:stop, 0] += radii * np.cos(angles)
        self._positions[start:stop, 2] += radii * np.sin(angles)

        self._velocities[start:stop, 0] = rng.uniform(*const.foamDriftRange, n)
        self._velocities[start:stop, 1] = 0.0
        self._velocities[start:stop, 2] = rng.uniform(*const.foamDriftRange, n)

        self._sizes[start:stop] = rng.uniform(*const.foamSizeRange, n)
        self._alphas[start:stop] = 1.0
        self._decayRates[start:stop] = rng.uniform(*const.foamDecayRange, n)
        self._lifetimes[start:stop] = rng.uniform(*const.foamLifetimeRange, n)

        self._count = stop
        return n

    ######################################################################
    # -- Aging -- #
    ######################################################################

    def update(self, deltaTime: float) -> int:
        '''
        Age, drift and fade every particle; drop the expired ones.

        Parameters:
        -----------
        deltaTime : float
            Time step [s]

        Returns:
        --------
        int : Number of particles removed this tick
        '''
        n = self._count
        if n == 0:
            return 0

        self._lifetimes[:n] -= deltaTime
        alive = self._lifetimes[:n] > 0.0

        self._positions[:n][alive] += self._velocities[:n][alive] * deltaTime
        self._alphas[:n][alive] *= np.exp(-self._decayRates[:n][alive] * deltaTime)

        nAlive = int(np.count_nonzero(alive))
        removed = n - nAlive
        if removed:
            for array in (self._positions, self._velocities, self._sizes,
                          self._alphas, self._decayRates, self._lifetimes):
                array[:nAlive] = array[:n][alive]
            self._count = nAlive

        return removed

    def clear(self) -> None:
        '''Remove every particle.'''
        self._count = 0
