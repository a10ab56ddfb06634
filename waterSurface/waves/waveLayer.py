# -- Gerstner Wave Layer Dataclass -- #

'''
One additive Gerstner wave component.

Holds the per-layer parameters (direction, amplitude, wavelength,
steepness, speed, phase) and the values derived from them. The
steepness bound depends on how many layers share the field, so
a layer is only fully valid in the context of its owning WaveField.
'''

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np

from waterSurface import constants as const


def normalizeDirection(direction) -> np.ndarray:
    '''
    Normalize a 2D horizontal direction.

    Parameters:
    -----------
    direction : array-like
        Direction (dx, dz) of any length

    Returns:
    --------
    np.ndarray : Unit vector, or (1, 0) if the input is degenerate
    '''
    vec = np.asarray(direction, dtype=float).reshape(2)
    magnitude = float(np.hypot(vec[0], vec[1]))
    if not math.isfinite(magnitude) or magnitude < const.directionEpsilon:
        return np.array([1.0, 0.0])
    return vec / magnitude


def _finiteOr(value, fallback: float) -> float:
    value = float(value)
    return value if math.isfinite(value) else fallback


@dataclass
class WaveLayer:
    '''
    Parameters for a single Gerstner wave.

    Parameters:
    -----------
    direction : np.ndarray
        Propagation direction (dx, dz) in the horizontal plane
    amplitude : float
        Wave amplitude a [m] (half the trough-to-crest height)
    wavelength : float
        Crest-to-crest distance lambda [m]
    steepness : float
        Crest sharpness Q in [0, 1]; 0 is a pure sine
    speed : float
        Phase speed [m/s]; 0 derives it from the dispersion relation
    phase : float
        Phase offset [rad] in [0, 2*pi)
    '''

    direction: np.ndarray = field(default_factory=lambda: np.array([1.0, 0.0]))
    amplitude: float = 0.5      # m
    wavelength: float = 10.0    # m
    steepness: float = 0.5
    speed: float = 0.0          # m/s
    phase: float = 0.0          # rad

    def __post_init__(self) -> None:
        self.direction = np.asarray(self.direction, dtype=float).reshape(2).copy()

    #--------------------------------------------------------------------#
    # -- Derived Values -- #
    #--------------------------------------------------------------------#
    @property
    def wavenumber(self) -> float:
        '''Wavenumber k = 2*pi/lambda [rad/m].'''
        return const.twoPi / max(self.wavelength, const.minWavelength)

    def calculatePhaseSpeed(self) -> float:
        '''
        Deep-water phase speed from the dispersion relation.

        c = sqrt(g / k) = sqrt(g * lambda / (2*pi))

        Returns:
        --------
        float : Phase speed [m/s]
        '''
        return math.sqrt(const.gravity / self.wavenumber)

    @property
    def effectiveSpeed(self) -> float:
        '''Authored speed, or the dispersion speed when set to auto [m/s].'''
        if self.speed > const.autoSpeedThreshold:
            return self.speed
        return self.calculatePhaseSpeed()

    def calculateMaxSteepness(self, totalWaves: int) -> float:
        '''
        Largest steepness that keeps N superposed waves from looping.

        Q_max = 1 / (k * a * N)

        Parameters:
        -----------
        totalWaves : int
            Number of layers N in the owning field

        Returns:
        --------
        float : Steepness bound (1.0 when a or N is ~0)
        '''
        denominator = self.wavenumber * self.amplitude * totalWaves
        if denominator < const.steepnessEpsilon:
            return 1.0
        return 1.0 / denominator

    #--------------------------------------------------------------------#
    # -- Validation -- #
    #--------------------------------------------------------------------#
    def normalizeDirection(self) -> None:
        '''Normalize direction in place, defaulting to (1, 0).'''
        self.direction = normalizeDirection(self.direction)

    def validate(self, totalWaves: int) -> None:
        '''
        Clamp parameters to their safe ranges for a field of N layers.

        Parameters:
        -----------
        totalWaves : int
            Number of layers N in the owning field
        '''
        # Non-finite values fall back to the lower bound of their range
        self.amplitude = max(0.0, _finiteOr(self.amplitude, 0.0))
        self.wavelength = max(const.minWavelength, _finiteOr(self.wavelength, const.minWavelength))
        self.speed = max(0.0, _finiteOr(self.speed, 0.0))
        self.phase = _finiteOr(self.phase, 0.0) % const.twoPi

        maxSteepness = self.calculateMaxSteepness(totalWaves)
        steepness = _finiteOr(self.steepness, 0.0)
        self.steepness = min(max(min(steepness, maxSteepness), 0.0), 1.0)

        self.normalizeDirection()

    #--------------------------------------------------------------------#
    # -- Copy & Dict I/O -- #
    #--------------------------------------------------------------------#
    def copy(self) -> WaveLayer:
        '''Independent copy of this layer.'''
        return WaveLayer(
            direction=self.direction.copy(),
            amplitude=self.amplitude,
            wavelength=self.wavelength,
            steepness=self.steepness,
            speed=self.speed,
            phase=self.phase,
        )

    def toDict(self) -> dict:
        '''Plain-dict form of the layer (config schema).'''
        return {
            'direction': [float(self.direction[0]), float(self.direction[1])],
            'amplitude': float(self.amplitude),
            'wavelength': float(self.wavelength),
            'steepness': float(self.steepness),
            'speed': float(self.speed),
            'phase': float(self.phase),
        }

    @classmethod
    def fromDict(cls, data: dict) -> WaveLayer:
        '''
        Build a layer from a config dict, defaulting missing keys.

        Parameters:
        -----------
        data : dict
            Layer section of the configuration

        Returns:
        --------
        WaveLayer : Unvalidated layer
        '''
        return cls(
            direction=np.array(data.get('direction', [1.0, 0.0]), dtype=float),
            amplitude=data.get('amplitude', 0.5),
            wavelength=data.get('wavelength', 10.0),
            steepness=data.get('steepness', 0.5),
            speed=data.get('speed', 0.0),
            phase=data.get('phase', 0.0),
        )

    @classmethod
    def createDefault(cls) -> WaveLayer:
        '''Default ocean layer: 0.5 m amplitude, 10 m wavelength.'''
        return cls()
