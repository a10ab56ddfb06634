# -- Gerstner Wave Field -- #

'''
Ordered collection of Gerstner wave layers plus ripple detail settings.

The field owns the invariants that couple its layers: the safe
steepness of every layer depends on the total layer count N,
so any structural change (add, remove, edit) re-validates the
whole field rather than the touched layer alone.

Factory classmethods provide the standard water body presets
(ocean, lake, river, pool).
'''

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field

import numpy as np

from waterSurface import constants as const
from waterSurface.waves.waveLayer import WaveLayer, normalizeDirection

logger = logging.getLogger(__name__)


@dataclass
class WaveField:
    '''
    Multi-layer Gerstner wave configuration.

    Parameters:
    -----------
    layers : list[WaveLayer]
        Wave components (at most 8); order is kept for editing only
    enableRipples : bool
        Whether shader-side ripple noise is drawn
    windDirection : np.ndarray
        Ripple wind direction (dx, dz)
    windSpeed : float
        Ripple wind speed [m/s]
    rippleScale : float
        Ripple size scale (higher = larger ripples)
    rippleStrength : float
        Ripple height multiplier in [0, 1]
    rippleOctaves : int
        Noise octaves in [1, 6]
    normalSampleOffset : float
        Finite-difference offset for ripple normals [m]
    '''

    layers: list[WaveLayer] = field(default_factory=list)

    #--------------------------------------------------------------------#
    # -- Ripple Detail -- #
    #--------------------------------------------------------------------#
    enableRipples: bool = True
    windDirection: np.ndarray = field(default_factory=lambda: np.array([1.0, 0.5]))
    windSpeed: float = 2.0              # m/s
    rippleScale: float = 1.0
    rippleStrength: float = 0.1
    rippleOctaves: int = 3
    normalSampleOffset: float = 0.1     # m

    def __post_init__(self) -> None:
        self.windDirection = np.asarray(self.windDirection, dtype=float).reshape(2).copy()

    @property
    def nLayers(self) -> int:
        '''Number of wave layers N.'''
        return len(self.layers)

    #--------------------------------------------------------------------#
    # -- Validation -- #
    #--------------------------------------------------------------------#
    def validate(self) -> None:
        '''
        Re-establish every invariant of the field.

        Clamps each layer against the current layer count N, normalizes
        all directions (including wind), and clamps the ripple settings.
        Steepness reductions are applied silently and logged at DEBUG.
        '''
        self.windDirection = normalizeDirection(self.windDirection)
        self.windSpeed = max(0.0, float(self.windSpeed))
        self.rippleScale = max(const.minRippleScale, float(self.rippleScale))
        self.rippleStrength = min(max(float(self.rippleStrength), 0.0), 1.0)
        self.rippleOctaves = int(min(
            max(int(round(self.rippleOctaves)), const.minRippleOctaves),
            const.maxRippleOctaves,
        ))
        self.normalSampleOffset = max(const.minNormalSampleOffset, float(self.normalSampleOffset))

        count = len(self.layers)
        for i, layer in enumerate(self.layers):
            requested = layer.steepness
            layer.validate(count)
            if layer.steepness < requested:
                logger.debug(
                    'Layer %d steepness clamped %.4f -> %.4f (N=%d)',
                    i, requested, layer.steepness, count,
                )

    #--------------------------------------------------------------------#
    # -- Layer Editing -- #
    #--------------------------------------------------------------------#
    def addLayer(self, layer: WaveLayer) -> bool:
        '''
        Append a layer and re-validate the field.

        Parameters:
        -----------
        layer : WaveLayer
            Layer to append (owned by the field afterwards)

        Returns:
        --------
        bool : False if the field is already full and nothing changed
        '''
        if len(self.layers) >= const.maxWaveLayers:
            logger.debug('addLayer ignored: field already holds %d layers', len(self.layers))
            return False

        self.layers.append(layer)
        self.validate()
        return True

    def removeLayer(self, index: int) -> bool:
        '''
        Remove the layer at index (if in range) and re-validate.

        Parameters:
        -----------
        index : int
            Position of the layer to remove

        Returns:
        --------
        bool : False if the index was out of range
        '''
        if not 0 <= index < len(self.layers):
            return False

        del self.layers[index]
        self.validate()
        return True

    def updateLayer(self, index: int, **changes) -> bool:
        '''
        Modify fields of one layer and re-validate the field.

        Parameters:
        -----------
        index : int
            Position of the layer to modify
        **changes
            WaveLayer field names and new values

        Returns:
        --------
        bool : False if the index was out of range
        '''
        if not 0 <= index < len(self.layers):
            return False

        layer = self.layers[index]
        for name, value in changes.items():
            if name not in WaveLayer.__dataclass_fields__:
                raise TypeError(f'WaveLayer has no field {name!r}')
            if name == 'direction':
                value = np.asarray(value, dtype=float).reshape(2).copy()
            setattr(layer, name, value)

        self.validate()
        return True

    #--------------------------------------------------------------------#
    # -- Aggregate Queries -- #
    #--------------------------------------------------------------------#
    def getTotalWaveHeight(self) -> float:
        '''
        Sum of all layer amplitudes [m].

        Upper bound on the vertical excursion from the baseline.
        '''
        return float(sum(layer.amplitude for layer in self.layers))

    def getDominantDirection(self) -> np.ndarray:
        '''
        Amplitude-weighted mean direction of the layers.

        Returns:
        --------
        np.ndarray : (dx, dz), or (1, 0) when total amplitude is ~0
        '''
        weighted = np.zeros(2)
        totalAmplitude = 0.0
        for layer in self.layers:
            weighted += layer.direction * layer.amplitude
            totalAmplitude += layer.amplitude

        if totalAmplitude > const.amplitudeEpsilon:
            return weighted / totalAmplitude
        return np.array([1.0, 0.0])

    def layerArrays(self) -> dict[str, np.ndarray]:
        '''
        Per-layer parameters as parallel arrays for vectorized evaluation.

        Returns:
        --------
        dict[str, np.ndarray] : 'directions' (N, 2), and (N,) arrays for
            'amplitudes', 'wavenumbers', 'steepnesses', 'speeds', 'phases'
        '''
        n = len(self.layers)
        directions = np.zeros((n, 2))
        amplitudes = np.zeros(n)
        wavenumbers = np.zeros(n)
        steepnesses = np.zeros(n)
        speeds = np.zeros(n)
        phases = np.zeros(n)

        for i, layer in enumerate(self.layers):
            directions[i] = layer.direction
            amplitudes[i] = layer.amplitude
            wavenumbers[i] = layer.wavenumber
            steepnesses[i] = layer.steepness
            speeds[i] = layer.effectiveSpeed
            phases[i] = layer.phase

        return {
            'directions': directions,
            'amplitudes': amplitudes,
            'wavenumbers': wavenumbers,
            'steepnesses': steepnesses,
            'speeds': speeds,
            'phases': phases,
        }

    def getWaveDataForShader(self) -> tuple[np.ndarray, np.ndarray]:
        '''
        Pack layers into fixed-size arrays for the wave shader.

        Row i of waveA is (dx, dz, amplitude, wavelength) and row i of
        waveB is (steepness, effective speed, phase, 0). Rows beyond
        the layer count are zero.

        Returns:
        --------
        tuple[np.ndarray, np.ndarray] : (waveA, waveB), each (8, 4) float32
        '''
        waveA = np.zeros((const.maxWaveLayers, 4), dtype=np.float32)
        waveB = np.zeros((const.maxWaveLayers, 4), dtype=np.float32)

        for i, layer in enumerate(self.layers[:const.maxWaveLayers]):
            waveA[i] = (layer.direction[0], layer.direction[1], layer.amplitude, layer.wavelength)
            waveB[i] = (layer.steepness, layer.effectiveSpeed, layer.phase, 0.0)

        return waveA, waveB

    #--------------------------------------------------------------------#
    # -- Copy & Dict I/O -- #
    #--------------------------------------------------------------------#
    def clone(self) -> WaveField:
        '''Independent deep copy of the layers and ripple settings.'''
        return WaveField(
            layers=[layer.copy() for layer in self.layers],
            enableRipples=self.enableRipples,
            windDirection=self.windDirection.copy(),
            windSpeed=self.windSpeed,
            rippleScale=self.rippleScale,
            rippleStrength=self.rippleStrength,
            rippleOctaves=self.rippleOctaves,
            normalSampleOffset=self.normalSampleOffset,
        )

    def toDict(self) -> dict:
        '''Plain-dict form of the field (config schema).'''
        return {
            'layers': [layer.toDict() for layer in self.layers],
            'enableRipples': bool(self.enableRipples),
            'windDirection': [float(self.windDirection[0]), float(self.windDirection[1])],
            'windSpeed': float(self.windSpeed),
            'rippleScale': float(self.rippleScale),
            'rippleStrength': float(self.rippleStrength),
            'rippleOctaves': int(self.rippleOctaves),
            'normalSampleOffset': float(self.normalSampleOffset),
        }

    @classmethod
    def fromDict(cls, data: dict) -> WaveField:
        '''
        Build and validate a field from a config dict.

        Layers past the eighth are dropped.

        Parameters:
        -----------
        data : dict
            'waves' section of the configuration

        Returns:
        --------
        WaveField : Validated field
        '''
        layerData = data.get('layers', [])
        if len(layerData) > const.maxWaveLayers:
            logger.debug('Dropping %d layers past the limit of %d',
                         len(layerData) - const.maxWaveLayers, const.maxWaveLayers)

        waveField = cls(
            layers=[WaveLayer.fromDict(d) for d in layerData[:const.maxWaveLayers]],
            enableRipples=data.get('enableRipples', True),
            windDirection=np.array(data.get('windDirection', [1.0, 0.5]), dtype=float),
            windSpeed=data.get('windSpeed', 2.0),
            rippleScale=data.get('rippleScale', 1.0),
            rippleStrength=data.get('rippleStrength', 0.1),
            rippleOctaves=data.get('rippleOctaves', 3),
            normalSampleOffset=data.get('normalSampleOffset', 0.1),
        )
        waveField.validate()
        return waveField

    #--------------------------------------------------------------------#
    # -- Factory Presets -- #
    #--------------------------------------------------------------------#
    @classmethod
    def ocean(cls) -> WaveField:
        '''
        Large rolling ocean swell.
        Four layers from 60 m down to 10 m wavelength, spread in direction.
        '''
        waveField = cls(
            windDirection=np.array([1.0, 0.3]),
            windSpeed=5.0,
            rippleScale=0.5,
            rippleStrength=0.15,
            rippleOctaves=4,
            layers=[
                # Primary swell
                WaveLayer(direction=np.array([1.0, 0.0]), amplitude=1.5,
                          wavelength=60.0, steepness=0.6, phase=0.0),
                # Secondary, rotated 45 degrees
                WaveLayer(direction=np.array([0.7, 0.7]), amplitude=1.0,
                          wavelength=40.0, steepness=0.5, phase=math.pi / 2.0),
                # Detail waves
                WaveLayer(direction=np.array([-0.5, 0.866]), amplitude=0.5,
                          wavelength=20.0, steepness=0.4, phase=math.pi),
                WaveLayer(direction=np.array([0.3, -0.954]), amplitude=0.3,
                          wavelength=10.0, steepness=0.3, phase=1.5 * math.pi),
            ],
        )
        waveField.validate()
        return waveField

    @classmethod
    def lake(cls) -> WaveField:
        '''
        Gentle lake chop.
        Two small layers (15 cm and 10 cm amplitude).
        '''
        waveField = cls(
            windDirection=np.array([1.0, 0.2]),
            windSpeed=1.5,
            rippleScale=1.5,
            rippleStrength=0.05,
            rippleOctaves=3,
            layers=[
                WaveLayer(direction=np.array([1.0, 0.0]), amplitude=0.15,
                          wavelength=8.0, steepness=0.2, phase=0.0),
                WaveLayer(direction=np.array([0.6, 0.8]), amplitude=0.1,
                          wavelength=5.0, steepness=0.15, phase=2.0),
            ],
        )
        waveField.validate()
        return waveField

    @classmethod
    def river(cls) -> WaveField:
        '''
        Directional river flow.
        Short waves aligned with the current, with overridden speeds.
        '''
        waveField = cls(
            windDirection=np.array([1.0, 0.0]),    # flow direction
            windSpeed=3.0,
            rippleScale=2.0,
            rippleStrength=0.08,
            rippleOctaves=3,
            layers=[
                WaveLayer(direction=np.array([1.0, 0.0]), amplitude=0.2,
                          wavelength=3.0, steepness=0.3, speed=2.0, phase=0.0),
                WaveLayer(direction=np.array([1.0, 0.1]), amplitude=0.15,
                          wavelength=2.0, steepness=0.25, speed=1.8, phase=1.0),
            ],
        )
        waveField.validate()
        return waveField

    @classmethod
    def pool(cls) -> WaveField:
        '''
        Nearly still pool.
        A single 2 cm surface-tension-scale wave.
        '''
        waveField = cls(
            windDirection=np.array([1.0, 0.5]),
            windSpeed=0.5,
            rippleScale=3.0,
            rippleStrength=0.02,
            rippleOctaves=2,
            layers=[
                WaveLayer(direction=np.array([1.0, 0.0]), amplitude=0.02,
                          wavelength=0.5, steepness=0.1, phase=0.0),
            ],
        )
        waveField.validate()
        return waveField


# Named presets for CLI and config lookup
WAVE_PRESETS = {
    'ocean': WaveField.ocean,
    'lake': WaveField.lake,
    'river': WaveField.river,
    'pool': WaveField.pool,
}
