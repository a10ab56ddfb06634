# -- Water Surface Configuration -- #

'''
Configuration for one water surface: the wave field plus the per-tick
multipliers and feature flags the host drives it with.

Presets mirror the wave field presets (ocean, lake, river, pool).
Configurations round-trip through plain dicts and JSON files.
'''

from __future__ import annotations

import copy
import json
from dataclasses import dataclass, field

import numpy as np

from waterSurface.waves.waveField import WaveField


@dataclass
class SurfaceConfig:
    '''
    Water surface configuration.

    Parameters:
    -----------
    name : str
        Configuration label
    waveStrength : float
        Global multiplier on wave displacement
    waveSpeed : float
        Animation time-scale multiplier
    baseElevation : float
        World-space height of the calm surface [m]
    origin : np.ndarray
        World-space (x, z) of the surface origin [m]; wave phases are
        evaluated relative to it
    enableWaves : bool
        Animate waves; when False the surface is flat at baseElevation
    enableInteractions : bool
        Accept and age splashes, wakes and foam
    seed : int | None
        Foam random seed; None for nondeterministic foam
    waves : WaveField
        Wave layers and ripple settings
    '''

    name: str = 'ocean'
    waveStrength: float = 1.0
    waveSpeed: float = 1.0
    baseElevation: float = 0.0           # m
    origin: np.ndarray = field(default_factory=lambda: np.array([0.0, 0.0]))
    enableWaves: bool = True
    enableInteractions: bool = True
    seed: int | None = None
    waves: WaveField = field(default_factory=WaveField.ocean)

    def __post_init__(self) -> None:
        self.origin = np.asarray(self.origin, dtype=float).reshape(2).copy()

    #--------------------------------------------------------------------#
    # -- Factory Presets -- #
    #--------------------------------------------------------------------#
    @classmethod
    def ocean(cls) -> SurfaceConfig:
        '''Open ocean: four crossing swells, full strength.'''
        return cls(name='ocean', waves=WaveField.ocean())

    @classmethod
    def lake(cls) -> SurfaceConfig:
        '''Lake: short, low wind chop.'''
        return cls(name='lake', waveSpeed=0.8, waves=WaveField.lake())

    @classmethod
    def river(cls) -> SurfaceConfig:
        '''River: fast, directional flow waves.'''
        return cls(name='river', waveSpeed=1.5, waves=WaveField.river())

    @classmethod
    def pool(cls) -> SurfaceConfig:
        '''Swimming pool: barely moving surface.'''
        return cls(name='pool', waveStrength=0.5, waveSpeed=0.5, waves=WaveField.pool())

    @classmethod
    def fromPreset(cls, presetName: str) -> SurfaceConfig:
        '''
        Build a preset configuration by name.

        Parameters:
        -----------
        presetName : str
            One of 'ocean', 'lake', 'river', 'pool'

        Returns:
        --------
        SurfaceConfig : Preset configuration
        '''
        factory = SURFACE_PRESETS.get(presetName)
        if factory is None:
            raise ValueError(
                f'Unknown preset {presetName!r}; choose from {sorted(SURFACE_PRESETS)}'
            )
        return factory()

    def createVariant(self, name: str) -> SurfaceConfig:
        '''Independent deep copy under a new name.'''
        variant = copy.deepcopy(self)
        variant.name = name
        return variant

    #--------------------------------------------------------------------#
    # -- Dict / JSON I/O -- #
    #--------------------------------------------------------------------#
    def toDict(self) -> dict:
        return {
            'name': self.name,
            'waveStrength': self.waveStrength,
            'waveSpeed': self.waveSpeed,
            'baseElevation': self.baseElevation,
            'origin': self.origin.tolist(),
            'enableWaves': self.enableWaves,
            'enableInteractions': self.enableInteractions,
            'seed': self.seed,
            'waves': self.waves.toDict(),
        }

    @classmethod
    def fromDict(cls, data: dict) -> SurfaceConfig:
        '''
        Build a configuration from a dict; missing keys take defaults.

        Parameters:
        -----------
        data : dict
            Configuration dict (see toDict for the schema)

        Returns:
        --------
        SurfaceConfig : Loaded configuration with a validated wave field
        '''
        waves = data.get('waves')
        seed = data.get('seed')
        return cls(
            name=data.get('name', 'custom'),
            waveStrength=float(data.get('waveStrength', 1.0)),
            waveSpeed=float(data.get('waveSpeed', 1.0)),
            baseElevation=float(data.get('baseElevation', 0.0)),
            origin=np.array(data.get('origin', [0.0, 0.0]), dtype=float),
            enableWaves=bool(data.get('enableWaves', True)),
            enableInteractions=bool(data.get('enableInteractions', True)),
            seed=None if seed is None else int(seed),
            waves=WaveField.fromDict(waves) if waves is not None else WaveField.ocean(),
        )

    def toJson(self, filePath: str) -> None:
        '''
        Write the configuration to a JSON file.

        Parameters:
        -----------
        filePath : str
            Output file path
        '''
        with open(filePath, 'w') as f:
            json.dump(self.toDict(), f, indent=4)

    @classmethod
    def fromJson(cls, filePath: str) -> SurfaceConfig:
        '''
        Load a configuration from a JSON file.

        Parameters:
        -----------
        filePath : str
            Path to JSON configuration file

        Returns:
        --------
        SurfaceConfig : Loaded configuration
        '''
        with open(filePath, 'r') as f:
            data = json.load(f)
        return cls.fromDict(data)

    #--------------------------------------------------------------------#
    # -- Display -- #
    #--------------------------------------------------------------------#
    def printSummary(self) -> None:
        '''Print the configuration and its wave layers as a formatted table.'''
        waves = self.waves
        dominant = waves.getDominantDirection()

        print('=' * 64)
        print(f'  WATER SURFACE CONFIGURATION: {self.name}')
        print('=' * 64)
        print(f'  Wave Strength:     {self.waveStrength:8.2f}')
        print(f'  Wave Speed:        {self.waveSpeed:8.2f} x')
        print(f'  Base Elevation:    {self.baseElevation:8.2f} m')
        print(f'  Origin (x, z):     ({self.origin[0]:.2f}, {self.origin[1]:.2f}) m')
        print(f'  Waves / Interact:  {str(self.enableWaves):>8} / {self.enableInteractions}')
        print(f'  Foam Seed:         {str(self.seed):>8}')
        print('-' * 64)
        print(f'  {"#":>2}  {"dir (x, z)":>15}  {"amp [m]":>8}  {"lambda [m]":>10}  '
              f'{"Q":>5}  {"c [m/s]":>7}')
        for i, layer in enumerate(waves.layers):
            direction = f'({layer.direction[0]:+.2f}, {layer.direction[1]:+.2f})'
            print(f'  {i:>2}  {direction:>15}  {layer.amplitude:8.3f}  '
                  f'{layer.wavelength:10.2f}  {layer.steepness:5.2f}  '
                  f'{layer.effectiveSpeed:7.2f}')
        print('-' * 64)
        print(f'  Total Height:      {waves.getTotalWaveHeight():8.3f} m')
        print(f'  Dominant Dir:      ({dominant[0]:+.3f}, {dominant[1]:+.3f})')
        print(f'  Wind:              {waves.windSpeed:8.2f} m/s, '
              f'{waves.rippleOctaves} ripple octaves')
        print('=' * 64)


SURFACE_PRESETS = {
    'ocean': SurfaceConfig.ocean,
    'lake': SurfaceConfig.lake,
    'river': SurfaceConfig.river,
    'pool': SurfaceConfig.pool,
}
