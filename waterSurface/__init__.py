# -- waterSurface Package -- #

'''
Procedural water surface built from superposed Gerstner waves.

Height and normal queries for buoyancy and placement, plus a bounded
splash / wake / foam system whose state is packed into fixed-size
arrays for shader upload.
'''

__version__ = '0.1.0'

from waterSurface.config import SurfaceConfig
from waterSurface.surface import WaterSurface
from waterSurface.waves.clock import WaveClock
from waterSurface.waves.waveField import WaveField
from waterSurface.waves.waveLayer import WaveLayer
from waterSurface.interaction.interactionManager import InteractionManager
