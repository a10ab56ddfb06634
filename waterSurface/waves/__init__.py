# -- Waves Subpackage -- #

'''
Gerstner wave layers, the validated wave field, and the evaluator.
'''

from waterSurface.waves.waveLayer import WaveLayer
from waterSurface.waves.waveField import WaveField, WAVE_PRESETS
from waterSurface.waves.gerstner import GerstnerEvaluator
from waterSurface.waves.clock import WaveClock
