# -- Constants for the Procedural Water Surface -- #

'''
Physical, capacity, and lifecycle constants for the water surface.
All values in SI units unless otherwise noted.

Capacities are hard limits shared with the shader side: the wave
uniform arrays hold 8 layers and the interaction uniform arrays
hold 32 entries.

References:
-----------
Tessendorf (2001) -- Simulating Ocean Water
Fernando & Kilgard (2004) -- GPU Gems, Ch. 1: Effective Water Simulation
'''

import math

#--------------------------------------------------------------------#
# -- Physical Constants -- #
#--------------------------------------------------------------------#

# Gravitational acceleration [m/s^2]
# Used in the deep-water dispersion relation c = sqrt(g / k)
gravity: float = 9.81

twoPi: float = 2.0 * math.pi

#--------------------------------------------------------------------#
# -- Wave Field Limits -- #
#--------------------------------------------------------------------#

# Maximum number of Gerstner layers (shader uniform array length)
maxWaveLayers: int = 8

# Shortest allowed wavelength [m]
minWavelength: float = 0.1

# Magnitude below which a direction is treated as degenerate
directionEpsilon: float = 1e-3

# Speed below which the layer speed means "derive from dispersion" [m/s]
autoSpeedThreshold: float = 1e-3

# Total amplitude below which the dominant direction defaults to +x [m]
amplitudeEpsilon: float = 1e-3

# Guard for the steepness denominator k * a * N
steepnessEpsilon: float = 1e-6

# Ripple aggregate ranges
minRippleScale: float = 0.1
minRippleOctaves: int = 1
maxRippleOctaves: int = 6
minNormalSampleOffset: float = 0.01

#--------------------------------------------------------------------#
# -- Interaction Pool -- #
#--------------------------------------------------------------------#

# Maximum simultaneously active interactions
maxActiveInteractions: int = 64

# Number of interactions the shader can consume per frame
shaderInteractionLimit: int = 32

# Splash lifecycle: radius grows at expansionRate [m/s],
# amplitude decays as exp(-decayRate * t), removed after lifetime [s]
splashExpansionRate: float = 5.0
splashDecayRate: float = 2.0
splashLifetime: float = 3.0
splashFoamFactor: float = 0.5

# Wake lifecycle
wakeAmplitudeFactor: float = 0.5
wakeInitialRadius: float = 0.5
wakeExpansionRate: float = 3.0
wakeDecayRate: float = 1.5
wakeLifetime: float = 2.0
wakeFoamFactor: float = 0.3
wakeFoamSpread: float = 0.3

# Emitters slower than this do not leave a wake [m/s]
minWakeSpeed: float = 0.1

#--------------------------------------------------------------------#
# -- Foam Pool -- #
#--------------------------------------------------------------------#

# Maximum live foam particles
maxFoamParticles: int = 1000

# Particles spawned per unit of foam amount
foamParticlesPerUnit: float = 20.0

# Uniform spawn ranges (low, high)
foamDriftRange: tuple[float, float] = (-0.5, 0.5)     # horizontal velocity [m/s]
foamSizeRange: tuple[float, float] = (0.1, 0.3)       # [m]
foamDecayRange: tuple[float, float] = (0.5, 2.0)      # [1/s]
foamLifetimeRange: tuple[float, float] = (2.0, 5.0)   # [s]
