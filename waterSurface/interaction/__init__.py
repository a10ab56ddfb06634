# -- Interaction Subpackage -- #

'''
Transient surface disturbances (splashes, wakes) and decorative foam.
'''

from waterSurface.interaction.interactionPool import Interaction, InteractionPool, InteractionType
from waterSurface.interaction.foamPool import FoamParticle, FoamPool
from waterSurface.interaction.interactionManager import InteractionManager
