# -- Visualization Theme -- #

'''
Dark-mode theme shared by all waterSurface Plotly figures.
'''

# Plotly template
TEMPLATE = 'plotly_dark'

# Primary colors (Material Design, readable on dark backgrounds)
BLUE = '#42A5F5'
RED = '#EF5350'
GREEN = '#66BB6A'
ORANGE = '#FFA726'
CYAN = '#26C6DA'

# Neutrals
WHITE = '#E0E0E0'
REFERENCE_LINE = '#888888'

# Height field colorscale: deep trough to foamy crest
WATER_COLORSCALE = [
    [0.0, '#0D47A1'],
    [0.5, BLUE],
    [0.85, CYAN],
    [1.0, WHITE],
]

# Interaction ring color per InteractionType value (splash, wake, ripple)
INTERACTION_COLORS = [ORANGE, RED, GREEN]
