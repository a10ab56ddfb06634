'''Allow running as: python -m waterSurface'''

from waterSurface.runner import main

main()
