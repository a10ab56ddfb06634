# -- Surface Frame Exporter -- #

'''
Exports water surface frames as JSON for offline viewing.

Collects a per-tick snapshot of the surface (a height profile along
the dominant wave direction, active interaction rings, and foam
particles) and writes them with the surface configuration to a
timestamped JSON file.
'''

from __future__ import annotations

import json
import os
from datetime import datetime

import numpy as np

from waterSurface.surface import WaterSurface


class FrameExporter:
    '''
    Collects and exports surface frame data as JSON.

    Usage:
        exporter = FrameExporter(profileLength=40.0, profileSamples=200)
        # During the tick loop:
        exporter.addFrame(surface)
        # Afterwards:
        exporter.export(surface, outputDir='output')

    Output JSON format:
    {
        "meta": { "type": "waterSurface", "nFrames": 120, "created": "...", ... },
        "config": { ...SurfaceConfig.toDict()... },
        "profile": { "x": [...], "z": [...] },
        "frames": [
            {
                "time": 0.0,
                "heights": [h0, h1, ...],
                "interactions": [[x, y, z, type, amplitude, radius], ...],
                "foamPositions": [[x, y, z], ...],
                "foamAlphas": [a0, a1, ...]
            },
            ...
        ],
        "summary": { "times": [...], "interactionCounts": [...], "foamCounts": [...] }
    }
    '''

    def __init__(self, profileLength: float = 40.0, profileSamples: int = 200) -> None:
        self.profileLength = profileLength
        self.profileSamples = profileSamples
        self._frames: list[dict] = []
        self._profilePoints: np.ndarray | None = None
        self._summary: dict[str, list] = {
            'times': [],
            'interactionCounts': [],
            'foamCounts': [],
        }

    @property
    def nFrames(self) -> int:
        '''Number of collected frames.'''
        return len(self._frames)

    def _profileFor(self, surface: WaterSurface) -> np.ndarray:
        # Fixed after the first frame so every frame samples the same line
        if self._profilePoints is None:
            direction = surface.waveField.getDominantDirection()
            norm = np.linalg.norm(direction)
            direction = direction / norm if norm > 0.0 else np.array([1.0, 0.0])

            s = np.linspace(-0.5, 0.5, self.profileSamples) * self.profileLength
            origin = surface.config.origin
            self._profilePoints = np.column_stack([
                origin[0] + s * direction[0],
                np.zeros_like(s),
                origin[1] + s * direction[1],
            ])
        return self._profilePoints

    def addFrame(self, surface: WaterSurface) -> None:
        '''
        Record the current state of a surface.

        Parameters:
        -----------
        surface : WaterSurface
            Surface to sample (after its update for this tick)
        '''
        points = self._profileFor(surface)
        heights = np.asarray(surface.getHeightAtPosition(points))

        pool = surface.interactions.interactionPool
        rings = [
            [*np.round(i.position, 4).tolist(), int(i.interactionType),
             round(i.currentAmplitude, 6), round(i.currentRadius, 4)]
            for i in pool.interactions
        ]

        foam = surface.interactions.foamPool
        time = round(surface.time, 6)

        self._frames.append({
            'time': time,
            'heights': np.round(heights, 5).tolist(),
            'interactions': rings,
            'foamPositions': np.round(foam.positions, 4).tolist(),
            'foamAlphas': np.round(foam.alphas, 4).tolist(),
        })

        self._summary['times'].append(time)
        self._summary['interactionCounts'].append(pool.count)
        self._summary['foamCounts'].append(foam.count)

    def export(self, surface: WaterSurface, outputDir: str = 'output') -> str:
        '''
        Write all collected frames to a JSON file.

        Parameters:
        -----------
        surface : WaterSurface
            Surface whose configuration is stored as metadata
        outputDir : str
            Output directory path

        Returns:
        --------
        str : Path to the exported JSON file
        '''
        os.makedirs(outputDir, exist_ok=True)

        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        filename = f'waterSurface_{surface.config.name}_{timestamp}.json'
        filepath = os.path.join(outputDir, filename)

        profile = self._profilePoints if self._profilePoints is not None else np.zeros((0, 3))
        output = {
            'meta': {
                'type': 'waterSurface',
                'nFrames': len(self._frames),
                'profileSamples': len(profile),
                'nWaveLayers': surface.waveField.nLayers,
                'created': datetime.now().isoformat(),
            },
            'config': surface.config.toDict(),
            'profile': {
                'x': np.round(profile[:, 0], 4).tolist(),
                'z': np.round(profile[:, 2], 4).tolist(),
            },
            'frames': self._frames,
            'summary': self._summary,
        }

        with open(filepath, 'w') as f:
            json.dump(output, f, indent=None, separators=(',', ':'))

        return filepath
