# -- Water Surface Runner -- #

'''
Command-line entry point for driving a procedural water surface.

Builds a surface from a preset or JSON configuration, then runs a
fixed-step tick loop with a boat circling the origin (leaving a wake
every 0.1 s) and periodic splashes. Progress is printed as a table;
frames are optionally exported as JSON and plotted with Plotly.

Usage:
    python -m waterSurface                              # Ocean preset, 10 s
    python -m waterSurface --preset lake --duration 5
    python -m waterSurface --config configs/harbor.json --seed 7
    python -m waterSurface --no-export --plot
'''

from __future__ import annotations

import argparse
import logging
import math
import time as timeModule

import numpy as np

from waterSurface.config import SurfaceConfig, SURFACE_PRESETS
from waterSurface.export.frameExporter import FrameExporter
from waterSurface.surface import WaterSurface
from waterSurface.visualization.surfacePlots import (
    plotFoamSnapshot,
    plotHeightField,
    plotHeightProfile,
)


#--------------------------------------------------------------------#
# -- CLI Argument Parser -- #
#--------------------------------------------------------------------#

def buildParser() -> argparse.ArgumentParser:
    '''Build the CLI argument parser.'''
    parser = argparse.ArgumentParser(
        description='waterSurface -- procedural Gerstner water surface',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        '--preset', type=str, default='ocean',
        choices=sorted(SURFACE_PRESETS),
        help='Surface preset (default: ocean)',
    )
    parser.add_argument(
        '--config', type=str, default=None,
        help='Path to JSON configuration file (overrides --preset)',
    )
    parser.add_argument(
        '--duration', type=float, default=10.0,
        help='Simulated time [s] (default: 10)',
    )
    parser.add_argument(
        '--dt', type=float, default=1.0 / 60.0,
        help='Tick time step [s] (default: 1/60)',
    )
    parser.add_argument(
        '--seed', type=int, default=None,
        help='Random seed for foam and splash placement',
    )
    parser.add_argument(
        '--splash-interval', type=float, default=0.5,
        help='Time between random splashes [s]; 0 disables (default: 0.5)',
    )
    parser.add_argument(
        '--boat-speed', type=float, default=4.0,
        help='Speed of the wake-emitting boat [m/s] (default: 4)',
    )
    parser.add_argument(
        '--no-export', action='store_true',
        help='Skip frame data export',
    )
    parser.add_argument(
        '--output-dir', type=str, default='output',
        help='Output directory for exported frames (default: output)',
    )
    parser.add_argument(
        '--plot', action='store_true',
        help='Show height field and foam figures at the end',
    )
    parser.add_argument(
        '--verbose', action='store_true',
        help='Enable DEBUG logging',
    )

    return parser


#--------------------------------------------------------------------#
# -- Runner Class -- #
#--------------------------------------------------------------------#

class WaterSurfaceRunner:
    '''
    Drives a WaterSurface through a scripted scene and stores results.

    Parameters:
    -----------
    boatRadius : float
        Radius of the boat's circular path around the origin [m]
    splashArea : float
        Half-width of the square in which splashes land [m]
    wakeInterval : float
        Time between wake emissions behind the boat [s]
    '''

    def __init__(
        self, boatRadius: float = 12.0, splashArea: float = 15.0, wakeInterval: float = 0.1
    ) -> None:
        self.boatRadius = boatRadius
        self.splashArea = splashArea
        self.wakeInterval = wakeInterval
        self._exporter: FrameExporter = FrameExporter()

    def _boatState(self, t: float, speed: float, origin: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        '''Boat position (x, 0, z) and velocity on its circle at time t.'''
        omega = speed / self.boatRadius
        angle = omega * t
        position = np.array([
            origin[0] + self.boatRadius * math.cos(angle),
            0.0,
            origin[1] + self.boatRadius * math.sin(angle),
        ])
        velocity = np.array([-math.sin(angle), 0.0, math.cos(angle)]) * speed
        return position, velocity

    def run(
        self,
        config: SurfaceConfig,
        duration: float = 10.0,
        dt: float = 1.0 / 60.0,
        splashInterval: float = 0.5,
        boatSpeed: float = 4.0,
        doExport: bool = True,
        exportDir: str = 'output',
        doPlot: bool = False,
    ) -> dict:
        '''
        Run the scripted scene on a surface built from config.

        Parameters:
        -----------
        config : SurfaceConfig
            Surface configuration
        duration : float
            Simulated time [s]
        dt : float
            Tick time step [s]
        splashInterval : float
            Time between random splashes [s]; <= 0 disables splashes
        boatSpeed : float
            Boat speed [m/s]
        doExport : bool
            Whether to export frame data
        exportDir : str
            Output directory for frame export
        doPlot : bool
            Whether to show Plotly figures at the end

        Returns:
        --------
        dict : Run summary
        '''
        print()
        print('=' * 62)
        print('  WATERSURFACE -- GERSTNER SURFACE RUN')
        print('=' * 62)
        print()

        config.printSummary()
        print()

        surface = WaterSurface(config)
        self._exporter = FrameExporter()
        sceneRng = np.random.default_rng(config.seed)
        origin = config.origin

        #--------------------------------------------------------------------#
        # Tick Loop
        #--------------------------------------------------------------------#
        print('-' * 62)
        print('  RUNNING SURFACE')
        print('-' * 62)
        print()
        print(f'  {"Time":>8}  {"Tick":>6}  {"BoatH":>8}  {"Rings":>6}  {"Foam":>6}  {"Splash":>6}')
        print(f'  {"(s)":>8}  {"":>6}  {"(m)":>8}  {"":>6}  {"":>6}  {"":>6}')
        print('  ' + '-' * 50)

        nTicks = max(1, int(round(duration / dt)))
        printEvery = max(1, nTicks // 20)
        nextWakeTime = 0.0
        nextSplashTime = splashInterval if splashInterval > 0.0 else math.inf
        nSplashes = 0
        nWakes = 0
        peakFoam = 0
        peakRings = 0

        self._exporter.addFrame(surface)
        wallClockStart = timeModule.time()

        for tick in range(1, nTicks + 1):
            simTime = tick * dt

            boatPosition, boatVelocity = self._boatState(simTime, boatSpeed, origin)
            boatPosition[1] = surface.getHeightAtPosition(boatPosition)
            if simTime >= nextWakeTime:
                if surface.createWake(boatPosition, boatVelocity, intensity=1.0):
                    nWakes += 1
                nextWakeTime += self.wakeInterval

            if simTime >= nextSplashTime:
                offset = sceneRng.uniform(-self.splashArea, self.splashArea, 2)
                splashPoint = np.array([origin[0] + offset[0], 0.0, origin[1] + offset[1]])
                splashPoint[1] = surface.getHeightAtPosition(splashPoint)
                intensity = float(sceneRng.uniform(0.5, 2.0))
                if surface.createSplash(splashPoint, intensity, radius=1.0):
                    nSplashes += 1
                nextSplashTime += splashInterval

            surface.update(dt)
            self._exporter.addFrame(surface)

            rings = surface.interactions.activeInteractionCount
            foam = surface.interactions.foamParticleCount
            peakRings = max(peakRings, rings)
            peakFoam = max(peakFoam, foam)

            if tick % printEvery == 0 or tick == nTicks:
                print(
                    f'  {surface.time:8.3f}  {tick:6d}  {boatPosition[1] - config.baseElevation:8.3f}  '
                    f'{rings:6d}  {foam:6d}  {nSplashes:6d}'
                )

        wallClockSeconds = timeModule.time() - wallClockStart

        print()
        print(f'  Run complete.')
        print(f'  Ticks:             {nTicks:8d}')
        print(f'  Wall-clock time:   {wallClockSeconds:8.2f} s')
        print(f'  Frames recorded:   {self._exporter.nFrames:8d}')
        print()

        #--------------------------------------------------------------------#
        # Export
        #--------------------------------------------------------------------#
        exportPath = None
        if doExport:
            print('-' * 62)
            print('  EXPORTING FRAME DATA')
            print('-' * 62)

            exportPath = self._exporter.export(surface, outputDir=exportDir)
            print(f'  Exported to: {exportPath}')
            print()

        #--------------------------------------------------------------------#
        # Summary
        #--------------------------------------------------------------------#
        print('=' * 62)
        print('  RUN SUMMARY')
        print('=' * 62)
        print(f'  Wakes created:     {nWakes:8d}')
        print(f'  Splashes created:  {nSplashes:8d}')
        print(f'  Peak rings:        {peakRings:8d}')
        print(f'  Peak foam:         {peakFoam:8d}')
        print(f'  Final rings:       {surface.interactions.activeInteractionCount:8d}')
        print(f'  Final foam:        {surface.interactions.foamParticleCount:8d}')
        print('=' * 62)
        print()

        if doPlot:
            plotHeightField(surface).show()
            plotHeightProfile(surface).show()
            plotFoamSnapshot(surface).show()

        summary = {
            'finalTime': surface.time,
            'nTicks': nTicks,
            'nWakes': nWakes,
            'nSplashes': nSplashes,
            'peakInteractions': peakRings,
            'peakFoam': peakFoam,
            'wallClockSeconds': wallClockSeconds,
            'nFrames': self._exporter.nFrames,
            'exportPath': exportPath,
        }
        surface.dispose()
        return summary


#--------------------------------------------------------------------#
# -- CLI Entry Point -- #
#--------------------------------------------------------------------#

def runCli(argv: list[str] | None = None) -> dict:
    '''Parse arguments, run the scene, and return the run summary.'''
    parser = buildParser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(name)s: %(message)s')

    if args.config:
        config = SurfaceConfig.fromJson(args.config)
    else:
        config = SurfaceConfig.fromPreset(args.preset)

    if args.seed is not None:
        config.seed = args.seed

    runner = WaterSurfaceRunner()
    return runner.run(
        config,
        duration=args.duration,
        dt=args.dt,
        splashInterval=args.splash_interval,
        boatSpeed=args.boat_speed,
        doExport=not args.no_export,
        exportDir=args.output_dir,
        doPlot=args.plot,
    )


def main() -> None:
    '''CLI entry point.'''
    runCli()


if __name__ == '__main__':
    main()
