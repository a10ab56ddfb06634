# -- Runner, Export & Plot Tests -- #

'''
Short CLI runs, the JSON frame export, and figure construction.
'''

import json

import numpy as np
import plotly.graph_objects as go

from waterSurface.config import SurfaceConfig
from waterSurface.export.frameExporter import FrameExporter
from waterSurface.runner import WaterSurfaceRunner, buildParser, runCli
from waterSurface.surface import WaterSurface
from waterSurface.visualization.surfacePlots import (
    plotFoamSnapshot,
    plotHeightField,
    plotHeightProfile,
)


def testParserDefaults():
    args = buildParser().parse_args([])
    assert args.preset == 'ocean'
    assert args.config is None
    assert not args.no_export and not args.plot


def testShortRunExportsFrames(tmp_path, capsys):
    summary = runCli([
        '--preset', 'lake', '--duration', '1.0', '--dt', '0.1',
        '--seed', '3', '--splash-interval', '0.25',
        '--output-dir', str(tmp_path),
    ])

    assert summary['nTicks'] == 10
    assert summary['nFrames'] == 11
    assert summary['nSplashes'] == 4
    assert summary['peakInteractions'] <= 64
    assert summary['peakFoam'] <= 1000

    with open(summary['exportPath']) as f:
        data = json.load(f)
    assert data['meta']['type'] == 'waterSurface'
    assert data['meta']['nFrames'] == 11
    assert data['config']['name'] == 'lake'
    assert len(data['frames'][0]['heights']) == 200
    assert data['summary']['interactionCounts'][-1] == len(data['frames'][-1]['interactions'])

    assert 'RUN SUMMARY' in capsys.readouterr().out


def testRunFromConfigFile(tmp_path):
    configPath = tmp_path / 'still.json'
    config = SurfaceConfig.pool()
    config.name = 'still'
    config.toJson(str(configPath))

    summary = runCli([
        '--config', str(configPath), '--duration', '0.5', '--dt', '0.1',
        '--boat-speed', '0', '--splash-interval', '0', '--no-export',
    ])

    assert summary['exportPath'] is None
    assert summary['nWakes'] == 0
    assert summary['nSplashes'] == 0


def testRunnerReuseStartsFreshFrameLog():
    runner = WaterSurfaceRunner()
    first = runner.run(SurfaceConfig.pool(), duration=0.3, dt=0.1, doExport=False)
    second = runner.run(SurfaceConfig.pool(), duration=0.3, dt=0.1, doExport=False)

    assert first['nFrames'] == first['nTicks'] + 1 == 4
    assert second['nFrames'] == second['nTicks'] + 1 == 4


def testExporterWithoutFrames(tmp_path):
    surface = WaterSurface(SurfaceConfig.pool())
    path = FrameExporter().export(surface, outputDir=str(tmp_path))

    with open(path) as f:
        data = json.load(f)
    assert data['frames'] == []
    assert data['profile']['x'] == []


def testFiguresBuild():
    surface = WaterSurface(SurfaceConfig.ocean())
    surface.createSplash([0.0, 0.0, 0.0], intensity=1.0)
    surface.update(0.1)

    field = plotHeightField(surface, resolution=20)
    profile = plotHeightProfile(surface, nSamples=50)
    foam = plotFoamSnapshot(surface)

    assert isinstance(field, go.Figure) and len(field.data) == 1
    assert np.shape(field.data[0].z) == (20, 20)
    assert len(profile.data) == 2
    assert len(foam.layout.shapes) == 1
    assert len(foam.data[0].x) == surface.interactions.foamParticleCount
