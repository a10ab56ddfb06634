# -- Water Surface Tests -- #

'''
End-to-end behavior of WaterSurface: queries, flags, clocks and lifecycle.
'''

import math

import numpy as np
import pytest

from waterSurface.config import SurfaceConfig
from waterSurface.surface import WaterSurface
from waterSurface.waves.clock import WaveClock
from waterSurface.waves.waveField import WaveField
from waterSurface.waves.waveLayer import WaveLayer


def _unitWaveConfig(**kwargs) -> SurfaceConfig:
    waves = WaveField()
    waves.addLayer(WaveLayer(direction=np.array([1.0, 0.0]), amplitude=1.0,
                             wavelength=2.0 * math.pi, steepness=0.5))
    return SurfaceConfig(name='unit', waves=waves, seed=0, **kwargs)


def testHeightIncludesBaselineAndOrigin():
    surface = WaterSurface(_unitWaveConfig(baseElevation=2.0, origin=[10.0, -3.0]))

    assert surface.getHeightAtPosition([10.0, 0.0, 0.0]) == pytest.approx(2.0)
    assert surface.getHeightAtPosition([10.0 + math.pi / 2.0, 0.0, 5.0]) == pytest.approx(3.0)


def testEmptyFieldIsBaseline():
    surface = WaterSurface(SurfaceConfig(waves=WaveField(), baseElevation=-1.5))
    surface.update(0.3)

    assert surface.getHeightAtPosition([4.0, 0.0, 9.0]) == -1.5
    assert np.allclose(surface.getNormalAtPosition([4.0, 0.0, 9.0]), [0.0, 1.0, 0.0])
    assert np.allclose(surface.waveField.getDominantDirection(), [1.0, 0.0])


def testDisabledWavesAreFlatAndFreezeClock():
    config = _unitWaveConfig(baseElevation=0.5)
    config.enableWaves = False
    surface = WaterSurface(config)
    surface.update(1.0)

    assert surface.time == 0.0
    assert surface.getHeightAtPosition([math.pi / 2.0, 0.0, 0.0]) == 0.5
    assert np.allclose(surface.getNormalAtPosition([1.0, 0.0, 0.0]), [0.0, 1.0, 0.0])
    assert np.allclose(surface.getDisplacementAtPosition([1.0, 0.0, 0.0]), 0.0)

    heights = surface.getHeightAtPosition(np.zeros((4, 3)))
    assert heights.shape == (4,)


def testWaveSpeedScalesClock():
    surface = WaterSurface(_unitWaveConfig(waveSpeed=2.0))
    surface.update(0.25)
    surface.update(0.25)
    assert surface.time == pytest.approx(1.0)


def testPausedWavesResumeFromFrozenTime():
    surface = WaterSurface(_unitWaveConfig(waveSpeed=2.0))
    surface.update(0.25)
    surface.config.enableWaves = False
    surface.update(1.0)
    assert surface.time == pytest.approx(0.5)

    surface.config.enableWaves = True
    surface.update(0.25)
    assert surface.time == pytest.approx(1.0)


def testSharedClockHasSingleWriter():
    shared = WaveClock()
    writer = WaterSurface(_unitWaveConfig(), clock=shared)
    reader = WaterSurface(_unitWaveConfig(), clock=shared, ownsClock=False)

    reader.update(1.0)
    assert shared.time == 0.0

    writer.update(0.5)
    assert reader.time == pytest.approx(0.5)
    point = [1.0, 0.0, 2.0]
    assert reader.getHeightAtPosition(point) == pytest.approx(writer.getHeightAtPosition(point))


def testIsUnderwater():
    surface = WaterSurface(_unitWaveConfig(baseElevation=1.0))
    crest = math.pi / 2.0

    assert surface.isUnderwater([crest, 1.9, 0.0])
    assert not surface.isUnderwater([crest, 2.1, 0.0])
    flags = surface.isUnderwater(np.array([[crest, 1.9, 0.0], [crest, 2.1, 0.0]]))
    assert flags.tolist() == [True, False]


def testWaveFieldEditsTakeEffect():
    surface = WaterSurface(_unitWaveConfig())
    point = [math.pi / 2.0, 0.0, 0.0]
    assert surface.getHeightAtPosition(point) == pytest.approx(1.0)

    surface.waveField.updateLayer(0, amplitude=0.5)
    assert surface.getHeightAtPosition(point) == pytest.approx(0.5)

    surface.waveField.removeLayer(0)
    assert surface.getHeightAtPosition(point) == 0.0


def testInteractionsFollowConfigFlag():
    config = _unitWaveConfig()
    surface = WaterSurface(config)
    assert surface.createSplash([0.0, 0.0, 0.0], intensity=1.0)

    config.enableInteractions = False
    assert not surface.createSplash([0.0, 0.0, 0.0], intensity=1.0)
    assert not surface.createWake([0.0, 0.0, 0.0], [1.0, 0.0, 0.0], intensity=1.0)
    surface.update(5.0)
    assert surface.interactions.activeInteractionCount == 1

    config.enableInteractions = True
    surface.update(5.0)
    assert surface.interactions.activeInteractionCount == 0


def testSeededSurfacesProduceSameFoam():
    first = WaterSurface(_unitWaveConfig())
    second = WaterSurface(_unitWaveConfig())
    first.createSplash([0.0, 0.0, 0.0], intensity=2.0)
    second.createSplash([0.0, 0.0, 0.0], intensity=2.0)

    assert first.getFoamParticles() == second.getFoamParticles()
    assert len(first.getFoamParticles()) == 20


def testShaderSnapshotAndDispose():
    surface = WaterSurface(_unitWaveConfig())
    surface.createSplash([1.0, 0.0, 1.0], intensity=1.0)
    positions, params = surface.getInteractionsForShader()
    assert positions.shape == (32, 4) and params.shape == (32, 4)
    assert params[0, 0] == pytest.approx(1.0)

    surface.dispose()
    assert surface.interactions.activeInteractionCount == 0
    assert surface.getFoamParticles() == ()
