# -- Gerstner Evaluator Tests -- #

'''
Height, displacement and normal queries of the Gerstner evaluator.
'''

import math

import numpy as np
import pytest

from waterSurface.waves.clock import WaveClock
from waterSurface.waves.gerstner import UP, GerstnerEvaluator
from waterSurface.waves.waveField import WaveField
from waterSurface.waves.waveLayer import WaveLayer


@pytest.fixture
def evaluator():
    return GerstnerEvaluator()


@pytest.fixture
def singleLayer():
    '''One unit wave: k = 1, a = 1, Q = 0.5, travelling along +x.'''
    waveField = WaveField()
    waveField.addLayer(WaveLayer(direction=np.array([1.0, 0.0]), amplitude=1.0,
                                 wavelength=2.0 * math.pi, steepness=0.5))
    return waveField


def testSingleLayerHeights(evaluator, singleLayer):
    assert singleLayer.layers[0].steepness == pytest.approx(0.5)
    assert evaluator.heightAt(singleLayer, 0.0, [0.0, 0.0, 0.0]) == pytest.approx(0.0, abs=1e-12)
    assert evaluator.heightAt(singleLayer, 0.0, [math.pi / 2.0, 0.0, 0.0]) == pytest.approx(1.0)


def testWaveStrengthScalesHeight(evaluator, singleLayer):
    point = [math.pi / 2.0, 0.0, 3.0]
    assert evaluator.heightAt(singleLayer, 0.0, point, waveStrength=0.25) == pytest.approx(0.25)


def testWaveTravelsWithPhaseSpeed(evaluator, singleLayer):
    c = singleLayer.layers[0].effectiveSpeed
    t = 0.7
    # The crest that was at x = pi/2 has moved by c*t
    assert evaluator.heightAt(singleLayer, t, [math.pi / 2.0 + c * t, 0.0, 0.0]) == pytest.approx(1.0)


def testEmptyFieldIsFlat(evaluator):
    waveField = WaveField()
    assert evaluator.heightAt(waveField, 3.0, [1.0, 2.0, 3.0]) == 0.0
    assert np.allclose(evaluator.normalAt(waveField, 3.0, [1.0, 2.0, 3.0]), UP)
    assert np.allclose(evaluator.displacementAt(waveField, 3.0, [1.0, 2.0, 3.0]), 0.0)


def testZeroAmplitudeLayerContributesNothing(evaluator):
    waveField = WaveField()
    waveField.addLayer(WaveLayer(amplitude=0.0, wavelength=4.0, steepness=1.0))

    points = np.random.default_rng(3).uniform(-20.0, 20.0, (50, 3))
    heights = evaluator.heightAt(waveField, 1.3, points)
    normals = evaluator.normalAt(waveField, 1.3, points)

    assert np.all(np.isfinite(heights)) and np.allclose(heights, 0.0)
    assert np.allclose(normals, UP)


def testBatchMatchesSinglePoints(evaluator):
    waveField = WaveField.ocean()
    points = np.random.default_rng(11).uniform(-50.0, 50.0, (20, 3))

    heights = evaluator.heightAt(waveField, 2.5, points)
    normals = evaluator.normalAt(waveField, 2.5, points)
    displacements = evaluator.displacementAt(waveField, 2.5, points)

    assert heights.shape == (20,)
    assert normals.shape == (20, 3)
    assert displacements.shape == (20, 3)
    for i in (0, 7, 19):
        assert heights[i] == pytest.approx(evaluator.heightAt(waveField, 2.5, points[i]))
        assert np.allclose(normals[i], evaluator.normalAt(waveField, 2.5, points[i]))
    assert np.allclose(displacements[:, 1], heights)


def testHeightBoundedByTotalAmplitude(evaluator):
    waveField = WaveField.ocean()
    points = np.random.default_rng(5).uniform(-100.0, 100.0, (500, 3))
    heights = evaluator.heightAt(waveField, 4.0, points)
    assert np.all(np.abs(heights) <= waveField.getTotalWaveHeight() + 1e-9)


def testNormalsAreUnitAndUpward(evaluator):
    waveField = WaveField.ocean()
    points = np.random.default_rng(7).uniform(-100.0, 100.0, (500, 3))
    normals = evaluator.normalAt(waveField, 1.0, points)

    assert np.allclose(np.linalg.norm(normals, axis=1), 1.0)
    assert np.all(normals[:, 1] > 0.0)


def testSingleLayerNormalMatchesSlope(evaluator, singleLayer):
    # At x = 0 (theta = 0) the surface rises with slope k*a = 1 along +x
    normal = evaluator.normalAt(singleLayer, 0.0, [0.0, 0.0, 0.0])
    expected = np.array([-1.0, 1.0, 0.0]) / math.sqrt(2.0)
    assert np.allclose(normal, expected)

    # At the crest the surface is flat
    crest = evaluator.normalAt(singleLayer, 0.0, [math.pi / 2.0, 0.0, 0.0])
    assert np.allclose(crest, UP)


def testDisplacementSurgesTowardCrest(evaluator, singleLayer):
    displacement = evaluator.displacementAt(singleLayer, 0.0, [0.0, 0.0, 0.0])
    # Q * a * cos(0) = 0.5 along the wave direction
    assert np.allclose(displacement, [0.5, 0.0, 0.0])


def testHeightGridShape(evaluator, singleLayer):
    xValues = np.linspace(-5.0, 5.0, 11)
    zValues = np.linspace(-2.0, 2.0, 5)
    grid = evaluator.sampleHeightGrid(singleLayer, 0.0, xValues, zValues)

    assert grid.shape == (5, 11)
    # Wave travels along x, so every row is identical
    assert np.allclose(grid, grid[0])
    assert grid[0, 5] == pytest.approx(0.0, abs=1e-12)


def testClockIsMonotonic():
    clock = WaveClock()
    clock.advance(0.5, timeScale=2.0)
    clock.advance(-1.0)
    clock.advance(0.0)

    assert clock.time == pytest.approx(1.0)
    clock.reset()
    assert clock.time == 0.0


@pytest.mark.parametrize('bad', [math.nan, math.inf])
def testNonFiniteLayerUpdateKeepsSamplesFinite(evaluator, bad):
    waveField = WaveField.ocean()
    assert waveField.updateLayer(0, steepness=bad, phase=bad, speed=bad)

    points = np.array([[0.0, 0.0, 0.0], [3.0, 0.0, -7.0]])
    assert np.all(np.isfinite(evaluator.heightAt(waveField, 2.0, points)))
    assert np.all(np.isfinite(evaluator.displacementAt(waveField, 2.0, points)))
    assert np.all(np.isfinite(evaluator.normalAt(waveField, 2.0, points)))
