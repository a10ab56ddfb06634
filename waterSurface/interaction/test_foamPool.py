# -- Foam Pool Tests -- #

'''
Foam spawning counts, random ranges, aging and compaction.
'''

import dataclasses
import math

import numpy as np
import pytest

from waterSurface.interaction.foamPool import FoamParticle, FoamPool


@pytest.fixture
def pool():
    return FoamPool(rng=np.random.default_rng(42))


@pytest.mark.parametrize('amount, expected', [
    (0.0, 0),
    (0.01, 0),
    (0.5, 10),
    (1.0, 20),
    (0.125, 2),    # 2.5 rounds half to even
    (0.375, 8),    # 7.5 rounds half to even
])
def testSpawnCount(pool, amount, expected):
    assert pool.createFoamAtPosition([0.0, 0.0, 0.0], amount, spread=1.0) == expected
    assert pool.count == expected


def testNegativeAmountSpawnsNothing(pool):
    assert pool.createFoamAtPosition([0.0, 0.0, 0.0], -3.0, spread=1.0) == 0
    assert pool.count == 0


@pytest.mark.parametrize('amount', [math.nan, math.inf, -math.inf, 1e308])
def testNonFiniteAmountSpawnsNothing(pool, amount):
    assert pool.createFoamAtPosition([0.0, 0.0, 0.0], amount, spread=1.0) == 0
    assert pool.count == 0


@pytest.mark.parametrize('spread', [math.nan, math.inf])
def testNonFiniteSpreadCollapsesToOrigin(pool, spread):
    assert pool.createFoamAtPosition([1.0, 2.0, 3.0], 1.0, spread=spread) == 20
    assert np.all(np.isfinite(pool.positions))
    np.testing.assert_allclose(pool.positions[:, 0], 1.0)
    np.testing.assert_allclose(pool.positions[:, 2], 3.0)


def testSpawnClippedToRemainingCapacity():
    pool = FoamPool(capacity=1000, rng=np.random.default_rng(1))
    assert pool.createFoamAtPosition([0.0, 0.0, 0.0], 49.0, spread=1.0) == 980
    assert pool.createFoamAtPosition([0.0, 0.0, 0.0], 5.0, spread=1.0) == 20
    assert pool.count == 1000
    assert pool.createFoamAtPosition([0.0, 0.0, 0.0], 5.0, spread=1.0) == 0


def testSpawnRanges(pool):
    origin = np.array([3.0, -1.0, 7.0])
    pool.createFoamAtPosition(origin, 40.0, spread=2.5)

    for particle in pool.particles:
        dx = particle.position[0] - origin[0]
        dz = particle.position[2] - origin[2]
        assert particle.position[1] == pytest.approx(origin[1])
        assert np.hypot(dx, dz) <= 2.5 + 1e-12
        assert -0.5 <= particle.velocity[0] <= 0.5
        assert particle.velocity[1] == 0.0
        assert -0.5 <= particle.velocity[2] <= 0.5
        assert 0.1 <= particle.size <= 0.3
        assert particle.alpha == 1.0
        assert 0.5 <= particle.decayRate <= 2.0
        assert 2.0 <= particle.remainingLifetime <= 5.0


def testSeededPoolsAreReproducible():
    first = FoamPool(rng=np.random.default_rng(9))
    second = FoamPool(rng=np.random.default_rng(9))
    first.createFoamAtPosition([0.0, 0.0, 0.0], 2.0, spread=1.0)
    second.createFoamAtPosition([0.0, 0.0, 0.0], 2.0, spread=1.0)

    assert np.array_equal(first.positions, second.positions)
    assert np.array_equal(first.sizes, second.sizes)


def testUpdateDriftsAndFades(pool):
    pool.createFoamAtPosition([0.0, 0.0, 0.0], 1.0, spread=0.0)
    before = pool.particles

    pool.update(0.5)
    after = pool.particles

    assert pool.count == 20
    for old, new in zip(before, after):
        assert new.position[0] == pytest.approx(old.position[0] + old.velocity[0] * 0.5)
        assert new.position[2] == pytest.approx(old.position[2] + old.velocity[2] * 0.5)
        assert new.alpha == pytest.approx(np.exp(-old.decayRate * 0.5))
        assert new.remainingLifetime == pytest.approx(old.remainingLifetime - 0.5)


def testExpiredParticlesAreCompactedOut(pool):
    pool.createFoamAtPosition([0.0, 0.0, 0.0], 5.0, spread=1.0)
    lifetimes = np.array([p.remainingLifetime for p in pool.particles])

    removed = pool.update(3.5)

    assert removed == int(np.count_nonzero(lifetimes <= 3.5))
    assert pool.count == 100 - removed
    assert all(p.remainingLifetime > 0.0 for p in pool.particles)

    pool.update(5.0)
    assert pool.count == 0
    assert pool.positions.shape == (0, 3)


def testViewsAreReadOnly(pool):
    pool.createFoamAtPosition([0.0, 0.0, 0.0], 1.0, spread=1.0)

    with pytest.raises(ValueError):
        pool.positions[0, 0] = 5.0
    with pytest.raises(ValueError):
        pool.alphas[0] = 0.0


def testParticlesAreFrozenSnapshots(pool):
    pool.createFoamAtPosition([0.0, 0.0, 0.0], 0.5, spread=1.0)
    particle = pool.particles[0]

    assert isinstance(particle, FoamParticle)
    with pytest.raises(dataclasses.FrozenInstanceError):
        particle.alpha = 0.0


def testClear(pool):
    pool.createFoamAtPosition([0.0, 0.0, 0.0], 3.0, spread=1.0)
    pool.clear()
    assert pool.count == 0 and len(pool) == 0
    assert pool.particles == ()
