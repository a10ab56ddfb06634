# -- Gerstner (Trochoidal) Wave Evaluator -- #

'''
Multi-layer Gerstner wave evaluation following Fernando & Kilgard.

Implements the WaveModel protocol. Each layer displaces a surface
point both vertically and horizontally; horizontal "surge" toward
the crest produces the sharp crests and flat troughs that a pure
sine sum lacks.

Key equations (per layer i, direction D = (dx, dz)):
- Wavenumber: k = 2*pi / lambda
- Phase speed: c = speed, or sqrt(g / k) for deep water
- Steepness factor: Q = s / (k * a * N)
- Phase: theta = k * (D . (x, z) - c * t) + phase
- Displacement: (Q*a*dx*cos(theta), a*sin(theta), Q*a*dz*cos(theta))
- Normal: cross(sum(binormal), sum(tangent)), where tangent and
  binormal are the x and z partial derivatives of the displacement

All queries are vectorized over layers and over query points; a single
(3,) point returns scalars / (3,) vectors, an (M, 3) batch returns
(M,) / (M, 3) arrays.

References:
-----------
Fernando, R. & Kilgard, M. -- GPU Gems, Ch. 1: Effective Water Simulation
Tessendorf, J. (2001) -- Simulating Ocean Water
'''

from __future__ import annotations

import numpy as np

from waterSurface import constants as const
from waterSurface.waves.waveField import WaveField


UP = np.array([0.0, 1.0, 0.0])


class GerstnerEvaluator:
    '''
    Stateless Gerstner wave model. Satisfies the WaveModel protocol.

    Time is supplied by the caller; advancing it is the clock's job.
    '''

    ######################################################################
    # -- Per-Layer Phase Terms -- #
    ######################################################################

    def _phaseTerms(
        self, waveField: WaveField, t: float, points: np.ndarray
    ) -> dict[str, np.ndarray]:
        '''
        Evaluate the phase of every layer at every query point.

        Parameters:
        -----------
        waveField : WaveField
            Validated wave field with N >= 1 layers
        t : float
            Simulation time [s]
        points : np.ndarray
            Query points, shape (M, 3)

        Returns:
        --------
        dict[str, np.ndarray] : (N,) layer arrays 'dx', 'dz', 'a', 'k', 'q'
            and (M, N) arrays 'sin', 'cos'
        '''
        arrays = waveField.layerArrays()
        n = waveField.nLayers

        dx = arrays['directions'][:, 0]
        dz = arrays['directions'][:, 1]
        a = arrays['amplitudes']
        k = arrays['wavenumbers']
        c = arrays['speeds']

        # Q = s / (k * a * N); a zero-amplitude layer gets Q = 0
        denominator = k * a * n
        safe = denominator > const.steepnessEpsilon
        q = np.where(safe, arrays['steepnesses'] / np.where(safe, denominator, 1.0), 0.0)

        x = points[:, 0:1]
        z = points[:, 2:3]
        theta = k * (dx * x + dz * z - c * t) + arrays['phases']

        return {
            'dx': dx,
            'dz': dz,
            'a': a,
            'k': k,
            'q': q,
            'sin': np.sin(theta),
            'cos': np.cos(theta),
        }

    @staticmethod
    def _asBatch(points) -> tuple[np.ndarray, bool]:
        '''Promote a (3,) point to a (1, 3) batch; report if it was single.'''
        pts = np.asarray(points, dtype=float)
        single = pts.ndim == 1
        return pts.reshape(-1, 3), single

    ######################################################################
    # -- Queries -- #
    ######################################################################

    def heightAt(
        self, waveField: WaveField, t: float, points, waveStrength: float = 1.0
    ) -> float | np.ndarray:
        '''
        Summed vertical displacement of all layers.

        Parameters:
        -----------
        waveField : WaveField
            Wave configuration
        t : float
            Simulation time [s]
        points : array-like
            Query point(s) relative to the surface origin, (3,) or (M, 3)
        waveStrength : float
            Global amplitude multiplier

        Returns:
        --------
        float | np.ndarray : Height above baseline [m]
        '''
        pts, single = self._asBatch(points)

        if waveField.nLayers == 0:
            heights = np.zeros(len(pts))
        else:
            terms = self._phaseTerms(waveField, t, pts)
            heights = np.sum(terms['a'] * terms['sin'], axis=1) * waveStrength

        return float(heights[0]) if single else heights

    def displacementAt(
        self, waveField: WaveField, t: float, points, waveStrength: float = 1.0
    ) -> np.ndarray:
        '''
        Summed (x, y, z) displacement of all layers.

        The horizontal components are the surge that moves a surface
        sample toward the nearest crest.

        Parameters:
        -----------
        waveField : WaveField
            Wave configuration
        t : float
            Simulation time [s]
        points : array-like
            Query point(s) relative to the surface origin, (3,) or (M, 3)
        waveStrength : float
            Global amplitude multiplier

        Returns:
        --------
        np.ndarray : Displacement [m], (3,) or (M, 3)
        '''
        pts, single = self._asBatch(points)

        if waveField.nLayers == 0:
            displacement = np.zeros((len(pts), 3))
        else:
            terms = self._phaseTerms(waveField, t, pts)
            qa = terms['q'] * terms['a']
            displacement = np.column_stack([
                np.sum(qa * terms['dx'] * terms['cos'], axis=1),
                np.sum(terms['a'] * terms['sin'], axis=1),
                np.sum(qa * terms['dz'] * terms['cos'], axis=1),
            ]) * waveStrength

        return displacement[0] if single else displacement

    def normalAt(self, waveField: WaveField, t: float, points) -> np.ndarray:
        '''
        Surface normal from the summed tangent and binormal vectors.

        tangent  = (1 - Q*k*a*dx^2*sin, k*a*dx*cos, -Q*k*a*dx*dz*sin)
        binormal = (-Q*k*a*dx*dz*sin, k*a*dz*cos, 1 - Q*k*a*dz^2*sin)
        normal   = normalize(cross(sum(binormal), sum(tangent)))

        Parameters:
        -----------
        waveField : WaveField
            Wave configuration
        t : float
            Simulation time [s]
        points : array-like
            Query point(s) relative to the surface origin, (3,) or (M, 3)

        Returns:
        --------
        np.ndarray : Unit normal, (3,) or (M, 3); up when degenerate
        '''
        pts, single = self._asBatch(points)

        if waveField.nLayers == 0:
            normals = np.tile(UP, (len(pts), 1))
            return normals[0] if single else normals

        terms = self._phaseTerms(waveField, t, pts)
        dx, dz, q = terms['dx'], terms['dz'], terms['q']
        wa = terms['k'] * terms['a']
        sinT, cosT = terms['sin'], terms['cos']

        qwaSin = q * wa * sinT
        shear = qwaSin * dx * dz

        tangent = np.column_stack([
            np.sum(1.0 - qwaSin * dx * dx, axis=1),
            np.sum(wa * dx * cosT, axis=1),
            np.sum(-shear, axis=1),
        ])
        binormal = np.column_stack([
            np.sum(-shear, axis=1),
            np.sum(wa * dz * cosT, axis=1),
            np.sum(1.0 - qwaSin * dz * dz, axis=1),
        ])

        normals = np.cross(binormal, tangent)
        lengths = np.linalg.norm(normals, axis=1)

        # Fully looped crests (Q*k*a = 1) collapse the normal; fall back to up
        valid = np.isfinite(lengths) & (lengths > 1e-9)
        normals[valid] /= lengths[valid, None]
        normals[~valid] = UP

        return normals[0] if single else normals

    ######################################################################
    # -- Grid Sampling -- #
    ######################################################################

    def sampleHeightGrid(
        self,
        waveField: WaveField,
        t: float,
        xValues: np.ndarray,
        zValues: np.ndarray,
        waveStrength: float = 1.0,
    ) -> np.ndarray:
        '''
        Heights on a regular (z, x) grid, for plotting and export.

        Parameters:
        -----------
        waveField : WaveField
            Wave configuration
        t : float
            Simulation time [s]
        xValues : np.ndarray
            Grid x coordinates, shape (nx,)
        zValues : np.ndarray
            Grid z coordinates, shape (nz,)
        waveStrength : float
            Global amplitude multiplier

        Returns:
        --------
        np.ndarray : Heights above baseline, shape (nz, nx)
        '''
        xx, zz = np.meshgrid(xValues, zValues, indexing='xy')
        points = np.column_stack([xx.ravel(), np.zeros(xx.size), zz.ravel()])
        heights = self.heightAt(waveField, t, points, waveStrength)
        return np.asarray(heights).reshape(xx.shape)
