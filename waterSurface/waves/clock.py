# -- Wave Animation Clock -- #

'''
Monotonic simulation clock driving wave animation.

Each WaterSurface normally owns its clock. For synchronized animation
across several surfaces ("global time"), one WaveClock is shared and
exactly one surface is constructed as its writer; the others only
read it. Reads from other threads must be synchronized by the host.

Pausing animation is `config.enableWaves = False` on the owning surface,
which stops advancing the clock; setting it back to True resumes from the
frozen time. The animation time scale is `config.waveSpeed`, passed to
advance() as timeScale.
'''

from __future__ import annotations


class WaveClock:
    '''
    Accumulated animation time.

    Parameters:
    -----------
    time : float
        Initial time [s]
    '''

    def __init__(self, time: float = 0.0) -> None:
        self._time = float(time)

    @property
    def time(self) -> float:
        '''Current animation time [s].'''
        return self._time

    def advance(self, deltaTime: float, timeScale: float = 1.0) -> float:
        '''
        Advance time by deltaTime * timeScale.

        Negative steps are ignored so the clock stays monotonic.

        Parameters:
        -----------
        deltaTime : float
            Frame time step [s]
        timeScale : float
            Animation speed multiplier

        Returns:
        --------
        float : New time [s]
        '''
        step = float(deltaTime) * float(timeScale)
        if step > 0.0:
            self._time += step
        return self._time

    def reset(self) -> None:
        '''Rewind to t = 0.'''
        self._time = 0.0

    def __repr__(self) -> str:
        return f'WaveClock(time={self._time:.4f})'
