"""
realtime_env.py

A SimPy environment whose clock is paced against wall-clock time.
Simulation time is measured in milliseconds, so one tick of the
dispatch engine (tick_ms) takes tick_ms / speed_factor real milliseconds.
"""

import time

import simpy


class RealtimeEnvironment(simpy.Environment):
    """
    Custom SimPy environment with real-time synchronization.

    Every step() is followed by a sleep that keeps simulated milliseconds
    in line with real seconds scaled by speed_factor.

    Args:
        speed_factor (float): Speed multiplier for simulation
            - 1.0 = real-time (1000 sim ms = 1 real second)
            - 2.0 = double speed
            - 0.0 = no delay (fastest possible, default SimPy behavior)

    Example:
        >>> env = RealtimeEnvironment(speed_factor=0.5)  # Half speed
    """

    def __init__(self, speed_factor=1.0, initial_time=0):
        super().__init__(initial_time=initial_time)
        self.speed_factor = speed_factor
        self.real_start_time = time.monotonic()
        self.sim_start_time = self.now

    def step(self):
        """
        Execute one simulation step and synchronize with real time.
        """
        result = super().step()

        if self.speed_factor > 0:
            sim_elapsed_seconds = (self.now - self.sim_start_time) / 1000.0
            target_real_time = self.real_start_time + (sim_elapsed_seconds / self.speed_factor)
            sleep_time = target_real_time - time.monotonic()
            if sleep_time > 0:
                time.sleep(sleep_time)

        return result

    def set_speed(self, speed_factor):
        """
        Change simulation speed during runtime.
        Timing references are re-anchored so the change applies from now on.
        """
        self.speed_factor = speed_factor
        self.real_start_time = time.monotonic()
        self.sim_start_time = self.now

    def get_speed(self):
        """Get current simulation speed factor."""
        return self.speed_factor
