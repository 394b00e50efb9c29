from typing import Callable, List

import simpy


class SimulationClock:
    """
    Periodic driver of the car state machines.

    Every tick_ms the clock runs before-tick hooks (command intake), one
    step() for each car in car order, then after-tick hooks (observers).
    Nothing in a pass yields, so a pass is atomic on the SimPy timeline.
    """

    def __init__(self, env: simpy.Environment, tick_ms: float, cars: list):
        self.env = env
        self.tick_ms = tick_ms
        self.cars = cars
        self.tick_count = 0
        self.before_tick: List[Callable[[], None]] = []
        self.after_tick: List[Callable[[], None]] = []
        self.process = None

    def start(self):
        """Start the periodic SimPy process (idempotent)."""
        if self.process is None:
            self.process = self.env.process(self.run())
        return self.process

    def run(self):
        while True:
            yield self.env.timeout(self.tick_ms)
            self.tick()

    def tick(self):
        """One full pass over every car."""
        for hook in self.before_tick:
            hook()
        for car in self.cars:
            car.step()
        self.tick_count += 1
        for hook in self.after_tick:
            hook()
