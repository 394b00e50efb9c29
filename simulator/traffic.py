"""
Random demo traffic for the dispatch engine.

Hall calls arrive at exponential inter-arrival times. When a car stops for
a hall call, the passenger picks a destination on the in-car panel.
"""

import random

from config.simulation import TrafficConfig

from .core.direction import DOWN, UP


class CallGenerator:
    """Drives an ElevatorSimulation with random hall calls and in-car presses"""

    def __init__(self, simulation, traffic: TrafficConfig, rng: random.Random = None):
        self.simulation = simulation
        self.env = simulation.env
        self.broker = simulation.broker
        self.traffic = traffic
        self.rng = rng if rng is not None else random.Random()
        self.calls_generated = 0
        self.presses_generated = 0

    def start(self):
        """Start the hall-call process and one panel listener per car."""
        if self.traffic.pattern == "none":
            return
        self.env.process(self.hall_call_process())
        for car in self.simulation.cars:
            self.env.process(self.panel_listener(car.name))

    def hall_call_process(self):
        rate_per_ms = self.traffic.call_rate_per_min / 60000.0
        num_floors = self.simulation.num_floors
        while True:
            if rate_per_ms > 0:
                wait_ms = self.rng.expovariate(rate_per_ms)
            else:
                # No traffic configured: park the process
                wait_ms = self.traffic.simulation_duration_ms
            yield self.env.timeout(wait_ms)
            if rate_per_ms <= 0:
                continue

            floor = self.rng.randrange(num_floors)
            if floor == 0:
                direction = UP
            elif floor == num_floors - 1:
                direction = DOWN
            else:
                direction = self.rng.choice((UP, DOWN))

            self.calls_generated += 1
            print(f"{self.env.now:.2f} [CallGen] Hall call #{self.calls_generated}: floor {floor} {direction}")
            self.simulation.call(floor, direction)

    def panel_listener(self, car_name: str):
        """Press a destination whenever this car stops for a hall call."""
        topic = f"car/{car_name}/arrival"
        num_floors = self.simulation.num_floors
        while True:
            arrival = yield self.broker.get(topic)
            if not arrival.get("external"):
                continue
            if self.rng.random() >= self.traffic.in_car_probability:
                continue

            destination = self.rng.randrange(num_floors - 1)
            if destination >= arrival["floor"]:
                destination += 1
            self.presses_generated += 1
            print(f"{self.env.now:.2f} [CallGen] {car_name} panel: floor {destination}")
            self.simulation.press_in_car_button(arrival["car_id"], destination)
