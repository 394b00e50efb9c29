"""
ElevatorSimulation - owner of the engine state

Builds the board, the cars, the dispatcher and the clock on one SimPy
environment, and is the only way observers touch them: the inbound
operations (call, press_in_car_button, reset) and an immutable snapshot.
"""

from typing import List, Optional

import simpy

from config.simulation import SimulationConfig
from controller.algorithms import get_strategy
from controller.dispatcher import CallDispatcher

from .core.call_board import FloorCallBoard
from .core.car import Car
from .core.clock import SimulationClock
from .infrastructure.message_broker import MessageBroker
from .snapshot import CarSnapshot, FloorSnapshot, SimulationSnapshot


class ElevatorSimulation:
    """Dispatch engine for a fixed building and fleet."""

    def __init__(self, config: SimulationConfig = None, env: simpy.Environment = None,
                 broker: MessageBroker = None):
        """
        Args:
            config: Simulation configuration (defaults if omitted)
            env: SimPy environment to run on (a plain Environment if omitted)
            broker: Message broker (created on env if omitted)
        """
        self.config = config if config is not None else SimulationConfig()
        self.env = env if env is not None else simpy.Environment()
        self.broker = broker if broker is not None else MessageBroker(self.env, verbose=self.config.verbose)

        self.num_floors = self.config.building.num_floors
        self.num_cars = self.config.elevator.num_elevators
        self.tick_ms = self.config.timing.tick_ms
        self.door_ms = self.config.timing.door_ms

        self.call_board = FloorCallBoard(self.env, self.num_floors, self.broker)
        self.cars: List[Car] = [
            Car(self.env, car_id, self.broker, self.call_board, self.num_floors, self.door_ms)
            for car_id in range(self.num_cars)
        ]
        strategy = get_strategy(self.config.dispatch.strategy, **self.config.dispatch.parameters)
        self.dispatcher = CallDispatcher(self.broker, self.call_board, self.cars, strategy)
        self.clock = SimulationClock(self.env, self.tick_ms, self.cars)
        self.clock.start()

        print(f"{self.env.now:.2f} [Simulation] {self.num_cars} cars, {self.num_floors} floors, "
              f"tick={self.tick_ms}ms, door={self.door_ms}ms")

    # --- Inbound operations ---

    def call(self, floor: int, direction: str) -> Optional[Car]:
        """Hall call; ignored when the floor is outside the building."""
        return self.dispatcher.call(floor, direction)

    def press_in_car_button(self, car_id: int, floor: int) -> bool:
        """In-car request; ignored when the car already targets the floor."""
        return self.dispatcher.press_in_car_button(car_id, floor)

    def reset(self):
        """
        Reinitialize every car and the call board, cancel pending door
        timers, then force one tick so observers see a consistent state
        without waiting for the next clock pulse.
        """
        print(f"{self.env.now:.2f} [Simulation] Reset.")
        for car in self.cars:
            car.reset()
        self.call_board.reset()
        self.broker.put("simulation/reset", {"timestamp": self.env.now})
        self.clock.tick()

    # --- Driving the clock ---

    def tick(self):
        """Run one clock pass immediately (outside the periodic schedule)."""
        self.clock.tick()

    def run(self, until=None):
        """Advance the SimPy timeline (until is an absolute time in ms)."""
        self.env.run(until=until)

    def run_ticks(self, count: int):
        """
        Advance the timeline until count more clock passes have run.

        Stops right after the last pass; door events due at the same
        instant but scheduled earlier have already been processed.
        """
        target = self.clock.tick_count + count
        while self.clock.tick_count < target:
            self.env.step()

    # --- Outbound view ---

    def get_car(self, car_id: int) -> Optional[Car]:
        return self.dispatcher.get_car(car_id)

    def snapshot(self) -> SimulationSnapshot:
        cars = tuple(
            CarSnapshot(
                car_id=car.car_id,
                name=car.name,
                current_floor=car.current_floor,
                direction=car.direction,
                targets=car.targets.as_tuple(),
                doors_open=car.doors_open,
                moving=car.moving,
                floor_buttons=frozenset(car.floor_buttons),
                state=car.state,
            )
            for car in self.cars
        )
        floors = tuple(
            FloorSnapshot(floor=floor, up=up, down=down)
            for floor, (up, down) in enumerate(self.call_board.snapshot())
        )
        return SimulationSnapshot(time=self.env.now, tick=self.clock.tick_count, cars=cars, floors=floors)
