from typing import List, Optional

from simulator.core.call_board import FloorCallBoard
from simulator.core.car import Car
from simulator.core.direction import normalize_hall_direction
from simulator.infrastructure.message_broker import MessageBroker

from .algorithms.trip_cost import TripCostStrategy
from .interfaces.allocation_strategy import IAllocationStrategy


class CallDispatcher:
    """
    Assigns hall calls and in-car requests to cars.

    Hall calls go to the cheapest car according to the allocation strategy;
    in-car requests always go to the car they were made in. Every operation
    is total: invalid input is dropped, never raised.
    """

    def __init__(self, broker: MessageBroker, call_board: FloorCallBoard,
                 cars: List[Car], strategy: IAllocationStrategy = None):
        self.broker = broker
        self.call_board = call_board
        self.cars = cars
        self.strategy = strategy if strategy is not None else TripCostStrategy()

        print(f"{self.broker.get_current_time():.2f} [Dispatcher] Using strategy: {self.strategy.get_strategy_name()}")

    def call(self, floor: int, direction: str) -> Optional[Car]:
        """
        Hall call from a floor.

        A call on an already-lit button is dispatched again; insert is
        idempotent so the chosen car is at worst reinforced.

        Returns:
            The car the call was assigned to, None if the floor is out of range
        """
        if not self.call_board.in_range(floor):
            print(f"{self.broker.get_current_time():.2f} [Dispatcher] Ignoring hall call for floor {floor}: out of range.")
            return None
        try:
            direction = normalize_hall_direction(direction)
        except ValueError as e:
            print(f"{self.broker.get_current_time():.2f} [Dispatcher] Ignoring hall call for floor {floor}: {e}")
            return None
        self.call_board.raise_call(floor, direction)
        return self.schedule(floor, direction)

    def press_in_car_button(self, car_id: int, floor: int) -> bool:
        """
        In-car request. Bypasses cost scheduling.

        Returns:
            bool: True if the floor was added to the car's queue
        """
        car = self.get_car(car_id)
        if car is None or not self.call_board.in_range(floor):
            print(f"{self.broker.get_current_time():.2f} [Dispatcher] Ignoring in-car request: car {car_id}, floor {floor}.")
            return False
        return car.press_button(floor)

    def schedule(self, floor: int, direction: str) -> Car:
        """Give (floor, direction) to the cheapest car; the first car wins ties."""
        best_car = None
        best_cost = None
        for car in self.cars:
            cost = self.strategy.cost(car, floor, direction)
            print(f"{self.broker.get_current_time():.2f} [Dispatcher] {car.name}: Floor={car.current_floor}, "
                  f"Direction={car.direction}, Targets={list(car.targets)}, Cost={cost}")
            if best_cost is None or cost < best_cost:
                best_car = car
                best_cost = cost

        print(f"{self.broker.get_current_time():.2f} [Dispatcher] Selected {best_car.name} with cost={best_cost}")
        best_car.add_target(floor)
        self.broker.put("dispatcher/assignment", {
            "timestamp": self.broker.get_current_time(),
            "floor": floor,
            "direction": direction,
            "car_id": best_car.car_id,
            "car": best_car.name,
            "cost": best_cost,
        })
        return best_car

    def get_car(self, car_id: int) -> Optional[Car]:
        for car in self.cars:
            if car.car_id == car_id:
                return car
        return None
