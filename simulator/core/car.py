import simpy
from simpy.events import Interrupt, Timeout

from ..infrastructure.message_broker import MessageBroker
from .call_board import FloorCallBoard
from .direction import DOWN, IDLE, UP, direction_toward
from .entity import Entity
from .target_queue import TargetQueue


class Car(Entity):
    """
    Elevator car and its per-tick state machine.

    States:
        IDLE      - doors closed, not moving
        MOVING    - travelling one floor per tick toward the head of the queue
        DOOR_OPEN - stopped at a floor until the door-close event fires

    The car never advances itself: SimulationClock calls step() once per
    tick. Door closing is a separate SimPy process started on arrival.
    """

    def __init__(self, env: simpy.Environment, car_id: int, broker: MessageBroker,
                 call_board: FloorCallBoard, num_floors: int, door_ms: float):
        super().__init__(env, f"Car_{car_id}", initial_state="IDLE")
        self.car_id = car_id
        self.broker = broker
        self.call_board = call_board
        self.num_floors = num_floors
        self.door_ms = door_ms

        self.current_floor = 0
        self.direction = IDLE
        self.targets = TargetQueue()
        self.doors_open = False
        self.moving = False
        self.floor_buttons = set()
        self.door_process = None  # Pending door-close process (interrupted on reset)
        self._door_generation = 0

        self.status_topic = f"car/{self.name}/status"

    # --- Status reporting ---

    def _on_state_changed(self, old_state: str, new_state: str):
        super()._on_state_changed(old_state, new_state)
        self._report_status()

    def _update_state_label(self):
        if self.doors_open:
            self.set_state("DOOR_OPEN")
        elif self.moving:
            self.set_state("MOVING")
        else:
            self.set_state("IDLE")

    def _set_direction(self, new_direction: str):
        if self.direction != new_direction:
            old_direction = self.direction
            self.direction = new_direction
            print(f"{self.env.now:.2f}: [{self.name}] Direction: {old_direction} -> {new_direction}")

    def _report_status(self):
        self.broker.put(self.status_topic, {
            "timestamp": self.env.now,
            "car_id": self.car_id,
            "car": self.name,
            "current_floor": self.current_floor,
            "state": self.state,
            "direction": self.direction,
            "targets": list(self.targets),
            "doors_open": self.doors_open,
            "moving": self.moving,
        })

    # --- Queue handling ---

    def update_direction(self):
        """Recompute direction from the head of the queue (IDLE when empty)."""
        next_floor = self.targets.peek()
        if next_floor is None:
            self._set_direction(IDLE)
        else:
            # Equal floors fall back to IDLE
            self._set_direction(direction_toward(self.current_floor, next_floor))

    def add_target(self, floor: int) -> bool:
        """
        Queue a floor, sorted for the current direction.
        An idle car picks its new direction immediately.

        Returns:
            bool: False if the floor was already queued
        """
        inserted = self.targets.insert(floor, self.direction)
        if not inserted:
            return False
        print(f"{self.env.now:.2f} [{self.name}] Target added: floor {floor}. Queue: {list(self.targets)}")
        if self.direction == IDLE:
            self.update_direction()
        return True

    def press_button(self, floor: int) -> bool:
        """In-car panel button. Ignored if the floor is already a target."""
        if floor in self.targets:
            return False
        self.floor_buttons.add(floor)
        return self.add_target(floor)

    # --- State machine ---

    def step(self):
        """Advance this car by one tick."""
        if self.doors_open:
            return

        if not self.targets:
            if self.moving:
                self.moving = False
                self.update_direction()
                self._update_state_label()
            return

        target = self.targets.peek()
        if target == self.current_floor:
            self._arrive()
            return

        self.moving = True
        self._set_direction(UP if target > self.current_floor else DOWN)
        self.current_floor += 1 if target > self.current_floor else -1
        if self.state == "MOVING":
            self._report_status()
        else:
            self._update_state_label()

    def _arrive(self):
        floor = self.current_floor
        was_external_stop = self.call_board.is_pending(floor)

        self.targets.pop_next()
        self.doors_open = True
        self.moving = False
        self.call_board.clear(floor, self.name)
        self.floor_buttons.discard(floor)
        print(f"{self.env.now:.2f} [{self.name}] Arrived at floor {floor}. Doors opening.")
        self._update_state_label()

        self.broker.put(f"car/{self.name}/arrival", {
            "timestamp": self.env.now,
            "car_id": self.car_id,
            "car": self.name,
            "floor": floor,
            "external": was_external_stop,
        })
        self.door_process = self.env.process(self._door_cycle(floor, self._door_generation))

    def _door_cycle(self, floor: int, generation: int):
        """Keep the doors open for door_ms, then close them."""
        try:
            yield self.env.timeout(self.door_ms)
        except Interrupt:
            print(f"{self.env.now:.2f} [{self.name}] Door timer at floor {floor} cancelled.")
            return

        if generation != self._door_generation:
            # Timer belongs to a cycle that was cancelled before it started waiting
            return

        self.door_process = None
        self.doors_open = False
        self.update_direction()
        print(f"{self.env.now:.2f} [{self.name}] Doors closed at floor {floor}.")
        self._update_state_label()
        self.broker.put(f"car/{self.name}/door_closed", {
            "timestamp": self.env.now,
            "car_id": self.car_id,
            "car": self.name,
            "floor": floor,
        })

    # --- Lifecycle ---

    def cancel_door_timer(self):
        """
        Invalidate the pending door-close event.

        A timer already waiting on its timeout is interrupted; one whose
        process has not started yet cannot be interrupted and is dropped
        through the generation check instead.
        """
        self._door_generation += 1
        process = self.door_process
        if process is not None and process.is_alive and isinstance(process.target, Timeout):
            process.interrupt("reset")
        self.door_process = None

    def reset(self):
        """Back to floor 0, idle, empty queue and buttons, doors closed."""
        self.cancel_door_timer()
        self.current_floor = 0
        self.direction = IDLE
        self.targets.clear()
        self.doors_open = False
        self.moving = False
        self.floor_buttons.clear()
        if self.state == "IDLE":
            # No label change, so publish the new floor explicitly
            self._report_status()
        else:
            self._update_state_label()
