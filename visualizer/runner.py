"""
Background runner bridging HTTP threads and the single-threaded engine.

Request threads never touch engine state: they queue commands, which the
simulation thread applies at the start of the next tick. After every tick
the runner publishes a fresh immutable snapshot for readers.
"""

import queue
import threading

from analyzer.statistics import Statistics
from config.simulation import SimulationConfig
from simulator.infrastructure.realtime_env import RealtimeEnvironment
from simulator.simulation import ElevatorSimulation


class SimulationRunner:
    """Runs an ElevatorSimulation in real time on a worker thread"""

    def __init__(self, config: SimulationConfig = None, env=None, max_events=10000):
        self.config = config if config is not None else SimulationConfig()
        self.env = env if env is not None else RealtimeEnvironment(speed_factor=self.config.realtime_factor)
        self.simulation = ElevatorSimulation(self.config, env=self.env)

        self.statistics = Statistics(self.env, self.simulation.broker.get_broadcast_pipe(), max_events=max_events)
        self.statistics.set_simulation_metadata(self.config.to_dict())
        self.env.process(self.statistics.start_listening())

        self.commands = queue.Queue()  # Thread-safe queue for cross-thread communication
        self._draining = False
        self.simulation.clock.before_tick.append(self.drain)
        self.simulation.clock.after_tick.append(self._publish_snapshot)

        self.latest_snapshot = self.simulation.snapshot()
        self._stop_requested = threading.Event()
        self._stop_event = self.env.event()
        self._thread = None

    # --- Called from request threads ---

    def submit_call(self, floor: int, direction: str):
        self.commands.put(('call', (floor, direction)))

    def submit_in_car_button(self, car_id: int, floor: int):
        self.commands.put(('press', (car_id, floor)))

    def submit_reset(self):
        self.commands.put(('reset', ()))

    def get_snapshot(self):
        return self.latest_snapshot

    # --- Called on the simulation thread ---

    def drain(self):
        """
        Apply queued commands in arrival order.

        A reset ends the batch: it runs its own tick, and later commands
        wait for the next one.
        """
        if self._draining:
            return
        self._draining = True
        try:
            while True:
                try:
                    name, args = self.commands.get_nowait()
                except queue.Empty:
                    break
                if name == 'call':
                    self.simulation.call(*args)
                elif name == 'press':
                    self.simulation.press_in_car_button(*args)
                elif name == 'reset':
                    self.simulation.reset()
                    break
        finally:
            self._draining = False

        if self._stop_requested.is_set() and not self._stop_event.triggered:
            self._stop_event.succeed()

    def _publish_snapshot(self):
        self.latest_snapshot = self.simulation.snapshot()

    # --- Thread lifecycle ---

    def start(self):
        if self._thread is not None:
            return self._thread
        self._thread = threading.Thread(target=self._run, name="elvdispatch-sim", daemon=True)
        self._thread.start()
        print(f"[Runner] Simulation thread started (speed {self.config.realtime_factor}x).")
        return self._thread

    def _run(self):
        self.env.run(until=self._stop_event)

    def stop(self, timeout=None):
        """Ask the simulation thread to finish at its next tick and wait for it."""
        self._stop_requested.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
        print("[Runner] Simulation thread stopped.")

    @property
    def is_running(self):
        return self._thread is not None and self._thread.is_alive()
