import itertools
import json
import re
from collections import deque
from datetime import datetime

import matplotlib.pyplot as plt
import numpy as np


class Statistics:
    """
    Receives every broker message and records what the engine did,
    as an independent "recorder".

    Keeps car trajectories, hall-call service times, stops and door
    events, plus a JSON Lines event log for offline playback.

    With max_events set, every history keeps only its most recent
    max_events entries, so a long-running server stays bounded; the
    summary then covers that window. Event indices stay absolute.
    """
    def __init__(self, env, broadcast_pipe, max_events=None):
        self.env = env
        self.broadcast_pipe = broadcast_pipe
        self.max_events = max_events
        self.car_trajectories = {}  # {car_name: deque[(time, floor)]}
        self.hall_call_on_history = deque(maxlen=max_events)  # [(time, floor, direction)]
        self.hall_call_off_history = deque(maxlen=max_events)  # [(time, floor, direction, serviced_by)]
        self.service_times = deque(maxlen=max_events)  # Hall call lamp ON -> OFF durations (ms)
        self.arrivals = deque(maxlen=max_events)  # [(time, car_name, floor, external)]
        self.door_close_events = deque(maxlen=max_events)  # [(time, car_name, floor)]
        self.assignments = deque(maxlen=max_events)  # [(time, floor, direction, car_name, cost)]

        # JSON Lines event log for offline playback
        self.event_log = deque(maxlen=max_events)
        self.events_recorded = 0  # Events ever logged, including dropped ones
        self.simulation_metadata = {}

    def _add_event_log(self, event_type, event_data):
        """
        Add an event to the JSON Lines log.

        Args:
            event_type (str): Type of event (e.g., 'car_status', 'hall_call_on', etc.)
            event_data (dict): Event-specific data
        """
        self.event_log.append({
            "time": self.env.now,
            "type": event_type,
            "data": event_data
        })
        self.events_recorded += 1

    def set_simulation_metadata(self, metadata):
        """
        Set simulation metadata (called before simulation starts).

        Args:
            metadata (dict): Simulation configuration
        """
        self.simulation_metadata = {
            "format_version": "1.0",
            "timestamp": datetime.now().isoformat(),
            "config": metadata
        }

    def start_listening(self):
        """
        Main process intercepting global broadcasts.
        """
        while True:
            data = yield self.broadcast_pipe.get()
            self.record(data.get('topic', ''), data.get('message', {}))

    def record(self, topic, message):
        """Dispatch one broker message to the matching recorder."""
        status_match = re.match(r'car/(.*?)/status$', topic)
        if status_match:
            car_name = status_match.group(1)
            trajectory = self.car_trajectories.get(car_name)
            if trajectory is None:
                trajectory = self.car_trajectories[car_name] = deque(maxlen=self.max_events)
            point = (message.get('timestamp'), message.get('current_floor'))
            if not trajectory or trajectory[-1] != point:
                trajectory.append(point)
            self._add_event_log('car_status', {
                'car': car_name,
                'floor': message.get('current_floor'),
                'state': message.get('state'),
                'direction': message.get('direction'),
                'targets': message.get('targets', []),
                'doors_open': message.get('doors_open'),
                'moving': message.get('moving'),
            })
            return

        arrival_match = re.match(r'car/(.*?)/arrival$', topic)
        if arrival_match:
            car_name = arrival_match.group(1)
            self.arrivals.append((message.get('timestamp'), car_name, message.get('floor'), message.get('external')))
            self._add_event_log('arrival', {
                'car': car_name,
                'floor': message.get('floor'),
                'external': message.get('external'),
            })
            return

        door_match = re.match(r'car/(.*?)/door_closed$', topic)
        if door_match:
            car_name = door_match.group(1)
            self.door_close_events.append((message.get('timestamp'), car_name, message.get('floor')))
            self._add_event_log('door_closed', {'car': car_name, 'floor': message.get('floor')})
            return

        if re.match(r'hall_button/floor_\d+/call_on$', topic):
            self.hall_call_on_history.append((message.get('timestamp'), message.get('floor'), message.get('direction')))
            self._add_event_log('hall_call_on', {'floor': message.get('floor'), 'direction': message.get('direction')})
            return

        if re.match(r'hall_button/floor_\d+/call_off$', topic):
            timestamp = message.get('timestamp')
            pressed_at = message.get('pressed_at')
            self.hall_call_off_history.append((timestamp, message.get('floor'), message.get('direction'), message.get('serviced_by')))
            if timestamp is not None and pressed_at is not None:
                self.service_times.append(timestamp - pressed_at)
            self._add_event_log('hall_call_off', {
                'floor': message.get('floor'),
                'direction': message.get('direction'),
                'serviced_by': message.get('serviced_by'),
            })
            return

        if topic == 'dispatcher/assignment':
            self.assignments.append((message.get('timestamp'), message.get('floor'), message.get('direction'),
                                     message.get('car'), message.get('cost')))
            self._add_event_log('assignment', {
                'floor': message.get('floor'),
                'direction': message.get('direction'),
                'car': message.get('car'),
                'cost': message.get('cost'),
            })
            return

        if topic == 'simulation/reset':
            self._add_event_log('reset', {})

    def events_since(self, index=0):
        """
        Events from absolute position index onwards (for live polling).
        Events already dropped from a bounded log are skipped.
        """
        first_kept = self.events_recorded - len(self.event_log)
        start = max(0, index - first_kept)
        return list(itertools.islice(self.event_log, start, None))

    def summary(self):
        """
        Aggregate performance figures.

        Returns:
            dict: hall-call service time statistics (ms) and stop counts
        """
        times = np.asarray(self.service_times, dtype=float)
        if times.size:
            service = {
                'count': int(times.size),
                'mean_ms': float(times.mean()),
                'p95_ms': float(np.percentile(times, 95)),
                'max_ms': float(times.max()),
            }
        else:
            service = {'count': 0, 'mean_ms': 0.0, 'p95_ms': 0.0, 'max_ms': 0.0}

        stops_per_car = {}
        for _, car_name, _, _ in self.arrivals:
            stops_per_car[car_name] = stops_per_car.get(car_name, 0) + 1

        return {
            'hall_calls': len(self.hall_call_on_history),
            'service_time': service,
            'stops': len(self.arrivals),
            'external_stops': sum(1 for arrival in self.arrivals if arrival[3]),
            'stops_per_car': stops_per_car,
        }

    def print_summary(self):
        summary = self.summary()
        service = summary['service_time']
        print("\n--- Dispatch Summary ---")
        print(f"Hall calls:        {summary['hall_calls']}")
        print(f"Calls served:      {service['count']}")
        print(f"Service time mean: {service['mean_ms'] / 1000.0:.2f}s")
        print(f"Service time p95:  {service['p95_ms'] / 1000.0:.2f}s")
        print(f"Service time max:  {service['max_ms'] / 1000.0:.2f}s")
        print(f"Stops:             {summary['stops']} ({summary['external_stops']} for hall calls)")
        for car_name in sorted(summary['stops_per_car']):
            print(f"  {car_name}: {summary['stops_per_car'][car_name]} stops")

    def plot_trajectory_diagram(self, output_filename='car_trajectory_diagram.png', show=False):
        """
        Draw the floor-vs-time travel diagram of every car.

        Hall calls are marked with arrows at the time they were raised.
        """
        print("\n--- Plotting: Car Trajectory Diagram ---")
        fig = plt.figure(figsize=(14, 8))

        car_colors = ['#1f77b4', '#ff7f0e', '#2ca02c', '#d62728', '#9467bd', '#8c564b']
        for idx, name in enumerate(sorted(self.car_trajectories)):
            trajectory = self.car_trajectories[name]
            if not trajectory:
                continue
            times, floors = zip(*sorted(trajectory, key=lambda point: point[0]))
            times = np.asarray(times, dtype=float) / 1000.0
            plt.step(times, floors, where='post', label=name, linewidth=2.5,
                     color=car_colors[idx % len(car_colors)], alpha=0.8)

        for timestamp, floor, direction in self.hall_call_on_history:
            plt.annotate('↑' if direction == 'UP' else '↓', (timestamp / 1000.0, floor),
                         ha='center', va='center', fontsize=12, color='black')

        for timestamp, car_name, floor, _ in self.arrivals:
            plt.scatter(timestamp / 1000.0, floor, marker='s', s=30, color='gray', alpha=0.6)

        plt.title("Car Trajectory Diagram")
        plt.xlabel("Time (s)")
        plt.ylabel("Floor")
        plt.grid(True, which='both', linestyle='--', alpha=0.7)
        if self.car_trajectories:
            plt.legend(loc='upper right', fontsize=10)

        plt.savefig(output_filename, dpi=150, bbox_inches='tight')
        print(f"Trajectory diagram saved to: {output_filename}")

        if show:
            plt.show()
        plt.close(fig)
        return output_filename

    def save_event_log(self, filename='simulation_log.jsonl'):
        """
        Save the event log to a JSON Lines file.

        Args:
            filename (str): Name of the output file (default: 'simulation_log.jsonl')
        """
        print(f"\nSaving event log to {filename}...")

        with open(filename, 'w', encoding='utf-8') as f:
            if self.simulation_metadata:
                f.write(json.dumps({
                    "type": "metadata",
                    "data": self.simulation_metadata
                }) + '\n')

            for event in self.event_log:
                f.write(json.dumps(event, ensure_ascii=False) + '\n')

        print(f"Event log saved: {len(self.event_log)} events written to {filename}")
        return filename
