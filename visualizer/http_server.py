#!/usr/bin/env python3
"""
HTTP Server for the Elevator Dispatch Engine
Exposes the engine's read-only state and accepts hall calls, in-car
requests and resets from a browser front end.
"""
import sys

from flask import Flask, jsonify, request
from flask_cors import CORS

from config import load_simulation_config
from simulator.core.direction import normalize_hall_direction

from .runner import SimulationRunner


def _parse_floor(payload):
    floor = payload.get('floor')
    if isinstance(floor, bool) or not isinstance(floor, int):
        raise ValueError("'floor' must be an integer")
    return floor


def create_app(runner: SimulationRunner) -> Flask:
    """Build the Flask app around a (started or not) SimulationRunner"""
    app = Flask(__name__)
    CORS(app)  # Enable CORS for all routes
    app.config['RUNNER'] = runner

    @app.route('/api/status')
    def status():
        """Server status endpoint"""
        return jsonify({
            'status': 'ok',
            'server': 'Elevator Dispatch HTTP Server',
            'version': '1.0',
            'running': runner.is_running,
            'num_floors': runner.simulation.num_floors,
            'num_cars': runner.simulation.num_cars,
            'tick_ms': runner.simulation.tick_ms,
            'door_ms': runner.simulation.door_ms,
        })

    @app.route('/api/state')
    def state():
        """Latest engine snapshot (cars and hall-call flags)"""
        return jsonify(runner.get_snapshot().to_dict())

    @app.route('/api/call', methods=['POST'])
    def hall_call():
        """Queue a hall call: {"floor": int, "direction": "up" | "down"}"""
        payload = request.get_json(silent=True) or {}
        try:
            floor = _parse_floor(payload)
            direction = normalize_hall_direction(payload.get('direction'))
        except ValueError as e:
            return jsonify({'error': str(e)}), 400
        runner.submit_call(floor, direction)
        return jsonify({'accepted': True, 'command': 'call', 'floor': floor, 'direction': direction}), 202

    @app.route('/api/cars/<int:car_id>/buttons', methods=['POST'])
    def in_car_button(car_id):
        """Queue an in-car request: {"floor": int}"""
        if runner.simulation.get_car(car_id) is None:
            return jsonify({'error': f"Car {car_id} not found"}), 404
        payload = request.get_json(silent=True) or {}
        try:
            floor = _parse_floor(payload)
        except ValueError as e:
            return jsonify({'error': str(e)}), 400
        runner.submit_in_car_button(car_id, floor)
        return jsonify({'accepted': True, 'command': 'press', 'car_id': car_id, 'floor': floor}), 202

    @app.route('/api/reset', methods=['POST'])
    def reset():
        """Queue a simulation reset"""
        runner.submit_reset()
        return jsonify({'accepted': True, 'command': 'reset'}), 202

    @app.route('/api/events')
    def events():
        """
        Recorded events from a position onwards (for live polling)
        Query params:
            - from: starting event index (default: 0)
        """
        try:
            from_index = int(request.args.get('from', 0))
        except ValueError:
            return jsonify({'error': "'from' must be an integer"}), 400
        selected = runner.statistics.events_since(from_index)
        return jsonify({
            'events': selected,
            'from': from_index,
            'returned_count': len(selected),
            'next': runner.statistics.events_recorded,
        })

    return app


def run_server(config_path=None, host='localhost', port=5000, debug=False):
    """Start the simulation thread and serve the API"""
    config = load_simulation_config(config_path) if config_path else None
    runner = SimulationRunner(config)
    app = create_app(runner)
    runner.start()

    print(f"Starting HTTP server on http://{host}:{port}")
    print("API endpoints:")
    print("  - GET  /api/status")
    print("  - GET  /api/state")
    print("  - POST /api/call")
    print("  - POST /api/cars/<car_id>/buttons")
    print("  - POST /api/reset")
    print("  - GET  /api/events?from=<n>")

    try:
        app.run(host=host, port=port, debug=debug, threaded=True, use_reloader=False)
    finally:
        runner.stop(timeout=5.0)


def main():
    config_path = sys.argv[1] if len(sys.argv) > 1 else "realtime_demo"
    run_server(config_path=config_path)


if __name__ == '__main__':
    main()
