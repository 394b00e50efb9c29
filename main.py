import random
import sys

# Configuration
from config import load_simulation_config

# Simulator components
from simulator.infrastructure.message_broker import MessageBroker
from simulator.infrastructure.realtime_env import RealtimeEnvironment
from simulator.simulation import ElevatorSimulation
from simulator.traffic import CallGenerator

# Analyzer
from analyzer.statistics import Statistics


def run_simulation(sim_config_path="default",
                   log_path="simulation_log.jsonl", plot_path=None):
    """
    Set up and run the entire simulation

    Args:
        sim_config_path: YAML file path or name of a shipped scenario
        log_path: Where to save the JSON Lines event log (None to skip)
        plot_path: Where to save the trajectory diagram (None to skip)

    Returns:
        Statistics: the recorder, for further inspection
    """
    print("--- Loading Configuration ---")
    sim_config = load_simulation_config(sim_config_path)
    print(f"Simulation Config: {sim_config_path}")

    rng = random.Random(sim_config.random_seed)
    if sim_config.random_seed is not None:
        print(f"Random seed fixed to {sim_config.random_seed} for reproducible results")
    else:
        print("Random seed not set - results will vary")

    print("\n--- Simulation Setup ---")
    env = RealtimeEnvironment(speed_factor=sim_config.realtime_factor)
    broker = MessageBroker(env, verbose=sim_config.verbose)
    statistics = Statistics(env, broker.get_broadcast_pipe())
    statistics.set_simulation_metadata(sim_config.to_dict())
    env.process(statistics.start_listening())

    simulation = ElevatorSimulation(sim_config, env=env, broker=broker)
    generator = CallGenerator(simulation, sim_config.traffic, rng)
    generator.start()

    print("\n--- Simulation Start ---")
    simulation.run(until=sim_config.traffic.simulation_duration_ms)
    print(f"\n--- Simulation End ({env.now / 1000.0:.1f}s simulated) ---")

    statistics.print_summary()
    if log_path:
        statistics.save_event_log(log_path)
    if plot_path:
        statistics.plot_trajectory_diagram(plot_path)
    return statistics


def main():
    # Accept command line arguments for config file and outputs
    sim_config_path = sys.argv[1] if len(sys.argv) > 1 else "default"
    log_path = sys.argv[2] if len(sys.argv) > 2 else "simulation_log.jsonl"
    plot_path = sys.argv[3] if len(sys.argv) > 3 else None
    run_simulation(sim_config_path=sim_config_path, log_path=log_path, plot_path=plot_path)


if __name__ == '__main__':
    main()
