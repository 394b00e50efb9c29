"""Engine tests: call board, target queue, car state machine, simulation"""
