"""
Per-tick car state machine: movement, arrival, door cycle, reset
"""

from simulator.core.direction import DOWN, IDLE, UP


def test_single_trip_moves_one_floor_per_tick_then_opens_doors(make_sim):
    """Five moving ticks to floor 5, then the doors open on tick 6"""
    sim = make_sim(num_cars=1)
    car = sim.cars[0]
    arrivals = sim.broker.get_pipe("car/Car_0/arrival")
    closes = sim.broker.get_pipe("car/Car_0/door_closed")

    sim.press_in_car_button(0, 5)
    assert car.targets.as_tuple() == (5,)
    assert car.direction == UP

    sim.run_ticks(5)
    assert car.current_floor == 5
    assert car.moving
    assert not car.doors_open

    # Arrival is detected on the pass after the one that reached the floor
    sim.run_ticks(1)
    assert car.doors_open
    assert not car.moving
    assert car.targets.as_tuple() == ()
    assert 5 not in car.floor_buttons

    sim.run_ticks(2)
    assert car.doors_open

    sim.run_ticks(1)
    assert not car.doors_open
    assert car.direction == IDLE
    assert car.state == "IDLE"

    assert len(arrivals.items) == 1
    assert len(closes.items) == 1
    assert closes.items[0]["timestamp"] - arrivals.items[0]["timestamp"] == sim.door_ms


def test_doors_block_the_car_but_queue_still_accepts_targets(make_sim):
    sim = make_sim(num_cars=1)
    car = sim.cars[0]

    sim.press_in_car_button(0, 1)
    sim.run_ticks(2)
    assert car.doors_open and car.current_floor == 1

    sim.press_in_car_button(0, 6)
    assert car.targets.as_tuple() == (6,)
    sim.run_ticks(2)
    assert car.current_floor == 1
    assert car.doors_open


def test_direction_follows_next_target_after_doors_close(make_sim):
    sim = make_sim(num_cars=1)
    car = sim.cars[0]

    sim.press_in_car_button(0, 3)
    sim.press_in_car_button(0, 1)
    assert car.targets.as_tuple() == (1, 3)

    sim.run_ticks(2)
    assert car.current_floor == 1 and car.doors_open
    assert car.targets.as_tuple() == (3,)

    sim.run_ticks(2)
    assert car.doors_open

    # Doors close at the same instant as tick 5, ahead of it
    sim.run_ticks(1)
    assert not car.doors_open
    assert car.direction == UP
    assert car.current_floor == 2
    assert car.moving


def test_hall_call_flag_stays_lit_until_the_car_stops(make_sim):
    sim = make_sim(num_cars=1)
    car = sim.cars[0]
    arrivals = sim.broker.get_pipe("car/Car_0/arrival")

    sim.call(4, DOWN)
    for _ in range(4):
        sim.run_ticks(1)
        assert sim.call_board.is_lit(4, DOWN)
        assert not car.doors_open

    sim.run_ticks(1)
    assert car.doors_open
    assert not sim.call_board.is_pending(4)
    assert arrivals.items[0]["external"] is True
    assert arrivals.items[0]["floor"] == 4


def test_stop_for_in_car_request_only_is_not_external(make_sim):
    sim = make_sim(num_cars=1)
    arrivals = sim.broker.get_pipe("car/Car_0/arrival")

    sim.press_in_car_button(0, 2)
    sim.run_ticks(3)
    assert arrivals.items[0]["external"] is False


def test_arrival_clears_both_board_flags_and_own_button(make_sim):
    sim = make_sim(num_cars=1)
    car = sim.cars[0]

    sim.press_in_car_button(0, 3)
    sim.call_board.raise_call(3, UP)
    sim.call_board.raise_call(3, DOWN)
    assert 3 in car.floor_buttons

    sim.run_ticks(4)
    assert car.doors_open
    assert 3 not in car.floor_buttons
    assert sim.call_board.snapshot()[3] == (False, False)


def test_targets_stay_sorted_and_doors_never_open_while_moving(make_sim):
    sim = make_sim(num_cars=1)
    car = sim.cars[0]

    for floor in (3, 7, 5):
        sim.press_in_car_button(0, floor)
    assert car.targets.as_tuple() == (3, 5, 7)

    for _ in range(25):
        sim.run_ticks(1)
        targets = list(car.targets)
        assert not (car.doors_open and car.moving)
        if car.direction == UP:
            assert targets == sorted(targets)
        elif car.direction == DOWN:
            assert targets == sorted(targets, reverse=True)

    assert car.current_floor == 7
    assert car.direction == IDLE


def test_press_for_current_floor_reopens_doors(make_sim):
    sim = make_sim(num_cars=1)
    car = sim.cars[0]

    sim.press_in_car_button(0, 0)
    # Equal floor falls back to IDLE
    assert car.direction == IDLE
    sim.run_ticks(1)
    assert car.doors_open
    assert car.current_floor == 0


def test_reset_cancels_a_waiting_door_timer(make_sim):
    sim = make_sim(num_cars=1)
    car = sim.cars[0]
    closes = sim.broker.get_pipe("car/Car_0/door_closed")

    sim.press_in_car_button(0, 1)
    sim.run_ticks(3)
    assert car.doors_open

    sim.reset()
    assert not car.doors_open
    assert car.current_floor == 0

    sim.press_in_car_button(0, 4)
    sim.run_ticks(3)
    assert closes.items == []
    assert car.current_floor == 3
    assert car.moving
    assert car.direction == UP


def test_reset_drops_a_door_timer_that_has_not_started(make_sim):
    sim = make_sim(num_cars=1)
    car = sim.cars[0]
    closes = sim.broker.get_pipe("car/Car_0/door_closed")

    sim.press_in_car_button(0, 0)
    sim.tick()
    assert car.doors_open

    sim.reset()
    sim.run_ticks(5)
    assert closes.items == []
    assert not car.doors_open
    assert car.state == "IDLE"

    # A fresh stop after the reset still runs a full door cycle
    sim.press_in_car_button(0, 1)
    sim.run_ticks(2)
    assert car.doors_open
    sim.run_ticks(3)
    assert not car.doors_open
    assert len(closes.items) == 1


def test_reset_of_an_idle_car_publishes_floor_zero(make_sim):
    sim = make_sim(num_cars=1)
    car = sim.cars[0]
    statuses = sim.broker.get_pipe("car/Car_0/status")

    sim.press_in_car_button(0, 3)
    sim.run_ticks(8)
    assert car.state == "IDLE" and car.current_floor == 3
    assert statuses.items[-1]["current_floor"] == 3

    sim.reset()

    assert statuses.items[-1]["current_floor"] == 0
    assert statuses.items[-1]["state"] == "IDLE"
    assert statuses.items[-1]["targets"] == []


def test_press_behind_a_moving_car_turns_it_around(make_sim):
    sim = make_sim(num_cars=1)
    car = sim.cars[0]
    sim.press_in_car_button(0, 5)
    sim.press_in_car_button(0, 8)
    sim.run_ticks(3)
    assert car.current_floor == 3 and car.direction == UP

    # Inserted under UP, so the lower floor becomes the head
    sim.press_in_car_button(0, 1)
    assert car.targets.as_tuple() == (1, 5, 8)

    sim.run_ticks(1)
    assert car.direction == DOWN
    assert car.current_floor == 2

    sim.run_ticks(2)
    assert car.current_floor == 1 and car.doors_open
    assert car.targets.as_tuple() == (5, 8)

    sim.run_ticks(3)
    assert not car.doors_open
    assert car.direction == UP
