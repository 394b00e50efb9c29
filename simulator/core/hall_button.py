import simpy

from ..infrastructure.message_broker import MessageBroker


class HallButton:
    """
    Hall call button for one floor and one direction (lamp state only)
    """
    def __init__(self, env: simpy.Environment, floor: int, direction: str, broker: MessageBroker):
        """
        Args:
            env (simpy.Environment): SimPy environment
            floor (int): Floor where the button is installed (0-based)
            direction (str): 'UP' or 'DOWN'
            broker (MessageBroker): Message broker that carries lamp changes to observers
        """
        self.env = env
        self.floor = floor
        self.direction = direction
        self.broker = broker
        self.is_pressed = False
        self.pressed_at = None

    def is_lit(self):
        """Check if the button is lit"""
        return self.is_pressed

    def press(self):
        """
        Light the button.

        Pressing a lit button keeps it lit.

        Returns:
            bool: True if the lamp was switched on by this press
        """
        if self.is_pressed:
            print(f"{self.env.now:.2f} [HallButton] Floor {self.floor} ({self.direction}) already lit.")
            return False

        self.is_pressed = True
        self.pressed_at = self.env.now
        print(f"{self.env.now:.2f} [HallButton] Button pressed at floor {self.floor} ({self.direction}). Light ON.")
        self.broker.put(f"hall_button/floor_{self.floor}/call_on", {
            "timestamp": self.env.now,
            "floor": self.floor,
            "direction": self.direction,
        })
        return True

    def serve(self, car_name=None):
        """
        Turn the lamp off because a car stopped at this floor.

        Args:
            car_name: Name of the car that serviced the floor (for observers)
        """
        if not self.is_pressed:
            return False

        self.is_pressed = False
        print(f"{self.env.now:.2f} [HallButton] Call served at floor {self.floor} ({self.direction}). Light OFF.")
        self.broker.put(f"hall_button/floor_{self.floor}/call_off", {
            "timestamp": self.env.now,
            "floor": self.floor,
            "direction": self.direction,
            "pressed_at": self.pressed_at,
            "serviced_by": car_name,
        })
        self.pressed_at = None
        return True

    def reset(self):
        """Switch the lamp off silently (simulation reset)"""
        self.is_pressed = False
        self.pressed_at = None
