import simpy


class MessageBroker:
    """
    Mediates communication between the engine and its observers.
    Implements a topic-based publish-subscribe model.

    Topic pipes are created on first subscription; messages on a topic
    nobody subscribed to are only forwarded to the broadcast pipe, and the
    broadcast pipe itself only fills once somebody asked for it.
    """
    def __init__(self, env: simpy.Environment, verbose: bool = True):
        """
        Initialize the message broker

        Args:
            env (simpy.Environment): SimPy environment
            verbose (bool): Print every publish to the console
        """
        self.env = env
        self.verbose = verbose
        self.topics = {}  # Dictionary to hold Store for each subscribed topic
        self.broadcast_pipe = simpy.Store(self.env)
        self._broadcast_enabled = False

    def get_pipe(self, topic: str) -> simpy.Store:
        """
        Get or create a communication pipe (Store) for the specified topic
        """
        if topic not in self.topics:
            self.topics[topic] = simpy.Store(self.env)
        return self.topics[topic]

    def put(self, topic: str, message):
        """
        Publish (put) a message to the specified topic
        """
        if self.verbose:
            print(f"{self.env.now:.2f} [Broker] Publish on '{topic}': {message}")
        if self._broadcast_enabled:
            self.broadcast_pipe.put({'topic': topic, 'message': message})
        pipe = self.topics.get(topic)
        if pipe is not None:
            return pipe.put(message)
        return None

    def get(self, topic: str):
        """
        Wait to receive (get) a message from the specified topic
        """
        pipe = self.get_pipe(topic)
        return pipe.get()

    def get_broadcast_pipe(self) -> simpy.Store:
        """
        Subscribe to every topic at once.
        Returns the global broadcast pipe (used by the analyzer).
        """
        self._broadcast_enabled = True
        return self.broadcast_pipe

    def get_current_time(self) -> float:
        """
        Get current simulation time in milliseconds
        """
        return self.env.now
