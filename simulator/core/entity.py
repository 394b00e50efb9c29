import itertools  # Helper for entity ID counter

import simpy


class Entity:
    """
    Base class for named objects living on a SimPy timeline.

    Provides the shared environment reference, a unique entity ID and a
    small state holder whose transitions are traced to the console.
    Unlike a SimPy process, an Entity does not run on its own: the
    simulation clock drives it.
    """
    # Entity ID counter shared across all class instances
    _entity_id_counter = itertools.count()

    def __init__(self, env: simpy.Environment, name: str = None, initial_state: str = "IDLE"):
        """
        Initialize the entity.

        Args:
            env: The SimPy simulation environment this entity belongs to.
            name: Entity name. If not specified, auto-generated from class name and ID.
            initial_state: State the entity starts in.
        """
        self.env = env
        self.entity_id: int = next(self._entity_id_counter)
        self.name: str = name if name is not None else f"{self.__class__.__name__}_{self.entity_id}"
        self.state: str = initial_state

    def set_state(self, new_state: str):
        """
        Transition the entity's state.

        Args:
            new_state: String representing the target state for transition.
        """
        if self.state != new_state:
            old_state = self.state
            self.state = new_state
            self._on_state_changed(old_state, new_state)

    def get_state(self) -> str:
        """Get the current state of the entity."""
        return self.state

    def _on_state_changed(self, old_state: str, new_state: str):
        """
        Hook method called when state changes.
        Subclasses extend this to publish status; the base only logs.
        """
        print(f'{self.env.now:.2f}: [{self.name}] state transition: {old_state} -> {new_state}')
