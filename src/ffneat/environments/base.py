"""
NEAT Environment Module

The boundary between the evolutionary core and the task being solved.
An Environment sizes the initial genomes, scores agents and decides whether
a solution has been found; an Agent is anything that maps an input vector to
an output vector and carries a fitness.

Classes:
    Agent:       Abstract base class for anything an Environment can evaluate
    Environment: Abstract base class for tasks that NEAT can solve
"""

from abc import ABC, abstractmethod

class Agent(ABC):
    """
    Abstract base class for agents consumed by environments.

    Subclasses must implement:
    - output(inputs):     Map an input vector to an output vector
    - get_fitness():      Return the fitness currently attached to the agent
    - set_fitness(value): Attach a new fitness to the agent
    """

    @abstractmethod
    def output(self, inputs: list[float]) -> list[float]:
        pass

    @abstractmethod
    def get_fitness(self) -> float:
        pass

    @abstractmethod
    def set_fitness(self, fitness: float) -> None:
        pass


class Environment(ABC):
    """
    Abstract base class for a task solved by evolving agents.

    Subclasses must implement:
    - state_size():     Number of inputs an agent receives
    - action_size():    Number of outputs an agent produces
    - evaluate(agent):  Score an agent; higher is better
    - solved(agent):    Whether the agent counts as a solution

    Subclasses can override:
    - reset(): Restore the environment's initial state before each evaluation (default: no-op)
    """

    @abstractmethod
    def state_size(self) -> int:
        pass

    @abstractmethod
    def action_size(self) -> int:
        pass

    @abstractmethod
    def evaluate(self, agent: Agent) -> float:
        """
        Evaluate and return the fitness of an agent.

        This method should test the agent on the problem domain and compute a
        fitness score. Higher fitness values indicate better performance and
        higher probability of procreating.
        """
        pass

    @abstractmethod
    def solved(self, agent: Agent) -> bool:
        pass

    def reset(self) -> None:
        pass
