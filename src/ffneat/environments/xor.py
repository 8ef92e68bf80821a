"""
XOR Problem Environment for NEAT

The XOR Problem:
    XOR is a two-input, one-output boolean function where the output is True
    only when the inputs differ:
        Input (0, 0) → Output 0
        Input (0, 1) → Output 1
        Input (1, 0) → Output 1
        Input (1, 1) → Output 0

    This problem cannot be solved without a hidden neuron, making it a minimal
    test case for topology-evolving algorithms like NEAT.

Fitness Function:
    Fitness = 4.0 - Σ(output - target)²

    Maximum fitness of 4.0 is achieved when all four XOR cases produce exact outputs.

Classes:
    XOREnvironment: The XOR task
"""

import numpy as np

from ffneat.environments.base import Agent, Environment

class XOREnvironment(Environment):
    """
    The XOR task: 2 inputs, 1 output.

    An agent counts as a solution when its output, rounded to the
    nearest integer, is correct for all four cases.
    """

    INPUTS  = np.array([[0.0, 0.0], [0.0, 1.0], [1.0, 0.0], [1.0, 1.0]])
    TARGETS = np.array([0.0, 1.0, 1.0, 0.0])

    def state_size(self) -> int:
        return 2

    def action_size(self) -> int:
        return 1

    def _outputs(self, agent: Agent) -> np.ndarray:
        return np.array([agent.output(inputs.tolist())[0] for inputs in self.INPUTS])

    def evaluate(self, agent: Agent) -> float:
        outputs = self._outputs(agent)
        return float(4.0 - np.sum((outputs - self.TARGETS) ** 2))

    def solved(self, agent: Agent) -> bool:
        return bool(np.all(np.round(self._outputs(agent)) == self.TARGETS))
