"""
NEAT Environments Package

Tasks that NEAT can be run on. 'CartPoleEnvironment' needs gymnasium and is
only imported on first access.

Exported Classes:
    Agent:               Abstract base class for anything an Environment can evaluate
    Environment:         Abstract base class for tasks
    XOREnvironment:      The XOR logic-gate task
    CartPoleEnvironment: The CartPole-v1 balancing task
"""

from typing import TYPE_CHECKING

from ffneat.environments.base import Agent, Environment
from ffneat.environments.xor  import XOREnvironment

if TYPE_CHECKING:
    from ffneat.environments.cartpole import CartPoleEnvironment

__all__ = ['Agent', 'Environment', 'XOREnvironment', 'CartPoleEnvironment']


def __getattr__(name: str):
    if name == "CartPoleEnvironment":
        from ffneat.environments.cartpole import CartPoleEnvironment as _CartPoleEnvironment

        return _CartPoleEnvironment
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
