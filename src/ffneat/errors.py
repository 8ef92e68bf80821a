"""
NEAT Errors Module

Exceptions raised by the genome model and the evolutionary operators.

Only 'InconsistentGenome' is meant to escape a public operation and abort a run:
it signals a bug in gene bookkeeping. 'EmptyGenomeCollection' and
'StructuralExhaustion' are expected outcomes, raised by internal helpers and
recovered inside the operators, which then return an unmodified copy.

Classes:
    NeatError:             Base class of all errors raised by this package
    InvalidInputSize:      Forward evaluation called with the wrong number of inputs
    EmptyGenomeCollection: An operator needed a gene but the genome has none
    StructuralExhaustion:  No valid place was found for a new connection
    InconsistentGenome:    A connection references a neuron absent from the genome
"""

class NeatError(Exception):
    """Base class for all errors raised by this package."""


class InvalidInputSize(NeatError, ValueError):
    """
    The input vector handed to a network does not match its number of input neurons.
    Fatal to the call, not to the run.
    """

    def __init__(self, expected: int, received: int):
        self.expected: int = expected
        self.received: int = received
        super().__init__(f"Expected {expected} inputs, got {received}")


class EmptyGenomeCollection(NeatError):
    """An operator needed to pick a connection gene from a genome that has none."""


class StructuralExhaustion(NeatError):
    """No valid (source, target) pair for a new connection was found within the retry bound."""


class InconsistentGenome(NeatError, RuntimeError):
    """
    A genome violates one of its structural invariants (dangling neuron reference,
    or a connection that is not feed-forward). Indicates a bug; never recovered.
    """
