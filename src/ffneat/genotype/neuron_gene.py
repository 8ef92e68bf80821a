"""
NEAT Neuron Gene Module.

This module implements the NeuronGene class and NeuronType enumeration
for the NEAT (NeuroEvolution of Augmenting Topologies) algorithm.

Classes:
    NeuronType: Enumeration for neuron types (INPUT, OUTPUT, HIDDEN, BIAS)
    NeuronGene: Gene encoding a single network neuron
"""

from enum import Enum

from ffneat.activations import ActivationFunction, activation_codes

class NeuronType(Enum):
    """
    Neurons come in four types: input, output, hidden, bias.
    """
    INPUT  = "I"
    OUTPUT = "O"
    HIDDEN = "H"
    BIAS   = "B"

class NeuronGene:
    """
    A gene describing a neuron in a Neural Network.

    Each neuron gene encodes the identity, role and activation function of a
    single neuron. Neuron genes are identified by their ID, which stays the
    same across structural mutations and crossover: two neuron genes with the
    same ID, in different genomes, are considered to be the same gene. For this
    reason equality and hashing only look at the ID.

    Input and bias neurons do not transform their value, so they always carry
    the IDENTITY activation; a bias neuron always outputs 1.0.

    Neuron genes are immutable; genomes share them freely.

    Public Properties:
        id:         Unique identifier for this neuron
        type:       Type of neuron (INPUT, OUTPUT, HIDDEN or BIAS)
        activation: The activation function applied to the neuron's weighted input

    Public Methods:
        activate(weighted_input): Compute the neuron's output
    """

    __slots__ = ('_id', '_type', '_activation')

    def __init__(self,
                 neuron_id  : int,
                 neuron_type: NeuronType,
                 activation : ActivationFunction = ActivationFunction.IDENTITY):
        """
        Initialize a neuron gene.

        Parameters:
            neuron_id:   Unique identifier for this neuron
            neuron_type: Type of neuron (INPUT, OUTPUT, HIDDEN or BIAS)
            activation:  Activation function (ignored for INPUT and BIAS neurons)
        """
        if neuron_type in (NeuronType.INPUT, NeuronType.BIAS):
            activation = ActivationFunction.IDENTITY

        self._id        : int                = neuron_id
        self._type      : NeuronType         = neuron_type
        self._activation: ActivationFunction = ActivationFunction.parse(activation)

    @property
    def id(self) -> int:
        return self._id

    @property
    def type(self) -> NeuronType:
        return self._type

    @property
    def activation(self) -> ActivationFunction:
        return self._activation

    def activate(self, weighted_input: float) -> float:
        """
        Compute the output of this neuron given the sum of its weighted inputs.
        """
        if self._type == NeuronType.BIAS:
            return 1.0
        return self._activation(weighted_input)

    def __eq__(self, other):
        if not isinstance(other, NeuronGene):
            return NotImplemented
        return self._id == other._id

    def __hash__(self):
        return hash(self._id)

    def __repr__(self):
        return (f"NeuronGene(neuron_id={self._id}, neuron_type=NeuronType.{self._type.name}, "
                f"activation=ActivationFunction.{self._activation.name})")

    def __str__(self):
        if self._type in (NeuronType.INPUT, NeuronType.BIAS):
            return f"[{self._type.value}{self._id}]"
        return f"[{self._type.value}{self._id},{activation_codes[self._activation]}]"
