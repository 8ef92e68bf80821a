"""
NEAT Network Generator Module

This module implements the NetworkGenerator class, which creates the minimal
genomes the initial population is made of.

Classes:
    NetworkGenerator: Builds fully connected input -> output genomes
"""

import random
from typing import TYPE_CHECKING

from ffneat.activations                  import ActivationFunction
from ffneat.genotype.connection_gene     import ConnectionGene
from ffneat.genotype.innovation_registry import InnovationRegistry
from ffneat.genotype.network_chromosome  import NetworkChromosome
from ffneat.genotype.neuron_gene         import NeuronGene, NeuronType
if TYPE_CHECKING:
    from ffneat.run.config import Config

class NetworkGenerator:
    """
    Creates minimal feed-forward genomes: one input layer (the input neurons
    plus a bias neuron) fully connected to one output layer, with no hidden
    neurons. This is the only source of genomes for the initial population;
    every later topology comes from mutation.

    Neuron numbering convention:
        - Input  neurons: [0, input_size)
        - Bias   neuron:   input_size
        - Output neurons: [input_size + 1, input_size + 1 + output_size)
        - Hidden neurons: handed out by the InnovationRegistry, above all of these

    Public Methods:
        generate(): Create a new minimal genome with random weights
    """

    def __init__(self,
                 registry   : InnovationRegistry,
                 input_size : int,
                 output_size: int,
                 config     : 'Config | None' = None,
                 rng        : random.Random | None = None):
        """
        Parameters:
            registry:    the innovation registry of the current run
            input_size:  number of input neurons (the environment's state size)
            output_size: number of output neurons (the environment's action size)
            config:      stores configuration parameters (defaults are used if None)
            rng:         random number source (the 'random' module if None)
        """
        if input_size <= 0 or output_size <= 0:
            raise ValueError(f"Network needs at least one input and one output, "
                             f"got {input_size} inputs and {output_size} outputs")

        self._registry   : InnovationRegistry = registry
        self._input_size : int                = input_size
        self._output_size: int                = output_size
        self._random                          = rng if rng is not None else random

        self._weight_min       : float              = -1.0
        self._weight_max       : float              =  1.0
        self._output_activation: ActivationFunction = ActivationFunction.SIGMOID
        if config is not None:
            self._weight_min        = config.weight_init_min
            self._weight_max        = config.weight_init_max
            self._output_activation = config.output_activation

        # The neurons are the same in every generated genome, only weights differ
        self._input_neurons = [NeuronGene(i, NeuronType.INPUT) for i in range(input_size)]
        self._bias_neuron   =  NeuronGene(input_size, NeuronType.BIAS)
        self._output_neurons = [NeuronGene(input_size + 1 + i, NeuronType.OUTPUT, self._output_activation)
                                for i in range(output_size)]
        self._registry.reserve_neuron_ids(input_size + 1 + output_size)

    def generate(self) -> NetworkChromosome:
        """
        Generate a new fully connected feed-forward genome.
        Every (input or bias) -> output connection is present and enabled,
        with a weight drawn uniformly from the configured range.
        """
        sources = self._input_neurons + [self._bias_neuron]

        connections = []
        for source in sources:
            for target in self._output_neurons:
                innovation = self._registry.get_or_create(source.id, target.id)
                weight     = self._random.uniform(self._weight_min, self._weight_max)
                connections.append(ConnectionGene(source.id, target.id, weight, innovation))

        layers = {NetworkChromosome.INPUT_LAYER : sources,
                  NetworkChromosome.OUTPUT_LAYER: list(self._output_neurons)}
        return NetworkChromosome(layers, connections)
