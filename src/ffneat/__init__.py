"""
ffneat: feed-forward NEAT (NeuroEvolution of Augmenting Topologies).

Evolves the topology and weights of feed-forward neural networks without
gradient information, starting from minimal networks and growing them
through tracked structural mutations.
"""

__version__ = "0.1.0"

from ffneat.errors       import (NeatError, InvalidInputSize, EmptyGenomeCollection,
                                 StructuralExhaustion, InconsistentGenome)
from ffneat.activations  import ActivationFunction
from ffneat.environments import Agent, Environment, XOREnvironment
from ffneat.genotype     import (ConnectionGene, InnovationRegistry, NetworkChromosome,
                                 NetworkGenerator, NeuronGene, NeuronType)
from ffneat.operators    import NeatCrossover, NeatMutation
from ffneat.pool         import Population, Species, SpeciesManager
from ffneat.run          import Config, Experiment, Trial, TrialState

__all__ = ['ActivationFunction',
           'Agent',
           'Config',
           'ConnectionGene',
           'EmptyGenomeCollection',
           'Environment',
           'Experiment',
           'InconsistentGenome',
           'InnovationRegistry',
           'InvalidInputSize',
           'NeatCrossover',
           'NeatError',
           'NeatMutation',
           'NetworkChromosome',
           'NetworkGenerator',
           'NeuronGene',
           'NeuronType',
           'Population',
           'Species',
           'SpeciesManager',
           'Trial',
           'TrialState',
           'XOREnvironment']
