"""
NEAT Genotype Package

This package implements the genotype representation for the NEAT (NeuroEvolution of
Augmenting Topologies) algorithm: the genes, the genome they make up, the registry of
historical markings, and the generator of the initial genomes.

The NEAT genotype consists of two types of genes:
- Neuron genes:     Encode individual neurons with their role and activation function
- Connection genes: Encode weighted connections between neurons with innovation numbers

Modules:
    neuron_gene:         NeuronType enumeration and NeuronGene class
    connection_gene:     ConnectionGene class
    network_chromosome:  NetworkChromosome class
    innovation_registry: InnovationRegistry class
    network_generator:   NetworkGenerator class

Exported Classes:
    NeuronType:         Enumeration for neuron types (INPUT, OUTPUT, HIDDEN, BIAS)
    NeuronGene:         Gene encoding a single network neuron
    ConnectionGene:     Gene encoding a weighted connection between neurons
    NetworkChromosome:  Complete genome representing a feed-forward neural network
    InnovationRegistry: Per-run tracker for innovation numbers and neuron IDs
    NetworkGenerator:   Creates the minimal genomes of the initial population
"""

from ffneat.genotype.connection_gene     import ConnectionGene
from ffneat.genotype.innovation_registry import InnovationRegistry
from ffneat.genotype.network_chromosome  import NetworkChromosome
from ffneat.genotype.network_generator   import NetworkGenerator
from ffneat.genotype.neuron_gene         import NeuronType, NeuronGene

__all__ = ['ConnectionGene',
           'InnovationRegistry',
           'NetworkChromosome',
           'NetworkGenerator',
           'NeuronGene',
           'NeuronType']
