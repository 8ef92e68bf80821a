"""
NEAT Operators Package

The variation operators of the NEAT algorithm. Both operators leave their
input genomes untouched and always build new ones.

Exported Classes:
    NeatMutation:  Applies one randomly selected mutation to a genome
    NeatCrossover: Merges two parent genomes, aligning genes by innovation number
"""

from ffneat.operators.crossover import NeatCrossover
from ffneat.operators.mutation  import NeatMutation

__all__ = ['NeatCrossover', 'NeatMutation']
