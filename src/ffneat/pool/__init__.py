"""
NEAT Pool Package

The population level of the NEAT algorithm: species, speciation and reproduction.

Exported Classes:
    Species:        A cluster of genetically similar genomes
    SpeciesManager: Speciation, threshold control and offspring allocation
    Population:     The genomes of the current generation
"""

from ffneat.pool.species         import Species
from ffneat.pool.species_manager import SpeciesManager
from ffneat.pool.population      import Population

__all__ = ['Species', 'SpeciesManager', 'Population']
