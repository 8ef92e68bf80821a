"""
NEAT Trial Module

This module implements the Trial class, the controller of one NEAT run.

A trial represents one independent run of the NEAT algorithm, evolving a
population through generations until the environment reports a solution or
the maximum number of generations is reached.

Classes:
    TrialState: The states a trial goes through
    Trial:      The NEAT evolution controller
"""

import logging
from enum       import Enum
from statistics import mean

from ffneat.environments.base            import Environment
from ffneat.genotype.innovation_registry import InnovationRegistry
from ffneat.genotype.network_chromosome  import NetworkChromosome
from ffneat.genotype.network_generator   import NetworkGenerator
from ffneat.operators                    import NeatCrossover, NeatMutation
from ffneat.pool                         import Population
from ffneat.run.config                   import Config

logger = logging.getLogger(__name__)

class TrialState(Enum):
    INITIALIZING         = "initializing"
    EVALUATING           = "evaluating"
    SPECIATING           = "speciating"
    ADJUSTING_THRESHOLD  = "adjusting threshold"
    REPRODUCING          = "reproducing"
    TERMINATED           = "terminated"

class Trial:
    """
    The NEAT evolution controller.

    A trial moves through the following states:

        INITIALIZING -> {EVALUATING -> SPECIATING -> ADJUSTING_THRESHOLD -> REPRODUCING}* -> TERMINATED

    After every evaluation the trial checks whether to stop: it stops when the
    fittest genome solves the environment, or when the generation counter has
    reached 'max_number_generations'. A trial with 'max_number_generations = 0'
    evaluates the initial population and stops.

    Each run gets its own InnovationRegistry, shared by the generator and the
    mutation operator of that run only.

    Public Attributes:
        state:       Current state of the trial
        failed:      False if the environment reported a solution
        generation:  Number of generations produced so far
        population:  The current population (None before the first run)
        registry:    The innovation registry of the current run (None before the first run)

    Public Methods:
        run(): Execute a complete NEAT run and return the fittest genome
    """

    def __init__(self, config: Config, environment: Environment, suppress_output: bool = False):
        """
        Initialize the trial.

        Parameters:
            config:          Configuration parameters
            environment:     The task the genomes are evaluated on
            suppress_output: If True, suppress progress and final reports
                             (useful when running multiple trials in experiments)
        """
        self._config         : Config      = config
        self._environment    : Environment = environment
        self._suppress_output: bool        = suppress_output

        self.state     : TrialState                = TrialState.INITIALIZING
        self.failed    : bool                      = True
        self.generation: int                       = 0
        self.population: Population | None         = None
        self.registry  : InnovationRegistry | None = None

    def run(self) -> NetworkChromosome:
        """
        Run the trial.

        Resets the trial state and runs the evolutionary
        algorithm until the terminate condition is met.

        Returns:
            the fittest genome of the final population

        Raises:
            RuntimeError: if the final population is empty
        """
        self._reset()

        # Evolution loop
        while True:
            self.state = TrialState.EVALUATING
            self._evaluate_fitness_all()

            # Display progress after each generation
            if not self._suppress_output:
                self._report_progress()

            if self._terminate():
                break

            self.state = TrialState.SPECIATING
            self.population.speciate()

            self.state = TrialState.ADJUSTING_THRESHOLD
            self.population.adjust_compatibility_threshold()

            # The members of the population mate and create offspring
            self.state = TrialState.REPRODUCING
            self.population.spawn_next_generation(self._mutation, self._crossover)
            self.generation += 1

        self.state = TrialState.TERMINATED
        fittest = self.population.get_fittest_genome()
        if fittest is None:
            raise RuntimeError("Population is empty at the end of the trial")

        logger.info("Trial terminated after %d generations, best fitness %.4f, %s",
                    self.generation, fittest.fitness, "solved" if not self.failed else "not solved")

        # Produce final report
        if not self._suppress_output:
            self._final_report()

        return fittest

    def _reset(self):
        """
        Reset the trial state before starting a new run:
        a fresh registry, fresh operators and an initial population.
        """
        self.state      = TrialState.INITIALIZING
        self.generation = 0
        self.failed     = True

        self.registry   = InnovationRegistry()
        generator       = NetworkGenerator(self.registry,
                                           self._environment.state_size(),
                                           self._environment.action_size(),
                                           self._config)
        self._mutation  = NeatMutation(self.registry, self._config)
        self._crossover = NeatCrossover(self._config)
        self.population = Population(self._config, generator)

        logger.info("Starting trial: population %d, %d inputs, %d outputs",
                    self._config.population_size, self._environment.state_size(), self._environment.action_size())

    def _evaluate_fitness_all(self):
        """
        Evaluate the fitness of every genome in the population.
        The environment is reset before each evaluation.
        """
        for genome in self.population.genomes:
            self._environment.reset()
            genome.fitness = self._environment.evaluate(genome)

    def _terminate(self) -> bool:
        """
        Determine whether the trial should terminate: the fittest genome solves
        the environment, or the trial has run for the maximum number of generations.
        """
        fittest = self.population.get_fittest_genome()
        if fittest is not None and self._environment.solved(fittest):
            self.failed = False
            return True
        return self.generation >= self._config.max_number_generations

    def _report_progress(self):
        """
        Print a report describing the current generation.
        """
        fittest = self.population.get_fittest_genome()
        if fittest is None:
            return

        s  = f"===============\n"
        s += f"GENERATION {self.generation:04d}\n"
        s += f"Maximum fitness  = {fittest.fitness:.4f}\n"
        s += f"Mean fitness     = {mean(g.fitness for g in self.population.genomes):.4f}\n"
        s += f"Population size  = {len(self.population.genomes)}\n"
        s += f"Number species   = {len(self.population.species_manager.species)}\n"
        s += f"Threshold        = {self.population.species_manager.compatibility_threshold:.2f}\n"
        s += f"Network topology = {fittest.number_neurons} neurons, "
        s += f"{fittest.number_connections_enabled} connections\n"
        print(s)

    def _final_report(self):
        """
        Display results at the end of the trial.
        """
        fittest = self.population.get_fittest_genome()

        print("="*18)
        print("FINAL BEST GENOME")
        print("="*18)
        print(fittest)
        print(f"\nSolved: {'yes' if not self.failed else 'no'} (after {self.generation} generations)")
        print(f"Final fitness: {fittest.fitness:.4f}")
        print(f"Network: {fittest.number_neurons} neurons, "
              f"{fittest.number_connections_enabled} connections")
