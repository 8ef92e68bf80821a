"""
NEAT Experiment Module

This module defines the Experiment class, with built-in support for
CPU-based parallelization using joblib.

An experiment represents a collection of multiple independent trials (runs),
used to gather statistical data about the NEAT algorithm's performance.

Classes:
    Experiment: Runs many independent trials and aggregates their results
"""

from joblib     import Parallel, delayed
from statistics import mean
from sys        import stdout
from typing     import Callable

from ffneat.environments.base import Environment
from ffneat.run.config        import Config
from ffneat.run.trial         import Trial

class Experiment:
    """
    A collection of independent NEAT trials on the same task.

    Every trial gets a fresh environment from 'environment_factory' and runs
    with its own innovation registry, so trials share no state and can run in
    separate processes.

    Public Attributes:
        results: One dictionary per trial (in trial order), with keys:
                 trial_number, number_generations, max_fitness,
                 number_neurons, number_connections, success

    Public Methods:
        run(num_jobs=1): Execute all trials and print the aggregate report

    Parallelization:
        num_jobs=1:  Serial trial execution (no parallelization)
        num_jobs>1:  Use specified number of parallel processes for trials
        num_jobs=-1: Use all available CPU cores for trials
    """

    def __init__(self,
                 environment_factory: Callable[[], Environment],
                 num_trials         : int,
                 config             : Config,
                 suppress_output    : bool = False):
        """
        Parameters:
            environment_factory: creates the environment of a trial (called once per trial)
            num_trials:          number of trials in this experiment
            config:              configuration parameters
            suppress_output:     if True, no progress or final report is printed
        """
        self._environment_factory = environment_factory
        self._num_trials          = num_trials
        self._config              = config
        self._suppress_output     = suppress_output

        self.results: list[dict] = []

    def run(self, num_jobs: int = 1) -> list[dict]:
        """
        Run the experiment.

        Parameters:
            num_jobs: Number of parallel processes for running trials
                       1 = serial trial execution (default)
                      -1 = use all available CPU cores
                      >1 = use specified number of processes

        Returns:
            the per-trial results (also stored in 'results')
        """
        trial_numbers = range(1, self._num_trials + 1)

        if num_jobs == 1:
            self.results = [self._run_trial(n) for n in trial_numbers]
        else:
            self.results = Parallel(num_jobs)(delayed(self._run_trial)(n) for n in trial_numbers)

        if not self._suppress_output:
            self._final_report()
        return self.results

    def _run_trial(self, trial_number: int) -> dict:
        """
        Prepare, run, analyze one trial.
        Returns the relevant data generated by the trial.

        Parameters:
            trial_number: The trial number (1-indexed)
        """
        if not self._suppress_output:
            stdout.write(f"Starting trial {trial_number:03d} of {self._num_trials}...\r")
            stdout.flush()

        environment = self._environment_factory()
        trial       = Trial(self._config, environment, suppress_output=True)
        fittest     = trial.run()

        return {"trial_number"      : trial_number,
                "number_generations": trial.generation,
                "max_fitness"       : fittest.fitness,
                "number_neurons"    : fittest.number_neurons,
                "number_connections": fittest.number_connections_enabled,
                "success"           : not trial.failed}

    @property
    def success_rate(self) -> float:
        if not self.results:
            return 0.0
        return sum(r["success"] for r in self.results) / len(self.results)

    def _final_report(self):
        """
        Produce the final report, aggregating the data obtained from each trial.
        Generation and size statistics are over the successful trials only.
        """
        successful = [r for r in self.results if r["success"]]

        print()
        print("="*17)
        print("EXPERIMENT REPORT")
        print("="*17)
        print(f"Trials:           {len(self.results)}")
        print(f"Successful:       {len(successful)} ({self.success_rate:.1%})")
        if successful:
            print(f"Mean generations: {mean(r['number_generations'] for r in successful):.2f}")
            print(f"Mean fitness:     {mean(r['max_fitness']        for r in successful):.4f}")
            print(f"Mean neurons:     {mean(r['number_neurons']     for r in successful):.2f}")
            print(f"Mean connections: {mean(r['number_connections'] for r in successful):.2f}")
