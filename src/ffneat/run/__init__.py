"""
NEAT Run Package

Configuration and the drivers of NEAT runs.

Exported Classes:
    Config:     Configuration parameters (INI file or defaults)
    Trial:      The evolution controller of one run
    TrialState: The states a trial goes through
    Experiment: Many independent trials with aggregated results
"""

from ffneat.run.config     import Config
from ffneat.run.trial      import Trial, TrialState
from ffneat.run.experiment import Experiment

__all__ = ['Config', 'Trial', 'TrialState', 'Experiment']
