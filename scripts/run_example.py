#!/usr/bin/env python3
"""
Command-line runner for the bundled NEAT tasks.

Usage:
    python scripts/run_example.py xor
    python scripts/run_example.py cartpole --mode experiment --num-trials 20 --num-jobs 4
"""

import argparse
import logging
from functools import partial
from pathlib   import Path

from ffneat              import Config, Experiment, Trial
from ffneat.environments import CartPoleEnvironment, XOREnvironment

CONFIG_DIR = Path(__file__).parent.parent / "examples" / "configs"

EXAMPLES = {
    'xor': {
        'environment': XOREnvironment,
        'config':      CONFIG_DIR / 'config_xor.ini',
        'description': 'XOR logic gate'
    },
    'cartpole': {
        'environment': partial(CartPoleEnvironment, num_episodes=3),
        'config':      CONFIG_DIR / 'config_cartpole.ini',
        'description': 'CartPole-v1 pole balancing'
    }
}


def main():
    parser = argparse.ArgumentParser(description='Evolve feed-forward networks with NEAT')
    parser.add_argument('example', choices=EXAMPLES.keys(),
                        help='Task to solve')
    parser.add_argument('--mode', choices=['trial', 'experiment'], default='trial',
                        help='Run one trial, or many trials with aggregate statistics')
    parser.add_argument('--config', type=Path, default=None,
                        help='INI configuration file (default: the example\'s own)')
    parser.add_argument('--num-trials', type=int, default=30,
                        help='Trials to run in experiment mode')
    parser.add_argument('--num-jobs', type=int, default=4,
                        help='Parallel processes in experiment mode (-1 = all cores)')
    parser.add_argument('--verbose', action='store_true',
                        help='Show debug log messages')

    args = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format='%(asctime)s %(name)s %(levelname)s: %(message)s')

    example = EXAMPLES[args.example]
    print(f"Running {example['description']}...")
    print(f"Mode: {args.mode}")

    config = Config(str(args.config or example['config']))

    if args.mode == 'trial':
        trial = Trial(config, example['environment']())
        best  = trial.run()
        print(f"\nBest fitness: {best.fitness:.4f}")
    else:
        experiment = Experiment(example['environment'], num_trials=args.num_trials, config=config)
        experiment.run(num_jobs=args.num_jobs)


if __name__ == '__main__':
    main()
