"""Pytest configuration and shared fixtures."""

import random
import sys
from pathlib import Path

import numpy as np
import pytest

# Add the source directory to the Python path
src_dir = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_dir))


@pytest.fixture(autouse=True)
def set_random_seeds():
    """Set random seeds for reproducibility."""
    np.random.seed(42)
    random.seed(42)
    yield
    np.random.seed(None)
    random.seed(None)


@pytest.fixture
def minimal_genome_dict():
    """
    Minimal genome: 2 inputs + bias -> 1 sigmoid output, all weights 1.0.
    Uses the generator's numbering: inputs 0, 1; bias 2; output 3.
    """
    return {
        'fitness': 0.0,
        'layers': [
            {'layer': 0.0, 'neurons': [{'id': 0, 'type': 'input'},
                                       {'id': 1, 'type': 'input'},
                                       {'id': 2, 'type': 'bias'}]},
            {'layer': 1.0, 'neurons': [{'id': 3, 'type': 'output', 'activation': 'sigmoid'}]},
        ],
        'connections': [
            {'from': 0, 'to': 3, 'weight': 1.0, 'enabled': True, 'innovation': 0},
            {'from': 1, 'to': 3, 'weight': 1.0, 'enabled': True, 'innovation': 1},
            {'from': 2, 'to': 3, 'weight': 1.0, 'enabled': True, 'innovation': 2},
        ]
    }


@pytest.fixture
def hidden_genome_dict():
    """
    Genome with one hidden neuron (id 4, layer 0.5) that split connection 0 -> 3.
    """
    return {
        'fitness': 0.0,
        'layers': [
            {'layer': 0.0, 'neurons': [{'id': 0, 'type': 'input'},
                                       {'id': 1, 'type': 'input'},
                                       {'id': 2, 'type': 'bias'}]},
            {'layer': 0.5, 'neurons': [{'id': 4, 'type': 'hidden', 'activation': 'identity'}]},
            {'layer': 1.0, 'neurons': [{'id': 3, 'type': 'output', 'activation': 'identity'}]},
        ],
        'connections': [
            {'from': 0, 'to': 3, 'weight': 0.5,  'enabled': False, 'innovation': 0},
            {'from': 1, 'to': 3, 'weight': 2.0,  'enabled': True,  'innovation': 1},
            {'from': 2, 'to': 3, 'weight': -1.0, 'enabled': True,  'innovation': 2},
            {'from': 0, 'to': 4, 'weight': 1.0,  'enabled': True,  'innovation': 3},
            {'from': 4, 'to': 3, 'weight': 0.5,  'enabled': True,  'innovation': 4},
        ]
    }
