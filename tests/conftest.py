"""Pytest configuration and fixtures for variation engine tests."""

import random

import pytest

from variation.config.lineage import set_maintain_ancestors
from variation.evolution.individual import make_individual
from variation.program.text import parse_program


@pytest.fixture
def seeded_rng():
    """Provide a deterministic RNG for tests."""
    return random.Random(42)


@pytest.fixture(autouse=True)
def lineage_off():
    """Run every test with lineage tracking off, restoring the previous value."""
    previous = set_maintain_ancestors(False)
    yield
    set_maintain_ancestors(previous)


@pytest.fixture
def lineage_on():
    """Enable lineage tracking for one test."""
    set_maintain_ancestors(True)
    yield
    set_maintain_ancestors(False)


@pytest.fixture
def atom_generators():
    """A small vocabulary with one ephemeral random constant."""
    return ["integer_add", "integer_sub", "exec_dup", "boolean_and", 1, 2.5, True,
            lambda rng: rng.randint(-10, 10)]


@pytest.fixture
def individual():
    """Factory: build an Individual from Push text."""

    def _make(text, history=None, ancestors=None):
        return make_individual(parse_program(text), history=history, ancestors=ancestors)

    return _make
