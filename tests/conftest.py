"""
Pytest configuration for chess stats tests.
"""

import pytest


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "network: marks tests that call the live chess.com API"
    )


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--run-network", action="store_true", default=False, help="Run tests against the live API"
    )


def pytest_collection_modifyitems(config, items):
    """Skip network tests unless --run-network is specified."""
    if config.getoption("--run-network"):
        return
    skip_network = pytest.mark.skip(reason="Need --run-network option to run")
    for item in items:
        if "network" in item.keywords:
            item.add_marker(skip_network)


def make_pgn(**tags) -> str:
    """Build PGN header text from keyword tags, followed by a move list."""
    lines = [f'[{name} "{value}"]' for name, value in tags.items()]
    return "\n".join(lines) + "\n\n1. e4 e5 2. Nf3 Nc6 1-0\n"


@pytest.fixture
def pgn_factory():
    """Factory for PGN header text."""
    return make_pgn
