"""Pytest configuration for integration tests."""


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: end-to-end runs of the batch driver with a fake executor"
    )
