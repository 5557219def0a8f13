"""Pytest configuration for the fire-planner test suite."""


# pytest-asyncio is registered through its entry point; asyncio_mode is set in pyproject.toml
def pytest_configure(config):
    config.addinivalue_line(
        "markers", "asyncio: mark test as an async test"
    )
