"""Pytest configuration for the dividend-planner test suite."""

# Load pytest-asyncio so the MCP server coroutines can be tested
pytest_plugins = ('pytest_asyncio',)


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "asyncio: mark test as an async test"
    )
