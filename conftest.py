"""
Global pytest configuration for c8ctl.
"""


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "asyncio: mark test as an asyncio coroutine")
    config.addinivalue_line("markers", "unit: marks fast, isolated unit tests")
    config.addinivalue_line(
        "markers", "integration: marks tests that touch the filesystem or spawn processes"
    )
