import pytest

from config.logging import configure_logging


@pytest.fixture(autouse=True)
def quiet_logging() -> None:
    configure_logging(level="WARNING")
