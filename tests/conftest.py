import os

import pytest

from rowmapper import ColumnDescriptor, RowMapperConfig, Table

ENV_VARS = ("ROWMAPPER_COLUMN_MATCH", "ROWMAPPER_SUPPRESS_CONVERSION_ERRORS")


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")


@pytest.fixture(autouse=True)
def clean_environment():
    """
    Keeps developer environment variables out of configuration tests, and
    drops anything a test loaded from a .env file.
    """
    saved = {name: os.environ.pop(name) for name in ENV_VARS if name in os.environ}
    yield
    for name in ENV_VARS:
        os.environ.pop(name, None)
    os.environ.update(saved)


@pytest.fixture
def age_column():
    """Provides an int column named Age."""
    return ColumnDescriptor("Age", int)


@pytest.fixture
def people_table():
    """Provides a table with Name (str) and Age (int) columns."""
    return Table(
        "people",
        columns=[ColumnDescriptor("Name", str), ColumnDescriptor("Age", int)],
        config=RowMapperConfig(column_match="PREFIX", suppress_conversion_errors=True),
    )
