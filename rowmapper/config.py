"""rowmapper configuration.

Settings default from environment variables so they can be tuned without
code changes. ``load_config`` also reads a ``.env`` file if one is present.
"""

import os
from dataclasses import dataclass, field
from typing import Union

from dotenv import find_dotenv, load_dotenv

from rowmapper.constants import ColumnMatchMode
from rowmapper.entities.util import normalize_enum

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class RowMapperConfig:
    """Configuration for column reconciliation and row population."""

    # How candidate column names are matched against existing columns.
    # PREFIX keeps the historical "existing name starts with candidate name"
    # rule; EXACT compares names for equality.
    column_match: Union[ColumnMatchMode, str] = field(
        default_factory=lambda: os.getenv("ROWMAPPER_COLUMN_MATCH", "PREFIX")
    )

    # Swallow per-column conversion errors while populating a row. Turning
    # this off re-raises the first failure.
    suppress_conversion_errors: bool = field(
        default_factory=lambda: os.getenv(
            "ROWMAPPER_SUPPRESS_CONVERSION_ERRORS", "true"
        ).strip().lower()
        in _TRUE_VALUES
    )

    def __post_init__(self) -> None:
        self.column_match = ColumnMatchMode(
            normalize_enum(self.column_match, ColumnMatchMode)
        )
        if not isinstance(self.suppress_conversion_errors, bool):
            raise ValueError("suppress_conversion_errors must be a bool")


def load_config() -> RowMapperConfig:
    """
    Load the nearest ``.env`` above the working directory, without
    overriding variables that are already set, and build a config.
    """
    load_dotenv(find_dotenv(usecwd=True))
    return RowMapperConfig()
