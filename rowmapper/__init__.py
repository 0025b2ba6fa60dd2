"""Map arbitrary Python objects onto rows of an in-memory table."""

from rowmapper.version import __version__

# Entities load first; config imports the entity validation helpers
from rowmapper.entities import ColumnDescriptor, Row, Table

from rowmapper.config import RowMapperConfig, load_config
from rowmapper.constants import DB_NULL, ColumnMatchMode
from rowmapper.conversion import (
    ConversionResult,
    coalesce_db_null,
    to_nullable_bool,
    to_nullable_datetime,
    to_nullable_decimal,
    to_nullable_float,
    to_nullable_int32,
    to_nullable_int64,
    to_nullable_uuid,
    try_convert,
)
from rowmapper.reconciler import reconcile
from rowmapper.reflection import (
    PropertyInfo,
    create_instance,
    get_properties,
    get_property,
    get_value,
    get_value_or_default,
    populate_into,
    property_name,
)
from rowmapper.rows import as_row, make_columns, populate_row
from rowmapper.shared_exceptions import (
    ConversionFailure,
    InvalidArgumentError,
    NullReferenceError,
    ReadOnlyColumnError,
    RowMapperError,
)

__all__ = [
    # Version
    "__version__",
    # Configuration
    "RowMapperConfig",
    "load_config",
    "ColumnMatchMode",
    # Entities
    "ColumnDescriptor",
    "Row",
    "Table",
    # Reconciliation and row building
    "reconcile",
    "as_row",
    "make_columns",
    "populate_row",
    # Conversion
    "DB_NULL",
    "ConversionResult",
    "coalesce_db_null",
    "to_nullable_bool",
    "to_nullable_datetime",
    "to_nullable_decimal",
    "to_nullable_float",
    "to_nullable_int32",
    "to_nullable_int64",
    "to_nullable_uuid",
    "try_convert",
    # Reflection
    "PropertyInfo",
    "create_instance",
    "get_properties",
    "get_property",
    "get_value",
    "get_value_or_default",
    "populate_into",
    "property_name",
    # Exceptions
    "ConversionFailure",
    "InvalidArgumentError",
    "NullReferenceError",
    "ReadOnlyColumnError",
    "RowMapperError",
]
