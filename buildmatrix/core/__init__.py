"""Core infrastructure for buildmatrix: errors and logging."""

from buildmatrix.core.errors import (
    BuildMatrixError,
    ConfigurationParseError,
    DuplicatePropertyError,
    InvalidConfigurationError,
    MatrixDefinitionError,
    UnknownPropertyError,
    UnknownPropertyValueError,
)
from buildmatrix.core.logging import get_logger, setup_logging


__all__ = [
    "BuildMatrixError",
    "ConfigurationParseError",
    "DuplicatePropertyError",
    "InvalidConfigurationError",
    "MatrixDefinitionError",
    "UnknownPropertyError",
    "UnknownPropertyValueError",
    "get_logger",
    "setup_logging",
]
