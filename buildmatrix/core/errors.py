"""Exception hierarchy for buildmatrix.

Every error raised by the library derives from ``BuildMatrixError``. Errors
that describe a bad argument also derive from the matching builtin
(``ValueError`` / ``KeyError``) so callers can catch either.
"""


class BuildMatrixError(Exception):
    """Base exception for all buildmatrix errors."""


class InvalidConfigurationError(BuildMatrixError, ValueError):
    """A configuration was constructed from invalid input."""


class _KeyedError(BuildMatrixError, KeyError):
    """KeyError that renders its message instead of the quoted key."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class DuplicatePropertyError(_KeyedError):
    """Two entries contributed the same property name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Property '{name}' is defined more than once")
        self.name = name


class UnknownPropertyError(_KeyedError):
    """A property name is not part of the matrix."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown property '{name}'")
        self.name = name


class UnknownPropertyValueError(BuildMatrixError, ValueError):
    """A value is not legal for its property."""

    def __init__(self, property_name: str, value: str) -> None:
        super().__init__(f"Unknown value '{value}' for property '{property_name}'")
        self.property_name = property_name
        self.value = value


class ConfigurationParseError(BuildMatrixError, ValueError):
    """A configuration string could not be mapped onto the matrix."""

    def __init__(self, configuration_string: str, message: str) -> None:
        super().__init__(
            f"Cannot parse configuration '{configuration_string}': {message}"
        )
        self.configuration_string = configuration_string


class MatrixDefinitionError(BuildMatrixError):
    """A matrix definition could not be loaded or validated."""


__all__ = [
    "BuildMatrixError",
    "ConfigurationParseError",
    "DuplicatePropertyError",
    "InvalidConfigurationError",
    "MatrixDefinitionError",
    "UnknownPropertyError",
    "UnknownPropertyValueError",
]
