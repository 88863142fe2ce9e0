"""buildmatrix - build matrix configuration identifiers."""

from importlib.metadata import distribution

from .factory import ConfigurationFactory
from .models import (
    PROPERTY_SEPARATOR,
    CompatibleConfigurationComparer,
    Configuration,
    Property,
    PropertyValue,
)
from .resolver import MatrixDefinitionResolver, create_matrix_resolver


__version__ = distribution(__package__ or "buildmatrix").version

__all__ = [
    "PROPERTY_SEPARATOR",
    "CompatibleConfigurationComparer",
    "Configuration",
    "ConfigurationFactory",
    "MatrixDefinitionResolver",
    "Property",
    "PropertyValue",
    "__version__",
    "create_matrix_resolver",
]
