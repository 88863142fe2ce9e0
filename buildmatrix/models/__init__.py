"""Models for build matrix properties, configurations and definitions."""

from buildmatrix.models.base import BuildMatrixBaseModel
from buildmatrix.models.configuration import (
    PROPERTY_SEPARATOR,
    CompatibleConfigurationComparer,
    CompatibleKey,
    Configuration,
    ConfigurationStrings,
    should_include_value,
)
from buildmatrix.models.definition import (
    MatrixDefinition,
    PropertyDefinition,
    PropertyValueDefinition,
)
from buildmatrix.models.property import Property, PropertyValue


__all__: list[str] = [
    # Base model
    "BuildMatrixBaseModel",
    # Matrix dimensions
    "Property",
    "PropertyValue",
    # Configurations
    "PROPERTY_SEPARATOR",
    "CompatibleConfigurationComparer",
    "CompatibleKey",
    "Configuration",
    "ConfigurationStrings",
    "should_include_value",
    # Definitions
    "MatrixDefinition",
    "PropertyDefinition",
    "PropertyValueDefinition",
]
