"""Matrix definition resolver: turns YAML definitions into a configuration factory."""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from buildmatrix.core.errors import MatrixDefinitionError
from buildmatrix.factory import ConfigurationFactory
from buildmatrix.models.definition import MatrixDefinition


logger = logging.getLogger(__name__)


class MatrixDefinitionResolver:
    """Resolve a build matrix definition into a ``ConfigurationFactory``."""

    def __init__(self) -> None:
        """Initialize matrix definition resolver."""
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def resolve(self, data: Mapping[str, Any]) -> ConfigurationFactory:
        """Validate definition data and create a factory.

        Args:
            data: Parsed definition document

        Returns:
            ConfigurationFactory: Factory over the defined properties

        Raises:
            MatrixDefinitionError: If the definition is invalid
        """
        try:
            definition = MatrixDefinition.model_validate(data)
        except ValidationError as e:
            msg = f"Invalid matrix definition: {e}"
            self.logger.error(msg)
            raise MatrixDefinitionError(msg) from e

        return self.create_factory(definition)

    def resolve_from_yaml(self, definition_path: Path) -> ConfigurationFactory:
        """Load a YAML definition file and create a factory.

        Args:
            definition_path: Path to the definition file

        Returns:
            ConfigurationFactory: Factory over the defined properties

        Raises:
            MatrixDefinitionError: If the file cannot be read or is invalid
        """
        try:
            self.logger.debug("Parsing matrix definition from %s", definition_path)
            data = self._load_yaml(definition_path)
        except (OSError, yaml.YAMLError) as e:
            msg = f"Failed to read matrix definition {definition_path}: {e}"
            self.logger.error(msg)
            raise MatrixDefinitionError(msg) from e

        if not isinstance(data, Mapping):
            msg = f"Matrix definition {definition_path} must be a mapping"
            self.logger.error(msg)
            raise MatrixDefinitionError(msg)

        return self.resolve(data)

    def create_factory(self, definition: MatrixDefinition) -> ConfigurationFactory:
        """Build a factory from a validated definition."""
        properties = []
        values = {}
        for property_definition in definition.properties:
            prop = property_definition.to_property()
            properties.append(prop)
            values[prop.name] = property_definition.to_property_values(prop)

        self.logger.info("Resolved %d matrix properties", len(properties))
        return ConfigurationFactory(properties, values)

    def _load_yaml(self, definition_path: Path) -> Any:
        with definition_path.open(encoding="utf-8") as f:
            return yaml.safe_load(f) or {}


def create_matrix_resolver() -> MatrixDefinitionResolver:
    """Create matrix definition resolver instance.

    Returns:
        MatrixDefinitionResolver: New matrix definition resolver
    """
    return MatrixDefinitionResolver()
