"""Configuration factory: builds, enumerates and parses matrix configurations."""

import itertools
import logging
from collections.abc import Iterable, Iterator, Mapping

from buildmatrix.core.errors import (
    ConfigurationParseError,
    UnknownPropertyError,
    UnknownPropertyValueError,
)
from buildmatrix.models.configuration import PROPERTY_SEPARATOR, Configuration
from buildmatrix.models.property import Property, PropertyValue


logger = logging.getLogger(__name__)


class ConfigurationFactory:
    """Create configurations over an ordered set of properties.

    Property order is rendering order. Each property owns an ordered tuple of
    legal values, the first spelling of which is the canonical value.
    """

    def __init__(
        self,
        properties: Iterable[Property],
        values: Mapping[str, Iterable[PropertyValue]],
    ) -> None:
        """Initialize the factory.

        Args:
            properties: Matrix dimensions in rendering order
            values: Legal values keyed by property name. A property missing
                from the mapping only knows its default value.
        """
        self._properties = tuple(properties)
        self._by_name: dict[str, Property] = {}
        self._values: dict[str, tuple[PropertyValue, ...]] = {}

        for prop in self._properties:
            self._by_name[prop.name] = prop
            legal = tuple(values.get(prop.name, ()))
            self._values[prop.name] = legal or (
                PropertyValue(prop, prop.default_value),
            )

    @property
    def properties(self) -> tuple[Property, ...]:
        return self._properties

    def get_property(self, name: str) -> Property:
        try:
            return self._by_name[name]
        except KeyError:
            raise UnknownPropertyError(name) from None

    def get_values(self, name: str) -> tuple[PropertyValue, ...]:
        self.get_property(name)
        return self._values[name]

    def get_default_value(self, name: str) -> PropertyValue:
        prop = self.get_property(name)
        for value in self._values[name]:
            if value.is_default:
                return value
        return PropertyValue(prop, prop.default_value)

    def find_value(self, name: str, text: str) -> PropertyValue | None:
        """Find the legal value spelled ``text`` (canonical or alias)."""
        for value in self.get_values(name):
            if text == value.value or text in value.all_values:
                return value
        return None

    def _resolve_value(
        self, prop: Property, text: str, permit_unknown_values: bool
    ) -> PropertyValue:
        value = self.find_value(prop.name, text)
        if value is not None:
            return value
        if not permit_unknown_values:
            raise UnknownPropertyValueError(prop.name, text)

        logger.debug("Using unknown value '%s' for property '%s'", text, prop.name)
        return PropertyValue(prop, text)

    def create_configuration(
        self,
        values: Mapping[str, str] | None = None,
        *,
        permit_unknown_values: bool = False,
    ) -> Configuration:
        """Create a configuration from property name/value text pairs.

        Args:
            values: Property name to value text (canonical or alias). Missing
                properties take their default value.
            permit_unknown_values: Accept value text that is not a legal value

        Raises:
            UnknownPropertyError: If a name is not a property of the matrix
            UnknownPropertyValueError: If a value is not legal for its property
        """
        values = values or {}
        for name in values:
            self.get_property(name)

        return Configuration(
            self._resolve_value(prop, values[prop.name], permit_unknown_values)
            if prop.name in values
            else self.get_default_value(prop.name)
            for prop in self._properties
        )

    def get_default_configuration(self) -> Configuration:
        return Configuration(
            self.get_default_value(prop.name) for prop in self._properties
        )

    def get_all_configurations(self) -> Iterator[Configuration]:
        """Enumerate every point of the matrix.

        Properties vary in definition order, right-most fastest.
        """
        value_sets = [self._values[prop.name] for prop in self._properties]
        for combination in itertools.product(*value_sets):
            yield Configuration(combination)

    def parse_configuration(
        self, text: str, *, permit_unknown_values: bool = False
    ) -> Configuration:
        """Parse a configuration string back into a configuration.

        Parts are matched against properties in order; a property whose
        value is not present takes its default. Independent properties never
        appear in configuration strings and always parse to their default.

        Args:
            text: Separator-joined configuration string
            permit_unknown_values: Take a part that matches no later property as
                an ad-hoc value of the current property

        Raises:
            ConfigurationParseError: If some parts cannot be assigned
        """
        parts = text.split(PROPERTY_SEPARATOR) if text else []
        position = 0
        resolved: list[PropertyValue | None] = []

        for index, prop in enumerate(self._properties):
            value = None
            if position < len(parts) and not prop.independent:
                part = parts[position]
                value = self.find_value(prop.name, part)
                if (
                    value is None
                    and permit_unknown_values
                    and not self._matches_later_property(index, part)
                ):
                    value = PropertyValue(prop, part)
            if value is not None:
                position += 1
            resolved.append(value)

        leftover = parts[position:]
        if leftover:
            raise ConfigurationParseError(
                text, f"unrecognized part(s) {', '.join(leftover)}"
            )

        configuration = Configuration(
            value if value is not None else self.get_default_value(prop.name)
            for prop, value in zip(self._properties, resolved, strict=True)
        )
        logger.debug("Parsed '%s' as %r", text, configuration)
        return configuration

    def _matches_later_property(self, index: int, part: str) -> bool:
        return any(
            self.find_value(prop.name, part) is not None
            for prop in self._properties[index + 1 :]
            if not prop.independent
        )
