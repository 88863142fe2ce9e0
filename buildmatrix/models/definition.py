"""Matrix definition models.

A matrix definition lists the properties of a build matrix in rendering
order, with the legal values of each property. It is usually loaded from a
YAML document:

    properties:
      - name: Configuration
        default: Debug
        values:
          - Debug
          - value: Release
            aliases: [rel]
            properties:
              Optimize: "true"
"""

from typing import Any

from pydantic import Field, field_validator, model_validator

from buildmatrix.models.base import BuildMatrixBaseModel
from buildmatrix.models.configuration import PROPERTY_SEPARATOR
from buildmatrix.models.property import Property, PropertyValue


def _validate_token(token: str) -> str:
    if not token:
        raise ValueError("value must not be empty")
    if PROPERTY_SEPARATOR in token:
        raise ValueError(
            f"'{token}' must not contain the separator '{PROPERTY_SEPARATOR}'"
        )
    return token


class PropertyValueDefinition(BuildMatrixBaseModel):
    """One legal value of a property."""

    value: str = Field(description="Canonical value")
    aliases: list[str] = Field(
        default_factory=list, description="Alternate spellings of the value"
    )
    properties: dict[str, str] = Field(
        default_factory=dict,
        description="Extra build properties contributed by this value",
    )

    @field_validator("value")
    @classmethod
    def validate_value(cls, v: str) -> str:
        return _validate_token(v)

    @field_validator("aliases")
    @classmethod
    def validate_aliases(cls, v: list[str]) -> list[str]:
        return [_validate_token(alias.strip()) for alias in v]


class PropertyDefinition(BuildMatrixBaseModel):
    """One dimension of the build matrix."""

    name: str = Field(description="Unique property name")
    default: str = Field(description="Default value")
    independent: bool = Field(
        default=False, description="Never part of configuration strings"
    )
    insignificant: bool = Field(
        default=False,
        description="Only part of configuration strings when requested",
    )
    values: list[PropertyValueDefinition] = Field(
        default_factory=list, description="Legal values, in enumeration order"
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v:
            raise ValueError("property name must not be empty")
        return v

    @field_validator("default")
    @classmethod
    def validate_default(cls, v: str) -> str:
        return _validate_token(v)

    @field_validator("values", mode="before")
    @classmethod
    def expand_plain_values(cls, v: Any) -> Any:
        """Accept plain strings as shorthand for ``{value: ...}``."""
        if isinstance(v, list):
            return [{"value": item} if isinstance(item, str) else item for item in v]
        return v

    @model_validator(mode="after")
    def validate_values(self) -> "PropertyDefinition":
        if not self.values:
            return self

        values = {definition.value for definition in self.values}
        seen: set[str] = set()
        for definition in self.values:
            if definition.value in seen:
                raise ValueError(
                    f"value '{definition.value}' is listed twice for '{self.name}'"
                )
            seen.add(definition.value)
            for alias in definition.aliases:
                if alias == definition.value:
                    continue
                if alias in seen or alias in values:
                    raise ValueError(
                        f"alias '{alias}' of '{definition.value}' is already "
                        f"a spelling of '{self.name}'"
                    )
                seen.add(alias)

        if self.default not in values:
            raise ValueError(
                f"default '{self.default}' is not a value of '{self.name}'"
            )
        return self

    def spellings(self) -> list[str]:
        """Every value and alias of the property, or the default alone."""
        if not self.values:
            return [self.default]
        return [
            spelling
            for definition in self.values
            for spelling in dict.fromkeys([definition.value, *definition.aliases])
        ]

    def to_property(self) -> Property:
        return Property(
            name=self.name,
            default_value=self.default,
            independent=self.independent,
            insignificant=self.insignificant,
        )

    def to_property_values(self, prop: Property) -> tuple[PropertyValue, ...]:
        if not self.values:
            # A property without listed values only knows its default
            return (PropertyValue.with_aliases(prop, self.default),)
        return tuple(
            PropertyValue.with_aliases(
                prop,
                definition.value,
                definition.aliases,
                definition.properties,
            )
            for definition in self.values
        )


class MatrixDefinition(BuildMatrixBaseModel):
    """Complete build matrix definition."""

    properties: list[PropertyDefinition] = Field(
        default_factory=list, description="Matrix dimensions in rendering order"
    )

    @field_validator("properties")
    @classmethod
    def validate_unique_names(
        cls, v: list[PropertyDefinition]
    ) -> list[PropertyDefinition]:
        names = [definition.name for definition in v]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"duplicate property names: {', '.join(duplicates)}")
        return v

    @field_validator("properties")
    @classmethod
    def validate_unique_spellings(
        cls, v: list[PropertyDefinition]
    ) -> list[PropertyDefinition]:
        # Parsing assigns each part to a property by its spelling alone
        owners: dict[str, str] = {}
        for definition in v:
            if definition.independent:
                continue
            for spelling in definition.spellings():
                owner = owners.setdefault(spelling, definition.name)
                if owner != definition.name:
                    raise ValueError(
                        f"'{spelling}' is a spelling of both '{owner}' "
                        f"and '{definition.name}'"
                    )
        return v
