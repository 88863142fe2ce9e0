"""Build matrix dimension models.

A ``Property`` describes one dimension of the matrix (target framework,
architecture, flavor, ...). A ``PropertyValue`` is one concrete point on that
dimension together with its alternate spellings and the extra properties it
contributes to a build.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True)
class Property:
    """Static descriptor of one build matrix dimension.

    Attributes:
        name: Unique property name
        default_value: Canonical value that needs no customization
        independent: Never contributes to a configuration string
        insignificant: Contributes only when explicitly requested, and is
            ignored by the compatible comparer
    """

    name: str
    default_value: str
    independent: bool = False
    insignificant: bool = False


@dataclass(frozen=True)
class PropertyValue:
    """A concrete value bound to a property.

    Identity is the pair (property, value). Aliases and additional properties
    do not take part in equality or hashing.

    Attributes:
        property: Owning property
        value: Canonical string form
        all_values: Ordered spellings used when expanding aliases. Defaults to
            ``(value,)`` when not given.
        additional_properties: Extra name/value pairs contributed alongside
            this value when flattening a configuration
    """

    property: Property
    value: str
    all_values: tuple[str, ...] = field(default=(), compare=False)
    additional_properties: Mapping[str, str] = field(
        default_factory=dict, compare=False
    )

    def __post_init__(self) -> None:
        all_values = tuple(self.all_values) or (self.value,)
        object.__setattr__(self, "all_values", all_values)
        object.__setattr__(
            self,
            "additional_properties",
            MappingProxyType(dict(self.additional_properties)),
        )

    @classmethod
    def with_aliases(
        cls,
        property: Property,
        value: str,
        aliases: Iterable[str] = (),
        additional_properties: Mapping[str, str] | None = None,
    ) -> "PropertyValue":
        """Create a value spelled as the canonical value followed by aliases."""
        return cls(
            property=property,
            value=value,
            all_values=(value, *aliases),
            additional_properties=additional_properties or {},
        )

    @property
    def is_default(self) -> bool:
        """True when this is the default value of its property."""
        return self.value == self.property.default_value

    def __str__(self) -> str:
        return self.value
