"""Configuration model: one point in a build matrix.

A configuration is an ordered sequence of property values, one per matrix
dimension. It renders into separator-joined identifier strings used to name
build outputs and to match configuration-specific assets.
"""

import itertools
import math
import operator
from collections.abc import Callable, Iterable, Iterator
from functools import reduce

from buildmatrix.core.errors import DuplicatePropertyError, InvalidConfigurationError
from buildmatrix.models.property import PropertyValue


PROPERTY_SEPARATOR = "-"

# Omit defaults first, then include them. The second pass only runs when the
# first one skipped a default value.
_DEFAULT_PASSES = (True, False)


def should_include_value(
    value: PropertyValue, omit_defaults: bool, include_insignificant: bool
) -> bool:
    """Decide whether a value takes part in a configuration string."""
    if value.property.independent:
        return False

    if omit_defaults and value.is_default:
        return False

    if value.property.insignificant and not include_insignificant:
        return False

    return True


def _xor_hash(values: Iterable[PropertyValue]) -> int:
    return reduce(operator.xor, (hash(value) for value in values), 0)


class ConfigurationStrings(Iterable[str]):
    """Lazy, restartable sequence of configuration strings.

    Every iteration starts a fresh pass from the factory, so the same object
    can be iterated any number of times with identical results.
    """

    def __init__(
        self, factory: Callable[[], Iterator[str]], size: Callable[[], int]
    ) -> None:
        self._factory = factory
        self._size = size

    def __iter__(self) -> Iterator[str]:
        return self._factory()

    def __len__(self) -> int:
        return self._size()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(<{len(self)} strings>)"


class Configuration:
    """An ordered collection of property values.

    Equality is order-sensitive and element-wise over ``values``. The hash is
    the XOR of the element hashes, so permuted configurations share a hash
    while comparing unequal.

    Both hashes are computed once at construction; instances hold no mutable
    state afterwards and can be shared between threads.

    At most one value per property is expected. Duplicate properties are not
    rejected and produce whatever the join and XOR produce.
    """

    compatible_comparer: "CompatibleConfigurationComparer"

    def __init__(self, values: Iterable[PropertyValue] | None) -> None:
        if values is None:
            raise InvalidConfigurationError("values must not be None")

        self._values: tuple[PropertyValue, ...] = tuple(values)
        self._hash = _xor_hash(self._values)
        self._compatible_hash = _xor_hash(self._significant_values())

    @property
    def values(self) -> tuple[PropertyValue, ...]:
        """Property values in rendering order."""
        return self._values

    def _significant_values(self) -> list[PropertyValue]:
        return [v for v in self._values if not v.property.insignificant]

    def _render(
        self, omit_defaults: bool, include_insignificant: bool
    ) -> tuple[str, bool]:
        """Build a single configuration string from canonical values.

        Returns:
            The configuration string and whether a default value was omitted
        """
        encountered_default = False
        parts: list[str] = []
        for value in self._values:
            if omit_defaults and value.is_default:
                encountered_default = True

            if should_include_value(value, omit_defaults, include_insignificant):
                parts.append(value.value)

        return PROPERTY_SEPARATOR.join(parts), encountered_default

    def _expand_with_aliases(
        self, omit_defaults: bool, include_insignificant: bool
    ) -> tuple[ConfigurationStrings, bool]:
        """Build configuration strings for every permutation of aliases.

        The result is the ordered cross-product of ``all_values`` over the
        included values, right-most dimension varying fastest.

        Returns:
            The configuration strings and whether a default value was omitted
        """
        encountered_default = omit_defaults and any(
            value.is_default for value in self._values
        )
        alias_sets = [
            value.all_values
            for value in self._values
            if should_include_value(value, omit_defaults, include_insignificant)
        ]

        def generate() -> Iterator[str]:
            for combination in itertools.product(*alias_sets):
                yield PROPERTY_SEPARATOR.join(combination)

        strings = ConfigurationStrings(
            generate, lambda: math.prod(len(aliases) for aliases in alias_sets)
        )
        return strings, encountered_default

    def _iter_configuration_strings(self, include_insignificant: bool) -> Iterator[str]:
        for omit_defaults in _DEFAULT_PASSES:
            strings, encountered_default = self._expand_with_aliases(
                omit_defaults, include_insignificant
            )
            yield from strings

            if not encountered_default:
                # the pass with defaults would produce the same strings
                break

    def _count_configuration_strings(self, include_insignificant: bool) -> int:
        total = 0
        for omit_defaults in _DEFAULT_PASSES:
            strings, encountered_default = self._expand_with_aliases(
                omit_defaults, include_insignificant
            )
            total += len(strings)
            if not encountered_default:
                break
        return total

    def _configuration_strings(
        self, include_insignificant: bool
    ) -> ConfigurationStrings:
        return ConfigurationStrings(
            lambda: self._iter_configuration_strings(include_insignificant),
            lambda: self._count_configuration_strings(include_insignificant),
        )

    def get_configuration_string(
        self, omit_defaults: bool = True, include_insignificant: bool = True
    ) -> str:
        """Build the canonical configuration string.

        Args:
            omit_defaults: Leave out values equal to their property default
            include_insignificant: Keep values of insignificant properties

        Returns:
            Separator-joined canonical values
        """
        configuration_string, _ = self._render(omit_defaults, include_insignificant)
        return configuration_string

    def get_default_configuration_string(self) -> str:
        """Canonical string with defaults omitted and insignificant values kept."""
        return self.get_configuration_string(
            omit_defaults=True, include_insignificant=True
        )

    def get_configuration_strings(self) -> ConfigurationStrings:
        """All alias permutations, first without defaults then with them."""
        return self._configuration_strings(include_insignificant=True)

    def get_significant_configuration_strings(self) -> ConfigurationStrings:
        """Like ``get_configuration_strings`` but without insignificant values."""
        return self._configuration_strings(include_insignificant=False)

    def get_properties(self) -> dict[str, str]:
        """Flatten this configuration into build properties.

        Each value contributes its property name followed by its additional
        properties, in order.

        Raises:
            DuplicatePropertyError: If any name is contributed twice
        """
        properties: dict[str, str] = {}

        def add(name: str, value: str) -> None:
            if name in properties:
                raise DuplicatePropertyError(name)
            properties[name] = value

        for value in self._values:
            add(value.property.name, value.value)
            for name, additional_value in value.additional_properties.items():
                add(name, additional_value)

        return properties

    def is_compatible_with(self, other: "Configuration | None") -> bool:
        """True when both configurations agree on every significant value."""
        return self.compatible_comparer.equals(self, other)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Configuration):
            return NotImplemented
        if len(self._values) != len(other._values):
            return False
        return self._values == other._values

    def __hash__(self) -> int:
        return self._hash

    def __str__(self) -> str:
        return self.get_default_configuration_string()

    def __repr__(self) -> str:
        rendered = ", ".join(f"{v.property.name}={v.value}" for v in self._values)
        return f"Configuration({rendered})"


class CompatibleKey:
    """Hashable wrapper that compares configurations with the compatible comparer."""

    __slots__ = ("configuration",)

    def __init__(self, configuration: Configuration) -> None:
        self.configuration = configuration

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CompatibleKey):
            return NotImplemented
        return Configuration.compatible_comparer.equals(
            self.configuration, other.configuration
        )

    def __hash__(self) -> int:
        return Configuration.compatible_comparer.hash(self.configuration)

    def __repr__(self) -> str:
        return f"CompatibleKey({self.configuration!r})"


class CompatibleConfigurationComparer:
    """Equivalence over configurations that only examines significant properties."""

    def equals(self, x: Configuration | None, y: Configuration | None) -> bool:
        if x is y:
            return True

        if x is None or y is None:
            return False

        return x._significant_values() == y._significant_values()

    def hash(self, obj: Configuration) -> int:
        return obj._compatible_hash

    def key(self, obj: Configuration) -> CompatibleKey:
        """Wrap a configuration for use as a dict key or set member."""
        return CompatibleKey(obj)


Configuration.compatible_comparer = CompatibleConfigurationComparer()
