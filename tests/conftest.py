"""Core test fixtures for the buildmatrix project."""

from pathlib import Path
from typing import Any

import pytest
import yaml
from typer.testing import CliRunner

from buildmatrix.factory import ConfigurationFactory
from buildmatrix.models import Configuration, Property, PropertyValue
from buildmatrix.resolver import create_matrix_resolver


# ---- Base Fixtures ----


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a Typer CLI test runner."""
    return CliRunner()


# ---- Property Fixtures ----


@pytest.fixture
def arch_property() -> Property:
    return Property(name="Arch", default_value="x86")


@pytest.fixture
def config_property() -> Property:
    return Property(name="Config", default_value="Debug")


@pytest.fixture
def os_property() -> Property:
    return Property(name="OS", default_value="AnyOS", insignificant=True)


@pytest.fixture
def runtime_property() -> Property:
    return Property(name="Runtime", default_value="portable", independent=True)


@pytest.fixture
def x64(arch_property: Property) -> PropertyValue:
    return PropertyValue(arch_property, "x64", all_values=("x64",))


@pytest.fixture
def debug(config_property: Property) -> PropertyValue:
    return PropertyValue(config_property, "Debug", all_values=("Debug", "dbg"))


@pytest.fixture
def release(config_property: Property) -> PropertyValue:
    return PropertyValue(
        config_property,
        "Release",
        all_values=("Release", "rel"),
        additional_properties={"Optimize": "true"},
    )


@pytest.fixture
def worked_example(x64: PropertyValue, debug: PropertyValue) -> Configuration:
    """Arch=x64 (not default) and Config=Debug (default, aliased as dbg)."""
    return Configuration([x64, debug])


# ---- Definition Fixtures ----


@pytest.fixture
def matrix_data() -> dict[str, Any]:
    """Matrix definition document used across factory, resolver and CLI tests."""
    return {
        "properties": [
            {
                "name": "Arch",
                "default": "x86",
                "values": ["x86", {"value": "x64", "aliases": ["amd64"]}, "arm64"],
            },
            {
                "name": "Config",
                "default": "Debug",
                "values": [
                    {"value": "Debug", "aliases": ["dbg"]},
                    {
                        "value": "Release",
                        "aliases": ["rel"],
                        "properties": {"Optimize": "true"},
                    },
                ],
            },
            {
                "name": "OS",
                "default": "AnyOS",
                "insignificant": True,
                "values": ["AnyOS", "Linux", "Windows_NT"],
            },
            {
                "name": "Runtime",
                "default": "portable",
                "independent": True,
            },
        ]
    }


@pytest.fixture
def matrix_file(tmp_path: Path, matrix_data: dict[str, Any]) -> Path:
    path = tmp_path / "matrix.yaml"
    path.write_text(yaml.dump(matrix_data), encoding="utf-8")
    return path


@pytest.fixture
def factory(matrix_data: dict[str, Any]) -> ConfigurationFactory:
    return create_matrix_resolver().resolve(matrix_data)
