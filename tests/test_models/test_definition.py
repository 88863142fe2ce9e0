"""Test matrix definition models."""

import pytest
from pydantic import ValidationError

from buildmatrix.models import (
    MatrixDefinition,
    PropertyDefinition,
    PropertyValueDefinition,
)


class TestPropertyValueDefinition:
    """Test PropertyValueDefinition validation."""

    def test_minimal(self):
        definition = PropertyValueDefinition(value="x64")
        assert definition.aliases == []
        assert definition.properties == {}

    def test_separator_rejected(self):
        with pytest.raises(ValidationError, match="separator"):
            PropertyValueDefinition(value="linux-x64")

    def test_separator_rejected_in_alias(self):
        with pytest.raises(ValidationError):
            PropertyValueDefinition(value="x64", aliases=["x86-64"])

    def test_empty_value_rejected(self):
        with pytest.raises(ValidationError):
            PropertyValueDefinition(value="  ")

    def test_unknown_keys_rejected(self):
        with pytest.raises(ValidationError):
            PropertyValueDefinition.model_validate({"value": "x64", "alias": ["a"]})


class TestPropertyDefinition:
    """Test PropertyDefinition validation and conversion."""

    def test_plain_string_values(self):
        definition = PropertyDefinition.model_validate(
            {"name": "Arch", "default": "x86", "values": ["x86", "x64"]}
        )
        assert [v.value for v in definition.values] == ["x86", "x64"]

    def test_default_must_be_listed(self):
        with pytest.raises(ValidationError, match="default"):
            PropertyDefinition.model_validate(
                {"name": "Arch", "default": "arm", "values": ["x86", "x64"]}
            )

    def test_duplicate_values_rejected(self):
        with pytest.raises(ValidationError, match="twice"):
            PropertyDefinition.model_validate(
                {"name": "Arch", "default": "x86", "values": ["x86", "x86"]}
            )

    def test_alias_repeating_other_value_rejected(self):
        with pytest.raises(ValidationError, match="alias 'x86'"):
            PropertyDefinition.model_validate(
                {
                    "name": "Arch",
                    "default": "x86",
                    "values": [{"value": "x64", "aliases": ["x86"]}, "x86"],
                }
            )

    def test_alias_repeating_other_alias_rejected(self):
        with pytest.raises(ValidationError, match="already a spelling of 'Arch'"):
            PropertyDefinition.model_validate(
                {
                    "name": "Arch",
                    "default": "x64",
                    "values": [
                        {"value": "x64", "aliases": ["amd64"]},
                        {"value": "x86_64", "aliases": ["amd64"]},
                    ],
                }
            )

    def test_alias_repeating_own_value_allowed(self):
        definition = PropertyDefinition.model_validate(
            {
                "name": "Arch",
                "default": "x64",
                "values": [{"value": "x64", "aliases": ["x64", "amd64"]}],
            }
        )
        assert definition.spellings() == ["x64", "amd64"]

    def test_spellings_without_values(self):
        definition = PropertyDefinition(name="Runtime", default="portable")
        assert definition.spellings() == ["portable"]

    def test_to_property(self):
        definition = PropertyDefinition(
            name="OS", default="AnyOS", insignificant=True, values=[]
        )
        prop = definition.to_property()
        assert prop.name == "OS"
        assert prop.default_value == "AnyOS"
        assert prop.insignificant is True
        assert prop.independent is False

    def test_to_property_values_with_aliases(self):
        definition = PropertyDefinition.model_validate(
            {
                "name": "Config",
                "default": "Debug",
                "values": [
                    {"value": "Debug", "aliases": ["dbg"]},
                    {"value": "Release", "properties": {"Optimize": "true"}},
                ],
            }
        )
        prop = definition.to_property()
        debug, release = definition.to_property_values(prop)

        assert debug.all_values == ("Debug", "dbg")
        assert release.all_values == ("Release",)
        assert dict(release.additional_properties) == {"Optimize": "true"}
        assert debug.property is prop

    def test_no_values_means_default_only(self):
        definition = PropertyDefinition(name="Runtime", default="portable")
        prop = definition.to_property()
        (value,) = definition.to_property_values(prop)
        assert value.value == "portable"
        assert value.is_default


class TestMatrixDefinition:
    """Test MatrixDefinition validation."""

    def test_round_trip_to_dict(self, matrix_data):
        definition = MatrixDefinition.model_validate(matrix_data)
        assert [p["name"] for p in definition.to_dict()["properties"]] == [
            "Arch",
            "Config",
            "OS",
            "Runtime",
        ]

    def test_duplicate_property_names(self):
        with pytest.raises(ValidationError, match="duplicate property names: Arch"):
            MatrixDefinition.model_validate(
                {
                    "properties": [
                        {"name": "Arch", "default": "x86"},
                        {"name": "Arch", "default": "x64"},
                    ]
                }
            )

    def test_empty_definition(self):
        assert MatrixDefinition.model_validate({}).properties == []

    def test_spelling_shared_across_properties_rejected(self):
        with pytest.raises(ValidationError, match="'y' is a spelling of both"):
            MatrixDefinition.model_validate(
                {
                    "properties": [
                        {"name": "A", "default": "x", "values": ["x", "y"]},
                        {"name": "B", "default": "z", "values": ["y", "z"]},
                    ]
                }
            )

    def test_alias_shared_across_properties_rejected(self):
        with pytest.raises(ValidationError, match="spelling of both"):
            MatrixDefinition.model_validate(
                {
                    "properties": [
                        {
                            "name": "Arch",
                            "default": "x64",
                            "values": [{"value": "x64", "aliases": ["rel"]}],
                        },
                        {"name": "Config", "default": "Debug"},
                        {"name": "Flavor", "default": "rel"},
                    ]
                }
            )

    def test_independent_property_may_share_spellings(self):
        definition = MatrixDefinition.model_validate(
            {
                "properties": [
                    {"name": "Arch", "default": "x86", "values": ["x86", "x64"]},
                    {
                        "name": "Target",
                        "default": "x64",
                        "independent": True,
                        "values": ["x64", "arm64"],
                    },
                ]
            }
        )
        assert [p.name for p in definition.properties] == ["Arch", "Target"]
