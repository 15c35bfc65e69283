"""Tests for plain-data rendering of the model."""

import json

from bindmodel.analyzer.export import package_summary, package_to_dict


class TestPackageToDict:
    """Test cases for package_to_dict."""

    def test_is_json_serializable(self, geo_model):
        data = package_to_dict(geo_model)
        assert json.loads(json.dumps(data)) == data

    def test_struct_entries(self, geo_model):
        # Act
        data = package_to_dict(geo_model)

        # Assert
        point = data["structs"][1]
        assert point["id"] == "geo_Point"
        assert point["capabilities"] == ["stringer"]
        assert [f["name"] for f in point["fields"]] == ["Base", "X", "Y"]
        assert point["ctors"][0]["ctor"] is True
        assert point["ctors"][0]["return"] == "geo.Point"
        assert point["methods"][1]["recv"] == {"name": "p", "type": "*geo.Point"}

    def test_functions_and_constants(self, geo_model):
        data = package_to_dict(geo_model)

        divide = data["funcs"][0]
        assert divide["return"] == "int"
        assert divide["error"] is True
        assert [p["name"] for p in divide["params"]] == ["a", "b"]
        assert data["consts"][0]["getter"] == "get_geo_Epsilon"
        assert data["unsupported"] == []


def test_package_summary(geo_model):
    """The summary lists every model entry with its identity."""
    lines = package_summary(geo_model)

    assert lines[0] == "package geo"
    assert "  struct geo_Point [stringer]" in lines
    assert "    ctor geo_Point_NewPoint" in lines
    assert "    method geo_Point_Describe" in lines
    assert "  func geo_Divide" in lines
    assert "  const geo_North int" in lines
