"""Unit tests for combopath.host.xmlfile — dotted-key XML attribute stores."""
from __future__ import annotations

from pathlib import Path

import pytest

from combopath.host import ElementTreeXmlFile, InMemoryXmlFile, XmlAttributeStore, XmlKeyError

VEHICLE_XML = """\
<vehicle type="tractor">
  <combinations>
    <combination xmlFilename="$moddirFoo$/x.xml"/>
    <combination xmlFilename="$data/vehicles/trailer.xml"/>
  </combinations>
  <base><filename>tractor.i3d</filename></base>
</vehicle>
"""


class TestInMemoryXmlFile:
    def test_container_exists_when_attribute_below_it(self) -> None:
        xml = InMemoryXmlFile({"vehicle.combinations.combination(1)#xmlFilename": "a"})
        assert xml.has_property("vehicle.combinations.combination(1)")
        assert xml.has_property("vehicle.combinations")
        assert not xml.has_property("vehicle.combinations.combination(0)")

    def test_index_prefix_is_not_a_match(self) -> None:
        xml = InMemoryXmlFile({"vehicle.combinations.combination(12)#xmlFilename": "a"})
        assert not xml.has_property("vehicle.combinations.combination(1)")

    def test_get_set(self) -> None:
        xml = InMemoryXmlFile()
        assert xml.get_string("a#b", "default") == "default"
        xml.set_string("a#b", "value")
        assert xml.get_string("a#b") == "value"
        assert xml.to_dict() == {"a#b": "value"}

    def test_satisfies_protocol(self) -> None:
        assert isinstance(InMemoryXmlFile(), XmlAttributeStore)


class TestElementTreeXmlFile:
    @pytest.fixture()
    def xml(self) -> ElementTreeXmlFile:
        return ElementTreeXmlFile.from_string(VEHICLE_XML)

    def test_has_property_by_index(self, xml: ElementTreeXmlFile) -> None:
        assert xml.has_property("vehicle.combinations.combination(0)")
        assert xml.has_property("vehicle.combinations.combination(1)")
        assert not xml.has_property("vehicle.combinations.combination(2)")

    def test_has_property_attribute(self, xml: ElementTreeXmlFile) -> None:
        assert xml.has_property("vehicle#type")
        assert not xml.has_property("vehicle#missing")

    def test_wrong_root(self, xml: ElementTreeXmlFile) -> None:
        assert not xml.has_property("placeable.combinations")

    def test_get_attribute(self, xml: ElementTreeXmlFile) -> None:
        value = xml.get_string("vehicle.combinations.combination(1)#xmlFilename")
        assert value == "$data/vehicles/trailer.xml"

    def test_get_text(self, xml: ElementTreeXmlFile) -> None:
        assert xml.get_string("vehicle.base.filename") == "tractor.i3d"

    def test_get_missing_returns_default(self, xml: ElementTreeXmlFile) -> None:
        assert xml.get_string("vehicle.combinations.combination(5)#xmlFilename", "d") == "d"

    def test_set_attribute(self, xml: ElementTreeXmlFile) -> None:
        key = "vehicle.combinations.combination(0)#xmlFilename"
        xml.set_string(key, "/mods/Foo/x.xml")
        assert xml.get_string(key) == "/mods/Foo/x.xml"
        assert 'xmlFilename="/mods/Foo/x.xml"' in xml.to_string()

    def test_set_on_missing_element_raises(self, xml: ElementTreeXmlFile) -> None:
        with pytest.raises(KeyError):
            xml.set_string("vehicle.combinations.combination(9)#xmlFilename", "x")

    @pytest.mark.parametrize("key", ["vehicle..combinations", "vehicle.combination(x)", "vehicle.a(1"])
    def test_malformed_key(self, xml: ElementTreeXmlFile, key: str) -> None:
        with pytest.raises(XmlKeyError):
            xml.has_property(key)

    def test_load_and_save(self, tmp_path: Path) -> None:
        path = tmp_path / "tractor.xml"
        path.write_text(VEHICLE_XML, encoding="utf-8")
        xml = ElementTreeXmlFile.load(path)
        xml.set_string("vehicle#type", "trailer")
        xml.save()
        assert ElementTreeXmlFile.load(path).get_string("vehicle#type") == "trailer"

    def test_save_without_target_raises(self, xml: ElementTreeXmlFile) -> None:
        with pytest.raises(ValueError):
            xml.save()
