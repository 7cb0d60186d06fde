"""End-to-end scenarios: a host session from map load to vehicle load."""
from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

from combopath.host import (
    Combination,
    InMemoryModRegistry,
    InMemoryXmlFile,
    PathUtils,
    SpecializationManager,
    StoreCatalog,
    StoreItem,
    Vehicle,
    VehicleTypeManager,
)
from combopath.lifecycle import ComboPathFix, HostEnvironment

KEY = "vehicle.combinations.combination({})#xmlFilename"


@pytest.fixture()
def session(xml_file_class: type[InMemoryXmlFile]) -> Iterator[ComboPathFix]:
    registry = InMemoryModRegistry({
        "Bar": "/mods/Bar/",
        "FS25_tony10900TTRX": "/mods/FS25_tony10900TTRX/",
    })
    specializations = SpecializationManager()
    types = VehicleTypeManager(specializations)
    types.add_type("tractor")
    host = HostEnvironment(
        mod_registry=registry,
        utils=PathUtils("/game/data/"),
        xml_file_class=xml_file_class,
        store=StoreCatalog(),
        vehicle_type_manager=types,
        specialization_manager=specializations,
    )
    fix = ComboPathFix(host)
    fix.declare_specialization()
    fix.load_map("FS25_Map")
    yield fix
    fix.hooks.uninstall_all()


def test_store_combination_linked_after_one_pass(session: ComboPathFix) -> None:
    item_a = StoreItem("$moddirBar$/combo.xml", name="A")
    combination = Combination("$moddirBar$/combo.xml")
    owner = StoreItem("/mods/Self/tractor.xml", [combination], name="Tractor")
    session.host.store.items.extend([item_a, owner])

    assert session.update(16) is True

    assert combination.xml_filename == "/mods/Bar/combo.xml"
    assert combination.store_item is item_a
    assert combination.done is True


def test_second_pass_changes_nothing(session: ComboPathFix) -> None:
    combination = Combination("moddirBar$/combo.xml")
    session.host.store.add_item(StoreItem("/mods/Bar/combo.xml", [combination]))
    session.host.store.notify_populated()
    assert combination.done is True
    before = (combination.xml_filename, combination.store_item, combination.resolved_xml)

    session.host.store.resolve_combinations()

    assert (combination.xml_filename, combination.store_item, combination.resolved_xml) == before


def test_vehicle_with_dangling_reference(
    session: ComboPathFix, caplog: pytest.LogCaptureFixture
) -> None:
    xml = InMemoryXmlFile({KEY.format(0): "$moddirGhost$/x.xml"})
    with caplog.at_level(logging.WARNING, logger="combopath"):
        (result,) = session.host.vehicle_type_manager.load_vehicle(Vehicle(xml, "tractor"))
    assert xml.get_string(KEY.format(0)) == "$moddirGhost$/x.xml"
    assert len(result.diagnostics) == 1
    assert "Ghost" in caplog.text


def test_vehicle_load_rewrites_for_persistence(session: ComboPathFix) -> None:
    xml = InMemoryXmlFile({
        KEY.format(0): "$moddirFS25_tony10900TTRX$/tony10900TTR.xml",
        KEY.format(1): "$data/vehicles/trailer.xml",
    })
    session.host.vehicle_type_manager.load_vehicle(Vehicle(xml, "tractor"))
    assert xml.to_dict()[KEY.format(0)] == "/mods/FS25_tony10900TTRX/tony10900TTR.xml"
    assert xml.to_dict()[KEY.format(1)] == "$data/vehicles/trailer.xml"


def test_hooked_xml_reader_resolves_inline(session: ComboPathFix) -> None:
    xml = session.host.xml_file_class({KEY.format(0): "moddirBar$/combo.xml"})
    assert xml.get_string(KEY.format(0)) == "/mods/Bar/combo.xml"
    assert xml.to_dict()[KEY.format(0)] == "moddirBar$/combo.xml"


def test_hooked_filename_resolver_is_transparent(session: ComboPathFix) -> None:
    utils = session.host.utils
    assert utils.get_filename("textures/a.dds", "/mods/Self/") == "/mods/Self/textures/a.dds"
    assert utils.get_filename("$moddirBar$/combo.xml", "/mods/Self/") == "/mods/Bar/combo.xml"
