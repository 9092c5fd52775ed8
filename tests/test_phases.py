"""Tests for phases, phase interfaces and the object registry."""

import numpy as np
import pytest

from closure_sim.core import ObjectRegistry
from closure_sim.mesh import Mesh
from closure_sim.phases import (
    DispersedPhaseInterface,
    Phase,
    PhaseInterface,
    PhaseInterfaceKey,
    SidedPhaseInterface,
)
from closure_sim.utils.exceptions import ConfigurationError, RegistrationError, StateError
from tests.conftest import WATER, make_fluid


class TestPhaseSystem:
    def test_phase_fields_are_registered_by_quantity_and_name(self, fluid):
        mesh = fluid.mesh
        for name in ("alpha.gas", "T.liquid", "U.gas", "Tsat", "Tw", "wallAreaDensity"):
            assert mesh.found(name), name
        assert fluid.phase("gas").U.values.shape == (4, 3)

    def test_unknown_phase(self, fluid):
        with pytest.raises(ConfigurationError) as exc_info:
            fluid.phase("oil")
        assert sorted(exc_info.value.get_valid_options()) == ["gas", "liquid"]

    def test_detached_phase_has_no_system(self):
        phase = Phase("oil", Mesh.uniform(2), alpha=1.0, T=300.0, **WATER)
        with pytest.raises(StateError):
            phase.system

    def test_duplicate_phase_names_are_rejected(self):
        with pytest.raises((ConfigurationError, RegistrationError)):
            make_fluid(names=("water", "water"))


class TestInterfaceNames:
    @pytest.mark.parametrize(
        "name, cls",
        [
            ("gas_liquid", PhaseInterface),
            ("gas_dispersedIn_liquid", DispersedPhaseInterface),
            ("gas_dispersedIn_liquid_inThe_gas", SidedPhaseInterface),
        ],
    )
    def test_names_round_trip(self, fluid, name, cls):
        interface = fluid.interface(name)
        assert type(interface) is cls
        assert interface.name == name

    def test_sided_interface_parts(self, fluid):
        interface = fluid.interface("gas_dispersedIn_liquid_inThe_liquid")
        assert interface.dispersed.name == "gas"
        assert interface.continuous.name == "liquid"
        assert interface.side.name == "liquid"
        assert interface.other.name == "gas"
        assert interface.other_side().name == "gas_dispersedIn_liquid_inThe_gas"

    @pytest.mark.parametrize(
        "name",
        ["gas", "gas_liquid_solid", "gas_inThe_liquid", "gas_dispersedIn_oil"],
    )
    def test_bad_names_are_rejected(self, fluid, name):
        with pytest.raises(ConfigurationError):
            fluid.interface(name)

    def test_side_must_belong_to_pair(self):
        fluid = make_fluid()
        gas, liquid = fluid.phases()
        other = Phase("solid", fluid.mesh, alpha=0.0, T=300.0, **WATER)
        with pytest.raises(ConfigurationError):
            SidedPhaseInterface(gas, liquid, other)

    def test_interface_needs_two_phases(self, fluid):
        gas = fluid.phase("gas")
        with pytest.raises(ConfigurationError):
            PhaseInterface(gas, gas)

    def test_other_phase(self, fluid):
        interface = fluid.interface("gas_liquid")
        assert interface.other_phase("gas").name == "liquid"
        with pytest.raises(ConfigurationError):
            interface.other_phase("solid")


class TestPhaseInterfaceKey:
    def test_key_is_orientation_free(self):
        assert PhaseInterfaceKey("liquid", "gas") == PhaseInterfaceKey("gas", "liquid")
        assert PhaseInterfaceKey("liquid", "gas").phase1 == "gas"
        assert len({PhaseInterfaceKey("a", "b"), PhaseInterfaceKey("b", "a")}) == 1

    def test_interfaces_of_same_pair_share_a_key(self, fluid):
        keys = {
            fluid.interface(name).key
            for name in (
                "gas_liquid",
                "liquid_gas",
                "gas_dispersedIn_liquid",
                "gas_dispersedIn_liquid_inThe_liquid",
            )
        }
        assert keys == {PhaseInterfaceKey("gas", "liquid")}
        assert str(PhaseInterfaceKey("liquid", "gas")) == "gas_liquid"


class TestObjectRegistry:
    def test_check_in_keeps_order(self):
        registry = ObjectRegistry("region0")
        for name in ("b", "a", "c"):
            registry.check_in(object(), name)
        assert registry.names() == ["b", "a", "c"]
        assert len(registry) == 3
        assert "a" in registry

    def test_duplicate_name_is_rejected(self):
        registry = ObjectRegistry("region0")
        registry.check_in(object(), "T")
        with pytest.raises(RegistrationError):
            registry.check_in(object(), "T")

    def test_nameless_object_is_rejected(self):
        with pytest.raises(RegistrationError):
            ObjectRegistry("region0").check_in(object())

    def test_child_registry_is_scoped(self):
        root = ObjectRegistry("region0")
        child = ObjectRegistry("lagrangian", parent=root)
        assert child.path == "region0/lagrangian"
        assert root.lookup("lagrangian") is child

    def test_check_out_and_lookup(self):
        registry = ObjectRegistry("region0")
        obj = registry.check_in(np.zeros(1), "T")
        assert registry.check_out("T") is obj
        assert not registry.found("T")
        with pytest.raises(ConfigurationError, match="'T'"):
            registry.lookup("T")
