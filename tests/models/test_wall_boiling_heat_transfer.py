"""Tests for the wall-boiling heat transfer composite."""

import copy

import numpy as np
import pytest

from closure_sim.interfaces import HeatTransferCoefficient, PhaseChangeSource
from closure_sim.mesh import TopoChangeMap
from closure_sim.models.heat_transfer import (
    CACHED_FIELDS,
    Gunn,
    Spherical,
    WallBoilingHeatTransfer,
    generate_heat_transfer_models,
    heat_transfer_models,
)
from closure_sim.phases import PhaseInterfaceKey
from closure_sim.utils.exceptions import ConfigurationError, StateError
from tests.conftest import WALL_BOILING_INTERFACE, make_fluid


def build(config, interface, register_object=False) -> WallBoilingHeatTransfer:
    return heat_transfer_models.new(config, interface, register_object)


class TestConstruction:
    def test_builds_composite_from_registry(self, wall_boiling_config, wall_boiling_interface):
        model = build(wall_boiling_config, wall_boiling_interface)
        assert isinstance(model, WallBoilingHeatTransfer)
        assert isinstance(model, HeatTransferCoefficient)
        assert isinstance(model, PhaseChangeSource)
        assert model.vapour.name == "gas"
        assert model.liquid.name == "liquid"
        assert [m.type_name for m in model.sub_models()] == [
            "Gunn",
            "Lavieville",
            "LemmertChawla",
            "TolubinskiKostanchuk",
            "KocamustafaogullariIshii",
        ]

    def test_underlying_model_sits_on_other_side(self, wall_boiling_config, wall_boiling_interface):
        model = build(wall_boiling_config, wall_boiling_interface)
        assert isinstance(model.heat_transfer_model, Gunn)
        assert model.heat_transfer_model.interface.name == "gas_dispersedIn_liquid_inThe_gas"

    def test_cached_fields_start_at_zero(self, wall_boiling_config, wall_boiling_interface):
        model = build(wall_boiling_config, wall_boiling_interface)
        assert len(CACHED_FIELDS) == 9
        for name in CACHED_FIELDS:
            values = model.field(name)
            assert values.shape == (4,)
            assert np.all(values == 0.0)

    def test_vapour_phase_outside_interface_is_rejected(self, wall_boiling_config):
        fluid = make_fluid(names=("solid", "liquid"))
        interface = fluid.interface("solid_dispersedIn_liquid_inThe_liquid")
        with pytest.raises(ConfigurationError) as exc_info:
            build(wall_boiling_config, interface)
        error = exc_info.value
        assert "'gas'" in error.message
        assert error.config_parameter == "vapourPhase"
        assert error.parameter_value == "gas"
        assert sorted(error.get_valid_options()) == ["liquid", "solid"]

    def test_unsided_interface_is_rejected(self, wall_boiling_config, fluid):
        with pytest.raises(ConfigurationError, match="sided"):
            build(wall_boiling_config, fluid.interface("gas_dispersedIn_liquid"))

    def test_unknown_sub_model_type_is_rejected(self, wall_boiling_config, wall_boiling_interface):
        wall_boiling_config["nucleationSiteModel"] = {"type": "Hibiki"}
        with pytest.raises(ConfigurationError) as exc_info:
            build(wall_boiling_config, wall_boiling_interface)
        assert "Hibiki" in exc_info.value.message
        assert "LemmertChawla" in exc_info.value.message

    def test_missing_sub_model_block_is_rejected(self, wall_boiling_config, wall_boiling_interface):
        del wall_boiling_config["departureFrequencyModel"]
        with pytest.raises(ConfigurationError) as exc_info:
            build(wall_boiling_config, wall_boiling_interface)
        assert exc_info.value.config_parameter == "departureFrequencyModel"

    @pytest.mark.parametrize("relax", [-0.1, 1.5])
    def test_relax_outside_unit_interval_is_rejected(
        self, relax, wall_boiling_config, wall_boiling_interface
    ):
        wall_boiling_config["relax"] = relax
        with pytest.raises(ConfigurationError, match="relax"):
            build(wall_boiling_config, wall_boiling_interface)

    def test_register_object_checks_model_into_mesh(
        self, wall_boiling_config, wall_boiling_interface
    ):
        model = build(wall_boiling_config, wall_boiling_interface, register_object=True)
        mesh = wall_boiling_interface.mesh
        assert mesh.lookup(f"wallBoiling.{WALL_BOILING_INTERFACE}") is model

    def test_validate_checks_nested_blocks(self, wall_boiling_config):
        assert heat_transfer_models.validate(wall_boiling_config) == "wallBoiling"
        wall_boiling_config["partitioningModel"] = {"type": "Lavieville", "alphaCrit": 2.0}
        with pytest.raises(ConfigurationError, match="alphaCrit"):
            heat_transfer_models.validate(wall_boiling_config)


class TestCoefficient:
    def test_repeated_calls_are_idempotent(self, wall_boiling_config, wall_boiling_interface):
        model = build(wall_boiling_config, wall_boiling_interface)
        first = np.array(model.K(1e-6))
        second = np.array(model.K(1e-6))
        np.testing.assert_array_equal(first, second)
        assert np.all(first > 0.0)
        assert np.all(np.isfinite(first))

    def test_result_is_read_only(self, wall_boiling_config, wall_boiling_interface):
        K = build(wall_boiling_config, wall_boiling_interface).K()
        with pytest.raises(ValueError):
            K[0] = 0.0

    def test_relax_one_returns_computed_value(self, wall_boiling_config):
        full = copy.deepcopy(wall_boiling_config)
        full["relax"] = 1.0
        half = copy.deepcopy(wall_boiling_config)
        half["relax"] = 0.5
        fluid = make_fluid()
        interface = fluid.interface(WALL_BOILING_INTERFACE)
        K_full = np.array(build(full, interface).K())
        K_half = np.array(build(half, interface).K())
        # previous value is zero at the start of the run
        np.testing.assert_allclose(K_half, 0.5 * K_full)

    def test_relax_zero_keeps_previous_value(self, wall_boiling_config, wall_boiling_interface):
        wall_boiling_config["relax"] = 0.0
        model = build(wall_boiling_config, wall_boiling_interface)
        np.testing.assert_array_equal(model.K(), np.zeros(4))
        wall_boiling_interface.mesh.time.increment()
        np.testing.assert_array_equal(model.K(), np.zeros(4))
        # sub-model outputs are still cached
        assert np.all(model.field("dDep") > 0.0)

    def test_relaxation_lags_by_one_time_step(self, wall_boiling_config, wall_boiling_interface):
        wall_boiling_config["relax"] = 1.0
        reference = np.array(build(copy.deepcopy(wall_boiling_config), wall_boiling_interface).K())

        wall_boiling_config["relax"] = 0.5
        model = build(wall_boiling_config, wall_boiling_interface)
        time = wall_boiling_interface.mesh.time
        np.testing.assert_allclose(model.K(), 0.5 * reference)
        time.increment()
        np.testing.assert_allclose(model.K(), 0.75 * reference)
        np.testing.assert_allclose(model.K(), 0.75 * reference)
        np.testing.assert_allclose(model.field("K0"), 0.5 * reference)

    def test_sub_models_run_in_dependency_order(
        self, wall_boiling_config, wall_boiling_interface
    ):
        wall_boiling_config["partitioningModel"] = {"type": "bubbleCoverage"}
        wall_boiling_config["nucleationSiteModel"] = {"type": "KocamustafaogullariIshii"}
        model = build(wall_boiling_config, wall_boiling_interface)
        calls = []

        def spy(sub_model, method):
            original = getattr(sub_model, method)

            def wrapper(state):
                calls.append(method)
                return original(state)

            setattr(sub_model, method, wrapper)

        spy(model.departure_diameter_model, "d_departure")
        spy(model.departure_frequency_model, "f_departure")
        spy(model.nucleation_site_model, "n_sites")
        spy(model.partitioning_model, "f_liquid")

        model.K()
        assert calls == ["d_departure", "f_departure", "n_sites", "f_liquid"]

    def test_caches_are_filled(self, wall_boiling_config, wall_boiling_interface):
        model = build(wall_boiling_config, wall_boiling_interface)
        model.K()
        fluid = wall_boiling_interface.fluid
        np.testing.assert_array_equal(model.field("Tsurface"), fluid.T_wall.values)
        assert np.all((model.field("wetFraction") > 0.0) & (model.field("wetFraction") <= 1.0))
        for name in ("fDep", "nucleationSiteDensity", "dmdtf", "qq"):
            assert np.all(model.field(name) > 0.0), name

    def test_unknown_cached_field(self, wall_boiling_config, wall_boiling_interface):
        with pytest.raises(ConfigurationError):
            build(wall_boiling_config, wall_boiling_interface).field("hQ")


class TestPhaseChange:
    def test_dmdtf_before_k_is_an_ordering_error(
        self, wall_boiling_config, wall_boiling_interface
    ):
        model = build(wall_boiling_config, wall_boiling_interface)
        with pytest.raises(StateError) as exc_info:
            model.dmdtf()
        assert exc_info.value.current_state == "never evaluated"

    def test_dmdtf_after_k(self, wall_boiling_config, wall_boiling_interface):
        model = build(wall_boiling_config, wall_boiling_interface)
        model.K()
        dmdtf = model.dmdtf()
        np.testing.assert_array_equal(dmdtf, model.field("dmdtf"))
        assert np.all(dmdtf > 0.0)

    def test_dmdtf_is_stale_in_next_time_step(
        self, wall_boiling_config, wall_boiling_interface
    ):
        model = build(wall_boiling_config, wall_boiling_interface)
        model.K()
        wall_boiling_interface.mesh.time.increment()
        with pytest.raises(StateError):
            model.dmdtf()

    def test_no_evaporation_without_superheat(self, wall_boiling_config):
        fluid = make_fluid(T_wall=360.0)
        model = build(wall_boiling_config, fluid.interface(WALL_BOILING_INTERFACE))
        model.K()
        np.testing.assert_array_equal(model.dmdtf(), np.zeros(4))

    def test_active_phase_interface(self, wall_boiling_config, wall_boiling_interface):
        model = build(wall_boiling_config, wall_boiling_interface)
        assert model.active_phase_interface(PhaseInterfaceKey("liquid", "gas"))
        assert model.active_phase_interface(PhaseInterfaceKey("gas", "liquid"))
        assert not model.active_phase_interface(PhaseInterfaceKey("liquid", "solid"))

    def test_flip_sign_follows_key_order(self, wall_boiling_config, wall_boiling_interface):
        # "gas" sorts before "liquid", so the vapour is phase1 of the key
        assert build(wall_boiling_config, wall_boiling_interface).flip_sign() is True

        fluid = make_fluid(names=("vapour", "liquid"))
        config = dict(wall_boiling_config, vapourPhase="vapour")
        model = build(config, fluid.interface("vapour_dispersedIn_liquid_inThe_liquid"))
        assert model.flip_sign() is False


class TestReconfiguration:
    def test_unchanged_block_reports_no_change(self, wall_boiling_config, wall_boiling_interface):
        model = build(wall_boiling_config, wall_boiling_interface)
        assert model.read_coeffs(wall_boiling_config) is False

    def test_sub_model_coefficient_change_is_live(
        self, wall_boiling_config, wall_boiling_interface
    ):
        model = build(wall_boiling_config, wall_boiling_interface)
        sub_model = model.departure_frequency_model
        wall_boiling_config["departureFrequencyModel"]["Cf"] = 2.0
        assert model.read_coeffs(wall_boiling_config) is True
        assert model.departure_frequency_model is sub_model
        assert sub_model.coeffs.Cf == 2.0

    @pytest.mark.parametrize(
        "key, value",
        [
            ("relax", 0.9),
            ("vapourPhase", "liquid"),
            ("partitioningModel", {"type": "phaseFraction"}),
            ("heatTransferModel", {"type": "spherical"}),
        ],
    )
    def test_structural_change_needs_reconstruction(
        self, key, value, wall_boiling_config, wall_boiling_interface
    ):
        model = build(wall_boiling_config, wall_boiling_interface)
        wall_boiling_config[key] = value
        with pytest.raises(ConfigurationError, match="reconstructed"):
            model.read_coeffs(wall_boiling_config)


class TestAdaptation:
    def test_registered_model_remaps_all_cached_fields(
        self, wall_boiling_config, wall_boiling_interface
    ):
        model = build(wall_boiling_config, wall_boiling_interface, register_object=True)
        K = np.array(model.K())
        mesh = wall_boiling_interface.mesh
        mesh.topo_change(TopoChangeMap(np.array([0, 1, 1, 2, 3, 3]), n_old_cells=4))
        for name in CACHED_FIELDS:
            assert model.field(name).shape == (6,), name
        np.testing.assert_array_equal(model.field("K"), K[[0, 1, 1, 2, 3, 3]])
        # phase fields follow as well, so K can be evaluated on the new mesh
        mesh.time.increment()
        assert model.K().shape == (6,)

    def test_unregistered_model_is_not_notified(self, wall_boiling_config, wall_boiling_interface):
        model = build(wall_boiling_config, wall_boiling_interface)
        mesh = wall_boiling_interface.mesh
        assert not mesh.found(model.name)


class TestGeneration:
    def test_one_model_per_interface_block(self, wall_boiling_config, fluid):
        models = generate_heat_transfer_models(
            fluid,
            {
                WALL_BOILING_INTERFACE: wall_boiling_config,
                "gas_dispersedIn_liquid_inThe_gas": {"type": "spherical"},
            },
        )
        assert isinstance(models[WALL_BOILING_INTERFACE], WallBoilingHeatTransfer)
        assert isinstance(models["gas_dispersedIn_liquid_inThe_gas"], Spherical)
        assert fluid.mesh.found(f"wallBoiling.{WALL_BOILING_INTERFACE}")

    def test_simple_models_give_positive_coefficients(self, fluid):
        interface = fluid.interface("gas_dispersedIn_liquid")
        for block in (
            {"type": "spherical"},
            {"type": "RanzMarshall"},
            {"type": "Gunn"},
            {"type": "constantNu", "Nu": 10.0},
        ):
            K = heat_transfer_models.new(block, interface, False).K()
            assert K.shape == (4,)
            assert np.all(K > 0.0)

    def test_spherical_equals_constant_nusselt_ten(self, fluid):
        interface = fluid.interface(WALL_BOILING_INTERFACE)
        spherical = heat_transfer_models.new({"type": "spherical"}, interface, False)
        constant = heat_transfer_models.new({"type": "constantNu", "Nu": 10.0}, interface, False)
        np.testing.assert_allclose(spherical.K(), constant.K())

    def test_simple_models_need_dispersed_interface(self, fluid):
        model = heat_transfer_models.new({"type": "RanzMarshall"}, fluid.interface("gas_liquid"), False)
        with pytest.raises(ConfigurationError, match="dispersed"):
            model.K()
