"""Tests for the four wall-boiling sub-model families."""

import numpy as np
import pytest
from hypothesis import given, settings

from closure_sim.models.wall_boiling import (
    BoilingState,
    departure_diameter_models,
    departure_frequency_models,
    nucleation_site_models,
    partitioning_models,
)
from closure_sim.utils.exceptions import ConfigurationError, StateError
from tests.strategies import boiling_state_strategy


def make_state(**overrides) -> BoilingState:
    n = 3
    values = dict(
        alpha_l=np.array([0.05, 0.2, 0.9]),
        T_l=np.full(n, 360.0),
        T_sat=np.full(n, 373.15),
        T_w=np.array([370.0, 378.15, 393.15]),
        rho_l=np.full(n, 958.0),
        rho_v=np.full(n, 0.6),
        kappa_l=np.full(n, 0.68),
        Cp_l=np.full(n, 4216.0),
        L=2.257e6,
        sigma=0.059,
        g=9.81,
    )
    values.update(overrides)
    return BoilingState(**values)


class TestBoilingState:
    def test_missing_bubble_quantity_raises(self):
        with pytest.raises(StateError, match="d_departure"):
            make_state().require("d_departure")

    def test_with_values_returns_new_state(self):
        state = make_state()
        filled = state.with_values(d_departure=np.ones(3))
        assert state.d_departure is None
        np.testing.assert_array_equal(filled.require("d_departure"), np.ones(3))


class TestPartitioning:
    @pytest.mark.parametrize("tag", ["phaseFraction", "Lavieville", "linear", "cosine"])
    @settings(max_examples=25, deadline=None)
    @given(state=boiling_state_strategy())
    def test_wetted_fraction_is_bounded(self, tag, state):
        f = partitioning_models.new({"type": tag}).f_liquid(state)
        assert f.shape == state.alpha_l.shape
        assert np.all((f >= 0.0) & (f <= 1.0))

    def test_phase_fraction_is_liquid_fraction(self):
        state = make_state()
        f = partitioning_models.new({"type": "phaseFraction"}).f_liquid(state)
        np.testing.assert_array_equal(f, state.alpha_l)

    def test_lavieville_is_continuous_at_alpha_crit(self):
        model = partitioning_models.new({"type": "Lavieville", "alphaCrit": 0.2})
        f = model.f_liquid(make_state(alpha_l=np.array([0.2 - 1e-12, 0.2, 1.0])))
        assert f[0] == pytest.approx(0.5, abs=1e-9)
        assert f[1] == pytest.approx(0.5)
        assert f[2] == pytest.approx(1.0 - 0.5 * np.exp(-16.0))

    def test_linear_ramp(self):
        model = partitioning_models.new(
            {"type": "linear", "alphaLiquid0": 0.1, "alphaLiquid1": 0.3}
        )
        f = model.f_liquid(make_state(alpha_l=np.array([0.0, 0.2, 0.5])))
        np.testing.assert_allclose(f, [0.0, 0.5, 1.0])

    def test_cosine_ramp_midpoint(self):
        model = partitioning_models.new(
            {"type": "cosine", "alphaLiquid0": 0.1, "alphaLiquid1": 0.3}
        )
        f = model.f_liquid(make_state(alpha_l=np.array([0.0, 0.2, 0.5])))
        np.testing.assert_allclose(f, [0.0, 0.5, 1.0], atol=1e-12)

    def test_inverted_transition_is_rejected(self):
        with pytest.raises(ConfigurationError) as exc_info:
            partitioning_models.new(
                {"type": "linear", "alphaLiquid0": 0.3, "alphaLiquid1": 0.1}
            )
        assert exc_info.value.validation_errors

    def test_bubble_coverage_needs_bubble_geometry(self):
        model = partitioning_models.new({"type": "bubbleCoverage"})
        with pytest.raises(StateError):
            model.f_liquid(make_state())

    def test_bubble_coverage_is_capped(self):
        model = partitioning_models.new({"type": "bubbleCoverage", "maxCoverage": 0.5})
        state = make_state(
            alpha_l=np.ones(3),
            d_departure=np.full(3, 1e-3),
            n_sites=np.array([0.0, 1e5, 1e9]),
        )
        f = model.f_liquid(state)
        assert f[0] == pytest.approx(1.0)
        assert f[1] == pytest.approx(1.0 - 0.25 * np.pi * 1e-6 * 1e5)
        assert f[2] == pytest.approx(0.5)


class TestNucleationSites:
    def test_lemmert_chawla_zero_without_superheat(self):
        n = nucleation_site_models.new({"type": "LemmertChawla"}).n_sites(make_state())
        assert n[0] == 0.0
        assert n[1] == pytest.approx(9.922e5 * 0.5**1.805)
        assert n[2] > n[1]

    def test_lemmert_chawla_scales_with_cn(self):
        state = make_state()
        base = nucleation_site_models.new({"type": "LemmertChawla"}).n_sites(state)
        scaled = nucleation_site_models.new({"type": "LemmertChawla", "Cn": 2.0}).n_sites(state)
        np.testing.assert_allclose(scaled, 2.0 * base)

    def test_kocamustafaogullari_ishii_needs_departure_diameter(self):
        model = nucleation_site_models.new({"type": "KocamustafaogullariIshii"})
        with pytest.raises(StateError):
            model.n_sites(make_state())

    def test_kocamustafaogullari_ishii_grows_with_superheat(self):
        model = nucleation_site_models.new({"type": "KocamustafaogullariIshii"})
        n = model.n_sites(make_state(d_departure=np.full(3, 5e-4)))
        assert n[0] == 0.0
        assert 0.0 < n[1] < n[2]
        assert np.all(np.isfinite(n))


class TestDepartureDiameter:
    def test_tolubinski_kostanchuk_is_clipped(self):
        model = departure_diameter_models.new(
            {"type": "TolubinskiKostanchuk", "dRef": 6e-4, "dMax": 1.4e-3, "dMin": 1e-4}
        )
        d = model.d_departure(make_state(T_l=np.array([373.15, 283.15, 473.15])))
        assert d[0] == pytest.approx(6e-4)
        assert d[1] == pytest.approx(1e-4)
        assert d[2] == pytest.approx(1.4e-3)

    def test_bounds_must_be_ordered(self):
        with pytest.raises(ConfigurationError):
            departure_diameter_models.new(
                {"type": "TolubinskiKostanchuk", "dMin": 1e-2, "dMax": 1e-3}
            )

    def test_kocamustafaogullari_ishii_is_uniform_for_uniform_properties(self):
        d = departure_diameter_models.new({"type": "KocamustafaogullariIshii"}).d_departure(
            make_state()
        )
        assert np.all(d > 0.0)
        assert np.ptp(d) == 0.0


class TestDepartureFrequency:
    @pytest.mark.parametrize("tag", ["Cole", "KocamustafaogullariIshii"])
    def test_larger_bubbles_depart_less_often(self, tag):
        model = departure_frequency_models.new({"type": tag})
        f = model.f_departure(make_state(d_departure=np.array([1e-4, 1e-3, 1e-2])))
        assert np.all(f > 0.0)
        assert f[0] > f[1] > f[2]

    def test_kocamustafaogullari_ishii_is_proportional_to_cf(self):
        state = make_state(d_departure=np.full(3, 1e-3))
        f1 = departure_frequency_models.new({"type": "KocamustafaogullariIshii", "Cf": 1.0})
        f2 = departure_frequency_models.new({"type": "KocamustafaogullariIshii", "Cf": 2.0})
        np.testing.assert_allclose(f2.f_departure(state), 2.0 * f1.f_departure(state))

    def test_frequency_needs_diameter(self):
        with pytest.raises(StateError):
            departure_frequency_models.new({"type": "Cole"}).f_departure(make_state())
