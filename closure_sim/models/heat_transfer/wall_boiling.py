"""
Wall-boiling heat transfer.

Heat transfer coefficient of a liquid in contact with a heated surface on
which vapour bubbles nucleate, grow and depart. The wall flux is split into

* evaporation, carried by departing bubbles (also the phase-change mass source)
* quenching, transient conduction into liquid refilling a departure site
* convection, from an underlying heat transfer model on the other side of the
  interface

and returned as a coefficient on the wall superheat over the liquid. The
coefficient is under-relaxed against the value it had at the start of the
time step, because it is lagged into the coupled energy equations.

Ordering contract: :meth:`WallBoilingHeatTransfer.dmdtf` returns the mass
transfer rate computed by the most recent :meth:`WallBoilingHeatTransfer.K`
call and raises :class:`StateError` until ``K`` has run in the current time
step.

Example case block::

    heatTransfer:
      gas_dispersedIn_liquid_inThe_liquid:
        type: wallBoiling
        vapourPhase: gas
        relax: 0.5
        heatTransferModel: {type: Gunn}
        partitioningModel: {type: Lavieville, alphaCrit: 0.2}
        nucleationSiteModel: {type: LemmertChawla}
        departureDiameterModel: {type: TolubinskiKostanchuk}
        departureFrequencyModel: {type: KocamustafaogullariIshii, Cf: 1.18}
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np

from ...config.loader import parse_coeffs
from ...config.model_configs import WallBoilingConfig
from ...constants import (
    BUBBLE_INFLUENCE_FACTOR,
    DEFAULT_RESIDUAL_ALPHA,
    MIN_WALL_SUPERHEAT,
    WAITING_TIME_FRACTION,
)
from ...logging import ComponentType, get_component_logger
from ...mesh.fields import VolField
from ...phases.interface import PhaseInterface, PhaseInterfaceKey, SidedPhaseInterface
from ...utils.exceptions import ConfigurationError, StateError
from ..wall_boiling import (
    BoilingState,
    DepartureDiameterModel,
    DepartureFrequencyModel,
    NucleationSiteModel,
    PartitioningModel,
    departure_diameter_models,
    departure_frequency_models,
    nucleation_site_models,
    partitioning_models,
)
from .base import HeatTransferModel, heat_transfer_models

__all__ = ["WallBoilingHeatTransfer", "CACHED_FIELDS"]

logger = get_component_logger("wall_boiling", ComponentType.MODEL)

CACHED_FIELDS = (
    "wetFraction",
    "dDep",
    "fDep",
    "nucleationSiteDensity",
    "dmdtf",
    "qq",
    "Tsurface",
    "K",
    "K0",
)

SUB_MODEL_KEYS = (
    "heatTransferModel",
    "partitioningModel",
    "nucleationSiteModel",
    "departureDiameterModel",
    "departureFrequencyModel",
)


@heat_transfer_models.register("wallBoiling")
class WallBoilingHeatTransfer(HeatTransferModel):
    """Wall-boiling composite of an underlying model and four boiling sub-models."""

    config_model = WallBoilingConfig
    nested_families = {key: key for key in SUB_MODEL_KEYS}

    def __init__(self, config: Any, interface: PhaseInterface, register_object: bool):
        super().__init__(config, interface, register_object)
        self._coeffs = parse_coeffs(WallBoilingConfig, config, owner=self.describe())
        coeffs: WallBoilingConfig = self._coeffs

        if not interface.contains(coeffs.vapourPhase):
            raise ConfigurationError(
                f"Vapour phase '{coeffs.vapourPhase}' is not part of interface "
                f"{interface.name} (phases: {interface.phase1.name}, {interface.phase2.name})",
                config_parameter="vapourPhase",
                parameter_value=coeffs.vapourPhase,
                valid_options={p.name: "" for p in interface.phases()},
            )
        if not isinstance(interface, SidedPhaseInterface):
            raise ConfigurationError(
                f"{self.describe()} needs a sided interface "
                f"('a_dispersedIn_b_inThe_c'), got '{interface.name}'",
                config_parameter="interface",
                parameter_value=interface.name,
            )
        self.liquid = interface.other_phase(coeffs.vapourPhase)
        self.vapour = interface.other_phase(self.liquid)

        self.heat_transfer_model: HeatTransferModel = heat_transfer_models.new(
            coeffs.heatTransferModel, interface.other_side(), False
        )
        self.partitioning_model: PartitioningModel = partitioning_models.new(
            coeffs.partitioningModel
        )
        self.nucleation_site_model: NucleationSiteModel = nucleation_site_models.new(
            coeffs.nucleationSiteModel
        )
        self.departure_diameter_model: DepartureDiameterModel = (
            departure_diameter_models.new(coeffs.departureDiameterModel)
        )
        self.departure_frequency_model: DepartureFrequencyModel = (
            departure_frequency_models.new(coeffs.departureFrequencyModel)
        )

        mesh = interface.mesh
        self._fields: Dict[str, VolField] = {
            name: VolField(f"{name}.{interface.name}", mesh, 0.0) for name in CACHED_FIELDS
        }
        self._evaluated_index: Optional[int] = None
        self._snapshot_index: Optional[int] = None

        if register_object:
            mesh.check_in(self, self.name)
        logger.info(
            "Constructed %s: vapour %s, liquid %s, relax %s",
            self.name,
            self.vapour.name,
            self.liquid.name,
            coeffs.relax,
        )

    # Sub-model access

    def sub_models(self) -> Tuple[Any, ...]:
        return (
            self.heat_transfer_model,
            self.partitioning_model,
            self.nucleation_site_model,
            self.departure_diameter_model,
            self.departure_frequency_model,
        )

    def field(self, name: str) -> np.ndarray:
        """Read-only view of one of the cached fields."""
        try:
            return self._fields[name].read_only()
        except KeyError:
            raise ConfigurationError(
                f"{self.describe()} has no cached field '{name}'",
                config_parameter="field",
                parameter_value=name,
                valid_options={key: "" for key in CACHED_FIELDS},
            ) from None

    # Evaluation

    def _boiling_state(self) -> BoilingState:
        fluid = self.interface.fluid
        liquid = self.liquid
        return BoilingState(
            alpha_l=liquid.alpha.values,
            T_l=liquid.T.values,
            T_sat=fluid.T_sat.values,
            T_w=fluid.T_wall.values,
            rho_l=liquid.rho.values,
            rho_v=self.vapour.rho.values,
            kappa_l=liquid.kappa.values,
            Cp_l=liquid.Cp.values,
            L=fluid.L,
            sigma=fluid.sigma,
            g=fluid.g,
        )

    def K(self, residual_alpha: float = DEFAULT_RESIDUAL_ALPHA) -> np.ndarray:
        """Relaxed wall-boiling heat transfer coefficient.

        Sub-models run in dependency order: departure diameter, departure
        frequency, nucleation site density, then partitioning, which may
        consume all three. Repeated calls within a time step relax against the
        same start-of-step value, so they return identical results while the
        inputs are unchanged.
        """
        time_index = self.interface.mesh.time.time_index
        fields = self._fields
        if self._snapshot_index != time_index:
            fields["K0"].assign(fields["K"].values.copy())
            self._snapshot_index = time_index

        state = self._boiling_state()
        d_dep = self.departure_diameter_model.d_departure(state)
        state = state.with_values(d_departure=d_dep)
        f_dep = self.departure_frequency_model.f_departure(state)
        state = state.with_values(f_departure=f_dep)
        n_sites = self.nucleation_site_model.n_sites(state)
        state = state.with_values(n_sites=n_sites)
        f_liquid = self.partitioning_model.f_liquid(state)

        area_density = self.interface.fluid.wall_area_density.values

        # Fraction of the wall under the influence of departing bubbles
        A2 = np.minimum(0.25 * np.pi * d_dep**2 * n_sites * BUBBLE_INFLUENCE_FACTOR, 1.0)

        dmdtf = f_liquid * (np.pi / 6.0) * d_dep**3 * state.rho_v * f_dep * n_sites * area_density
        q_evaporation = dmdtf * state.L

        diffusivity = state.kappa_l / (state.rho_l * state.Cp_l)
        t_delay = WAITING_TIME_FRACTION / f_dep
        h_quench = 2.0 * state.kappa_l * f_dep * np.sqrt(t_delay / (np.pi * diffusivity))

        superheat = np.maximum(state.T_w - state.T_l, MIN_WALL_SUPERHEAT)
        q_quench = f_liquid * A2 * h_quench * superheat * area_density

        K_convection = self.heat_transfer_model.K(residual_alpha)
        q_convection = K_convection * superheat * (1.0 - f_liquid * A2)

        K_computed = (q_convection + q_quench + q_evaporation) / superheat

        relax = self.coeffs.relax
        K = relax * K_computed + (1.0 - relax) * fields["K0"].values

        fields["dDep"].assign(d_dep)
        fields["fDep"].assign(f_dep)
        fields["nucleationSiteDensity"].assign(n_sites)
        fields["wetFraction"].assign(f_liquid)
        fields["dmdtf"].assign(dmdtf)
        fields["qq"].assign(q_quench)
        fields["Tsurface"].assign(state.T_w)
        fields["K"].assign(K)
        self._evaluated_index = time_index
        return fields["K"].read_only()

    # Phase change

    def dmdtf(self) -> np.ndarray:
        """Evaporation mass transfer rate [kg/m^3/s] from the last ``K`` call.

        Raises:
            StateError: If ``K`` has not run in the current time step
        """
        time_index = self.interface.mesh.time.time_index
        if self._evaluated_index != time_index:
            raise StateError(
                f"{self.name}: dmdtf() requested before K() in time step {time_index}",
                current_state=(
                    "never evaluated"
                    if self._evaluated_index is None
                    else f"evaluated in time step {self._evaluated_index}"
                ),
                expected_state=f"K() evaluated in time step {time_index}",
                component_name=self.name,
            )
        return self._fields["dmdtf"].read_only()

    def active_phase_interface(self, key: PhaseInterfaceKey) -> bool:
        return key == PhaseInterfaceKey(self.liquid, self.vapour)

    def flip_sign(self) -> bool:
        return self.vapour.name == PhaseInterfaceKey(self.liquid, self.vapour).phase1

    # Reconfiguration

    def read_coeffs(self, config: Any) -> bool:
        """Re-read the sub-model coefficients.

        Raises:
            ConfigurationError: If the new block changes the vapour phase, the
                relaxation factor or the type of any sub-model
        """
        coeffs = parse_coeffs(WallBoilingConfig, config, owner=self.describe())
        current: WallBoilingConfig = self.coeffs
        for key in ("vapourPhase", "relax"):
            if getattr(coeffs, key) != getattr(current, key):
                raise ConfigurationError(
                    f"{self.name}: changing '{key}' from {getattr(current, key)!r} to "
                    f"{getattr(coeffs, key)!r} needs the model to be reconstructed",
                    config_parameter=key,
                    parameter_value=getattr(coeffs, key),
                )
        for key, model in zip(SUB_MODEL_KEYS, self.sub_models()):
            block = getattr(coeffs, key)
            if block.get("type") != model.type_name:
                raise ConfigurationError(
                    f"{self.name}: changing {key} type from '{model.type_name}' to "
                    f"'{block.get('type')}' needs the model to be reconstructed",
                    config_parameter=f"{key}.type",
                    parameter_value=block.get("type"),
                )

        changed = False
        for key, model in zip(SUB_MODEL_KEYS, self.sub_models()):
            changed = model.read_coeffs(getattr(coeffs, key)) or changed
        self._coeffs = coeffs
        if changed:
            logger.info("%s: sub-model coefficients changed", self.name)
        return changed

    # Mesh adaptation

    def topo_change(self, map: Any) -> None:
        for field in self._fields.values():
            field.topo_change(map)

    def map_mesh(self, map: Any) -> None:
        for field in self._fields.values():
            field.map_mesh(map)

    def distribute(self, map: Any) -> None:
        for field in self._fields.values():
            field.distribute(map)
