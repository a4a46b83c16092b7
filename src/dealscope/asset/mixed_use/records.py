# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Canonical mixed-use records: components, shared building systems,
management structure and the development envelope.
"""

from __future__ import annotations

from typing import Dict, List, Literal, Optional

from pydantic import Field

from ...core.primitives import ComponentTypeEnum, Model


class MixedUseComponent(Model):
    """
    One use within a mixed-use property.

    ``rent_psf`` is monthly rent per square foot; revenue is
    ``rent_psf * occupied SF * 12``. When it is absent revenue is estimated
    from NOI at a 60% margin.
    """

    type: ComponentTypeEnum = ComponentTypeEnum.OFFICE
    square_footage: float = 10_000.0
    floors: List[int] = Field(default_factory=lambda: [1])
    separate_entrance: bool = False
    dedicated_elevators: bool = False
    percent_of_total: float = 25.0

    noi: float = 100_000.0
    cap_rate: float = 6.0
    rent_psf: Optional[float] = 30.0
    occupancy: float = 90.0

    separate_management: bool = False
    pro_rata_expenses: float = 50_000.0
    direct_expenses: float = 20_000.0

    @property
    def label(self) -> str:
        return self.type.value

    @property
    def estimated_revenue(self) -> float:
        """Annual revenue at current occupancy."""
        if self.rent_psf:
            return self.rent_psf * self.square_footage * self.occupancy / 100 * 12
        return self.noi / 0.6

    @property
    def potential_revenue(self) -> float:
        """Annual revenue with every square foot leased."""
        if self.rent_psf:
            return self.rent_psf * self.square_footage * 12
        return self.noi / 0.6


class HvacPlant(Model):
    type: Literal["Central", "Separate", "Hybrid"] = "Central"
    allocation: Dict[str, float] = Field(default_factory=dict)
    redundancy: bool = False


class ElevatorPlan(Model):
    total: int = 4
    dedicated: Dict[str, int] = Field(default_factory=dict)
    shared: int = 0


class ParkingPlan(Model):
    total_spaces: int = 0
    allocation: Dict[str, float] = Field(default_factory=dict)
    validation_system: bool = False
    separate_levels: bool = False


class UtilityPlan(Model):
    master_metered: bool = False
    sub_metering: Dict[str, bool] = Field(default_factory=dict)
    allocation: Literal["Actual", "ProRata", "Fixed"] = "ProRata"


class SecurityPlan(Model):
    integrated: bool = False
    separate_access: Dict[str, bool] = Field(default_factory=dict)
    shared_lobby: bool = False
    after_hours_protocol: str = "Card access"


class SharedSystems(Model):
    """Building infrastructure shared between components."""

    hvac: HvacPlant = Field(default_factory=HvacPlant)
    elevators: ElevatorPlan = Field(default_factory=ElevatorPlan)
    parking: ParkingPlan = Field(default_factory=ParkingPlan)
    utilities: UtilityPlan = Field(default_factory=UtilityPlan)
    security: SecurityPlan = Field(default_factory=SecurityPlan)


class SharedAmenity(Model):
    name: str
    location: str = "Podium"
    accessible_to: List[str] = Field(default_factory=list)
    operating_hours: str = "24/7"
    cost: float = 0.0


class ManagementProfile(Model):
    structure: Literal["Integrated", "Separate", "Hybrid"] = "Integrated"
    property_manager: str = "Third Party"
    component_managers: Dict[str, str] = Field(default_factory=dict)
    staff_count: int = 10
    shared_staff: bool = True


class AllocatedExpense(Model):
    """An operating expense line and how it is spread across components."""

    category: str
    amount: float
    allocation: Literal["Direct", "ProRata", "Usage"] = "ProRata"
    direct_assignment: Dict[str, float] = Field(default_factory=dict)


class DevelopmentState(Model):
    """Existing improvements. ``land_area`` is in acres."""

    components: List[MixedUseComponent] = Field(default_factory=list)
    total_sf: float
    land_area: float
    far: float = 0.0
    height: float = 0.0
    parking_spaces: int = 0


class ZoningEnvelope(Model):
    max_far: float
    max_height: float = 0.0
    allowed_uses: List[str] = Field(default_factory=list)
    bonus_far: Optional[float] = None
    parking_requirements: Dict[str, float] = Field(default_factory=dict)


class UseDemand(Model):
    """Market demand for one use; ``achievable_rent`` is annual rent per SF."""

    component_type: str
    demand_level: Literal["High", "Medium", "Low"] = "Medium"
    achievable_rent: float
    absorption_months: float = 12


__all__ = [
    "AllocatedExpense",
    "DevelopmentState",
    "ElevatorPlan",
    "HvacPlant",
    "ManagementProfile",
    "MixedUseComponent",
    "ParkingPlan",
    "SecurityPlan",
    "SharedAmenity",
    "SharedSystems",
    "UseDemand",
    "UtilityPlan",
    "ZoningEnvelope",
]
