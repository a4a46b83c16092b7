# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Unit tests for the industrial scoring engine.
"""

import pytest

from dealscope.adapters import adapt_industrial_tenants
from dealscope.asset.industrial import (
    IndustrialBuildingSpecs,
    LocationMetrics,
    analyze_building_functionality,
    analyze_cold_storage,
    analyze_last_mile_facility,
    analyze_location_logistics,
)
from dealscope.asset.industrial.analysis import (
    calculate_column_efficiency,
    classify_building,
    get_type_requirements,
    truck_court_multiplier,
)
from dealscope.asset.industrial.records import ColdStorageSpecs, DeliveryProfile


@pytest.fixture
def modern_specs():
    return IndustrialBuildingSpecs(total_sf=200_000, clear_height=36, dock_doors=40, power_capacity_kw=800)


@pytest.fixture
def older_specs():
    return IndustrialBuildingSpecs(
        total_sf=100_000,
        clear_height=20,
        dock_doors=5,
        power_capacity_kw=100,
        column_spacing="40x40",
        truck_court_depth=100,
        lighting_type="Metal Halide",
        fire_suppression_type="Wet",
    )


class TestBuildingFunctionality:
    def test_modern_bulk_warehouse(self, modern_specs):
        result = analyze_building_functionality(modern_specs, [])
        score = result.functional_score
        assert (score.clear_height, score.loading, score.power, score.layout) == (100, 100, 100, 100)
        assert score.special_features == 80
        assert score.overall == pytest.approx(98.0)
        positioning = result.market_positioning
        assert positioning.classification == "Class A"
        assert "Abundant loading" in positioning.competitive_advantages
        assert positioning.functional_obsolescence == []
        assert positioning.modernization_needs == []

    def test_obsolete_building(self, older_specs):
        result = analyze_building_functionality(older_specs, [])
        assert result.functional_score.overall == pytest.approx(41.6, abs=0.1)
        positioning = result.market_positioning
        assert positioning.classification == "Class C"
        assert [need.impact for need in positioning.modernization_needs] == ["Critical", "High", "High", "Medium"]
        assert positioning.modernization_needs[1].item == "Add 5 dock doors"
        assert "Shallow truck courts" in positioning.functional_obsolescence
        assert "Tight column spacing" in positioning.functional_obsolescence

    def test_tenant_suitability_gaps(self, older_specs, now):
        tenants = adapt_industrial_tenants([{"name": "Rapid Freight"}], now)
        (fit,) = analyze_building_functionality(older_specs, tenants).tenant_suitability
        assert fit.requirements_met == 60.0
        assert fit.critical_gaps is True
        assert "Insufficient power capacity" in fit.gaps

    def test_efficiency(self, modern_specs):
        efficiency = analyze_building_functionality(modern_specs, []).efficiency
        assert efficiency.cubic_footage == 7_200_000
        assert efficiency.dock_door_ratio == 2.0
        assert efficiency.column_efficiency == pytest.approx(99.9, abs=0.06)


class TestHelpers:
    @pytest.mark.parametrize("depth, expected", [(135, 1.0), (125, 0.9), (115, 0.7), (90, 0.5)])
    def test_truck_court_multiplier(self, depth, expected):
        assert truck_court_multiplier(depth) == expected

    @pytest.mark.parametrize(
        "overall, clear, label",
        [(90, 36, "Class A"), (90, 28, "Class B"), (72, 24, "Class B"), (60, 36, "Class C")],
    )
    def test_classify_building(self, overall, clear, label):
        assert classify_building(overall, clear) == label

    def test_unknown_type_uses_warehouse_profile(self):
        assert get_type_requirements("Hangar") == get_type_requirements("Warehouse")

    def test_column_efficiency_degenerate(self):
        assert calculate_column_efficiency(0, 60, 100_000) == 0.0


class TestLocationLogistics:
    def test_prime_distribution_location(self):
        location = LocationMetrics(
            distance_to_highway=0.8,
            distance_to_port=20,
            distance_to_rail=0.5,
            population_one_hour=1_500_000,
            average_hourly_wage=16,
            unemployment_rate=5.5,
            vacancy_rate=2.5,
            under_construction=500_000,
        )
        result = analyze_location_logistics(location, "Warehouse", [])
        assert result.location_score.transportation == 100.0
        assert result.location_score.labor == 95.0
        assert result.location_score.market == 95.0
        assert result.location_score.overall == pytest.approx(97.0)
        assert result.labor_analysis.availability == "Abundant"
        assert result.labor_analysis.cost_competitiveness == 90
        assert result.market_dynamics.supply_demand_balance == "Undersupplied"
        assert result.market_dynamics.occupancy_outlook == "Strengthening"
        assert result.strategic_value.port_proximity == 60.0

    def test_oversupplied_market(self):
        result = analyze_location_logistics(LocationMetrics(distance_to_highway=6), "Warehouse", [])
        assert result.location_score.transportation == 40.0
        assert result.location_score.labor == 60.0
        assert result.location_score.market == 35.0
        assert result.market_dynamics.supply_demand_balance == "Oversupplied"
        assert result.market_dynamics.competitive_threats == ["10.0% new supply coming"]
        assert "Above-average wage pressure" in result.labor_analysis.risks

    def test_skill_match_follows_tenant_industry(self, now):
        tenants = adapt_industrial_tenants([{"industry": "Manufacturing"}], now)
        result = analyze_location_logistics(LocationMetrics(distance_to_highway=2), "Manufacturing", tenants)
        assert result.labor_analysis.skill_match[0] == "Machine operators"


class TestColdStorage:
    def test_zone_mix_and_energy(self, now):
        cold = ColdStorageSpecs(
            cooler_sf=20_000, freezer_sf=30_000, refrigeration_system="Ammonia IoT", redundancy="N+1"
        )
        tenants = adapt_industrial_tenants([{"name": "Polar Foods", "temperatureControl": "Freezer"}], now)
        result = analyze_cold_storage(cold, 100_000, tenants, energy_cost_per_kwh=0.1)
        mix = result.operational_metrics.temperature_zone_mix
        assert (mix.ambient, mix.cooler, mix.freezer) == (50.0, 20.0, 30.0)
        assert result.operational_metrics.energy_intensity == 31.0
        assert result.operational_metrics.estimated_energy_cost == 310_000
        assert result.refrigeration_analysis.system_redundancy == "N+1"
        assert result.refrigeration_analysis.temperature_monitoring == "IoT-Enabled"
        assert "Ammonia detection" in result.refrigeration_analysis.alarm_systems
        (requirement,) = result.tenant_requirements
        assert requirement.temp_provided is True
        assert requirement.capacity_available == 30_000
        assert result.market_position.market_demand_level == "Medium"
        assert [item.component for item in result.replacement_schedule] == [
            "Condensers",
            "Evaporators",
            "Controls",
        ]

    def test_no_cold_storage(self):
        assert analyze_cold_storage(None, 100_000, [], 0.1) is None


class TestLastMile:
    def test_infill_facility(self):
        specs = IndustrialBuildingSpecs(
            total_sf=80_000,
            clear_height=28,
            dock_doors=18,
            drive_in_doors=2,
            truck_court_depth=120,
            power_capacity_kw=2_000,
        )
        location = LocationMetrics(distance_to_highway=1, population_one_hour=2_500_000, vacancy_rate=2.5)
        delivery = DeliveryProfile(
            daily_deliveries=3_000, peak_hour_deliveries=40, average_delivery_radius=20, vans=20
        )
        result = analyze_last_mile_facility(specs, location, delivery)
        assert result.last_mile_score == 100.0
        assert result.operational_efficiency.throughput_capacity == 3_000
        assert result.operational_efficiency.dock_utilization == 55.6
        assert result.operational_efficiency.parking_adequacy == "Sufficient"
        assert result.delivery_metrics.avg_delivery_time == 50.0
        assert result.facility_optimization.cross_dock_potential is False
        assert result.facility_optimization.automation_readiness == 85.0
        assert result.competitive_position.major_carrier_competitive is True
        assert result.competitive_position.unique_advantages == [
            "Highway adjacent",
            "Drive-in capability",
            "Major metro location",
        ]
