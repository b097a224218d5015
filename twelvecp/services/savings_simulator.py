"""
12CP savings simulator.

Compares a facility's annual energy and transmission cost with and without a
peak avoidance strategy, using the price levels of a completed analysis.

Energy cost accrues only over operating hours. Transmission cost is billed on
connected capacity for every hour of the year, so it uses the full-year hour
count regardless of operating hours.
"""

from typing import Dict, Union

from ..config import app_config
from ..models import (
    BaselineCost,
    SavingsBreakdown,
    SavingsSimulatorResult,
    StrategyCost,
    StrategyPolicy,
    StrategyType,
    TwelveCPSavingsData
)
from ..utils.rounding import round_currency, round_half_up

TRANSMISSION_ADDER = app_config.analytics.transmission_adder  # $/MW per hour
HOURS_PER_YEAR = app_config.analytics.hours_per_year

STRATEGY_POLICIES: Dict[StrategyType, StrategyPolicy] = {
    StrategyType.FULL: StrategyPolicy(hours_avoided=12, transmission_reduction=1.0),
    StrategyType.PARTIAL: StrategyPolicy(hours_avoided=6, transmission_reduction=0.5),
    StrategyType.NONE: StrategyPolicy(hours_avoided=0, transmission_reduction=0.0),
}


def simulate_savings(
    savings_data: TwelveCPSavingsData,
    facility_mw: float,
    annual_operating_hours: float,
    strategy: Union[StrategyType, str],
    transmission_adder: float = TRANSMISSION_ADDER,
    hours_per_year: int = HOURS_PER_YEAR
) -> SavingsSimulatorResult:
    """
    Simulate annual costs for a facility under a strategy tier.

    Monetary figures are rounded to whole dollars; the savings percentage keeps
    two decimals. Rounded parts are not forced to add up to rounded totals.
    """
    policy = STRATEGY_POLICIES[StrategyType(strategy)]

    avg_price = savings_data.annual_avg_price
    peak_price = savings_data.annual_peak_price

    without_energy_cost = facility_mw * annual_operating_hours * avg_price
    without_transmission_cost = facility_mw * transmission_adder * hours_per_year

    energy_saved_per_hour = facility_mw * (peak_price - avg_price)
    energy_savings = energy_saved_per_hour * policy.hours_avoided
    transmission_savings = without_transmission_cost * policy.transmission_reduction

    with_energy_cost = without_energy_cost - energy_savings
    with_transmission_cost = without_transmission_cost - transmission_savings

    total_base_cost = without_energy_cost + without_transmission_cost
    amount = energy_savings + transmission_savings
    percentage = round_half_up(amount / total_base_cost * 100, 2) if total_base_cost > 0 else 0.0

    return SavingsSimulatorResult(
        without_strategy=BaselineCost(
            energy_cost=round_currency(without_energy_cost),
            transmission_cost=round_currency(without_transmission_cost),
            total_cost=round_currency(total_base_cost)
        ),
        with_strategy=StrategyCost(
            energy_cost=round_currency(with_energy_cost),
            transmission_cost=round_currency(with_transmission_cost),
            total_cost=round_currency(with_energy_cost + with_transmission_cost),
            hours_avoided=policy.hours_avoided
        ),
        savings=SavingsBreakdown(
            amount=round_currency(amount),
            percentage=percentage,
            energy_savings=round_currency(energy_savings),
            transmission_savings=round_currency(transmission_savings)
        )
    )
