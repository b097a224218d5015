"""
Models for the 12CP savings simulator.
"""

from enum import Enum
from pydantic import BaseModel


class StrategyType(str, Enum):
    """Peak avoidance strategy tiers."""
    FULL = "full"
    PARTIAL = "partial"
    NONE = "none"


class StrategyPolicy(BaseModel):
    """Fixed policy behind a strategy tier."""
    hours_avoided: int
    transmission_reduction: float  # fraction of transmission cost avoided


class BaselineCost(BaseModel):
    """Annual cost when peaks are not avoided."""
    energy_cost: float
    transmission_cost: float
    total_cost: float


class StrategyCost(BaseModel):
    """Annual cost under the selected strategy."""
    energy_cost: float
    transmission_cost: float
    total_cost: float
    hours_avoided: int


class SavingsBreakdown(BaseModel):
    """Savings of the selected strategy against the baseline."""
    amount: float
    percentage: float
    energy_savings: float
    transmission_savings: float


class SavingsSimulatorResult(BaseModel):
    """Model for savings simulation response."""
    without_strategy: BaselineCost
    with_strategy: StrategyCost
    savings: SavingsBreakdown
