"""Coverage analysis models."""

from enum import Enum
from typing import Dict, List
from pydantic import BaseModel, ConfigDict, Field


class EraBucket(str, Enum):
    """Historical era buckets."""
    ANCIENT = "ancient"    # year <= 500
    MEDIEVAL = "medieval"  # 501-1499
    MODERN = "modern"      # >= 1500


class YearCandidateSource(str, Enum):
    """Why a year was proposed for generation."""
    MISSING = "missing"
    INSUFFICIENT = "insufficient"
    HIGH_DEMAND = "high_demand"


class YearStats(BaseModel):
    """Event pool counts for one year."""

    year: int
    total: int = Field(..., ge=0)
    used: int = Field(0, ge=0)
    available: int = Field(0, ge=0)


class PuzzleDemandRecord(BaseModel):
    """One historical puzzle, reduced to its target year."""

    model_config = ConfigDict(populate_by_name=True)

    target_year: int = Field(..., alias="targetYear")


class CoverageGaps(BaseModel):
    """Where the event pool is thin."""

    missing_years: List[int] = Field(default_factory=list, description="Years with no events")
    insufficient_years: List[int] = Field(default_factory=list, description="Years with fewer than 6 events")
    coverage_by_era: Dict[EraBucket, float] = Field(default_factory=dict, description="Covered share of each era")


class PuzzleDemand(BaseModel):
    """Where puzzles have concentrated."""

    high_demand_years: List[int] = Field(default_factory=list, description="Years used more than once, most used first")
    demand_by_era: Dict[EraBucket, int] = Field(default_factory=dict)
    selection_frequency: Dict[int, int] = Field(default_factory=dict)


class YearCandidate(BaseModel):
    """A year proposed for the next generation batch."""

    year: int
    severity: int = Field(..., description="Higher is more urgent")
    source: YearCandidateSource


class CoverageStrategy(BaseModel):
    """Years chosen for the next generation batch."""

    target_years: List[int] = Field(default_factory=list)
    priority: YearCandidateSource
    era_balance: Dict[EraBucket, int] = Field(default_factory=dict)
