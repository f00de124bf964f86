"""
Pydantic models for API request/response schemas
Field names follow the camelCase record shape the editing UI consumes
"""

from pydantic import BaseModel, Field
from typing import Dict, List, Optional


class DefenseRatingModel(BaseModel):
    """Fielding grade for one position"""
    range: int = Field(..., description="Range rating (1 best)")
    error: int = Field(..., description="Error number")
    arm: Optional[int] = Field(None, description="Signed arm modifier")
    throwing: Optional[str] = Field(None, description="Catcher throwing rating, e.g. 'T-1'")


class LeftyColumnsModel(BaseModel):
    """Result columns 1-3 (vs. left-handed opponents)"""
    column1: List[str] = Field(default_factory=list)
    column2: List[str] = Field(default_factory=list)
    column3: List[str] = Field(default_factory=list)


class RightyColumnsModel(BaseModel):
    """Result columns 4-6 (vs. right-handed opponents)"""
    column4: List[str] = Field(default_factory=list)
    column5: List[str] = Field(default_factory=list)
    column6: List[str] = Field(default_factory=list)


class SplitChartModel(BaseModel):
    """Result chart split by opponent handedness"""
    vsLefty: LeftyColumnsModel
    vsRighty: RightyColumnsModel


class PitchingChartModel(SplitChartModel):
    """Pitching chart plus endurance code"""
    endurance: Optional[str] = Field(None, description="S#, R# or C#")


class ExtractedCardResponse(BaseModel):
    """Card attributes extracted from one uploaded image, pending user review"""
    playerName: str = Field(..., description="'Unknown Player' when no name was read")
    year: Optional[str] = None
    balance: Optional[str] = None
    stealRating: Optional[str] = None
    runRating: Optional[str] = None
    bunting: Optional[str] = None
    hitAndRun: Optional[str] = None
    defense: Optional[Dict[str, DefenseRatingModel]] = None
    hitting: Optional[SplitChartModel] = None
    pitching: Optional[PitchingChartModel] = None


class QueueStatusResponse(BaseModel):
    """Extraction queue snapshot"""
    active_requests: int
    waiting_requests: int
    max_concurrent: int
    available_slots: int


class HealthResponse(BaseModel):
    status: str
    service: str
    ocr_available: bool
