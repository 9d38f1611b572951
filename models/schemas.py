"""
Pydantic schemas for data validation.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from config import BRACKET_SETTINGS


# ============ Entrant Schemas ============

class EntrantCreate(BaseModel):
    """Schema for registering an entrant."""
    entrant_id: str = Field(..., min_length=1, max_length=64)
    display_name: str = Field(..., min_length=1, max_length=200)

    @field_validator("display_name")
    @classmethod
    def name_not_reserved(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Display name cannot be empty")
        if v == BRACKET_SETTINGS.bye_label:
            raise ValueError(f"'{v}' is reserved for byes")
        return v


# ============ Tournament Schemas ============

class TournamentCreate(BaseModel):
    """Schema for creating a new tournament."""
    name: str = Field(..., min_length=1, max_length=200)
    owner_id: str = Field(..., min_length=1, max_length=64)
    max_entrants: Optional[int] = Field(None, ge=1)

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Name cannot be empty")
        return v.strip()


class RecordWinnerRequest(BaseModel):
    """Schema for recording a matchup result."""
    matchup_id: str = Field(..., pattern=r"^R[1-9]\d*M[1-9]\d*$")
    winner_entrant_id: str = Field(..., min_length=1)


# ============ Bracket Schemas ============

class PlayerSlotResponse(BaseModel):
    """Schema for one side of a matchup."""
    entrant_id: Optional[str]
    display_name: str
    score: int

    class Config:
        from_attributes = True


class MatchupResponse(BaseModel):
    """Schema for matchup response."""
    matchup_id: str
    round_number: int
    slot_a: PlayerSlotResponse
    slot_b: PlayerSlotResponse
    winner_entrant_id: Optional[str]
    is_bye: bool
    is_placeholder: bool
    status: str


class BracketResponse(BaseModel):
    """Schema for bracket response."""
    bracket_size: int
    matchups: list[MatchupResponse]

    @property
    def round_count(self) -> int:
        return max((m.round_number for m in self.matchups), default=0)


class TournamentResponse(BaseModel):
    """Schema for tournament response."""
    id: int
    name: str
    owner_id: str
    status: str
    max_entrants: Optional[int]
    bracket_size: Optional[int]
    champion_entrant_id: Optional[str]
    entrants: list[EntrantCreate]
    bracket: Optional[BracketResponse]
    created_at: datetime
    started_at: Optional[datetime]
    completed_at: Optional[datetime]

    class Config:
        from_attributes = True
