"""
Pydantic schemas for API request/response validation.
"""

from typing import Dict, List, Literal, Optional
from pydantic import BaseModel, Field

from pokerarena.core.rules import (
    DEFAULT_BIG_BLIND, DEFAULT_BUY_IN, DEFAULT_SMALL_BLIND, MAX_PLAYERS,
    MIN_PLAYERS,
)


# ============= Request Schemas =============

class SeatRequest(BaseModel):
    """A seat at a new table."""
    name: str = Field(min_length=1, max_length=32)
    chips: int = Field(gt=0, default=DEFAULT_BUY_IN)
    agent: Literal["random", "call", "aggressive"] = Field(
        default="call", description="Bot that plays the seat"
    )


class CreateTableRequest(BaseModel):
    """Request to create a new table."""
    players: List[SeatRequest] = Field(min_length=MIN_PLAYERS, max_length=MAX_PLAYERS)
    small_blind: int = Field(gt=0, default=DEFAULT_SMALL_BLIND)
    big_blind: int = Field(gt=0, default=DEFAULT_BIG_BLIND)
    seed: Optional[int] = Field(default=None, description="Seed for shuffling and bots")


# ============= Response Schemas =============

class SeatSchema(BaseModel):
    """A seat in current table order."""
    seat: int
    name: str
    chips: int


class TableSchema(BaseModel):
    """Table information."""
    table_id: str
    small_blind: int
    big_blind: int
    hand_number: int
    is_running: bool
    total_chips: int
    seats: List[SeatSchema]


class SidePotSchema(BaseModel):
    """A pot tier and the names of the players eligible for it."""
    amount: int
    players: List[str]


class ShowdownSchema(BaseModel):
    """A contesting player's hand at showdown."""
    player_id: str
    name: str
    cards: List[str]
    category: str
    kickers: List[int]
    description: str


class HandSummarySchema(BaseModel):
    """Result of one hand."""
    hand_number: int
    pot: int
    community_cards: List[str]
    side_pots: List[SidePotSchema]
    showdown: List[ShowdownSchema]
    payouts: Dict[str, int]
    final_chips: Dict[str, int]
    eliminated: List[str]
    log: List[str]
