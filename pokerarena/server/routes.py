"""
HTTP API Routes for PokerArena.

Tables are created with bot seats and advanced one hand per request.
"""

from typing import Any, Dict
from fastapi import APIRouter, Depends, HTTPException, Request

from pokerarena.server.manager import SeatSpec, Table, TableManager
from pokerarena.server.schemas import (
    CreateTableRequest, HandSummarySchema, SeatSchema, TableSchema,
)

router = APIRouter()


def get_manager(request: Request) -> TableManager:
    """The table manager owned by the application."""
    return request.app.state.table_manager


def get_table(table_id: str, manager: TableManager = Depends(get_manager)) -> Table:
    """Get a table or fail with 404."""
    table = manager.get_table(table_id)
    if table is None:
        raise HTTPException(status_code=404, detail=f"Table {table_id} not found")
    return table


def table_info(table: Table) -> TableSchema:
    game = table.game
    return TableSchema(
        table_id=table.table_id,
        small_blind=game.small_blind,
        big_blind=game.big_blind,
        hand_number=game.hand_number,
        is_running=game.is_game_running(),
        total_chips=game.total_chips,
        seats=[
            SeatSchema(seat=i, name=p.name, chips=p.chips)
            for i, p in enumerate(game.players)
        ],
    )


@router.post("/tables", response_model=TableSchema, status_code=201)
async def create_table(
    req: CreateTableRequest,
    manager: TableManager = Depends(get_manager),
) -> TableSchema:
    """
    Create a table seated with bots.

    Seat order follows the request: the first player posts the first small
    blind.
    """
    try:
        table = manager.create_table(
            [SeatSpec(name=s.name, chips=s.chips, agent=s.agent) for s in req.players],
            small_blind=req.small_blind,
            big_blind=req.big_blind,
            seed=req.seed,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return table_info(table)


@router.get("/tables/{table_id}", response_model=TableSchema)
async def get_table_info(table: Table = Depends(get_table)) -> TableSchema:
    """Get seats and chip counts in current seat order."""
    return table_info(table)


@router.post("/tables/{table_id}/hands", response_model=HandSummarySchema)
async def play_hand(
    table: Table = Depends(get_table),
    manager: TableManager = Depends(get_manager),
) -> HandSummarySchema:
    """
    Play one complete hand.

    Fails with 409 once a single player holds every chip.
    """
    summary = await manager.play_hand(table.table_id)
    if summary is None:
        raise HTTPException(status_code=409, detail="Game is over")
    return HandSummarySchema(**summary.to_dict())


@router.get("/tables/{table_id}/hands/last", response_model=HandSummarySchema)
async def get_last_hand(table: Table = Depends(get_table)) -> HandSummarySchema:
    """Get the summary of the most recent hand."""
    summary = table.game.last_summary
    if summary is None:
        raise HTTPException(status_code=404, detail="No hand played yet")
    return HandSummarySchema(**summary.to_dict())


@router.delete("/tables/{table_id}")
async def delete_table(
    table_id: str,
    manager: TableManager = Depends(get_manager),
) -> Dict[str, Any]:
    """Remove a table."""
    if not manager.remove_table(table_id):
        raise HTTPException(status_code=404, detail=f"Table {table_id} not found")
    return {"success": True, "message": f"Table {table_id} removed"}
