from __future__ import annotations

import logging
from typing import Dict, List, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, Field

from .error import register_error_handlers
from .logging_middleware import RequestIDLoggingMiddleware
from ...application.context import AppContext
from ...application.game_service import CreateGameCmd, MoveCmd
from ...application.player_service import CreatePlayerCmd, Player
from ...engine.game import Game


logger = logging.getLogger(__name__)


class CreatePlayerRequest(BaseModel):
    user_name: str = Field(..., min_length=1, description="Unique player name")


class PlayerResponse(BaseModel):
    id: str
    user_name: str

    @classmethod
    def from_player(cls, player: Player) -> "PlayerResponse":
        return cls(id=player.id, user_name=player.user_name)


class CreateGameRequest(BaseModel):
    white_player_id: str = Field(..., description="UUID of the white player")
    black_player_id: str = Field(..., description="UUID of the black player")


class MoveRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_square: str = Field(..., alias="from", description="Origin square, e.g. e2")
    to_square: str = Field(..., alias="to", description="Destination square, e.g. e4")
    promote: Optional[str] = Field(
        default=None, description="Queen, Rook, Bishop or Knight when a pawn promotes"
    )


class GameResponse(BaseModel):
    id: str
    fen: str
    side_to_move: str
    pieces: Dict[str, str]
    is_check: bool
    is_check_mate_or_stale_mate: bool
    status: str
    white_player_id: str
    black_player_id: str
    winner_id: Optional[str]
    allowed_positions: Dict[str, List[str]]
    move_history: List[str]

    @classmethod
    def from_game(cls, game: Game) -> "GameResponse":
        board = game.board
        return cls(
            id=game.id,
            fen=board.to_fen(),
            side_to_move=board.side_to_move.display_name,
            pieces={str(sq): piece.symbol for sq, piece in sorted(board.placement.items())},
            is_check=game.is_check,
            is_check_mate_or_stale_mate=game.is_check_mate_or_stale_mate,
            status=game.status.value,
            white_player_id=game.white_player_id,
            black_player_id=game.black_player_id,
            winner_id=game.winner_id,
            allowed_positions=game.allowed_positions,
            move_history=list(game.move_history),
        )


def create_app(context: Optional[AppContext] = None) -> FastAPI:
    app = FastAPI(title="chessforyou", version="0.1.0")

    # Basic logging setup
    logging.basicConfig(level=logging.INFO)

    ctx = context if context is not None else AppContext.create()
    app.state.context = ctx

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIDLoggingMiddleware)
    register_error_handlers(app)

    @app.get("/healthz")
    async def healthz() -> Dict[str, str]:
        return {"status": "ok"}

    @app.post("/players", response_model=PlayerResponse, status_code=201)
    async def create_player(req: CreatePlayerRequest) -> PlayerResponse:
        player = ctx.players.create(CreatePlayerCmd(user_name=req.user_name))
        return PlayerResponse.from_player(player)

    @app.get("/players/{player_id}", response_model=PlayerResponse)
    async def get_player(player_id: str) -> PlayerResponse:
        return PlayerResponse.from_player(ctx.players.find_by_id(player_id))

    @app.post("/games", response_model=GameResponse, status_code=201)
    async def create_game(req: CreateGameRequest) -> GameResponse:
        game = ctx.games.create(
            CreateGameCmd(white_player_id=req.white_player_id, black_player_id=req.black_player_id)
        )
        return GameResponse.from_game(game)

    @app.get("/games/{game_id}", response_model=GameResponse)
    async def get_game(game_id: str) -> GameResponse:
        return GameResponse.from_game(ctx.games.get(game_id))

    @app.put("/games/{game_id}", response_model=GameResponse)
    async def move_piece(game_id: str, req: MoveRequest) -> GameResponse:
        game = ctx.games.move_piece(
            MoveCmd(
                game_id=game_id,
                from_square=req.from_square,
                to_square=req.to_square,
                promote=req.promote,
            )
        )
        return GameResponse.from_game(game)

    logger.info("chessforyou app created", extra={"routes": len(app.routes)})
    return app
