"""Orchestration of communication from API router to business logic and persistence layers (and the reverse direction)."""

from typing import Callable, Optional
from uuid import UUID

from loguru import logger

from src.api.models import (
    AllMovesRequest,
    AllMovesResponse,
    CreateGameRequest,
    DeleteGameRequest,
    GameRequest,
    GameResponse,
    GetGameRequest,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveRequest,
    MoveView,
    PieceSelectionView,
    PieceView,
    PlacementRequest,
    SelectionRequest,
    ToggleSelectionRequest,
)
from src.checkers.ai import AIPlayer, create_ai
from src.checkers.draft import piece_selections, remaining_power
from src.checkers.game import Game
from src.checkers.moves import Move
from src.checkers.pieces import Piece
from src.checkers.square import Square
from src.core.config import Settings, get_settings
from src.core.exceptions import (
    GameNotFoundError,
    GameStateError,
    PieceNotFoundError,
    RejectedCommandError,
)
from src.core.models import GameModel
from src.core.shared_types import Color, Phase
from src.db.repository import GameRepository

StateListener = Callable[[GameResponse], None]
Command = Callable[[Game], object]


class CheckersService:
    """Orchestration of layers for a checkers game."""

    def __init__(
        self, repository: GameRepository, settings: Optional[Settings] = None
    ) -> None:
        self.repo = repository
        self.settings = settings if settings is not None else get_settings()
        self._listeners: list[StateListener] = []

    def subscribe(self, listener: StateListener) -> None:
        """Listener gets called with the new GameResponse after every committed command."""
        self._listeners.append(listener)

    # -- API routes logic ---
    def create_game(self, request: CreateGameRequest) -> GameResponse:
        """New game, waiting in the menu. Optionally against the computer."""
        ai_difficulty = request.ai_difficulty
        ai_color = request.ai_color
        if request.ai_opponent or ai_difficulty is not None:
            ai_difficulty = ai_difficulty or self.settings.ai_difficulty
            ai_color = ai_color or self.settings.ai_color
        new_game = Game.new_game(
            ai_difficulty=ai_difficulty, ai_color=ai_color or Color.BLUE
        )

        stored_game, game_id = self.repo.create_game(new_game.to_model())
        logger.info(
            f"Created game {game_id} (computer opponent: {ai_difficulty.value if ai_difficulty else 'none'})"
        )
        return self._create_game_response(game_id, stored_game)

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used in "polling" loop by frontend to check when it is the player's turn for instance.
        """
        game_model = self._fetch_game(request.game_id)
        return self._create_game_response(request.game_id, game_model)

    def start_game(self, request: GameRequest) -> GameResponse:
        return self._run(request.game_id, "start game", lambda game: game.start_game())

    def update_selection(self, request: SelectionRequest) -> GameResponse:
        return self._run(
            request.game_id,
            f"{request.color.value} selection {request.variant.value} {request.delta:+d}",
            lambda game: game.update_selection(
                request.color, request.variant, request.delta
            ),
        )

    def toggle_selection(self, request: ToggleSelectionRequest) -> GameResponse:
        """Draft screen click: one more of the variant, or one less once it is at its maximum."""
        return self._run(
            request.game_id,
            f"{request.color.value} toggles {request.variant.value}",
            lambda game: game.toggle_selection(request.color, request.variant),
        )

    def finish_draft(self, request: GameRequest) -> GameResponse:
        return self._run(request.game_id, "finish draft", lambda game: game.finish_draft())

    def place_piece(self, request: PlacementRequest) -> GameResponse:
        square = Square(request.row, request.col)
        return self._run(
            request.game_id,
            f"place {request.piece_id} on {square}",
            lambda game: game.place_piece(request.piece_id, square),
        )

    def finish_placement(self, request: GameRequest) -> GameResponse:
        return self._run(
            request.game_id, "finish placement", lambda game: game.finish_placement()
        )

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """Destinations of the piece on the requested square (to highlight them)."""
        game = Game.from_model(self._fetch_game(request.game_id))
        square = Square(request.row, request.col)
        piece = game.state.board.piece(square)
        if piece is None:
            raise PieceNotFoundError(f"No piece on {square}.")
        destinations = game.legal_moves(square)
        return LegalMovesResponse(
            game_id=request.game_id,
            piece=self._piece_view(piece),
            destinations=[destination.to_tuple() for destination in destinations],
        )

    def all_legal_moves(self, request: AllMovesRequest) -> AllMovesResponse:
        """Every move the given player could make on the current board."""
        game = Game.from_model(self._fetch_game(request.game_id))
        return AllMovesResponse(
            game_id=request.game_id,
            color=request.color,
            moves=[self._move_view(move) for move in game.all_legal_moves(request.color)],
        )

    def make_move(self, request: MoveRequest) -> GameResponse:
        """Make a move attempt."""
        from_square = Square(*request.from_square)
        to_square = Square(*request.to_square)
        return self._run(
            request.game_id,
            f"move {from_square} -> {to_square}",
            lambda game: game.make_move(from_square, to_square, request.piece_id),
        )

    def reset_game(self, request: GameRequest) -> GameResponse:
        """Back to the menu. The computer opponent settings are kept."""
        return self._run(request.game_id, "reset", lambda game: game.reset())

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        if self.repo.delete_game(request.game_id) is None:
            raise GameNotFoundError(f"Game with {request.game_id} not found.")
        logger.info(f"Deleted game {request.game_id}")

    # -- Computer opponent ---
    def play_ai_draft(self, request: GameRequest) -> GameResponse:
        """The computer submits its whole draft at once."""

        def command(game: Game) -> None:
            ai = self._ai_for(game)
            game.submit_selection(ai.color, ai.choose_draft(game.state))

        return self._run(request.game_id, "computer draft", command)

    def play_ai_placement(self, request: GameRequest) -> GameResponse:
        """The computer places every piece it still holds, one placement command per piece."""

        def command(game: Game) -> None:
            ai = self._ai_for(game)
            decisions = ai.choose_placement(game.state, game.state.rosters[ai.color])
            for piece_id, square in decisions.items():
                game.place_piece(piece_id, square)

        return self._run(request.game_id, "computer placement", command)

    def play_ai_turn(self, request: GameRequest) -> GameResponse:
        """
        The computer plays its move, through the same make_move a human goes through.
        ----
        Nothing happens when it is not the computer's turn.
        When the computer has no move at all on its turn, it loses.
        """

        def command(game: Game) -> None:
            ai = self._ai_for(game)
            state = game.state
            if state.phase != Phase.PLAY:
                raise GameStateError(
                    f"The computer only moves during play, not in phase {state.phase.value!r}."
                )
            if state.active_player != ai.color:
                return

            move: Optional[Move] = ai.choose_move(state)
            if move is None:
                game.declare_immobilized(ai.color)
                return
            game.make_move(move.from_square, move.to_square, move.piece.id)

        return self._run(request.game_id, "computer turn", command)

    # -- Internal helpers --
    def _run(self, game_id: UUID, description: str, command: Command) -> GameResponse:
        """
        Shared flow of every command:
        fetch -> rebuild Game -> run command -> store -> respond -> notify.
        A rejected command raises before anything gets stored.
        """
        stored_model = self._fetch_game(game_id)
        game = Game.from_model(stored_model)
        version = game.state.version

        logger.debug(f"Game {game_id}: {description}")
        try:
            command(game)
        except RejectedCommandError as e:
            logger.warning(f"Game {game_id}: {description} rejected: {e}")
            raise

        if game.state.version == version:
            return self._create_game_response(game_id, stored_model)

        updated_model = game.to_model()
        self.repo.update_game(game_id, updated_model)
        response = self._create_game_response(game_id, updated_model)
        self._notify(response)
        return response

    def _notify(self, response: GameResponse) -> None:
        for listener in self._listeners:
            listener(response)

    def _ai_for(self, game: Game) -> AIPlayer:
        if game.ai_difficulty is None or game.ai_color is None:
            raise GameStateError("This game has no computer opponent.")

        # seed offset by the game version
        seed = self.settings.ai_seed
        if seed is not None:
            seed += game.state.version
        return create_ai(game.ai_difficulty, game.ai_color, seed)

    def _create_game_response(self, game_id: UUID, model: GameModel) -> GameResponse:
        """Convert info in GameModel to a GameResponse (for game with given ID.)"""
        game = Game.from_model(model)
        state = game.state
        return GameResponse(
            game_id=game_id,
            phase=state.phase,
            active_player=state.active_player,
            board=[self._piece_view(piece) for piece in state.board.pieces()],
            board_notation=state.board.to_notation(),
            scores=model.scores,
            captured={
                color.value: [self._piece_view(piece) for piece in state.captured[color]]
                for color in Color
            },
            piece_counts=model.piece_counts,
            move_history=[self._move_view(move) for move in state.history],
            selections=model.selections,
            draft={
                color.value: [
                    PieceSelectionView(
                        variant=row.variant,
                        count=row.count,
                        maximum=row.maximum,
                        cost=row.cost,
                    )
                    for row in piece_selections(state.selections[color])
                ]
                for color in Color
            },
            remaining_power={
                color.value: remaining_power(state.selections[color]) for color in Color
            },
            unplaced={
                color.value: [self._piece_view(piece) for piece in state.rosters[color]]
                for color in Color
            },
            winner=game.winner,
            version=state.version,
            ai_difficulty=game.ai_difficulty,
            ai_color=game.ai_color,
        )

    @staticmethod
    def _piece_view(piece: Piece) -> PieceView:
        return PieceView(
            id=piece.id,
            variant=piece.variant,
            color=piece.color,
            row=piece.square.row,
            col=piece.square.col,
            crowned=piece.crowned,
        )

    @staticmethod
    def _move_view(move: Move) -> MoveView:
        return MoveView(
            piece_id=move.piece.id,
            color=move.color,
            from_square=move.from_square.to_tuple(),
            to_square=move.to_square.to_tuple(),
            captured_id=move.captured.id if move.captured else None,
        )

    def _fetch_game(self, game_id: UUID) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise GameNotFoundError(f"Game with {game_id=} not found.")
        return game_model
