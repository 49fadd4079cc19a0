from uuid import UUID, uuid4

import pytest

from src.api.models import (
    CreateGameRequest,
    LegalMovesRequest,
    MoveRequest,
    PlacementRequest,
    SelectionRequest,
)
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Color, Difficulty, Variant


@pytest.fixture
def mock_id() -> UUID:
    return uuid4()


# -- Validation - CreateGameRequest --
def test_two_human_players_by_default() -> None:
    request = CreateGameRequest()
    assert not request.ai_opponent
    assert request.ai_difficulty is None
    assert request.ai_color is None


def test_computer_opponent_from_strings() -> None:
    """Enums are parsed from their values"""
    request = CreateGameRequest(ai_opponent=True, ai_difficulty="hard", ai_color="red")
    assert request.ai_difficulty == Difficulty.HARD
    assert request.ai_color == Color.RED


# -- Validation - SelectionRequest --
@pytest.mark.parametrize("delta", [1, -1])
def test_valid_selection_delta(mock_id: UUID, delta: int) -> None:
    request = SelectionRequest(
        game_id=mock_id, color=Color.BLUE, variant=Variant.FLYING_DISK, delta=delta
    )
    assert request.delta == delta
    assert request.variant == Variant.FLYING_DISK


@pytest.mark.parametrize("delta", [0, 2, -2, 12])
def test_invalid_selection_delta(mock_id: UUID, delta: int) -> None:
    with pytest.raises(InvalidRequestError):
        _ = SelectionRequest(
            game_id=mock_id, color=Color.RED, variant=Variant.NORMAL, delta=delta
        )


# -- Validation - Coordinates --
@pytest.mark.parametrize("row, col", [(0, 1), (7, 6), (3, 4)])
def test_valid_coordinates(mock_id: UUID, row: int, col: int) -> None:
    placement = PlacementRequest(game_id=mock_id, piece_id="red-normal-0", row=row, col=col)
    query = LegalMovesRequest(game_id=mock_id, row=row, col=col)
    assert (placement.row, placement.col) == (row, col)
    assert (query.row, query.col) == (row, col)


@pytest.mark.parametrize("row, col", [(-1, 0), (8, 0), (0, 8), (3, -2)])
def test_coordinates_off_the_board(mock_id: UUID, row: int, col: int) -> None:
    with pytest.raises(InvalidRequestError):
        _ = PlacementRequest(game_id=mock_id, piece_id="red-normal-0", row=row, col=col)
    with pytest.raises(InvalidRequestError):
        _ = LegalMovesRequest(game_id=mock_id, row=row, col=col)


# -- Validation - MoveRequest --
def test_valid_move_request(mock_id: UUID) -> None:
    request = MoveRequest(game_id=mock_id, from_square=(2, 3), to_square=(4, 5))
    assert request.from_square == (2, 3)
    assert request.to_square == (4, 5)
    assert request.piece_id is None


@pytest.mark.parametrize(
    "from_square, to_square",
    [
        ((2, 3), (8, 5)),
        ((-1, 3), (0, 4)),
        ((2, 3), (3, 9)),
    ],
)
def test_move_off_the_board(
    mock_id: UUID, from_square: tuple[int, int], to_square: tuple[int, int]
) -> None:
    with pytest.raises(InvalidRequestError):
        _ = MoveRequest(game_id=mock_id, from_square=from_square, to_square=to_square)
