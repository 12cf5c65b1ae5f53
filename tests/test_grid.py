from __future__ import annotations

import numpy as np
import pytest

from tetris_rl.game import EMPTY, GameGrid, TetrominoType, create_piece
from tetris_rl.game.pieces import num_rotations, Piece


@pytest.fixture
def board():
    return GameGrid(10, 20)


def fill_row(board: GameGrid, y: int, skip=()):
    for x in range(board.width):
        if x not in skip:
            board.set_cell(x, y, 1)


def test_new_board_is_empty(board):
    assert board.is_empty()
    assert board.grid.shape == (20, 10)


def test_cell_access_is_bounds_checked(board):
    board.set_cell(5, 10, 3)
    assert board.cell_at(5, 10) == 3
    for x, y in [(-1, 0), (0, -1), (10, 0), (0, 20)]:
        assert board.cell_at(x, y) is None


def test_out_of_bounds_writes_are_ignored(board):
    board.set_cell(-1, 0, 1)
    board.set_cell(10, 0, 1)
    board.set_cell(0, 20, 1)
    assert board.is_empty()
    assert board.grid.shape == (20, 10)


def test_piece_fits_at_spawn(board):
    assert board.can_place(create_piece(TetrominoType.I), (3, 0))


def test_collision_with_locked_cell(board):
    board.set_cell(3, 1, 1)
    assert not board.can_place(create_piece(TetrominoType.O), (3, 0))


def test_cells_above_the_field_skip_occupancy_check(board):
    fill_row(board, 0)
    # I spawn orientation occupies only row 1 of its box
    assert board.can_place(create_piece(TetrominoType.I), (3, -2))
    assert not board.can_place(create_piece(TetrominoType.I), (3, -1))


def test_can_place_rejects_any_subcell_outside_bounds(board):
    for kind in TetrominoType:
        for r in range(num_rotations(kind)):
            piece = Piece(kind, r)
            for x in range(-4, 14):
                for y in range(-4, 24):
                    cells = piece.cells_at(x, y)
                    inside = all(0 <= cx < board.width and cy < board.height for cx, cy in cells)
                    assert board.can_place(piece, (x, y)) == inside


def test_lock_writes_exactly_the_o_cells(board):
    o = create_piece(TetrominoType.O)
    board.lock(o, (6, 12))
    locked = {(int(x), int(y)) for y, x in np.argwhere(board.grid != EMPTY)}
    assert locked == {(6, 12), (7, 12), (6, 13), (7, 13)}
    assert board.cell_at(6, 12) == int(TetrominoType.O)


def test_lock_drops_cells_above_the_field(board):
    board.lock(create_piece(TetrominoType.O), (0, -1))
    assert board.locked_count() == 2
    assert board.cell_at(0, 0) == int(TetrominoType.O)


def test_clear_single_row_shifts_rows_down(board):
    fill_row(board, 19)
    board.set_cell(0, 18, 5)
    before = board.locked_count()
    result = board.clear_completed_rows()
    assert result.count == 1
    assert result.cleared_rows == (19,)
    assert board.locked_count() == before - board.width
    assert board.cell_at(0, 19) == 5
    assert board.cell_at(0, 18) == EMPTY


def test_clear_two_rows_leaves_empty_board(board):
    fill_row(board, 18)
    fill_row(board, 19)
    result = board.clear_completed_rows()
    assert result.count == 2
    assert result.cleared_rows == (18, 19)
    assert board.is_empty()


def test_clear_non_adjacent_rows_keeps_order(board):
    fill_row(board, 17)
    fill_row(board, 19)
    board.set_cell(2, 18, 3)
    board.set_cell(5, 16, 4)
    result = board.clear_completed_rows()
    assert result.cleared_rows == (17, 19)
    assert board.cell_at(2, 19) == 3
    assert board.cell_at(5, 18) == 4
    assert board.locked_count() == 2
    assert board.grid.shape == (20, 10)


def test_nearly_full_row_is_not_cleared(board):
    fill_row(board, 19, skip=(9,))
    result = board.clear_completed_rows()
    assert result.count == 0
    assert result.cleared_rows == ()
    assert board.locked_count() == board.width - 1


def test_snapshot_is_a_defensive_copy(board):
    copy = board.snapshot()
    copy[0, 0] = 5
    assert board.cell_at(0, 0) == EMPTY


def test_frozen_snapshot_is_read_only(board):
    frozen = board.frozen_snapshot()
    with pytest.raises(ValueError):
        frozen[0, 0] = 1
    again = GameGrid.from_array(frozen)
    again.set_cell(0, 0, 1)
    assert frozen[0, 0] == EMPTY


def test_reset_empties_the_board(board):
    board.set_cell(5, 10, 1)
    board.reset()
    assert board.is_empty()


def test_height_and_holes(board):
    board.set_cell(0, 15, 1)
    board.set_cell(0, 17, 1)
    assert board.get_max_height() == 5
    assert board.count_holes() == 3
