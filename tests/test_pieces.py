# tests/test_pieces.py
from __future__ import annotations

import numpy as np
import pytest

from falling_blocks.game import PieceBag, PieceFactory, PieceKind


def test_shape_values_match_kind_id() -> None:
    for kind in PieceKind:
        shape = PieceFactory.shape_for(kind)
        assert set(np.unique(shape)) <= {0, int(kind)}
        assert np.count_nonzero(shape) == 4


def test_shape_for_returns_a_copy() -> None:
    shape = PieceFactory.shape_for(PieceKind.T)
    shape[:] = 0
    assert np.count_nonzero(PieceFactory.shape_for(PieceKind.T)) == 4


def test_shape_for_unknown_kind_fails_loudly() -> None:
    with pytest.raises(AssertionError):
        PieceFactory.shape_for(99)  # type: ignore[arg-type]


@pytest.mark.parametrize("cols", [4, 5, 10, 11])
def test_spawn_is_centered_and_inside(cols: int) -> None:
    factory = PieceFactory(cols)
    for kind in PieceKind:
        piece = factory.spawn(kind)
        assert piece.y == 0
        assert piece.x == cols // 2 - piece.width // 2
        assert 0 <= piece.x and piece.x + piece.width <= cols


def test_spawn_o_piece_on_standard_board() -> None:
    piece = PieceFactory(10).spawn(PieceKind.O)
    assert (piece.x, piece.y) == (4, 0)
    assert sorted(piece.cells()) == [(4, 0), (4, 1), (5, 0), (5, 1)]


def test_bag_refills_when_empty() -> None:
    bag = PieceBag(seed=1)
    assert len(bag) == 0
    PieceFactory.next_from_bag(bag)
    assert len(bag) == 6


def test_every_bag_holds_each_kind_once() -> None:
    bag = PieceBag(seed=42)
    draws = [PieceFactory.next_from_bag(bag) for _ in range(70)]
    for start in range(0, 70, 7):
        assert sorted(draws[start:start + 7]) == sorted(PieceKind)


def test_same_seed_gives_same_sequence() -> None:
    a = PieceBag(seed=7)
    b = PieceBag(seed=7)
    assert [a.pop() for _ in range(21)] == [b.pop() for _ in range(21)]


def test_moved_returns_new_piece() -> None:
    piece = PieceFactory(10).spawn(PieceKind.T)
    moved = piece.moved(dx=1, dy=2)
    assert (moved.x, moved.y) == (piece.x + 1, 2)
    assert (piece.x, piece.y) == (4, 0)
