from unblock import engine
from unblock.board import render
from unblock.puzzle_format import parse_layout
from unblock.types import Direction, Move, Orientation


def test_blocks_slide_only_along_their_axis():
    layout = parse_layout(
        """
        ......
        ..A...
        ZZA.B.
        ..A.B.
        ......
        ..CC..
        """
    )
    board = render(layout)
    moves = engine.generate_legal_moves(layout, board)

    for move in moves:
        blk = layout.block(move.block_id)
        assert move.direction.axis is blk.orientation
    assert {(layout.block(m.block_id).orientation, m.direction) for m in moves} <= {
        (Orientation.HORIZONTAL, Direction.LEFT),
        (Orientation.HORIZONTAL, Direction.RIGHT),
        (Orientation.VERTICAL, Direction.UP),
        (Orientation.VERTICAL, Direction.DOWN),
    }


def test_expected_moves_for_sample():
    layout = parse_layout(
        """
        ......
        ..A...
        ZZA.B.
        ..A.B.
        ......
        ..CC..
        """
    )
    board = render(layout)
    a, z, b, c = (blk.id for blk in layout)
    moves = set(engine.generate_legal_moves(layout, board))

    assert moves == {
        Move(a, Direction.UP),
        Move(a, Direction.DOWN),
        Move(b, Direction.UP),
        Move(b, Direction.DOWN),
        Move(c, Direction.LEFT),
        Move(c, Direction.RIGHT),
    }
    # The prisoner sits on the left wall and is blocked on the right.
    assert not any(m.block_id == z for m in moves)


def test_block_on_boundary_has_no_move_that_way():
    layout = parse_layout(
        """
        AA....
        ......
        ZZ....
        ......
        .....B
        .....B
        """
    )
    board = render(layout)
    a, z, b = (blk.id for blk in layout)
    moves = engine.generate_legal_moves(layout, board)

    assert Move(a, Direction.LEFT) not in moves
    assert Move(a, Direction.RIGHT) in moves
    assert Move(b, Direction.DOWN) not in moves
    assert Move(b, Direction.UP) in moves


def test_successors_move_exactly_one_tile():
    layout = parse_layout(
        """
        ......
        ......
        ZZ....
        ......
        ......
        ......
        """
    )
    board = render(layout)
    results = list(engine.successors(layout, board))

    assert len(results) == 1
    move, successor = results[0]
    assert move.direction is Direction.RIGHT
    assert successor.prisoner().col == 1
    assert layout.prisoner().col == 0


def test_is_legal():
    layout = parse_layout(
        """
        ......
        ..A...
        ZZA...
        ......
        ......
        ......
        """
    )
    board = render(layout)
    a, z = (blk.id for blk in layout)

    assert engine.is_legal(layout, board, Move(a, Direction.DOWN))
    assert engine.is_legal(layout, board, Move(a, Direction.UP))
    assert not engine.is_legal(layout, board, Move(a, Direction.LEFT))
    assert not engine.is_legal(layout, board, Move(z, Direction.RIGHT))
    assert not engine.is_legal(layout, board, Move(z, Direction.LEFT))
    assert not engine.is_legal(layout, board, Move(42, Direction.UP))
    assert not engine.is_legal(layout, board, Move.sentinel())
