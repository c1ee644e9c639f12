import itertools

import pytest

import tetris_game
from tetris_board import PlaceResult
from tetris_game import Tetris, Verb
from tetris_rng import JavaRandom

I, L, J, S, Z, O, T = range(7)


class FixedPieces:
    """Stands in for the random source: yields the given piece indexes forever."""

    def __init__(self, *kinds):
        self.kinds = itertools.cycle(kinds)

    def random(self):
        return (next(self.kinds) + 0.5) / 7


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


def new_game(*kinds, **kwargs):
    game = Tetris(test_mode=False, **kwargs)
    game.start(FixedPieces(*kinds))
    return game


def land(game):
    game.tick(Verb.DROP)
    game.tick(Verb.DOWN)
    game.tick(Verb.DOWN)


def test_start_places_first_piece_at_top_center():
    game = new_game(O)
    assert game.game_on
    assert game.count == 1
    assert game.current_piece.kind == O
    assert (game.current_x, game.current_y) == (4, 22)
    assert game.board.get_grid(4, 22) and game.board.get_grid(5, 23)
    assert not game.board.committed


def test_left_and_right_shift_by_one():
    game = new_game(O)
    game.tick(Verb.LEFT)
    assert game.current_x == 3
    assert not game.board.get_grid(5, 22)
    game.tick(Verb.RIGHT)
    game.tick(Verb.RIGHT)
    assert game.current_x == 5
    assert game.moved


def test_wall_blocks_move_and_keeps_piece_on_board():
    game = new_game(O)
    for _ in range(10):
        game.tick(Verb.LEFT)
    assert game.current_x == 0
    assert game.board.get_grid(0, 22)
    assert game.board.get_row_width(22) == 2
    assert not game.moved


def test_down_moves_one_row():
    game = new_game(T)
    y = game.current_y
    game.tick(Verb.DOWN)
    assert game.current_y == y - 1
    assert not game.moved


def test_rotate_recenters_with_truncating_division():
    game = new_game(I)
    assert (game.current_x, game.current_y) == (4, 20)
    game.tick(Verb.ROTATE)
    assert game.current_piece.rotation == 1
    assert (game.current_piece.width, game.current_piece.height) == (4, 1)
    assert (game.current_x, game.current_y) == (3, 21)
    game.tick(Verb.ROTATE)
    assert game.current_piece.rotation == 0
    assert (game.current_x, game.current_y) == (4, 20)


def test_failed_rotate_puts_old_piece_back():
    game = new_game(I)
    game.tick(Verb.ROTATE)
    for _ in range(5):
        game.tick(Verb.LEFT)
    assert game.current_x == 0
    game.tick(Verb.DROP)
    assert game.current_y == 0
    # vertical I would poke below the floor
    game.tick(Verb.ROTATE)
    assert game.current_piece.rotation == 1
    assert game.board.get_row_width(0) == 4


def test_drop_then_two_downs_lands():
    game = new_game(O, T)
    game.tick(Verb.DROP)
    assert game.current_y == 0
    assert game.moved
    game.tick(Verb.DOWN)
    # the drop still counted as a player move, so no landing yet
    assert game.count == 1
    game.tick(Verb.DOWN)
    assert game.count == 2
    assert game.current_piece.kind == T
    assert game.board.get_grid(4, 0) and game.board.get_grid(5, 1)
    assert game.board.get_max_height() == 24


def test_falling_by_timer_lands():
    game = new_game(O)
    for _ in range(22):
        game.tick(Verb.DOWN)
    assert game.current_y == 0
    assert game.count == 1
    game.tick(Verb.DOWN)
    assert game.count == 2


def test_moving_at_the_bottom_delays_landing():
    game = new_game(O)
    game.tick(Verb.DROP)
    game.tick(Verb.DOWN)
    game.tick(Verb.LEFT)
    game.tick(Verb.DOWN)
    assert game.count == 1
    game.tick(Verb.DOWN)
    assert game.count == 2
    assert game.board.get_grid(3, 0)


def test_drop_never_moves_piece_up():
    game = new_game(O)
    game.tick(Verb.DROP)
    y = game.current_y
    game.board.undo()
    # pretend the column is taller than where the piece sits
    game.board._heights[4] = 5
    piece, x, new_y = game.compute_new_position(Verb.DROP)
    assert new_y == y


def test_completed_rows_are_cleared_on_landing():
    game = new_game(O)
    for target in (0, 2, 6, 8):
        step = Verb.LEFT if target < 4 else Verb.RIGHT
        for _ in range(abs(target - 4)):
            game.tick(step)
        land(game)
    assert game.board.get_row_width(0) == 8
    game.repaint = False
    game.tick(Verb.DROP)
    assert game.repaint
    game.tick(Verb.DOWN)
    game.tick(Verb.DOWN)
    assert game.rows_cleared == 2
    assert game.count == 6
    # only the new piece remains, up top
    assert game.board.get_row_width(0) == 0
    assert game.board.get_max_height() == 24


def test_stacking_to_the_top_ends_the_game():
    game = new_game(O)
    while game.game_on:
        land(game)
    assert game.lost
    assert game.count == 11
    assert game.board.get_max_height() == 22


def test_tick_is_ignored_when_stopped():
    game = new_game(O)
    game.stop()
    before = game.board.snapshot()
    game.tick(Verb.LEFT)
    game.tick(Verb.DOWN)
    assert game.board.snapshot() == before
    assert not game.lost


def test_test_mode_stops_after_limit(monkeypatch):
    monkeypatch.setattr(tetris_game, "TEST_LIMIT", 3)
    game = Tetris(test_mode=True)
    game.start(FixedPieces(O))
    for _ in range(3):
        land(game)
    assert not game.game_on
    assert not game.lost
    assert game.count == 4


def test_test_mode_uses_fixed_seed():
    sequences = []
    for _ in range(2):
        game = Tetris(test_mode=True)
        game.start()
        sequences.append([game.current_piece.kind] + [game.pick_next_piece().kind for _ in range(5)])
    assert sequences[0] == sequences[1]
    assert sequences[0][:3] == [O, L, Z]


def test_pick_next_piece_maps_random_onto_catalog():
    game = Tetris(test_mode=False)
    game.rng = JavaRandom(0)
    assert game.pick_next_piece().kind == O


def test_set_current_piece_rolls_back_failure():
    game = new_game(O)
    game.board.undo()
    before = game.board.snapshot()
    result = game.set_current_piece(game.pieces[O], 9, 0)
    assert result == PlaceResult.OUT_BOUNDS
    assert game.board.committed
    assert game.board.snapshot() == before
    assert (game.current_x, game.current_y) == (4, 22)


def test_restart_resets_state():
    game = new_game(O)
    land(game)
    game.stop()
    game.start(FixedPieces(T))
    assert game.count == 1
    assert game.rows_cleared == 0
    assert game.board.get_max_height() == 24
    assert game.current_piece.kind == T


def test_elapsed_time():
    clock = FakeClock()
    game = Tetris(test_mode=False, clock=clock)
    game.start(FixedPieces(O))
    clock.now += 2.5
    assert game.elapsed() == pytest.approx(2.5)
    game.stop()
    clock.now += 10
    assert game.elapsed() == pytest.approx(2.5)


def test_bad_verb_raises():
    game = new_game(O)
    with pytest.raises(ValueError):
        game.compute_new_position("sideways")


def test_smaller_board():
    game = Tetris(width=6, height=8, top_space=3, test_mode=False)
    game.start(FixedPieces(T))
    assert game.board.width == 6 and game.board.height == 11
    assert (game.current_x, game.current_y) == (1, 9)


def test_blocked_spawn_ends_the_game():
    game = new_game(O)
    game.board.undo()
    # fill the spawn cells with a committed block
    assert not game.board.place(game.pieces[O], 4, 22).failed
    game.board.commit()
    before = game.board.snapshot()
    game.add_new_piece()
    assert game.lost
    assert not game.game_on
    assert game.current_piece is None
    assert game.board.committed
    assert game.board.snapshot() == before
