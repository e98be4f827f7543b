"""
Frame scheduler, player entry points and full rounds
"""

import pytest

from bombgrid.app import Game, config_from_args, main, _parse_args
from bombgrid.components import Cell, Direction, EnemyTag, GameStatus, Heading, Position, Vitals
from bombgrid.constants import BOMB_FUSE_TICKS, EXPLOSION_TICKS, STATUS_DIED, STATUS_WON, GameConfig
from bombgrid.events import EnemyKilled, MoveIntent, PlaceBombIntent


def _first_enemy(state):
    return state.world.view(EnemyTag)[0][0]


class TestTick:

    def test_blast_kills_enemy_on_detonation_tick(self, make_state):
        state = make_state(player=(1, 1), enemies=[(4, 4), (5, 5)], enemy_turn_chance=0.0)
        game = Game(state=state)
        game.bombs.place_bomb(4, 3)
        game.run_ticks(BOMB_FUSE_TICKS - 1)
        assert state.enemy_cells() == ((4, 4), (5, 5))
        assert game.tick() is GameStatus.PLAYING
        assert state.enemy_cells() == ((5, 5),)

    def test_ai_frozen_after_death(self, make_state):
        state = make_state(enemies=[(1, 5)], enemy_turn_chance=0.0)
        game = Game(state=state)
        state.world.get(_first_enemy(state), Heading).direction = Direction.RIGHT
        state.world.get(state.player, Vitals).alive = False
        game.run_ticks(3)
        assert state.enemy_cells() == ((1, 5),)

    def test_ai_runs_while_playing(self, make_state):
        state = make_state(enemies=[(1, 5)], enemy_turn_chance=0.0)
        game = Game(state=state)
        state.world.get(_first_enemy(state), Heading).direction = Direction.RIGHT
        game.run_ticks(3)
        assert state.enemy_cells() == ((4, 5),)

    def test_ticks_continue_after_end(self, make_state):
        state = make_state(enemies=[])
        game = Game(state=state)
        state.add_explosion(3, 4, ticks=2)
        assert game.run_ticks(5) is GameStatus.PLAYER_WON
        assert state.explosion_cells() == ()
        assert state.tick == 5


class TestPlayerEntryPoints:

    def test_try_move(self, make_state):
        game = Game(state=make_state(enemies=[(5, 5)]))
        assert game.try_move(Direction.RIGHT) is True
        assert game.try_move(Direction.RIGHT) is False  # crate at (3,1)
        assert game.state.player_pos.cell == (2, 1)

    def test_intents_over_bus(self, make_state, bus):
        game = Game(bus=bus, state=make_state(enemies=[(5, 5)]))
        bus.publish(MoveIntent(Direction.DOWN))
        bus.publish(PlaceBombIntent())
        bus.publish(PlaceBombIntent())
        assert game.state.player_pos.cell == (1, 2)
        assert game.state.bomb_cells() == ((1, 2),)

    def test_dead_player_ignored(self, make_state):
        game = Game(state=make_state())
        game.state.world.get(game.state.player, Vitals).alive = False
        assert game.try_move(Direction.RIGHT) is False
        assert game.place_bomb() is None
        assert game.state.player_pos.cell == (1, 1)
        assert game.state.bomb_cells() == ()

    def test_input_frozen_after_win(self, make_state, bus):
        """A won round ignores moves and bombs, so it stays won"""
        game = Game(bus=bus, state=make_state(enemies=[]))
        assert game.tick() is GameStatus.PLAYER_WON
        assert game.try_move(Direction.RIGHT) is False
        assert game.place_bomb() is None
        bus.publish(MoveIntent(Direction.DOWN))
        bus.publish(PlaceBombIntent())
        assert game.state.player_pos.cell == (1, 1)
        assert game.state.bomb_cells() == ()
        assert game.run_ticks(BOMB_FUSE_TICKS) is GameStatus.PLAYER_WON

    def test_restart_detaches_old_controller(self, bus):
        game = Game(GameConfig(seed=5), bus)
        old = game.state
        new = game.restart()
        assert new is not old
        assert new.seed == 6
        bus.publish(PlaceBombIntent())
        assert old.bomb_cells() == ()
        assert new.bomb_cells() == ((1, 1),)


class TestRounds:

    def test_escape_and_win(self, make_state):
        """Bomb next to the crate, walk clear, last enemy caught"""
        state = make_state(player=(1, 1), enemies=[(4, 2)], enemy_turn_chance=0.0)
        game = Game(state=state)
        before = state.grid.copy()
        for d in (Direction.RIGHT, Direction.DOWN, Direction.RIGHT):
            assert game.try_move(d)
        assert game.place_bomb() is not None
        for d in (Direction.LEFT, Direction.DOWN, Direction.DOWN):
            assert game.try_move(d)
        assert state.player_pos.cell == (2, 4)

        assert game.run_ticks(BOMB_FUSE_TICKS) is GameStatus.PLAYER_WON
        assert before.diff(state.grid) == {(3, 1)}
        assert game.status_text == STATUS_WON

        game.run_ticks(EXPLOSION_TICKS)
        assert state.explosion_cells() == ()
        assert game.status is GameStatus.PLAYER_WON

    def test_bomb_at_start_seeded_round(self):
        """Default 12x12 round: bomb dropped at the start cell and the player stays on it"""
        seed = 2718

        def play():
            game = Game(GameConfig(seed=seed))
            state = game.state
            before = state.grid.copy()
            spawned = state.enemy_count()
            game.place_bomb()

            game.run_ticks(BOMB_FUSE_TICKS)
            after_blast = state.enemy_cells()
            blast = set(state.explosion_cells())

            game.run_ticks(EXPLOSION_TICKS)
            return game, before, spawned, after_blast, blast

        game, before, spawned, after_blast, blast = play()
        state = game.state

        assert blast == {(1, 1), (2, 1), (0, 1), (1, 2), (1, 0)}
        # Start pocket is empty and the other two offsets are border walls
        assert before.diff(state.grid) == set()
        assert game.status is GameStatus.PLAYER_DIED
        assert game.status_text == STATUS_DIED
        assert spawned == 4
        assert not any(cell in blast for cell in after_blast)
        # Enemies stop once the player is dead
        assert state.enemy_cells() == after_blast
        assert state.bomb_cells() == () and state.explosion_cells() == ()

        again = play()
        assert again[3] == after_blast
        assert again[0].state.grid.cells == state.grid.cells


class TestArgs:

    def test_config_from_args(self):
        cfg = config_from_args(_parse_args(["--seed", "9", "--enemies", "2", "--rows", "10", "--cols", "14"]))
        assert (cfg.seed, cfg.enemy_count, cfg.rows, cfg.cols) == (9, 2, 10, 14)

    def test_defaults(self):
        cfg = config_from_args(_parse_args([]))
        assert cfg == GameConfig()

    def test_bad_values_reported_as_usage_error(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["--rows", "3"])
        assert exc.value.code == 2
        assert "grid too small" in capsys.readouterr().err

    def test_negative_enemies(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["--enemies", "-1"])
        assert exc.value.code == 2
        assert "enemy_count" in capsys.readouterr().err


class TestSeededBlast:

    @pytest.mark.parametrize("seed", [3, 2718, 31337])
    def test_crates_and_enemies_in_blast(self, seed, bus):
        """
        Fully crated 12x12 board: the only spawn cells are (2,1) and (1,2).
        A bomb at (2,1) clears exactly the crates at (3,1) and (2,2) and
        takes out exactly the enemies standing on (2,1).
        """
        game = Game(GameConfig(seed=seed, crate_chance=1.0, enemy_turn_chance=0.0), bus)
        state = game.state
        killed = []
        bus.subscribe(EnemyKilled, killed.append)

        eids, rows = state.world.view(EnemyTag, Position)
        spawned = {eid: pos.cell for eid, (_, pos) in zip(eids, rows)}
        assert len(spawned) == 4
        assert set(spawned.values()) <= {(2, 1), (1, 2)}
        doomed = {eid for eid, cell in spawned.items() if cell == (2, 1)}
        before = state.grid.copy()

        assert game.try_move(Direction.RIGHT)
        assert game.place_bomb() is not None
        assert game.try_move(Direction.LEFT)
        assert game.try_move(Direction.DOWN)
        assert state.player_pos.cell == (1, 2)

        status = game.run_ticks(BOMB_FUSE_TICKS)
        assert before.diff(state.grid) == {(3, 1), (2, 2)}
        assert state.grid.cell_at(2, 0) is Cell.WALL
        assert {ev.entity for ev in killed} == doomed
        assert all((ev.x, ev.y) == (2, 1) for ev in killed)
        assert state.enemy_cells() == ((1, 2),) * (4 - len(doomed))
        assert state.player_alive
        assert status is (GameStatus.PLAYER_WON if len(doomed) == 4 else GameStatus.PLAYING)

        game.run_ticks(EXPLOSION_TICKS)
        assert state.explosion_cells() == ()
        assert before.diff(state.grid) == {(3, 1), (2, 2)}
