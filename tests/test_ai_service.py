"""
Unit tests for AI control of defeated players.

Tests cover:
- AI activation guard
- One-time setup and logistics planning
- Production cycle spending rules
- Error containment during tick processing
"""

import pytest
from unittest.mock import MagicMock, Mock, call

from py_frontier.core.ai import AIService
from py_frontier.core.models import (
    Game, GameState, GalaxySettings, GameConstants, Galaxy,
    Location, Player, PlayerResearch, ResearchLevel, Star
)
from py_frontier.core.planner import LogisticsPlan


def build_game(tick=5, production_ticks=24):
    """Two empires: p1 owns a 4x4 grid, p2 sits just east of it."""
    stars = []
    for y in range(4):
        for x in range(4):
            stars.append(Star(id=f"p1-{x}-{y}", location=Location(x=x * 30.0, y=y * 30.0),
                              owned_by_player_id="p1", ignore_bulk_upgrade=True))
    stars.append(Star(id="p2-home", location=Location(x=140.0, y=45.0), owned_by_player_id="p2"))
    stars.append(Star(id="neutral", location=Location(x=-500.0, y=-500.0)))

    players = [
        Player(id="p1", defeated=True, credits=100),
        Player(id="p2", research=PlayerResearch(hyperspace=ResearchLevel(level=2))),
    ]
    return Game(
        id="game-1",
        state=GameState(tick=tick),
        settings=GalaxySettings(production_ticks=production_ticks),
        constants=GameConstants(light_year=10.0),
        galaxy=Galaxy(stars=stars, players=players),
    )


class TestAIServiceSetup:
    """Test first activation of the AI."""

    def setup_method(self):
        """Setup test fixtures."""
        self.star_upgrade_service = Mock()
        self.carrier_service = Mock()
        self.service = AIService(self.star_upgrade_service, self.carrier_service)
        self.game = build_game()
        self.player = self.game.galaxy.players[0]

    def test_rejects_player_not_under_ai_control(self):
        """Test that active players cannot be played by the AI."""
        active = self.game.galaxy.players[1]
        with pytest.raises(ValueError):
            self.service.play(self.game, active)
        self.carrier_service.clear_player_carrier_waypoints_looped.assert_not_called()

    def test_first_play_sets_up_ai(self):
        """Test that the first activation plans logistics once."""
        self.service.play(self.game, self.player)

        assert self.player.ai is True
        assert self.player.researching_next == "random"
        self.carrier_service.clear_player_carrier_waypoints_looped.assert_called_once_with(
            self.game, self.player
        )
        self.carrier_service.assign_carrier_loops.assert_called_once()

    def test_setup_runs_once(self):
        """Test that later activations do not plan again."""
        self.service.play(self.game, self.player)
        self.service.play(self.game, self.player)

        assert self.carrier_service.clear_player_carrier_waypoints_looped.call_count == 1
        assert self.carrier_service.assign_carrier_loops.call_count == 1

    def test_setup_resets_bulk_upgrade_flags(self):
        """Test that owned stars are made available for bulk upgrades."""
        self.service.setup_ai(self.game, self.player)

        for star in self.game.galaxy.stars:
            if star.owned_by_player_id == "p1":
                assert star.ignore_bulk_upgrade is False

    def test_setup_plan(self):
        """Test the plan handed to the carrier service."""
        plan = self.service.setup_ai(self.game, self.player)

        assert isinstance(plan, LogisticsPlan)
        assert plan.territory.n_points == 16
        # The 2x2 centre of the grid is interior
        assert len(plan.border_vertices) == 12
        assert len(plan.carrier_loops) > 0

        owned_ids = {s.id for s in self.game.galaxy.stars if s.owned_by_player_id == "p1"}
        for loop in plan.carrier_loops:
            assert loop.from_star.id in owned_ids
            assert loop.to_star.id in owned_ids

        self.carrier_service.assign_carrier_loops.assert_called_once_with(
            self.game, self.player, plan.carrier_loops
        )

    def test_setup_uses_highest_hyperspace_range(self):
        """Test that the planner is given the best range in the game."""
        planner = MagicMock()
        service = AIService(self.star_upgrade_service, self.carrier_service, planner=planner)

        service.setup_ai(self.game, self.player)

        player_stars, hostile_stars, max_range = planner.plan.call_args[0]
        assert len(player_stars) == 16
        assert [s.id for s in hostile_stars] == ["p2-home"]
        # Level 2 hyperspace: (2 + 1.5) light years
        assert max_range == 35.0


class TestAIServiceSpending:
    """Test production cycle spending."""

    def setup_method(self):
        """Setup test fixtures."""
        self.star_upgrade_service = Mock()
        self.carrier_service = Mock()
        self.service = AIService(self.star_upgrade_service, self.carrier_service)

    def _ai_player(self, game, credits):
        player = game.galaxy.players[0]
        player.ai = True
        player.credits = credits
        return player

    def test_first_tick_spending(self):
        """Test science and industry upgrades on the first tick of a cycle."""
        game = build_game(tick=25)
        player = self._ai_player(game, 100)

        self.service.play(game, player)

        assert self.star_upgrade_service.upgrade_bulk.call_args_list == [
            call(game, player, "totalCredits", "science", 20, False),
            call(game, player, "totalCredits", "industry", 30, False),
        ]

    def test_last_tick_spending(self):
        """Test economy upgrade with all credits on the last tick of a cycle."""
        game = build_game(tick=23)
        player = self._ai_player(game, 157)

        self.service.play(game, player)

        self.star_upgrade_service.upgrade_bulk.assert_called_once_with(
            game, player, "totalCredits", "economy", 157, False
        )

    def test_mid_cycle_no_spending(self):
        game = build_game(tick=10)
        player = self._ai_player(game, 500)

        self.service.play(game, player)

        self.star_upgrade_service.upgrade_bulk.assert_not_called()

    @pytest.mark.parametrize("tick", [1, 23])
    def test_no_credits_no_spending(self, tick):
        game = build_game(tick=tick)
        player = self._ai_player(game, 0)

        self.service.play(game, player)

        self.star_upgrade_service.upgrade_bulk.assert_not_called()

    def test_small_amounts_skipped(self):
        """Test that upgrades rounding down to zero are not made."""
        game = build_game(tick=1)
        player = self._ai_player(game, 4)

        self.service.play(game, player)

        # 20% of 4 rounds down to 0, 30% rounds down to 1
        self.star_upgrade_service.upgrade_bulk.assert_called_once_with(
            game, player, "totalCredits", "industry", 1, False
        )


class TestAIServiceErrors:
    """Test that AI failures never break the tick."""

    def setup_method(self):
        self.star_upgrade_service = Mock()
        self.carrier_service = Mock()
        self.service = AIService(self.star_upgrade_service, self.carrier_service)

    def test_spending_error_swallowed(self):
        game = build_game(tick=1)
        player = game.galaxy.players[0]
        player.ai = True
        self.star_upgrade_service.upgrade_bulk.side_effect = RuntimeError("boom")

        self.service.play(game, player)

    def test_setup_error_swallowed(self):
        """Test that a failing plan still leaves the player under AI control."""
        game = build_game()
        player = game.galaxy.players[0]
        self.carrier_service.clear_player_carrier_waypoints_looped.side_effect = RuntimeError("boom")

        self.service.play(game, player)

        assert player.ai is True

    def test_negative_credits_clamped(self):
        game = build_game(tick=10)
        player = game.galaxy.players[0]
        player.ai = True
        player.credits = -40

        self.service.play(game, player)

        assert player.credits == 0
