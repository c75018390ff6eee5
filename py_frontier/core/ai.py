"""
AI control of defeated players.

A defeated player's empire keeps running under AI control. The AI is set up
once, on its first activation, by planning logistics for the player's
territory; after that it only spends credits at the start and end of each
production cycle.
"""

import math
from typing import Any, Optional

import structlog

from .distance import DistanceService
from .models import Game, Player
from .planner import LogisticsPlan, LogisticsPlanner
from .stars import StarService

logger = structlog.get_logger()

FIRST_TICK_BULK_UPGRADE_SCI_PERCENTAGE = 20
FIRST_TICK_BULK_UPGRADE_IND_PERCENTAGE = 30
LAST_TICK_BULK_UPGRADE_ECO_PERCENTAGE = 100


class AIService:
    """Plays a turn for AI-controlled players."""

    def __init__(
        self,
        star_upgrade_service: Any,
        carrier_service: Any,
        star_service: Optional[StarService] = None,
        distance_service: Optional[DistanceService] = None,
        planner: Optional[LogisticsPlanner] = None,
    ):
        """
        Initialize the AI service.

        Args:
            star_upgrade_service: Provides upgrade_bulk(game, player, budget_type,
                infrastructure_type, amount, write_to_db)
            carrier_service: Provides clear_player_carrier_waypoints_looped(game, player)
                and assign_carrier_loops(game, player, loops)
            star_service: Star ownership queries
            distance_service: Range formulas
            planner: Logistics planner
        """
        self.star_upgrade_service = star_upgrade_service
        self.carrier_service = carrier_service
        self.star_service = star_service or StarService()
        self.distance_service = distance_service or DistanceService()
        self.planner = planner or LogisticsPlanner()

    def play(self, game: Game, player: Player) -> None:
        """
        Play one tick for an AI-controlled player.

        Raises:
            ValueError: If the player is not under AI control
        """
        if not player.defeated:
            raise ValueError("The player is not under AI control.")

        log = logger.bind(game_id=game.id, player_id=player.id, tick=game.state.tick)

        # A broken AI must never break tick processing for the rest of the game
        try:
            if not player.ai:
                player.ai = True
                self.setup_ai(game, player)

            production_ticks = game.settings.production_ticks
            tick_in_cycle = game.state.tick % production_ticks

            if tick_in_cycle == 1:
                self._play_first_tick(game, player)
            elif tick_in_cycle == production_ticks - 1:
                self._play_last_tick(game, player)
        except Exception:
            log.exception("AI failed to play tick")

        player.credits = max(0, player.credits)

    def setup_ai(self, game: Game, player: Player) -> LogisticsPlan:
        """Prepare a player for AI control and plan its logistics."""
        log = logger.bind(game_id=game.id, player_id=player.id)
        log.info("Setting up AI")

        self.carrier_service.clear_player_carrier_waypoints_looped(game, player)
        player.researching_next = "random"

        player_stars = self.star_service.list_stars_owned_by_player(game.galaxy.stars, player.id)

        # Make sure the AI can bulk upgrade every star
        for star in player_stars:
            star.ignore_bulk_upgrade = False

        hostile_stars = self.star_service.list_hostile_stars(game.galaxy.stars, player.id)
        max_range = self.distance_service.get_max_hyperspace_distance(game)

        plan = self.planner.plan(player_stars, hostile_stars, max_range)
        self.carrier_service.assign_carrier_loops(game, player, plan.carrier_loops)

        log.info("AI setup complete",
                 border_stars=len(plan.border_vertices),
                 carrier_loops=len(plan.carrier_loops))
        return plan

    def _play_first_tick(self, game: Game, player: Player) -> None:
        if not player.credits or player.credits < 0:
            return

        # Bulk upgrade a share of credits into science and industry
        credits_to_spend_sci = math.floor(player.credits / 100 * FIRST_TICK_BULK_UPGRADE_SCI_PERCENTAGE)
        credits_to_spend_ind = math.floor(player.credits / 100 * FIRST_TICK_BULK_UPGRADE_IND_PERCENTAGE)

        if credits_to_spend_sci:
            self.star_upgrade_service.upgrade_bulk(
                game, player, "totalCredits", "science", credits_to_spend_sci, False
            )

        if credits_to_spend_ind:
            self.star_upgrade_service.upgrade_bulk(
                game, player, "totalCredits", "industry", credits_to_spend_ind, False
            )

    def _play_last_tick(self, game: Game, player: Player) -> None:
        if not player.credits or player.credits <= 0:
            return

        # Spend whatever is left on economy
        credits_to_spend_eco = math.floor(player.credits / 100 * LAST_TICK_BULK_UPGRADE_ECO_PERCENTAGE)

        if credits_to_spend_eco:
            self.star_upgrade_service.upgrade_bulk(
                game, player, "totalCredits", "economy", credits_to_spend_eco, False
            )
