#!/usr/bin/env python3
"""
Demonstration of frontier logistics planning.

Builds a small galaxy with two neighbouring empires, hands one of them to the
AI and prints the supply loops it plans:
1. Territory triangulation
2. Border star detection
3. Threat-ranked supply routing
"""

import numpy as np

from py_frontier.config import settings
from py_frontier.core import AIService
from py_frontier.core.models import Game, Galaxy, GameState, Location, Player, Star
from py_frontier.logging_config import configure_logging


class PrintingCarrierService:
    """Stands in for the carrier executor and prints what it is asked to do."""

    def clear_player_carrier_waypoints_looped(self, game, player):
        print(f"   - Cleared looped waypoints for {player.alias}")

    def assign_carrier_loops(self, game, player, loops):
        print(f"   - {len(loops)} carrier loops assigned:")
        for loop in loops:
            print(f"       {loop.from_star.name:>10} -> {loop.to_star.name}")


class NoUpgrades:
    """Stands in for the star upgrade service and spends nothing."""

    def upgrade_bulk(self, game, player, budget_type, infrastructure_type, amount, write_to_db):
        print(f"   - Would spend {amount} on {infrastructure_type}")


def make_empire(owner, center, n_stars, spread, rng):
    coords = rng.normal(center, spread, size=(n_stars, 2))
    return [
        Star(id=f"{owner}-{i}", name=f"{owner.upper()}-{i:02d}",
             location=Location(x=float(x), y=float(y)), owned_by_player_id=owner)
        for i, (x, y) in enumerate(coords)
    ]


def main():
    configure_logging(settings)
    rng = np.random.default_rng(2024)

    print("=== Frontier Logistics Demo ===\n")

    print("1. Generating galaxy...")
    stars = make_empire("west", (0.0, 0.0), 40, 120.0, rng) + make_empire("east", (450.0, 0.0), 30, 100.0, rng)
    players = [Player(id="west", alias="West", defeated=True, credits=250),
               Player(id="east", alias="East")]
    game = Game(id="demo", state=GameState(tick=1), galaxy=Galaxy(stars=stars, players=players))
    print(f"   - {len(stars)} stars, {len(players)} players")

    print("\n2. Handing West to the AI...")
    service = AIService(NoUpgrades(), PrintingCarrierService())
    plan = service.setup_ai(game, players[0])

    print("\n3. Plan summary")
    print(f"   - Triangles: {plan.territory.n_triangles}")
    print(f"   - Border stars: {len(plan.border_vertices)}")
    print(f"   - Threatened border stars: {plan.threatened_vertices}")
    print(f"   - Supply edges: {len(plan.carrier_loops)}")

    print("\n4. Playing the first tick of the production cycle...")
    players[0].ai = True
    service.play(game, players[0])


if __name__ == "__main__":
    main()
