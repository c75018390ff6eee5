"""Distance and range calculations between galaxy locations."""

import math
from typing import List, Optional, Sequence

from .models import Game, Location


class DistanceService:
    """Euclidean distance helpers and research-driven range formulas."""

    def get_distance_between_locations(self, loc1: Location, loc2: Location) -> float:
        return math.sqrt(self.get_distance_squared_between_locations(loc1, loc2))

    def get_distance_along_location_list(self, locations: Sequence[Location]) -> Optional[float]:
        """Total length of the path visiting the locations in order, None for fewer than 2."""
        if not locations or len(locations) < 2:
            return None

        distance = 0.0
        last = locations[0]

        for current in locations[1:]:
            distance += self.get_distance_between_locations(last, current)
            last = current

        return distance

    def get_distance_squared_between_locations(self, loc1: Location, loc2: Location) -> float:
        xs = loc2.x - loc1.x
        ys = loc2.y - loc1.y

        return xs * xs + ys * ys

    def get_closest_locations(self, loc: Location, locs: Sequence[Location], amount: int) -> List[Location]:
        """
        Return up to `amount` locations sorted by distance to `loc`.

        Locations at exactly the same coordinates as `loc` are ignored.
        """
        others = [a for a in locs if not (a.x == loc.x and a.y == loc.y)]
        others.sort(key=lambda a: self.get_distance_squared_between_locations(loc, a))

        return others[:amount]

    def get_closest_location(self, loc: Location, locs: Sequence[Location]) -> Optional[Location]:
        closest = self.get_closest_locations(loc, locs, 1)
        return closest[0] if closest else None

    def get_distance_to_closest_location(self, loc: Location, locs: Sequence[Location]) -> Optional[float]:
        closest = self.get_closest_location(loc, locs)
        if closest is None:
            return None

        return self.get_distance_between_locations(loc, closest)

    def get_furthest_locations(self, loc: Location, locs: Sequence[Location], amount: int) -> List[Location]:
        return list(reversed(self.get_closest_locations(loc, locs, len(locs))))[:amount]

    def get_furthest_location(self, loc: Location, locs: Sequence[Location]) -> Optional[Location]:
        furthest = self.get_furthest_locations(loc, locs, 1)
        return furthest[0] if furthest else None

    def get_scanning_distance(self, game: Game, scanning: Optional[int]) -> float:
        return ((scanning or 1) + 1) * game.constants.light_year

    def get_hyperspace_distance(self, game: Game, hyperspace: Optional[int]) -> float:
        return ((hyperspace or 1) + 1.5) * game.constants.light_year

    def get_max_hyperspace_distance(self, game: Game) -> float:
        """
        Hyperspace range of the best-researched player in the game.

        Falls back to level 1 when the game has no players.
        """
        levels = [player.research.hyperspace.level for player in game.galaxy.players]
        highest_level = max(levels) if levels else 1

        return self.get_hyperspace_distance(game, highest_level)

    def get_angle_towards_location(self, source: Location, destination: Location) -> float:
        delta_x = destination.x - source.x
        delta_y = destination.y - source.y

        return math.atan2(delta_y, delta_x)

    def get_next_location_towards_location(self, source: Location, destination: Location,
                                           distance: float) -> Location:
        angle = self.get_angle_towards_location(source, destination)

        return Location(
            x=source.x + distance * math.cos(angle),
            y=source.y + distance * math.sin(angle),
        )
