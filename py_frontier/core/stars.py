"""Star ownership queries."""

from typing import List, Sequence

from .models import Star


class StarService:
    """Lists stars by ownership relative to a player."""

    def list_stars_owned_by_player(self, stars: Sequence[Star], player_id: str) -> List[Star]:
        return [star for star in stars if star.owned_by_player_id == player_id]

    def list_hostile_stars(self, stars: Sequence[Star], player_id: str) -> List[Star]:
        """Stars owned by any other player. Neutral stars are not hostile."""
        return [
            star for star in stars
            if star.owned_by_player_id is not None and star.owned_by_player_id != player_id
        ]
