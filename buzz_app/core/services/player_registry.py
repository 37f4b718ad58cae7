"""Service owning the four fixed player slots."""

from __future__ import annotations

import logging

from buzz_app.core.models import Player, PlayerKey

logger = logging.getLogger(__name__)


class PlayerRegistry:
    """Tracks join state, scores and round fields for every controller slot."""

    def __init__(self) -> None:
        self._players: dict[PlayerKey, Player] = {key: Player(key=key) for key in PlayerKey}

    def get(self, key: PlayerKey) -> Player:
        return self._players[key]

    def players(self) -> list[Player]:
        """Return all four slots in controller order."""
        return list(self._players.values())

    def join(self, key: PlayerKey) -> bool:
        """Mark a slot as joined. Returns False if it already was."""
        player = self._players[key]
        if player.joined:
            return False
        player.joined = True
        player.reset_game()
        logger.info("%s joined", key.value)
        return True

    def set_name(self, key: PlayerKey, name: str) -> None:
        self._players[key].name = name

    def is_joined(self, key: PlayerKey) -> bool:
        return self._players[key].joined

    def get_joined(self) -> list[Player]:
        return [player for player in self._players.values() if player.joined]

    def joined_count(self) -> int:
        return len(self.get_joined())

    def all_committed(self) -> bool:
        joined = self.get_joined()
        return bool(joined) and all(player.committed for player in joined)

    def reset_for_game(self) -> None:
        """Clear scores, streaks and statistics while keeping who has joined."""
        for player in self._players.values():
            player.reset_game()

    def reset_round(self) -> None:
        for player in self._players.values():
            player.reset_round()

    def unjoin_all(self) -> None:
        for player in self._players.values():
            player.joined = False
            player.name = ""
            player.reset_game()
