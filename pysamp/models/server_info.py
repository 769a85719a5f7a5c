"""
Server info model - metadata returned by the info query
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict


@dataclass(frozen=True)
class ServerInfo:
    """Metadata for one queried SA-MP server.

    ip and port are the endpoint the caller queried, not values sent by
    the server. Player counts are trusted as transmitted.
    """
    hostname: str
    ip: str
    port: int
    players_online: int
    max_players: int
    game_mode: str
    language: str
    ping: int = 0
    is_passworded: bool = False

    @property
    def player_count_string(self) -> str:
        """Players as "online/max"."""
        return f"{self.players_online}/{self.max_players}"

    @property
    def address_string(self) -> str:
        """Server address as "ip:port"."""
        return f"{self.ip}:{self.port}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return asdict(self)

    def __str__(self) -> str:
        return f"{self.hostname} ({self.address_string}) - {self.player_count_string} players"
