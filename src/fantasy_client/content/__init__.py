"""Decoded content tree and the XML content source."""

from fantasy_client.content.decoder import decode_fantasy_content
from fantasy_client.content.models import (
    FantasyContent,
    Game,
    League,
    Manager,
    Matchup,
    Name,
    Player,
    PlayerStats,
    Points,
    Record,
    Roster,
    Scoreboard,
    SelectedPosition,
    Settings,
    Stat,
    StatCategory,
    StatModifier,
    Team,
    TeamLogo,
    TeamStandings,
    User,
)
from fantasy_client.content.protocols import ContentSource
from fantasy_client.content.provider import XmlContentProvider


__all__ = [
    "ContentSource",
    "FantasyContent",
    "Game",
    "League",
    "Manager",
    "Matchup",
    "Name",
    "Player",
    "PlayerStats",
    "Points",
    "Record",
    "Roster",
    "Scoreboard",
    "SelectedPosition",
    "Settings",
    "Stat",
    "StatCategory",
    "StatModifier",
    "Team",
    "TeamLogo",
    "TeamStandings",
    "User",
    "XmlContentProvider",
    "decode_fantasy_content",
]
