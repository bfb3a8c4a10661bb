"""XML decoding of fantasy API payloads into the typed content tree.

Field names follow the upstream schema. Numeric elements that are empty
decode to zero; numeric elements holding anything else that does not parse
make the whole payload invalid.
"""

from collections.abc import Callable
from typing import TypeVar
from xml.etree.ElementTree import Element, ParseError

import defusedxml.ElementTree as DefusedET
from defusedxml import DefusedXmlException

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
from fantasy_client.errors import ContentDecodeError


ROOT_TAG = "fantasy_content"

_TRUE_VALUES = frozenset({"1", "t", "T", "true", "TRUE", "True"})
_FALSE_VALUES = frozenset({"0", "f", "F", "false", "FALSE", "False"})

# Placeholder the upstream uses for stats that do not apply
_NOT_APPLICABLE = "-"

T = TypeVar("T")


def decode_fantasy_content(payload: bytes) -> FantasyContent:
    """Decode a response body into a content tree.

    Args:
        payload: Raw XML bytes.

    Returns:
        Decoded content tree.

    Raises:
        ContentDecodeError: If the payload is not well-formed XML, is rejected
            by the XML safety checks, or its root is not ``fantasy_content``.
    """
    try:
        # Leading whitespace before the XML declaration is not well-formed
        root = DefusedET.fromstring(payload.lstrip())
    except ParseError as e:
        msg = f"Malformed XML: {e}"
        raise ContentDecodeError(msg) from e
    except DefusedXmlException as e:
        msg = f"Unsafe XML rejected: {e}"
        raise ContentDecodeError(msg) from e

    _strip_namespaces(root)

    if root.tag != ROOT_TAG:
        msg = f"Expected root element <{ROOT_TAG}>, got <{root.tag}>"
        raise ContentDecodeError(msg)

    users = root.find("users")
    league = root.find("league")
    team = root.find("team")
    players = root.find("players")

    return FantasyContent(
        users=_items(users, "user", _parse_user) if users is not None else None,
        league=_parse_league(league) if league is not None else None,
        team=_parse_team(team) if team is not None else None,
        players=_items(players, "player", _parse_player)
        if players is not None
        else None,
    )


def _strip_namespaces(root: Element) -> None:
    for element in root.iter():
        if isinstance(element.tag, str) and "}" in element.tag:
            element.tag = element.tag.split("}", 1)[1]


def _text(element: Element, path: str) -> str:
    child = element.find(path)
    if child is None or child.text is None:
        return ""
    return child.text.strip()


def _int(element: Element, path: str) -> int:
    value = _text(element, path)
    if not value:
        return 0
    try:
        return int(value)
    except ValueError as e:
        msg = f"Invalid integer in <{path}>: {value!r}"
        raise ContentDecodeError(msg) from e


def _float(element: Element, path: str) -> float:
    value = _text(element, path)
    if not value:
        return 0.0
    try:
        return float(value)
    except ValueError as e:
        msg = f"Invalid number in <{path}>: {value!r}"
        raise ContentDecodeError(msg) from e


def _bool(element: Element, path: str) -> bool:
    value = _text(element, path)
    if not value or value in _FALSE_VALUES:
        return False
    if value in _TRUE_VALUES:
        return True
    msg = f"Invalid boolean in <{path}>: {value!r}"
    raise ContentDecodeError(msg)


def _items(
    element: Element | None,
    path: str,
    parse: Callable[[Element], T],
) -> list[T]:
    if element is None:
        return []
    return [parse(child) for child in element.findall(path)]


def _child(
    element: Element,
    tag: str,
    parse: Callable[[Element], T],
    default: Callable[[], T],
) -> T:
    child = element.find(tag)
    if child is None:
        return default()
    return parse(child)


def _parse_user(element: Element) -> User:
    return User(
        guid=_text(element, "guid"),
        games=_items(element, "games/game", _parse_game),
    )


def _parse_game(element: Element) -> Game:
    return Game(
        game_key=_text(element, "game_key"),
        game_id=_int(element, "game_id"),
        name=_text(element, "name"),
        code=_text(element, "code"),
        season=_int(element, "season"),
        leagues=_items(element, "leagues/league", _parse_league),
    )


def _parse_league(element: Element) -> League:
    return League(
        league_key=_text(element, "league_key"),
        league_id=_int(element, "league_id"),
        name=_text(element, "name"),
        url=_text(element, "url"),
        draft_status=_text(element, "draft_status"),
        num_teams=_int(element, "num_teams"),
        scoring_type=_text(element, "scoring_type"),
        current_week=_int(element, "current_week"),
        start_week=_int(element, "start_week"),
        end_week=_int(element, "end_week"),
        is_finished=_bool(element, "is_finished"),
        players=_items(element, "players/player", _parse_player),
        teams=_items(element, "teams/team", _parse_team),
        standings=_items(element, "standings/teams/team", _parse_team),
        scoreboard=_child(element, "scoreboard", _parse_scoreboard, Scoreboard),
        settings=_child(element, "settings", _parse_settings, Settings),
    )


def _parse_team(element: Element) -> Team:
    return Team(
        team_key=_text(element, "team_key"),
        team_id=_int(element, "team_id"),
        name=_text(element, "name"),
        url=_text(element, "url"),
        team_logos=_items(element, "team_logos/team_logo", _parse_team_logo),
        is_owned_by_current_login=_bool(element, "is_owned_by_current_login"),
        waiver_priority=_int(element, "waiver_priority"),
        number_of_moves=_int(element, "number_of_moves"),
        number_of_trades=_int(element, "number_of_trades"),
        managers=_items(element, "managers/manager", _parse_manager),
        matchups=_items(element, "matchups/matchup", _parse_matchup),
        roster=_child(element, "roster", _parse_roster, Roster),
        team_points=_child(element, "team_points", _parse_points, Points),
        team_projected_points=_child(
            element, "team_projected_points", _parse_points, Points
        ),
        team_standings=_child(
            element, "team_standings", _parse_team_standings, TeamStandings
        ),
        players=_items(element, "players/player", _parse_player),
    )


def _parse_team_logo(element: Element) -> TeamLogo:
    return TeamLogo(size=_text(element, "size"), url=_text(element, "url"))


def _parse_manager(element: Element) -> Manager:
    return Manager(
        manager_id=_int(element, "manager_id"),
        nickname=_text(element, "nickname"),
        guid=_text(element, "guid"),
        is_commissioner=_bool(element, "is_commissioner"),
        is_current_login=_bool(element, "is_current_login"),
    )


def _parse_points(element: Element) -> Points:
    return Points(
        coverage_type=_text(element, "coverage_type"),
        week=_int(element, "week"),
        season=_int(element, "season"),
        total=_float(element, "total"),
    )


def _parse_team_standings(element: Element) -> TeamStandings:
    return TeamStandings(
        rank=_int(element, "rank"),
        outcome_totals=_child(element, "outcome_totals", _parse_record, Record),
        points_for=_float(element, "points_for"),
        points_against=_float(element, "points_against"),
    )


def _parse_record(element: Element) -> Record:
    return Record(
        wins=_int(element, "wins"),
        losses=_int(element, "losses"),
        ties=_int(element, "ties"),
        percentage=_float(element, "percentage"),
    )


def _parse_roster(element: Element) -> Roster:
    return Roster(
        coverage_type=_text(element, "coverage_type"),
        week=_int(element, "week"),
        players=_items(element, "players/player", _parse_player),
    )


def _parse_matchup(element: Element) -> Matchup:
    return Matchup(
        week=_int(element, "week"),
        week_start=_text(element, "week_start"),
        week_end=_text(element, "week_end"),
        status=_text(element, "status"),
        is_tied=_bool(element, "is_tied"),
        winner_team_key=_text(element, "winner_team_key"),
        teams=_items(element, "teams/team", _parse_team),
    )


def _parse_scoreboard(element: Element) -> Scoreboard:
    return Scoreboard(
        week=_int(element, "week"),
        matchups=_items(element, "matchups/matchup", _parse_matchup),
    )


def _parse_settings(element: Element) -> Settings:
    return Settings(
        draft_type=_text(element, "draft_type"),
        scoring_type=_text(element, "scoring_type"),
        uses_playoff=_bool(element, "uses_playoff"),
        playoff_start_week=_int(element, "playoff_start_week"),
        stat_categories=_items(
            element, "stat_categories/stats/stat", _parse_stat_category
        ),
        stat_modifiers=_items(
            element, "stat_modifiers/stats/stat", _parse_stat_modifier
        ),
    )


def _parse_stat_category(element: Element) -> StatCategory:
    return StatCategory(
        stat_id=_int(element, "stat_id"),
        name=_text(element, "name"),
        display_name=_text(element, "display_name"),
        position_type=_text(element, "position_type"),
    )


def _parse_stat_modifier(element: Element) -> StatModifier:
    return StatModifier(
        stat_id=_int(element, "stat_id"),
        value=_float(element, "value"),
    )


def _parse_player(element: Element) -> Player:
    return Player(
        player_key=_text(element, "player_key"),
        player_id=_int(element, "player_id"),
        name=_child(element, "name", _parse_name, Name),
        display_position=_text(element, "display_position"),
        editorial_team_abbr=_text(element, "editorial_team_abbr"),
        bye_week=_int(element, "bye_weeks/week"),
        eligible_positions=[
            (position.text or "").strip()
            for position in element.findall("eligible_positions/position")
        ],
        selected_position=_child(
            element, "selected_position", _parse_selected_position, SelectedPosition
        ),
        player_points=_child(element, "player_points", _parse_points, Points),
        player_stats=_child(element, "player_stats", _parse_player_stats, PlayerStats),
    )


def _parse_name(element: Element) -> Name:
    return Name(
        full=_text(element, "full"),
        first=_text(element, "first"),
        last=_text(element, "last"),
    )


def _parse_selected_position(element: Element) -> SelectedPosition:
    return SelectedPosition(
        coverage_type=_text(element, "coverage_type"),
        week=_int(element, "week"),
        position=_text(element, "position"),
    )


def _parse_player_stats(element: Element) -> PlayerStats:
    return PlayerStats(
        coverage_type=_text(element, "coverage_type"),
        week=_int(element, "week"),
        stats=_items(element, "stats/stat", _parse_stat),
    )


def _parse_stat(element: Element) -> Stat:
    value = _text(element, "value")
    return Stat(
        stat_id=_int(element, "stat_id"),
        value=0.0 if value == _NOT_APPLICABLE else _float(element, "value"),
    )
