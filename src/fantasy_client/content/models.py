"""Typed content tree decoded from fantasy API responses.

Every record is a frozen value object; identity is limited to the fields
decoded from the payload.
"""

from pydantic import BaseModel, ConfigDict, Field


_RECORD_CONFIG = ConfigDict(frozen=True, extra="forbid")


class Name(BaseModel):
    """Player name parts."""

    model_config = _RECORD_CONFIG

    full: str = ""
    first: str = ""
    last: str = ""


class Points(BaseModel):
    """Points scored or projected over a coverage period."""

    model_config = _RECORD_CONFIG

    coverage_type: str = ""
    week: int = 0
    season: int = 0
    total: float = 0.0


class TeamLogo(BaseModel):
    """Team logo image reference."""

    model_config = _RECORD_CONFIG

    size: str = ""
    url: str = ""


class Manager(BaseModel):
    """User managing a team."""

    model_config = _RECORD_CONFIG

    manager_id: int = 0
    nickname: str = ""
    guid: str = ""
    is_commissioner: bool = False
    is_current_login: bool = False


class Record(BaseModel):
    """Win/loss/tie totals."""

    model_config = _RECORD_CONFIG

    wins: int = 0
    losses: int = 0
    ties: int = 0
    percentage: float = 0.0


class TeamStandings(BaseModel):
    """Season standing of a team within its league."""

    model_config = _RECORD_CONFIG

    rank: int = 0
    outcome_totals: Record = Field(default_factory=Record)
    points_for: float = 0.0
    points_against: float = 0.0


class SelectedPosition(BaseModel):
    """Lineup slot a player occupies for a week."""

    model_config = _RECORD_CONFIG

    coverage_type: str = ""
    week: int = 0
    position: str = ""


class Stat(BaseModel):
    """Single stat value keyed by stat category id."""

    model_config = _RECORD_CONFIG

    stat_id: int = 0
    value: float = 0.0


class PlayerStats(BaseModel):
    """Stats of a player over a coverage period."""

    model_config = _RECORD_CONFIG

    coverage_type: str = ""
    week: int = 0
    stats: list[Stat] = Field(default_factory=list)


class Player(BaseModel):
    """Player as returned by roster and stats resources."""

    model_config = _RECORD_CONFIG

    player_key: str = ""
    player_id: int = 0
    name: Name = Field(default_factory=Name)
    display_position: str = ""
    editorial_team_abbr: str = ""
    bye_week: int = 0
    eligible_positions: list[str] = Field(default_factory=list)
    selected_position: SelectedPosition = Field(default_factory=SelectedPosition)
    player_points: Points = Field(default_factory=Points)
    player_stats: PlayerStats = Field(default_factory=PlayerStats)


class Roster(BaseModel):
    """Players on a team for a coverage period."""

    model_config = _RECORD_CONFIG

    coverage_type: str = ""
    week: int = 0
    players: list[Player] = Field(default_factory=list)


class Matchup(BaseModel):
    """Head-to-head pairing of teams for a week."""

    model_config = _RECORD_CONFIG

    week: int = 0
    week_start: str = ""
    week_end: str = ""
    status: str = ""
    is_tied: bool = False
    winner_team_key: str = ""
    teams: list["Team"] = Field(default_factory=list)


class Team(BaseModel):
    """Fantasy team."""

    model_config = _RECORD_CONFIG

    team_key: str = ""
    team_id: int = 0
    name: str = ""
    url: str = ""
    team_logos: list[TeamLogo] = Field(default_factory=list)
    is_owned_by_current_login: bool = False
    waiver_priority: int = 0
    number_of_moves: int = 0
    number_of_trades: int = 0
    managers: list[Manager] = Field(default_factory=list)
    matchups: list[Matchup] = Field(default_factory=list)
    roster: Roster = Field(default_factory=Roster)
    team_points: Points = Field(default_factory=Points)
    team_projected_points: Points = Field(default_factory=Points)
    team_standings: TeamStandings = Field(default_factory=TeamStandings)
    players: list[Player] = Field(default_factory=list)


class Scoreboard(BaseModel):
    """Matchups of a league for one or more weeks."""

    model_config = _RECORD_CONFIG

    week: int = 0
    matchups: list[Matchup] = Field(default_factory=list)


class StatCategory(BaseModel):
    """Scoring category configured for a league."""

    model_config = _RECORD_CONFIG

    stat_id: int = 0
    name: str = ""
    display_name: str = ""
    position_type: str = ""


class StatModifier(BaseModel):
    """Points awarded per unit of a stat category."""

    model_config = _RECORD_CONFIG

    stat_id: int = 0
    value: float = 0.0


class Settings(BaseModel):
    """League configuration."""

    model_config = _RECORD_CONFIG

    draft_type: str = ""
    scoring_type: str = ""
    uses_playoff: bool = False
    playoff_start_week: int = 0
    stat_categories: list[StatCategory] = Field(default_factory=list)
    stat_modifiers: list[StatModifier] = Field(default_factory=list)


class League(BaseModel):
    """Fantasy league."""

    model_config = _RECORD_CONFIG

    league_key: str = ""
    league_id: int = 0
    name: str = ""
    url: str = ""
    draft_status: str = ""
    num_teams: int = 0
    scoring_type: str = ""
    current_week: int = 0
    start_week: int = 0
    end_week: int = 0
    is_finished: bool = False
    players: list[Player] = Field(default_factory=list)
    teams: list[Team] = Field(default_factory=list)
    standings: list[Team] = Field(default_factory=list)
    scoreboard: Scoreboard = Field(default_factory=Scoreboard)
    settings: Settings = Field(default_factory=Settings)


class Game(BaseModel):
    """Fantasy game (one sport season) and the user's leagues in it."""

    model_config = _RECORD_CONFIG

    game_key: str = ""
    game_id: int = 0
    name: str = ""
    code: str = ""
    season: int = 0
    leagues: list[League] = Field(default_factory=list)


class User(BaseModel):
    """Authenticated user and their games."""

    model_config = _RECORD_CONFIG

    guid: str = ""
    games: list[Game] = Field(default_factory=list)


class FantasyContent(BaseModel):
    """Root of a decoded response.

    Exactly one branch is populated, chosen by the requested resource. An
    absent branch is ``None``; a present but empty collection is ``[]``.
    """

    model_config = _RECORD_CONFIG

    users: list[User] | None = None
    league: League | None = None
    team: Team | None = None
    players: list[Player] | None = None


Matchup.model_rebuild()
