"""Fantasy sports API client.

Builds resource URLs, fetches them through a content source chain and
extracts the records each accessor promises.
"""

from collections.abc import Mapping, Sequence
from threading import Lock
from types import MappingProxyType, TracebackType

import structlog

from fantasy_client.content.models import (
    FantasyContent,
    League,
    Matchup,
    Player,
    Settings,
    Team,
)
from fantasy_client.content.protocols import ContentSource
from fantasy_client.errors import ContentNotFoundError, UnsupportedYearError
from fantasy_client.fetch.constants import YAHOO_BASE_URL


logger = structlog.get_logger()

# NFL season -> fantasy game key
YEAR_KEYS: Mapping[str, str] = MappingProxyType(
    {
        "nfl": "nfl",
        "2023": "423",
        "2022": "414",
        "2021": "406",
        "2020": "399",
        "2019": "390",
        "2018": "380",
        "2017": "371",
        "2016": "359",
        "2015": "348",
        "2014": "331",
        "2013": "314",
        "2012": "273",
        "2011": "257",
        "2010": "242",
        "2009": "222",
        "2008": "199",
        "2007": "175",
        "2006": "153",
        "2005": "124",
        "2004": "101",
        "2003": "79",
        "2002": "49",
        "2001": "57",
    }
)


class FantasyClient:
    """Facade over a content source for the fantasy sports API.

    Every call to ``get_fantasy_content`` counts as one request, whether or
    not a cache serves it.
    """

    def __init__(
        self,
        provider: ContentSource,
        base_url: str = YAHOO_BASE_URL,
        game_keys: Mapping[str, str] = YEAR_KEYS,
    ) -> None:
        """Initialize the client.

        Args:
            provider: Content source chain (decoder, optionally cached).
            base_url: API root that resource paths are appended to.
            game_keys: Season to game key lookup table.
        """
        self._provider = provider
        self._base_url = base_url.rstrip("/")
        self._game_keys = MappingProxyType(dict(game_keys))
        self._request_count = 0
        self._count_lock = Lock()
        self._log = logger.bind(component="client")

    @property
    def provider(self) -> ContentSource:
        """Content source requests are delegated to."""
        return self._provider

    @property
    def request_count(self) -> int:
        """Number of content requests made through this client."""
        with self._count_lock:
            return self._request_count

    def close(self) -> None:
        """Close the content source chain and its network resources."""
        self._provider.close()

    def __enter__(self) -> "FantasyClient":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def get_fantasy_content(self, url: str) -> FantasyContent:
        """Fetch the content tree for a resource URL.

        Args:
            url: Fully built resource URL.

        Returns:
            Decoded content tree.
        """
        with self._count_lock:
            self._request_count += 1
        return self._provider.get(url)

    def get_user_leagues(self, year: str) -> list[League]:
        """Leagues the authenticated user belongs to for a season.

        Args:
            year: Season (e.g. ``"2013"``) or ``"nfl"`` for the current one.

        Returns:
            Leagues of the user's first game; empty when the user has no
            game or no league that season.

        Raises:
            UnsupportedYearError: If the season has no known game key. Raised
                before any request is made.
            ContentNotFoundError: If no user is returned.
        """
        game_key = self._game_keys.get(year)
        if game_key is None:
            raise UnsupportedYearError(year)

        url = self._url(f"/users;use_login=1/games;game_keys={game_key}/leagues")
        content = self.get_fantasy_content(url)

        if not content.users:
            msg = "no users returned for current user"
            raise ContentNotFoundError(msg, url=url)

        games = content.users[0].games
        if not games:
            self._log.debug("no_games_for_year", year=year)
            return []
        return list(games[0].leagues)

    def get_players_stats(
        self,
        league_key: str,
        week: int,
        players: Sequence[Player],
    ) -> list[Player]:
        """Weekly stats for a set of players within a league.

        Args:
            league_key: League whose scoring applies.
            week: Week number.
            players: Players to fetch; only their keys are sent.

        Returns:
            Players with stats populated.
        """
        player_keys = ",".join(player.player_key for player in players)
        url = self._url(
            f"/league/{league_key}/players;player_keys={player_keys}"
            f"/stats;type=week;week={week}"
        )
        return list(self._league(url).players)

    def get_team_roster(self, team_key: str, week: int) -> list[Player]:
        """Players on a team's roster for a week.

        Args:
            team_key: Team to look up.
            week: Week number.

        Returns:
            Roster players, possibly empty.
        """
        url = self._url(f"/team/{team_key}/roster;week={week}")
        return list(self._team(url).roster.players)

    def get_league_standings(self, league_key: str) -> League:
        """League with its current standings.

        Args:
            league_key: League to look up.

        Returns:
            League record with ``standings`` populated.
        """
        return self._league(self._url(f"/league/{league_key}/standings"))

    def get_league_metadata(self, league_key: str) -> League:
        """League metadata (name, weeks, status).

        Args:
            league_key: League to look up.

        Returns:
            League record.
        """
        return self._league(self._url(f"/league/{league_key}/metadata"))

    def get_league_settings(self, league_key: str) -> Settings:
        """Scoring and playoff configuration of a league.

        Args:
            league_key: League to look up.

        Returns:
            League settings.
        """
        return self._league(self._url(f"/league/{league_key}/settings")).settings

    def get_team(self, team_key: str) -> Team:
        """A single team.

        Args:
            team_key: Team to look up.

        Returns:
            Team record.

        Raises:
            ContentNotFoundError: If the response holds no team.
        """
        return self._team(self._url(f"/team/{team_key}"))

    def get_all_team_stats(self, league_key: str, week: int) -> list[Team]:
        """Weekly stats for every team in a league.

        Args:
            league_key: League to look up.
            week: Week number.

        Returns:
            Teams with points populated.
        """
        url = self._url(f"/league/{league_key}/teams/stats;type=week;week={week}")
        return list(self._league(url).teams)

    def get_all_teams(self, league_key: str) -> list[Team]:
        """Every team in a league.

        Args:
            league_key: League to look up.

        Returns:
            League teams.
        """
        return list(self._league(self._url(f"/league/{league_key}/teams")).teams)

    def get_matchups_for_week_range(
        self,
        league_key: str,
        start_week: int,
        end_week: int,
    ) -> dict[int, list[Matchup]]:
        """Scoreboard matchups for an inclusive range of weeks.

        Args:
            league_key: League to look up.
            start_week: First week.
            end_week: Last week.

        Returns:
            Matchups grouped by week; weeks without matchups are absent.

        Raises:
            ValueError: If the range is empty or starts before week 1. Raised
                before any request is made.
        """
        if start_week < 1 or end_week < start_week:
            msg = f"invalid week range: {start_week}-{end_week}"
            raise ValueError(msg)

        weeks = ",".join(str(week) for week in range(start_week, end_week + 1))
        url = self._url(f"/league/{league_key}/scoreboard;week={weeks}")
        league = self._league(url)

        matchups: dict[int, list[Matchup]] = {}
        for matchup in league.scoreboard.matchups:
            matchups.setdefault(matchup.week, []).append(matchup)
        return matchups

    def _url(self, path: str) -> str:
        return f"{self._base_url}{path}"

    def _league(self, url: str) -> League:
        content = self.get_fantasy_content(url)
        if content.league is None:
            msg = "no league returned"
            raise ContentNotFoundError(msg, url=url)
        return content.league

    def _team(self, url: str) -> Team:
        content = self.get_fantasy_content(url)
        if content.team is None:
            msg = "no team returned"
            raise ContentNotFoundError(msg, url=url)
        return content.team
