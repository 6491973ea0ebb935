"""Map NCAA and ESPN wire shapes into the canonical bracket tree."""

from collections import defaultdict
from datetime import datetime, timezone

from ..config import CANONICAL_REGIONS, NATIONAL_SECTION
from ..models.bracket import (
    NATIONAL_REGION,
    BoxScore,
    Game,
    GameDetail,
    GameStatus,
    Play,
    PlayerLine,
    Region,
    Round,
    RoundKind,
    Team,
    TeamSeed,
    Tournament,
)
from ..models.espn_api import (
    EspnCompetitor,
    EspnEvent,
    EspnMatchup,
    EspnTeam,
    EspnTeamPlayers,
    SummaryResponse,
    TournamentEntry,
)
from ..models.ncaa_api import NcaaChampionship, NcaaGame, NcaaTeam

STATUS_VOCABULARY: dict[str, GameStatus] = {
    "IN_PROGRESS": GameStatus.IN_PROGRESS,
    "HALFTIME": GameStatus.IN_PROGRESS,
    "LIVE": GameStatus.IN_PROGRESS,
    "L": GameStatus.IN_PROGRESS,
    "I": GameStatus.IN_PROGRESS,
    "FINAL": GameStatus.FINAL,
    "FINAL_OT": GameStatus.FINAL,
    "F": GameStatus.FINAL,
    "POSTPONED": GameStatus.POSTPONED,
    "CANCELLED": GameStatus.POSTPONED,
    "CANCELED": GameStatus.POSTPONED,
    "SUSPENDED": GameStatus.POSTPONED,
}


def parse_status(raw: str | None) -> GameStatus:
    """Map any status code from either feed to a GameStatus.

    Matching ignores case, the ESPN "STATUS_" prefix and "-"/space separators.
    Unknown codes are Scheduled.
    """
    if not raw:
        return GameStatus.SCHEDULED
    code = raw.strip().upper().replace("-", "_").replace(" ", "_")
    if code.startswith("STATUS_"):
        code = code[len("STATUS_") :]
    return STATUS_VOCABULARY.get(code, GameStatus.SCHEDULED)


def title_case(name: str) -> str:
    """SOUTH -> South, midwest -> Midwest"""
    if not name:
        return ""
    return name[0].upper() + name[1:].lower()


def region_slug(name: str) -> str:
    return name.lower().replace(" ", "-")


def parse_score(value: str | int | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def parse_start_time(value: str | None) -> datetime | None:
    """Parse an ISO 8601 timestamp into an aware datetime (naive means UTC)"""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _build_rounds(rounds_by_kind: dict[RoundKind, list[Game]]) -> list[Round]:
    return [
        Round(kind=kind, games=games) for kind, games in sorted(rounds_by_kind.items())
    ]


# Primary source (henrygd NCAA bracket)


def normalize_ncaa_team(team: NcaaTeam) -> TeamSeed:
    resolved = None
    if team.teamId:
        name = team.name or ""
        resolved = Team(id=team.teamId, name=name, short_name=team.shortName or name)
    placeholder = None if resolved else (team.description or "TBA")
    return TeamSeed(seed=team.seed or 0, team=resolved, placeholder=placeholder)


def normalize_ncaa_game(game: NcaaGame) -> Game:
    """Map a primary-source game; it carries no scores, clock or venue"""
    slots = [normalize_ncaa_team(team) for team in game.teams[:2]]
    while len(slots) < 2:
        slots.append(TeamSeed(placeholder="TBA"))

    winner_id = next(
        (team.teamId for team in game.teams if team.winner and team.teamId), None
    )

    return Game(
        id=str(game.bracketPositionId),
        top=slots[0],
        bottom=slots[1],
        status=parse_status(game.gameState),
        winner_id=winner_id,
    )


def normalize_championship(champ: NcaaChampionship) -> Tournament:
    """Build a Tournament from the primary source's championship block.

    Games are bucketed by section id, then by round (bracketPositionId // 100).
    The reserved national section always becomes the last region.
    """
    region_names: dict[int, str] = {
        region.sectionId: region.title or f"Region {region.sectionId}"
        for region in champ.regions
    }

    sections: dict[int, dict[RoundKind, list[Game]]] = defaultdict(
        lambda: defaultdict(list)
    )
    for game in champ.games:
        kind = RoundKind.from_round_number(game.bracketPositionId // 100)
        sections[game.sectionId][kind].append(normalize_ncaa_game(game))

    section_ids = sorted(sid for sid in sections if sid != NATIONAL_SECTION)
    named = [
        sid
        for name in CANONICAL_REGIONS
        for sid in section_ids
        if region_names.get(sid) == name
    ]
    ordered_ids = named if len(named) == len(section_ids) else section_ids

    regions: list[Region] = []
    for sid in ordered_ids:
        name = region_names.get(sid, f"Region {sid}")
        regions.append(
            Region(id=region_slug(name), name=name, rounds=_build_rounds(sections[sid]))
        )

    if NATIONAL_SECTION in sections:
        regions.append(
            Region(
                id="national",
                name=NATIONAL_REGION,
                rounds=_build_rounds(sections[NATIONAL_SECTION]),
            )
        )

    return Tournament(
        id=f"ncaa-{champ.year}", name=champ.title, year=champ.year, regions=regions
    )


# Secondary source (ESPN tournaments / scoreboard)


def _team_from_espn(team: EspnTeam) -> Team:
    name = team.displayName or ""
    return Team(
        id=team.id or "",
        name=name,
        short_name=team.shortDisplayName or name,
        abbrev=team.abbreviation or "",
        color=team.color,
    )


def normalize_competitor(competitor: EspnCompetitor | None) -> TeamSeed:
    if competitor is None:
        return TeamSeed()
    seed = 0
    if competitor.curatedRank and competitor.curatedRank.current:
        seed = competitor.curatedRank.current
    team = _team_from_espn(competitor.team) if competitor.team else None
    return TeamSeed(seed=seed, team=team, placeholder=competitor.placeholder)


def split_competitors(
    competitors: list[EspnCompetitor],
) -> tuple[EspnCompetitor | None, EspnCompetitor | None]:
    """Home is the top slot and away the bottom, falling back to list order"""
    top = next((c for c in competitors if c.homeAway == "home"), None)
    if top is None and competitors:
        top = competitors[0]
    bottom = next((c for c in competitors if c.homeAway == "away"), None)
    if bottom is None and len(competitors) > 1:
        bottom = competitors[1]
    return top, bottom


def _winner_id(competitors: list[EspnCompetitor]) -> str | None:
    for competitor in competitors:
        if competitor.winner:
            if competitor.team and competitor.team.id:
                return competitor.team.id
            return competitor.id
    return None


def _score_pair(
    top: EspnCompetitor | None, bottom: EspnCompetitor | None
) -> tuple[int, int] | None:
    if top is None or bottom is None:
        return None
    top_score = parse_score(top.score)
    bottom_score = parse_score(bottom.score)
    if top_score is None or bottom_score is None:
        return None
    return top_score, bottom_score


def normalize_event(event: EspnEvent) -> Game:
    """Map a full ESPN event (bracket matchup or scoreboard entry) to a Game"""
    event_id = event.id or ""
    status = event.status
    status_name = status.type.name if status and status.type else None

    location = None
    if event.venue:
        if event.venue.fullName:
            location = event.venue.fullName
        elif event.venue.city and event.venue.state:
            location = f"{event.venue.city}, {event.venue.state}"

    competitors = [
        competitor
        for competition in event.competitions or []
        for competitor in competition.competitors or []
    ]
    top, bottom = split_competitors(competitors)

    score = None
    if top is not None and bottom is not None and top.team and bottom.team:
        score = _score_pair(top, bottom)

    return Game(
        id=event_id,
        event_id=event_id or None,
        top=normalize_competitor(top),
        bottom=normalize_competitor(bottom),
        status=parse_status(status_name),
        score=score,
        winner_id=_winner_id(competitors),
        period=status.period if status else None,
        clock=status.displayClock if status else None,
        start_time=parse_start_time(event.date),
        location=location,
    )


def normalize_matchup(matchup: EspnMatchup) -> Game:
    if matchup.event is not None:
        game = normalize_event(matchup.event)
        if not game.id and matchup.id:
            game.id = matchup.id
            game.event_id = matchup.id
        return game

    competitors = matchup.competitors or []
    top, bottom = split_competitors(competitors)
    score = _score_pair(top, bottom)
    winner_id = _winner_id(competitors)
    finished = score is not None or winner_id is not None

    return Game(
        id=matchup.id or "",
        event_id=matchup.id,
        top=normalize_competitor(top),
        bottom=normalize_competitor(bottom),
        status=GameStatus.FINAL if finished else GameStatus.SCHEDULED,
        score=score,
        winner_id=winner_id,
    )


def normalize_tournament_entry(entry: TournamentEntry, year: int) -> Tournament:
    """Build a Tournament from an ESPN tournament entry.

    Final Four and Championship rounds collapse into the National region;
    earlier rounds are split per matchup by the region named in its note.
    """
    regions: dict[str, dict[RoundKind, list[Game]]] = {}

    rounds = entry.bracket.rounds if entry.bracket and entry.bracket.rounds else []
    for espn_round in rounds:
        kind = RoundKind.from_round_number(
            espn_round.number if espn_round.number is not None else 2
        )
        for matchup in espn_round.iter_matchups():
            if kind.is_final_four:
                region_name = NATIONAL_REGION
            else:
                region_name = title_case(matchup.note or "") or "Region"
            games = regions.setdefault(region_name, defaultdict(list))[kind]
            game = normalize_matchup(matchup)
            if not game.id:
                game.id = f"{region_slug(region_name)}-{kind.value}-{len(games)}"
            games.append(game)

    bracket_names = [name for name in regions if name != NATIONAL_REGION]
    if all(name in bracket_names for name in CANONICAL_REGIONS):
        bracket_names = list(CANONICAL_REGIONS) + [
            name for name in bracket_names if name not in CANONICAL_REGIONS
        ]
    if NATIONAL_REGION in regions:
        bracket_names.append(NATIONAL_REGION)

    return Tournament(
        id=entry.id,
        name=entry.name or "NCAA Tournament",
        year=year,
        regions=[
            Region(
                id=region_slug(name),
                name=name,
                rounds=_build_rounds(regions[name]),
            )
            for name in bracket_names
        ],
    )


# Game summary


def _player_line(name: str, stats: list[str], keys: list[str]) -> PlayerLine:
    def stat(key: str) -> str:
        if key in keys:
            index = keys.index(key)
            if index < len(stats):
                return stats[index]
        return ""

    return PlayerLine(
        name=name,
        points=parse_score(stat("PTS")) or 0,
        rebounds=parse_score(stat("REB")) or 0,
        assists=parse_score(stat("AST")) or 0,
        minutes=stat("MIN"),
        fg=stat("FG"),
        fg3=stat("3PT"),
    )


def _box_score(team_players: EspnTeamPlayers) -> BoxScore:
    team = _team_from_espn(team_players.team) if team_players.team else None
    category = next(
        (s for s in team_players.statistics or [] if s.name == "athletes"), None
    )
    if category is None:
        return BoxScore(team=team)

    keys = category.keys or []
    players = [
        _player_line(
            athlete.athlete.displayName or "" if athlete.athlete else "",
            athlete.stats or [],
            keys,
        )
        for athlete in category.athletes or []
    ]
    totals = _player_line("TOTALS", category.totals or [], keys)
    return BoxScore(team=team, players=players, totals=totals)


def normalize_summary(game_id: str, raw: SummaryResponse) -> GameDetail:
    """Map a game summary; the first box score team is home, the second away"""
    plays = [
        Play(
            period=play.period.number or 0 if play.period else 0,
            clock=play.clock.displayValue or "" if play.clock else "",
            description=play.text or "",
            home_score=play.homeScore or 0,
            away_score=play.awayScore or 0,
        )
        for play in raw.plays or []
    ]

    detail = GameDetail(game_id=game_id, plays=plays)
    team_players = raw.boxscore.players if raw.boxscore and raw.boxscore.players else []
    for index, players in enumerate(team_players):
        if index == 0:
            detail.home_box = _box_score(players)
        else:
            detail.away_box = _box_score(players)
    return detail
