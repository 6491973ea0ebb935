"""Unit tests for bracket sources and the provider chain"""

import json
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from conftest import espn_competitor, make_tournament

from bracketwatch.api.errors import ApiFailure, NetworkFailure, NotFound, ParseFailure
from bracketwatch.api.providers import (
    BracketSource,
    EmbeddedSource,
    LocalOverrideSource,
    PrimarySource,
    ProviderChain,
    SecondarySource,
    candidate_years,
    infer_year,
    season_year,
    select_tournament_entry,
)
from bracketwatch.models.bracket import GameStatus, RoundKind
from bracketwatch.models.espn_api import TournamentEntry, TournamentsResponse
from bracketwatch.models.ncaa_api import NcaaBracketResponse


def when(year: int, month: int) -> datetime:
    return datetime(year, month, 15, tzinfo=timezone.utc)


def entry(entry_id: str, name: str, with_bracket: bool = True) -> TournamentEntry:
    bracket = None
    if with_bracket:
        bracket = {
            "rounds": [
                {
                    "number": 2,
                    "matchups": [
                        {
                            "id": f"{entry_id}-m1",
                            "note": "EAST",
                            "competitors": [
                                espn_competitor("1", "Alpha", "home", seed=1),
                                espn_competitor("2", "Beta", "away", seed=16),
                            ],
                        }
                    ],
                }
            ]
        }
    return TournamentEntry.model_validate({"id": entry_id, "name": name, "bracket": bracket})


class StubSource(BracketSource):
    def __init__(self, name, result=None, error=None):
        self.name = name
        self.result = result
        self.error = error
        self.calls = 0

    async def load(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.result


@pytest.mark.unit
class TestYears:
    """Test season and candidate year selection"""

    @pytest.mark.parametrize(
        "now,expected",
        [
            (when(2026, 3), 2026),
            (when(2026, 10), 2026),
            (when(2026, 11), 2027),
            (when(2026, 12), 2027),
            (when(2027, 1), 2027),
        ],
    )
    def test_season_year(self, now, expected):
        assert season_year(now) == expected

    def test_candidate_years_nearest_first(self):
        assert candidate_years(when(2026, 3)) == [2026, 2025, 2027]

    def test_candidate_years_include_fallback_year(self):
        assert candidate_years(when(2030, 3)) == [2030, 2029, 2031, 2025]

    def test_candidate_years_deduplicated(self):
        years = candidate_years(when(2025, 3))
        assert years == [2025, 2024, 2026]
        assert len(years) == len(set(years))

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("bracket-2024.json", 2024),
            ("/data/2023/bracket.json", 2023),
            ("bracket.json", None),
            ("build-12345-1999.json", None),
            ("2025 NCAA Men's Basketball Championship", 2025),
        ],
    )
    def test_infer_year(self, text, expected):
        assert infer_year(text) == expected


@pytest.mark.unit
class TestEntrySelection:
    """Test picking the men's tournament out of ESPN's list"""

    def test_prefers_ncaa_named_entry(self):
        entries = [
            entry("1", "NIT Championship"),
            entry("2", "NCAA Men's Basketball Championship"),
        ]

        assert select_tournament_entry(entries, 2026).id == "2"

    def test_falls_back_to_any_entry_with_bracket(self):
        entries = [entry("1", "Some Classic", with_bracket=False), entry("2", "Some Classic")]

        assert select_tournament_entry(entries, 2026).id == "2"

    def test_skips_named_entries_without_bracket(self):
        entries = [entry("1", "NCAA Tournament", with_bracket=False), entry("2", "Other")]

        assert select_tournament_entry(entries, 2026).id == "2"

    def test_empty_list_raises_not_found(self):
        with pytest.raises(NotFound):
            select_tournament_entry([], 2026)

    def test_no_brackets_raises_not_found(self):
        with pytest.raises(NotFound):
            select_tournament_entry([entry("1", "NCAA Tournament", with_bracket=False)], 2026)


@pytest.mark.unit
class TestSources:
    """Test each bracket source in isolation"""

    @pytest.mark.asyncio
    async def test_primary_source_normalizes_championship(self):
        api = MagicMock()
        api.fetch_championship = AsyncMock(
            return_value=NcaaBracketResponse.model_validate(
                {
                    "championships": [
                        {
                            "year": 2026,
                            "games": [
                                {"bracketPositionId": 201, "sectionId": 2, "gameState": "P"}
                            ],
                            "regions": [{"sectionId": 2, "title": "East"}],
                        }
                    ]
                }
            )
        )

        tournament = await PrimarySource(api, 2026).load()

        api.fetch_championship.assert_awaited_once_with(2026)
        assert tournament.regions[0].name == "East"

    @pytest.mark.asyncio
    async def test_primary_source_without_games_is_not_found(self):
        api = MagicMock()
        api.fetch_championship = AsyncMock(
            return_value=NcaaBracketResponse.model_validate({"championships": [{"games": []}]})
        )

        with pytest.raises(NotFound):
            await PrimarySource(api, 2026).load()

    @pytest.mark.asyncio
    async def test_primary_source_with_empty_response_is_not_found(self):
        api = MagicMock()
        api.fetch_championship = AsyncMock(return_value=NcaaBracketResponse())

        with pytest.raises(NotFound):
            await PrimarySource(api, 2026).load()

    @pytest.mark.asyncio
    async def test_secondary_source_uses_selected_entry(self):
        api = MagicMock()
        api.fetch_tournaments = AsyncMock(
            return_value=TournamentsResponse(
                tournaments=[entry("99", "NCAA Men's Basketball Championship")]
            )
        )

        tournament = await SecondarySource(api, 2024).load()

        api.fetch_tournaments.assert_awaited_once_with(2024)
        assert tournament.id == "99"
        assert tournament.year == 2024
        assert tournament.find_game("99-m1") is not None

    @pytest.mark.asyncio
    async def test_embedded_source_is_the_2025_bracket(self):
        tournament = await EmbeddedSource().load()

        assert tournament.year == 2025
        assert [r.name for r in tournament.regions] == [
            "East",
            "West",
            "South",
            "Midwest",
            "National",
        ]
        for region in tournament.bracket_regions():
            assert [len(r.games) for r in region.rounds] == [8, 4, 2, 1]

        title = tournament.national().round(RoundKind.CHAMPIONSHIP).games[0]
        assert title.status == GameStatus.FINAL
        assert title.winner().name == "Florida"
        assert title.score is None

    @pytest.mark.asyncio
    async def test_local_override_reads_year_from_filename(self, tmp_path):
        path = tmp_path / "bracket-2024.json"
        path.write_text(
            json.dumps(
                {"tournaments": [entry("5", "NCAA Tournament").model_dump(exclude_none=True)]}
            )
        )

        tournament = await LocalOverrideSource(str(path), now=when(2026, 3)).load()

        assert tournament.year == 2024
        assert tournament.id == "5"

    @pytest.mark.asyncio
    async def test_local_override_year_from_entry_name(self, tmp_path):
        path = tmp_path / "bracket.json"
        path.write_text(
            json.dumps(
                {
                    "tournaments": [
                        entry("5", "2023 NCAA Tournament").model_dump(exclude_none=True)
                    ]
                }
            )
        )

        tournament = await LocalOverrideSource(str(path), now=when(2026, 3)).load()

        assert tournament.year == 2023

    @pytest.mark.asyncio
    async def test_local_override_missing_file(self, tmp_path):
        with pytest.raises(NotFound):
            await LocalOverrideSource(str(tmp_path / "missing.json")).load()

    @pytest.mark.asyncio
    async def test_local_override_bad_json(self, tmp_path):
        path = tmp_path / "bracket.json"
        path.write_text("{not json")

        with pytest.raises(ParseFailure):
            await LocalOverrideSource(str(path)).load()


@pytest.mark.unit
class TestProviderChain:
    """Test ordered fallthrough across sources"""

    @pytest.mark.asyncio
    async def test_first_success_wins(self):
        tournament = make_tournament()
        first = StubSource("first", error=NetworkFailure("down"))
        second = StubSource("second", result=tournament)
        third = StubSource("third", result=make_tournament())

        chain = ProviderChain([first, second, third])

        assert await chain.resolve() is tournament
        assert first.calls == 1
        assert third.calls == 0

    @pytest.mark.asyncio
    async def test_all_failing_raises_last_error(self):
        last = ApiFailure("HTTP 500", url="https://example.invalid", status=500)
        chain = ProviderChain(
            [StubSource("a", error=NotFound("nothing")), StubSource("b", error=last)]
        )

        with pytest.raises(ApiFailure) as exc_info:
            await chain.resolve()

        assert exc_info.value is last
        assert chain.last_error is last

    def test_source_without_load_cannot_be_built(self):
        class Incomplete(BracketSource):
            name = "incomplete"

        with pytest.raises(TypeError):
            Incomplete()

    @pytest.mark.asyncio
    async def test_empty_chain_raises_not_found(self):
        with pytest.raises(NotFound):
            await ProviderChain([]).resolve()

    def test_default_chain_order(self):
        chain = ProviderChain.default(api=MagicMock(), now=when(2026, 3))

        assert [type(s) for s in chain.sources] == [
            PrimarySource,
            SecondarySource,
            SecondarySource,
            SecondarySource,
            EmbeddedSource,
        ]
        assert chain.sources[0].year == 2026
        assert [s.year for s in chain.sources[1:4]] == [2026, 2025, 2027]

    def test_override_replaces_chain(self, tmp_path):
        chain = ProviderChain.default(override_path=str(tmp_path / "b.json"))

        assert len(chain.sources) == 1
        assert isinstance(chain.sources[0], LocalOverrideSource)

    @pytest.mark.asyncio
    async def test_failing_override_does_not_fall_through(self, tmp_path):
        chain = ProviderChain.default(override_path=str(tmp_path / "missing.json"))

        with pytest.raises(NotFound):
            await chain.resolve()

    @pytest.mark.asyncio
    async def test_offline_chain_ends_on_embedded_snapshot(self):
        api = MagicMock()
        api.fetch_championship = AsyncMock(side_effect=NetworkFailure("offline"))
        api.fetch_tournaments = AsyncMock(side_effect=NetworkFailure("offline"))

        tournament = await ProviderChain.default(api=api, now=when(2026, 3)).resolve()

        assert tournament.year == 2025
        assert api.fetch_tournaments.await_count == 3
