"""Embedded 2025 bracket snapshot in the ESPN tournaments shape.

Used when no live source answers. Results are complete through the title
game; scores are not included.
"""

from typing import Any

FALLBACK_TOURNAMENT_ID = "22"
FALLBACK_TOURNAMENT_NAME = "2025 NCAA Men's Basketball Championship"

# First-round field per region in bracket order (1v16, 8v9, 5v12, 4v13, 6v11, 3v14, 7v10, 2v15)
FIELD: dict[str, list[tuple[int, str]]] = {
    "South": [
        (1, "Auburn"), (16, "Alabama State"),
        (8, "Louisville"), (9, "Creighton"),
        (5, "Michigan"), (12, "UC San Diego"),
        (4, "Texas A&M"), (13, "Yale"),
        (6, "Ole Miss"), (11, "North Carolina"),
        (3, "Iowa State"), (14, "Lipscomb"),
        (7, "Marquette"), (10, "New Mexico"),
        (2, "Michigan State"), (15, "Bryant"),
    ],
    "East": [
        (1, "Duke"), (16, "Mount St. Mary's"),
        (8, "Mississippi State"), (9, "Baylor"),
        (5, "Oregon"), (12, "Liberty"),
        (4, "Arizona"), (13, "Akron"),
        (6, "BYU"), (11, "VCU"),
        (3, "Wisconsin"), (14, "Montana"),
        (7, "Saint Mary's"), (10, "Vanderbilt"),
        (2, "Alabama"), (15, "Robert Morris"),
    ],
    "Midwest": [
        (1, "Houston"), (16, "SIU Edwardsville"),
        (8, "Gonzaga"), (9, "Georgia"),
        (5, "Clemson"), (12, "McNeese"),
        (4, "Purdue"), (13, "High Point"),
        (6, "Illinois"), (11, "Xavier"),
        (3, "Kentucky"), (14, "Troy"),
        (7, "UCLA"), (10, "Utah State"),
        (2, "Tennessee"), (15, "Wofford"),
    ],
    "West": [
        (1, "Florida"), (16, "Norfolk State"),
        (8, "UConn"), (9, "Oklahoma"),
        (5, "Memphis"), (12, "Colorado State"),
        (4, "Maryland"), (13, "Grand Canyon"),
        (6, "Missouri"), (11, "Drake"),
        (3, "Texas Tech"), (14, "UNC Wilmington"),
        (7, "Kansas"), (10, "Arkansas"),
        (2, "St. John's"), (15, "Omaha"),
    ],
}

# Winners of the 1st round, 2nd round, Sweet 16 and Elite Eight, in bracket order
WINNERS: dict[str, list[list[str]]] = {
    "South": [
        ["Auburn", "Creighton", "Michigan", "Texas A&M",
         "Ole Miss", "Iowa State", "New Mexico", "Michigan State"],
        ["Auburn", "Michigan", "Ole Miss", "Michigan State"],
        ["Auburn", "Michigan State"],
        ["Auburn"],
    ],
    "East": [
        ["Duke", "Baylor", "Oregon", "Arizona",
         "BYU", "Wisconsin", "Saint Mary's", "Alabama"],
        ["Duke", "Arizona", "BYU", "Alabama"],
        ["Duke", "Alabama"],
        ["Duke"],
    ],
    "Midwest": [
        ["Houston", "Gonzaga", "McNeese", "Purdue",
         "Illinois", "Kentucky", "UCLA", "Tennessee"],
        ["Houston", "Purdue", "Kentucky", "Tennessee"],
        ["Houston", "Tennessee"],
        ["Houston"],
    ],
    "West": [
        ["Florida", "UConn", "Colorado State", "Maryland",
         "Drake", "Texas Tech", "Arkansas", "St. John's"],
        ["Florida", "Maryland", "Texas Tech", "Arkansas"],
        ["Florida", "Texas Tech"],
        ["Florida"],
    ],
}

# National semifinals pair the region champions; then the title game
SEMIFINALS: list[tuple[str, str, str]] = [
    ("South", "West", "Florida"),
    ("East", "Midwest", "Houston"),
]
CHAMPION = "Florida"

ROUND_NAMES = {
    2: "1st Round",
    3: "2nd Round",
    4: "Sweet 16",
    5: "Elite 8",
    6: "Final Four",
    7: "National Championship",
}


def _team_id(name: str) -> str:
    return "".join(ch for ch in name.lower() if ch.isalnum())


def _competitor(seed: int, name: str, home_away: str, winner: bool) -> dict[str, Any]:
    return {
        "id": _team_id(name),
        "homeAway": home_away,
        "winner": winner,
        "curatedRank": {"current": seed},
        "team": {
            "id": _team_id(name),
            "displayName": name,
            "shortDisplayName": name,
            "abbreviation": _team_id(name)[:4].upper(),
        },
    }


def _matchup(
    game_id: str,
    note: str | None,
    top: tuple[int, str],
    bottom: tuple[int, str],
    winner: str,
) -> dict[str, Any]:
    matchup: dict[str, Any] = {
        "id": game_id,
        "event": {
            "id": game_id,
            "name": f"{top[1]} vs {bottom[1]}",
            "status": {"type": {"name": "STATUS_FINAL", "completed": True}},
            "competitions": [
                {
                    "competitors": [
                        _competitor(top[0], top[1], "home", top[1] == winner),
                        _competitor(bottom[0], bottom[1], "away", bottom[1] == winner),
                    ]
                }
            ],
        },
    }
    if note:
        matchup["note"] = note.upper()
    return matchup


def build_fallback_bracket() -> dict[str, Any]:
    """Assemble the snapshot document from the field and results tables"""
    seeds = {name: seed for field in FIELD.values() for seed, name in field}
    rounds: dict[int, list[dict[str, Any]]] = {number: [] for number in ROUND_NAMES}

    for region, field in FIELD.items():
        entrants = [name for _, name in field]
        for depth, winners in enumerate(WINNERS[region]):
            number = depth + 2
            for i, winner in enumerate(winners):
                top, bottom = entrants[2 * i], entrants[2 * i + 1]
                rounds[number].append(
                    _matchup(
                        f"2025-{region.lower()}-{number}-{i + 1}",
                        region,
                        (seeds[top], top),
                        (seeds[bottom], bottom),
                        winner,
                    )
                )
            entrants = winners

    finalists = []
    for i, (left, right, winner) in enumerate(SEMIFINALS):
        top, bottom = WINNERS[left][-1][0], WINNERS[right][-1][0]
        rounds[6].append(
            _matchup(
                f"2025-national-6-{i + 1}",
                None,
                (seeds[top], top),
                (seeds[bottom], bottom),
                winner,
            )
        )
        finalists.append(winner)

    rounds[7].append(
        _matchup(
            "2025-national-7-1",
            None,
            (seeds[finalists[0]], finalists[0]),
            (seeds[finalists[1]], finalists[1]),
            CHAMPION,
        )
    )

    return {
        "tournaments": [
            {
                "id": FALLBACK_TOURNAMENT_ID,
                "name": FALLBACK_TOURNAMENT_NAME,
                "bracket": {
                    "full": True,
                    "rounds": [
                        {"number": number, "name": name, "matchups": rounds[number]}
                        for number, name in ROUND_NAMES.items()
                    ],
                },
            }
        ]
    }


FALLBACK_BRACKET: dict[str, Any] = build_fallback_bracket()
