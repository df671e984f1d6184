"""Fixture list parsing from pasted text and uploaded CSV.

Text input is one fixture per line, optionally numbered:

    1 Mlada Boleslav - Slovan Liberec
    2. Pumas UNAM vs Pachuca

CSV input needs a header naming the home and away team columns.

Usage:
    from backend.jackpot.fixture_parser import parse_fixture_list

    fixtures = parse_fixture_list(pasted_text)
"""

from __future__ import annotations

import csv
import io
import random
import re
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from backend.common.exceptions import ParseError
from backend.common.logging import get_logger

logger = get_logger("FIXTURE")

# Checked in order; the first delimiter present on a line wins
TEAM_DELIMITERS = (" – ", " — ", " - ", " vs ", " v ", " VS ", " V ", " Vs ")

_LEADING_NUMBER = re.compile(r"^\d+[.)]?\s*")

MATCH_WINDOW = timedelta(days=7)

DEFAULT_LEAGUE = "International League"

# (keywords, league), matched against the lowercased "home away" text
LEAGUE_KEYWORDS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("boleslav", "liberec"), "Czech First League"),
    (("constanta", "galati", "bucuresti", "cluj"), "Romanian Liga I"),
    (("kuressaare", "parnu", "vaprus"), "Estonian Premium League"),
    (("saint-gilloise", "brugge"), "Belgian Pro League"),
    (("hamkam", "fredrikstad"), "Norwegian Eliteserien"),
    (("pumas", "pachuca", "unam"), "Liga MX"),
    (("tecnico", "universitario", "macara"), "Serie A Ecuador"),
    (("radomiak", "pogon", "szczecin"), "Polish Ekstraklasa"),
    (("ayacucho", "atletico", "grau"), "Peruvian Primera Division"),
    (("maribor", "celje"), "Slovenian PrvaLiga"),
    (
        ("almirante", "mitre", "guemes", "gimnasia", "defensores", "belgrano"),
        "Argentine Primera B",
    ),
    (("amazonas", "botafogo", "vitoria", "bragantino"), "Brazilian Serie A"),
    (("vikingur", "valur", "reykjavik"), "Icelandic Urvalsdeild"),
)

HOME_COLUMNS = ("home_team", "homeTeam", "home")
AWAY_COLUMNS = ("away_team", "awayTeam", "away")
DATE_COLUMNS = ("match_date", "matchDate", "date")


@dataclass(frozen=True)
class ParsedFixture:
    home_team: str
    away_team: str
    match_date: datetime
    league: str


def detect_league(home_team: str, away_team: str) -> str:
    """Guess the league from team-name keywords."""
    text = f"{home_team} {away_team}".lower()
    for keywords, league in LEAGUE_KEYWORDS:
        if any(word in text for word in keywords):
            return league
    return DEFAULT_LEAGUE


def split_teams(line: str) -> tuple[str, str] | None:
    """Split one fixture line into (home, away), or None if it is not a fixture."""
    cleaned = _LEADING_NUMBER.sub("", line.strip()).strip()
    for delimiter in TEAM_DELIMITERS:
        if delimiter in cleaned:
            parts = cleaned.split(delimiter)
            home, away = parts[0].strip(), parts[1].strip()
            if home and away:
                return home, away
    return None


def parse_fixture_list(
    text: str,
    now: datetime | None = None,
    rng: random.Random | None = None,
) -> list[ParsedFixture]:
    """Parse a pasted fixture list, skipping lines that are not fixtures.

    Pasted lists carry no kickoff times, so each fixture gets a random
    instant within the next week.
    """
    now = now or datetime.now(UTC)
    rng = rng or random.Random()

    fixtures: list[ParsedFixture] = []
    skipped = 0
    for line in text.splitlines():
        if not line.strip():
            continue
        teams = split_teams(line)
        if teams is None:
            skipped += 1
            continue
        home, away = teams
        fixtures.append(
            ParsedFixture(
                home_team=home,
                away_team=away,
                match_date=now + MATCH_WINDOW * rng.random(),
                league=detect_league(home, away),
            )
        )

    logger.info(
        "Fixture text parsed",
        extra={"data": {"parsed": len(fixtures), "skipped": skipped}},
    )
    return fixtures


def _pick_column(fieldnames: list[str], candidates: tuple[str, ...]) -> str | None:
    for name in candidates:
        if name in fieldnames:
            return name
    return None


def _parse_date(raw: str | None, default: datetime) -> datetime:
    if not raw or not raw.strip():
        return default
    try:
        parsed = datetime.fromisoformat(raw.strip())
    except ValueError as exc:
        raise ParseError("Invalid match date in CSV", context={"match_date": raw}) from exc
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)


def parse_fixture_csv(text: str, default_date: datetime | None = None) -> list[ParsedFixture]:
    """Parse fixtures from CSV text with a header row.

    Raises:
        ParseError: If the header lacks home/away columns or a date is malformed.
    """
    default_date = default_date or datetime.now(UTC)
    reader = csv.DictReader(io.StringIO(text.strip()))
    fieldnames = [name.strip() for name in (reader.fieldnames or [])]
    reader.fieldnames = fieldnames

    home_col = _pick_column(fieldnames, HOME_COLUMNS)
    away_col = _pick_column(fieldnames, AWAY_COLUMNS)
    if home_col is None or away_col is None:
        raise ParseError(
            "CSV must have home_team and away_team columns",
            context={"columns": fieldnames},
        )
    date_col = _pick_column(fieldnames, DATE_COLUMNS)

    fixtures: list[ParsedFixture] = []
    for row in reader:
        home = (row.get(home_col) or "").strip()
        away = (row.get(away_col) or "").strip()
        if not home or not away:
            continue
        match_date = _parse_date(row.get(date_col) if date_col else None, default_date)
        fixtures.append(
            ParsedFixture(
                home_team=home,
                away_team=away,
                match_date=match_date,
                league=detect_league(home, away),
            )
        )

    logger.info("Fixture CSV parsed", extra={"data": {"parsed": len(fixtures)}})
    return fixtures
