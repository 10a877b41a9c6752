"""Storage row parsers."""

from .rows import extract_joined, parse_league_calc_row, parse_roster_row, parse_rows, parse_stat_row

__all__ = [
    "extract_joined",
    "parse_league_calc_row",
    "parse_roster_row",
    "parse_rows",
    "parse_stat_row",
]
