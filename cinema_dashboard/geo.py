"""
Country -> cities lookup parsed from a tab-delimited reference file.

Each line carries at least seven tab-separated fields; field 1 is the city name
and field 6 the country name. Lines with fewer fields are skipped.
"""

from __future__ import annotations

from importlib import resources
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from cinema_dashboard.utils.logging import get_logger

log = get_logger(__name__)

CITY_FIELD = 1
COUNTRY_FIELD = 6

GeoTable = Dict[str, List[str]]


def parse_cities(lines: Iterable[str]) -> GeoTable:
    """
    Build the country -> cities mapping, keeping first-seen order.
    """
    table: GeoTable = {}
    skipped = 0
    for line in lines:
        fields = line.rstrip("\r\n").split("\t")
        if len(fields) <= COUNTRY_FIELD:
            skipped += 1
            continue
        city = fields[CITY_FIELD]
        country = fields[COUNTRY_FIELD]
        table.setdefault(country, []).append(city)

    if skipped:
        log.warning(f"Skipped {skipped} malformed geo reference lines", extra={"skipped": skipped})
    return table


def load_geo_table(path: Optional[Path] = None) -> GeoTable:
    """
    Load the geo table from ``path``, or from the bundled cities list.

    Read failures are logged and produce an empty table.
    """
    try:
        if path is None:
            bundled = resources.files("cinema_dashboard") / "resources" / "cities.txt"
            text = bundled.read_text(encoding="utf-8")
        else:
            text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        log.exception("Could not read geo reference data", extra={"path": str(path or "bundled")})
        return {}

    table = parse_cities(text.splitlines())
    log.info(
        "Geo table loaded",
        extra={"countries": len(table), "cities": sum(len(c) for c in table.values())},
    )
    return table


__all__ = ["GeoTable", "parse_cities", "load_geo_table"]
