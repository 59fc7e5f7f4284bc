from __future__ import annotations

import html as html_lib
import re

from tess_hub.domain.profile import CatalogSource
from tess_hub.platform.catalogs import records as keys
from tess_hub.platform.catalogs.records import RawSourceRecord

EXOFOP_TARGET_URL = "https://exofop.ipac.caltech.edu/tess/target.php"

_TITLE_RE = re.compile(r"<title[^>]*>(.*?)</title>", re.IGNORECASE | re.DOTALL)
_H1_RE = re.compile(r"<h1[^>]*>(.*?)</h1>", re.IGNORECASE | re.DOTALL)
_BODY_RE = re.compile(r"<body[^>]*>(.*)</body>", re.IGNORECASE | re.DOTALL)
_ROW_RE = re.compile(r"<tr[^>]*>(.*?)</tr>", re.IGNORECASE | re.DOTALL)
_CELL_RE = re.compile(r"<t[hd][^>]*>(.*?)</t[hd]>", re.IGNORECASE | re.DOTALL)
_DROPPED_ELEMENTS_RE = re.compile(r"<(sup|a)\b[^>]*>.*?</\1>", re.IGNORECASE | re.DOTALL)
_TAG_RE = re.compile(r"<[^>]+>")
_NUMBER_SPLIT_RE = re.compile(r"[\s±~]")

# (record key, candidate row labels in priority order)
_STELLAR_FIELDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    (keys.TEMPERATURE_K, ("teff (k)", "teff")),
    (keys.SURFACE_GRAVITY_LOGG, ("log(g)", "logg")),
    (keys.RADIUS_RSUN, ("radius (r_sun)", "radius")),
    (keys.MASS_MSUN, ("mass (m_sun)", "mass")),
    (keys.METALLICITY_FEH, ("metallicity", "fe/h")),
    (keys.LUMINOSITY_LSUN, ("luminosity (l_sun)", "luminosity")),
)


def target_page_url(tic_id: str | int) -> str:
    return f"{EXOFOP_TARGET_URL}?id={tic_id}"


def _text(fragment: str) -> str:
    return " ".join(html_lib.unescape(_TAG_RE.sub(" ", fragment or "")).split())


def _is_not_found(page: str) -> bool:
    title = _TITLE_RE.search(page)
    if title and "Error" in _text(title.group(1)):
        return True
    body = _BODY_RE.search(page)
    return "not found in the TIC" in _text(body.group(1) if body else page)


def _parse_table_rows(page: str) -> dict[str, str]:
    parsed: dict[str, str] = {}
    for row in _ROW_RE.findall(page):
        cells = _CELL_RE.findall(row)
        if len(cells) < 2:
            continue
        key = _text(cells[0]).lower().replace(":", "")
        value = _text(_DROPPED_ELEMENTS_RE.sub("", cells[1]))
        # Prefer values quoted with an uncertainty; they are the measured ones.
        if key and value and (key not in parsed or "±" in value):
            parsed[key] = value
    return parsed


def _leading_float(text: str) -> float | None:
    token = _NUMBER_SPLIT_RE.split(text.strip(), maxsplit=1)[0]
    try:
        return float(token)
    except ValueError:
        return None


def _lookup_float(parsed: dict[str, str], labels: tuple[str, ...]) -> float | None:
    for label in labels:
        if label in parsed:
            return _leading_float(parsed[label])
        for parsed_key, value in parsed.items():
            if label in parsed_key:
                return _leading_float(value)
    return None


def parse_exofop_target_page(page: str, tic_id: str) -> RawSourceRecord:
    """Parse an ExoFOP-TESS target page into a stellar-parameter record.

    The star name is the ``<h1>`` text before any parenthesis. Pages whose
    title mentions an error, or that say the target is not in the TIC, give an
    invalid-identifier record.
    """
    if _is_not_found(page):
        return RawSourceRecord(source=CatalogSource.EXOFOP_TESS, invalid_identifier=True)

    parsed = _parse_table_rows(page)
    values: dict[str, float | str] = {}

    heading = _H1_RE.search(page)
    name = _text(heading.group(1)).split("(")[0].strip() if heading else ""
    values[keys.STAR_NAME] = name or f"TIC {tic_id}"

    for key, labels in _STELLAR_FIELDS:
        number = _lookup_float(parsed, labels)
        if number is not None:
            values[key] = number

    return RawSourceRecord(source=CatalogSource.EXOFOP_TESS, values=values)


__all__ = ["EXOFOP_TARGET_URL", "parse_exofop_target_page", "target_page_url"]
