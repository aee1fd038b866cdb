"""Catalog of the regions the dashboard can report on.

Region codes double as EIA ``location`` / SEDS ``stateId`` facet values. The display
names are the ones used in the NREL capacity tables, which is why the District of
Columbia is spelled ``D.C.``.
"""

NATIONAL: str = "US"
NATIONAL_NAME: str = "Entire US"

STATES: tuple[tuple[str, str], ...] = (
    ("AL", "Alabama"),
    ("AK", "Alaska"),
    ("AZ", "Arizona"),
    ("AR", "Arkansas"),
    ("CA", "California"),
    ("CO", "Colorado"),
    ("CT", "Connecticut"),
    ("DC", "D.C."),
    ("DE", "Delaware"),
    ("FL", "Florida"),
    ("GA", "Georgia"),
    ("HI", "Hawaii"),
    ("ID", "Idaho"),
    ("IL", "Illinois"),
    ("IN", "Indiana"),
    ("IA", "Iowa"),
    ("KS", "Kansas"),
    ("KY", "Kentucky"),
    ("LA", "Louisiana"),
    ("ME", "Maine"),
    ("MD", "Maryland"),
    ("MA", "Massachusetts"),
    ("MI", "Michigan"),
    ("MN", "Minnesota"),
    ("MS", "Mississippi"),
    ("MO", "Missouri"),
    ("MT", "Montana"),
    ("NE", "Nebraska"),
    ("NV", "Nevada"),
    ("NH", "New Hampshire"),
    ("NJ", "New Jersey"),
    ("NM", "New Mexico"),
    ("NY", "New York"),
    ("NC", "North Carolina"),
    ("ND", "North Dakota"),
    ("OH", "Ohio"),
    ("OK", "Oklahoma"),
    ("OR", "Oregon"),
    ("PA", "Pennsylvania"),
    ("RI", "Rhode Island"),
    ("SC", "South Carolina"),
    ("SD", "South Dakota"),
    ("TN", "Tennessee"),
    ("TX", "Texas"),
    ("UT", "Utah"),
    ("VT", "Vermont"),
    ("VA", "Virginia"),
    ("WA", "Washington"),
    ("WV", "West Virginia"),
    ("WI", "Wisconsin"),
    ("WY", "Wyoming"),
)
"""State codes and names, in the order they are offered to the user."""

_CODE_TO_NAME: dict[str, str] = {NATIONAL: NATIONAL_NAME, **dict(STATES)}
_NAME_TO_CODE: dict[str, str] = {name: code for code, name in STATES}


def is_known_region(code: str) -> bool:
    """Whether ``code`` is the national aggregate or a known state."""
    return code in _CODE_TO_NAME


def region_code_for_name(name: str) -> str | None:
    """Map a state name as spelled in the capacity tables to its code.

    Returns None for anything that isn't a state, e.g. footer rows.
    """
    return _NAME_TO_CODE.get(name.strip())


def lookup_region(region: str) -> dict[str, str]:
    """Lookup a region by code or name.

    Args:
        region: Region code (``US``, ``CA``) or name (``California``, ``Entire US``).
          Matching is case-insensitive.

    Returns:
        Region identifiers.

    Examples:
        >>> lookup_region('ca')
        {'code': 'CA', 'name': 'California'}
        >>> lookup_region('Entire US')
        {'code': 'US', 'name': 'Entire US'}
    """
    key = region.strip().lower()
    for code, name in _CODE_TO_NAME.items():
        if key in (code.lower(), name.lower()):
            return {"code": code, "name": name}
    raise ValueError(f"Unknown region: {region!r}")


def region_choices() -> list[tuple[str, str]]:
    """Region codes and names, national aggregate first."""
    return [(NATIONAL, NATIONAL_NAME), *STATES]


STATE_CODES: tuple[str, ...] = tuple(code for code, _ in STATES)
