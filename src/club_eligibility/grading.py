import re

_TRAILING_DIGITS = re.compile(r"(\d+)$")


def extract_grade(team_name: str) -> int:
    """Numeric grade from the trailing digits of a team name, 0 when there are none.

    Lower numbers are higher competitive ranks: "Premier 1" outranks "Premier 2".
    """
    match = _TRAILING_DIGITS.search(team_name.strip())
    return int(match.group(1)) if match else 0
