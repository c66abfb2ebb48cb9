"""Utility functions for huelink.

This module contains helper functions used by the CLI commands:
- similarity_score: Fuzzy string matching for command typo suggestions
- format_light_line: One-line summary of a light from a lights() payload
- parse_target: Turn a command line target into an int id where possible
"""


def similarity_score(s1: str, s2: str) -> int:
    """Calculate similarity score between two strings.

    Returns:
        Similarity score:
        - 100: Exact match (case-insensitive)
        - 80: Prefix match
        - 60: Substring match
        - 0-50: Character sequence match (proportional to matching characters)
        - 0: No match
    """
    s1_lower = s1.lower()
    s2_lower = s2.lower()

    if s1_lower == s2_lower:
        return 100

    if s2_lower.startswith(s1_lower) or s1_lower.startswith(s2_lower):
        return 80

    if s1_lower in s2_lower or s2_lower in s1_lower:
        return 60

    # Character sequence matching
    matches = 0
    j = 0
    for char in s1_lower:
        while j < len(s2_lower):
            if s2_lower[j] == char:
                matches += 1
                j += 1
                break
            j += 1

    if matches > 0:
        score = int((matches / max(len(s1_lower), len(s2_lower))) * 50)
        return score if score > 20 else 0

    return 0


def format_light_line(light_id: str, light: dict) -> str:
    """Describe a light as: Light #1 'Desk' (LCT001) is ON."""
    name = light.get('name', 'Unknown')
    model = light.get('modelid', '?')
    on_off = 'ON' if light.get('state', {}).get('on') else 'off'
    return f"Light #{light_id} '{name}' ({model}) is {on_off}"


def parse_target(target: str) -> int | str:
    """Return an int for numeric ids, otherwise the string unchanged."""
    return int(target) if target.isdigit() else target
