"""Pure functions for the variant length list.

Lengths are edited as one comma-separated text field and stored as a list of
strings. Parsing is lenient: tokens are only trimmed, never deduplicated,
converted to numbers or dropped when empty.
"""


def parse_lengths(text: str | None) -> list[str]:
    """Split comma-separated length input into trimmed tokens.

    Args:
        text: Raw input (e.g., "8.0 mm, 10 mm, 12 mm")

    Returns:
        List of tokens in input order, empty tokens included

    Examples:
        >>> parse_lengths("8.0 mm, 10 mm, 12 mm")
        ['8.0 mm', '10 mm', '12 mm']
        >>> parse_lengths("a,,b")
        ['a', '', 'b']
        >>> parse_lengths("10,")
        ['10', '']
    """
    if text is None:
        return []

    return [token.strip() for token in text.split(",")]


def format_lengths(lengths: list[str]) -> str:
    """Join a length list back into its editable text form.

    Examples:
        >>> format_lengths(["8.0 mm", "10 mm"])
        '8.0 mm, 10 mm'
    """
    return ", ".join(lengths)
