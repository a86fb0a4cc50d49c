"""Name validation and wire constants for MiniON encoding/decoding."""

from .errors import InvalidNameError

# Separates the name from the length field
NAME_DELIMITER = "|"

# Separates the length field from the content
LENGTH_DELIMITER = "~"

# Characters a name can never contain (there is no escaping)
RESERVED_CHARS = frozenset(NAME_DELIMITER + LENGTH_DELIMITER)

NAME_DELIMITER_BYTE = NAME_DELIMITER.encode("ascii")
LENGTH_DELIMITER_BYTE = LENGTH_DELIMITER.encode("ascii")


def name_problem(name: str, printable: bool = True) -> str | None:
    """
    Describe why a string cannot be used as a record name.

    A name is valid if:
    - Non-empty
    - No '|' or '~'
    - Only printable characters (no newlines, tabs or other control chars)

    Args:
        name: The candidate name.
        printable: Whether to require printable characters. The parser
            turns this off, since the wire format allows any other byte.

    Returns:
        A short reason, or None if the name is valid.
    """
    if not name:
        return "name is empty"

    reserved = next((c for c in name if c in RESERVED_CHARS), None)
    if reserved is not None:
        return f"name contains reserved character {reserved!r}"

    if printable and not name.isprintable():
        return "name contains non-printable characters"

    return None


def is_valid_name(name: str) -> bool:
    """Check if a string can be encoded as a record name."""
    return isinstance(name, str) and name_problem(name) is None


def validate_name(name: str) -> str:
    """
    Ensure a record name can be encoded unambiguously.

    Args:
        name: The candidate name.

    Returns:
        The name, unchanged.

    Raises:
        InvalidNameError: If the name is not a string or is not a valid name.
    """
    if not isinstance(name, str):
        raise InvalidNameError(f"Record name must be str, not {type(name).__name__}")

    problem = name_problem(name)
    if problem is not None:
        raise InvalidNameError(f"Invalid record name {name!r}: {problem}")
    return name
