"""
text_match.py - Filename Text Tools

Provides the name cleaner (folder-name removal) and the name organizer
(folder-derived prefixing), plus filename validity checks
"""

from typing import Iterable, List, Optional, Sequence, Tuple


UNNAMED = "unnamed"


def _split(stem: str, sep: str) -> List[str]:
    return stem.split(sep)


def _remove_token(segments: List[str], token_segments: List[str]) -> List[str]:
    """Drop every run of segments equal (case-insensitively) to token_segments"""
    width = len(token_segments)
    wanted = [s.casefold() for s in token_segments]
    out: List[str] = []
    i = 0
    while i < len(segments):
        window = segments[i:i + width]
        if len(window) == width and [s.casefold() for s in window] == wanted:
            i += width
            continue
        out.append(segments[i])
        i += 1
    return out


def _sorted_tokens(tokens: Iterable[str]) -> List[str]:
    """Longest first, so "icons" is removed before "icon" can touch it"""
    unique = {t for t in tokens if t}
    return sorted(unique, key=lambda t: (-len(t), t.casefold(), t))


def clean_name(stem: str, tokens: Iterable[str], sep: str = "-") -> str:
    """
    Remove folder-name tokens from a filename stem

    Each token is removed as whole separator-delimited segments: a leading
    `token+sep` and a trailing `sep+token` disappear entirely, an interior
    `sep+token+sep` leaves a single separator behind. Tokens are processed
    longest first and each one is applied until the stem stops changing.
    Matching is case-insensitive and tokens are literal text.

    Args:
        stem: Filename without extension
        tokens: Folder names to remove
        sep: Separator character

    Returns:
        Cleaned stem, "unnamed" when nothing is left. Equal to `stem` when
        there was nothing to clean.
    """
    if not sep:
        raise ValueError("Separator cannot be empty")

    segments = _split(stem, sep)

    for token in _sorted_tokens(tokens):
        token_segments = [s for s in _split(token, sep) if s]
        if not token_segments:
            continue
        while True:
            reduced = _remove_token(segments, token_segments)
            if reduced == segments:
                break
            segments = reduced

    # Collapsing separator runs and trimming both ends leaves only non-empty segments
    cleaned = sep.join(s for s in segments if s)
    return cleaned or UNNAMED


def path_scoped_tokens(root_name: str, path_parts: Sequence[str]) -> frozenset:
    """Tokens a file may legitimately carry: its root name and its own folders"""
    return frozenset([root_name, *path_parts]) - {""}


def _prefix_parts(path_parts: Sequence[str], base_name: str) -> List[str]:
    parts = []
    if base_name:
        parts.append(base_name)
    parts.extend(p for p in path_parts if p)
    return parts


def is_already_organized(
    stem: str,
    path_parts: Sequence[str],
    base_name: str,
    sep: str = "-",
) -> bool:
    """
    Check whether a stem already carries the folder-derived prefix

    Uses the same join as organize_name: true when the stem starts with
    `base_name+sep+part1+sep+...+sep`. The comparison ignores case, so
    `Icons-Home-x` under icons/home is left unprefixed rather than becoming
    `icons-home-Icons-Home-x`.
    """
    prefix_parts = _prefix_parts(path_parts, base_name)
    if not prefix_parts:
        return True
    prefix = sep.join(prefix_parts) + sep
    return stem.casefold().startswith(prefix.casefold())


def organize_name(
    stem: str,
    path_parts: Sequence[str],
    base_name: str = "",
    sep: str = "-",
) -> str:
    """
    Prefix a stem with its folder structure

    Format: base_name-part1-part2-stem (base_name omitted when empty).
    A stem that is already organized is returned unchanged.
    """
    if is_already_organized(stem, path_parts, base_name, sep):
        return stem
    return sep.join(_prefix_parts(path_parts, base_name) + [stem])


def is_valid_filename(name: str) -> Tuple[bool, Optional[str]]:
    """
    Check if filename is valid (mainly for Windows)

    Args:
        name: Filename

    Returns:
        (is_valid, error_reason)
    """
    if not name:
        return False, "Filename cannot be empty"

    invalid_chars = '<>:"/\\|?*'
    for char in invalid_chars:
        if char in name:
            return False, f"Filename contains invalid character: {char}"

    if name.endswith(' ') or name.endswith('.'):
        return False, "Filename cannot end with space or dot"

    reserved_names = {
        'CON', 'PRN', 'AUX', 'NUL',
        'COM1', 'COM2', 'COM3', 'COM4', 'COM5', 'COM6', 'COM7', 'COM8', 'COM9',
        'LPT1', 'LPT2', 'LPT3', 'LPT4', 'LPT5', 'LPT6', 'LPT7', 'LPT8', 'LPT9'
    }
    name_upper = name.upper().split('.')[0]
    if name_upper in reserved_names:
        return False, f"Filename is a Windows reserved name: {name_upper}"

    if len(name) > 255:
        return False, "Filename exceeds 255 characters"

    return True, None
