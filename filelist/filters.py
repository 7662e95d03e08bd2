"""Type and name filtering applied to classified entries during the walk.

Name patterns use POSIX regular expression syntax (extended by default, basic
on request) and are translated into :mod:`re` syntax before compilation.
Matching is unanchored and runs against the base name only.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable

from filelist.errors import PatternError
from models import ALL_FILE_TYPES, FileType, PatternDialect

POSIX_CLASSES = {
    "alpha": "a-zA-Z",
    "digit": "0-9",
    "alnum": "a-zA-Z0-9",
    "upper": "A-Z",
    "lower": "a-z",
    "space": " \\t\\n\\r\\f\\v",
    "blank": " \\t",
    "punct": re.escape("!\"#$%&'()*+,-./:;<=>?@[\\]^_`{|}~"),
    "print": "\\x20-\\x7e",
    "graph": "\\x21-\\x7e",
    "cntrl": "\\x00-\\x1f\\x7f",
    "xdigit": "0-9A-Fa-f",
}
BASIC_OPERATORS = {"(", ")", "{", "}", "|", "+", "?"}


def _translate_bracket(pattern: str, start: int) -> tuple[str, int]:
    """Translate the bracket expression opening at ``start``.

    Returns the translated text and the index just past the closing ``]``.
    """
    length = len(pattern)
    pos = start + 1
    parts = ["["]

    if pos < length and pattern[pos] == "^":
        parts.append("^")
        pos += 1
    if pos < length and pattern[pos] == "]":
        parts.append("\\]")
        pos += 1

    while pos < length:
        char = pattern[pos]
        if char == "]":
            parts.append("]")
            return "".join(parts), pos + 1

        if char == "[" and pos + 1 < length and pattern[pos + 1] in ":=.":
            kind = pattern[pos + 1]
            close = pattern.find(f"{kind}]", pos + 2)
            if close == -1:
                raise PatternError(pattern, f"unterminated [{kind} in bracket expression")
            name = pattern[pos + 2 : close]
            if kind == ":":
                if name not in POSIX_CLASSES:
                    raise PatternError(pattern, f"unknown character class [:{name}:]")
                parts.append(POSIX_CLASSES[name])
            else:
                parts.append(re.escape(name))
            pos = close + 2
            continue

        # Backslash is literal inside POSIX brackets.
        if char in "\\[&~|":
            parts.append(f"\\{char}")
        else:
            parts.append(char)
        pos += 1

    raise PatternError(pattern, "unterminated bracket expression")


def translate_extended_pattern(pattern: str) -> str:
    """Translate a POSIX extended regular expression into ``re`` syntax."""
    parts: list[str] = []
    pos = 0
    while pos < len(pattern):
        char = pattern[pos]
        if char == "\\" and pos + 1 < len(pattern):
            parts.append(pattern[pos : pos + 2])
            pos += 2
        elif char == "[":
            translated, pos = _translate_bracket(pattern, pos)
            parts.append(translated)
        else:
            parts.append(char)
            pos += 1
    return "".join(parts)


def translate_basic_pattern(pattern: str) -> str:
    """Translate a POSIX basic regular expression into ``re`` syntax.

    ``\\( \\) \\{ \\} \\| \\+ \\?`` become operators and their bare forms become
    literals. ``*`` is literal where it cannot repeat anything, and ``^`` and
    ``$`` anchor only at the edges of the pattern or of a group.
    """
    parts: list[str] = []
    length = len(pattern)
    pos = 0
    # True where a new expression starts: pattern start, after \( or \|.
    at_expression_start = True

    while pos < length:
        char = pattern[pos]

        if char == "\\":
            if pos + 1 >= length:
                raise PatternError(pattern, "trailing backslash")
            escaped = pattern[pos + 1]
            if escaped in BASIC_OPERATORS:
                parts.append(escaped)
                at_expression_start = escaped in {"(", "|"}
            else:
                parts.append(f"\\{escaped}")
                at_expression_start = False
            pos += 2
            continue

        if char == "[":
            translated, pos = _translate_bracket(pattern, pos)
            parts.append(translated)
            at_expression_start = False
            continue

        if char == "*" and at_expression_start:
            parts.append("\\*")
        elif char == "^":
            parts.append("^" if at_expression_start else "\\^")
            # A leading anchor still leaves a following * without an operand.
            pos += 1
            continue
        elif char == "$":
            rest = pattern[pos + 1 : pos + 3]
            is_anchor = pos + 1 == length or rest in {"\\)", "\\|"}
            parts.append("$" if is_anchor else "\\$")
        elif char in BASIC_OPERATORS:
            parts.append(f"\\{char}")
        else:
            parts.append(char)

        at_expression_start = False
        pos += 1

    return "".join(parts)


def compile_pattern(
    pattern: str | None,
    case_sensitive: bool = False,
    dialect: PatternDialect = "extended",
) -> re.Pattern[str] | None:
    """Compile a POSIX name pattern, or return None when there is none.

    Raises:
        PatternError: If the pattern is malformed.
        ValueError: If ``dialect`` is unknown.
    """
    if pattern is None:
        return None

    if dialect == "extended":
        translated = translate_extended_pattern(pattern)
    elif dialect == "basic":
        translated = translate_basic_pattern(pattern)
    else:
        raise ValueError(f"Unknown pattern dialect: {dialect!r}")

    flags = re.DOTALL
    if not case_sensitive:
        flags |= re.IGNORECASE

    try:
        return re.compile(translated, flags)
    except re.error as exc:
        raise PatternError(pattern, str(exc)) from exc


def normalize_type_mask(type_mask: Iterable[FileType]) -> frozenset[FileType]:
    """Validate a type mask; an empty mask selects every type.

    Raises:
        ValueError: If the mask names an unknown type.
    """
    mask = frozenset(type_mask)
    unknown = mask.difference(ALL_FILE_TYPES)
    if unknown:
        raise ValueError(f"Unknown file types: {', '.join(sorted(unknown))}")
    if not mask:
        return frozenset(ALL_FILE_TYPES)
    return mask


@dataclass(frozen=True)
class EntryFilter:
    """Inclusion and descent rules for one traversal."""

    type_mask: frozenset[FileType] = frozenset(ALL_FILE_TYPES)
    pattern: re.Pattern[str] | None = None

    def eligible_for_inclusion(self, file_type: FileType, name: str) -> bool:
        """Return True when an entry of this type and base name is listed."""
        if file_type not in self.type_mask:
            return False
        return self.pattern is None or self.pattern.search(name) is not None

    def eligible_for_descent(self, file_type: FileType, depth: int) -> bool:
        """Return True when a directory may be entered with ``depth`` levels left."""
        return file_type == "directory" and depth != 0
