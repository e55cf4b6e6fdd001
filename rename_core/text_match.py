"""
text_match.py - Pattern Matching Tools

Provides pattern compilation, replacement templates and the session's
pattern state
"""

from typing import List, Optional, Tuple, Union
import os
import re

from .errors import PatternCompileError

# Group reference in a replacement template: an int index or a group name
GroupKey = Union[int, str]
TemplatePart = Tuple[bool, Union[str, GroupKey]]  # (is_reference, literal text or group key)

_GROUP_NAME = re.compile(r"[A-Za-z0-9_]+")


def compile_pattern(text: str, flags: int = 0) -> "re.Pattern":
    """
    Compile search text

    Args:
        text: Raw search text
        flags: re module flags

    Returns:
        Compiled pattern

    Raises:
        PatternCompileError: text is not a valid pattern
    """
    try:
        return re.compile(text, flags)
    except re.error as e:
        raise PatternCompileError(text, str(e)) from e


def _group_key(name: str) -> GroupKey:
    if name.isascii() and name.isdigit():
        return int(name)
    return name


def _parse_reference(template: str, start: int) -> Tuple[Optional[GroupKey], int]:
    """Parse a group reference right after a '$', return (key, end) or (None, start)"""
    if template.startswith("{", start):
        close = template.find("}", start + 1)
        if close == -1 or close == start + 1:
            return None, start
        return _group_key(template[start + 1:close]), close + 1

    match = _GROUP_NAME.match(template, start)
    if not match:
        return None, start
    return _group_key(match.group()), match.end()


def parse_template(template: str) -> List[TemplatePart]:
    """
    Split a replacement template into literal text and group references

    Supported placeholders: $1, $name, ${1}, ${name}. "$$" is a literal
    dollar sign, a "$" that does not start a reference is kept as is.
    $name takes the longest run of letters, digits and underscores, so
    "$1a" refers to a group named "1a"; use "${1}a" instead.

    Args:
        template: Raw replacement text

    Returns:
        List of (is_reference, value) parts
    """
    parts: List[TemplatePart] = []
    literal: List[str] = []
    i = 0
    n = len(template)

    while i < n:
        ch = template[i]
        if ch != "$":
            literal.append(ch)
            i += 1
            continue

        if template.startswith("$$", i):
            literal.append("$")
            i += 2
            continue

        key, end = _parse_reference(template, i + 1)
        if key is None:
            literal.append("$")
            i += 1
            continue

        if literal:
            parts.append((False, "".join(literal)))
            literal = []
        parts.append((True, key))
        i = end

    if literal:
        parts.append((False, "".join(literal)))

    return parts


def expand_template(parts: List[TemplatePart], match: "re.Match") -> str:
    """
    Build the replacement text for one match

    A reference to a group that does not exist, or that did not take part
    in the match, expands to an empty string.
    """
    out = []
    for is_reference, value in parts:
        if not is_reference:
            out.append(value)
            continue
        try:
            out.append(match.group(value) or "")
        except IndexError:
            continue
    return "".join(out)


def substitute_all(pattern: "re.Pattern", parts: List[TemplatePart], text: str) -> str:
    """
    Replace every non-overlapping match, leftmost first

    An empty match starting where the previous match ended is not
    replaced, so ".*" turns "abc" into one replacement, not two.
    """
    pieces = []
    last_end = 0
    previous_end = None

    for match in pattern.finditer(text):
        start, end = match.span()
        if start == end and start == previous_end:
            continue
        pieces.append(text[last_end:start])
        pieces.append(expand_template(parts, match))
        last_end = end
        previous_end = end

    pieces.append(text[last_end:])
    return "".join(pieces)


def apply_pattern(
    pattern: Optional["re.Pattern"],
    template: Union[str, List[TemplatePart]],
    text: str
) -> str:
    """
    Apply a compiled pattern and a replacement template to a filename

    The whole name is matched, extension included. An empty pattern leaves
    the name unchanged.

    Args:
        pattern: Compiled search pattern
        template: Replacement template, raw or already parsed
        text: Original filename

    Returns:
        New filename
    """
    if pattern is None or not pattern.pattern:
        return text
    if isinstance(template, str):
        template = parse_template(template)
    return substitute_all(pattern, template, text)


class PatternState:
    """Search pattern and replacement template of the running session"""

    def __init__(self, flags: int = 0):
        self.search_text = ""                       # Not always in sync with compiled_pattern
        self.compiled_pattern = compile_pattern("", flags)
        self.replace_template = ""
        self.flags = flags
        self._parts: List[TemplatePart] = []

    def update_search(self, text: str) -> "re.Pattern":
        """
        Take new search text

        On a compile error the previous pattern stays in use.

        Raises:
            PatternCompileError: text is not a valid pattern
        """
        self.search_text = text
        compiled = compile_pattern(text, self.flags)
        self.compiled_pattern = compiled
        return compiled

    def update_replace(self, text: str) -> None:
        """Take new replacement text"""
        self.replace_template = text
        self._parts = parse_template(text)

    def set_flags(self, flags: int) -> None:
        """Recompile the pattern in use with different flags"""
        self.flags = flags
        self.compiled_pattern = compile_pattern(self.compiled_pattern.pattern, flags)

    def apply(self, name: str) -> str:
        """Compute the new name for one original name"""
        return apply_pattern(self.compiled_pattern, self._parts, name)


def is_valid_filename(name: str) -> Tuple[bool, Optional[str]]:
    """
    Check if a new filename keeps the file in its directory

    Args:
        name: Filename

    Returns:
        (is_valid, error_reason)
    """
    if not name:
        return False, "Filename cannot be empty"

    if name in (".", ".."):
        return False, f"Filename cannot be {name!r}"

    separators = {os.sep, "/"}
    if os.altsep:
        separators.add(os.altsep)
    for sep in separators:
        if sep in name:
            return False, f"Filename contains path separator: {sep}"

    if "\0" in name:
        return False, "Filename contains a NUL character"

    return True, None
