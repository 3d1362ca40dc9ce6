import re
from re import Pattern

import structlog

logger = structlog.get_logger(__name__)

# Compiled for patterns that are not valid globs; it matches nothing.
_NEVER_MATCHES = re.compile(r"(?!)")

_GLOB_CACHE: dict[str, Pattern[str]] = {}


def _translate_class(pattern: str, start: int) -> tuple[str, int] | None:
    """Translate a ``[...]`` character class starting at ``start``.

    Returns the regex fragment and the index of the closing bracket, or None
    when the bracket is never closed (the ``[`` is then taken literally).
    """
    i = start + 1
    negate = False
    if i < len(pattern) and pattern[i] in "!^":
        negate = True
        i += 1
    # A leading "]" is a literal member of the class.
    if i < len(pattern) and pattern[i] == "]":
        i += 1
    end = pattern.find("]", i)
    if end == -1:
        return None

    body = pattern[start + 1 + (1 if negate else 0) : end]
    body = body.replace("\\", "\\\\").replace("[", "\\[").replace("]", "\\]")
    if negate:
        return f"[^/{body}]", end
    return f"(?!/)[{body}]", end


def compile_glob(pattern: str) -> Pattern[str]:
    """Convert a glob pattern supporting ** into a compiled regex.

    Args:
        pattern: The glob pattern string (braces already expanded).

    Returns:
        A compiled regex pattern object.
    """
    cached = _GLOB_CACHE.get(pattern)
    if cached is not None:
        return cached

    regex_parts: list[str] = []
    i = 0
    length = len(pattern)
    while i < length:
        char = pattern[i]
        if char == "*":
            if i + 1 < length and pattern[i + 1] == "*":
                regex_parts.append(".*")
                i += 1
            else:
                regex_parts.append("[^/]*")
        elif char == "?":
            regex_parts.append("[^/]")
        elif char == "[":
            translated = _translate_class(pattern, i)
            if translated is None:
                regex_parts.append(re.escape(char))
            else:
                fragment, i = translated
                regex_parts.append(fragment)
        else:
            regex_parts.append(re.escape(char))
        i += 1

    try:
        compiled = re.compile("^" + "".join(regex_parts) + "$")
    except re.error as e:
        logger.warning("invalid_glob_pattern", pattern=pattern, error=str(e))
        compiled = _NEVER_MATCHES
    _GLOB_CACHE[pattern] = compiled
    return compiled


def expand_braces(pattern: str) -> list[str]:
    """Expand ``{a,b}`` alternatives, including nested ones.

    Braces without a top-level comma, or without a closing brace, are kept
    literally.

    Args:
        pattern: The glob pattern to expand.

    Returns:
        The expanded patterns, in order, without duplicates.
    """
    start = pattern.find("{")
    while start != -1:
        depth = 0
        commas: list[int] = []
        end = -1
        for i in range(start, len(pattern)):
            char = pattern[i]
            if char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
                if depth == 0:
                    end = i
                    break
            elif char == "," and depth == 1:
                commas.append(i)

        if end == -1:
            return [pattern]

        if commas:
            prefix, suffix = pattern[:start], pattern[end + 1 :]
            bounds = [start, *commas, end]
            expanded: list[str] = []
            for left, right in zip(bounds, bounds[1:], strict=False):
                for variant in expand_braces(prefix + pattern[left + 1 : right] + suffix):
                    if variant not in expanded:
                        expanded.append(variant)
            return expanded

        start = pattern.find("{", start + 1)

    return [pattern]


def expand_pattern_variants(pattern: str) -> set[str]:
    """Generate fallback globs so ** can match zero directories.

    Args:
        pattern: The glob pattern to expand.

    Returns:
        A set of pattern variants.
    """
    variants = {pattern}
    queue = [pattern]

    while queue:
        current = queue.pop()
        normalized = current.replace("//", "/")

        transformations = [
            ("/**/", "/"),
            ("**/", ""),
            ("/**", ""),
            ("**", ""),
        ]

        for old, new in transformations:
            if old in normalized:
                replaced = normalized.replace(old, new, 1)
                replaced = replaced.replace("//", "/")
                if replaced not in variants:
                    variants.add(replaced)
                    queue.append(replaced)

    return variants


def matches_glob(path: str, pattern: str) -> bool:
    """Check if a path matches a single glob pattern.

    Args:
        path: The file path to check.
        pattern: A glob pattern.

    Returns:
        True if the path matches, False otherwise.
    """
    if not path or not pattern:
        return False

    normalized_path = path.replace("\\", "/")
    for expanded in expand_braces(pattern.replace("\\", "/")):
        for variant in expand_pattern_variants(expanded):
            if compile_glob(variant).match(normalized_path):
                return True
    return False

