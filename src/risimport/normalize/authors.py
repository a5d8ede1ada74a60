"""Author name normalization.

RIS files mix "Family, Given" and "Given Family" name forms. The
decoder collects every author of a record into one ``" and "``-joined
list and rewrites each name to the BibTeX "Family, Given" order.
"""

from ._helpers import SUFFIX_RE, WHITESPACE_RE

_OTHERS = "others"


def fix_author_last_name_first(names: str) -> str:
    """Rewrite an ``" and "``-joined name list in "Last, First" order.

    Names that already carry a comma are only whitespace-normalized,
    so applying the function twice yields the same result.

    Parameters
    ----------
    names : str
        Name list, e.g. ``"John Smith and Doe, A"``.

    Returns
    -------
    str
        Normalized list, e.g. ``"Smith, John and Doe, A"``.
    """
    parts = [_last_name_first(name) for name in split_names(names)]
    return " and ".join(part for part in parts if part)


def split_names(names: str) -> list[str]:
    """Split a name list on top-level ``and`` separators.

    Separators inside braces (``{Barnes and Noble}``) are kept.

    Parameters
    ----------
    names : str
        Name list joined by ``" and "`` (any case).

    Returns
    -------
    list[str]
        Individual names, stripped, in order.
    """
    result: list[str] = []
    depth = 0
    start = 0
    i = 0
    lowered = names.lower()

    while i < len(names):
        char = names[i]
        if char == "{":
            depth += 1
        elif char == "}":
            depth = max(depth - 1, 0)
        elif depth == 0 and char.isspace() and lowered.startswith("and", i + 1):
            end = i + 4
            if end < len(names) and names[end].isspace():
                result.append(names[start:i].strip())
                start = end + 1
                i = start
                continue
        i += 1

    result.append(names[start:].strip())
    return [name for name in result if name]


def _split_top_level(text: str, separator: str) -> list[str]:
    parts: list[str] = []
    depth = 0
    current: list[str] = []
    for char in text:
        if char == "{":
            depth += 1
        elif char == "}":
            depth = max(depth - 1, 0)
        if depth == 0 and char == separator:
            parts.append("".join(current).strip())
            current = []
        else:
            current.append(char)
    parts.append("".join(current).strip())
    return parts


def _last_name_first(name: str) -> str:
    name = WHITESPACE_RE.sub(" ", name).strip()
    if not name or name.casefold() == _OTHERS:
        return name

    comma_parts = _split_top_level(name, ",")
    if len(comma_parts) > 1:
        return ", ".join(part for part in comma_parts if part)

    tokens = _split_top_level(name, " ")
    tokens = [token for token in tokens if token]
    if len(tokens) == 1:
        return tokens[0]

    suffix = None
    if len(tokens) > 2 and SUFFIX_RE.match(tokens[-1]):
        suffix = tokens.pop()

    # "Ludwig van Beethoven": the first lowercase token starts the last name
    last_start = len(tokens) - 1
    for idx, token in enumerate(tokens[:-1]):
        if token[0].islower():
            last_start = idx
            break

    first = " ".join(tokens[:last_start])
    last = " ".join(tokens[last_start:])
    if not first:
        return last
    if suffix:
        return f"{last}, {suffix}, {first}"
    return f"{last}, {first}"
