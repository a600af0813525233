from typing import Optional


def normalize_query(query: str, extension: str = ".md") -> str:
    """
    Turn a user query ('tar' or 'linux/tar') into the form stored in the index.
    """
    return f"{query}{extension}"


def has_platform(query: str) -> bool:
    return "/" in query


def strip_platform(line: str) -> Optional[str]:
    """
    Return the part of an index line after its first '/'.

    Lines without a platform component return None, so they never match a
    bare command query.
    """
    _, sep, rest = line.partition("/")
    if not sep:
        return None
    return rest


def page_name(line: str, extension: str = ".md") -> str:
    """
    Display name of an index line: platform and extension removed.
    """
    name = strip_platform(line) or line
    if extension and name.endswith(extension):
        name = name[: -len(extension)]
    return name


def matches_query(line: str, query: str, extension: str = ".md") -> bool:
    """
    Apply the index matching rules to a single line.

    'platform/command' must equal the whole line; a bare 'command' is compared
    against the file name only, whatever the platform.
    """
    wanted = normalize_query(query, extension)
    if has_platform(query):
        return line == wanted
    return strip_platform(line) == wanted
