"""URL template helpers: base/path joining, ``<name>`` substitution, query strings."""

import re
from urllib.parse import quote, urlencode

# Characters left unescaped in a path segment besides the unreserved set.
PATH_SEGMENT_SAFE = "$&+:=@"

PLACEHOLDER_PATTERN = re.compile(r"<([^<>/?#]+)>")


def join_url(base_url: str, path: str) -> str:
    """Join base URL and path with exactly one ``/`` between them."""
    if base_url.endswith("/"):
        base_url = base_url[:-1]
    if path.startswith("/"):
        path = path[1:]
    return f"{base_url}/{path}"


def path_escape(value: str) -> str:
    return quote(value, safe=PATH_SEGMENT_SAFE)


def substitute_path(url: str, paths: dict[str, str]) -> str:
    """Replace every ``<key>`` occurrence with the path-escaped value for ``key``.

    Placeholders without a matching key are left untouched.
    """
    for key, value in paths.items():
        pattern = re.compile(f"<{re.escape(key)}>")
        escaped = path_escape(value)
        url = pattern.sub(lambda _match: escaped, url)
    return url


def unresolved_placeholders(url: str) -> list[str]:
    return PLACEHOLDER_PATTERN.findall(url)


def to_query_string(queries: dict[str, str]) -> str:
    """Form-encode key/value pairs and join them with ``&``."""
    return urlencode(queries)


def build_url(url: str, paths: dict[str, str], queries: dict[str, str]) -> str:
    url = substitute_path(url, paths)
    query_string = to_query_string(queries)
    if query_string:
        url += "?" + query_string
    return url
