"""Recover an asset store key from a public asset URL."""

from urllib.parse import urlsplit


def asset_key_from_url(url: str) -> str:
    """Return the text between the last ``/`` and the last ``.`` of ``url``.

    ``https://cdn.example.com/v1/abc123.jpg`` gives ``abc123``. When the final
    path segment has no extension the whole segment is the key. A segment that
    is only an extension, such as ``.jpg``, gives an empty key. Query strings
    and fragments are ignored.
    """
    path = urlsplit(url).path or url
    segment = path[path.rfind("/") + 1 :]
    dot = segment.rfind(".")
    if dot < 0:
        return segment
    return segment[:dot]
