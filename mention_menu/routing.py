"""Document context from the navigation location."""

from urllib.parse import urlparse


def parse_document_slug(location: str) -> str | None:
    """Return the document slug from a path or URL, if it points at a document.

    Examples:
        '/doc/roadmap-Xy12Ab'            -> 'roadmap-Xy12Ab'
        '/doc/roadmap-Xy12Ab/edit'       -> 'roadmap-Xy12Ab'
        'https://wiki.example.com/doc/a' -> 'a'
        '/collection/engineering'        -> None
    """
    if not location:
        return None

    path = location if location.startswith("/") else urlparse(location).path
    parts = path.split("/")

    try:
        index = parts.index("doc")
    except ValueError:
        return None

    if index + 1 >= len(parts):
        return None
    return parts[index + 1] or None
