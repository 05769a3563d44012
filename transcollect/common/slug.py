"""Filesystem-safe identifiers for scan roots."""

import re
import unicodedata

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")

DEFAULT_SLUG = "root"


def slugify(text: str, separator: str = "-") -> str:
    """Transliterate text into a lowercase, filesystem-safe identifier.

    Accented characters are reduced to their ASCII base letter, everything
    else that is not a letter or digit collapses into a single separator.

    Args:
        text: Text to convert (typically a relative scan path)
        separator: Replacement for runs of non-alphanumeric characters

    Returns:
        Slug string, or DEFAULT_SLUG if nothing usable is left

    Examples:
        >>> slugify("app")
        'app'
        >>> slugify("resources/views")
        'resources-views'
        >>> slugify("App/Http/Controllers")
        'app-http-controllers'
        >>> slugify("tests\\\\translations")
        'tests-translations'
        >>> slugify("Vues/Écran")
        'vues-ecran'
        >>> slugify("")
        'root'
    """
    ascii_text = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    slug = _NON_ALNUM_RE.sub(separator, ascii_text.lower()).strip(separator)
    return slug or DEFAULT_SLUG
