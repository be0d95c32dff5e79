import hashlib
import re

from flask import current_app

from pagecms.domain.exceptions import ValidationError

# Path segments may hold letters, digits and the unreserved url characters
VALID_URL_PATTERN = re.compile(r"^/[\w\-./~%]*$", re.UNICODE)


def _split_url(url):
    for separator in ("?", "#"):
        if separator in url:
            index = url.index(separator)
            return url[:index], url[index:]
    return url, ""


def fix_url(url):
    """
    Normalize a page url.

    - surrounding whitespace removed
    - backslashes become slashes, repeated slashes collapse
    - path always starts with a slash and (if configured) ends with one
    - query string and fragment are preserved as-is
    """
    if url is None:
        return "/"

    path, suffix = _split_url(url.strip().replace("\\", "/"))
    path = re.sub(r"/{2,}", "/", path.strip())

    if not path.startswith("/"):
        path = "/" + path

    if current_app.config.get("URL_TRAILING_SLASH", True) and not path.endswith("/"):
        path = path + "/"

    return path + suffix


def validate_url(url):
    path, _ = _split_url(url)
    if not VALID_URL_PATTERN.match(path) or ".." in path:
        raise ValidationError(
            "invalid_url",
            f"Url {url!r} contains invalid characters.",
        )


def url_hash(url):
    return hashlib.md5(url.lower().encode("utf-8")).hexdigest()
