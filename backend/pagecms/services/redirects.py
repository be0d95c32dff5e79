from pagecms.models.redirect import Redirect
from .urls import fix_url


def create_redirect_entity(from_url, to_url):
    """
    Build (but do not persist) a redirect from ``from_url`` to ``to_url``.

    Returns ``None`` when there is nothing to redirect: identical urls or an
    already existing redirect between the same urls.
    """
    from_url = fix_url(from_url)
    to_url = fix_url(to_url)

    if from_url.lower() == to_url.lower():
        return None

    existing = Redirect.query.filter_by(page_url=from_url, redirect_url=to_url).first()
    if existing is not None:
        return None

    redirect = Redirect()
    redirect.page_url = from_url
    redirect.redirect_url = to_url
    return redirect
