"""
Page related domain events.

Every ``PageEvents`` instance owns its own blinker namespace, so the
application (and each test) gets an independent set of signals instead of a
process-wide dispatcher. The app factory registers the instance used by the
HTTP layer under ``app.extensions["page_events"]``.

Receivers take the blinker signature ``receiver(sender, **kwargs)``.
"""
from typing import List

from blinker import Namespace
from flask import current_app


class PagePropertiesChangingArgs:
    """
    Payload of the cancellable ``page_properties_changing`` signal.

    ``before`` and ``after`` are property snapshots of the page. A receiver
    vetoes the save by calling ``cancel(message)``.
    """

    def __init__(self, before, after):
        self.before = before
        self.after = after
        self.cancel_requested = False
        self.messages: List[str] = []

    def cancel(self, message=None):
        self.cancel_requested = True
        if message:
            self.messages.append(message)


class PageEvents:
    def __init__(self):
        self._signals = Namespace()

        # Sent inside the save transaction, before any write
        self.page_properties_changing = self._signals.signal("page-properties-changing")

        # Sent after commit
        self.page_properties_changed = self._signals.signal("page-properties-changed")
        self.redirect_created = self._signals.signal("redirect-created")
        self.page_seo_status_changed = self._signals.signal("page-seo-status-changed")
        self.tag_created = self._signals.signal("tag-created")
        self.sitemap_node_updated = self._signals.signal("sitemap-node-updated")
        self.sitemap_updated = self._signals.signal("sitemap-updated")

    def on_page_properties_changing(self, before, after) -> PagePropertiesChangingArgs:
        args = PagePropertiesChangingArgs(before, after)
        self.page_properties_changing.send(after.get("id"), args=args)
        return args

    def notify(self, signal, sender, **kwargs) -> bool:
        """
        Send a post-commit notification.

        The save it reports on is already committed, so a failing receiver is
        logged and reported through the return value instead of raised.
        """
        try:
            signal.send(sender, **kwargs)
        except Exception:
            current_app.logger.exception("Receiver of %s failed", signal.name)
            return False
        return True

    def on_page_properties_changed(self, page):
        return self.notify(self.page_properties_changed, page)

    def on_redirect_created(self, redirect):
        return self.notify(self.redirect_created, redirect)

    def on_page_seo_status_changed(self, page):
        return self.notify(self.page_seo_status_changed, page)

    def on_tag_created(self, tags):
        return self.notify(self.tag_created, None, tags=list(tags or []))

    def on_sitemap_node_updated(self, node):
        return self.notify(self.sitemap_node_updated, node)

    def on_sitemap_updated(self, sitemap):
        return self.notify(self.sitemap_updated, sitemap)
