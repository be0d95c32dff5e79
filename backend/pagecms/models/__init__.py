from .base import BaseModel
from .page import Page
from .layout import Layout, LayoutOption
from .master_page import MasterPage
from .page_option import PageOption
from .redirect import Redirect
from .sitemap import Sitemap, SitemapNode
from .tag import Tag, PageTag
from .category import Category
from .media import MediaImage
from .access_rule import AccessRule
from .page_content import PageContent
from .user import User
from .audit_log import AuditLog

__all__ = [
    "BaseModel",
    "Page",
    "Layout",
    "LayoutOption",
    "MasterPage",
    "PageOption",
    "Redirect",
    "Sitemap",
    "SitemapNode",
    "Tag",
    "PageTag",
    "Category",
    "MediaImage",
    "AccessRule",
    "PageContent",
    "User",
    "AuditLog",
]
