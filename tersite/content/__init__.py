"""Page models and the front-matter parser that produces them."""

from .models import Breadcrumb, IndexItem, Page, TagPage
from .parsers import FrontMatterError, load_page

__all__ = [
    "Breadcrumb",
    "FrontMatterError",
    "IndexItem",
    "Page",
    "TagPage",
    "load_page",
]
