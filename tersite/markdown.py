"""Render page bodies to the HTML that views embed and backlinks are read from.

Raw HTML passes through so authored `<a href>` tags count as links; bare URLs
are not linkified, so only deliberate links become backlinks.
"""

from __future__ import annotations

from functools import lru_cache
from typing import cast

from markdown_it import MarkdownIt
from mdit_py_plugins.anchors import anchors_plugin
from mdit_py_plugins.deflist import deflist_plugin
from mdit_py_plugins.footnote import footnote_plugin
from mdit_py_plugins.tasklists import tasklists_plugin

from .utils import slugify

# Headings at these levels get ids so pages can link to sections.
ANCHOR_LEVELS = (2, 3)


@lru_cache(maxsize=1)
def _renderer() -> MarkdownIt:
    md = MarkdownIt("commonmark", {"html": True, "typographer": True})
    md.enable(["table", "strikethrough"])
    md.use(deflist_plugin)
    md.use(footnote_plugin)
    md.use(tasklists_plugin, label=True)
    md.use(anchors_plugin, min_level=ANCHOR_LEVELS[0], max_level=ANCHOR_LEVELS[1], slug_func=slugify)
    return md


def render_markdown(text: str) -> str:
    """Render a page body; blank input renders to an empty string."""
    if not text.strip():
        return ""
    return cast(str, _renderer().render(text))
