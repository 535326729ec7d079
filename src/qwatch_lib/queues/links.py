# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from collections.abc import Callable
from urllib.parse import quote

from qwatch_lib.core.config import CFG

LinkResolver = Callable[[str], str]


class TemplateLinkResolver:
    """
    Resolve the name of a queue to a reference to the queue's detail view.
    """

    def __init__(self, base_url: str | None = None, template: str | None = None):
        self._base_url = (
            CFG.links.base_url if base_url is None else base_url
        ).rstrip("/")
        self._template = (
            CFG.links.queue_detail_template if template is None else template
        )

    def __call__(self, name: str) -> str:
        return self._base_url + self._template.format(name=quote(name, safe=""))
