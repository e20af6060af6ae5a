"""Page/component routing info carried in a query parameter.

Stateful pages put their routing state into the *name* of a value-less
query parameter::

    shop/cart?3                  page 3
    shop/cart?3-1.0-form-submit  page 3, render 1, behavior 0, component form:submit

The format is ``<pageId>[-<componentInfo>]`` where the component info is
``[<renderCount>].[<behaviorId>]-<componentPath>``. Component paths use
``-`` between ids; a literal ``-`` inside an id is written ``~``.
"""

import re
from dataclasses import dataclass

from hush.http.url import QueryParameter

_PAGE_INFO = re.compile(r"^(?P<page>\d+)(?:-(?P<component>.+))?$")
_COMPONENT_INFO = re.compile(r"^(?P<render>\d*)\.(?P<behavior>\d*)-(?P<path>.+)$")


@dataclass(frozen=True, slots=True)
class ComponentInfo:
    """The component part of a page/component info parameter."""

    component_path: str
    render_count: int | None = None
    behavior_id: int | None = None

    def __str__(self) -> str:
        render = "" if self.render_count is None else str(self.render_count)
        behavior = "" if self.behavior_id is None else str(self.behavior_id)
        path = self.component_path.replace("-", "~").replace(":", "-")
        return f"{render}.{behavior}-{path}"


@dataclass(frozen=True, slots=True)
class PageComponentInfo:
    """Parsed page/component routing info."""

    page_id: int
    component: ComponentInfo | None = None

    def __str__(self) -> str:
        if self.component is None:
            return str(self.page_id)
        return f"{self.page_id}-{self.component}"

    def to_parameter(self) -> QueryParameter:
        return QueryParameter(str(self))


def parse_page_component_info(param: QueryParameter) -> PageComponentInfo | None:
    """Parse *param* as page/component info, or return ``None``.

    Only value-less parameters qualify: ``?3`` is page info, ``?3=x`` is not.
    """
    if param.value:
        return None
    match = _PAGE_INFO.match(param.name)
    if match is None:
        return None

    component = None
    if match["component"] is not None:
        inner = _COMPONENT_INFO.match(match["component"])
        if inner is None:
            return None
        path = inner["path"].replace("-", ":").replace("~", "-")
        component = ComponentInfo(
            component_path=path,
            render_count=int(inner["render"]) if inner["render"] else None,
            behavior_id=int(inner["behavior"]) if inner["behavior"] else None,
        )
    return PageComponentInfo(page_id=int(match["page"]), component=component)


def is_page_component_info(param: QueryParameter) -> bool:
    """True if *param* carries page/component routing info."""
    return parse_page_component_info(param) is not None
