"""Page models, configuration builders, and the page composer."""

from .builders import build_page_config
from .composer import PageComposer, normalize_route, order_sections
from .models import Page, PageConfig, PageMeta, Section, SectionLayout

__all__ = [
    "Page",
    "PageComposer",
    "PageConfig",
    "PageMeta",
    "Section",
    "SectionLayout",
    "build_page_config",
    "normalize_route",
    "order_sections",
]
