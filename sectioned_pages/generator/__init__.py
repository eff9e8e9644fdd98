"""Rendering, assembly and orchestration of sectioned_pages site builds."""

from .assembler import DocumentAssembler
from .link_rewriter import SourceLinkExtension
from .page_generator import SiteGenerator
from .renderer import HtmlContentRenderer, RenderError

__all__ = [
    "DocumentAssembler",
    "HtmlContentRenderer",
    "RenderError",
    "SiteGenerator",
    "SourceLinkExtension",
]
