"""Monoview template objects: views, components and shared helpers."""

from monoview.template.component import Component
from monoview.template.core import SLOT_RE, View, ViewState

RenderedView = View

__all__ = ["SLOT_RE", "Component", "RenderedView", "View", "ViewState"]
