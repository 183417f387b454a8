"""Directive stages for the Monoview pipeline.

Provides one mixin per directive family. Each stage is a method
``_process_<stage>(content, data, ctx) -> str`` that rewrites the whole
template text for its own directives and leaves everything else alone.

The directives package is organized into logical modules:
- variables: ``{{ name }}``
- components: ``@component('name', {...})``
- control_flow: ``@foreach`` loops and ``@if``/``@else`` conditionals
- pattern_matching: ``@switch``/``@case``/``@default``
- assets: ``@assets('path')`` and ``@images('path')``
- session: ``@message`` blocks, ``@errors('field')`` and ``@csrf()``

"""

from __future__ import annotations

from monoview.directives.assets import AssetDirectivesMixin
from monoview.directives.components import ComponentDirectivesMixin, parse_params
from monoview.directives.control_flow import ControlFlowMixin
from monoview.directives.pattern_matching import PatternMatchingMixin
from monoview.directives.session import SessionDirectivesMixin
from monoview.directives.variables import VariableDirectivesMixin


class DirectiveMixin(
    SessionDirectivesMixin,
    VariableDirectivesMixin,
    ComponentDirectivesMixin,
    ControlFlowMixin,
    PatternMatchingMixin,
    AssetDirectivesMixin,
):
    """Combined mixin providing every directive stage.

    Host attributes and cross-mixin dependencies are declared via inline
    TYPE_CHECKING blocks in each individual mixin.

    """


__all__ = ["DirectiveMixin", "parse_params"]
