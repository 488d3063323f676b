"""Template rendering behind a small pluggable interface."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

import jinja2

from expert_dispatch.errors import TemplateRenderError


@runtime_checkable
class TemplateRenderer(Protocol):
    """Renders template text with named variables."""

    def render(
        self,
        template_text: str,
        variables: Mapping[str, Any],
        *,
        name: str = "<inline>",
    ) -> str:
        """Return rendered text or raise ``TemplateRenderError``."""


class JinjaTemplateRenderer:
    """``{{ name }}`` interpolation via jinja2; unknown variables are errors."""

    def __init__(self) -> None:
        self._env = jinja2.Environment(
            undefined=jinja2.StrictUndefined,
            autoescape=False,  # noqa: S701
        )

    def render(
        self,
        template_text: str,
        variables: Mapping[str, Any],
        *,
        name: str = "<inline>",
    ) -> str:
        try:
            template = self._env.from_string(template_text)
        except jinja2.TemplateSyntaxError as error:
            raise TemplateRenderError(
                f"failed to compile: {error.message} (line {error.lineno})",
                template=name,
            ) from error
        try:
            return template.render(**variables)
        except Exception as error:  # noqa: BLE001
            raise TemplateRenderError(f"failed to render: {error}", template=name) from error
