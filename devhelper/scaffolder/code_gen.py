"""Source stubs for React components, Express routes and Mongoose models.

These generators only build text. Nothing is written to disk; the caller
receives the source and decides where it goes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .templates import TemplateRenderer


@dataclass
class ComponentSource:
    """Rendered React component plus its optional CSS module."""

    name: str
    code: str
    stylesheet: Optional[str] = None

    @property
    def stylesheet_name(self) -> str:
        return f"{self.name}.module.css"


class CodeGenerator:
    """Renders component, route and model source from templates."""

    _COMPONENT_TEMPLATES: dict[str, str] = {
        "functional": "functional_component.jsx.j2",
        "class": "class_component.jsx.j2",
    }

    def __init__(self, renderer: TemplateRenderer) -> None:
        self.renderer = renderer

    def component(
        self,
        name: str,
        component_type: str = "functional",
        with_styles: bool = False,
    ) -> ComponentSource:
        """Render a React component.

        Args:
            name: Component identifier, used verbatim.
            component_type: ``"functional"`` or ``"class"``.
            with_styles: Import a CSS module and render its stub.
        """
        template = self._COMPONENT_TEMPLATES.get(component_type)
        if template is None:
            raise ValueError(f"Unsupported component type: {component_type}")

        context = {"name": name, "with_styles": with_styles}
        code = self.renderer.render(template, context).rstrip("\n")
        stylesheet = None
        if with_styles:
            stylesheet = self.renderer.render("component.module.css.j2", context).rstrip("\n")
        return ComponentSource(name=name, code=code, stylesheet=stylesheet)

    def api_route(
        self,
        route_name: str,
        methods: list[str],
        with_auth: bool = False,
    ) -> str:
        """Render an Express router with one handler per method.

        Handlers appear in the order *methods* is given.
        """
        if not methods:
            raise ValueError("At least one HTTP method is required")
        context = {
            "route_name": route_name,
            "methods": [m.upper() for m in methods],
            "with_auth": with_auth,
        }
        return self.renderer.render("route.js.j2", context).rstrip("\n")

    def mongoose_model(self, model_name: str, fields: list[dict[str, Any]]) -> str:
        """Render a Mongoose schema and model export.

        Field order follows *fields*. The schema variable uses the
        lower-cased model name; the exported model keeps *model_name* as is.
        """
        for field in fields:
            if not field.get("name") or not field.get("type"):
                raise ValueError(f"Model field needs both name and type: {field!r}")
        context = {
            "model_name": model_name,
            "schema_var": f"{model_name.lower()}Schema",
            "fields": [
                {"name": f["name"], "type": f["type"], "required": bool(f.get("required"))}
                for f in fields
            ],
        }
        return self.renderer.render("model.js.j2", context).rstrip("\n")
