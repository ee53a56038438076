"""Request dispatch: name lookup, argument validation, generator routing.

``Dispatcher.dispatch`` returns a tagged ``Success | Failure`` result and
never raises. ``Dispatcher.call`` is what the transport uses: it flattens
every ``Failure`` into a normal text response prefixed ``"Error: "`` so one
bad call can never end the session.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable
from enum import Enum
from pathlib import Path
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, Field, ValidationError

from devhelper.catalog.capabilities import CATALOG, Capability
from devhelper.catalog.shapes import to_pascal
from devhelper.config import Config
from devhelper.errors import PartialWriteError
from devhelper.scaffolder import (
    CodeGenerator,
    DependencyInstaller,
    DockerGenerator,
    EnvGenerator,
    ManifestGenerator,
    ProjectGenerator,
    StatusReporter,
    TemplateRenderer,
)

logger = logging.getLogger(__name__)

ERROR_PREFIX = "Error: "


# ---------------------------------------------------------------------------
# Request / result models
# ---------------------------------------------------------------------------


class CallRequest(BaseModel):
    """One tool invocation."""

    capability: str
    arguments: dict[str, Any] = Field(default_factory=dict)


class ContentBlock(BaseModel):
    type: Literal["text"] = "text"
    text: str


class FailureKind(str, Enum):
    """Why a call failed. Only visible in-process; callers see message text."""
    UNKNOWN_CAPABILITY = "unknown_capability"
    INVALID_ARGUMENTS = "invalid_arguments"
    GENERATION_FAILURE = "generation_failure"
    PARTIAL_WRITE = "partial_write"


class Success(BaseModel):
    outcome: Literal["success"] = "success"
    content: list[ContentBlock] = Field(default_factory=list)

    @classmethod
    def of_text(cls, text: str) -> "Success":
        return cls(content=[ContentBlock(text=text)])

    @property
    def text(self) -> str:
        return "\n".join(block.text for block in self.content)


class Failure(BaseModel):
    outcome: Literal["failure"] = "failure"
    message: str
    kind: FailureKind = FailureKind.GENERATION_FAILURE


CallResult = Annotated[Union[Success, Failure], Field(discriminator="outcome")]


def flatten(result: CallResult) -> Success:
    """Convert a result into the transport envelope; failures become error text."""
    if isinstance(result, Failure):
        return Success.of_text(f"{ERROR_PREFIX}{result.message}")
    return result


# ---------------------------------------------------------------------------
# Dispatcher
# ---------------------------------------------------------------------------

Handler = Callable[[Any], Awaitable[str]]


class Dispatcher:
    """Routes validated calls to the matching generator.

    Attributes:
        config: Server configuration.
        catalog: The tools this dispatcher serves, in listing order.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        *,
        renderer: Optional[TemplateRenderer] = None,
        installer: Optional[DependencyInstaller] = None,
        catalog: tuple[Capability, ...] = CATALOG,
    ) -> None:
        self.config = config or Config()
        self.catalog = catalog
        renderer = renderer or TemplateRenderer()
        installer = installer or DependencyInstaller(
            self.config.install_command, self.config.install_timeout
        )

        self.projects = ProjectGenerator()
        self.code = CodeGenerator(renderer)
        self.docker = DockerGenerator(renderer)
        self.env = EnvGenerator(renderer, installer)
        self.manifests = ManifestGenerator()
        self.status = StatusReporter()

        self._handlers: dict[str, Handler] = {
            "create_mern_project": self._create_mern_project,
            "generate_component": self._generate_component,
            "create_api_route": self._create_api_route,
            "create_mongoose_model": self._create_mongoose_model,
            "project_status": self._project_status,
            "docker_init": self._docker_init,
            "create_dockerfile": self._create_dockerfile,
            "setup_nodejs_env": self._setup_nodejs_env,
            "create_package_scripts": self._create_package_scripts,
        }
        self._capabilities = {capability.name: capability for capability in catalog}
        unbound = sorted(set(self._capabilities) - set(self._handlers))
        if unbound:
            raise RuntimeError(f"No handler bound for tool(s): {', '.join(unbound)}")

        self._argument_models = {
            capability.name: capability.input_shape.to_model(
                f"{to_pascal(capability.name)}Arguments"
            )
            for capability in catalog
        }

    # -- Public API --------------------------------------------------------

    async def dispatch(self, request: CallRequest) -> CallResult:
        """Resolve, validate and run one call. Never raises."""
        name = request.capability
        if name not in self._capabilities:
            logger.warning("Unknown tool requested: %s", name)
            return Failure(message=f"Unknown tool: {name}", kind=FailureKind.UNKNOWN_CAPABILITY)

        try:
            args = self._argument_models[name].model_validate(request.arguments)
        except ValidationError as exc:
            logger.warning("Rejected arguments for %s: %s", name, exc.error_count())
            return Failure(
                message=f"Invalid arguments for {name}: {_summarize_validation(exc)}",
                kind=FailureKind.INVALID_ARGUMENTS,
            )

        logger.info("Running %s", name)
        try:
            text = await self._handlers[name](args)
        except PartialWriteError as exc:
            logger.warning("%s left partial output: %s", name, exc)
            return Failure(message=str(exc), kind=FailureKind.PARTIAL_WRITE)
        except Exception as exc:
            logger.warning("%s failed: %s", name, exc)
            return Failure(message=str(exc) or type(exc).__name__)
        return Success.of_text(text)

    async def call(self, name: str, arguments: Optional[dict[str, Any]] = None) -> Success:
        """Dispatch and flatten: the only entry point the transport uses."""
        result = await self.dispatch(CallRequest(capability=name, arguments=arguments or {}))
        return flatten(result)

    # -- Handlers ----------------------------------------------------------

    async def _create_mern_project(self, args: Any) -> str:
        root = await self.projects.generate(args.projectName, Path(args.path))
        return f'Created MERN project "{args.projectName}" at {root}'

    async def _generate_component(self, args: Any) -> str:
        source = self.code.component(
            args.componentName,
            args.componentType or "functional",
            bool(args.withStyles),
        )
        output = f"Generated {source.name} component:\n\n{source.code}"
        if source.stylesheet is not None:
            output += f"\n\nCSS Module ({source.stylesheet_name}):\n\n{source.stylesheet}"
        return output

    async def _create_api_route(self, args: Any) -> str:
        code = self.code.api_route(args.routeName, list(args.methods), bool(args.withAuth))
        return f"Generated API route for {args.routeName}:\n\n{code}"

    async def _create_mongoose_model(self, args: Any) -> str:
        fields = [field.model_dump() for field in args.fields]
        code = self.code.mongoose_model(args.modelName, fields)
        return f"Generated Mongoose model for {args.modelName}:\n\n{code}"

    async def _project_status(self, args: Any) -> str:
        tree = await self.status.report(Path(args.projectPath))
        return f"Project structure for {args.projectPath}:\n\n{tree}"

    async def _docker_init(self, args: Any) -> str:
        await self.docker.generate_compose(Path(args.projectPath), list(args.services))
        return f"Docker configuration initialized with services: {', '.join(args.services)}"

    async def _create_dockerfile(self, args: Any) -> str:
        node_version = args.nodeVersion
        if "nodeVersion" not in args.model_fields_set or not node_version:
            node_version = self.config.default_node_version
        _, content = await self.docker.generate_dockerfile(
            Path(args.projectPath), args.service, node_version
        )
        return f"Created Dockerfile for {args.service} service:\n\n{content.rstrip()}"

    async def _setup_nodejs_env(self, args: Any) -> str:
        result = await self.env.setup(
            Path(args.projectPath), args.envType, list(args.dependencies or [])
        )
        if result.install_error is not None:
            return (
                "Environment setup completed but failed to install dependencies: "
                f"{result.install_error}"
            )
        return (
            f"Node.js {args.envType} environment configured with "
            f".env.{args.envType} and .env.example files"
        )

    async def _create_package_scripts(self, args: Any) -> str:
        path, scripts = await self.manifests.update_scripts(
            Path(args.projectPath), args.scripts
        )
        return f"Package scripts updated in {path}:\n\n{json.dumps(scripts, indent=2)}"


def _summarize_validation(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "arguments"
        parts.append(f"{location}: {error['msg']}")
    return "; ".join(parts)
