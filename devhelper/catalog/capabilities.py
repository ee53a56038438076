"""The fixed tool catalog.

Defined once at import time. The order here is the order callers see in a
``tools/list`` response. Each ``input_shape`` is the contract the
dispatcher validates against; changing one breaks callers.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict

from devhelper.catalog.shapes import Shape, array, boolean, enum, mapping, obj, shape, string

HTTP_METHODS = ("GET", "POST", "PUT", "DELETE")
COMPOSE_SERVICES = ("client", "server", "database", "nginx")
DOCKERFILE_SERVICES = ("client", "server")
ENV_TYPES = ("development", "production", "testing")
COMPONENT_TYPES = ("functional", "class")
DEFAULT_NODE_VERSION = "18-alpine"


class Capability(BaseModel):
    """One named, independently invocable tool."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    input_shape: Shape


CATALOG: tuple[Capability, ...] = (
    Capability(
        name="create_mern_project",
        description="Create a new MERN stack project structure",
        input_shape=shape(
            projectName=string("Name of the project", required=True),
            path=string("Path where to create the project", required=True),
        ),
    ),
    Capability(
        name="generate_component",
        description="Generate a React component with boilerplate",
        input_shape=shape(
            componentName=string("Name of the React component", required=True),
            componentType=enum(
                COMPONENT_TYPES, "Type of component to generate", default="functional"
            ),
            withStyles=boolean("Include CSS module file", default=False),
        ),
    ),
    Capability(
        name="create_api_route",
        description="Create an Express API route with boilerplate",
        input_shape=shape(
            routeName=string("Name of the API route", required=True),
            methods=array(
                enum(HTTP_METHODS),
                "HTTP methods to include",
                required=True,
                min_items=1,
            ),
            withAuth=boolean("Include authentication middleware", default=False),
        ),
    ),
    Capability(
        name="create_mongoose_model",
        description="Create a Mongoose model with schema",
        input_shape=shape(
            modelName=string("Name of the Mongoose model", required=True),
            fields=array(
                obj(
                    shape(
                        name=string(required=True),
                        type=string(required=True),
                        required=boolean(),
                    )
                ),
                "Fields for the model",
                required=True,
            ),
        ),
    ),
    Capability(
        name="project_status",
        description="Get current project structure and status",
        input_shape=shape(
            projectPath=string("Path to the project", required=True),
        ),
    ),
    Capability(
        name="docker_init",
        description="Initialize Docker configuration for the project",
        input_shape=shape(
            projectPath=string("Path to the project", required=True),
            services=array(
                enum(COMPOSE_SERVICES),
                "Services to include in Docker setup",
                required=True,
            ),
        ),
    ),
    Capability(
        name="create_dockerfile",
        description="Create Dockerfile for a specific service",
        input_shape=shape(
            service=enum(DOCKERFILE_SERVICES, "Service type", required=True),
            projectPath=string("Path to the project", required=True),
            nodeVersion=string("Node.js version to use", default=DEFAULT_NODE_VERSION),
        ),
    ),
    Capability(
        name="setup_nodejs_env",
        description="Set up Node.js environment configuration",
        input_shape=shape(
            projectPath=string("Path to the project", required=True),
            envType=enum(ENV_TYPES, "Environment type", required=True),
            dependencies=array(string(), "Additional dependencies to install"),
        ),
    ),
    Capability(
        name="create_package_scripts",
        description="Create npm scripts for development workflow",
        input_shape=shape(
            projectPath=string("Path to the project", required=True),
            scripts=mapping("Custom scripts to add"),
        ),
    ),
)

_BY_NAME: dict[str, Capability] = {capability.name: capability for capability in CATALOG}


def list_capabilities() -> tuple[Capability, ...]:
    return CATALOG


def get_capability(name: str) -> Optional[Capability]:
    return _BY_NAME.get(name)
