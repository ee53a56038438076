"""Dev Helper scaffolder: generators that turn tool arguments into artifacts.

Quick usage::

    from devhelper.scaffolder import CodeGenerator, TemplateRenderer

    code = CodeGenerator(TemplateRenderer())
    print(code.api_route("users", ["GET", "POST"], with_auth=True))
"""

from devhelper.scaffolder.code_gen import CodeGenerator, ComponentSource
from devhelper.scaffolder.docker_gen import DockerGenerator
from devhelper.scaffolder.env_gen import EnvGenerator, EnvSetupResult
from devhelper.scaffolder.installer import DependencyInstaller
from devhelper.scaffolder.manifest_gen import ManifestGenerator
from devhelper.scaffolder.project_gen import ProjectGenerator
from devhelper.scaffolder.status_gen import StatusReporter
from devhelper.scaffolder.templates import TemplateRenderer

__all__ = [
    "CodeGenerator",
    "ComponentSource",
    "DependencyInstaller",
    "DockerGenerator",
    "EnvGenerator",
    "EnvSetupResult",
    "ManifestGenerator",
    "ProjectGenerator",
    "StatusReporter",
    "TemplateRenderer",
]
