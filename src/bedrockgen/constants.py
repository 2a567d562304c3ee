"""Filenames and fixed values shared by the generators."""

SERVICE_PIPELINE_FILENAME = "build-update-hld.yaml"
RENDER_HLD_PIPELINE_FILENAME = "manifest-generation.yaml"
PROJECT_PIPELINE_FILENAME = "hld-lifecycle.yaml"

BEDROCK_FILENAME = "bedrock.yaml"
MAINTAINERS_FILENAME = "maintainers.yaml"
COMPONENT_FILENAME = "component.yaml"
GITIGNORE_FILENAME = ".gitignore"
DOCKERFILE_FILENAME = "Dockerfile"

VM_IMAGE = "ubuntu-latest"

BUILD_SCRIPT_URL = (
    "https://raw.githubusercontent.com/Microsoft/bedrock/master/gitops/azure-devops/build.sh"
)
RELEASE_SCRIPT_URL = (
    "https://raw.githubusercontent.com/Microsoft/bedrock/master/gitops/azure-devops/release.sh"
)

DEFAULT_COMPONENT_SOURCE = "https://github.com/microsoft/fabrikate-definitions.git"
DEFAULT_COMPONENT_PATH = "definitions/fabrikate-cloud-native"

DEFAULT_RING_BRANCHES = ["master"]
DEFAULT_K8S_BACKEND_PORT = 80

DEFAULT_MAINTAINER_NAME = "Unknown Maintainer"
DEFAULT_MAINTAINER_EMAIL = "maintainer@example.com"

DOCKERFILE_CONTENT = "FROM alpine\nRUN echo 'hello world'"
GITIGNORE_CONTENT = "*.log\n"

__all__ = [
    "BEDROCK_FILENAME",
    "BUILD_SCRIPT_URL",
    "COMPONENT_FILENAME",
    "DEFAULT_COMPONENT_PATH",
    "DEFAULT_COMPONENT_SOURCE",
    "DEFAULT_K8S_BACKEND_PORT",
    "DEFAULT_MAINTAINER_EMAIL",
    "DEFAULT_MAINTAINER_NAME",
    "DEFAULT_RING_BRANCHES",
    "DOCKERFILE_CONTENT",
    "DOCKERFILE_FILENAME",
    "GITIGNORE_CONTENT",
    "GITIGNORE_FILENAME",
    "MAINTAINERS_FILENAME",
    "PROJECT_PIPELINE_FILENAME",
    "RELEASE_SCRIPT_URL",
    "RENDER_HLD_PIPELINE_FILENAME",
    "SERVICE_PIPELINE_FILENAME",
    "VM_IMAGE",
]
