"""bedrock.yaml project file.

bedrock.yaml sits at the project root and records the services in the
project, the rings (deployment branches) they are built for, and the Azure
DevOps variable groups the pipelines consume:

    rings:
      master:
        isDefault: true
    services:
      ./packages/service1:
        helm:
          chart:
            git: https://github.com/org/repo.git
            branch: master
            path: /service1
        k8sBackendPort: 80
    variableGroups:
    - my-vg
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from bedrockgen.artifact_writer import GenerationResult, write_if_absent
from bedrockgen.constants import BEDROCK_FILENAME, DEFAULT_K8S_BACKEND_PORT, DEFAULT_RING_BRANCHES
from bedrockgen.file_templates import default_bedrock
from bedrockgen.pipeline_templates import normalize_service_path
from bedrockgen.yaml_serializer import dump_yaml, load_yaml

logger = logging.getLogger(__name__)


class BedrockFileError(Exception):
    """Raised when bedrock.yaml does not have the expected shape."""

    pass


@dataclass
class HelmConfig:
    """Helm chart reference for a service.

    A chart is either pulled from a git repository (git, branch, path) or from
    a chart repository (repository, chart).
    """

    git: str | None = None
    branch: str | None = None
    path: str | None = None
    repository: str | None = None
    chart: str | None = None

    def validate(self) -> None:
        """Validate that exactly one chart source is configured.

        Raises:
            BedrockFileError: If neither or both sources are set
        """
        from_git = self.git is not None
        from_repository = self.repository is not None
        if from_git == from_repository:
            raise BedrockFileError(
                "Helm chart must reference either a git repository or a chart repository"
            )
        if from_repository and not self.chart:
            raise BedrockFileError("Helm chart repository requires a chart name")

    def to_dict(self) -> dict[str, Any]:
        if self.git is not None:
            chart = {"branch": self.branch or "master", "git": self.git, "path": self.path or ""}
        else:
            chart = {"chart": self.chart, "repository": self.repository}
        return {"chart": chart}

    @classmethod
    def from_dict(cls, data: Any) -> "HelmConfig":
        if not isinstance(data, dict) or not isinstance(data.get("chart"), dict):
            raise BedrockFileError("Invalid helm config: missing 'chart' mapping")
        chart = data["chart"]
        return cls(
            git=chart.get("git"),
            branch=chart.get("branch"),
            path=chart.get("path"),
            repository=chart.get("repository"),
            chart=chart.get("chart"),
        )


@dataclass
class ServiceEntry:
    """A service registered in bedrock.yaml."""

    helm: HelmConfig
    k8s_backend_port: int = DEFAULT_K8S_BACKEND_PORT

    def to_dict(self) -> dict[str, Any]:
        return {"helm": self.helm.to_dict(), "k8sBackendPort": self.k8s_backend_port}

    @classmethod
    def from_dict(cls, data: Any) -> "ServiceEntry":
        if not isinstance(data, dict):
            raise BedrockFileError(f"Invalid service entry: {data!r}")
        return cls(
            helm=HelmConfig.from_dict(data.get("helm")),
            k8s_backend_port=int(data.get("k8sBackendPort", DEFAULT_K8S_BACKEND_PORT)),
        )


@dataclass
class BedrockFile:
    """Parsed bedrock.yaml."""

    rings: dict[str, Any] = field(default_factory=dict)
    services: dict[str, ServiceEntry] = field(default_factory=dict)
    variable_groups: list[str] = field(default_factory=list)

    def ring_branches(self) -> list[str]:
        """Branches that trigger service builds; master when no rings are defined."""
        return list(self.rings) or list(DEFAULT_RING_BRANCHES)

    def to_dict(self) -> dict[str, Any]:
        return {
            "rings": dict(self.rings),
            "services": {path: entry.to_dict() for path, entry in self.services.items()},
            "variableGroups": list(self.variable_groups),
        }

    @classmethod
    def from_dict(cls, data: Any) -> "BedrockFile":
        """Create from a loaded YAML document.

        Raises:
            BedrockFileError: If the document shape is invalid
        """
        if not isinstance(data, dict):
            raise BedrockFileError("Invalid bedrock file: expected a mapping")

        rings = data.get("rings") or {}
        services = data.get("services") or {}
        variable_groups = data.get("variableGroups") or []
        if not isinstance(rings, dict) or not isinstance(services, dict):
            raise BedrockFileError("Invalid bedrock file: 'rings' and 'services' must be mappings")
        if not isinstance(variable_groups, list):
            raise BedrockFileError("Invalid bedrock file: 'variableGroups' must be a list")

        return cls(
            rings=rings,
            services={
                str(path): ServiceEntry.from_dict(entry) for path, entry in services.items()
            },
            variable_groups=[str(group) for group in variable_groups],
        )


def _load_document(bedrock_file_path: Path) -> dict[str, Any]:
    try:
        data = load_yaml(bedrock_file_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise BedrockFileError(f"Invalid YAML in {bedrock_file_path}: {e}") from e

    BedrockFile.from_dict(data)
    return data


def read_bedrock_file(bedrock_file_path: str | Path) -> BedrockFile:
    """Read and validate bedrock.yaml.

    Raises:
        FileNotFoundError: If the file does not exist
        BedrockFileError: If the content is not a bedrock document
    """
    return BedrockFile.from_dict(_load_document(Path(bedrock_file_path)))


def add_new_service_to_bedrock_file(
    bedrock_file_path: str | Path,
    new_service_path: str,
    helm_config: HelmConfig,
    k8s_backend_port: int = DEFAULT_K8S_BACKEND_PORT,
    *,
    log: logging.Logger | None = None,
) -> BedrockFile:
    """Register a service in bedrock.yaml, replacing any entry for the same path.

    Raises:
        FileNotFoundError: If bedrock.yaml does not exist
        BedrockFileError: If the existing file or the helm config is invalid
    """
    log = log or logger
    helm_config.validate()

    path = Path(bedrock_file_path)
    document = _load_document(path)

    if not isinstance(document.get("services"), dict):
        document["services"] = {}
    document["services"][normalize_service_path(new_service_path)] = ServiceEntry(
        helm=helm_config, k8s_backend_port=k8s_backend_port
    ).to_dict()

    log.info(f"Updating {path.name}")
    path.write_text(dump_yaml(document), encoding="utf-8")

    return BedrockFile.from_dict(document)


def generate_default_bedrock_file(
    target_directory: str | Path, *, log: logging.Logger | None = None
) -> GenerationResult:
    """Write an empty bedrock.yaml into a project root."""
    log = log or logger
    log.info(f"Generating {BEDROCK_FILENAME} in {Path(target_directory).resolve()}")
    return write_if_absent(
        target_directory, BEDROCK_FILENAME, lambda: dump_yaml(default_bedrock()), log=log
    )


__all__ = [
    "BedrockFile",
    "BedrockFileError",
    "HelmConfig",
    "ServiceEntry",
    "add_new_service_to_bedrock_file",
    "generate_default_bedrock_file",
    "read_bedrock_file",
]
