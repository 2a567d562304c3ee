"""maintainers.yaml management.

The maintainers file maps each service path in a project to the people
responsible for it:

    services:
      ./:
        maintainers:
        - email: someone@example.com
          name: Some One
      ./packages/service1:
        maintainers:
        - ...

Adding a service replaces any existing entry for the same path and leaves
every other entry as it was.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from bedrockgen.artifact_writer import GenerationResult, write_if_absent
from bedrockgen.constants import MAINTAINERS_FILENAME
from bedrockgen.file_templates import default_maintainers
from bedrockgen.pipeline_templates import normalize_service_path
from bedrockgen.yaml_serializer import dump_yaml, load_yaml

logger = logging.getLogger(__name__)


class MaintainersError(Exception):
    """Raised when a maintainers file does not have the expected shape."""

    pass


@dataclass
class User:
    """A service maintainer."""

    name: str
    email: str

    def to_dict(self) -> dict[str, str]:
        return {"email": self.email, "name": self.name}

    @classmethod
    def from_dict(cls, data: Any) -> "User":
        """Create a maintainer from a {name, email} mapping.

        Raises:
            MaintainersError: If the entry is not a mapping or lacks a field
        """
        if not isinstance(data, dict):
            raise MaintainersError(f"Maintainer entry must be a mapping, got: {data!r}")

        missing_fields = [f for f in ("name", "email") if f not in data]
        if missing_fields:
            raise MaintainersError(f"Missing required field: {', '.join(missing_fields)}")

        return cls(name=str(data["name"]), email=str(data["email"]))


@dataclass
class MaintainersFile:
    """Parsed maintainers.yaml: service path -> maintainers."""

    services: dict[str, list[User]] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "services": {
                path: {"maintainers": [user.to_dict() for user in users]}
                for path, users in self.services.items()
            }
        }

    @classmethod
    def from_dict(cls, data: Any) -> "MaintainersFile":
        """Create from a loaded YAML document.

        Raises:
            MaintainersError: If the document shape is invalid
        """
        if not isinstance(data, dict) or not isinstance(data.get("services"), dict):
            raise MaintainersError("Invalid maintainers file: missing 'services' mapping")

        services: dict[str, list[User]] = {}
        for path, entry in data["services"].items():
            if not isinstance(entry, dict) or not isinstance(entry.get("maintainers"), list):
                raise MaintainersError(
                    f"Invalid maintainers entry for '{path}': missing 'maintainers' list"
                )
            services[str(path)] = [User.from_dict(user) for user in entry["maintainers"]]

        return cls(services=services)


def _load_document(maintainers_file_path: Path) -> dict[str, Any]:
    try:
        data = load_yaml(maintainers_file_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise MaintainersError(f"Invalid YAML in {maintainers_file_path}: {e}") from e

    # Shape check only; the raw document is what gets written back
    MaintainersFile.from_dict(data)
    return data


def read_maintainers_file(maintainers_file_path: str | Path) -> MaintainersFile:
    """Read and validate a maintainers file.

    Raises:
        FileNotFoundError: If the file does not exist
        MaintainersError: If the content is not a maintainers document
    """
    return MaintainersFile.from_dict(_load_document(Path(maintainers_file_path)))


def add_new_service_to_maintainers_file(
    maintainers_file_path: str | Path,
    new_service_path: str,
    service_maintainers: list[User],
    *,
    log: logging.Logger | None = None,
) -> MaintainersFile:
    """Add or replace the maintainers of one service and write the file back.

    Args:
        maintainers_file_path: Existing maintainers.yaml
        new_service_path: Service path relative to the project root
        service_maintainers: Maintainers for the service

    Returns:
        The updated maintainers file

    Raises:
        FileNotFoundError: If the maintainers file does not exist
        MaintainersError: If the existing file cannot be parsed
    """
    log = log or logger
    path = Path(maintainers_file_path)
    document = _load_document(path)

    document["services"][normalize_service_path(new_service_path)] = {
        "maintainers": [user.to_dict() for user in service_maintainers]
    }

    log.info(f"Updating {path.name}")
    path.write_text(dump_yaml(document), encoding="utf-8")

    return MaintainersFile.from_dict(document)


def generate_maintainers_file(
    target_directory: str | Path,
    maintainers: list[User],
    *,
    log: logging.Logger | None = None,
) -> GenerationResult:
    """Write a starter maintainers.yaml owning the project root."""
    log = log or logger
    log.info(f"Generating {MAINTAINERS_FILENAME} in {Path(target_directory).resolve()}")
    return write_if_absent(
        target_directory,
        MAINTAINERS_FILENAME,
        lambda: dump_yaml(default_maintainers([user.to_dict() for user in maintainers])),
        log=log,
    )


__all__ = [
    "MaintainersError",
    "MaintainersFile",
    "User",
    "add_new_service_to_maintainers_file",
    "generate_maintainers_file",
    "read_maintainers_file",
]
