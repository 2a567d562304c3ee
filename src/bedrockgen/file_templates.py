"""Starter repository file templates.

Pure builders for the non-pipeline documents written during project, service
and HLD initialization.
"""

from typing import Any

from bedrockgen.constants import DEFAULT_COMPONENT_PATH, DEFAULT_COMPONENT_SOURCE


def default_component() -> dict[str, Any]:
    """A default Fabrikate component that includes the cloud native stack."""
    return {
        "name": "default-component",
        "subcomponents": [
            {
                "name": "cloud-native",
                "method": "git",
                "source": DEFAULT_COMPONENT_SOURCE,
                "path": DEFAULT_COMPONENT_PATH,
            }
        ],
    }


def default_maintainers(maintainers: list[dict[str, str]]) -> dict[str, Any]:
    """Maintainers document owning the project root.

    Args:
        maintainers: Entries with "name" and "email" keys

    Returns:
        Maintainers document keyed by "./"
    """
    return {"services": {"./": {"maintainers": [dict(m) for m in maintainers]}}}


def default_bedrock() -> dict[str, Any]:
    """Empty bedrock.yaml document: no rings, no services, no variable groups."""
    return {"rings": {}, "services": {}, "variableGroups": []}


__all__ = ["default_bedrock", "default_component", "default_maintainers"]
