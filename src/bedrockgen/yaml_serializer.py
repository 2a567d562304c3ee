"""YAML serialization for generated documents.

Documents are dumped with PyYAML's safe dumper in insertion order and without
line folding, so pipeline conditions and shell commands stay on one line.
Multi-line strings (shell script steps) are emitted as literal blocks.
"""

from typing import Any

try:
    import yaml
except ImportError:
    raise ImportError("PyYAML not available. Install with: pip install pyyaml")


class _PipelineDumper(yaml.SafeDumper):
    """Safe dumper that writes multi-line strings as literal blocks."""


def _represent_str(dumper: yaml.SafeDumper, data: str) -> yaml.ScalarNode:
    if "\n" in data:
        return dumper.represent_scalar("tag:yaml.org,2002:str", data, style="|")
    return dumper.represent_scalar("tag:yaml.org,2002:str", data)


_PipelineDumper.add_representer(str, _represent_str)


def dump_yaml(document: Any) -> str:
    """Serialize a document to YAML text.

    Args:
        document: Nested dicts/lists/scalars

    Returns:
        YAML text; identical documents always produce identical text
    """
    return yaml.dump(
        document,
        Dumper=_PipelineDumper,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
        width=float("inf"),
    )


def load_yaml(text: str) -> Any:
    """Parse YAML text with the safe loader.

    Raises:
        yaml.YAMLError: If the text is not valid YAML
    """
    return yaml.safe_load(text)


__all__ = ["dump_yaml", "load_yaml"]
