"""bedrockgen - GitOps pipeline and repository scaffolding generator

Philosophy:
- Ruthless simplicity
- Brick architecture (self-contained modules)
- Generated files are never overwritten
- Fail fast with helpful guidance

bedrockgen writes Azure Pipelines definitions for building service images,
updating a high-level definition (HLD) repository, and rendering manifests,
along with the starter files a Bedrock project needs.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
