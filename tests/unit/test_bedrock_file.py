"""
Unit tests for bedrock_file module.

Test Coverage:
- Helm chart validation and serialization
- Parsing bedrock.yaml, ring branches
- Registering services
- Starter bedrock.yaml generation
"""

import pytest

from bedrockgen.bedrock_file import (
    BedrockFile,
    BedrockFileError,
    HelmConfig,
    ServiceEntry,
    add_new_service_to_bedrock_file,
    generate_default_bedrock_file,
    read_bedrock_file,
)
from bedrockgen.yaml_serializer import load_yaml

# ============================================================================
# MODEL TESTS
# ============================================================================


class TestHelmConfig:
    """Test helm chart references."""

    def test_git_chart_to_dict(self):
        helm = HelmConfig(git="https://github.com/org/charts.git", path="/svc")
        assert helm.to_dict() == {
            "chart": {"branch": "master", "git": "https://github.com/org/charts.git", "path": "/svc"}
        }

    def test_repository_chart_to_dict(self):
        helm = HelmConfig(repository="https://charts.example.com/", chart="zookeeper")
        assert helm.to_dict() == {
            "chart": {"chart": "zookeeper", "repository": "https://charts.example.com/"}
        }

    @pytest.mark.parametrize(
        "helm",
        [
            HelmConfig(),
            HelmConfig(git="https://github.com/org/charts.git", repository="https://c/"),
            HelmConfig(repository="https://charts.example.com/"),
        ],
    )
    def test_invalid_configs_rejected(self, helm):
        with pytest.raises(BedrockFileError):
            helm.validate()

    def test_valid_configs_accepted(self):
        HelmConfig(git="https://github.com/org/charts.git").validate()
        HelmConfig(repository="https://charts.example.com/", chart="zookeeper").validate()

    def test_from_dict_missing_chart(self):
        with pytest.raises(BedrockFileError, match="chart"):
            HelmConfig.from_dict({"helm": {}})


class TestBedrockFile:
    """Test the parsed bedrock document."""

    def test_from_dict(self, sample_bedrock):
        parsed = BedrockFile.from_dict(sample_bedrock)

        assert list(parsed.services) == ["./", "./packages/service1", "./zookeeper"]
        assert parsed.services["./zookeeper"].helm.chart == "zookeeper"
        assert parsed.services["./"].k8s_backend_port == 80

    def test_round_trip(self, sample_bedrock):
        assert BedrockFile.from_dict(sample_bedrock).to_dict() == sample_bedrock

    def test_ring_branches_default_to_master(self):
        assert BedrockFile().ring_branches() == ["master"]

    def test_ring_branches_from_rings(self):
        bedrock = BedrockFile(rings={"master": {"isDefault": True}, "qa": {}, "prod": {}})
        assert bedrock.ring_branches() == ["master", "qa", "prod"]

    def test_null_sections_are_empty(self):
        parsed = BedrockFile.from_dict({"rings": None, "services": None, "variableGroups": None})
        assert parsed == BedrockFile()

    @pytest.mark.parametrize(
        "document",
        [[], {"rings": ["master"]}, {"services": "x"}, {"variableGroups": "vg"}],
    )
    def test_invalid_shapes_rejected(self, document):
        with pytest.raises(BedrockFileError):
            BedrockFile.from_dict(document)

    def test_service_entry_keys(self):
        entry = ServiceEntry(helm=HelmConfig(git="g"), k8s_backend_port=8080)
        assert list(entry.to_dict()) == ["helm", "k8sBackendPort"]


# ============================================================================
# FILE OPERATIONS
# ============================================================================


class TestAddNewServiceToBedrockFile:
    """Test registering services in bedrock.yaml."""

    def test_adds_service_and_keeps_others(self, bedrock_file, sample_bedrock):
        helm = HelmConfig(git="https://github.com/org/charts.git", branch="main", path="/api")

        add_new_service_to_bedrock_file(bedrock_file, "packages/api", helm, 8080)

        doc = load_yaml(bedrock_file.read_text(encoding="utf-8"))
        for path, entry in sample_bedrock["services"].items():
            assert doc["services"][path] == entry
        assert doc["services"]["./packages/api"] == {
            "helm": {
                "chart": {"branch": "main", "git": "https://github.com/org/charts.git", "path": "/api"}
            },
            "k8sBackendPort": 8080,
        }

    def test_invalid_helm_config_leaves_file_alone(self, bedrock_file):
        before = bedrock_file.read_text(encoding="utf-8")

        with pytest.raises(BedrockFileError):
            add_new_service_to_bedrock_file(bedrock_file, "svc", HelmConfig())

        assert bedrock_file.read_text(encoding="utf-8") == before

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            add_new_service_to_bedrock_file(
                tmp_path / "bedrock.yaml", "svc", HelmConfig(git="https://g/")
            )

    def test_empty_services_section(self, tmp_path):
        path = tmp_path / "bedrock.yaml"
        path.write_text("rings: {}\nservices:\nvariableGroups: []\n", encoding="utf-8")

        updated = add_new_service_to_bedrock_file(path, "svc", HelmConfig(git="https://g/"))

        assert list(updated.services) == ["./svc"]

    def test_read_invalid_yaml(self, tmp_path):
        path = tmp_path / "bedrock.yaml"
        path.write_text("rings: [", encoding="utf-8")

        with pytest.raises(BedrockFileError, match="Invalid YAML"):
            read_bedrock_file(path)


class TestGenerateDefaultBedrockFile:
    """Test starter bedrock.yaml generation."""

    def test_generates_empty_document(self, project_dir):
        result = generate_default_bedrock_file(project_dir)

        assert result.written
        assert result.path.read_text(encoding="utf-8") == (
            "rings: {}\nservices: {}\nvariableGroups: []\n"
        )

    def test_existing_file_untouched(self, bedrock_file):
        before = bedrock_file.read_text(encoding="utf-8")

        assert generate_default_bedrock_file(bedrock_file.parent).skipped
        assert bedrock_file.read_text(encoding="utf-8") == before
