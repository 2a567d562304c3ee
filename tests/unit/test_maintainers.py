"""
Unit tests for maintainers module.

Test Coverage:
- User and MaintainersFile serialization and validation
- Adding a service preserves every other entry
- Path normalization for new service keys
- Starter maintainers.yaml generation
- Error handling for missing and malformed files
"""

import logging

import pytest

from bedrockgen.maintainers import (
    MaintainersError,
    MaintainersFile,
    User,
    add_new_service_to_maintainers_file,
    generate_maintainers_file,
    read_maintainers_file,
)
from bedrockgen.yaml_serializer import load_yaml

# ============================================================================
# MODEL TESTS
# ============================================================================


class TestUser:
    """Test maintainer entries."""

    def test_to_dict(self):
        assert User(name="Jane", email="jane@example.com").to_dict() == {
            "email": "jane@example.com",
            "name": "Jane",
        }

    def test_from_dict(self):
        user = User.from_dict({"name": "Jane", "email": "jane@example.com"})
        assert user == User(name="Jane", email="jane@example.com")

    def test_from_dict_missing_field(self):
        with pytest.raises(MaintainersError, match="email"):
            User.from_dict({"name": "Jane"})

    def test_from_dict_not_a_mapping(self):
        with pytest.raises(MaintainersError, match="mapping"):
            User.from_dict("jane@example.com")


class TestMaintainersFile:
    """Test the parsed maintainers document."""

    def test_from_dict(self, sample_maintainers):
        parsed = MaintainersFile.from_dict(sample_maintainers)

        assert list(parsed.services) == ["./", "./packages/service1"]
        assert parsed.services["./packages/service1"] == [
            User(name="testUser", email="hello@users.noreply.github.com")
        ]

    def test_to_dict_round_trip(self, sample_maintainers):
        assert MaintainersFile.from_dict(sample_maintainers).to_dict() == sample_maintainers

    @pytest.mark.parametrize(
        "document",
        [None, [], {"services": []}, {"services": {"./": {}}}, {"services": {"./": "x"}}],
    )
    def test_invalid_shapes_rejected(self, document):
        with pytest.raises(MaintainersError):
            MaintainersFile.from_dict(document)


# ============================================================================
# FILE OPERATIONS
# ============================================================================


class TestReadMaintainersFile:
    """Test reading maintainers.yaml."""

    def test_read(self, maintainers_file):
        parsed = read_maintainers_file(maintainers_file)
        assert "./packages/service1" in parsed.services

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_maintainers_file(tmp_path / "maintainers.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "maintainers.yaml"
        path.write_text("services: [unclosed", encoding="utf-8")

        with pytest.raises(MaintainersError, match="Invalid YAML"):
            read_maintainers_file(path)


class TestAddNewService:
    """Test adding a service to maintainers.yaml."""

    def test_adds_entry_and_keeps_others(self, maintainers_file, sample_maintainers):
        new_user = User(name="Jane", email="jane@example.com")

        add_new_service_to_maintainers_file(maintainers_file, "my-service", [new_user])

        doc = load_yaml(maintainers_file.read_text(encoding="utf-8"))
        for path, entry in sample_maintainers["services"].items():
            assert doc["services"][path] == entry
        assert doc["services"]["./my-service"] == {
            "maintainers": [{"email": "jane@example.com", "name": "Jane"}]
        }
        assert list(doc["services"]) == ["./", "./packages/service1", "./my-service"]

    def test_prefixed_path_not_doubled(self, maintainers_file):
        add_new_service_to_maintainers_file(
            maintainers_file, "./packages/api", [User(name="A", email="a@example.com")]
        )

        parsed = read_maintainers_file(maintainers_file)
        assert "./packages/api" in parsed.services
        assert "././packages/api" not in parsed.services

    def test_replaces_existing_entry(self, maintainers_file):
        add_new_service_to_maintainers_file(
            maintainers_file, "packages/service1", [User(name="New", email="new@example.com")]
        )

        parsed = read_maintainers_file(maintainers_file)
        assert parsed.services["./packages/service1"] == [
            User(name="New", email="new@example.com")
        ]
        assert len(parsed.services) == 2

    def test_returns_updated_file(self, maintainers_file):
        updated = add_new_service_to_maintainers_file(
            maintainers_file, "svc", [User(name="A", email="a@example.com")]
        )
        assert updated == read_maintainers_file(maintainers_file)

    def test_multiple_maintainers(self, maintainers_file):
        users = [User(name="A", email="a@example.com"), User(name="B", email="b@example.com")]

        add_new_service_to_maintainers_file(maintainers_file, "svc", users)

        assert read_maintainers_file(maintainers_file).services["./svc"] == users

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            add_new_service_to_maintainers_file(
                tmp_path / "maintainers.yaml", "svc", [User(name="A", email="a@example.com")]
            )
        assert not (tmp_path / "maintainers.yaml").exists()

    def test_malformed_file_not_rewritten(self, tmp_path):
        path = tmp_path / "maintainers.yaml"
        path.write_text("services: nope\n", encoding="utf-8")

        with pytest.raises(MaintainersError):
            add_new_service_to_maintainers_file(path, "svc", [User(name="A", email="a@example.com")])
        assert path.read_text(encoding="utf-8") == "services: nope\n"

    def test_logs_update(self, maintainers_file, caplog):
        caplog.set_level(logging.INFO)

        add_new_service_to_maintainers_file(
            maintainers_file, "svc", [User(name="A", email="a@example.com")]
        )

        assert "Updating maintainers.yaml" in caplog.text


class TestGenerateMaintainersFile:
    """Test starter maintainers.yaml generation."""

    def test_generates_root_entry(self, project_dir):
        result = generate_maintainers_file(project_dir, [User(name="Jane", email="j@example.com")])

        assert result.written
        assert load_yaml(result.path.read_text(encoding="utf-8")) == {
            "services": {"./": {"maintainers": [{"email": "j@example.com", "name": "Jane"}]}}
        }

    def test_existing_file_untouched(self, maintainers_file):
        before = maintainers_file.read_text(encoding="utf-8")

        result = generate_maintainers_file(
            maintainers_file.parent, [User(name="Jane", email="j@example.com")]
        )

        assert result.skipped
        assert maintainers_file.read_text(encoding="utf-8") == before
