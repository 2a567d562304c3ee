"""Azure Pipelines document templates.

Every function in this module is pure: it maps explicit parameters to a nested
dict/list document and performs no I/O. Key insertion order is significant,
the serializer preserves it and Azure Pipelines executes stages, jobs and
steps in declaration order.

Pipelines:
    service_build_and_update_pipeline  build-update-hld.yaml (one per service)
    manifest_generation_pipeline       manifest-generation.yaml (HLD repository)
    hld_lifecycle_pipeline             hld-lifecycle.yaml (project repository)

Shell step bodies are kept as opaque text blocks built with yaml_script().
"""

from typing import Any

from bedrockgen.constants import BUILD_SCRIPT_URL, RELEASE_SCRIPT_URL, VM_IMAGE

INTROSPECTION_CONDITION = (
    "and(ne(variables['INTROSPECTION_ACCOUNT_NAME'], ''), "
    "ne(variables['INTROSPECTION_ACCOUNT_KEY'], ''),"
    "ne(variables['INTROSPECTION_TABLE_NAME'], ''),"
    "ne(variables['INTROSPECTION_PARTITION_KEY'], ''))"
)

HLD_UPDATE_CONDITION = (
    "and(succeeded('build'), "
    "or(startsWith(variables['Build.SourceBranch'], 'refs/heads/DEPLOY/'),"
    "eq(variables['Build.SourceBranchName'],'master')))"
)

INTROSPECTION_ARGS = (
    "-n $(INTROSPECTION_ACCOUNT_NAME) -k $(INTROSPECTION_ACCOUNT_KEY) "
    "-t $(INTROSPECTION_TABLE_NAME) -p $(INTROSPECTION_PARTITION_KEY)"
)

REQUIRED_SERVICE_PIPELINE_VARIABLES = [
    "'ACR_NAME' (name of your ACR)",
    "'HLD_REPO' (Repository for your HLD in AzDo. eg. 'dev.azure.com/bhnook/fabrikam/_git/hld')",
    "'PAT' (AzDo Personal Access Token with permissions to the HLD repository.)",
    "'SP_APP_ID' (service principal ID with access to your ACR)",
    "'SP_PASS' (service principal secret)",
    "'SP_TENANT' (service principal tenant)",
]

REQUIRED_MANIFEST_PIPELINE_VARIABLES = [
    "'MANIFEST_REPO' (Repository for your kubernetes manifests in AzDo. "
    "eg. 'dev.azure.com/bhnook/fabrikam/_git/materialized')",
    "'PAT' (AzDo Personal Access Token with permissions to the HLD repository.)",
]

REQUIRED_LIFECYCLE_PIPELINE_VARIABLES = [
    "'HLD_REPO' (Repository for your HLD in AzDo. eg. 'dev.azure.com/bhnook/fabrikam/_git/hld')",
    "'PAT' (AzDo Personal Access Token with permissions to the HLD repository.)",
]


def yaml_script(lines: list[str]) -> str:
    """Join shell commands into a single multi-line script block."""
    return "\n".join(lines)


def normalize_service_path(rel_service_path: str) -> str:
    """Prefix a relative service path with ./ unless it already has it.

    Examples:
        >>> normalize_service_path("services/foo")
        './services/foo'
        >>> normalize_service_path("./services/foo")
        './services/foo'
    """
    if rel_service_path.startswith("./"):
        return rel_service_path
    return "./" + rel_service_path


def _pool() -> dict[str, str]:
    return {"vmImage": VM_IMAGE}


def _download_build_script_step() -> dict[str, Any]:
    return {
        "script": yaml_script(
            [
                "# Download build.sh",
                "curl $BEDROCK_BUILD_SCRIPT > build.sh",
                "chmod +x ./build.sh",
            ]
        ),
        "displayName": "Download bedrock bash scripts",
        "env": {"BEDROCK_BUILD_SCRIPT": "$(BUILD_SCRIPT_URL)"},
    }


def _download_spk_lines() -> list[str]:
    return [
        'echo "Downloading SPK"',
        f"curl {BUILD_SCRIPT_URL} > build.sh",
        "chmod +x build.sh",
        ". ./build.sh --source-only",
        "get_spk_version",
        "download_spk",
    ]


def _open_pr_lines(description: str, capture_response: bool) -> list[str]:
    create_pr = f'az repos pr create --description "{description}"'
    lines = [
        "# Open PR via az repo cli",
        "echo 'az extension add --name azure-devops'",
        "az extension add --name azure-devops",
        "",
        f"echo '{create_pr}'",
    ]
    if capture_response:
        lines += [
            f"response=$({create_pr})",
            "pr_id=$(echo $response | jq -r '.pullRequestId')",
        ]
    else:
        lines.append(create_pr)
    return lines


def _git_commit_lines(commit_message: str) -> list[str]:
    return [
        'echo "GIT STATUS"',
        "git status",
        'echo "GIT ADD (git add -A)"',
        "git add -A",
        "",
        "# Set git identity",
        'git config user.email "admin@azuredevops.com"',
        'git config user.name "Automated Account"',
        "",
        "# Commit changes",
        'echo "GIT COMMIT"',
        f'git commit -m "{commit_message}"',
        "",
        "# Git Push",
        "git_push",
        "",
    ]


def _build_stage(service_name: str, service_path: str) -> dict[str, Any]:
    build_repo_name = (
        f"export BUILD_REPO_NAME=$(echo $(Build.Repository.Name)-{service_name} "
        "| tr '[:upper:]' '[:lower:]')"
    )
    image = "$BUILD_REPO_NAME:$(Build.SourceBranchName)-$(Build.BuildNumber)"

    login_step = {
        "script": yaml_script(
            [
                'echo "az login --service-principal --username $(SP_APP_ID) '
                '--password $(SP_PASS) --tenant $(SP_TENANT)"',
                'az login --service-principal --username "$(SP_APP_ID)" '
                '--password "$(SP_PASS)" --tenant "$(SP_TENANT)"',
            ]
        ),
        "displayName": "Azure Login",
    }

    introspection_step = {
        "script": yaml_script(
            [
                build_repo_name,
                f'tag_name="{image}"',
                "commitId=$(Build.SourceVersion)",
                'commitId=$(echo "${commitId:0:7}")',
                "service=$(Build.Repository.Name)",
                "service=${service##*/}",
                *_download_spk_lines(),
                f"./spk/spk deployment create {INTROSPECTION_ARGS} --p1 $(Build.BuildId) "
                "--image-tag $tag_name --commit-id $commitId --service $service",
            ]
        ),
        "displayName": "If configured, update Spektate storage with build pipeline",
        "condition": INTROSPECTION_CONDITION,
    }

    acr_build_step = {
        "script": yaml_script(
            [
                build_repo_name,
                'echo "Image Name: $BUILD_REPO_NAME"',
                f"cd {service_path}",
                f'echo "az acr build -r $(ACR_NAME) --image {image} ."',
                f"az acr build -r $(ACR_NAME) --image {image} .",
            ]
        ),
        "displayName": "ACR Build and Publish",
    }

    return {
        "stage": "build",
        "jobs": [
            {
                "job": "run_build_push_acr",
                "pool": _pool(),
                "steps": [login_step, introspection_step, acr_build_step],
            }
        ],
    }


def _hld_update_stage(service_name: str) -> dict[str, Any]:
    tag = "$(Build.SourceBranchName)-$(Build.BuildNumber)"

    update_script = [
        f"export SERVICE_NAME_LOWER=$(echo {service_name} | tr '[:upper:]' '[:lower:]')",
        "export BUILD_REPO_NAME=$(echo $(Build.Repository.Name)-$SERVICE_NAME_LOWER "
        "| tr '[:upper:]' '[:lower:]')",
        f"export BRANCH_NAME=DEPLOY/$BUILD_REPO_NAME-{tag}",
        f"# --- From {RELEASE_SCRIPT_URL}",
        ". build.sh --source-only",
        "",
        "# Initialization",
        "verify_access_token",
        "init",
        "helm init",
        "",
        "# Fabrikate",
        "get_fab_version",
        "download_fab",
        "",
        "# Clone HLD repo",
        "git_connect",
        "# --- End Script",
        "",
        "# Update HLD",
        'git checkout -b "$BRANCH_NAME"',
        f"../fab/fab set --subcomponent $SERVICE_NAME_LOWER image.tag={tag}",
        *_git_commit_lines(f"Updating $SERVICE_NAME_LOWER image tag to {tag}."),
        *_open_pr_lines(f"Updating $SERVICE_NAME_LOWER to {tag}.", capture_response=True),
        "",
        "",
        "# Update introspection storage with this information, if applicable",
        'if [ -z "$(INTROSPECTION_ACCOUNT_NAME)" -o -z "$(INTROSPECTION_ACCOUNT_KEY)" '
        '-o -z "$(INTROSPECTION_TABLE_NAME)" -o -z "$(INTROSPECTION_PARTITION_KEY)" ]; then',
        'echo "Introspection variables are not defined. Skipping..."',
        "else",
        "latest_commit=$(git rev-parse --short HEAD)",
        f'tag_name="$BUILD_REPO_NAME:{tag}"',
        *_download_spk_lines(),
        f"./spk/spk deployment create  {INTROSPECTION_ARGS} --p2 $(Build.BuildId) "
        "--hld-commit-id $latest_commit --env $BRANCH_NAME --image-tag $tag_name --pr $pr_id",
        "fi",
    ]

    return {
        "stage": "hld_update",
        "dependsOn": "build",
        "condition": HLD_UPDATE_CONDITION,
        "jobs": [
            {
                "job": "update_image_tag",
                "pool": _pool(),
                "steps": [
                    _download_build_script_step(),
                    {
                        "script": yaml_script(update_script),
                        "displayName": "Download Fabrikate, Update HLD, Push changes, "
                        "Open PR, and if configured, push to Spektate storage",
                        "env": {
                            "ACCESS_TOKEN_SECRET": "$(PAT)",
                            "AZURE_DEVOPS_EXT_PAT": "$(PAT)",
                            "REPO": "$(HLD_REPO)",
                        },
                    },
                ],
            }
        ],
    }


def service_build_and_update_pipeline(
    service_name: str,
    rel_service_path: str,
    ring_branches: list[str],
    variable_groups: list[str] | None = None,
) -> dict[str, Any]:
    """Build the multistage build and update image tag pipeline for a service.

    Stage "build" logs into Azure, optionally records the build in the
    introspection store, then builds and publishes the image to ACR. Stage
    "hld_update" runs only after a successful build on a DEPLOY/ branch or on
    master, and bumps the image tag in the HLD repository through a pull request.

    Args:
        service_name: Service name, used for the image repository name
        rel_service_path: Service path relative to the project root
        ring_branches: Branches that trigger the pipeline (one per ring)
        variable_groups: Azure DevOps variable group names

    Returns:
        Pipeline document

    Raises:
        ValueError: If service_name is blank or ring_branches is empty
    """
    if not service_name or not service_name.strip():
        raise ValueError("Service name cannot be empty")
    if not ring_branches:
        raise ValueError("At least one ring branch is required to trigger the pipeline")

    service_path = normalize_service_path(rel_service_path)

    return {
        "trigger": {
            "branches": {"include": list(ring_branches)},
            "paths": {"include": [service_path]},
        },
        "variables": [{"group": group} for group in (variable_groups or [])],
        "stages": [
            _build_stage(service_name, service_path),
            _hld_update_stage(service_name),
        ],
    }


def manifest_generation_pipeline() -> dict[str, Any]:
    """Build the HLD to materialized manifest pipeline.

    Pull requests only validate the Fabrikate definitions; other builds render
    them and push the manifests to the manifest repository.
    """
    introspection_create = (
        f"./spk/spk deployment create {INTROSPECTION_ARGS} --p3 $(Build.BuildId) "
        "--hld-commit-id $commitId --manifest-commit-id $latest_commit"
    )

    return {
        "trigger": {"branches": {"include": ["master"]}},
        "pool": _pool(),
        "steps": [
            {"checkout": "self", "persistCredentials": True, "clean": True},
            _download_build_script_step(),
            {
                "task": "ShellScript@2",
                "displayName": "Validate fabrikate definitions",
                "inputs": {"scriptPath": "build.sh"},
                "condition": "eq(variables['Build.Reason'], 'PullRequest')",
                "env": {"VERIFY_ONLY": 1},
            },
            {
                "task": "ShellScript@2",
                "displayName": "Transform fabrikate definitions and publish to YAML manifests to repo",
                "inputs": {"scriptPath": "build.sh"},
                "condition": "ne(variables['Build.Reason'], 'PullRequest')",
                "env": {
                    "ACCESS_TOKEN_SECRET": "$(PAT)",
                    "COMMIT_MESSAGE": "$(Build.SourceVersionMessage)",
                    "REPO": "$(MANIFEST_REPO)",
                    "BRANCH_NAME": "$(Build.SourceBranchName)",
                },
            },
            {
                "script": yaml_script(
                    [
                        'cd "$HOME"/${MANIFEST_REPO##*/}',
                        "commitId=$(Build.SourceVersion)",
                        'commitId=$(echo "${commitId:0:7}")',
                        "latest_commit=$(git rev-parse --short HEAD)",
                        *_download_spk_lines(),
                        'message="$(Build.SourceVersionMessage)"',
                        'if [[ $message == *"Merged PR"* ]]; then',
                        "pr_id=$(echo $message | grep -oE '[0-9]+' | head -1 | sed -e 's/^0\\+//')",
                        f"{introspection_create} --pr $pr_id",
                        "else",
                        introspection_create,
                        "fi",
                    ]
                ),
                "displayName": "If configured, update manifest pipeline details in Spektate db",
                "condition": INTROSPECTION_CONDITION,
            },
        ],
    }


def hld_lifecycle_pipeline() -> dict[str, Any]:
    """Build the pipeline that reconciles project services into the HLD repository."""
    build_ref = "$(Build.Repository.Name)-$(Build.BuildNumber)"

    reconcile_script = [
        f"# From {RELEASE_SCRIPT_URL}",
        ". build.sh --source-only",
        "",
        "# Initialization",
        "verify_access_token",
        "init",
        "helm init",
        "",
        "# Fabrikate",
        "get_fab_version",
        "download_fab",
        "",
        "# SPK",
        "get_spk_version",
        "download_spk",
        "",
        "# Clone HLD repo",
        "git_connect",
        "",
        "# Update HLD via spk",
        f'git checkout -b "RECONCILE/{build_ref}"',
        'echo "spk hld reconcile $(Build.Repository.Name) $PWD ./.."',
        "spk hld reconcile $(Build.Repository.Name) $PWD ./..",
        *_git_commit_lines(f"Reconciling HLD with {build_ref}."),
        *_open_pr_lines(f"Reconciling HLD with {build_ref}.", capture_response=False),
    ]

    return {
        "trigger": {"branches": {"include": ["master"]}},
        "variables": [],
        "pool": _pool(),
        "steps": [
            _download_build_script_step(),
            {
                "script": yaml_script(reconcile_script),
                "displayName": "Download Fabrikate and SPK, Update HLD, Push changes, Open PR",
                "env": {
                    "ACCESS_TOKEN_SECRET": "$(PAT)",
                    "AZURE_DEVOPS_EXT_PAT": "$(PAT)",
                    "REPO": "$(HLD_REPO)",
                },
            },
        ],
    }


__all__ = [
    "HLD_UPDATE_CONDITION",
    "INTROSPECTION_CONDITION",
    "REQUIRED_LIFECYCLE_PIPELINE_VARIABLES",
    "REQUIRED_MANIFEST_PIPELINE_VARIABLES",
    "REQUIRED_SERVICE_PIPELINE_VARIABLES",
    "hld_lifecycle_pipeline",
    "manifest_generation_pipeline",
    "normalize_service_path",
    "service_build_and_update_pipeline",
    "yaml_script",
]
