# lambdas/slack_interactive/models.py
"""
Plain-dataclass models and a simple settings class for the Slack interactive handler.
"""
import os
from dataclasses import dataclass, asdict, field
from functools import lru_cache


class AppSettings:
    """
    Loads configuration settings directly from environment variables,
    providing sensible defaults for local testing.
    """
    def __init__(self):
        self.aws_region: str = os.getenv("AWS_REGION", "us-east-1")
        self.verification_token: str | None = os.getenv("SLACK_VERIFICATION_TOKEN")
        self.projects_table_name: str = os.getenv("PROJECTS_TABLE_NAME", "SlackCicdProjects")
        self.stack_name_prefix: str = os.getenv("STACK_NAME_PREFIX", "slack-cicd")
        # Empty means the project stack gets no build notification rule
        self.notification_function_arn: str = os.getenv("NOTIFICATION_FUNCTION_ARN", "")


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Settings are read once per Lambda container."""
    return AppSettings()


class ProjectSetupError(Exception):
    """
    Base class for failures reported by the provisioning and persistence steps.
    The reason is what the user sees next to the github_repo field.
    """
    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


# Data models
@dataclass
class SlackUser:
    id: str
    name: str


@dataclass
class DialogSubmission:
    """
    The fields of the "create project" dialog. The codebuid_ spelling matches
    the element names registered in the Slack dialog.
    """
    github_repo: str
    github_branch: str
    codebuid_compute_type: str
    codebuid_image: str
    channel: str


@dataclass
class InteractivePayload:
    """
    The decoded body of a Slack interactive component request.
    user and submission stay raw until a route knows which fields it needs.
    """
    token: str | None
    callback_id: str | None
    user: dict = field(default_factory=dict)
    submission: dict = field(default_factory=dict)


@dataclass(frozen=True)
class ProjectParameters:
    """
    The normalized description of a requested build project.
    Built once per valid request and handed to both setup steps.
    """
    project_id: str
    github_owner: str
    github_repo: str
    github_branch: str
    codebuild_compute_type: str
    codebuild_image: str
    channel: str
    github_url: str
    user_id: str
    user_name: str

    def to_dict(self) -> dict:
        return asdict(self)
