# lambdas/slack_interactive/request_parser.py
import re
import json
import base64
from urllib.parse import parse_qs

from models import InteractivePayload, DialogSubmission, SlackUser, ProjectParameters

GITHUB_URL_PREFIX = 'https://github.com/'
INVALID_REPO_MESSAGE = 'Invalid github repo.  Valid format is https://github.com/<owner>/<repo>'
PROJECT_ID_DISALLOWED = re.compile(r'[^a-zA-Z0-9-]')


class MalformedPayloadError(ValueError):
    """Raised when the interactive payload is not valid JSON or lacks a required field."""
    pass


class InvalidGithubRepoError(ValueError):
    """Raised when the submitted repository URL is not https://github.com/<owner>/<repo>."""
    pass


def parse_form_body(event: dict) -> dict:
    """
    Turns an API Gateway proxy event into the form fields Slack posted.
    Events that already carry a top-level 'payload' are taken as decoded.
    """
    if 'payload' in event:
        return event

    raw_body = event.get('body') or ''
    if event.get('isBase64Encoded'):
        raw_body = base64.b64decode(raw_body).decode('utf-8')

    # Slack sends application/x-www-form-urlencoded with a single value per key
    return {k: v[0] for k, v in parse_qs(raw_body, keep_blank_values=True).items()}


def _require_str(data: dict, key: str, where: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise MalformedPayloadError(f"Missing required field: {where}{key}")
    return value


def parse_interactive_payload(body: dict) -> InteractivePayload:
    """
    Decodes the JSON string under body['payload'].

    Raises:
        MalformedPayloadError: If the payload is missing, not JSON, or not a JSON object.
    """
    try:
        data = json.loads(body['payload'])
    except (KeyError, TypeError, json.JSONDecodeError) as e:
        raise MalformedPayloadError(f"Could not decode interactive payload: {e}") from e

    if not isinstance(data, dict):
        raise MalformedPayloadError("Interactive payload must be a JSON object.")

    return InteractivePayload(
        token=data.get('token'),
        callback_id=data.get('callback_id'),
        user=data.get('user') or {},
        submission=data.get('submission') or {},
    )


def read_dialog_submission(payload: InteractivePayload) -> tuple[DialogSubmission, SlackUser]:
    """
    Validates the create-project dialog fields and the submitting user.

    Raises:
        MalformedPayloadError: If any dialog or user field is missing.
    """
    submission = payload.submission
    user = payload.user
    if not isinstance(submission, dict) or not isinstance(user, dict):
        raise MalformedPayloadError("submission and user must be JSON objects.")

    dialog = DialogSubmission(
        github_repo=_require_str(submission, 'github_repo', 'submission.'),
        github_branch=_require_str(submission, 'github_branch', 'submission.'),
        codebuid_compute_type=_require_str(submission, 'codebuid_compute_type', 'submission.'),
        codebuid_image=_require_str(submission, 'codebuid_image', 'submission.'),
        channel=_require_str(submission, 'channel', 'submission.'),
    )
    slack_user = SlackUser(
        id=_require_str(user, 'id', 'user.'),
        name=_require_str(user, 'name', 'user.'),
    )
    return dialog, slack_user


def split_github_url(github_url: str) -> tuple[str, str]:
    """
    Returns (owner, repo) for https://github.com/<owner>/<repo>.

    Raises:
        InvalidGithubRepoError: If the path does not have exactly two segments.
    """
    parts = github_url.replace(GITHUB_URL_PREFIX, '', 1).split('/')
    if len(parts) != 2:
        raise InvalidGithubRepoError(INVALID_REPO_MESSAGE)
    return parts[0], parts[1]


def derive_project_id(github_repo: str, github_branch: str) -> str:
    """Joins repo and branch with '-' and replaces every other character outside [a-zA-Z0-9-] with '-'."""
    return PROJECT_ID_DISALLOWED.sub('-', f"{github_repo}-{github_branch}")


def build_project_parameters(dialog: DialogSubmission, user: SlackUser) -> ProjectParameters:
    """
    Validates the repository URL and assembles the project parameters.

    Raises:
        InvalidGithubRepoError: If the repository URL is malformed.
    """
    github_owner, github_repo = split_github_url(dialog.github_repo)

    return ProjectParameters(
        project_id=derive_project_id(github_repo, dialog.github_branch),
        github_owner=github_owner,
        github_repo=github_repo,
        github_branch=dialog.github_branch,
        codebuild_compute_type=dialog.codebuid_compute_type,
        codebuild_image=dialog.codebuid_image,
        channel=dialog.channel,
        github_url=dialog.github_repo,
        user_id=user.id,
        user_name=user.name,
    )
