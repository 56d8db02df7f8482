# lambdas/slack_interactive/app.py
import hmac
import json

# Import the lambda-specific sub-modules
from models import InteractivePayload, ProjectSetupError, get_settings
from request_parser import (
    parse_form_body,
    parse_interactive_payload,
    read_dialog_submission,
    build_project_parameters,
    InvalidGithubRepoError,
)
from stack_provisioner import build_stack_up
from project_store import put_project

CREATE_PROJECT_PREFIX = 'create_project'


def build_response(status_code: int, body: str) -> dict:
    """Helper function to build the API Gateway proxy response."""
    return {
        'statusCode': status_code,
        'body': body
    }


def is_valid_token(token) -> bool:
    expected = get_settings().verification_token
    if not expected:
        print("⚠️ SLACK_VERIFICATION_TOKEN not set. Rejecting every request.")
        return False
    # A missing or non-string token is a mismatch, not a malformed request
    if not isinstance(token, str):
        return False
    return hmac.compare_digest(token.encode('utf-8'), expected.encode('utf-8'))


def is_create_project(callback_id) -> bool:
    return isinstance(callback_id, str) and callback_id.startswith(CREATE_PROJECT_PREFIX)


def handle_create_project_dialog(payload: InteractivePayload) -> dict:
    """
    Validates the dialog submission, creates the project stack and stores the project.
    Every setup failure is reported against the github_repo field of the dialog.
    """
    print("create_project")
    dialog, user = read_dialog_submission(payload)

    try:
        params = build_project_parameters(dialog, user)
    except InvalidGithubRepoError as e:
        print(f"⚠️ Rejected repo '{dialog.github_repo}': {e}")
        return build_response(200, str(e))

    print(f"Project '{params.project_id}' requested by {params.user_name} ({params.user_id})")

    # Provision first, then persist; stop at the first failure.
    for stage, step in (("provisioning", build_stack_up), ("persisting", put_project)):
        try:
            step(params)
        except ProjectSetupError as e:
            print(f"❌ Project setup failed while {stage}: {e.reason}")
            return build_response(200, json.dumps({
                "errors": [
                    {
                        "name": "github_repo",
                        "error": e.reason
                    }
                ]
            }))

    print(f"✅ Project '{params.project_id}' created.")
    return build_response(200, '')


def handle_interactive_request(body: dict) -> dict:
    """
    Entry point for Slack interactive components.

    Raises:
        MalformedPayloadError: If body['payload'] is not a usable interactive payload.
    """
    print("slack_interactive_components")
    payload = parse_interactive_payload(body)
    print(f"Received interactive request. callback_id: {payload.callback_id}")

    # Is the token valid?
    if not is_valid_token(payload.token):
        return build_response(200, 'Invalid token')

    # Route to the correct handler function.
    if is_create_project(payload.callback_id):
        return handle_create_project_dialog(payload)

    print(f"⚠️ Unknown callback_id: {payload.callback_id}")
    return build_response(500, 'Unknown slack interactive request.')


def handler(event: dict, context: object) -> dict:
    """
    API Gateway handler for the Slack interactivity request URL.
    """
    return handle_interactive_request(parse_form_body(event))
