import os
import json
import requests
from dotenv import load_dotenv

# Load environment variables from a .env file for local testing
load_dotenv()

# The API Gateway endpoint registered as the Slack interactivity request URL
API_ENDPOINT = os.environ.get("INTERACTIVE_API")
VERIFICATION_TOKEN = os.environ.get("SLACK_VERIFICATION_TOKEN", "")


def build_interactive_payload(github_repo: str, github_branch: str, channel: str,
                              compute_type: str = "BUILD_GENERAL1_SMALL",
                              image: str = "aws/codebuild/standard:7.0") -> dict:
    """
    Builds a dialog submission shaped like the one Slack posts for the create project dialog.
    """
    return {
        "type": "dialog_submission",
        "token": VERIFICATION_TOKEN,
        "callback_id": "create_project",
        "user": {"id": "U0TESTUSER", "name": "cli-tester"},
        "submission": {
            "github_repo": github_repo,
            "github_branch": github_branch,
            "codebuid_compute_type": compute_type,
            "codebuid_image": image,
            "channel": channel
        }
    }


def send_dialog_submission(payload: dict):
    """
    Posts the payload form-encoded, the way Slack does.
    """
    if not API_ENDPOINT:
        print("❌ ERROR: INTERACTIVE_API environment variable not set. Please create a .env file.")
        return

    print("--- Attempting to send dialog submission ---")
    print(json.dumps(payload, indent=2))
    print("--------------------------------------------")

    try:
        response = requests.post(
            API_ENDPOINT,
            data={"payload": json.dumps(payload)},
            timeout=10
        )
        response.raise_for_status()
        print("\n✅ Success! Dialog submission sent.")
        print(f"Status Code: {response.status_code}")
        print(f"Response Body: {response.text!r}")

    except requests.exceptions.RequestException as e:
        print(f"\n❌ Failed to send dialog submission.")
        print(f"Error: {e}")


if __name__ == "__main__":
    print("--- Slack Dialog Test CLI ---")
    payload = build_interactive_payload(
        "https://github.com/thestackshack/cim",
        "master",
        os.environ.get("SLACK_CHANNEL", "G6QD7UBRD")
    )
    send_dialog_submission(payload)
