# lambdas/common/slack_client.py
import os
import requests

# Configuration
SLACK_API_URL = os.environ.get('SLACK_API_URL', 'https://slack.com/api/chat.postMessage')
SLACK_BOT_TOKEN = os.environ.get('SLACK_BOT_TOKEN')


class SlackPostError(Exception):
    """Raised when Slack accepts the request but reports ok=false."""
    pass


def post_message(message: dict) -> dict:
    """
    Posts a message to Slack through the chat.postMessage Web API.

    Args:
        message: A dict with at least 'channel' and 'text'.

    Returns:
        The decoded Slack API response.

    Raises:
        SlackPostError: If Slack answers with ok=false.
        requests.exceptions.RequestException: On network or HTTP errors.
    """
    print(f"Posting message to Slack channel '{message.get('channel')}'...")
    response = requests.post(
        SLACK_API_URL,
        json=message,
        headers={
            'Authorization': f"Bearer {SLACK_BOT_TOKEN}",
            'Content-Type': 'application/json; charset=utf-8'
        },
        timeout=10
    )
    response.raise_for_status()

    result = response.json()
    if not result.get('ok'):
        print(f"❌ Slack rejected the message: {result.get('error')}")
        raise SlackPostError(result.get('error', 'unknown_error'))

    print(f"✅ Message posted to Slack. ts: {result.get('ts')}")
    return result
