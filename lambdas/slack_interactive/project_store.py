# lambdas/slack_interactive/project_store.py
from datetime import datetime, timezone

import boto3
from botocore.exceptions import ClientError

from models import ProjectParameters, ProjectSetupError, get_settings
from stack_provisioner import stack_name_for

# Initialize resources once for Lambda container reuse
settings = get_settings()
DYNAMODB_RESOURCE = boto3.resource('dynamodb', region_name=settings.aws_region)
PROJECTS_TABLE = DYNAMODB_RESOURCE.Table(settings.projects_table_name)


class PersistenceError(ProjectSetupError):
    """DynamoDB refused to store the project record."""
    pass


def build_project_item(params: ProjectParameters) -> dict:
    return {
        **params.to_dict(),
        'stack_name': stack_name_for(params.project_id),
        'created_at': datetime.now(timezone.utc).isoformat(),
    }


def put_project(params: ProjectParameters) -> dict:
    """
    Writes the project record, keyed by project_id.

    Returns:
        The item that was written.

    Raises:
        PersistenceError: If the DynamoDB write fails.
    """
    item = build_project_item(params)
    print(f"Saving project '{params.project_id}' to table {settings.projects_table_name}...")

    try:
        PROJECTS_TABLE.put_item(Item=item)
    except ClientError as e:
        message = e.response['Error']['Message']
        print(f"❌ DynamoDB put_item failed for project '{params.project_id}': {message}")
        raise PersistenceError(message) from e

    print(f"✅ Project '{params.project_id}' saved.")
    return item
