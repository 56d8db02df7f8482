# lambdas/slack_interactive/stack_provisioner.py
from pathlib import Path

import boto3
from botocore.exceptions import ClientError

from models import ProjectParameters, ProjectSetupError, get_settings

# Initialize the client once for Lambda container reuse
settings = get_settings()
CLOUDFORMATION_CLIENT = boto3.client('cloudformation', region_name=settings.aws_region)

TEMPLATE_PATH = Path(__file__).parent / "project_stack.yml"


class ProvisioningError(ProjectSetupError):
    """CloudFormation refused to create the project stack."""
    pass


def stack_name_for(project_id: str) -> str:
    # Stack names must start with a letter; the prefix guarantees it.
    return f"{settings.stack_name_prefix}-{project_id}"


def load_template_body() -> str:
    return TEMPLATE_PATH.read_text()


def build_stack_parameters(params: ProjectParameters) -> list[dict]:
    """Maps the project parameters onto the template's parameter names."""
    values = {
        'ProjectId': params.project_id,
        'GitHubOwner': params.github_owner,
        'GitHubRepo': params.github_repo,
        'GitHubBranch': params.github_branch,
        'CodeBuildComputeType': params.codebuild_compute_type,
        'CodeBuildImage': params.codebuild_image,
        'SlackChannel': params.channel,
        'NotificationFunctionArn': settings.notification_function_arn,
    }
    return [{'ParameterKey': k, 'ParameterValue': v} for k, v in values.items()]


def build_stack_up(params: ProjectParameters) -> str:
    """
    Starts the creation of the CloudFormation stack backing a project.
    Does not wait for the stack to finish; Slack expects an answer within seconds.

    Returns:
        The StackId of the stack being created.

    Raises:
        ProvisioningError: If CloudFormation rejects the request.
    """
    stack_name = stack_name_for(params.project_id)
    print(f"Creating CloudFormation stack '{stack_name}' for {params.github_url} ({params.github_branch})...")

    try:
        response = CLOUDFORMATION_CLIENT.create_stack(
            StackName=stack_name,
            TemplateBody=load_template_body(),
            Parameters=build_stack_parameters(params),
            Capabilities=['CAPABILITY_IAM'],
            Tags=[
                {'Key': 'project_id', 'Value': params.project_id},
                {'Key': 'created_by', 'Value': params.user_name},
            ]
        )
    except ClientError as e:
        message = e.response['Error']['Message']
        print(f"❌ CloudFormation create_stack failed for '{stack_name}': {message}")
        raise ProvisioningError(message) from e

    stack_id = response.get('StackId')
    print(f"✅ Stack creation started. StackId: {stack_id}")
    return stack_id
