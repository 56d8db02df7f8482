# tests/test_project_store.py
import unittest
from unittest.mock import patch
from botocore.exceptions import ClientError

from models import ProjectParameters
from project_store import put_project, PersistenceError

PARAMS = ProjectParameters(
    project_id="widgets-main",
    github_owner="acme",
    github_repo="widgets",
    github_branch="main",
    codebuild_compute_type="BUILD_GENERAL1_SMALL",
    codebuild_image="aws/codebuild/standard:7.0",
    channel="C999",
    github_url="https://github.com/acme/widgets",
    user_id="U123",
    user_name="jdoe",
)


class TestPutProject(unittest.TestCase):

    @patch('project_store.PROJECTS_TABLE')
    def test_put_project_writes_all_parameters(self, mock_table):
        item = put_project(PARAMS)

        mock_table.put_item.assert_called_once()
        written = mock_table.put_item.call_args.kwargs['Item']
        self.assertEqual(written, item)

        for key, value in PARAMS.to_dict().items():
            self.assertEqual(written[key], value)
        self.assertEqual(written['stack_name'], "slack-cicd-widgets-main")
        self.assertIn('created_at', written)

    @patch('project_store.PROJECTS_TABLE')
    def test_put_project_converts_client_error(self, mock_table):
        mock_table.put_item.side_effect = ClientError(
            {"Error": {"Code": "ResourceNotFoundException", "Message": "Requested resource not found"}},
            "PutItem"
        )

        with self.assertRaises(PersistenceError) as ctx:
            put_project(PARAMS)
        self.assertEqual(ctx.exception.reason, "Requested resource not found")
        self.assertEqual(str(ctx.exception), "Requested resource not found")


if __name__ == '__main__':
    unittest.main()
