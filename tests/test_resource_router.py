###############################################################################
#  Copyright 2021 Amazon.com, Inc. or its affiliates. All Rights Reserved.    #
#                                                                             #
#  Licensed under the Apache License, Version 2.0 (the "License").            #
#  You may not use this file except in compliance with the License.
#  A copy of the License is located at                                        #
#                                                                             #
#      http://www.apache.org/licenses/LICENSE-2.0                             #
#                                                                             #
#  or in the "license" file accompanying this file. This file is distributed  #
#  on an "AS IS" BASIS, WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, express #
#  or implied. See the License for the specific language governing permissions#
#  and limitations under the License.                                         #
###############################################################################
import mock
import pytest

from cfnstackset.lambda_handlers import resource_router


def event(operation, **kwargs):
    payload = {
        "ResourceType": "aws_cloudformation_stack_set",
        "Operation": operation,
        "Config": {"name": "baseline"},
        "State": {"id": "baseline:1", "name": "baseline"},
    }
    payload.update(kwargs)
    return payload


@pytest.fixture
def resource_class():
    mock_class = mock.Mock()
    with mock.patch.dict(resource_router.RESOURCES,
                         {"aws_cloudformation_stack_set": mock_class}):
        yield mock_class


@pytest.fixture
def data_source_class():
    mock_class = mock.Mock()
    with mock.patch.dict(resource_router.DATA_SOURCES,
                         {"aws_cloudformation_stack_set": mock_class}):
        yield mock_class


@pytest.mark.unit
def test_create(resource_class):
    resource_class.return_value.create.return_value = {"id": "baseline:1"}
    response = resource_router.lambda_handler(event("Create"), None)
    assert response == {"State": {"id": "baseline:1"}}
    resource_class.return_value.create.assert_called_once_with({"name": "baseline"})


@pytest.mark.unit
def test_update_in_place(resource_class):
    resource = resource_class.return_value
    resource.requires_replacement.return_value = []
    resource.update.return_value = {"id": "baseline:1"}
    assert resource_router.lambda_handler(event("update"), None) == {"State": {"id": "baseline:1"}}


@pytest.mark.unit
def test_update_needing_replacement(resource_class):
    resource = resource_class.return_value
    resource.requires_replacement.return_value = ["name"]
    response = resource_router.lambda_handler(event("update"), None)
    assert "requires the stack set to be replaced" in response["Message"]
    resource.update.assert_not_called()


@pytest.mark.unit
def test_delete_and_import(resource_class):
    resource = resource_class.return_value
    resource.delete.return_value = None
    resource.import_state.return_value = {"id": "baseline:1"}
    assert resource_router.lambda_handler(event("delete"), None) == {"State": None}
    assert resource_router.lambda_handler(event("import", Id="baseline:1"), None) == {
        "State": {"id": "baseline:1"}}
    resource.import_state.assert_called_once_with("baseline:1")


@pytest.mark.unit
def test_unknown_operation(resource_class):
    response = resource_router.lambda_handler(event("refresh"), None)
    assert response == {"Message": "Operation not found: refresh"}


@pytest.mark.unit
def test_unknown_resource_type():
    response = resource_router.lambda_handler(event("read", ResourceType="aws_s3_bucket"), None)
    assert response == {"Message": "Resource type not found: aws_s3_bucket"}


@pytest.mark.unit
def test_data_source_read(data_source_class):
    data_source_class.return_value.read.return_value = {"id": "baseline:1"}
    response = resource_router.lambda_handler(event("read", Mode="data"), None)
    assert response == {"State": {"id": "baseline:1"}}
    response = resource_router.lambda_handler(event("delete", Mode="data"), None)
    assert response == {"Message": "Operation not found: delete"}
