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
from cfnstackset.utils.datetime_encoder import DateTimeEncoder
from datetime import datetime
import json
import pytest


@pytest.mark.unit
def test_datetime_encoder():
    creation_time = datetime(2020, 2, 17, 23, 38, 26)
    summary = {"OperationId": "op-1", "CreationTimestamp": creation_time}
    assert json.dumps(summary, cls=DateTimeEncoder) == json.dumps(
        {"OperationId": "op-1", "CreationTimestamp": "2020-02-17T23:38:26"})
    assert DateTimeEncoder().encode({"date": creation_time.date()}) == json.dumps(
        {"date": "2020-02-17"})


@pytest.mark.unit
def test_datetime_encoder_rejects_unknown_types():
    with pytest.raises(TypeError):
        json.dumps({"value": object()}, cls=DateTimeEncoder)
