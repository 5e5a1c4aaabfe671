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

# !/bin/python
import os

import boto3


class Boto3Session:
    """This class initialize boto3 client for a given AWS service name.

    Example:
        class StackSet(Boto3Session):
            def __init__(self, logger, **kwargs):
                self.logger = logger
                __service_name = 'cloudformation'
                super().__init__(logger, __service_name, **kwargs)
                self.cfn_client = super().get_client()
    """

    def __init__(self, logger, service_name, **kwargs):
        """
        Parameters
        ----------
        logger : object
            The logger object
        service_name : str
            AWS service name. Example: 'cloudformation'
        region : str, optional
            AWS region name. Defaults to the AWS_REGION environment variable.
        credentials : dict, optional
            set of temporary AWS security credentials
        endpoint_url : str, optional
            The complete URL to use for the constructed client.
        client : object, optional
            An already constructed client, used as is.
        """
        self.logger = logger
        self.service_name = service_name
        self.credentials = kwargs.get("credentials", None)
        self.region = kwargs.get("region", None) or os.environ.get("AWS_REGION")
        self.endpoint_url = kwargs.get("endpoint_url", None)
        self.client = kwargs.get("client", None)

    def get_client(self):
        """Creates a boto3 low-level service client by name.

        Returns: service client, type: Object
        """
        if self.client is not None:
            return self.client

        client_kwargs = {}
        if self.region is not None:
            client_kwargs["region_name"] = self.region
        if self.endpoint_url is not None:
            client_kwargs["endpoint_url"] = self.endpoint_url
        if self.credentials is not None:
            client_kwargs.update(
                aws_access_key_id=self.credentials.get("AccessKeyId"),
                aws_secret_access_key=self.credentials.get("SecretAccessKey"),
                aws_session_token=self.credentials.get("SessionToken"),
            )
        self.logger.debug(
            "Creating {} client in region {}".format(self.service_name, self.region)
        )
        return boto3.client(self.service_name, **client_kwargs)
