from typing import Dict, List, Literal, Optional, TypedDict


class ParameterTypeDef(TypedDict):
    ParameterKey: str
    ParameterValue: str


class TagTypeDef(TypedDict):
    Key: str
    Value: str


class TimeoutsTypeDef(TypedDict, total=False):
    create: str
    update: str
    delete: str


class StackSetConfigTypeDef(TypedDict, total=False):
    """
    Declarative configuration of an aws_cloudformation_stack_set resource.
    Capabilities have set semantics.
    """

    name: str
    template_body: str
    template_url: str
    description: str
    capabilities: List[str]
    on_failure: str
    parameters: Dict[str, str]
    tags: Dict[str, str]
    administration_role_arn: str
    execution_role_name: str
    timeouts: TimeoutsTypeDef


class StackSetStateTypeDef(StackSetConfigTypeDef, total=False):
    id: Optional[str]
    arn: str
    status: Literal["ACTIVE", "DELETED"]


class StackSetDataTypeDef(TypedDict, total=False):
    id: str
    name: str
    arn: str
    status: str
    template_body: str
    description: str
    capabilities: List[str]
    parameters: Dict[str, str]
    tags: Dict[str, str]
