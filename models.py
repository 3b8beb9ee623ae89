from typing import Any
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    model_validator,
)
from enum import StrEnum


class Operation(StrEnum):
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    CONNECT = "CONNECT"


class StatusValue(StrEnum):
    SUCCESS = "Success"
    FAILURE = "Failure"


class GroupVersionKind(BaseModel):
    model_config = ConfigDict(frozen=True)

    group: str = ""
    version: str
    kind: str

    @classmethod
    def from_api_version(cls, api_version: str, kind: str) -> "GroupVersionKind":
        # The core group is spelled without a group prefix, e.g. "v1".
        group, _, version = api_version.rpartition("/")
        return cls(group=group, version=version, kind=kind)

    @property
    def api_version(self) -> str:
        return f"{self.group}/{self.version}" if self.group else self.version

    def __str__(self):
        return f"group: {self.group} version: {self.version} kind: {self.kind}"


# https://kubernetes.io/docs/reference/generated/kubernetes-api/v1.30/#groupversionresource-v1-meta
class GroupVersionResource(BaseModel):
    model_config = ConfigDict(frozen=True)

    group: str = ""
    version: str
    resource: str

    def __str__(self):
        return "/".join(filter(None, (self.group, self.version, self.resource)))


ADMISSION_REVIEW_GVK = GroupVersionKind(
    group="admission.k8s.io", version="v1", kind="AdmissionReview"
)
DEPLOYMENT_GVK = GroupVersionKind(group="apps", version="v1", kind="Deployment")
DEPLOYMENT_GVR = GroupVersionResource(group="apps", version="v1", resource="deployments")


# https://kubernetes.io/docs/reference/generated/kubernetes-api/v1.30/#status-v1-meta
class AdmissionReviewStatus(BaseModel):
    status: StatusValue | None = None
    message: str
    reason: str | None = None
    code: int | None = None


# https://kubernetes.io/docs/reference/config-api/apiserver-admission.v1/#admission-k8s-io-v1-AdmissionResponse
class AdmissionResponse(BaseModel):
    uid: str
    allowed: bool
    status: AdmissionReviewStatus | None = None
    warnings: list[str] | None = None

    @model_validator(mode="after")
    def validate_model(self):
        if not self.allowed and self.status is None:
            raise ValueError("a denied response must carry a status")

        return self


class UserInfo(BaseModel):
    username: str | None = None
    uid: str | None = None
    groups: list[str] | None = None


# https://kubernetes.io/docs/reference/config-api/apiserver-admission.v1/#admission-k8s-io-v1-AdmissionRequest
class AdmissionRequest(BaseModel):
    uid: str
    kind: GroupVersionKind | None = None
    resource: GroupVersionResource
    name: str | None = None
    namespace: str | None = None
    operation: Operation = Operation.CREATE
    userInfo: UserInfo | None = None

    # Embedded objects stay undecoded until the resource has been checked.
    object: dict[str, Any] | None = None
    dryRun: bool | None = None


# https://kubernetes.io/docs/reference/config-api/apiserver-admission.v1/#admission-k8s-io-v1-AdmissionReview
class AdmissionReview(BaseModel):
    apiVersion: str = ADMISSION_REVIEW_GVK.api_version
    kind: str = ADMISSION_REVIEW_GVK.kind
    request: AdmissionRequest | None = None
    response: AdmissionResponse | None = None

    @property
    def gvk(self) -> GroupVersionKind:
        return GroupVersionKind.from_api_version(self.apiVersion, self.kind)


class ObjectModel(BaseModel):
    """Base for embedded API objects, where an explicit null means the same
    as an omitted field."""

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data):
        if isinstance(data, dict):
            return {key: val for key, val in data.items() if val is not None}
        return data


class Metadata(ObjectModel):
    name: str | None = None
    namespace: str | None = None
    labels: dict[str, str] = {}
    annotations: dict[str, str] = {}


# Quantities arrive as strings ("512Mi") or bare numbers.
Quantity = str | int | float


# https://kubernetes.io/docs/reference/generated/kubernetes-api/v1.30/#resourcerequirements-v1-core
class ResourceRequirements(ObjectModel):
    requests: dict[str, Quantity] = {}
    limits: dict[str, Quantity] = {}


class Container(ObjectModel):
    name: str = Field(min_length=1)
    image: str | None = None
    resources: ResourceRequirements = ResourceRequirements()


class PodSpec(ObjectModel):
    containers: list[Container] = []


class PodTemplateSpec(ObjectModel):
    metadata: Metadata = Metadata()
    spec: PodSpec = PodSpec()


class DeploymentSpec(ObjectModel):
    replicas: int | None = None
    template: PodTemplateSpec = PodTemplateSpec()


# https://kubernetes.io/docs/reference/generated/kubernetes-api/v1.30/#deployment-v1-apps
class Deployment(ObjectModel):
    apiVersion: str = DEPLOYMENT_GVK.api_version
    kind: str = DEPLOYMENT_GVK.kind
    metadata: Metadata = Metadata()
    spec: DeploymentSpec = DeploymentSpec()

    @property
    def containers(self) -> list[Container]:
        return self.spec.template.spec.containers
