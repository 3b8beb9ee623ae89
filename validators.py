import logging

from pydantic import BaseModel

from models import Deployment, GroupVersionResource
from exc import UnsupportedResourceError

LOG = logging.getLogger(__name__)

MEMORY = "memory"


class Verdict(BaseModel):
    reason: str | None = None

    @property
    def allowed(self) -> bool:
        return self.reason is None

    @classmethod
    def allow(cls) -> "Verdict":
        return cls()

    @classmethod
    def deny(cls, reason: str) -> "Verdict":
        return cls(reason=reason)


def check_resource_kind(
    resource: GroupVersionResource, expected: GroupVersionResource
) -> None:
    if resource != expected:
        msg = f"Expected {expected} resource but got {resource}"
        LOG.error(msg)
        raise UnsupportedResourceError(msg)


def validate_deployment(deployment: Deployment) -> Verdict:
    """Require a memory request and a memory limit on every container.

    Requests are checked across all containers before limits. Only the first
    offending container is reported.
    """

    for container in deployment.containers:
        if MEMORY not in container.resources.requests:
            return Verdict.deny(
                f"Memory request not specified for container {container.name}"
            )

    for container in deployment.containers:
        if MEMORY not in container.resources.limits:
            return Verdict.deny(
                f"Memory limit not specified for container {container.name}"
            )

    return Verdict.allow()
