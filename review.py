import logging

from pydantic_core import PydanticSerializationError

from models import (
    AdmissionReview,
    AdmissionResponse,
    AdmissionReviewStatus,
    GroupVersionKind,
    StatusValue,
    ADMISSION_REVIEW_GVK,
    DEPLOYMENT_GVK,
    DEPLOYMENT_GVR,
)
from scheme import Decoder
from validators import Verdict, check_resource_kind, validate_deployment
from exc import EncodeError, MissingRequestError

LOG = logging.getLogger(__name__)


def build_review(uid: str, gvk: GroupVersionKind, verdict: Verdict) -> AdmissionReview:
    if verdict.allowed:
        response = AdmissionResponse(uid=uid, allowed=True)
    else:
        response = AdmissionResponse(
            uid=uid,
            allowed=False,
            status=AdmissionReviewStatus(
                status=StatusValue.FAILURE, message=verdict.reason
            ),
        )

    return AdmissionReview(apiVersion=gvk.api_version, kind=gvk.kind, response=response)


def encode_review(review: AdmissionReview) -> bytes:
    try:
        return review.model_dump_json(exclude_none=True).encode()
    except (PydanticSerializationError, ValueError) as err:
        LOG.error("error marshaling response for admission review: %s", err)
        raise EncodeError(f"unable to encode admission review: {err}")


class ReviewHandler:
    """Turns an AdmissionReview for a deployment into a review carrying the
    verdict.

    The decoder is shared between requests and must not hold per-request
    state.
    """

    def __init__(self, decoder: Decoder):
        self.decoder = decoder

    def review(self, body: bytes) -> AdmissionReview:
        LOG.debug("request body: %r", body)
        envelope, envelope_gvk = self.decoder.decode(body, ADMISSION_REVIEW_GVK)
        LOG.info("Successfully decoded AdmissionReview")

        request = envelope.request
        if request is None:
            msg = "Expected admission review request but did not get one"
            LOG.error(msg)
            raise MissingRequestError(msg)

        check_resource_kind(request.resource, DEPLOYMENT_GVR)

        deployment, _ = self.decoder.decode(request.object or {}, DEPLOYMENT_GVK)
        LOG.debug("decoded deployment: %s", deployment)

        verdict = validate_deployment(deployment)
        if not verdict.allowed:
            LOG.info("denying request %s: %s", request.uid, verdict.reason)

        return build_review(request.uid, envelope_gvk, verdict)
