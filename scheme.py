import json
import logging
import pydantic

from typing import Any, Mapping
from typing_extensions import Protocol

from models import (
    BaseModel,
    GroupVersionKind,
    AdmissionReview,
    Deployment,
    ADMISSION_REVIEW_GVK,
    DEPLOYMENT_GVK,
)
from exc import DecodeError, SchemaMismatchError

LOG = logging.getLogger(__name__)


class Scheme:
    """Maps a group/version/kind to the model that represents it."""

    def __init__(self):
        self._types: dict[GroupVersionKind, type[BaseModel]] = {}

    def add_known_type(self, gvk: GroupVersionKind, model: type[BaseModel]):
        if gvk in self._types and self._types[gvk] is not model:
            raise ValueError(f"{gvk} is already registered")
        self._types[gvk] = model

    def model_for(self, gvk: GroupVersionKind) -> type[BaseModel] | None:
        return self._types.get(gvk)

    def __contains__(self, gvk):
        return gvk in self._types


def build_scheme() -> Scheme:
    scheme = Scheme()
    scheme.add_known_type(ADMISSION_REVIEW_GVK, AdmissionReview)
    scheme.add_known_type(DEPLOYMENT_GVK, Deployment)
    return scheme


class Decoder(Protocol):
    def decode(
        self, payload: bytes | str | Mapping[str, Any], expected: GroupVersionKind
    ) -> tuple[BaseModel, GroupVersionKind]: ...


class SchemeDecoder(Decoder):
    def __init__(self, scheme: Scheme):
        self.scheme = scheme

    def decode(self, payload, expected):
        """Decode a self-describing payload into the model registered for its
        group/version/kind.

        The payload must declare exactly the `expected` identity. Returns the
        decoded object along with the identity read from the payload.
        """

        if isinstance(payload, (bytes, bytearray, str)):
            try:
                data = json.loads(payload)
            except (ValueError, UnicodeDecodeError, RecursionError) as err:
                raise DecodeError(f"unable to parse payload: {err}")
        else:
            data = payload

        if not isinstance(data, Mapping):
            raise DecodeError("payload is not an object")

        api_version, kind = data.get("apiVersion"), data.get("kind")
        if not all(isinstance(val, str) and val for val in (api_version, kind)):
            raise DecodeError(
                "unable to find schema group, version and kind from request"
            )

        gvk = GroupVersionKind.from_api_version(api_version, kind)
        if gvk != expected:
            raise SchemaMismatchError(expected, gvk)

        model = self.scheme.model_for(gvk)
        if model is None:
            raise DecodeError(f"no kind is registered for {gvk}")

        try:
            obj = model.model_validate(data)
        except pydantic.ValidationError as err:
            raise DecodeError(f"unable to decode {gvk.kind}: {err}")

        return obj, gvk
