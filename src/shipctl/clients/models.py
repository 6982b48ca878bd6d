"""Typed records parsed from helm and kubectl JSON output."""

from typing import Any

from pydantic import BaseModel, Field, ValidationError

from shipctl.core.utils import DEFAULT_TIMESTAMP_FORMAT, format_timestamp, image_tag


class HelmReleaseInfo(BaseModel):
    """The ``info`` block of ``helm status -o json``."""

    status: str
    last_deployed: str


class HelmStatusPayload(BaseModel):
    """Subset of ``helm status -o json`` that shipctl reads."""

    name: str
    info: HelmReleaseInfo
    # User-supplied values; helm omits or nulls it for charts installed without overrides
    config: dict[str, Any] | None = None

    def image_tag(self) -> str | None:
        image = (self.config or {}).get("image")
        if not isinstance(image, dict):
            return None
        tag = image.get("tag")
        return None if tag is None else str(tag)


class PodMetadata(BaseModel):
    name: str


class PodStatusBlock(BaseModel):
    phase: str
    startTime: str | None = None


class PodContainer(BaseModel):
    image: str


class PodSpec(BaseModel):
    containers: list[PodContainer] = Field(min_length=1)


class PodPayload(BaseModel):
    """A single ``kind: Pod`` item of ``kubectl get pods -o json``."""

    kind: str
    metadata: PodMetadata
    status: PodStatusBlock
    spec: PodSpec


class ReleaseStatus(BaseModel):
    """Display record for one release."""

    name: str
    image_tag: str | None = None
    status: str
    last_deployed: str

    @classmethod
    def from_payload(
        cls,
        payload: HelmStatusPayload,
        timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT,
    ) -> "ReleaseStatus":
        return cls(
            name=payload.name,
            image_tag=payload.image_tag(),
            status=payload.info.status,
            last_deployed=format_timestamp(payload.info.last_deployed, timestamp_format),
        )

    def to_row(self) -> dict[str, Any]:
        return {
            "Name": self.name,
            "Image": self.image_tag,
            "Status": self.status,
            "Last Deployed": self.last_deployed,
        }


class PodSummary(BaseModel):
    """Display record for one pod."""

    name: str
    status: str
    started: str | None = None
    image: str

    @classmethod
    def from_payload(
        cls,
        payload: PodPayload,
        timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT,
    ) -> "PodSummary":
        started = None
        if payload.status.startTime:
            started = format_timestamp(payload.status.startTime, timestamp_format)
        return cls(
            name=payload.metadata.name,
            status=payload.status.phase,
            started=started,
            image=image_tag(payload.spec.containers[0].image),
        )

    def to_row(self) -> dict[str, Any]:
        return {
            "Name": self.name,
            "Status": self.status,
            "Started": self.started,
            "Image": self.image,
        }


def describe_validation_error(error: ValidationError) -> str:
    """Summarize a pydantic error as ``field.path: message`` pairs."""
    parts = []
    for item in error.errors():
        location = ".".join(str(p) for p in item["loc"]) or "<root>"
        parts.append(f"{location}: {item['msg']}")
    return "; ".join(parts)
