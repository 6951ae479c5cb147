"""Outcome variants of a single enrichment lookup."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict


class Success(BaseModel):
    """A complete record was found."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["success"] = "success"
    title: str
    author: str
    metric: str


class NotFound(BaseModel):
    """The document was well formed but listed no result."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["not_found"] = "not_found"


class Incomplete(BaseModel):
    """A result was listed but a required field was missing."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["incomplete"] = "incomplete"


class TransportError(BaseModel):
    """The request could not be completed."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["transport_error"] = "transport_error"
    detail: str


class ParseError(BaseModel):
    """The response body was not valid JSON."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["parse_error"] = "parse_error"
    detail: str


EnrichmentResult = Success | NotFound | Incomplete | TransportError | ParseError
