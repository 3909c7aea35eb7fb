"""JSON codec for WiZ datagrams."""

from __future__ import annotations

import json
import logging
from typing import Any

import pydantic

from .errors import CodecError
from .models import (
    ColorParams,
    EmptyParams,
    Method,
    Request,
    Response,
    ResultT,
    SceneParams,
    StateParams,
)

LOGGER = logging.getLogger(__name__)


def encode_request(request: Request[Any]) -> bytes:
    """
    Serialize a request into datagram bytes.

    The output is compact JSON with keys in ``id, method, params`` order.
    An absent ``id`` is omitted entirely rather than sent as ``null``.

    Args:
        request: Request built with one of the ``Request`` constructors

    Returns:
        UTF-8 encoded JSON
    """
    return request.model_dump_json(by_alias=True, exclude_none=True).encode("utf-8")


def decode_response(payload: bytes, result_type: type[ResultT]) -> Response[ResultT]:
    """
    Parse a device reply.

    Args:
        payload: Raw datagram bytes
        result_type: Model for the ``result`` member (e.g. ``CommandResult``)

    Returns:
        The validated response envelope

    Raises:
        CodecError: If the payload is not UTF-8 JSON or does not match the envelope
    """
    try:
        text = payload.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise CodecError("reply is not valid UTF-8") from exc
    try:
        return Response[result_type].model_validate_json(text)
    except pydantic.ValidationError as exc:
        LOGGER.debug("Rejected reply %r", payload)
        raise CodecError(f"invalid reply: {_summarize(exc)}") from exc


def decode_request(payload: bytes) -> Request[Any]:
    """
    Parse an outbound request, the inverse of :func:`encode_request`.

    The params shape is chosen from the method: ``setPilot`` carries
    ``SceneParams`` when a ``sceneId`` key is present, ``ColorParams`` otherwise.

    Raises:
        CodecError: If the payload is malformed or the params do not fit the method
    """
    try:
        data = json.loads(payload)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise CodecError("request is not valid JSON") from exc
    if not isinstance(data, dict):
        raise CodecError("request must be a JSON object")

    try:
        method = Method(data.get("method"))
    except ValueError as exc:
        raise CodecError(f"unknown method: {data.get('method')!r}") from exc

    params_type = _params_type_for(method, data.get("params"))
    try:
        return Request[params_type].model_validate_json(payload)
    except pydantic.ValidationError as exc:
        raise CodecError(f"invalid {method.value} request: {_summarize(exc)}") from exc


def _params_type_for(method: Method, params: Any) -> type:
    if method is Method.SET_STATE:
        return StateParams
    if method is Method.SET_PILOT:
        if isinstance(params, dict) and "sceneId" in params:
            return SceneParams
        return ColorParams
    if method in (Method.GET_STATE, Method.GET_PILOT):
        return EmptyParams
    raise CodecError(f"no params shape for method {method.value}")


def _summarize(exc: pydantic.ValidationError) -> str:
    errors = exc.errors()
    first = errors[0]
    location = ".".join(str(part) for part in first["loc"]) or "<root>"
    summary = f"{location}: {first['msg']}"
    if len(errors) > 1:
        summary += f" (+{len(errors) - 1} more)"
    return summary


__all__ = ["encode_request", "decode_response", "decode_request"]
