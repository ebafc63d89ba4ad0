"""Query string and request body parsing for the JSON API."""

import json

from .errors import InvalidQueryParameter, InvalidRequestBody

BOOLEAN_VALUES = {"true": True, "1": True, "false": False, "0": False}


def boolean_param(request, name):
    """
    Read a boolean query parameter. Absent means None.

    Only "true", "false", "1" and "0" are accepted; anything else is a
    client error rather than a silent default.
    """
    value = request.GET.get(name)
    if value is None:
        return None
    if value not in BOOLEAN_VALUES:
        raise InvalidQueryParameter(name, "Not a boolean")
    return BOOLEAN_VALUES[value]


def int_param(request, name, default=None, minimum=None):
    value = request.GET.get(name)
    if value in (None, ""):
        return default
    try:
        number = int(value)
    except ValueError:
        raise InvalidQueryParameter(name, "Not an integer") from None
    if minimum is not None and number < minimum:
        raise InvalidQueryParameter(name, f"Must be at least {minimum}")
    return number


def json_body(request, wrapper_key=None):
    """
    Decode a JSON object body.

    When wrapper_key is given, {"<wrapper_key>": {...}} and a bare {...} are
    both accepted.
    """
    try:
        payload = json.loads(request.body or b"{}")
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise InvalidRequestBody(f"Malformed JSON: {exc}") from None
    if not isinstance(payload, dict):
        raise InvalidRequestBody("Expected a JSON object")
    if wrapper_key and isinstance(payload.get(wrapper_key), dict):
        payload = payload[wrapper_key]
    return payload
