"""
JSON:API error responses.

Every error body has the shape::

    {"errors": [{"status": "422", "title": "...", "detail": "...",
                 "source": {"parameter": "page"}}]}
"""

from django.http import JsonResponse


class ApiError(Exception):
    status = 400
    title = "Bad request"

    def __init__(self, detail="", source=None):
        super().__init__(detail)
        self.detail = detail
        self.source = source

    def response(self):
        return error_response(self.status, self.title, self.detail, self.source)


class InvalidQueryParameter(ApiError):
    status = 422
    title = "Invalid query parameter"

    def __init__(self, parameter, detail, status=None):
        super().__init__(detail, source={"parameter": parameter})
        self.parameter = parameter
        if status is not None:
            self.status = status


class InvalidRequestBody(ApiError):
    status = 400
    title = "Invalid request body"


def error_response(status, title, detail="", source=None):
    error = {"status": str(status), "title": title}
    if detail:
        error["detail"] = detail
    if source:
        error["source"] = source
    return JsonResponse({"errors": [error]}, status=status)


def invalid_resource(errors):
    """422 response for a resource that failed validation (errors: field -> messages)."""
    return JsonResponse(
        {
            "errors": [
                {
                    "status": "422",
                    "title": "Invalid resource",
                    "detail": " ".join(str(message) for message in messages),
                    "source": {"pointer": f"/data/attributes/{field}"},
                }
                for field, messages in errors.items()
            ]
        },
        status=422,
    )
