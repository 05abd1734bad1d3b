"""Readable failure messages for storefront load tests.

The API answers errors in two shapes:

- request schema failures (422) from FastAPI/Pydantic:
  ``{"detail": [{"loc": ["body", "phone"], "msg": "..."}]}``
- domain failures (400/404/409): ``{"error": "..."}`` or, for checkout form
  errors, ``{"error": {"phone": ["Please enter a valid phone number"]}}``
"""

from requests import Response

_MAX_DETAIL = 300


def _schema_errors(details: list) -> str:
    messages = []
    for item in details:
        where = ".".join(str(part) for part in item.get("loc", []) if part != "body")
        what = item.get("msg", str(item))
        messages.append(f"{where}: {what}" if where else what)
    return " | ".join(messages)


def _domain_errors(error) -> str:
    if not isinstance(error, dict):
        return str(error)
    return " | ".join(
        f"{field}: {', '.join(map(str, messages)) if isinstance(messages, list) else messages}"
        for field, messages in error.items()
    )


def extract_error_detail(response: Response) -> str:
    """One-line summary of an error response, for Locust failures and logs."""
    try:
        body = response.json()
    except ValueError:
        return (response.text or "")[:_MAX_DETAIL] or "(empty response body)"

    if isinstance(body, dict):
        if isinstance(body.get("detail"), list):
            return _schema_errors(body["detail"])
        if "error" in body:
            return _domain_errors(body["error"])
    return str(body)[:_MAX_DETAIL]
