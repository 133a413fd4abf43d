import httpx

from grid_console.app.error_presenter import build_error_payload
from grid_console.clients.errors import (
    AuthExpiredError,
    ConflictError,
    ErrorKind,
    NotFoundError,
    PermissionDeniedError,
    ServerError,
    ValidationFailureError,
    extract_server_message,
    from_http_response,
    map_error,
)
from grid_console.clients.normalizers import normalize_listing, normalize_options


def test_normalize_listing_paginated_envelope() -> None:
    result = normalize_listing(
        {"success": True, "data": [{"id": 1}, "junk"], "page": 2, "totalPages": 4, "total": 160},
        page=2,
        limit=50,
    )

    assert result.rows == [{"id": 1}]
    assert (result.page, result.total_pages, result.total) == (2, 4, 160)


def test_normalize_listing_unpaged_envelope_is_one_page() -> None:
    result = normalize_listing({"success": True, "data": [{"id": 1}, {"id": 2}]}, page=1, limit=50)

    assert (result.page, result.total_pages, result.total) == (1, 1, 2)


def test_normalize_listing_computes_pages_from_total() -> None:
    result = normalize_listing({"data": [], "page": 1, "total": 101}, page=1, limit=50)

    assert result.total_pages == 3


def test_normalize_listing_bare_list() -> None:
    assert normalize_listing([{"id": 1}]).total == 1


def test_normalize_options_shapes() -> None:
    assert normalize_options({"success": True, "data": ["Tokyo", "", None, "Osaka"]}) == ["Tokyo", "Osaka"]
    assert normalize_options({"success": True, "data": {"productNames": ["Entry"]}}) == {"productNames": ["Entry"]}
    assert normalize_options({"success": True, "productNames": ["Entry"], "count": 3}) == {"productNames": ["Entry"]}
    assert normalize_options(None) == []


def test_extract_server_message_prefers_errors_list() -> None:
    assert extract_server_message({"errors": ["a", "b"], "error": "c"}) == "a, b"
    assert extract_server_message({"error": "c"}) == "c"
    assert extract_server_message({"message": "m"}) == "m"
    assert extract_server_message("text") is None


def test_map_error_by_status() -> None:
    assert isinstance(map_error(401, None), AuthExpiredError)
    assert map_error(401, None).code == "AUTH_EXPIRED"
    assert isinstance(map_error(403, {}), PermissionDeniedError)
    assert isinstance(map_error(404, {}), NotFoundError)
    assert isinstance(map_error(400, {}), ValidationFailureError)
    assert isinstance(map_error(422, {}), ValidationFailureError)
    assert isinstance(map_error(409, {}), ConflictError)
    assert isinstance(map_error(502, {}), ServerError)
    assert isinstance(map_error(418, {}), ServerError)


def test_from_http_response_carries_server_message() -> None:
    error = from_http_response(httpx.Response(400, json={"success": False, "error": "Invalid date"}))

    assert error.kind is ErrorKind.VALIDATION_FAILURE
    assert error.server_message == "Invalid date"
    assert error.status_code == 400
    assert "Invalid date" in str(error)


def test_from_http_response_with_text_body() -> None:
    error = from_http_response(httpx.Response(500, text="Internal Server Error"))

    assert error.server_message == "Internal Server Error"


def test_error_payload_categories_and_actions() -> None:
    payload = build_error_payload(ConflictError(code="CONFLICT", message="HTTP 409", status_code=409))

    assert payload["category"] == "conflict"
    assert payload["action"] == "Retry"
    assert payload["message"] == "The record was changed by someone else."

    internal = build_error_payload(RuntimeError("boom"))
    assert internal["category"] == "internal"
    assert internal["code"] == "INTERNAL_ERROR"
