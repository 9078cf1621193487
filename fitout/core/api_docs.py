from fitout.schemas.common import ErrorOut

# Sample error envelopes shown in the OpenAPI docs, keyed by status code.
_ERROR_EXAMPLES: dict[int, dict] = {
    404: {
        "code": "not_found",
        "message": "Inventory item not found",
        "path": "/inventory/8ZkQmv3hXyTq",
        "details": None,
    },
    422: {
        "code": "validation_error",
        "message": "Validation failed",
        "path": "/inventory",
        "details": [
            {"field": "receipts", "message": "At least one valid receipt is required", "type": "value_error"},
            {"field": "dispatches.0.date", "message": "Date is required", "type": "value_error"},
        ],
    },
    500: {
        "code": "internal_error",
        "message": "Internal server error",
        "path": "/inventory",
        "details": None,
    },
}


def error_responses(*status_codes: int) -> dict[int, dict]:
    responses: dict[int, dict] = {}
    for status_code in status_codes:
        example = _ERROR_EXAMPLES.get(
            status_code,
            {"code": "http_error", "message": "HTTP error", "path": "/", "details": None},
        )
        responses[status_code] = {
            "model": ErrorOut,
            "description": example["message"],
            "content": {
                "application/json": {
                    "example": {"error": {**example, "request_id": "request-id"}},
                }
            },
        }
    return responses
