import json

import pytest
from pydantic import BaseModel, ValidationError

from skywings.shared.domain.exception import (
    AlreadyCancelledException,
    BookingNotFoundException,
    DuplicateResourceException,
    OfferNotFoundException,
    RateLimitedException,
    UpstreamException,
    ValidationException,
)
from skywings.shared.utils import (
    error_response,
    internal_error_response,
    validation_error_response,
)


class TestErrorResponse:
    """error_response のテスト"""

    @pytest.mark.parametrize(
        ("exc", "status_code", "code"),
        [
            (ValidationException("bad"), 400, "VALIDATION_ERROR"),
            (OfferNotFoundException("1"), 404, "OFFER_NOT_FOUND"),
            (BookingNotFoundException("SKY123456"), 404, "BOOKING_NOT_FOUND"),
            (AlreadyCancelledException("SKY123456"), 409, "ALREADY_CANCELLED"),
            (UpstreamException("boom"), 502, "UPSTREAM_ERROR"),
            (RateLimitedException("slow down"), 502, "UPSTREAM_RATE_LIMITED"),
            (DuplicateResourceException("dup"), 503, "CONFLICT"),
        ],
    )
    def test_status_code_and_code(self, exc, status_code, code):
        response = error_response(exc)

        assert response["statusCode"] == status_code
        assert json.loads(response["body"])["error"]["code"] == code

    def test_validation_error_carries_field(self):
        response = error_response(ValidationException("bad", field="reason"))

        assert json.loads(response["body"])["error"]["field"] == "reason"

    def test_upstream_error_hides_internal_details(self):
        response = error_response(UpstreamException("HTTP 500 from provider"))

        body = json.loads(response["body"])
        assert body["error"]["message"] == "Failed to fetch flights"

    def test_pydantic_validation_error_is_converted(self):
        class Request(BaseModel):
            adults: int

        with pytest.raises(ValidationError) as exc_info:
            Request.model_validate({"adults": "many"})

        response = validation_error_response(exc_info.value)

        body = json.loads(response["body"])
        assert response["statusCode"] == 400
        assert body["error"]["code"] == "VALIDATION_ERROR"
        assert body["error"]["field"] == "adults"

    def test_internal_error(self):
        response = internal_error_response()

        assert response["statusCode"] == 500
        assert json.loads(response["body"])["error"]["code"] == "INTERNAL_ERROR"
