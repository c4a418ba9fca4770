import json

from pydantic import ValidationError

from skywings.shared.domain.exception import (
    AlreadyCancelledException,
    BusinessRuleViolationException,
    ConflictException,
    DomainException,
    ResourceNotFoundException,
    UpstreamException,
    ValidationException,
)

# 上から順に評価するため、サブクラスを先に並べる
_STATUS_CODES: list[tuple[type[DomainException], int]] = [
    (ValidationException, 400),
    (ResourceNotFoundException, 404),
    (AlreadyCancelledException, 409),
    (BusinessRuleViolationException, 422),
    (UpstreamException, 502),
    (ConflictException, 503),
]


def api_response(status_code: int, body: dict | list) -> dict:
    """API Gateway Lambda Proxy Integration のレスポンス形式を生成する"""
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body, default=str),
    }


def status_code_for(exc: DomainException) -> int:
    """ドメイン例外に対応する HTTP ステータスコード"""
    for exc_type, status_code in _STATUS_CODES:
        if isinstance(exc, exc_type):
            return status_code
    return 400


def error_response(exc: DomainException) -> dict:
    """ドメイン例外をエラーレスポンスに変換する

    UpstreamException は内部詳細を含めず、短い理由のみ返す。
    """
    error: dict = {"code": exc.code, "message": exc.message}
    if isinstance(exc, ValidationException) and exc.field:
        error["field"] = exc.field
    if isinstance(exc, UpstreamException):
        error["message"] = "Failed to fetch flights"
    return api_response(status_code_for(exc), {"error": error})


def validation_error_response(exc: ValidationError) -> dict:
    """pydantic のバリデーションエラーをフィールド単位のメッセージに変換する"""
    first = exc.errors()[0]
    field = ".".join(str(part) for part in first["loc"])
    return error_response(
        ValidationException(f"{field}: {first['msg']}", field=field or None)
    )


def internal_error_response(message: str = "Internal server error") -> dict:
    return api_response(500, {"error": {"code": "INTERNAL_ERROR", "message": message}})
