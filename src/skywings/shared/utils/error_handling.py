import functools
from typing import Callable

from aws_lambda_powertools import Logger
from pydantic import ValidationError

from skywings.shared.domain.exception import DomainException
from skywings.shared.utils.http_response import (
    error_response,
    internal_error_response,
    validation_error_response,
)

logger = Logger(child=True)


def handle_api_errors(func: Callable[..., dict]) -> Callable[..., dict]:
    """例外を API Gateway のエラーレスポンスに変換するデコレータ

    - pydantic の入力エラー: 400
    - ドメイン例外: 例外の種類に応じたステータス
    - その他: ログに残して 500（詳細は返さない）
    """

    @functools.wraps(func)
    def wrapper(event, context) -> dict:
        try:
            return func(event, context)
        except ValidationError as e:
            logger.info(
                "Request validation failed",
                extra={
                    "errors": e.errors(
                        include_url=False, include_context=False, include_input=False
                    )
                },
            )
            return validation_error_response(e)
        except DomainException as e:
            logger.info(
                "Request rejected", extra={"code": e.code, "error": e.message}
            )
            return error_response(e)
        except Exception:
            logger.exception("Unhandled error")
            return internal_error_response()

    return wrapper
