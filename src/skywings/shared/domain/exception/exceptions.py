class DomainException(Exception):
    """ドメイン層で発生する基底例外

    code はレスポンスに載せる安定したエラー分類。
    """

    code = "DOMAIN_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationException(DomainException):
    """入力値が不正な場合（リトライ不可）"""

    code = "VALIDATION_ERROR"

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class ResourceNotFoundException(DomainException):
    """リソースが見つからない場合"""

    code = "NOT_FOUND"


class OfferNotFoundException(ResourceNotFoundException):
    """フライトオファーがキャッシュに存在しない（期限切れを含む）"""

    code = "OFFER_NOT_FOUND"

    def __init__(self, offer_id: str) -> None:
        super().__init__(f"Flight offer not found: {offer_id}")
        self.offer_id = offer_id


class BookingNotFoundException(ResourceNotFoundException):
    """予約が存在しない場合"""

    code = "BOOKING_NOT_FOUND"

    def __init__(self, reference: str) -> None:
        super().__init__(f"Booking not found: {reference}")
        self.reference = reference


class AlreadyCancelledException(DomainException):
    """キャンセル済み予約を再度キャンセルしようとした場合"""

    code = "ALREADY_CANCELLED"

    def __init__(self, reference: str) -> None:
        super().__init__(f"Booking is already cancelled: {reference}")
        self.reference = reference


class BusinessRuleViolationException(DomainException):
    """ビジネスルールに違反した場合"""

    code = "BUSINESS_RULE_VIOLATION"


class ConflictException(DomainException):
    """同時更新などの一時的な競合（内部で有限回リトライされる）"""

    code = "CONFLICT"


class DuplicateResourceException(ConflictException):
    """リソースの重複エラー（条件付き書き込みの失敗時）"""

    pass


class OptimisticLockException(ConflictException):
    """楽観ロックの競合エラー（ステータスやバージョンが期待値と異なる場合）"""

    pass


class ReferenceGenerationException(ConflictException):
    """予約番号の採番がリトライ上限に達した場合"""

    pass


class UpstreamException(DomainException):
    """外部フライトオファー API の失敗"""

    code = "UPSTREAM_ERROR"


class RateLimitedException(UpstreamException):
    """外部 API のレート制限（HTTP 429）"""

    code = "UPSTREAM_RATE_LIMITED"


class NoFlightsFoundException(DomainException):
    """検索結果が空の場合

    reason で「便なし」「指定航空会社の便なし」「目的地に到着する便なし」を区別する。
    """

    code = "NO_FLIGHTS"

    NO_FLIGHTS = "NO_FLIGHTS"
    NO_FLIGHTS_FOR_AIRLINE = "NO_FLIGHTS_FOR_AIRLINE"
    NO_FLIGHTS_TO_DESTINATION = "NO_FLIGHTS_TO_DESTINATION"

    def __init__(self, reason: str, message: str) -> None:
        super().__init__(message)
        self.reason = reason

    @classmethod
    def no_flights(cls) -> "NoFlightsFoundException":
        return cls(cls.NO_FLIGHTS, "No flights found")

    @classmethod
    def for_airline(cls, airline: str) -> "NoFlightsFoundException":
        return cls(
            cls.NO_FLIGHTS_FOR_AIRLINE,
            f"No flights found for airline: {airline.upper()}",
        )

    @classmethod
    def to_destination(cls, destination: str) -> "NoFlightsFoundException":
        return cls(
            cls.NO_FLIGHTS_TO_DESTINATION,
            f"No flights found with the requested final destination: {destination}",
        )
