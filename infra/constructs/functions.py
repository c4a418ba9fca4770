import datetime

from aws_cdk import Duration
from aws_cdk import aws_dynamodb as dynamodb
from aws_cdk import aws_lambda as _lambda
from constructs import Construct


class Functions(Construct):
    """Lambda 関数を管理する Construct"""

    def __init__(
        self,
        scope: Construct,
        id: str,
        table: dynamodb.Table,
        common_layer: _lambda.LayerVersion,
        amadeus_environment: dict[str, str] | None = None,
    ) -> None:
        super().__init__(scope, id)

        self._table = table
        self._common_layer = common_layer

        # 外部 API のリトライ待ち（最大 2 + 4 秒）を含めるためタイムアウトを長めにする
        self.search_flights = self._create_function(
            "SearchFlightsLambda",
            "skywings.offer.handlers.search_flights.lambda_handler",
            "offer-service",
            timeout=Duration.seconds(60),
            extra_environment=amadeus_environment,
        )

        self.get_offer = self._create_function(
            "GetOfferLambda",
            "skywings.offer.handlers.get_offer.lambda_handler",
            "offer-service",
        )

        self.create_booking = self._create_function(
            "CreateBookingLambda",
            "skywings.booking.handlers.create_booking.lambda_handler",
            "booking-service",
        )

        self.get_booking = self._create_function(
            "GetBookingLambda",
            "skywings.booking.handlers.get_booking.lambda_handler",
            "booking-service",
        )

        self.cancel_booking = self._create_function(
            "CancelBookingLambda",
            "skywings.booking.handlers.cancel_booking.lambda_handler",
            "booking-service",
        )

        self.amend_passengers = self._create_function(
            "AmendPassengersLambda",
            "skywings.booking.handlers.amend_passengers.lambda_handler",
            "booking-service",
        )

        self.resend_confirmation = self._create_function(
            "ResendConfirmationLambda",
            "skywings.booking.handlers.resend_confirmation.lambda_handler",
            "booking-service",
        )

        self.list_bookings = self._create_function(
            "ListBookingsLambda",
            "skywings.booking.handlers.list_bookings.lambda_handler",
            "booking-service",
        )

        self.search_bookings = self._create_function(
            "SearchBookingsLambda",
            "skywings.booking.handlers.search_bookings.lambda_handler",
            "booking-service",
        )

        self.seed_sample_bookings = self._create_function(
            "SeedSampleBookingsLambda",
            "skywings.booking.handlers.seed_sample_bookings.lambda_handler",
            "booking-service",
        )

        self.health = self._create_function(
            "HealthLambda",
            "skywings.shared.handlers.health.lambda_handler",
            "skywings",
        )

        for fn in [
            self.search_flights,
            self.create_booking,
            self.cancel_booking,
            self.amend_passengers,
            self.seed_sample_bookings,
        ]:
            table.grant_read_write_data(fn)

        for fn in [
            self.get_offer,
            self.get_booking,
            self.resend_confirmation,
            self.list_bookings,
            self.search_bookings,
        ]:
            table.grant_read_data(fn)

    @property
    def all_functions(self) -> list[_lambda.Function]:
        return [
            self.search_flights,
            self.get_offer,
            self.create_booking,
            self.get_booking,
            self.cancel_booking,
            self.amend_passengers,
            self.resend_confirmation,
            self.list_bookings,
            self.search_bookings,
            self.seed_sample_bookings,
            self.health,
        ]

    def _create_function(
        self,
        id: str,
        handler: str,
        service_name: str,
        timeout: Duration | None = None,
        extra_environment: dict[str, str] | None = None,
    ) -> _lambda.Function:
        return _lambda.Function(
            self,
            id,
            runtime=_lambda.Runtime.PYTHON_3_14,
            handler=handler,
            code=_lambda.Code.from_asset("src"),
            layers=[self._common_layer],
            timeout=timeout or Duration.seconds(10),
            environment={
                "TABLE_NAME": self._table.table_name,
                "BOOKING_STORE": "dynamodb",
                "POWERTOOLS_SERVICE_NAME": service_name,
                "DEPLOY_TIME": datetime.datetime.now(datetime.timezone.utc).isoformat(),
                **(extra_environment or {}),
            },
        )
