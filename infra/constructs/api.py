from aws_cdk import aws_apigateway as apigw
from constructs import Construct

from infra.constructs.functions import Functions


class Api(Construct):
    """API Gateway Construct

    /flights は利用者向け、/admin/bookings は管理者向け。
    """

    def __init__(self, scope: Construct, id: str, functions: Functions) -> None:
        super().__init__(scope, id)

        self.rest_api = apigw.RestApi(
            self,
            "SkyWingsRestApi",
            rest_api_name="SkyWings Booking API",
            deploy_options=apigw.StageOptions(
                stage_name="prod",
                throttling_burst_limit=10,
                throttling_rate_limit=5,
            ),
            default_cors_preflight_options=apigw.CorsOptions(
                allow_origins=apigw.Cors.ALL_ORIGINS,
                allow_methods=apigw.Cors.ALL_METHODS,
            ),
        )
        root = self.rest_api.root

        # GET /health
        root.add_resource("health").add_method(
            "GET", apigw.LambdaIntegration(functions.health)
        )

        # GET /flights, GET /flights/{offer_id}
        flights = root.add_resource("flights")
        flights.add_method("GET", apigw.LambdaIntegration(functions.search_flights))
        flights.add_resource("{offer_id}").add_method(
            "GET", apigw.LambdaIntegration(functions.get_offer)
        )

        # POST /bookings
        root.add_resource("bookings").add_method(
            "POST", apigw.LambdaIntegration(functions.create_booking)
        )

        # GET /admin/bookings, GET /admin/bookings/search
        admin_bookings = root.add_resource("admin").add_resource("bookings")
        admin_bookings.add_method(
            "GET", apigw.LambdaIntegration(functions.list_bookings)
        )
        admin_bookings.add_resource("search").add_method(
            "GET", apigw.LambdaIntegration(functions.search_bookings)
        )

        # /admin/bookings/{reference}
        booking = admin_bookings.add_resource("{reference}")
        booking.add_method("GET", apigw.LambdaIntegration(functions.get_booking))
        booking.add_resource("cancel").add_method(
            "POST", apigw.LambdaIntegration(functions.cancel_booking)
        )
        booking.add_resource("passengers").add_method(
            "PUT", apigw.LambdaIntegration(functions.amend_passengers)
        )
        booking.add_resource("resend-email").add_method(
            "POST", apigw.LambdaIntegration(functions.resend_confirmation)
        )
