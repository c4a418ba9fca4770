from aws_cdk import CfnOutput, Stack
from constructs import Construct

from infra.constructs import Api, Database, Functions, Layers


class SkyWingsStack(Stack):
    """SkyWings フライト予約 API スタック

    Amadeus の認証情報は CDK コンテキスト（amadeus_client_id /
    amadeus_client_secret / amadeus_base_url）から渡す。
    """

    def __init__(self, scope: Construct, construct_id: str, **kwargs) -> None:
        super().__init__(scope, construct_id, **kwargs)

        database = Database(self, "Database")
        layers = Layers(self, "Layers")

        amadeus_environment = {
            "AMADEUS_CLIENT_ID": self.node.try_get_context("amadeus_client_id") or "",
            "AMADEUS_CLIENT_SECRET": (
                self.node.try_get_context("amadeus_client_secret") or ""
            ),
            "AMADEUS_BASE_URL": (
                self.node.try_get_context("amadeus_base_url")
                or "https://test.api.amadeus.com"
            ),
        }

        fns = Functions(
            self,
            "Functions",
            table=database.table,
            common_layer=layers.common_layer,
            amadeus_environment=amadeus_environment,
        )

        api = Api(self, "Api", functions=fns)

        CfnOutput(self, "ApiUrl", value=api.rest_api.url)
        CfnOutput(self, "TableName", value=database.table.table_name)
