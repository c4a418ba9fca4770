import logging
import subprocess
from pathlib import Path

import jsii
from aws_cdk import BundlingOptions, ILocalBundling
from aws_cdk import aws_lambda as _lambda
from constructs import Construct

logger = logging.getLogger(__name__)

LAYER_SOURCE_PATH = "layers/common_layer"


def _installer_commands(requirements: Path, target: Path) -> list[list[str]]:
    """試行するインストールコマンド（先頭から順に試す）"""
    return [
        ["uv", "pip", "install", "-r", str(requirements), "--target", str(target)],
        ["pip", "install", "-r", str(requirements), "-t", str(target)],
    ]


@jsii.implements(ILocalBundling)
class PythonLocalBundling:
    """共通レイヤーの依存関係をローカルでインストールする Bundling クラス

    uv、pip の順に試し、どちらも使えなければ Docker でのバンドリングに任せる。
    """

    def __init__(self, source_path: str) -> None:
        self.source_path = source_path

    def try_bundle(self, output_dir: str, options: BundlingOptions) -> bool:
        """ローカルでバンドリングを試行する。

        Returns:
            True: バンドリング成功（Dockerをスキップ）
            False: バンドリング失敗（Dockerにフォールバック）
        """
        del options  # unused
        requirements = Path(self.source_path) / "requirements.txt"
        if not requirements.exists():
            logger.warning("requirements.txt not found: %s", requirements)
            return False

        target = Path(output_dir) / "python"
        for command in _installer_commands(requirements, target):
            if self._run(command):
                return True

        logger.warning("Local bundling failed, falling back to Docker")
        return False

    @staticmethod
    def _run(command: list[str]) -> bool:
        installer = command[0]
        try:
            subprocess.run([*command, "--quiet"], check=True)
        except FileNotFoundError:
            logger.debug("%s not found", installer)
            return False
        except subprocess.CalledProcessError as e:
            logger.debug("%s install failed: %s", installer, e)
            return False
        logger.info("Local bundling with %s succeeded", installer)
        return True


class Layers(Construct):
    """Lambda Layers Construct"""

    def __init__(self, scope: Construct, id: str) -> None:
        super().__init__(scope, id)

        self.common_layer = _lambda.LayerVersion(
            self,
            "CommonLayer",
            code=_lambda.Code.from_asset(
                LAYER_SOURCE_PATH,
                bundling=BundlingOptions(
                    image=_lambda.Runtime.PYTHON_3_14.bundling_image,
                    command=[
                        "bash",
                        "-c",
                        "pip install -r requirements.txt -t /asset-output/python",
                    ],
                    local=PythonLocalBundling(LAYER_SOURCE_PATH),
                ),
            ),
            compatible_runtimes=[_lambda.Runtime.PYTHON_3_14],
            description="SkyWings runtime dependencies (powertools, pydantic, requests)",
        )
