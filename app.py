#!/usr/bin/env python3

import aws_cdk as cdk

from skywings_stack import SkyWingsStack

app = cdk.App()
SkyWingsStack(
    app,
    "SkyWingsStack",
)

app.synth()
