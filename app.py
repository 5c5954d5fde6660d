#!/usr/bin/env python3
"""CDK app entry point."""

import logging
import os

import aws_cdk as cdk

from nextjs_cdn.config import app_config, logging_config
from nextjs_cdn.stack import NextjsSiteStack

logging.basicConfig(level=logging_config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

app = cdk.App()

# Get environment variables with defaults
account = os.getenv('CDK_DEFAULT_ACCOUNT', cdk.Aws.ACCOUNT_ID)
region = os.getenv('CDK_DEFAULT_REGION', 'us-east-1')

NextjsSiteStack(
    app,
    f"{app_config.STACK_PREFIX}SiteStack",
    nextjs_path=app_config.NEXTJS_PATH,
    custom_domain=app_config.CUSTOM_DOMAIN,
    base_path=app_config.BASE_PATH,
    function_url_iam_auth=app_config.FUNCTION_URL_IAM_AUTH,
    stage_name=app_config.STAGE_NAME,
    stack_prefix=app_config.STACK_PREFIX,
    env=cdk.Environment(account=account, region=region),
)

app.synth()
