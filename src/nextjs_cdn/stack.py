"""AWS CDK stack serving an OpenNext build of a Next.js application."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Union

from aws_cdk import (
    CfnOutput,
    Duration,
    RemovalPolicy,
    Stack,
    aws_lambda as _lambda,
    aws_s3 as s3,
)
from constructs import Construct

from .constants import NEXTJS_BUILD_DIR, NEXTJS_IMAGE_DIR, NEXTJS_SERVER_DIR
from .distribution import NextjsDistribution
from .models import BuildManifest, CustomDomainInput


class NextjsSiteStack(Stack):
    """Provision the static assets bucket, the Lambda backends and their distribution."""

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        *,
        nextjs_path: Union[str, os.PathLike],
        custom_domain: Optional[CustomDomainInput] = None,
        base_path: Optional[str] = None,
        function_url_iam_auth: bool = False,
        stage_name: Optional[str] = None,
        stack_prefix: Optional[str] = None,
        server_memory_mib: int = 1024,
        server_timeout_seconds: int = 10,
        **kwargs,
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        build_dir = Path(nextjs_path) / NEXTJS_BUILD_DIR

        static_assets_bucket = s3.Bucket(
            self,
            "StaticAssets",
            block_public_access=s3.BlockPublicAccess.BLOCK_ALL,
            enforce_ssl=True,
            removal_policy=RemovalPolicy.DESTROY,
        )

        server_function = _lambda.Function(
            self,
            "ServerFunction",
            runtime=_lambda.Runtime.NODEJS_20_X,
            handler="index.handler",
            code=_lambda.Code.from_asset(str(build_dir / NEXTJS_SERVER_DIR)),
            memory_size=server_memory_mib,
            timeout=Duration.seconds(server_timeout_seconds),
            environment={"CACHE_BUCKET_NAME": static_assets_bucket.bucket_name},
        )

        image_opt_function = _lambda.Function(
            self,
            "ImageOptFunction",
            runtime=_lambda.Runtime.NODEJS_20_X,
            handler="index.handler",
            code=_lambda.Code.from_asset(str(build_dir / NEXTJS_IMAGE_DIR)),
            memory_size=1536,
            timeout=Duration.seconds(25),
            environment={"BUCKET_NAME": static_assets_bucket.bucket_name},
        )
        static_assets_bucket.grant_read(image_opt_function)

        self.nextjs_distribution = NextjsDistribution(
            self,
            "Distribution",
            static_assets_bucket=static_assets_bucket,
            server_function=server_function,
            image_opt_function=image_opt_function,
            build_manifest=BuildManifest.from_nextjs_build(nextjs_path),
            custom_domain=custom_domain,
            base_path=base_path,
            function_url_auth_type=(
                _lambda.FunctionUrlAuthType.AWS_IAM if function_url_iam_auth else _lambda.FunctionUrlAuthType.NONE
            ),
            stage_name=stage_name,
            stack_prefix=stack_prefix,
        )

        CfnOutput(self, "Url", value=self.nextjs_distribution.url)
        CfnOutput(self, "DistributionId", value=self.nextjs_distribution.distribution_id)
        CfnOutput(self, "StaticAssetsBucketName", value=static_assets_bucket.bucket_name)
        if self.nextjs_distribution.custom_domain_url:
            CfnOutput(self, "CustomDomainUrl", value=self.nextjs_distribution.custom_domain_url)

        self.static_assets_bucket = static_assets_bucket
        self.server_function = server_function
        self.image_opt_function = image_opt_function
