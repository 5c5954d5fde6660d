"""Constants used throughout the Next.js CloudFront constructs."""

import re

# ============================================================================
# OpenNext build output layout
# ============================================================================
NEXTJS_BUILD_DIR = ".open-next"
NEXTJS_STATIC_DIR = "assets"
NEXTJS_SERVER_DIR = "server-functions/default"
NEXTJS_IMAGE_DIR = "image-optimization-function"

# Root document served natively by CloudFront when present in the assets
INDEX_DOCUMENT = "index.html"

# ============================================================================
# CloudFront limits and grammar
# ============================================================================
# Cache behaviors per distribution, default behavior included
MAX_CACHE_BEHAVIORS = 25
MAX_STATIC_BEHAVIORS = MAX_CACHE_BEHAVIORS - 1

PATH_PATTERN_REGEX = re.compile(r"^[a-zA-Z0-9_\-.*$/~\"'@:+?&]+$")

CLOUDFRONT_LIMITS_URL = (
    "https://docs.aws.amazon.com/AmazonCloudFront/latest/DeveloperGuide/"
    "cloudfront-limits.html#limits-web-distributions"
)
PATH_PATTERN_DOCS_URL = (
    "https://docs.aws.amazon.com/AmazonCloudFront/latest/DeveloperGuide/"
    "distribution-web-values-specify.html#DownloadDistValuesPathPattern"
)

# ============================================================================
# Routes handled by the Lambda backends
# ============================================================================
API_PATH_PATTERN = "api/*"
DATA_PATH_PATTERN = "_next/data/*"
IMAGE_PATH_PATTERN = "_next/image*"

# ============================================================================
# Cache defaults
# ============================================================================
SECONDS_PER_DAY = 24 * 60 * 60
DEFAULT_STATIC_MAX_AGE = 30 * SECONDS_PER_DAY

# ============================================================================
# Certificates and edge functions
# ============================================================================
# CloudFront only accepts ACM certificates issued in us-east-1
CERTIFICATE_REGION = "us-east-1"

EDGE_INVOKE_PRINCIPALS = ("edgelambda.amazonaws.com", "lambda.amazonaws.com")
DEFAULT_STACK_PREFIX = "Nextjs"

FORWARDED_HOST_HEADER = "x-forwarded-host"
