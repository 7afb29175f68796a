"""Configuration settings for security provisioning."""

import os


SECURITY_API_PREFIX = os.environ.get("REPL_SECURITY_API_PREFIX", "_opendistro/_security/api")

DEFAULT_PRINCIPAL_PASSWORD = os.environ.get("REPL_PROVISION_PASSWORD", "password")

SECURITY_REQUEST_TIMEOUT = float(os.environ.get("REPL_SECURITY_TIMEOUT", "30"))
