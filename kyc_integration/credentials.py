import hashlib
import hmac
import time

from django.conf import settings


SUMSUB_ACCESS_TOKEN_PATH = '/resources/accessTokens/sdk'
SMILE_ID_PLACEHOLDER_JOB_ID = 'smile-job-id-placeholder'


class SumsubCredential:
    """Sumsub app credentials, read from settings on every access."""

    @staticmethod
    def app_token():
        return settings.SUMSUB_APP_TOKEN

    @staticmethod
    def secret_key():
        return settings.SUMSUB_SECRET_KEY

    @staticmethod
    def base_url():
        return settings.SUMSUB_BASE_URL.rstrip('/')


def sign_sumsub_request(secret_key, ts, method, path, body):
    """
    Hex HMAC-SHA256 over "<ts>\\n<METHOD>\\n<path>\\n<body>".
    """
    string_to_sign = f"{ts}\n{method.upper()}\n{path}\n{body}"
    return hmac.new(
        secret_key.encode('utf-8'),
        string_to_sign.encode('utf-8'),
        hashlib.sha256,
    ).hexdigest()


def current_timestamp():
    return int(time.time())
