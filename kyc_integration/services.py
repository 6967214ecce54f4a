import json
import logging

import requests
from constance import config
from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import transaction

from user_dashboard.models import KycRequest, KycAuditLog
from user_dashboard.kyc_utils import safe_filename, log_kyc_action, validate_document_value
from .credentials import (
    SMILE_ID_PLACEHOLDER_JOB_ID,
    SUMSUB_ACCESS_TOKEN_PATH,
    SumsubCredential,
    current_timestamp,
    sign_sumsub_request,
)

logger = logging.getLogger(__name__)


class ProviderError(Exception):
    """
    A verification provider call failed.
    status is the HTTP status to relay; payload the provider's JSON body, if any.
    """

    def __init__(self, message, status=500, payload=None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.payload = payload

    def as_response_body(self):
        if self.payload is not None:
            return self.payload
        return {'error': self.message}


class SmileIdentityService:
    """
    Records KYC submissions for Smile ID review.
    Job submission is not wired to the Smile ID API yet; every request gets
    the placeholder job id and an empty result.
    """

    @staticmethod
    @transaction.atomic
    def submit_job(user, document_type, document_value, document_file, selfie_file,
                   ip_address=None):
        """
        Store both files and create a pending_review KycRequest.

        Args:
            document_file, selfie_file: Django File objects (uploads or
                files opened from default storage)

        Returns:
            KycRequest
        """
        valid_types = {code for code, _ in KycRequest.DOC_TYPE_CHOICES}
        if document_type not in valid_types:
            raise ValidationError(f"Unsupported document type: {document_type}")
        is_valid, error_msg = validate_document_value(document_value, document_type)
        if not is_valid:
            raise ValidationError(error_msg)
        if document_file is None or selfie_file is None:
            raise ValidationError("Please upload both ID document and selfie.")

        kyc_request = KycRequest(
            user=user,
            status=KycRequest.STATUS_PENDING_REVIEW,
            document_type=document_type,
            document_value=document_value.strip(),
            smile_id_job_id=SMILE_ID_PLACEHOLDER_JOB_ID,
            result=None,
        )
        kyc_request.document_file.save(
            safe_filename(document_file.name), document_file, save=False
        )
        kyc_request.selfie_file.save(
            safe_filename(selfie_file.name), selfie_file, save=False
        )
        kyc_request.save()

        log_kyc_action(
            kyc_request,
            KycAuditLog.ACTION_SUBMITTED,
            user,
            f"Submitted {kyc_request.get_document_type_display()} for review",
            ip_address,
        )

        logger.info(f"KYC request {kyc_request.pk} submitted by user {user.pk}")
        return kyc_request


class SumsubService:
    """
    Mints Sumsub WebSDK access tokens.
    """

    @staticmethod
    def build_body(external_user_id, email, phone, level_name):
        """Compact JSON body; the signature is computed over these exact bytes."""
        return json.dumps({
            'applicantIdentifiers': {'email': email, 'phone': phone},
            'ttlInSecs': config.SUMSUB_TOKEN_TTL,
            'userId': external_user_id,
            'levelName': level_name,
            'externalActionId': external_user_id,
        }, separators=(',', ':'))

    @staticmethod
    def signed_headers(body, method='POST', path=SUMSUB_ACCESS_TOKEN_PATH, ts=None):
        ts = current_timestamp() if ts is None else ts
        signature = sign_sumsub_request(SumsubCredential.secret_key(), ts, method, path, body)
        return {
            'X-App-Token': SumsubCredential.app_token(),
            'X-App-Access-Sig': signature,
            'X-App-Access-Ts': str(ts),
            'Content-Type': 'application/json',
        }

    @staticmethod
    def request_access_token(external_user_id, email, phone, level_name):
        """
        Returns:
            dict: Sumsub's JSON response (token and userId)

        Raises:
            ProviderError: upstream non-2xx (status relayed) or network failure (500)
        """
        body = SumsubService.build_body(external_user_id, email, phone, level_name)
        headers = SumsubService.signed_headers(body)
        url = f"{SumsubCredential.base_url()}{SUMSUB_ACCESS_TOKEN_PATH}"

        try:
            response = requests.post(
                url,
                data=body.encode('utf-8'),
                headers=headers,
                timeout=settings.SUMSUB_TIMEOUT,
            )
        except requests.RequestException as e:
            logger.error(f"Sumsub token request failed for {external_user_id}: {e}")
            raise ProviderError(str(e), status=500)

        try:
            data = response.json()
        except ValueError:
            data = {'error': response.text or 'Invalid response from Sumsub'}
        if not isinstance(data, dict):
            data = {'data': data}

        if not response.ok:
            logger.warning(
                f"Sumsub returned {response.status_code} for {external_user_id}: {data}"
            )
            raise ProviderError(
                data.get('description') or data.get('error') or 'Sumsub request failed',
                status=response.status_code,
                payload=data,
            )

        logger.info(f"Sumsub access token issued for {external_user_id}")
        return data
