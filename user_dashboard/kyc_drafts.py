"""
Session-backed state for the four-step KYC flow.
Uploaded files are parked in default storage under kyc/drafts/<user_id>/
and only their storage names live in the session.
"""

import logging

from django.core.files.storage import default_storage

from .kyc_utils import safe_filename
from .models import KycRequest

logger = logging.getLogger(__name__)


SESSION_KEY = 'kyc_draft'


class KycDraft:

    def __init__(self, request):
        self.request = request
        self.data = dict(request.session.get(SESSION_KEY) or {})
        self.data.setdefault('document_type', KycRequest.DOC_TYPE_BVN)

    def _save(self):
        self.request.session[SESSION_KEY] = self.data
        self.request.session.modified = True

    @property
    def document_type(self):
        return self.data.get('document_type')

    @property
    def document_value(self):
        return self.data.get('document_value', '')

    @property
    def document_file(self):
        return self.data.get('document_file')

    @property
    def selfie_file(self):
        return self.data.get('selfie_file')

    @property
    def document_file_label(self):
        return self.data.get('document_file_label', '')

    @property
    def selfie_file_label(self):
        return self.data.get('selfie_file_label', '')

    @property
    def document_type_display(self):
        return dict(KycRequest.DOC_TYPE_CHOICES).get(self.document_type, self.document_type)

    @property
    def has_details(self):
        return bool(self.document_type and self.document_value)

    @property
    def has_files(self):
        return bool(self.document_file and self.selfie_file)

    def set_details(self, document_type, document_value):
        self.data['document_type'] = document_type
        self.data['document_value'] = document_value.strip()
        self._save()

    def _store(self, key, uploaded_file):
        previous = self.data.get(key)
        if previous:
            self._delete(previous)

        target = f"kyc/drafts/{self.request.user.pk}/{key}-{safe_filename(uploaded_file.name)}"
        name = default_storage.save(target, uploaded_file)
        self.data[key] = name
        self.data[f'{key}_label'] = uploaded_file.name
        self._save()
        return name

    def store_document(self, uploaded_file):
        return self._store('document_file', uploaded_file)

    def store_selfie(self, uploaded_file):
        return self._store('selfie_file', uploaded_file)

    def open_files(self):
        """(document, selfie) File objects from default storage; caller closes them."""
        return (
            default_storage.open(self.document_file, 'rb'),
            default_storage.open(self.selfie_file, 'rb'),
        )

    def files_exist(self):
        return all(
            name and default_storage.exists(name)
            for name in (self.document_file, self.selfie_file)
        )

    @staticmethod
    def _delete(name):
        try:
            if default_storage.exists(name):
                default_storage.delete(name)
        except OSError as e:
            logger.warning(f"Could not delete KYC draft file {name}: {e}")

    def clear(self):
        for key in ('document_file', 'selfie_file'):
            if self.data.get(key):
                self._delete(self.data[key])
        self.request.session.pop(SESSION_KEY, None)
        self.data = {'document_type': KycRequest.DOC_TYPE_BVN}
