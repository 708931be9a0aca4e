"""Dialogs for Co-Drawing"""

from .credential_dialog import CredentialDialog

__all__ = ['CredentialDialog']
