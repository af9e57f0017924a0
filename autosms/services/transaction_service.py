"""
Transaction verification service for the AutoSMS Payment Hub.
Looks up a payment SMS by the sender's phone number.
"""

import logging
from typing import Optional

from ..constants import APIEndpoints
from ..exceptions import AutoSMSException
from ..models import TransactionLookup
from ..utils.validators import validate_phone_number
from .base import BaseService

logger = logging.getLogger(__name__)


class TransactionService(BaseService):
    """
    Service for verifying transactions by phone number.
    """

    def verify_transaction(self, phone_number: str, verify_signature: bool = True) -> Optional[TransactionLookup]:
        """
        Verify a transaction by phone number.

        Without a verification secret configured the signature check is
        skipped, so the response carries no integrity guarantee.

        Args:
            phone_number: The phone number the payment was sent from
            verify_signature: Whether to verify the response HMAC signature

        Returns:
            TransactionLookup with the parsed response, or None on failure
            (see ``last_error``)
        """
        self._reset_error()
        logger.info(f"Verifying transaction for phone: {phone_number}")

        try:
            phone = validate_phone_number(phone_number)

            result = self.http_client.post(
                APIEndpoints.VERIFY_TRANSACTION,
                {'phone_number': phone}
            )

            if verify_signature and self.config.enable_signature_verification:
                self._check_signature(result)

            lookup = TransactionLookup.from_response(result.json())

        except AutoSMSException as e:
            self._record_error(e, "Transaction verification failed")
            return None

        if lookup.found:
            logger.info(
                f"Transaction found for phone: {phone}, "
                f"ID: {lookup.transaction.transaction_id}"
            )
        else:
            logger.info(f"No transaction found for phone: {phone}")
        return lookup
