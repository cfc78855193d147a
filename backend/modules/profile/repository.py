"""
Referral persistence.

The referral write touches two rows (the referred user and the referrer's
credits), so it is done by one Postgres function instead of two updates.
See migrations/003_apply_referral_code.sql.
"""

from typing import Any

from shared.repository import BaseRepository

APPLY_REFERRAL_RPC = "apply_referral_code"
REFERRAL_CREDIT_AMOUNT = 1


class ReferralRepository(BaseRepository[dict]):
    def apply_referral_code(self, referral_code: str, user_id: str) -> Any:
        result = self._db.rpc(
            APPLY_REFERRAL_RPC,
            {
                "p_referral_code": referral_code,
                "p_referred_user_id": user_id,
                "p_credit_amount": REFERRAL_CREDIT_AMOUNT,
            },
        ).execute()
        return result.data
