"""
Onboarding module exceptions.

The codes are part of the API contract: the onboarding page switches on
them to decide between "sign in instead", "contact support" and a retry.
"""

from shared.exceptions import (
    AuthorizationError,
    ConflictError,
    ExternalServiceError,
    NotFoundError,
    ValidationError,
)


class OnboardingSessionInvalidError(NotFoundError):
    def __init__(self):
        super().__init__(
            "Invalid session. Please contact support.",
            code="ONBOARDING_SESSION_INVALID",
        )


class OnboardingEmailExistsError(ConflictError):
    def __init__(self):
        super().__init__(
            "An account with this email already exists. Please sign in instead.",
            code="ONBOARDING_EMAIL_EXISTS",
        )


class OnboardingAlreadyCompletedError(ConflictError):
    def __init__(self):
        super().__init__(
            "Onboarding has already been completed. Please sign in.",
            code="ONBOARDING_ALREADY_COMPLETED",
        )


class OnboardingSessionExpiredError(ValidationError):
    def __init__(self):
        super().__init__(
            "Onboarding session expired. Please contact support.",
            code="ONBOARDING_SESSION_EXPIRED",
        )


class OnboardingEmailMismatchError(ValidationError):
    def __init__(self):
        super().__init__(
            "Email must match the email used during checkout.",
            code="ONBOARDING_EMAIL_MISMATCH",
        )


class OnboardingTokenInvalidError(AuthorizationError):
    def __init__(self):
        super().__init__(
            "Invalid onboarding token. Please use the original onboarding link.",
            code="ONBOARDING_TOKEN_INVALID",
        )


class OnboardingReferralInvalidError(ValidationError):
    def __init__(self):
        super().__init__(
            "Invalid referral code. Please check and try again.",
            code="ONBOARDING_REFERRAL_INVALID",
        )


class OnboardingAccountLookupFailedError(ExternalServiceError):
    def __init__(self):
        super().__init__(
            "Failed to validate account details. Please try again.",
            service="supabase",
            code="ONBOARDING_ACCOUNT_LOOKUP_FAILED",
        )


class OnboardingAccountUpdateFailedError(ExternalServiceError):
    def __init__(self):
        super().__init__(
            "Failed to update account. Please try again.",
            service="supabase",
            code="ONBOARDING_ACCOUNT_UPDATE_FAILED",
        )


class OnboardingProfileUpdateFailedError(ExternalServiceError):
    def __init__(self):
        super().__init__(
            "Failed to complete profile setup. Please try again.",
            service="supabase",
            code="ONBOARDING_PROFILE_UPDATE_FAILED",
        )


class OnboardingStatusNotFoundError(NotFoundError):
    def __init__(self):
        super().__init__("Session not found", code="ONBOARDING_STATUS_NOT_FOUND")


class OnboardingCustomerDetailsMissingError(ValidationError):
    def __init__(self):
        super().__init__(
            "Unable to retrieve customer details from Stripe",
            code="ONBOARDING_FALLBACK_CUSTOMER_DETAILS_MISSING",
        )
