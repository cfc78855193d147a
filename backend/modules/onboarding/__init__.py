"""
Onboarding module.

Turns the temporary account created after checkout into a usable one,
guarded by the onboarding token issued with the checkout session.

Public API:
- OnboardingService: complete / status / create_fallback
- CompleteOnboardingRequest, CreateFallbackRequest, OnboardingStatus: Models
"""

from .models import (
    CompleteOnboardingRequest,
    CreateFallbackRequest,
    OnboardingResult,
    OnboardingStatus,
)
from .service import OnboardingService

__all__ = [
    "OnboardingService",
    "CompleteOnboardingRequest",
    "CreateFallbackRequest",
    "OnboardingResult",
    "OnboardingStatus",
]
