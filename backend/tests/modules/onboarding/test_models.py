import pytest
from pydantic import ValidationError

from modules.onboarding.models import CompleteOnboardingRequest, split_full_name

BASE = {
    "session_id": "cs_1",
    "full_name": "Jane Artist",
    "email": "jane@example.com",
    "password": "long-enough",
}


class TestCompleteOnboardingRequest:
    def test_valid(self):
        request = CompleteOnboardingRequest(**BASE, referral_code="AB12CD")
        assert request.referral_code == "AB12CD"

    @pytest.mark.parametrize("code", ["abc123", "ABC12", "ABC1234", "AB-123"])
    def test_referral_code_format(self, code):
        with pytest.raises(ValidationError):
            CompleteOnboardingRequest(**BASE, referral_code=code)

    def test_short_password(self):
        with pytest.raises(ValidationError):
            CompleteOnboardingRequest(**{**BASE, "password": "short"})

    def test_invalid_email(self):
        with pytest.raises(ValidationError):
            CompleteOnboardingRequest(**{**BASE, "email": "not-an-email"})


class TestSplitFullName:
    def test_single_word(self):
        assert split_full_name("Cher") == ("Cher", None)

    def test_multiple_words(self):
        assert split_full_name("  Jane  Q  Artist ") == ("Jane", "Q Artist")
