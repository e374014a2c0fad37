"""
Logo Designer Backend — Settings Tests
========================================

What we test:
    ✅ Page-size bounds cannot be configured past the 1-100 clamp
    ✅ Language and log level validation
"""

import pytest
from pydantic import ValidationError

from logo_api.config import Settings


class TestPageSizeSettings:

    def test_max_page_size_capped_at_100(self):
        with pytest.raises(ValidationError):
            Settings(mobile_page_size_max=500)

    def test_max_page_size_of_100_accepted(self):
        assert Settings(mobile_page_size_max=100).mobile_page_size_max == 100

    def test_default_above_max_fails_startup_check(self):
        config = Settings(mobile_page_size_default=50, mobile_page_size_max=30)
        with pytest.raises(ValueError, match="MOBILE_PAGE_SIZE_DEFAULT"):
            config.validate_required_for_production()


class TestValidators:

    def test_default_language_normalized(self):
        assert Settings(default_language=" AR ").default_language == "ar"

    def test_unsupported_default_language_rejected(self):
        with pytest.raises(ValidationError):
            Settings(default_language="fr")

    def test_log_level_uppercased(self):
        assert Settings(log_level="debug").log_level == "DEBUG"
