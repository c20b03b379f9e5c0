"""Tests for admin settings sections and the local edit form."""

import pytest
from pydantic import SecretStr

from luxgifts.admin import SettingsForm
from luxgifts.admin.settings import GeneralSettings, PaymentSettings, PlatformSettings, TaxSettings


class TestSettingsModels:
    def test_general_defaults(self):
        settings = GeneralSettings()
        assert settings.site_name == "Luxury Gifts"
        assert settings.primary_color == "#D4AF37"
        assert settings.social_links.instagram == "https://instagram.com/luxurygifts"

    def test_wire_format_is_camel_case(self):
        wire = GeneralSettings().to_wire()
        assert wire["siteName"] == "Luxury Gifts"
        assert wire["socialLinks"]["facebook"] == "https://facebook.com/luxurygifts"
        assert "site_name" not in wire

    def test_tax_acronym_aliases(self):
        wire = TaxSettings().to_wire()
        assert wire["enableVAT"] is True
        assert wire["enableGST"] is False

    def test_accepts_wire_names(self):
        settings = PlatformSettings.model_validate({"commissionRate": 12.5})
        assert settings.commission_rate == 12.5

    def test_secrets_not_exposed(self):
        settings = PaymentSettings(stripe_secret_key="sk_live_abc")
        assert "sk_live_abc" not in repr(settings)
        assert settings.stripe_secret_key.get_secret_value() == "sk_live_abc"

    def test_unknown_field_rejected(self):
        with pytest.raises(ValueError):
            PlatformSettings(commision_rate=5)


class TestSettingsForm:
    def test_for_section(self):
        form = SettingsForm.for_section("tax")
        assert isinstance(form.draft, TaxSettings)

    def test_unknown_section(self):
        with pytest.raises(ValueError):
            SettingsForm.for_section("billing")

    def test_update_marks_dirty(self):
        form = SettingsForm(PlatformSettings)
        assert form.update(commission_rate=15) == {}
        assert form.draft.commission_rate == 15
        assert form.is_dirty

    def test_invalid_update_leaves_draft_unchanged(self):
        form = SettingsForm(PlatformSettings)
        errors = form.update(commission_rate=150)
        assert set(errors) & {"commission_rate", "commissionRate"}
        assert form.draft.commission_rate == 10
        assert not form.is_dirty

    def test_nested_update(self):
        form = SettingsForm(GeneralSettings)
        form.update(social_links={"facebook": "https://facebook.com/lg"})
        assert form.draft.social_links.facebook == "https://facebook.com/lg"
        assert form.draft.social_links.twitter == "https://twitter.com/luxurygifts"

    def test_secret_survives_other_updates(self):
        form = SettingsForm(PaymentSettings, PaymentSettings(stripe_secret_key=SecretStr("sk_test")))
        form.update(enable_stripe=False)
        assert form.draft.stripe_secret_key.get_secret_value() == "sk_test"

    def test_reset(self):
        form = SettingsForm(PlatformSettings)
        form.update(commission_rate=20)
        form.reset()
        assert form.draft.commission_rate == 10
        assert not form.is_dirty

    def test_save_commits_draft(self):
        form = SettingsForm(PlatformSettings)
        form.update(enable_reviews=False)
        saved = form.save()
        assert saved.enable_reviews is False
        assert not form.is_dirty
