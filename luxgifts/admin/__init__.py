from luxgifts.admin.settings import (
    SETTINGS_SECTIONS,
    EmailSettings,
    GeneralSettings,
    PaymentSettings,
    PlatformSettings,
    SettingsForm,
    ShippingSettings,
    TaxSettings,
)

__all__ = [
    "SETTINGS_SECTIONS",
    "EmailSettings",
    "GeneralSettings",
    "PaymentSettings",
    "PlatformSettings",
    "SettingsForm",
    "ShippingSettings",
    "TaxSettings",
]
