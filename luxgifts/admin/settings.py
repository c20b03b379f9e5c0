"""
Admin settings sections.

Each section is a pydantic model whose defaults are the values the admin
dashboard ships with. Fields are snake_case in Python and camelCase on the
wire. SettingsForm edits one section locally; nothing is persisted.
"""

from typing import Any, Dict, Generic, List, Literal, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, SecretStr, ValidationError
from pydantic.alias_generators import to_camel

from luxgifts.utils.logger import get_logger

logger = get_logger("admin.settings")


class _SettingsModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


class SocialLinks(_SettingsModel):
    facebook: str = "https://facebook.com/luxurygifts"
    instagram: str = "https://instagram.com/luxurygifts"
    twitter: str = "https://twitter.com/luxurygifts"
    pinterest: str = "https://pinterest.com/luxurygifts"


class GeneralSettings(_SettingsModel):
    site_name: str = "Luxury Gifts"
    site_tagline: str = "Exquisite Gifts for Discerning Tastes"
    site_description: str = (
        "Premium luxury gift platform offering curated selections of high-end products "
        "from exclusive brands worldwide."
    )
    contact_email: str = "contact@luxurygifts.com"
    contact_phone: str = "+1 (800) 555-1234"
    contact_address: str = "123 Luxury Avenue, New York, NY 10001"
    social_links: SocialLinks = Field(default_factory=SocialLinks)
    logo_url: str = "/assets/images/logo.png"
    favicon_url: str = "/assets/images/favicon.ico"
    primary_color: str = "#D4AF37"
    secondary_color: str = "#121212"
    accent_color: str = "#FFFFFF"
    font_heading: str = "Playfair Display"
    font_body: str = "Montserrat"
    enable_dark_mode: bool = True
    default_language: str = "en"
    date_format: str = "MM/DD/YYYY"
    time_format: Literal["12h", "24h"] = "12h"
    timezone: str = "America/New_York"
    enable_maintenance_mode: bool = False
    maintenance_message: str = "We are currently updating our site to serve you better. Please check back soon."
    google_analytics_id: str = "UA-XXXXXXXXX-X"
    meta_keywords: str = "luxury, gifts, premium, high-end, exclusive"
    enable_cookie_notice: bool = True
    cookie_notice_text: str = (
        "We use cookies to enhance your experience. By continuing to visit this site "
        "you agree to our use of cookies."
    )


class PlatformSettings(_SettingsModel):
    commission_rate: float = Field(10, ge=0, le=100)
    platform_fee: float = Field(2.5, ge=0)
    minimum_order_value: float = Field(50, ge=0)
    maximum_order_value: float = Field(10000, ge=0)
    enable_gift_wrapping: bool = True
    gift_wrapping_fee: float = Field(5, ge=0)
    enable_wishlist: bool = True
    enable_reviews: bool = True
    enable_comparisons: bool = True
    max_product_images: int = Field(8, ge=1)
    product_approval_required: bool = True
    seller_verification_required: bool = True
    enable_bulk_orders: bool = True
    bulk_order_discount: float = Field(5, ge=0, le=100)


class PaymentSettings(_SettingsModel):
    enable_stripe: bool = True
    stripe_public_key: str = "pk_test_sample123456789"
    stripe_secret_key: SecretStr = SecretStr("")
    stripe_webhook_secret: SecretStr = SecretStr("")
    enable_pay_pal: bool = True
    paypal_client_id: str = "test_client_id_12345"
    paypal_client_secret: SecretStr = SecretStr("")
    enable_credit_card: bool = True
    enable_apple_pay: bool = True
    enable_google_pay: bool = True
    enable_cryptocurrency: bool = False
    allow_guest_checkout: bool = True
    require_phone_number: bool = True
    enable_coupons: bool = True
    enable_gift_cards: bool = True
    min_order_amount: float = Field(10, ge=0)
    max_order_amount: float = Field(10000, ge=0)
    default_currency: str = "USD"
    supported_currencies: List[str] = Field(default_factory=lambda: ["USD", "EUR", "GBP", "CAD", "AUD"])
    automatic_tax_calculation: bool = True
    default_tax_rate: float = Field(7.5, ge=0, le=100)
    payment_mode: Literal["test", "live"] = "test"


class ShippingOrigin(_SettingsModel):
    address1: str = "123 Luxury Ave"
    address2: str = "Suite 100"
    city: str = "New York"
    state: str = "NY"
    zip_code: str = "10001"
    country: str = "United States"


class ShippingSettings(_SettingsModel):
    enable_shipping: bool = True
    enable_local_pickup: bool = True
    enable_international_shipping: bool = True
    restricted_countries: List[str] = Field(default_factory=lambda: ["Cuba", "Iran", "North Korea", "Syria"])
    shipping_origin_address: ShippingOrigin = Field(default_factory=ShippingOrigin)
    require_shipping_phone: bool = True
    enable_shipping_insurance: bool = True
    enable_order_tracking: bool = True
    default_weight_unit: Literal["lb", "kg"] = "lb"
    default_dimension_unit: Literal["in", "cm"] = "in"


class TaxSettings(_SettingsModel):
    enable_tax_calculation: bool = True
    automatic_tax_calculation: bool = True
    tax_provider: Literal["manual", "avalara", "taxjar"] = "manual"
    default_tax_rate: float = Field(7.5, ge=0, le=100)
    prices_include_tax: bool = False
    display_prices_with_tax: bool = False
    enable_vat: bool = Field(True, alias="enableVAT")
    vat_number: str = "GB123456789"
    enable_gst: bool = Field(False, alias="enableGST")
    gst_number: str = ""
    tax_exemption_enabled: bool = True
    require_tax_id_for_exemption: bool = True
    shipping_taxable: bool = True
    digital_products_taxable: bool = True


class EmailSettings(_SettingsModel):
    smtp_host: str = "smtp.example.com"
    smtp_port: int = Field(587, ge=1, le=65535)
    smtp_username: str = "notifications@luxurygifts.com"
    smtp_password: SecretStr = SecretStr("")
    sender_email: str = "notifications@luxurygifts.com"
    sender_name: str = "Luxury Gifts"
    enable_ssl: bool = True
    enable_order_confirmation: bool = True
    enable_shipping_updates: bool = True
    enable_delivery_notifications: bool = True
    enable_account_notifications: bool = True
    enable_marketing_emails: bool = True
    enable_admin_notifications: bool = True
    admin_notification_email: str = "admin@luxurygifts.com"
    email_footer_text: str = "© 2025 Luxury Gifts. All rights reserved."
    email_logo_url: str = "/assets/images/email-logo.png"


SETTINGS_SECTIONS: Dict[str, Type[_SettingsModel]] = {
    "general": GeneralSettings,
    "platform": PlatformSettings,
    "payment": PaymentSettings,
    "shipping": ShippingSettings,
    "tax": TaxSettings,
    "email": EmailSettings,
}

S = TypeVar("S", bound=_SettingsModel)


class SettingsForm(Generic[S]):
    """
    Local edit buffer for one settings section.

    update() re-validates the whole section; a rejected update leaves the
    draft untouched and returns the field errors.
    """

    def __init__(self, model_cls: Type[S], initial: Optional[S] = None):
        self.model_cls = model_cls
        self.saved: S = initial if initial is not None else model_cls()
        self.draft: S = self.saved.model_copy(deep=True)
        self.errors: Dict[str, str] = {}

    @classmethod
    def for_section(cls, section: str) -> "SettingsForm":
        try:
            return cls(SETTINGS_SECTIONS[section])
        except KeyError:
            raise ValueError(f"Unknown settings section: {section!r}") from None

    def update(self, **fields: Any) -> Dict[str, str]:
        data = self.draft.model_dump()
        data.update(fields)
        try:
            self.draft = self.model_cls.model_validate(data)
        except ValidationError as e:
            self.errors = {".".join(str(part) for part in err["loc"]): err["msg"] for err in e.errors()}
            logger.info("settings: section=%s rejected fields=%s", self.model_cls.__name__, sorted(self.errors))
            return dict(self.errors)
        self.errors = {}
        return {}

    @property
    def is_dirty(self) -> bool:
        return self.draft != self.saved

    def reset(self) -> None:
        self.draft = self.saved.model_copy(deep=True)
        self.errors = {}

    def save(self) -> S:
        """Commit the draft locally and return it. Nothing is sent to the server."""
        self.saved = self.draft.model_copy(deep=True)
        logger.info("settings: section=%s saved locally", self.model_cls.__name__)
        return self.saved
