"""Order pricing: tax and shipping computed from the store settings."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class TaxSettings:
    rate: float = 0.10
    description: str = "Tax rate (10%)"


@dataclass(frozen=True)
class ShippingSettings:
    rate: float = 150.0
    free_shipping_threshold: float = 5000.0
    description: str = "PKR 150 shipping, free over PKR 5,000"


@dataclass(frozen=True)
class CurrencySettings:
    code: str = "PKR"
    symbol: str = "PKR"
    name: str = "Pakistani Rupee"


@dataclass(frozen=True)
class StoreSettings:
    tax: TaxSettings = field(default_factory=TaxSettings)
    shipping: ShippingSettings = field(default_factory=ShippingSettings)
    currency: CurrencySettings = field(default_factory=CurrencySettings)

    def to_dict(self) -> dict:
        return {
            "tax_rate": {"rate": self.tax.rate, "description": self.tax.description},
            "shipping_rate": {
                "rate": self.shipping.rate,
                "free_shipping_threshold": self.shipping.free_shipping_threshold,
                "description": self.shipping.description,
            },
            "currency": {
                "code": self.currency.code,
                "symbol": self.currency.symbol,
                "name": self.currency.name,
            },
        }


DEFAULT_SETTINGS = StoreSettings()


@dataclass(frozen=True)
class OrderPricing:
    subtotal: float
    tax: float
    shipping: float
    total: float
    currency: str


def calculate_tax(subtotal: float, settings: StoreSettings = DEFAULT_SETTINGS) -> float:
    return round(subtotal * settings.tax.rate, 2)


def calculate_shipping(subtotal: float, settings: StoreSettings = DEFAULT_SETTINGS) -> float:
    """Flat rate below the free-shipping threshold; reaching it ships free."""
    if subtotal >= settings.shipping.free_shipping_threshold:
        return 0.0
    return settings.shipping.rate


def price_order(subtotal: float, settings: StoreSettings = DEFAULT_SETTINGS) -> OrderPricing:
    tax = calculate_tax(subtotal, settings)
    shipping = calculate_shipping(subtotal, settings)
    return OrderPricing(
        subtotal=subtotal,
        tax=tax,
        shipping=shipping,
        total=round(subtotal + tax + shipping, 2),
        currency=settings.currency.code,
    )
