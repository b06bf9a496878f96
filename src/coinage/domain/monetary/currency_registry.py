from coinage.domain.monetary.currency import Currency, CurrencyType


# Fiat currencies
USD = Currency("USD", 2, "US Dollar", CurrencyType.FIAT, "$")
EUR = Currency("EUR", 2, "Euro", CurrencyType.FIAT, "€")
GBP = Currency("GBP", 2, "British Pound", CurrencyType.FIAT, "£")
CHF = Currency("CHF", 2, "Swiss Franc", CurrencyType.FIAT, "CHF")
JPY = Currency("JPY", 0, "Japanese Yen", CurrencyType.FIAT, "¥")
KWD = Currency("KWD", 3, "Kuwaiti Dinar", CurrencyType.FIAT, "KD")

# Crypto currencies
BTC = Currency("BTC", 8, "Bitcoin", CurrencyType.CRYPTO, "₿")
ETH = Currency("ETH", 18, "Ethereum", CurrencyType.CRYPTO, "Ξ")
USDT = Currency("USDT", 6, "Tether", CurrencyType.CRYPTO)

# Commodities
XAU = Currency("XAU", 4, "Gold", CurrencyType.COMMODITY)
XAG = Currency("XAG", 4, "Silver", CurrencyType.COMMODITY)

# Register all predefined currencies
for _currency in (USD, EUR, GBP, CHF, JPY, KWD, BTC, ETH, USDT, XAU, XAG):
    Currency.register(_currency, overwrite=True)
