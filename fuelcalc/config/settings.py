from pydantic_settings import BaseSettings

VAT_RATE = 0.17
EXCISE_PER_LITER = 0.30

# BAM is pegged to EUR; the USD figure is only an estimate.
EUR_FALLBACK_RATE = 1.95583
USD_FALLBACK_RATE = 1.8


class Settings(BaseSettings):
    # Tax rules for domestic traffic
    vat_rate: float = VAT_RATE
    excise_per_liter: float = EXCISE_PER_LITER

    # Home-currency (BAM) fallback rates when an operation carries none
    eur_fallback_rate: float = EUR_FALLBACK_RATE
    usd_fallback_rate: float = USD_FALLBACK_RATE

    # Projection sampling
    lookback_months: int = 3
    sample_cap: int = 10

    autosave_debounce_seconds: float = 1.5

    # Back-office API used by the HTTP history source and preset store
    api_base_url: str = "http://localhost:3001"
    api_token: str = ""
    http_timeout_seconds: float = 10.0

    class Config:
        env_prefix = "FUELCALC_"
        env_file = ".env"
