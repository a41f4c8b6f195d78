from decimal import Decimal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "FINDASH_"}

    # Amortization
    balance_epsilon: Decimal = Decimal("0.01")  # Loan is closed once balance <= this
    amortization_grace_months: int = 120  # Safety bound past the contractual term
    default_penalty_rate: Decimal = Decimal("1")  # Percent of prepaid amount

    # Display currency (fixed rate, never applied to engine values)
    secondary_currency_code: str = "INR"
    secondary_currency_rate: Decimal = Decimal("89")

    # App
    debug: bool = False
    log_level: str = "INFO"


settings = Settings()
