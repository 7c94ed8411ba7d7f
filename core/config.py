"""Invoice generation configuration."""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field

ENV_PREFIX = "INVOICE_"


class InvoiceConfig(BaseModel):
    """
    Invoice generation configuration.

    Defaults match what a freshly created invoice template uses, so an
    empty environment gives working behavior.
    """

    default_due_days: int = Field(
        default=30,
        description="Due days for invoices generated without a template",
        ge=0,
        le=365,
    )
    number_max_attempts: int = Field(
        default=99,
        description="Candidates a number generator tries before giving up",
        ge=1,
        le=10000,
    )
    number_format: str = Field(
        default="{date:%Y}-{counter:04d}",
        description="Pattern used by the configurable number generator",
        min_length=1,
    )
    database_url: str | None = Field(
        default=None,
        description="PostgreSQL DSN for the invoice repository",
    )


def load_config(env_file: Path | None = None) -> InvoiceConfig:
    """
    Build configuration from INVOICE_* environment variables.

    Args:
        env_file: Optional .env file loaded before reading the environment.
            Values already in the environment take precedence.

    Raises:
        pydantic.ValidationError: If a variable holds an invalid value
    """
    load_dotenv(env_file)

    values = {}
    for name in InvoiceConfig.model_fields:
        raw = os.environ.get(f"{ENV_PREFIX}{name.upper()}")
        if raw is not None:
            values[name] = raw

    return InvoiceConfig.model_validate(values)
