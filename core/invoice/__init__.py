"""Invoice generation: build context, calculators and number generators."""

from core.invoice.calculator import (
    AbstractCalculator,
    ActivityInvoiceCalculator,
    DefaultCalculator,
    InvoiceItem,
    ProjectInvoiceCalculator,
    ShortInvoiceCalculator,
    UserInvoiceCalculator,
    create_calculator,
)
from core.invoice.model import InvoiceModel
from core.invoice.number_generator import (
    ConfigurableNumberGenerator,
    DateNumberGenerator,
    InvoiceNumberLookup,
    NumberGenerator,
    create_number_generator,
)
from core.invoice.query import InvoiceQuery

__all__ = [
    # Model
    "InvoiceModel", "InvoiceQuery",
    # Calculators
    "AbstractCalculator", "DefaultCalculator", "ShortInvoiceCalculator",
    "UserInvoiceCalculator", "ActivityInvoiceCalculator", "ProjectInvoiceCalculator",
    "InvoiceItem", "create_calculator",
    # Number generators
    "InvoiceNumberLookup", "NumberGenerator", "DateNumberGenerator",
    "ConfigurableNumberGenerator", "create_number_generator",
]
