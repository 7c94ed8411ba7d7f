"""
Invoice number generators.

A generator is bound to one InvoiceModel and derives a number from its
invoice date. Uniqueness is checked against already persisted invoices via
an InvoiceNumberLookup; the check alone is not race free, so storage must
also enforce a unique constraint on the number.
"""

import logging
from itertools import count
from typing import TYPE_CHECKING, Iterable, Iterator, Protocol

from core.exceptions import DuplicateInvoiceNumberError, UnknownNumberGeneratorError
from utils.timezone import now_utc

if TYPE_CHECKING:
    from core.invoice.model import InvoiceModel

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 99
DATE_FORMAT = "%y%m%d"


class InvoiceNumberLookup(Protocol):
    """Anything that can tell whether an invoice number is already taken."""

    def has_invoice(self, invoice_number: str) -> bool:
        ...


class NumberGenerator:
    """Base generator: walks candidate numbers until one is free."""

    name = ""

    def __init__(self, repository: InvoiceNumberLookup, max_attempts: int = DEFAULT_MAX_ATTEMPTS):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.repository = repository
        self.max_attempts = max_attempts
        self._model: "InvoiceModel | None" = None

    def set_model(self, model: "InvoiceModel") -> None:
        """Bind the generator to the invoice model it numbers."""
        self._model = model

    @property
    def model(self) -> "InvoiceModel":
        if self._model is None:
            raise RuntimeError(f"Number generator {self.name!r} is not bound to an invoice model")
        return self._model

    def candidates(self) -> Iterable[str]:
        """Candidate numbers in order of preference."""
        raise NotImplementedError

    def generate(self) -> str:
        """
        First candidate not used by a persisted invoice.

        Raises:
            DuplicateInvoiceNumberError: If max_attempts candidates are all taken
        """
        candidate = None
        for attempt, candidate in enumerate(self.candidates(), start=1):
            if not self.repository.has_invoice(candidate):
                return candidate

            logger.debug("Invoice number %s is taken (attempt %d)", candidate, attempt)
            if attempt >= self.max_attempts:
                break

        raise DuplicateInvoiceNumberError(candidate)


class DateNumberGenerator(NumberGenerator):
    """
    Invoice date as yymmdd, e.g. 261019.

    Further invoices on the same date get a suffix: 261019-2, 261019-3, ...
    """

    name = "date"

    def candidates(self) -> Iterator[str]:
        base = self.model.invoice_date.strftime(DATE_FORMAT)
        yield base
        for sequence in count(2):
            yield f"{base}-{sequence}"


class ConfigurableNumberGenerator(NumberGenerator):
    """
    Number built from a str.format pattern.

    The pattern may use `date` (the invoice date, supports strftime specs)
    and `counter` (starting at 1, raised while the number is taken), e.g.
    "{date:%Y}-{counter:04d}" gives 2026-0001, 2026-0002, ...

    Without a counter field there is exactly one candidate.
    """

    name = "configurable"

    def __init__(
        self,
        repository: InvoiceNumberLookup,
        pattern: str = "{date:%Y}-{counter:04d}",
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ):
        super().__init__(repository, max_attempts)
        self.pattern = pattern
        self._validate_pattern()

    def _validate_pattern(self) -> None:
        try:
            self.pattern.format(date=now_utc(), counter=1)
        except (AttributeError, KeyError, IndexError, ValueError) as e:
            raise ValueError(f"Invalid invoice number pattern {self.pattern!r}: {e}") from e

    @property
    def has_counter(self) -> bool:
        return "{counter" in self.pattern

    def candidates(self) -> Iterator[str]:
        invoice_date = self.model.invoice_date
        if not self.has_counter:
            yield self.pattern.format(date=invoice_date, counter=1)
            return

        for counter in count(1):
            yield self.pattern.format(date=invoice_date, counter=counter)


NUMBER_GENERATORS: dict[str, type[NumberGenerator]] = {
    generator.name: generator
    for generator in (DateNumberGenerator, ConfigurableNumberGenerator)
}


def create_number_generator(
    name: str,
    repository: InvoiceNumberLookup,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    pattern: str | None = None,
) -> NumberGenerator:
    """
    Instantiate a number generator by its template name.

    `pattern` only applies to the configurable generator.

    Raises:
        UnknownNumberGeneratorError: If no generator is registered under name
    """
    if name not in NUMBER_GENERATORS:
        raise UnknownNumberGeneratorError(f"Unknown invoice number generator: {name}")

    if name == ConfigurableNumberGenerator.name and pattern is not None:
        return ConfigurableNumberGenerator(repository, pattern=pattern, max_attempts=max_attempts)
    return NUMBER_GENERATORS[name](repository, max_attempts=max_attempts)
