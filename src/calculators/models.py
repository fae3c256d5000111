"""Pydantic models for calculator inputs and results."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

# --- Inputs ---


class TaxInput(BaseModel):
    """A contractor payment to withhold taxes from."""

    model_config = ConfigDict(frozen=True)

    gross_amount: Decimal
    dependents: int = 0
    service_tax_rate: Decimal = Decimal("5")
    include_service_tax: bool = True


class InversionRequest(BaseModel):
    """Target net payment to solve the gross amount for."""

    model_config = ConfigDict(frozen=True)

    target_net_amount: Decimal
    dependents: int = 0
    service_tax_rate: Decimal = Decimal("5")
    include_service_tax: bool = True
    tolerance: Decimal = Decimal("0.01")
    max_iterations: int = 100


# --- Component results ---


class ComponentResult(BaseModel):
    """Result of one withholding component."""

    model_config = ConfigDict(frozen=True)

    amount: Decimal
    rate_percent: Decimal  # nominal rate applied
    effective_rate_percent: Decimal  # amount / gross * 100
    taxable_base: Decimal


class ContributionResult(ComponentResult):
    """Social security contribution with its floor and ceiling."""

    ceiling: Decimal
    minimum_wage: Decimal
    ceiling_applied: bool = False
    floor_applied: bool = False


class IncomeTaxResult(ComponentResult):
    """Progressive income tax with its deduction breakdown."""

    dependents: int
    contribution_deduction: Decimal
    dependents_deduction: Decimal
    subtracted_amount: Decimal


class ServiceTaxResult(ComponentResult):
    """Municipal service tax; ``included`` is False for the zero placeholder."""

    included: bool = True


# --- Aggregates ---


class TaxSummary(BaseModel):
    """All withholdings for one gross payment."""

    model_config = ConfigDict(frozen=True)

    gross_amount: Decimal
    dependents: int
    contribution: ContributionResult
    income_tax: IncomeTaxResult
    service_tax: ServiceTaxResult
    total_tax: Decimal
    net_amount: Decimal
    total_tax_percent: Decimal


class InversionResult(BaseModel):
    """Outcome of solving the gross amount for a target net amount."""

    model_config = ConfigDict(frozen=True)

    converged: bool
    gross_amount_found: Decimal
    target_net_amount: Decimal
    actual_net_amount: Decimal
    net_difference: Decimal
    iterations_used: int
    summary: TaxSummary
    warning: str | None = None


class ValidationResult(BaseModel):
    """Outcome of a single input range check."""

    valid: bool
    message: str = ""


class CacheStats(BaseModel):
    """Snapshot of the summary cache."""

    size: int
    capacity: int
    hits: int = 0
    misses: int = 0
    keys: list[str] = Field(default_factory=list)
