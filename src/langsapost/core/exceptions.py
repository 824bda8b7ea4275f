class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a requested record or artifact does not exist."""


class DuplicatePayrollError(DomainError):
    """Raised when a payroll already exists for an (author, month, year)."""

    def __init__(self, author_id: int, month: int, year: int):
        super().__init__(f"Payroll already exists for author {author_id} in {year}-{month:02d}")
        self.author_id = author_id
        self.month = month
        self.year = year


class RenderError(DomainError):
    """Raised when a payslip document cannot be rendered."""


class PayrollRunInProgressError(DomainError):
    """Raised when a payroll run is started while another one is running."""
