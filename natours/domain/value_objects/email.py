"""Email value object"""

from dataclasses import dataclass

from email_validator import validate_email, EmailNotValidError

from ..exceptions import ValidationFailure


@dataclass(frozen=True)
class Email:
    value: str

    def __post_init__(self):
        raw = (self.value or "").strip()
        if not raw:
            raise ValidationFailure("Please provide your email")
        try:
            validate_email(raw, check_deliverability=False)
        except EmailNotValidError:
            raise ValidationFailure("Please provide a valid email")
        # frozen dataclass, so normalise through object.__setattr__
        object.__setattr__(self, "value", raw.lower())

    def __str__(self) -> str:
        return self.value
