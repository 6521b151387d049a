"""
Email value object.

Normalizes addresses to trimmed lower-case form and rejects malformed
or disposable addresses at construction time.
"""

import re
from dataclasses import dataclass
from typing import Self

from ..exceptions import ValidationError
from ..value_object import ValueObject

_EMAIL_PATTERN = re.compile(r"^[a-z0-9.!#$%&'*+/=?^_`{|}~-]+@[a-z0-9-]+(\.[a-z0-9-]+)+$")
_MAX_EMAIL_LENGTH = 254

BLOCKED_DOMAINS = frozenset(
    {
        "10minutemail.com",
        "tempmail.org",
        "guerrillamail.com",
        "mailinator.com",
        "temp-mail.org",
        "throwaway.email",
    }
)


@dataclass(frozen=True)
class Email(ValueObject):
    """Validated, normalized email address."""

    value: str

    def __post_init__(self) -> None:
        normalized = self.value.strip().lower() if isinstance(self.value, str) else ""
        if not normalized:
            raise ValidationError("Email cannot be empty", field="email")
        if len(normalized) > _MAX_EMAIL_LENGTH or not _EMAIL_PATTERN.match(normalized):
            raise ValidationError("Invalid email format provided", field="email", value=self.value)
        if normalized.split("@", 1)[1] in BLOCKED_DOMAINS:
            raise ValidationError(
                "Temporary email addresses are not allowed", field="email", value=self.value
            )
        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_parts(cls, local_part: str, domain: str) -> Self:
        return cls(f"{local_part}@{domain}")

    @property
    def local_part(self) -> str:
        return self.value.split("@", 1)[0]

    @property
    def domain(self) -> str:
        return self.value.split("@", 1)[1]

    @property
    def top_level_domain(self) -> str:
        return self.domain.rsplit(".", 1)[-1]

    def domain_without_subdomain(self) -> str:
        return ".".join(self.domain.split(".")[-2:])

    def is_same_domain(self, other: "Email") -> bool:
        return self.domain == other.domain

    def is_same_main_domain(self, other: "Email") -> bool:
        return self.domain_without_subdomain() == other.domain_without_subdomain()

    def obfuscate(self) -> str:
        """Mask the local part, keeping its first and last character."""
        local = self.local_part
        if len(local) <= 2:  # noqa: PLR2004
            masked = "*" * len(local)
        else:
            masked = f"{local[0]}{'*' * (len(local) - 2)}{local[-1]}"
        return f"{masked}@{self.domain}"
