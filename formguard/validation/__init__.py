"""
Formguard Validation
====================

Composable field and form validation rules.

Features:
- Password strength and cross-field password match
- Date ranges and age bounds
- File type/size and async image dimension checks
- URL, phone number, ISBN, email and whitespace formats
- Rule engine and declarative forms
"""

from formguard.validation.rules import (
    Rule,
    AsyncRule,
    Required,
    MinValue,
    MaxValue,
    required,
    min_value,
    max_value,
)
from formguard.validation.password import (
    PasswordStrength,
    StrongPassword,
    PasswordMatch,
    PasswordMatchGroup,
    password_strength,
    strong_password,
    password_match,
    password_match_group,
)
from formguard.validation.dates import (
    DateRange,
    MinimumAge,
    MaximumAge,
    date_range,
    minimum_age,
    maximum_age,
)
from formguard.validation.files import (
    UploadedFile,
    FileType,
    FileSize,
    FileValidator,
    file_type,
    file_size,
    file_validator,
)
from formguard.validation.images import (
    ImageDecoder,
    PillowDecoder,
    ImageDimensions,
    image_dimensions,
)
from formguard.validation.formats import (
    PatternRule,
    Url,
    PhoneNumber,
    Isbn,
    Email,
    EmailDomain,
    NoWhitespace,
    url_validator,
    nigerian_phone_number,
    us_phone_number,
    uk_phone_number,
    ghanaian_phone_number,
    kenyan_phone_number,
    south_african_phone_number,
    isbn,
    email,
    email_domain,
    no_whitespace,
)
from formguard.validation.validator import (
    Validator,
    ValidationError,
    ValidationReport,
    run_rules,
    run_rules_async,
    validate,
    validate_or_fail,
)
from formguard.validation.form import (
    Form,
    FormField,
    FormGroup,
)

__all__ = [
    # Base
    "Rule",
    "AsyncRule",
    "Required",
    "MinValue",
    "MaxValue",
    "required",
    "min_value",
    "max_value",
    # Passwords
    "PasswordStrength",
    "StrongPassword",
    "PasswordMatch",
    "PasswordMatchGroup",
    "password_strength",
    "strong_password",
    "password_match",
    "password_match_group",
    # Dates
    "DateRange",
    "MinimumAge",
    "MaximumAge",
    "date_range",
    "minimum_age",
    "maximum_age",
    # Files
    "UploadedFile",
    "FileType",
    "FileSize",
    "FileValidator",
    "file_type",
    "file_size",
    "file_validator",
    # Images
    "ImageDecoder",
    "PillowDecoder",
    "ImageDimensions",
    "image_dimensions",
    # Formats
    "PatternRule",
    "Url",
    "PhoneNumber",
    "Isbn",
    "Email",
    "EmailDomain",
    "NoWhitespace",
    "url_validator",
    "nigerian_phone_number",
    "us_phone_number",
    "uk_phone_number",
    "ghanaian_phone_number",
    "kenyan_phone_number",
    "south_african_phone_number",
    "isbn",
    "email",
    "email_domain",
    "no_whitespace",
    # Engine
    "Validator",
    "ValidationError",
    "ValidationReport",
    "run_rules",
    "run_rules_async",
    "validate",
    "validate_or_fail",
    # Forms
    "Form",
    "FormField",
    "FormGroup",
]
