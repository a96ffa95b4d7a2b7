"""
Formguard Validator
===================

Runs rules against fields and collects their errors.

``run_rules`` / ``run_rules_async`` apply a rule list to one field node
and store the merged error mapping on it. ``Validator`` validates a plain
dict of data against per-field rule specs and returns a report.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Union

from formguard.core.exceptions import RuleDefinitionError
from formguard.core.field import FieldNode
from formguard.core.result import ErrorPayload, ValidationResult
from formguard.messages.resolver import MessageResolver, default_resolver
from formguard.utils.logger import get_logger
from formguard.validation import dates, files, formats, password, rules as base
from formguard.validation.rules import Rule

logger = get_logger("formguard.validation")

ErrorMap = Dict[str, ErrorPayload]


def _merge(errors: ErrorMap, result: ValidationResult) -> None:
    if not result.valid:
        errors[result.code.value] = result.payload()


def run_rules(node: FieldNode, rules: Iterable[Rule]) -> Optional[ErrorMap]:
    """
    Run synchronous rules against a field and store the outcome.

    Every rule runs; failures are merged in rule order. The field's
    ``errors`` is replaced with the merged mapping, or None when all pass.

    Raises:
        RuleDefinitionError: If an async rule is passed
    """
    errors: ErrorMap = {}

    for rule in rules:
        if rule.is_async:
            raise RuleDefinitionError(
                f"{type(rule).__name__} is asynchronous; use run_rules_async",
                rule=rule.alias,
            )
        _merge(errors, rule.check(node))

    node.errors = errors or None
    return node.errors


async def run_rules_async(node: FieldNode, rules: Iterable[Rule]) -> Optional[ErrorMap]:
    """Run sync and async rules against a field and store the outcome."""
    errors: ErrorMap = {}

    for rule in rules:
        if rule.is_async:
            result = await rule.check(node)
        else:
            result = rule.check(node)
        _merge(errors, result)

    node.errors = errors or None
    return node.errors


class ValidationError(Exception):
    """
    Validation failed exception.

    Contains the error mapping per field.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        errors: Optional[Dict[str, ErrorMap]] = None,
    ) -> None:
        super().__init__(message)
        self.errors = errors or {}

    def __str__(self) -> str:
        if self.errors:
            lines = [
                f"  - {name}: {', '.join(codes)}"
                for name, codes in self.errors.items()
            ]
            return "Validation failed:\n" + "\n".join(lines)
        return "Validation failed"


@dataclass
class ValidationReport:
    """
    Result of validating a data mapping.

    Contains the validated data and the error mapping of each failing
    field.
    """

    valid: bool
    data: Dict[str, Any] = field(default_factory=dict)
    errors: Dict[str, ErrorMap] = field(default_factory=dict)

    def __bool__(self) -> bool:
        return self.valid

    def has_error(self, name: str, code: Optional[str] = None) -> bool:
        """Check if a field failed, optionally with a specific code."""
        if name not in self.errors:
            return False
        return code is None or str(code) in self.errors[name]

    def messages(
        self,
        resolver: Optional[MessageResolver] = None,
    ) -> Dict[str, List[str]]:
        """Rendered messages per failing field."""
        resolver = resolver or default_resolver
        rendered: Dict[str, List[str]] = {}
        for name, errors in self.errors.items():
            rendered[name] = [
                message
                for message in (resolver.resolve(code, payload) for code, payload in errors.items())
                if message is not None
            ]
        return rendered

    def raise_if_invalid(self) -> None:
        """Raise ValidationError if invalid."""
        if not self.valid:
            raise ValidationError(errors=self.errors)


# Rule spec accepted per field: a rule, a pipe string, or a list of either
RuleSpec = Union[str, Rule, Sequence[Union[str, Rule]]]


def _phone_rule(params: List[str]) -> Rule:
    countries: Dict[str, Callable[[], Rule]] = {
        "ng": formats.nigerian_phone_number,
        "us": formats.us_phone_number,
        "uk": formats.uk_phone_number,
        "gb": formats.uk_phone_number,
        "gh": formats.ghanaian_phone_number,
        "ke": formats.kenyan_phone_number,
        "za": formats.south_african_phone_number,
    }
    return countries[params[0].lower()]()


class Validator:
    """
    Validates a data mapping against per-field rules.

    Example:
        validator = Validator({
            "email": "required|email|email_domain:example.com,gmail.com",
            "password": [required(), password_strength(10)],
            "confirmPassword": "required|password_match",
            "phone": "phone:ng",
        })

        report = validator.validate(request_data)
        if not report:
            print(report.messages())
    """

    # Built-in rule aliases; values take the parsed string params
    RULE_ALIASES: Dict[str, Callable[[List[str]], Rule]] = {
        "required": lambda p: base.required(),
        "min": lambda p: base.min_value(float(p[0])),
        "max": lambda p: base.max_value(float(p[0])),
        "password_strength": lambda p: password.password_strength(int(p[0]) if p else None),
        "strong_password": lambda p: password.strong_password(),
        "password_match": lambda p: password.password_match(*p[:1]),
        "date_range": lambda p: dates.date_range(*p[:2]),
        "minimum_age": lambda p: dates.minimum_age(int(p[0])),
        "maximum_age": lambda p: dates.maximum_age(int(p[0])),
        "file_type": lambda p: files.file_type(p),
        "file_size": lambda p: files.file_size(int(p[0])),
        "url": lambda p: formats.url_validator(),
        "phone": _phone_rule,
        "isbn": lambda p: formats.isbn(),
        "email": lambda p: formats.email(),
        "email_domain": lambda p: formats.email_domain(p),
        "no_whitespace": lambda p: formats.no_whitespace(),
    }

    def __init__(
        self,
        rules: Dict[str, RuleSpec],
        group_rules: Sequence[Rule] = (),
    ) -> None:
        """
        Initialize validator.

        Args:
            rules: Validation rules per field
            group_rules: Rules run against the whole group, reported
                under the ``""`` key

        Raises:
            RuleDefinitionError: If a rule string cannot be parsed
        """
        self.rules: Dict[str, List[Rule]] = {
            name: self._parse_rule_spec(spec) for name, spec in rules.items()
        }
        self.group_rules = list(group_rules)

    def _parse_rule_spec(self, spec: RuleSpec) -> List[Rule]:
        if isinstance(spec, Rule):
            return [spec]

        if isinstance(spec, str):
            return self._parse_string_rules(spec)

        if isinstance(spec, Sequence):
            parsed: List[Rule] = []
            for item in spec:
                parsed.extend(self._parse_rule_spec(item))
            return parsed

        raise RuleDefinitionError(f"Unsupported rule spec: {spec!r}")

    def _parse_string_rules(self, rule_string: str) -> List[Rule]:
        """
        Parse pipe-separated rule string.

        Example: "required|password_strength:8|email_domain:a.com,b.com"
        """
        parsed = []

        for part in rule_string.split("|"):
            part = part.strip()
            if not part:
                continue

            if ":" in part:
                name, params_str = part.split(":", 1)
                params = [p.strip() for p in params_str.split(",")]
            else:
                name, params = part, []

            parsed.append(self._create_rule_from_name(name.strip(), params))

        return parsed

    def _create_rule_from_name(self, name: str, params: List[str]) -> Rule:
        creator = self.RULE_ALIASES.get(name.lower())
        if creator is None:
            raise RuleDefinitionError(f"Unknown rule: {name!r}", rule=name)

        try:
            rule = creator(params)
        except (TypeError, ValueError, IndexError, KeyError) as exc:
            raise RuleDefinitionError(
                f"Invalid parameters for rule {name!r}: {params}", rule=name
            ) from exc

        logger.debug("Parsed rule", rule=name, params=params)
        return rule

    def _build_tree(self, data: Dict[str, Any]):
        from formguard.validation.form import FormGroup

        return FormGroup.from_data(data, names=self.rules.keys())

    def validate(self, data: Dict[str, Any]) -> ValidationReport:
        """
        Validate data synchronously.

        Raises:
            RuleDefinitionError: If any configured rule is asynchronous
        """
        group = self._build_tree(data)
        for name, rules in self.rules.items():
            run_rules(group.get(name), rules)
        run_rules(group, self.group_rules)
        return self._report(group)

    async def validate_async(self, data: Dict[str, Any]) -> ValidationReport:
        """Validate data, awaiting asynchronous rules such as image checks."""
        group = self._build_tree(data)
        for name, rules in self.rules.items():
            await run_rules_async(group.get(name), rules)
        await run_rules_async(group, self.group_rules)
        return self._report(group)

    def _report(self, group) -> ValidationReport:
        errors: Dict[str, ErrorMap] = {}
        validated: Dict[str, Any] = {}

        for name in self.rules:
            node = group.get(name)
            if node.errors:
                errors[name] = dict(node.errors)
            else:
                validated[name] = node.value

        if group.errors:
            errors[""] = dict(group.errors)

        return ValidationReport(valid=not errors, data=validated, errors=errors)


# Convenience functions

def validate(data: Dict[str, Any], rules: Dict[str, RuleSpec]) -> ValidationReport:
    """
    Validate data with rules.

    Example:
        report = validate(
            {"email": "ada@example.com"},
            {"email": "required|email"},
        )
    """
    return Validator(rules).validate(data)


def validate_or_fail(data: Dict[str, Any], rules: Dict[str, RuleSpec]) -> Dict[str, Any]:
    """
    Validate data and raise on failure.

    Returns validated data if successful.

    Raises:
        ValidationError: If validation fails
    """
    report = validate(data, rules)
    report.raise_if_invalid()
    return report.data
