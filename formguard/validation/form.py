"""
Formguard Forms
===============

A concrete field tree and a declarative form built on it.

``FormField`` and ``FormGroup`` implement the FieldNode contract, so every
rule works against them. ``Form`` collects FormField class attributes,
copies them per instance, and runs their rules.

Example:
    class SignupForm(Form):
        email = FormField(rules=[required(), email()])
        password = FormField(rules=[required(), password_strength(8)])
        confirmPassword = FormField(rules=[password_match()])

    form = SignupForm({"email": "ada@example.com", "password": "Secret1!x"})
    form.validate()        # False, confirmPassword differs
    form.touch_all()
    form.messages()        # {"confirmPassword": ["Passwords do not match. ..."]}
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Optional, Union

from formguard.core.exceptions import FieldLookupError
from formguard.messages.resolver import MessageResolver, default_resolver
from formguard.validation.rules import Rule
from formguard.validation.validator import ErrorMap, run_rules, run_rules_async


@dataclass
class FormField:
    """
    Leaf node holding one value.

    Example:
        birthday = FormField(rules=[required(), minimum_age(18)], label="Birthday")
    """

    rules: List[Rule] = field(default_factory=list)
    label: str = ""
    default: Any = None
    value: Any = None
    touched: bool = False
    errors: Optional[ErrorMap] = None
    name: str = ""
    parent: Optional["FormGroup"] = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.value is None and self.default is not None:
            self.value = self.default

    def get(self, name: str) -> None:
        """Leaves have no children."""
        return None

    def mark_touched(self) -> "FormField":
        self.touched = True
        return self

    def copy(self) -> "FormField":
        """Unbound copy of this definition."""
        return FormField(
            rules=list(self.rules),
            label=self.label,
            default=self.default,
            name=self.name,
        )

    def validate(self) -> bool:
        """Run this field's synchronous rules."""
        return run_rules(self, self.rules) is None

    async def validate_async(self) -> bool:
        """Run this field's rules, awaiting asynchronous ones."""
        return await run_rules_async(self, self.rules) is None


FormNode = Union[FormField, "FormGroup"]


class FormGroup:
    """
    Branch node with named children.

    The group's value is the dict of its children's values. Children are
    looked up by name; dotted paths reach into nested groups.
    """

    def __init__(
        self,
        children: Optional[Dict[str, FormNode]] = None,
        rules: Optional[List[Rule]] = None,
        name: str = "",
    ) -> None:
        self.name = name
        self.rules: List[Rule] = list(rules or [])
        self.touched = False
        self.errors: Optional[ErrorMap] = None
        self.parent: Optional[FormGroup] = None
        self._children: Dict[str, FormNode] = {}

        for child_name, child in (children or {}).items():
            self.add(child_name, child)

    @classmethod
    def from_data(
        cls,
        data: Dict[str, Any],
        names: Iterable[str] = (),
    ) -> "FormGroup":
        """
        Build a tree from nested data.

        Dicts become groups, everything else becomes a field. Each of
        ``names`` missing from the data is added as an empty field.
        """
        group = cls()
        for key, value in data.items():
            if isinstance(value, dict):
                group.add(key, cls.from_data(value))
            else:
                group.add(key, FormField(value=value))

        for path in names:
            if group.get(path) is None:
                group._ensure(path)

        return group

    def _ensure(self, path: str) -> FormNode:
        head, _, rest = path.partition(".")
        child = self._children.get(head)

        if not rest:
            if child is None:
                child = self.add(head, FormField())
            return child

        if not isinstance(child, FormGroup):
            child = self.add(head, FormGroup())
        return child._ensure(rest)

    def add(self, name: str, node: FormNode) -> FormNode:
        """Attach a child node under ``name``."""
        node.name = name
        node.parent = self
        self._children[name] = node
        return node

    def get(self, name: str) -> Optional[FormNode]:
        """Get a child by name or dotted path."""
        node: Optional[FormNode] = self
        for part in name.split("."):
            if not isinstance(node, FormGroup):
                return None
            node = node._children.get(part)
            if node is None:
                return None
        return node

    @property
    def value(self) -> Dict[str, Any]:
        return {name: child.value for name, child in self._children.items()}

    @property
    def children(self) -> Dict[str, FormNode]:
        return dict(self._children)

    def __iter__(self) -> Iterator[str]:
        return iter(self._children)

    def __contains__(self, name: str) -> bool:
        return self.get(name) is not None

    def mark_touched(self) -> "FormGroup":
        self.touched = True
        return self

    def touch_all(self) -> "FormGroup":
        """Mark this group and every descendant as touched."""
        self.touched = True
        for child in self._children.values():
            if isinstance(child, FormGroup):
                child.touch_all()
            else:
                child.mark_touched()
        return self

    def walk(self) -> Iterator[tuple]:
        """Yield ``(path, node)`` for every descendant, depth first."""
        for name, child in self._children.items():
            yield name, child
            if isinstance(child, FormGroup):
                for sub_path, node in child.walk():
                    yield f"{name}.{sub_path}", node

    def validate(self) -> bool:
        """Validate children first, then the group's own rules."""
        valid = True
        for child in self._children.values():
            valid = child.validate() and valid
        return run_rules(self, self.rules) is None and valid

    async def validate_async(self) -> bool:
        valid = True
        for child in self._children.values():
            valid = await child.validate_async() and valid
        return await run_rules_async(self, self.rules) is None and valid


class FormMeta(type):
    """Metaclass for Form to collect field definitions."""

    def __new__(
        mcs,
        name: str,
        bases: tuple,
        namespace: dict,
    ) -> "FormMeta":
        fields: Dict[str, FormField] = {}
        rules: List[Rule] = []

        for base in bases:
            if hasattr(base, "_fields"):
                fields.update(base._fields)
            if hasattr(base, "rules"):
                rules = list(base.rules)

        for key, value in list(namespace.items()):
            if isinstance(value, FormField):
                if not value.label:
                    value.label = key.replace("_", " ").title()
                value.name = key
                fields[key] = value

        namespace["_fields"] = fields
        namespace.setdefault("rules", rules)

        return super().__new__(mcs, name, bases, namespace)


class Form(metaclass=FormMeta):
    """
    Base form class.

    Define fields as FormField class attributes and group-level rules in
    ``rules``.

    Example:
        class BookingForm(Form):
            startDate = FormField(rules=[required()])
            endDate = FormField(rules=[required()])
            rules = [date_range()]

        form = BookingForm(startDate="2022-01-10", endDate="2022-01-01")
        form.validate()              # False
        form.group.errors            # {"dateRangeInvalid": True}
    """

    _fields: Dict[str, FormField]
    rules: List[Rule]

    def __init__(
        self,
        data: Optional[Dict[str, Any]] = None,
        resolver: Optional[MessageResolver] = None,
        **kwargs: Any,
    ) -> None:
        self.resolver = resolver or default_resolver
        self.group = FormGroup(rules=list(self.rules))

        for name, definition in self._fields.items():
            self.group.add(name, definition.copy())

        if data:
            self.bind(data)
        if kwargs:
            self.bind(kwargs)

    @property
    def fields(self) -> Dict[str, FormField]:
        return self.group.children

    def bind(self, data: Dict[str, Any], strict: bool = False) -> "Form":
        """
        Bind data to form fields.

        Args:
            data: Values by field name
            strict: Raise for keys that are not fields of this form

        Raises:
            FieldLookupError: In strict mode, for an unknown key
        """
        for name, value in data.items():
            node = self.group.get(name)
            if node is None:
                if strict:
                    raise FieldLookupError(name)
                continue
            node.value = value
        return self

    def validate(self) -> bool:
        """Run every synchronous rule; True if nothing failed."""
        return self.group.validate()

    async def validate_async(self) -> bool:
        """Run every rule, awaiting asynchronous ones."""
        return await self.group.validate_async()

    def touch_all(self) -> "Form":
        self.group.touch_all()
        return self

    @property
    def errors(self) -> Dict[str, ErrorMap]:
        """Stored error mappings of failing fields ("" for the group)."""
        collected = {
            path: dict(node.errors)
            for path, node in self.group.walk()
            if node.errors
        }
        if self.group.errors:
            collected[""] = dict(self.group.errors)
        return collected

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def data(self) -> Dict[str, Any]:
        return self.group.value

    def __getitem__(self, name: str) -> FormNode:
        node = self.group.get(name)
        if node is None:
            raise FieldLookupError(name)
        return node

    def __contains__(self, name: str) -> bool:
        return name in self.group

    def messages(self) -> Dict[str, List[str]]:
        """Visible messages per field; untouched fields are left out."""
        rendered: Dict[str, List[str]] = {}
        for path, node in self.group.walk():
            messages = self.resolver.errors_for(node)
            if messages:
                rendered[path] = messages
        group_messages = self.resolver.errors_for(self.group)
        if group_messages:
            rendered[""] = group_messages
        return rendered
