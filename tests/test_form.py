"""Tests for FormField, FormGroup and declarative forms."""

import pytest

from formguard.core.exceptions import FieldLookupError
from formguard.core.field import FieldNode, root_of, sibling
from formguard.messages.resolver import MessageResolver
from formguard.validation.dates import date_range, minimum_age
from formguard.validation.form import Form, FormField, FormGroup
from formguard.validation.formats import email
from formguard.validation.images import image_dimensions
from formguard.validation.password import password_match, password_strength
from formguard.validation.rules import required


class SignupForm(Form):
    email = FormField(rules=[required(), email()])
    password = FormField(rules=[required(), password_strength(8)])
    confirmPassword = FormField(rules=[password_match()], label="Confirm password")


class BookingForm(Form):
    startDate = FormField(rules=[required()])
    endDate = FormField(rules=[required()])
    rules = [date_range()]


class TestFormTree:

    def test_nodes_satisfy_field_contract(self):
        group = FormGroup({"name": FormField(value="Ada")})

        assert isinstance(group, FieldNode)
        assert isinstance(group.get("name"), FieldNode)

    def test_children_link_to_parent(self):
        group = FormGroup({"name": FormField(value="Ada")})

        child = group.get("name")
        assert child.parent is group
        assert child.name == "name"
        assert root_of(child) is group

    def test_from_data_builds_nested_groups(self):
        group = FormGroup.from_data({"profile": {"email": "a@b.co"}, "age": 3})

        assert isinstance(group.get("profile"), FormGroup)
        assert group.get("profile.email").value == "a@b.co"
        assert group.value == {"profile": {"email": "a@b.co"}, "age": 3}

    def test_from_data_adds_named_fields(self):
        group = FormGroup.from_data({}, names=["name", "address.city"])

        assert group.get("name").value is None
        assert group.get("address.city") is not None

    def test_unknown_path(self):
        group = FormGroup.from_data({"name": "Ada"})

        assert group.get("missing") is None
        assert group.get("name.inner") is None
        assert "missing" not in group

    def test_sibling_lookup_from_nested_field(self):
        group = FormGroup.from_data({"password": "x", "credentials": {"confirm": "x"}})

        confirm = group.get("credentials.confirm")
        assert sibling(confirm, "password") is group.get("password")

    def test_walk_yields_dotted_paths(self):
        group = FormGroup.from_data({"a": 1, "b": {"c": 2}})

        assert [path for path, _ in group.walk()] == ["a", "b", "b.c"]

    def test_touch_all(self):
        group = FormGroup.from_data({"a": 1, "b": {"c": 2}})

        group.touch_all()

        assert all(node.touched for _, node in group.walk())
        assert group.touched

    def test_field_default(self):
        assert FormField(default="x").value == "x"
        assert FormField(default="x", value="y").value == "y"


class TestForm:

    def test_fields_are_collected(self):
        assert list(SignupForm._fields) == ["email", "password", "confirmPassword"]
        assert SignupForm._fields["email"].label == "Email"
        assert SignupForm._fields["confirmPassword"].label == "Confirm password"

    def test_instances_do_not_share_state(self):
        first = SignupForm(email="a@example.com")
        second = SignupForm()

        assert first["email"].value == "a@example.com"
        assert second["email"].value is None
        assert first["email"] is not SignupForm._fields["email"]

    def test_valid_form(self):
        form = SignupForm({
            "email": "ada@example.com",
            "password": "Secret1!x",
            "confirmPassword": "Secret1!x",
        })

        assert form.validate()
        assert form.is_valid
        assert form.errors == {}

    def test_invalid_form_collects_all_errors(self):
        form = SignupForm({
            "email": "",
            "password": "secret",
            "confirmPassword": "different",
        })

        assert not form.validate()
        assert form.errors == {
            "email": {"required": True},
            "password": {"passwordLength": {"requiredLength": 8}},
            "confirmPassword": {"passwordMismatch": True},
        }

    def test_messages_only_for_touched_fields(self):
        form = SignupForm({"email": "bad", "password": "Secret1!x", "confirmPassword": "x"})
        form.validate()

        assert form.messages() == {}

        form["email"].mark_touched()
        assert form.messages() == {"email": ["Invalid email address."]}

        form.touch_all()
        assert set(form.messages()) == {"email", "confirmPassword"}

    def test_custom_resolver(self):
        resolver = MessageResolver({"invalidEmail": "Check the address"})
        form = SignupForm({"email": "bad"}, resolver=resolver)
        form.validate()
        form.touch_all()

        assert form.messages()["email"] == ["Check the address"]

    def test_group_rules(self):
        form = BookingForm(startDate="2022-01-10", endDate="2022-01-01")

        assert not form.validate()
        assert form.group.errors == {"dateRangeInvalid": True}
        assert form.errors == {"": {"dateRangeInvalid": True}}

        form.touch_all()
        assert form.messages() == {"": ["Start date must not be after end date."]}

    def test_group_rules_are_inherited(self):
        class ExtendedBooking(BookingForm):
            guests = FormField(rules=[required()])

        form = ExtendedBooking(startDate="2022-01-10", endDate="2022-01-01", guests=2)

        assert not form.validate()
        assert list(form.fields) == ["startDate", "endDate", "guests"]
        assert form.errors == {"": {"dateRangeInvalid": True}}

    def test_revalidation_replaces_errors(self):
        form = SignupForm({"email": "bad"})
        form.validate()
        form.bind({"email": "ada@example.com"})
        form.validate()

        assert "email" not in form.errors

    def test_bind_ignores_unknown_keys(self):
        form = SignupForm().bind({"unknown": 1})

        assert "unknown" not in form
        assert form.data == {"email": None, "password": None, "confirmPassword": None}

    def test_strict_bind(self):
        with pytest.raises(FieldLookupError) as exc_info:
            SignupForm().bind({"unknown": 1}, strict=True)

        assert str(exc_info.value) == "Unknown field: 'unknown'"

    def test_getitem_unknown_field(self):
        with pytest.raises(KeyError):
            SignupForm()["unknown"]

    def test_age_field(self, clock):
        class ProfileForm(Form):
            birthday = FormField(rules=[minimum_age(18, clock=clock)])

        form = ProfileForm(birthday="2010-01-01")

        assert not form.validate()
        assert form.errors["birthday"] == {"minimumAge": {"requiredAge": 18, "actualAge": 16}}

    @pytest.mark.asyncio
    async def test_async_form(self, make_png):
        class AvatarForm(Form):
            avatar = FormField(rules=[required(), image_dimensions(100, 100)])

        form = AvatarForm(avatar=make_png(200, 120))

        assert not await form.validate_async()
        assert form.errors == {
            "avatar": {"imageDimensionsExceeded": {"requiredWidth": 100, "requiredHeight": 100}}
        }
