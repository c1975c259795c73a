"""Tests for the built-in field types.

Covers:
- Config defaults and value coercion
- Required checks and per-type validation
- Sanitization
- Serialization and image display data
"""

import pytest

from settings_pages import (
    CheckboxField,
    ErrorKind,
    ImageField,
    MediaAttachment,
    MediaLibrary,
    SelectField,
    TextareaField,
    TextField,
    ValidationResult,
)
from settings_pages.fields.base import is_empty


class TestIsEmpty:
    """Tests for the loose emptiness check."""

    @pytest.mark.parametrize("value", [None, False, 0, 0.0, "", "   ", "0", [], {}])
    def test_empty_values(self, value):
        assert is_empty(value)

    @pytest.mark.parametrize("value", [True, 1, "a", " x ", "00", [0], {"a": 1}])
    def test_non_empty_values(self, value):
        assert not is_empty(value)


class TestFieldBasics:
    """Behaviour shared by every field."""

    def test_defaults_are_merged_into_config(self):
        """Test that type defaults fill in missing options."""
        field = TextField("site_name", {"label": "Site name"})

        assert field.config["label"] == "Site name"
        assert field.config["placeholder"] == ""
        assert field.config["required"] is False

    def test_initial_value_is_coerced_default(self):
        assert TextField("a", {"default": 42}).value == "42"
        assert CheckboxField("b", {"default": 1}).value is True
        assert ImageField("c").value == 0

    def test_config_is_a_copy(self):
        field = TextField("a", {"label": "A"})
        field.config["label"] = "changed"

        assert field.label == "A"

    def test_label_falls_back_to_id(self):
        assert TextField("site_name").label == "site_name"

    def test_set_value_coerces_and_chains(self):
        field = CheckboxField("flag")

        assert field.set_value("yes") is field
        assert field.value is True

    def test_serialize(self):
        """Test the descriptor sent to clients."""
        field = TextareaField("bio", {"label": "Bio"}).set_value("Hello")

        data = field.serialize()

        assert data["id"] == "bio"
        assert data["type"] == "textarea"
        assert data["value"] == "Hello"
        assert data["config"]["rows"] == 5
        assert data["config"]["label"] == "Bio"

    def test_bind_type_changes_reported_type(self):
        field = TextField("color").bind_type("color")

        assert field.type == "color"
        assert field.serialize()["type"] == "color"

    def test_validation_result_helpers(self):
        ok = ValidationResult.ok("a")
        failed = ValidationResult.fail("a", ErrorKind.REQUIRED, "needed")

        assert ok.valid
        assert ok.error is None
        assert not failed.valid
        assert failed.error.kind == ErrorKind.REQUIRED
        assert failed.error.message == "needed"


class TestTextField:
    """Tests for text and textarea fields."""

    def test_required_rejects_empty_and_whitespace(self):
        field = TextField("site_name", {"label": "Site name", "required": True})

        for value in ("", "   ", None):
            result = field.validate(value)
            assert not result.valid
            assert result.error.kind == ErrorKind.REQUIRED
            assert result.error.message == 'The field "Site name" is required.'

    @pytest.mark.parametrize("field_class", [TextField, TextareaField])
    @pytest.mark.parametrize("value", [False, [], {}, "<b></b>", "<script>x()</script>"])
    def test_required_rejects_values_that_sanitize_to_nothing(self, field_class, value):
        field = field_class("site_name", {"label": "Site name", "required": True})

        result = field.validate(value)

        assert field.sanitize(value) == ""
        assert not result.valid
        assert result.error.kind == ErrorKind.REQUIRED

    def test_coerce_matches_sanitize_for_booleans(self):
        field = TextField("flag_text")

        assert field.set_value(True).value == field.sanitize(True) == "1"
        assert field.set_value(False).value == field.sanitize(False) == ""
        assert field.set_value([1, 2]).value == ""

    def test_required_accepts_text(self):
        field = TextField("site_name", {"required": True})

        assert field.validate("My site").valid

    def test_optional_accepts_empty(self):
        assert TextField("tagline").validate("").valid

    def test_validate_does_not_change_value(self):
        field = TextField("site_name", {"default": "Old"})
        field.validate("New")

        assert field.value == "Old"

    def test_sanitize_strips_markup(self):
        field = TextField("name")

        assert field.sanitize("  <b>Hello</b>\n world ") == "Hello world"
        assert field.sanitize("<script>alert(1)</script>Safe") == "Safe"

    def test_textarea_keeps_line_breaks(self):
        field = TextareaField("bio")

        assert field.sanitize("Line one  \r\nLine   two\n") == "Line one\nLine two"

    def test_textarea_defaults(self):
        assert TextareaField("bio").config["rows"] == 5
        assert TextareaField("bio", {"rows": 3}).config["rows"] == 3


IDEMPOTENCE_CASES = [
    ("text", TextField, "<b>Bold</b> %20text"),
    ("text", TextField, " a < b "),
    ("text", TextField, "Tom & Jerry"),
    ("text", TextField, "x%%2020y\nz"),
    ("text", TextField, True),
    ("textarea", TextareaField, "<p>one</p>\r\n\r\n  two   three  "),
    ("textarea", TextareaField, "%3Cscript%3Ealert(1)%3C/script%3E"),
    ("textarea", TextareaField, "a\x00b <style>p{}</style>\tc"),
    ("select", SelectField, "purple"),
    ("select", SelectField, "dark"),
    ("select", SelectField, None),
    ("checkbox", CheckboxField, "false"),
    ("checkbox", CheckboxField, ""),
    ("checkbox", CheckboxField, 0),
    ("image", ImageField, "12px"),
    ("image", ImageField, -5),
    ("image", ImageField, "junk"),
    ("image", ImageField, 7),
]


@pytest.mark.parametrize(
    "field_class, value",
    [(field_class, value) for _, field_class, value in IDEMPOTENCE_CASES],
    ids=[f"{name}-{value!r}" for name, _, value in IDEMPOTENCE_CASES],
)
def test_sanitize_is_idempotent_after_set_value(field_class, value):
    """Sanitizing a stored value a second time changes nothing."""
    field = field_class(
        "field",
        {"default": "light", "options": {"light": "Light", "dark": "Dark"}}
        if field_class is SelectField
        else None,
    )

    once = field.sanitize(field.set_value(value).value)

    assert field.sanitize(once) == once


class TestSelectField:
    """Tests for select fields."""

    @pytest.fixture
    def field(self):
        return SelectField(
            "color_scheme",
            {
                "label": "Color scheme",
                "default": "light",
                "options": {"light": "Light", "dark": "Dark"},
            },
        )

    def test_options_from_list(self):
        field = SelectField("mode", {"options": ["fast", "slow"]})

        assert field.options == {"fast": "fast", "slow": "slow"}

    def test_option_keys_are_strings(self):
        field = SelectField("ttl", {"options": {300: "5 minutes"}})

        assert field.options == {"300": "5 minutes"}
        assert field.validate(300).valid

    def test_valid_choice(self, field):
        assert field.validate("dark").valid
        assert field.sanitize("dark") == "dark"

    def test_invalid_choice(self, field):
        result = field.validate("purple")

        assert not result.valid
        assert result.error.kind == ErrorKind.INVALID_CHOICE

    def test_sanitize_clamps_to_default(self, field):
        assert field.sanitize("purple") == "light"

    def test_empty_optional_is_valid(self, field):
        assert field.validate("").valid
        assert field.validate(None).valid

    def test_empty_required_is_required_error(self):
        field = SelectField("mode", {"required": True, "options": ["a", "b"]})

        result = field.validate("")

        assert result.error.kind == ErrorKind.REQUIRED

    def test_zero_option_is_not_treated_as_empty(self):
        field = SelectField("level", {"required": True, "options": ["0", "1"]})

        assert field.validate("0").valid


class TestCheckboxField:
    """Tests for checkbox fields."""

    def test_always_valid(self):
        field = CheckboxField("flag")

        for value in (None, "", "anything", 0, True):
            assert field.validate(value).valid

    def test_truthiness_coercion(self):
        field = CheckboxField("flag")

        assert field.sanitize("false") is True
        assert field.sanitize("") is False
        assert field.sanitize(None) is False
        assert field.sanitize(1) is True


class TestImageField:
    """Tests for image fields."""

    @pytest.fixture
    def library(self):
        return MediaLibrary(
            [
                MediaAttachment(
                    id=7,
                    url="https://cdn.example.com/logo.png",
                    mime_type="image/png",
                    width=300,
                    height=120,
                    filesize=2048,
                ),
                MediaAttachment(id=9, url="https://cdn.example.com/doc.pdf", mime_type="application/pdf"),
            ]
        )

    def test_defaults(self):
        config = ImageField("logo").config

        assert config["button_text"] == "Select Image"
        assert config["remove_text"] == "Remove Image"
        assert config["multiple"] is False
        assert config["file_type"] == "image"

    def test_known_image_is_valid(self, library):
        field = ImageField("logo").use_media(library)

        assert field.validate(7).valid
        assert field.validate("7").valid

    def test_non_image_attachment_is_invalid(self, library):
        field = ImageField("logo", {"label": "Logo"}).use_media(library)

        result = field.validate(9)

        assert result.error.kind == ErrorKind.INVALID_IMAGE
        assert result.error.message == 'Invalid image for field "Logo".'

    def test_unknown_id_is_invalid(self, library):
        field = ImageField("logo").use_media(library)

        assert field.validate(123).error.kind == ErrorKind.INVALID_IMAGE
        assert field.validate("abc").error.kind == ErrorKind.INVALID_IMAGE

    def test_without_media_library_rejects_ids(self):
        assert not ImageField("logo").validate(7).valid

    def test_empty_value(self, library):
        optional = ImageField("logo").use_media(library)
        required = ImageField("logo", {"required": True}).use_media(library)

        assert optional.validate(0).valid
        assert optional.validate("").valid
        assert required.validate(0).error.kind == ErrorKind.REQUIRED

    def test_sanitize_is_absint(self):
        field = ImageField("logo")

        assert field.sanitize("12") == 12
        assert field.sanitize(-5) == 5
        assert field.sanitize("junk") == 0

    def test_serialize_does_not_include_image_data(self, library):
        field = ImageField("logo").use_media(library).set_value(7)

        assert "image_data" not in field.serialize()

    def test_resolve_display_data(self, library):
        field = ImageField("logo").set_value(7)

        data = field.resolve_display_data(library)["image_data"]

        assert data["id"] == 7
        assert data["url"] == "https://cdn.example.com/logo.png"
        assert data["width"] == 300
        assert data["filename"] == "logo.png"
        assert data["filesize"] == "2 KB"

    def test_resolve_display_data_without_image(self, library):
        assert ImageField("logo").resolve_display_data(library) == {}
        assert ImageField("logo").set_value(9).resolve_display_data(library) == {}
        assert ImageField("logo").set_value(7).resolve_display_data(None) == {}
