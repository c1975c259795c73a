"""Tests for SettingsService and validate_and_sanitize.

Covers:
- Reading stored settings and hydrating field values
- Validation of submitted values against a page
- Saving with filters and saved listeners
"""

import logging

import pytest

from settings_pages import ErrorKind, SettingsPages, validate_and_sanitize


class TestValidateAndSanitize:
    """Tests for validate_and_sanitize."""

    def test_valid_submission(self, settings_pages):
        page = settings_pages.pages.get_page("general")

        sanitized, errors = validate_and_sanitize(
            page,
            {
                "site_name": " <b>My site</b> ",
                "tagline": "Line one\r\nLine two",
                "color_scheme": "dark",
                "enabled": 1,
                "logo": "7",
            },
        )

        assert errors == {}
        assert sanitized == {
            "site_name": "My site",
            "tagline": "Line one\nLine two",
            "color_scheme": "dark",
            "enabled": True,
            "logo": 7,
        }

    def test_missing_values_are_validated(self, settings_pages):
        """Test that every declared field is checked, submitted or not."""
        page = settings_pages.pages.get_page("general")

        sanitized, errors = validate_and_sanitize(page, {})

        assert list(errors) == ["site_name"]
        assert errors["site_name"].kind == ErrorKind.REQUIRED
        assert sanitized["enabled"] is False
        assert sanitized["color_scheme"] == "light"
        assert sanitized["logo"] == 0

    def test_unknown_keys_are_dropped(self, settings_pages):
        page = settings_pages.pages.get_page("p1")

        sanitized, errors = validate_and_sanitize(page, {"flag": True, "extra": "x"})

        assert errors == {}
        assert sanitized == {"flag": True}

    def test_collects_every_error(self, settings_pages):
        page = settings_pages.pages.get_page("general")

        _, errors = validate_and_sanitize(
            page, {"site_name": "", "color_scheme": "purple", "logo": 9}
        )

        assert errors["site_name"].kind == ErrorKind.REQUIRED
        assert errors["color_scheme"].kind == ErrorKind.INVALID_CHOICE
        assert errors["logo"].kind == ErrorKind.INVALID_IMAGE

    def test_does_not_change_field_values(self, settings_pages):
        page = settings_pages.pages.get_page("p1")

        validate_and_sanitize(page, {"flag": True})

        assert page.get_field("flag").value is False


class TestReading:
    """Tests for get_settings and get_setting."""

    def test_nothing_stored(self, settings_pages):
        assert settings_pages.service.get_settings("general") == {}
        assert not settings_pages.service.has_settings("general")

    def test_unregistered_page_reads_storage(self, settings_pages):
        settings_pages.store.save("legacy", {"a": 1})

        assert settings_pages.service.get_settings("legacy") == {"a": 1}

    def test_get_settings_hydrates_fields(self, settings_pages):
        settings_pages.store.save("general", {"site_name": "Stored", "enabled": True})

        settings_pages.service.get_settings("general")

        page = settings_pages.pages.get_page("general")
        assert page.get_field("site_name").value == "Stored"
        assert page.get_field("enabled").value is True
        assert page.get_field("tagline").value == ""

    def test_stored_blob_returned_as_is(self, settings_pages):
        """Test that stale keys survive and missing keys are not defaulted."""
        settings_pages.store.save("general", {"site_name": "Stored", "removed_field": 1})

        settings = settings_pages.service.get_settings("general")

        assert settings == {"site_name": "Stored", "removed_field": 1}

    def test_get_setting_default(self, settings_pages):
        settings_pages.store.save("general", {"site_name": "Stored"})

        assert settings_pages.get_setting("general", "site_name") == "Stored"
        assert settings_pages.get_setting("general", "enabled", "fallback") == "fallback"
        assert settings_pages.get_setting("missing", "anything") is None


class TestSaving:
    """Tests for save_settings and its hooks."""

    def test_checkbox_page_round_trip(self, settings_pages):
        """Test the single-checkbox page from registration to read-back."""
        assert settings_pages.get_setting("p1", "flag", False) is False

        page = settings_pages.pages.get_page("p1")
        sanitized, errors = validate_and_sanitize(page, {"flag": True})
        assert errors == {}
        assert settings_pages.service.save_settings("p1", sanitized)

        assert settings_pages.get_settings("p1") == {"flag": True}

    def test_save_replaces_blob(self, settings_pages):
        service = settings_pages.service
        service.save_settings("general", {"site_name": "A", "enabled": True})

        service.save_settings("general", {"site_name": "B"})

        assert service.get_settings("general") == {"site_name": "B"}

    def test_save_unchanged_returns_true(self, settings_pages):
        service = settings_pages.service
        service.save_settings("p1", {"flag": True})

        assert service.save_settings("p1", {"flag": True}) is True

    def test_before_save_filter(self, settings_pages):
        service = settings_pages.service

        def add_marker(values, page_id):
            return {**values, "saved_by": page_id}

        service.add_before_save_filter(add_marker)
        service.save_settings("p1", {"flag": True})

        assert service.get_settings("p1") == {"flag": True, "saved_by": "p1"}

        service.remove_before_save_filter(add_marker)
        service.save_settings("p1", {"flag": False})

        assert service.get_settings("p1") == {"flag": False}

    def test_before_save_filter_must_return_dict(self, settings_pages):
        settings_pages.service.add_before_save_filter(lambda values, page_id: None)

        with pytest.raises(TypeError):
            settings_pages.service.save_settings("p1", {"flag": True})

        assert not settings_pages.service.has_settings("p1")

    def test_saved_listener(self, settings_pages):
        events = []
        settings_pages.service.on_saved(lambda values, page_id: events.append((page_id, values)))

        settings_pages.service.save_settings("p1", {"flag": True})

        assert events == [("p1", {"flag": True})]

    def test_remove_saved_listener(self, settings_pages):
        events = []

        def listener(values, page_id):
            events.append(page_id)

        settings_pages.service.on_saved(listener)
        settings_pages.service.remove_saved_listener(listener)
        settings_pages.service.save_settings("p1", {"flag": True})

        assert events == []

    def test_listener_error_is_logged(self, settings_pages, caplog):
        def broken(values, page_id):
            raise RuntimeError("boom")

        events = []
        settings_pages.service.on_saved(broken)
        settings_pages.service.on_saved(lambda values, page_id: events.append(page_id))

        with caplog.at_level(logging.WARNING, logger="settings_pages.service"):
            assert settings_pages.service.save_settings("p1", {"flag": True})

        assert events == ["p1"]
        assert "Settings saved listener error: boom" in caplog.text

    def test_rejected_write(self, settings_pages, backend, monkeypatch, caplog):
        events = []
        settings_pages.service.on_saved(lambda values, page_id: events.append(page_id))
        monkeypatch.setattr(backend, "set", lambda key, value: False)

        with caplog.at_level(logging.ERROR, logger="settings_pages.service"):
            assert settings_pages.service.save_settings("p1", {"flag": True}) is False

        assert events == []
        assert "Store rejected settings for page 'p1'" in caplog.text

    def test_delete_settings(self, settings_pages):
        service = settings_pages.service
        service.save_settings("p1", {"flag": True})

        assert service.delete_settings("p1")
        assert service.get_settings("p1") == {}
        assert not service.delete_settings("p1")


class TestIsolation:
    """Containers share no state."""

    def test_separate_containers(self):
        first = SettingsPages()
        second = SettingsPages()
        first.register_page("general")

        assert first.pages.has_page("general")
        assert not second.pages.has_page("general")
