"""Example pages served by the development server."""

from .builder import SettingsPages


def register_demo_pages(pages: SettingsPages) -> None:
    """Register the example "settings" and "advanced" pages.

    Args:
        pages: Container to register into.
    """
    pages.register_page(
        "example-settings",
        title="Example settings",
        menu_title="Example",
        capability="manage_options",
    )
    pages.add_field(
        "example-settings",
        "text",
        "site_name",
        label="Site name",
        description="Enter the name of your site",
        default="My site",
        required=True,
    )
    pages.add_field(
        "example-settings",
        "textarea",
        "site_description",
        label="Site description",
        description="Describe your site in a few words",
        placeholder="A fantastic site...",
        rows=4,
    )
    pages.add_field(
        "example-settings",
        "select",
        "color_scheme",
        label="Color scheme",
        description="Choose the color scheme of your site",
        default="light",
        options={"light": "Light", "dark": "Dark", "auto": "Automatic", "custom": "Custom"},
    )
    pages.add_field(
        "example-settings",
        "checkbox",
        "enable_features",
        label="Enable advanced features",
        description="Check this box to enable advanced features",
        default=False,
    )
    pages.add_field(
        "example-settings",
        "image",
        "site_logo",
        label="Site logo",
        description="Logo displayed in the header",
    )
    pages.add_field(
        "example-settings",
        "text",
        "api_key",
        label="API key",
        description="API key for external services",
        placeholder="sk-...",
    )

    pages.register_page(
        "example-advanced",
        title="Advanced settings",
        capability="manage_options",
    )
    pages.add_field(
        "example-advanced",
        "select",
        "cache_duration",
        label="Cache duration",
        description="How long responses are cached",
        default="3600",
        options={"300": "5 minutes", "1800": "30 minutes", "3600": "1 hour", "86400": "24 hours"},
    )
    pages.add_field(
        "example-advanced",
        "checkbox",
        "debug_mode",
        label="Debug mode",
        description="Enable debug mode (not for production)",
        default=False,
    )
