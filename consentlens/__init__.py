"""consentlens: cookie-banner detection and privacy policy scoring."""

__version__ = "0.1.0"
