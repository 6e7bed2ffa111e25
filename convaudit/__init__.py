"""convaudit: landing-page conversion audits."""

__version__ = "0.1.0"
