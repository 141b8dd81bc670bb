"""QR code encoding, PNG/SVG/PDF/terminal rendering and small concurrency helpers."""

__version__ = "2.0.0"