"""Image gallery: S3-backed image uploads with a Postgres metadata table."""

__version__ = "0.1.0"
