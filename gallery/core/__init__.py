"""
Core infrastructure components for the application.

This package contains configuration loading, secrets, the database pool,
object storage, dependency injection components, and route discovery.
Import from the submodules directly; the configuration module depends on
``gallery.core.config_loader``, so this package must stay import-free.
"""
