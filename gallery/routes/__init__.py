"""HTTP routes, auto-discovered by gallery.core.route_discovery."""
