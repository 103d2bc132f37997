"""Third-party bindings."""
