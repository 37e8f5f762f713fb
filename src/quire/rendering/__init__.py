"""Page rendering with Jinja2 templates."""
