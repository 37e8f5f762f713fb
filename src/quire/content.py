"""Collections of the personal site: what each content directory must contain."""

from quire.core import schema as s
from quire.core.schema import CollectionType, SchemaRegistry


def site_registry() -> SchemaRegistry:
    """Declare the site's collections on a fresh registry."""
    registry = SchemaRegistry()

    registry.define_schema(
        "events",
        {"name": s.string(), "year": s.number(), "location": s.string()},
        type=CollectionType.DATA,
    )
    registry.define_schema(
        "hardware",
        {"title": s.string(), "spec": s.string(), "description": s.string()},
        type=CollectionType.DATA,
    )
    registry.define_schema(
        "posts",
        {
            "title": s.string(),
            "description": s.string(),
            "image": s.optional(s.string()),
            "partner": s.optional(s.string()),
            "source": s.optional(s.string()),
            "pubDate": s.date(),
        },
    )
    registry.define_schema(
        "services",
        {"title": s.string(), "description": s.string()},
        type=CollectionType.DATA,
    )
    registry.define_schema(
        "software",
        {"title": s.string(), "description": s.string()},
        type=CollectionType.DATA,
    )
    registry.define_schema(
        "sponsors",
        {"name": s.string(), "logo": s.image(), "website": s.string()},
        type=CollectionType.DATA,
    )
    registry.define_schema(
        "talks",
        {
            "title": s.string(),
            "description": s.string(),
            "type": s.string(),
            "image": s.string(),
            "events": s.array_of(s.reference("events")),
        },
    )
    registry.define_schema(
        "testimonials",
        {
            "name": s.string(),
            "role": s.string(),
            "company": s.string(),
            "avatar": s.string(),
            "content": s.string(),
        },
        type=CollectionType.DATA,
    )

    registry.check_references()
    return registry
