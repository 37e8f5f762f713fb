from pathlib import Path, PurePosixPath

import pytest
from hypothesis import given
from hypothesis import strategies as st

from quire.content import site_registry
from quire.core.exceptions import SlugCollisionError
from quire.core.loader import CollectionLoader
from quire.core.routes import output_path, output_paths, project_routes, route_url
from quire.core.types import Record
from quire.core.utils import derive_id


def _post(slug: str, source: str) -> Record:
    return Record(collection="posts", id=slug, slug=slug, source=Path(source), data={"title": slug})


def test_project_routes_maps_slug_to_record():
    first, second = _post("a", "posts/a.md"), _post("b", "posts/b.md")

    routes = project_routes([first, second])

    assert routes == {"a": first, "b": second}


def test_duplicate_slug_raises_with_both_sources():
    with pytest.raises(SlugCollisionError) as excinfo:
        project_routes([_post("hello", "one/posts/hello.md"), _post("hello", "two/posts/hello.md")])

    assert excinfo.value.slug == "hello"
    assert [str(source) for source in excinfo.value.sources] == ["one/posts/hello.md", "two/posts/hello.md"]


def test_identical_filenames_in_two_roots_collide(tmp_path, write):
    post = """
    ---
    title: Hello
    description: d
    pubDate: 2024-01-01
    ---
    """
    write(tmp_path / "root-a", "posts/hello.md", post)
    write(tmp_path / "root-b", "posts/hello.md", post)
    posts = CollectionLoader(site_registry(), [tmp_path / "root-a", tmp_path / "root-b"]).load_collection("posts")

    with pytest.raises(SlugCollisionError):
        project_routes(posts)


def test_data_records_are_not_routable():
    event = Record(collection="events", id="phpuk", source=Path("events/phpuk.yaml"))

    with pytest.raises(ValueError, match="cannot be routed"):
        project_routes([event])


@pytest.mark.parametrize(
    ("prefix", "slug", "url", "path"),
    [
        ("articles", "hello-world", "/articles/hello-world/", "articles/hello-world/index.html"),
        ("/talks/", "2024/launch", "/talks/2024/launch/", "talks/2024/launch/index.html"),
        ("", "about", "/about/", "about/index.html"),
    ],
)
def test_route_url_and_output_path(prefix, slug, url, path):
    assert route_url(prefix, slug) == url
    assert output_path(prefix, slug) == PurePosixPath(path)


def test_output_paths_across_collections():
    talk = Record(collection="talks", id="a", slug="a", source=Path("talks/a.md"))
    post = _post("a", "posts/a.md")

    paths = output_paths({"posts": {"a": post}, "talks": {"a": talk}}, {"posts": "articles", "talks": "talks"})

    assert paths == {
        PurePosixPath("articles/a/index.html"): post,
        PurePosixPath("talks/a/index.html"): talk,
    }


def test_output_paths_detects_cross_collection_collision():
    talk = Record(collection="talks", id="a", slug="a", source=Path("talks/a.md"))

    with pytest.raises(SlugCollisionError):
        output_paths({"posts": {"a": _post("a", "posts/a.md")}, "talks": {"a": talk}}, {"posts": "x", "talks": "x"})


_segment = st.text(alphabet="abcdefghijklmnopqrstuvwxyz0123456789-_", min_size=1, max_size=12).filter(
    lambda s: s.lower() != "index"
)


@given(st.sets(st.lists(_segment, min_size=1, max_size=3).map(tuple), min_size=1, max_size=20))
def test_distinct_paths_project_to_distinct_slugs(paths):
    records = []
    for parts in paths:
        slug = derive_id(PurePosixPath(*parts).with_suffix(".md"))
        records.append(Record(collection="posts", id=slug, slug=slug, source=Path(*parts)))

    routes = project_routes(records)

    assert len(set(routes)) == len(records)
    for parts, record in zip(paths, records):
        assert routes[derive_id(PurePosixPath(*parts).with_suffix(".md"))] is record
