from pathlib import Path

from quire.core.rss import feed_to_xml_string
from quire.core.types import FeedDocument


class RssSink:
    """A sink for writing the syndication feed to an XML file."""

    def __init__(self, output_path: Path):
        self.output_path = Path(output_path)

    def publish(self, feed: FeedDocument) -> None:
        """Renders the feed to XML and writes it to the output path."""
        xml_content = feed_to_xml_string(feed)
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        self.output_path.write_text(xml_content, encoding="utf-8")
