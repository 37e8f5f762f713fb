"""RSS 2.0 serialization."""

from email.utils import format_datetime
from urllib.parse import urljoin
from xml.etree.ElementTree import Element, SubElement, tostring

from quire.core.types import FeedDocument


def feed_to_xml_string(feed: FeedDocument) -> str:
    """Serialize a FeedDocument to an RSS 2.0 XML string.

    Item links are made absolute against ``feed.site``.
    """
    root = Element("rss", attrib={"version": "2.0"})
    channel = SubElement(root, "channel")
    SubElement(channel, "title").text = feed.title
    SubElement(channel, "description").text = feed.description
    SubElement(channel, "link").text = feed.site
    SubElement(channel, "language").text = feed.language
    SubElement(channel, "lastBuildDate").text = format_datetime(feed.last_build_date)

    for entry in feed.entries:
        link = urljoin(feed.site, entry.link)
        item = SubElement(channel, "item")
        SubElement(item, "title").text = entry.title
        SubElement(item, "link").text = link
        SubElement(item, "guid", attrib={"isPermaLink": "true"}).text = link
        SubElement(item, "description").text = entry.description
        SubElement(item, "pubDate").text = format_datetime(entry.pub_date)

    return "<?xml version='1.0' encoding='UTF-8'?>" + tostring(root, encoding="unicode")
