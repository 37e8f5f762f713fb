"""Output sinks."""

from quire.infra.sinks.html import HtmlSink
from quire.infra.sinks.rss import RssSink

__all__ = ["HtmlSink", "RssSink"]
