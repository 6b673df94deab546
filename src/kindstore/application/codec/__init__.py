"""Entity codec."""

from kindstore.application.codec.entity_codec import EntityCodec

__all__ = ["EntityCodec"]
