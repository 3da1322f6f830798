from .extension import ChannelData, ExtensionRecord, VersionData, XpiLib, parse_extensions
from .policy import PolicyReadme, ReadmeEntry, SchemaRevision

__all__ = [
    "ChannelData",
    "ExtensionRecord",
    "PolicyReadme",
    "ReadmeEntry",
    "SchemaRevision",
    "VersionData",
    "XpiLib",
    "parse_extensions",
]
