"""Configuration file handling for mdconf.

This package reads the md array configuration language and answers
questions about the result.

Modules:
- scanner: Split a stream into words and logical lines
- keywords: Resolve (abbreviated) directive keywords
- parsers: Build records from each directive line
- store: Hold the parsed configuration
- matcher: Match discovered arrays against ARRAY lines
- policy: Decide whether a metadata format may be auto-assembled
- devices: Expand DEVICE lines into device paths
- loader: Load the configuration once per process
"""

from .devices import DeviceLister
from .keywords import keyword_match
from .loader import ConfigLoader, get_config, load_config, reset_config
from .matcher import Ambiguous, IdentityMatcher
from .metadata import DEFAULT_REGISTRY, MetadataFormat, MetadataRegistry
from .models import ArrayIdentity, AutoCreate, ConfigLine, CreateDefaults
from .policy import AutoPolicy
from .scanner import Scanner
from .store import ConfigStore

__all__ = [
    "Ambiguous",
    "ArrayIdentity",
    "AutoCreate",
    "AutoPolicy",
    "ConfigLine",
    "ConfigLoader",
    "ConfigStore",
    "CreateDefaults",
    "DEFAULT_REGISTRY",
    "DeviceLister",
    "IdentityMatcher",
    "MetadataFormat",
    "MetadataRegistry",
    "Scanner",
    "get_config",
    "keyword_match",
    "load_config",
    "reset_config",
]
