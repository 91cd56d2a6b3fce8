"""
themetokens - design-token to WordPress theme.json export pipeline.
"""

from .errors import ThemeTokensError
from .exporter import ThemeExporter, export_theme
from .messages import handle_message
from .models import Collection, ExportOptions, Mode, OutputFile, TextStyle, Variable
from .source import SnapshotSource, VariableSource

__version__ = "0.3.0"

__all__ = [
    "Collection",
    "ExportOptions",
    "Mode",
    "OutputFile",
    "SnapshotSource",
    "TextStyle",
    "ThemeExporter",
    "ThemeTokensError",
    "Variable",
    "VariableSource",
    "__version__",
    "export_theme",
    "handle_message",
]
