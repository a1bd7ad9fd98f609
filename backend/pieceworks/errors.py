"""Exception hierarchy shared by the engine, exporters and settings loaders."""

from __future__ import annotations


class PieceworksError(Exception):
    """Base class for all library errors."""


class MissingMountPointError(PieceworksError, ValueError):
    """A display was constructed without a surface to render into."""


class UnknownPrimitiveError(PieceworksError, KeyError):
    """A state table or caller referenced a primitive id the registry never declared."""


class MalformedSettingsError(PieceworksError, ValueError):
    """A settings document failed to parse or lacks a required section."""


class RasterExportError(PieceworksError):
    """Base class for vector → raster failures."""


class RasterDecodeError(RasterExportError):
    """The rasterizer could not decode the exported vector document."""


class RasterTimeoutError(RasterExportError, TimeoutError):
    """Rasterization did not finish within the allotted time."""


class RasterCancelledError(RasterExportError):
    """Rasterization was abandoned through its cancel token."""
