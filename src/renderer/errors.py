# renderer/errors.py


class RenderError(Exception):
    """Base class for render failures."""


class RenderOutputError(RenderError):
    """The image could not be written. A partial image is not recoverable."""


class BackendUnavailableError(RenderError):
    """A requested compute backend is missing; callers fall back to the CPU."""
