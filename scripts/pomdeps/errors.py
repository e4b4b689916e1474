"""Exceptions raised while converting a build model to Maven dependencies."""


class PomConversionError(Exception):
    """Base class for every error raised by pomdeps."""


class DependencyConversionError(PomConversionError):
    """The scope mapping and the configuration index disagree.

    Raised when the configuration elected by the scope-mapping table does not
    declare the dependency being converted. This is an internal consistency
    failure and aborts the whole conversion.
    """


class ScopeMappingError(PomConversionError):
    """The configuration-to-scope mapping is not unique for a configuration set."""


class BuildModelError(PomConversionError):
    """A build-model file is malformed or references something undefined."""
