from __future__ import annotations


class ImplementorError(Exception):
    """
    Single failure kind surfaced to callers of the generator.
    Subclasses only narrow down which stage gave up; the message is what
    gets shown to the user.
    """


class UnsupportedTarget(ImplementorError):
    """Primitive, final, enum or annotation targets."""


class NoAccessibleConstructor(ImplementorError):
    pass


class TypeNotFound(ImplementorError):
    pass


class SourceParseFailure(ImplementorError):
    pass


class ArchiveReadFailure(ImplementorError):
    pass


class EmissionIOFailure(ImplementorError):
    pass


class CompileFailure(ImplementorError):
    pass


class PackagingFailure(ImplementorError):
    pass
