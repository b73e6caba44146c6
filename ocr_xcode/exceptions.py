"""
Errors raised while editing an Xcode project.

Every failure is fatal: the pipeline stops before the project is saved.
"""

from typing import Iterable


class OcrXcodeError(Exception):
    """Base class for all project-editing failures."""


class ProjectLoadError(OcrXcodeError):
    """The project description could not be read or parsed."""


class ProjectSaveError(OcrXcodeError):
    """The project description could not be written back."""


class TargetNotFoundError(OcrXcodeError):
    def __init__(self, target_name: str, available: Iterable[str] = ()):
        self.target_name = target_name
        self.available = list(available)
        known = ", ".join(self.available) if self.available else "none"
        super().__init__(f"{target_name} target not found (targets in project: {known})")


class AmbiguousTargetError(OcrXcodeError):
    def __init__(self, target_name: str, count: int):
        self.target_name = target_name
        self.count = count
        super().__init__(f"{count} targets are named {target_name}, expected exactly one")


class GroupNotFoundError(OcrXcodeError):
    def __init__(self, path: str):
        self.path = path
        super().__init__(f"{path} group not found")


class DuplicateFileError(OcrXcodeError):
    def __init__(self, name: str, group: str):
        self.name = name
        self.group = group
        super().__init__(f"{name} is already a child of group {group}")


class ManifestError(OcrXcodeError):
    """The manifest itself is inconsistent and cannot be applied."""


class UnknownFileKindError(OcrXcodeError):
    """A file name has no recognized extension and no explicit kind."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(
            f"Cannot infer file kind for {name!r}; pass an explicit kind in the manifest"
        )
