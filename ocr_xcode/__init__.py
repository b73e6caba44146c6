"""
OCR Xcode integration

Idempotent editing of an Xcode project to vendor the PaddleOCR engine.

Submodules:
- model: pbxproj-backed project model
- groups: group synchronization
- files: file reference injection and build phase routing
- settings: per-key build settings merge
- manifest: the PaddleOCR file list and settings table
- pipeline: end-to-end run
"""

from .exceptions import (
    AmbiguousTargetError,
    DuplicateFileError,
    GroupNotFoundError,
    ManifestError,
    OcrXcodeError,
    ProjectLoadError,
    ProjectSaveError,
    TargetNotFoundError,
    UnknownFileKindError,
)
from .files import FileKind, PhaseKind, add_file, infer_kind, inject_file, register_in_phase
from .groups import find_group, sync_group
from .manifest import PADDLE_OCR_MANIFEST, FileEntry, GroupSpec, Manifest
from .model import ProjectModel
from .pipeline import RunSummary, apply_manifest, run
from .settings import DefaultIfAbsent, Replace, Scalar, apply_settings, merge_target_settings

__version__ = "0.1.0"

__all__ = [
    "AmbiguousTargetError",
    "DuplicateFileError",
    "GroupNotFoundError",
    "ManifestError",
    "OcrXcodeError",
    "ProjectLoadError",
    "ProjectSaveError",
    "TargetNotFoundError",
    "UnknownFileKindError",
    "FileKind",
    "PhaseKind",
    "add_file",
    "infer_kind",
    "inject_file",
    "register_in_phase",
    "find_group",
    "sync_group",
    "PADDLE_OCR_MANIFEST",
    "FileEntry",
    "GroupSpec",
    "Manifest",
    "ProjectModel",
    "RunSummary",
    "apply_manifest",
    "run",
    "DefaultIfAbsent",
    "Replace",
    "Scalar",
    "apply_settings",
    "merge_target_settings",
]
