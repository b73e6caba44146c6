"""
File reference injection.

Adds file references to groups and routes them into the target's build
phases by kind: compiled sources go to the Sources phase, static libraries
and frameworks to the Frameworks (link) phase, headers nowhere.
"""

import logging
import os
from enum import Enum
from typing import Dict, Optional, Tuple

from .exceptions import DuplicateFileError, UnknownFileKindError
from .model import ProjectModel, display_name

logger = logging.getLogger(__name__)


class FileKind(Enum):
    HEADER = "header"
    SOURCE = "source"
    LIBRARY = "library"
    FRAMEWORK = "framework"


class PhaseKind(Enum):
    SOURCES = "PBXSourcesBuildPhase"
    FRAMEWORKS = "PBXFrameworksBuildPhase"


# extension -> (kind, lastKnownFileType)
FILE_TYPES: Dict[str, Tuple[FileKind, str]] = {
    ".h": (FileKind.HEADER, "sourcecode.c.h"),
    ".hh": (FileKind.HEADER, "sourcecode.cpp.h"),
    ".hpp": (FileKind.HEADER, "sourcecode.cpp.h"),
    ".hxx": (FileKind.HEADER, "sourcecode.cpp.h"),
    ".c": (FileKind.SOURCE, "sourcecode.c.c"),
    ".cc": (FileKind.SOURCE, "sourcecode.cpp.cpp"),
    ".cpp": (FileKind.SOURCE, "sourcecode.cpp.cpp"),
    ".cxx": (FileKind.SOURCE, "sourcecode.cpp.cpp"),
    ".m": (FileKind.SOURCE, "sourcecode.c.objc"),
    ".mm": (FileKind.SOURCE, "sourcecode.cpp.objcpp"),
    ".a": (FileKind.LIBRARY, "archive.ar"),
    ".dylib": (FileKind.LIBRARY, "compiled.mach-o.dylib"),
    ".tbd": (FileKind.LIBRARY, "sourcecode.text-based-dylib-definition"),
    ".framework": (FileKind.FRAMEWORK, "wrapper.framework"),
    ".xcframework": (FileKind.FRAMEWORK, "wrapper.xcframework"),
}

# Fallback lastKnownFileType when a kind is given for an unknown extension
DEFAULT_FILE_TYPES = {
    FileKind.HEADER: "sourcecode.c.h",
    FileKind.SOURCE: "sourcecode.cpp.cpp",
    FileKind.LIBRARY: "archive.ar",
    FileKind.FRAMEWORK: "wrapper.framework",
}

PHASE_FOR_KIND = {
    FileKind.SOURCE: PhaseKind.SOURCES,
    FileKind.LIBRARY: PhaseKind.FRAMEWORKS,
    FileKind.FRAMEWORK: PhaseKind.FRAMEWORKS,
}


def _extension(name: str) -> str:
    return os.path.splitext(name.rstrip("/"))[1].lower()


def infer_kind(name: str) -> FileKind:
    """Kind of a file from its extension; unknown extensions are an error."""
    entry = FILE_TYPES.get(_extension(name))
    if entry is None:
        raise UnknownFileKindError(name)
    return entry[0]


def file_type_for(name: str, kind: FileKind) -> str:
    entry = FILE_TYPES.get(_extension(name))
    if entry is not None and entry[0] is kind:
        return entry[1]
    return DEFAULT_FILE_TYPES[kind]


def add_file(
    model: ProjectModel,
    group,
    name: str,
    kind: Optional[FileKind] = None,
    file_type: Optional[str] = None,
):
    """
    Append a file reference named name as the last child of group.

    Args:
        model: Loaded project
        group: Owning PBXGroup; the reference path is relative to it
        name: File name on disk
        kind: Explicit kind, inferred from the extension when omitted
        file_type: Explicit lastKnownFileType, overrides the inferred one

    Returns:
        The new PBXFileReference

    Raises:
        DuplicateFileError: group already has a child called name
    """
    kind = kind or infer_kind(name)
    if any(display_name(child) == name for child in model.children(group)):
        raise DuplicateFileError(name, display_name(group))
    ref = model.new_file_reference(group, name, file_type or file_type_for(name, kind))
    logger.debug(f"Added file {name} ({kind.value})")
    return ref


def register_in_phase(model: ProjectModel, target, phase_kind: PhaseKind, ref):
    """
    Register ref in the target's phase of the given kind.

    The phase is created when the target has none. A reference already
    present in the phase is not added again; its existing build file is
    returned instead.
    """
    phase = model.find_phase(target, phase_kind.value)
    if phase is None:
        phase = model.new_phase(target, phase_kind.value)

    for build_file in model.phase_files(phase):
        if getattr(build_file, "fileRef", None) == ref.get_id():
            logger.debug(f"{ref.path} already in {phase_kind.value}")
            return build_file

    build_file = model.new_build_file(phase, ref)
    logger.debug(f"Registered {ref.path} in {phase_kind.value}")
    return build_file


def inject_file(
    model: ProjectModel,
    target,
    group,
    name: str,
    kind: Optional[FileKind] = None,
    file_type: Optional[str] = None,
) -> Tuple[object, FileKind]:
    """Add a file to group and register it in at most one phase by its kind."""
    kind = kind or infer_kind(name)
    ref = add_file(model, group, name, kind, file_type)
    phase_kind = PHASE_FOR_KIND.get(kind)
    if phase_kind is not None:
        register_in_phase(model, target, phase_kind, ref)
    return ref, kind
