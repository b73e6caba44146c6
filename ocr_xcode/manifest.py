"""
PaddleOCR integration manifest.

Static description of what gets injected into the Runner target: the
PaddleOCR pipeline sources, the PaddleLite static library with its
headers, the OpenCV framework, and the build settings they need.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from .exceptions import ManifestError
from .files import FileKind
from .groups import split_path
from .settings import DefaultIfAbsent, Replace, Scalar, SettingPolicy, inherited_list


@dataclass(frozen=True)
class FileEntry:
    name: str
    kind: Optional[FileKind] = None
    file_type: Optional[str] = None


@dataclass(frozen=True)
class GroupSpec:
    # Slash-separated, relative to the manifest's root group
    path: str
    files: Tuple[FileEntry, ...] = ()


@dataclass(frozen=True)
class Manifest:
    target_name: str
    root_group: str
    groups: Tuple[GroupSpec, ...]
    settings: Dict[str, SettingPolicy] = field(default_factory=dict)

    def __post_init__(self):
        self.validate()

    def validate(self):
        """
        Reject group layouts that would orphan files during a run.

        Syncing a group clears its subgroups, so every group must be listed
        after all of its listed ancestors, and each path at most once. File
        names must be unique within a group.

        Raises:
            ManifestError: on the first inconsistency found
        """
        seen = set()
        for spec in self.groups:
            parts = split_path(spec.path)
            if not parts:
                raise ManifestError("Group path must not be empty")
            path = "/".join(parts)
            if path in seen:
                raise ManifestError(f"Group {path} is listed more than once")
            seen.add(path)

            names = [entry.name for entry in spec.files]
            duplicates = sorted({name for name in names if names.count(name) > 1})
            if duplicates:
                raise ManifestError(f"Group {path} lists {', '.join(duplicates)} more than once")

        listed = set()
        for spec in self.groups:
            parts = split_path(spec.path)
            for depth in range(1, len(parts)):
                ancestor = "/".join(parts[:depth])
                if ancestor in seen and ancestor not in listed:
                    raise ManifestError(
                        f"Group {spec.path} is listed before its parent {ancestor}"
                    )
            listed.add("/".join(parts))

    def file_count(self) -> int:
        return sum(len(g.files) for g in self.groups)


def files(*names: str) -> Tuple[FileEntry, ...]:
    return tuple(FileEntry(name) for name in names)


PADDLE_OCR_SOURCES = files(
    "PaddleOcrPlugin.h",
    "PaddleOcrPlugin.mm",
    "pipeline.h",
    "pipeline.cc",
    "det_process.h",
    "det_process.cc",
    "rec_process.h",
    "rec_process.cc",
    "cls_process.h",
    "cls_process.cc",
    "db_post_process.h",
    "db_post_process.cc",
    "utils.h",
    "utils.cc",
    "timer.h",
    "clipper.hpp",
    "clipper.cpp",
)

PADDLE_LITE_HEADERS = files(
    "paddle_api.h",
    "paddle_image_preprocess.h",
    "paddle_lite_factory_helper.h",
    "paddle_place.h",
    "paddle_use_kernels.h",
    "paddle_use_ops.h",
    "paddle_use_passes.h",
)

PADDLE_LITE_LIBRARY = FileEntry("libpaddle_api_light_bundled.a")

OPENCV_FRAMEWORK = FileEntry(
    "opencv2.framework", kind=FileKind.FRAMEWORK, file_type="wrapper.framework"
)

HEADER_SEARCH_PATHS = inherited_list(
    '"$(SRCROOT)/Runner/PaddleOCR"',
    '"$(SRCROOT)/Runner/third-party/PaddleLite/include"',
    '"$(SRCROOT)/Runner/third-party"',
)

LIBRARY_SEARCH_PATHS = inherited_list(
    '"$(SRCROOT)/Runner/third-party/PaddleLite/lib"',
)

FRAMEWORK_SEARCH_PATHS = inherited_list(
    '"$(SRCROOT)/Runner/third-party"',
)

OTHER_LDFLAGS = inherited_list("-lc++", "-lz")

PADDLE_OCR_SETTINGS: Dict[str, SettingPolicy] = {
    "HEADER_SEARCH_PATHS": Replace(HEADER_SEARCH_PATHS),
    "LIBRARY_SEARCH_PATHS": Replace(LIBRARY_SEARCH_PATHS),
    "FRAMEWORK_SEARCH_PATHS": Replace(FRAMEWORK_SEARCH_PATHS),
    "OTHER_LDFLAGS": Replace(OTHER_LDFLAGS),
    "CLANG_CXX_LANGUAGE_STANDARD": Scalar("c++17"),
    "GCC_PREPROCESSOR_DEFINITIONS": DefaultIfAbsent(inherited_list()),
    "ENABLE_BITCODE": Scalar("NO"),
    # Lets .cc files that include Obj-C headers build with modules on
    "OTHER_CPLUSPLUSFLAGS": Scalar("$(inherited) -fmodules -fcxx-modules"),
}

# Groups are synced in this order; parents must precede their subgroups
PADDLE_OCR_MANIFEST = Manifest(
    target_name="Runner",
    root_group="Runner",
    groups=(
        GroupSpec("PaddleOCR", PADDLE_OCR_SOURCES),
        GroupSpec("third-party", (OPENCV_FRAMEWORK,)),
        GroupSpec("third-party/PaddleLite"),
        GroupSpec("third-party/PaddleLite/include", PADDLE_LITE_HEADERS),
        GroupSpec("third-party/PaddleLite/lib", (PADDLE_LITE_LIBRARY,)),
    ),
    settings=PADDLE_OCR_SETTINGS,
)
