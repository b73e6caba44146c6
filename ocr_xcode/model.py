"""
Project model backed by the pbxproj library.

Wraps an XcodeProject with the traversal and object-creation calls the
mutation engine needs: targets, groups, build phases and build
configurations. New objects get deterministic ids so that re-running the
same edit reproduces the same project text.
"""

import hashlib
import logging
from pathlib import Path
from typing import List, Optional, Union

from pbxproj import PBXGenericObject, XcodeProject
from pbxproj.PBXKey import PBXKey
from pbxproj.pbxsections import PBXBuildFile, PBXFileReference, PBXGroup

from .exceptions import (
    AmbiguousTargetError,
    ProjectLoadError,
    ProjectSaveError,
    TargetNotFoundError,
)

logger = logging.getLogger(__name__)

GROUP_ISAS = ("PBXGroup", "PBXVariantGroup")
SOURCE_TREE_GROUP = "<group>"

# Default mask Xcode writes on every build phase
BUILD_ACTION_MASK = 2147483647


def object_id(kind: str, key: str) -> str:
    """Deterministic 24-char Xcode id for kind:key."""
    return hashlib.md5(f"{kind}:{key}".encode()).hexdigest()[:24].upper()


def resolve_pbxproj_path(path: Union[str, Path]) -> Path:
    """Accept either a .xcodeproj bundle or the project.pbxproj inside it."""
    path = Path(path)
    if path.suffix == ".xcodeproj" or path.is_dir():
        return path / "project.pbxproj"
    return path


def display_name(obj) -> Optional[str]:
    """Name shown in Xcode's navigator: explicit name, else the path."""
    name = getattr(obj, "name", None)
    if name:
        return str(name)
    path = getattr(obj, "path", None)
    return str(path) if path else None


class ProjectModel:
    """
    In-memory Xcode project.

    Loaded once with :meth:`load` and written once with :meth:`save`.
    Nothing touches the disk in between.
    """

    def __init__(self, project: XcodeProject, path: Path):
        self.project = project
        self.path = path

    @classmethod
    def load(cls, path: Union[str, Path]) -> "ProjectModel":
        pbxproj_path = resolve_pbxproj_path(path)
        if not pbxproj_path.is_file():
            raise ProjectLoadError(f"Project file not found: {pbxproj_path}")

        try:
            project = XcodeProject.load(str(pbxproj_path))
        except Exception as e:
            raise ProjectLoadError(f"Failed to load project {pbxproj_path}: {e}") from e

        logger.info(f"Project loaded: {pbxproj_path}")
        return cls(project, pbxproj_path)

    def save(self) -> Path:
        try:
            self.project.save(str(self.path))
        except OSError as e:
            raise ProjectSaveError(f"Failed to save project {self.path}: {e}") from e
        logger.info(f"Project saved: {self.path}")
        return self.path

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get(self, oid):
        """Object for an id, or None when the project has no such object."""
        try:
            return self.project.objects[oid]
        except KeyError:
            return None

    def target_names(self) -> List[str]:
        return [str(t.name) for t in self.project.objects.get_targets()]

    def find_target(self, name: str):
        targets = self.project.objects.get_targets(name)
        if not targets:
            raise TargetNotFoundError(name, self.target_names())
        if len(targets) > 1:
            raise AmbiguousTargetError(name, len(targets))
        return targets[0]

    def main_group(self):
        root = self.get(self.project.rootObject)
        return self.get(root.mainGroup)

    def children(self, group) -> list:
        return [c for c in (self.get(cid) for cid in group.children) if c is not None]

    def child_group(self, parent, name: str):
        """Direct subgroup of parent whose display name is name."""
        for child in self.children(parent):
            if child.isa in GROUP_ISAS and display_name(child) == name:
                return child
        return None

    def phases(self, target) -> list:
        return [p for p in (self.get(pid) for pid in target.buildPhases) if p is not None]

    def find_phase(self, target, isa: str):
        for phase in self.phases(target):
            if phase.isa == isa:
                return phase
        return None

    def phase_files(self, phase) -> list:
        files = getattr(phase, "files", None) or []
        return [f for f in (self.get(fid) for fid in files) if f is not None]

    def configurations(self, target) -> list:
        config_list = self.get(target.buildConfigurationList)
        if config_list is None:
            return []
        return [
            c for c in (self.get(cid) for cid in config_list.buildConfigurations)
            if c is not None
        ]

    def build_settings(self, configuration):
        settings = getattr(configuration, "buildSettings", None)
        if settings is None:
            settings = PBXGenericObject(configuration).parse({})
            configuration.buildSettings = settings
        return settings

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    def _add_object(self, obj, oid: str):
        # _id must be a key before the object is registered, objects are sorted by it
        obj._id = PBXKey(oid, self.project.objects)
        if self.get(oid) is not None:
            del self.project.objects[oid]
        self.project.objects[oid] = obj
        return obj

    def new_group(self, parent, name: str, path: Optional[str] = None):
        oid = object_id("group", f"{parent.get_id()}/{name}")
        data = {
            "isa": "PBXGroup",
            "children": [],
            "sourceTree": SOURCE_TREE_GROUP,
        }
        if path:
            data["path"] = path
        if name != path:
            data["name"] = name
        group = self._add_object(PBXGroup().parse(data), oid)
        parent.children.append(group.get_id())
        logger.debug(f"Created group {name} ({oid})")
        return group

    def new_file_reference(self, group, name: str, file_type: str):
        oid = object_id("file", f"{group.get_id()}/{name}")
        ref = PBXFileReference().parse({
            "isa": "PBXFileReference",
            "lastKnownFileType": file_type,
            "path": name,
            "sourceTree": SOURCE_TREE_GROUP,
        })
        self._add_object(ref, oid)
        group.children.append(ref.get_id())
        return ref

    def new_build_file(self, phase, ref):
        oid = object_id("build", f"{phase.get_id()}/{ref.get_id()}")
        build_file = PBXBuildFile().parse({
            "isa": "PBXBuildFile",
            "fileRef": ref.get_id(),
        })
        self._add_object(build_file, oid)
        phase.files.append(build_file.get_id())
        return build_file

    def new_phase(self, target, isa: str):
        oid = object_id("phase", f"{target.get_id()}/{isa}")
        phase = PBXGenericObject().parse({
            "isa": isa,
            "buildActionMask": BUILD_ACTION_MASK,
            "files": [],
            "runOnlyForDeploymentPostprocessing": 0,
        })
        self._add_object(phase, oid)
        target.buildPhases.append(phase.get_id())
        logger.info(f"Created {isa} on target {target.name}")
        return phase

    # ------------------------------------------------------------------
    # Removal
    # ------------------------------------------------------------------

    def remove_children(self, group) -> int:
        """
        Remove every descendant of group from the project.

        Any child that has its own children is emptied recursively. File
        references are also dropped from the build phases of every
        target so no build file is left pointing at a deleted reference.

        Returns:
            Number of objects removed (groups and file references)
        """
        removed = 0
        for child_id in list(group.children):
            child = self.get(child_id)
            if child is not None:
                # XCVersionGroup and other containers own children too
                if getattr(child, "children", None) is not None:
                    removed += self.remove_children(child)
                # a version group is itself a build phase member
                self.unregister_everywhere(child_id)
                del self.project.objects[child_id]
                removed += 1
            group.children.remove(child_id)
        return removed

    def unregister_everywhere(self, ref_id) -> int:
        """Drop every build file pointing at ref_id from every target phase."""
        dropped = 0
        for target in self.project.objects.get_targets():
            for phase in self.phases(target):
                for build_file in self.phase_files(phase):
                    if getattr(build_file, "fileRef", None) != ref_id:
                        continue
                    phase.files.remove(build_file.get_id())
                    if self.get(build_file.get_id()) is not None:
                        del self.project.objects[build_file.get_id()]
                    dropped += 1
        return dropped
