"""
Integration pipeline.

Load -> locate target and root group -> sync groups -> inject files ->
merge settings -> persist. Any failure aborts before the project is saved.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

from .files import FileKind, inject_file
from .groups import require_group, sync_group_path
from .manifest import PADDLE_OCR_MANIFEST, Manifest
from .model import ProjectModel
from .settings import merge_target_settings

logger = logging.getLogger(__name__)


@dataclass
class RunSummary:
    project_path: Path
    target_name: str
    files_by_group: Dict[str, int] = field(default_factory=dict)
    kinds: Dict[FileKind, int] = field(default_factory=dict)
    configurations: Dict[str, List[str]] = field(default_factory=dict)
    saved: bool = False

    @property
    def total_files(self) -> int:
        return sum(self.files_by_group.values())

    def count(self, kind: FileKind) -> int:
        return self.kinds.get(kind, 0)

    def lines(self) -> List[str]:
        lines = []
        for group, count in self.files_by_group.items():
            lines.append(f"Added {count} files to {group}")
        lines.append(f"Added {self.count(FileKind.SOURCE)} compiled sources")
        lines.append(f"Added {self.count(FileKind.LIBRARY)} static libraries")
        lines.append(f"Added {self.count(FileKind.FRAMEWORK)} frameworks")
        for name, keys in self.configurations.items():
            lines.append(f"Updated {len(keys)} build settings in {name}")
        return lines


def _banner(title: str):
    logger.info("=" * 60)
    logger.info(title)
    logger.info("=" * 60)


def apply_manifest(model: ProjectModel, manifest: Manifest) -> RunSummary:
    """Run every in-memory mutation of the manifest against model."""
    summary = RunSummary(project_path=model.path, target_name=manifest.target_name)

    _banner("Step 1: Locating target and root group...")
    target = model.find_target(manifest.target_name)
    root = require_group(model, model.main_group(), manifest.root_group)

    _banner("Step 2: Syncing groups...")
    groups = {}
    for spec in manifest.groups:
        groups[spec.path] = sync_group_path(model, root, spec.path)

    _banner("Step 3: Injecting files...")
    for spec in manifest.groups:
        if not spec.files:
            continue
        for entry in spec.files:
            _, kind = inject_file(
                model, target, groups[spec.path], entry.name, entry.kind, entry.file_type
            )
            summary.kinds[kind] = summary.kinds.get(kind, 0) + 1
        label = f"{manifest.root_group}/{spec.path}"
        summary.files_by_group[label] = len(spec.files)
        logger.info(f"Injected {len(spec.files)} files into {label}")

    _banner("Step 4: Merging build settings...")
    summary.configurations = merge_target_settings(model, target, manifest.settings)

    return summary


def run(
    project_path: Union[str, Path],
    manifest: Optional[Manifest] = None,
    dry_run: bool = False,
) -> RunSummary:
    """
    Apply manifest to the project at project_path and save it once.

    Args:
        project_path: .xcodeproj bundle or its project.pbxproj
        manifest: What to inject, defaults to the PaddleOCR manifest
        dry_run: Perform every mutation in memory but skip saving

    Returns:
        RunSummary describing what was added and updated
    """
    manifest = manifest or PADDLE_OCR_MANIFEST
    model = ProjectModel.load(project_path)

    summary = apply_manifest(model, manifest)

    if dry_run:
        logger.info("Dry run: project not saved")
        return summary

    _banner("Step 5: Saving project...")
    model.save()
    summary.saved = True
    return summary
