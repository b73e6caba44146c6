"""
Shared pytest fixtures for the Xcode integration tests.
"""
import os
import sys

import pytest

# Add project root and tests directory to path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
tests_dir = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, project_root)
sys.path.insert(0, tests_dir)

from pbxproj_fixtures import write_project  # noqa: E402

from ocr_xcode.files import FileKind  # noqa: E402
from ocr_xcode.manifest import FileEntry, GroupSpec, Manifest  # noqa: E402
from ocr_xcode.model import ProjectModel  # noqa: E402
from ocr_xcode.settings import Scalar  # noqa: E402


@pytest.fixture
def project_path(tmp_path):
    """Runner project with an AppDelegate already compiled."""
    return write_project(tmp_path)


@pytest.fixture
def empty_project_path(tmp_path):
    """Runner project whose Runner group and build phases are empty."""
    return write_project(tmp_path, with_app_delegate=False)


@pytest.fixture
def model(project_path):
    return ProjectModel.load(project_path)


@pytest.fixture
def target(model):
    return model.find_target("Runner")


@pytest.fixture
def runner_group(model):
    return model.child_group(model.main_group(), "Runner")


@pytest.fixture
def small_manifest():
    """One group holding a header and a compiled source."""
    return Manifest(
        target_name="Runner",
        root_group="Runner",
        groups=(GroupSpec("Group1", (FileEntry("a.h"), FileEntry("a.cc"))),),
        settings={"LANG_STD": Scalar("v1")},
    )


@pytest.fixture
def mixed_manifest():
    """Sources, headers, a static library and a framework across nested groups."""
    return Manifest(
        target_name="Runner",
        root_group="Runner",
        groups=(
            GroupSpec("Engine", (FileEntry("engine.h"), FileEntry("engine.mm"))),
            GroupSpec("vendor", (FileEntry("Dep.framework", kind=FileKind.FRAMEWORK),)),
            GroupSpec("vendor/lib", (FileEntry("libdep.a"),)),
        ),
        settings={"LANG_STD": Scalar("v1")},
    )
