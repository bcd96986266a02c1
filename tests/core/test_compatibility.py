"""
Tests - Compatibility Check
===========================
"""

from __future__ import annotations

from core.bootstrap.compatibility import (
    CompatibilityChecker,
    ExtensionRequirement,
    FolderRequirement,
    module_available,
)


def _probe(loaded):
    return lambda name: name in loaded


def _checker(tmp_path, **overrides):
    options = {
        "extensions": (),
        "folders": (),
        "runtime_version": (3, 12, 0),
        "module_probe": _probe(set()),
    }
    options.update(overrides)
    return CompatibilityChecker(tmp_path, **options)


class TestExtensions:
    def test_required_but_missing_is_a_problem(self, tmp_path):
        report = _checker(
            tmp_path,
            extensions=(
                ExtensionRequirement("fileinfo", True),
                ExtensionRequirement("mbstring", True),
            ),
            module_probe=_probe({"fileinfo"}),
        ).check()

        assert report.problem is True
        mbstring = report.extension("mbstring")
        assert (mbstring.expected, mbstring.actual) == (True, False)
        fileinfo = report.extension("fileinfo")
        assert (fileinfo.expected, fileinfo.actual) == (True, True)

    def test_forbidden_but_present_is_a_problem(self, tmp_path):
        report = _checker(
            tmp_path,
            extensions=(ExtensionRequirement("legacy_escape", False),),
            module_probe=_probe({"legacy_escape"}),
        ).check()
        assert report.problem is True
        assert report.extension("legacy_escape").actual is True

    def test_all_expectations_met(self, tmp_path):
        report = _checker(
            tmp_path,
            extensions=(
                ExtensionRequirement("sqlite3", True),
                ExtensionRequirement("legacy_escape", False),
            ),
            module_probe=_probe({"sqlite3"}),
        ).check()
        assert report.problem is False

    def test_order_follows_table(self, tmp_path):
        names = ("zlib", "ssl", "hashlib")
        report = _checker(
            tmp_path,
            extensions=tuple(ExtensionRequirement(n) for n in names),
        ).check()
        assert tuple(c.name for c in report.extensions) == names

    def test_failing_probe_reports_not_loaded(self, tmp_path):
        def broken(name):
            raise RuntimeError("probe exploded")

        report = _checker(
            tmp_path,
            extensions=(ExtensionRequirement("ssl", True),),
            module_probe=broken,
        ).check()
        assert report.extension("ssl").actual is False
        assert report.problem is True

    def test_module_available_real_modules(self):
        assert module_available("json") is True
        assert module_available("definitely_not_a_module_xyz") is False


class TestFolders:
    def test_missing_directory_is_not_writable(self, tmp_path):
        report = _checker(
            tmp_path,
            extensions=(ExtensionRequirement("ssl", True),),
            module_probe=_probe({"ssl"}),
            folders=(FolderRequirement("storage/uploads"),),
        ).check()

        assert report.problem is True
        assert report.folders[0].writable is False
        assert all(c.ok for c in report.extensions)
        assert report.runtime_version_ok is True

    def test_writable_directory(self, tmp_path):
        (tmp_path / "storage").mkdir()
        report = _checker(tmp_path, folders=(FolderRequirement("storage"),)).check()
        assert report.problem is False
        assert report.folders[0].writable is True
        assert report.folders[0].path == str((tmp_path / "storage").resolve())

    def test_directory_outside_application_root(self, tmp_path):
        app_root = tmp_path / "application"
        app_root.mkdir()
        (tmp_path / "assets" / "avatars").mkdir(parents=True)
        report = _checker(
            app_root,
            folders=(FolderRequirement("../assets/avatars"),),
        ).check()
        assert report.folders[0].path == str((tmp_path / "assets" / "avatars").resolve())
        assert report.folders[0].writable is True

    def test_file_is_not_a_writable_directory(self, tmp_path):
        (tmp_path / "storage").write_text("not a dir", encoding="utf-8")
        report = _checker(tmp_path, folders=(FolderRequirement("storage"),)).check()
        assert report.folders[0].writable is False


class TestRuntimeVersion:
    def test_old_runtime_is_reported(self, tmp_path):
        report = _checker(tmp_path, runtime_version=(3, 8, 10), min_version=(3, 10)).check()
        assert report.runtime_version_ok is False

    def test_new_runtime_passes(self, tmp_path):
        report = _checker(tmp_path, runtime_version=(3, 10, 0), min_version=(3, 10)).check()
        assert report.runtime_version_ok is True


def test_report_to_dict_shape(tmp_path):
    report = _checker(
        tmp_path,
        extensions=(ExtensionRequirement("mbstring", True),),
        folders=(FolderRequirement("storage"),),
    ).check()
    data = report.to_dict()
    assert data["problem"] is True
    assert data["extensions"] == [
        {"name": "mbstring", "expected": True, "actual": False}
    ]
    assert data["folders"][0]["writable"] is False
    assert data["runtime_version_ok"] is True
