from core import check_path_length, check_rename_op, check_writable
from core.safety_checks import is_case_only_change
from tests.conftest import touch


def test_check_rename_op_ok(tmp_path):
    src = touch(tmp_path / "home-icon.svg")
    assert check_rename_op(src, tmp_path / "icon.svg") == (True, None)


def test_check_rename_op_missing_source(tmp_path):
    ok, error = check_rename_op(tmp_path / "gone.svg", tmp_path / "icon.svg")
    assert not ok
    assert "does not exist" in error


def test_check_rename_op_directory_source(tmp_path):
    (tmp_path / "home").mkdir()
    ok, error = check_rename_op(tmp_path / "home", tmp_path / "other")
    assert not ok
    assert "not a file" in error


def test_check_rename_op_existing_target(tmp_path):
    src = touch(tmp_path / "home-icon.svg")
    touch(tmp_path / "icon.svg")
    assert check_rename_op(src, tmp_path / "icon.svg") == (False, "Target already exists: icon.svg")


def test_check_rename_op_invalid_name(tmp_path):
    src = touch(tmp_path / "home-icon.svg")
    ok, error = check_rename_op(src, tmp_path / "icon?.svg")
    assert not ok
    assert "invalid character" in error


def test_is_case_only_change(tmp_path):
    assert is_case_only_change(tmp_path / "Icon.svg", tmp_path / "icon.svg")
    assert not is_case_only_change(tmp_path / "icon.svg", tmp_path / "icon.svg")
    assert not is_case_only_change(tmp_path / "a" / "Icon.svg", tmp_path / "b" / "icon.svg")


def test_check_path_length(tmp_path):
    assert check_path_length(tmp_path / "icon.svg", max_length=1000) == (True, None)
    ok, error = check_path_length(tmp_path / ("x" * 50), max_length=10)
    assert not ok
    assert "exceeds limit" in error


def test_check_writable_missing_parent(tmp_path):
    ok, error = check_writable(tmp_path / "missing" / "icon.svg")
    assert not ok
    assert "does not exist" in error
