import pytest

from core import clean_name, organize_name, is_already_organized, path_scoped_tokens
from core.text_match import is_valid_filename


def test_clean_strips_every_folder_token():
    assert clean_name("icons-home-icon", {"icons", "home"}, "-") == "icon"


def test_clean_returns_unnamed_when_nothing_left():
    assert clean_name("icons", {"icons"}, "-") == "unnamed"
    assert clean_name("icons-home", {"icons", "home"}, "-") == "unnamed"


def test_clean_longest_token_first():
    assert clean_name("icons-home", {"icon", "icons"}, "-") == "home"
    assert clean_name("home-icons", {"icon", "icons"}, "-") == "home"


def test_clean_only_removes_whole_segments():
    # "icon" inside "iconic" or "icons" is not a separate segment
    assert clean_name("iconic-icons-arrow", {"icon"}, "-") == "iconic-icons-arrow"


def test_clean_interior_occurrence_keeps_neighbors_apart():
    assert clean_name("arrow-home-left", {"home"}, "-") == "arrow-left"


def test_clean_repeats_until_fixed_point():
    assert clean_name("home-home-home-door", {"home"}, "-") == "door"
    assert clean_name("a-home-home-b", {"home"}, "-") == "a-b"


def test_clean_is_case_insensitive():
    assert clean_name("ICONS-Home-arrow", {"icons", "home"}, "-") == "arrow"


def test_clean_collapses_and_trims_separators():
    assert clean_name("-a--b-", set(), "-") == "a-b"
    assert clean_name("a--icons--b", {"icons"}, "-") == "a-b"


def test_clean_no_change_returns_input():
    stem = "arrow-left"
    assert clean_name(stem, {"icons", "home"}, "-") == stem


def test_clean_treats_separator_and_tokens_literally():
    assert clean_name("a.b+c.x", {"b+c"}, ".") == "a.x"
    assert clean_name("img.logo", {"im."}, ".") == "img.logo"
    assert clean_name("x*y*z", {"y"}, "*") == "x*z"


def test_clean_multi_segment_token():
    assert clean_name("social-media-facebook", {"social-media"}, "-") == "facebook"


@pytest.mark.parametrize("stem,tokens", [
    ("icons-home-icon", {"icons", "home"}),
    ("home-home-x-home", {"home"}),
    ("--a--b--", {"a"}),
    ("unnamed", {"unnamed"}),
    ("Icons-ICONS-icon", {"icon", "icons"}),
])
def test_clean_is_idempotent(stem, tokens):
    once = clean_name(stem, tokens, "-")
    assert clean_name(once, tokens, "-") == once


def test_path_scoped_tokens():
    assert path_scoped_tokens("icons", ("home", "nav")) == frozenset({"icons", "home", "nav"})
    assert path_scoped_tokens("", ()) == frozenset()


def test_organize_prefixes_root_and_path():
    assert organize_name("icon", ["home"], "icons", "-") == "icons-home-icon"
    assert organize_name("icon", ["a", "b"], "icons", "_") == "icons_a_b_icon"


def test_organize_without_base_name():
    assert organize_name("icon", ["home"], "", "-") == "home-icon"


def test_organize_file_directly_in_root():
    assert organize_name("logo", [], "images", "-") == "images-logo"


def test_organize_no_prefix_is_noop():
    assert organize_name("logo", [], "", "-") == "logo"


def test_organize_is_idempotent():
    once = organize_name("icon", ["home"], "icons", "-")
    assert organize_name(once, ["home"], "icons", "-") == once


def test_is_already_organized():
    assert is_already_organized("icons-home-icon", ["home"], "icons", "-")
    assert is_already_organized("Icons-Home-icon", ["home"], "icons", "-")
    assert not is_already_organized("icons-icon", ["home"], "icons", "-")
    assert not is_already_organized("icons-homeland", ["home"], "icons", "-")


def test_mixed_case_prefix_is_left_unprefixed():
    assert organize_name("Icons-Home-x", ["home"], "icons", "-") == "Icons-Home-x"


def test_is_valid_filename():
    assert is_valid_filename("icon.svg") == (True, None)
    assert is_valid_filename("a:b.svg")[0] is False
    assert is_valid_filename("")[0] is False
