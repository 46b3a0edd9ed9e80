import pytest
from pydantic import ValidationError

from museumgen.config import GalleryParams, GenerationParams, load_params
from museumgen.errors import GenerationConfigError


def test_defaults_from_bundled_yaml():
    params = load_params()
    assert params.room_count == 10
    assert params.max_placement_attempts == 20
    assert params.force_ending_rooms is True
    assert params.gallery.group_names == ["gallery_1", "gallery_2", "gallery_3"]
    assert params.gallery.spawn_chance == pytest.approx(0.8)


def test_user_file_overlays_defaults(tmp_path):
    p = tmp_path / "params.yaml"
    p.write_text("room_count: 25\ngallery:\n  spawn_chance: 0.25\n", encoding="utf-8")
    params = load_params(p)
    assert params.room_count == 25
    assert params.gallery.spawn_chance == pytest.approx(0.25)
    # untouched nested keys survive the merge
    assert params.gallery.one_item_type_per_gallery is True


def test_keyword_overrides_win_and_none_is_ignored(tmp_path):
    p = tmp_path / "params.yaml"
    p.write_text("room_count: 25\n", encoding="utf-8")
    assert load_params(p, room_count=4).room_count == 4
    assert load_params(p, room_count=None).room_count == 25


def test_missing_user_file_keeps_defaults(tmp_path):
    params = load_params(tmp_path / "nope.yaml")
    assert params.room_count == 10


@pytest.mark.parametrize(
    "data",
    [
        {"room_count": 0},
        {"max_placement_attempts": 0},
        {"cell_size": 0},
        {"gallery": {"spawn_chance": 1.5}},
        {"gallery": {"group_names": ["a", "a"]}},
        {"gallery": {"group_names": [""]}},
    ],
)
def test_invalid_values_rejected(data):
    with pytest.raises(ValidationError):
        GenerationParams.from_dict(data)


def test_yaml_round_trip(tmp_path):
    params = GenerationParams(room_count=7, gallery=GalleryParams(spawn_chance=0.5))
    path = tmp_path / "out" / "params.yaml"
    params.to_yaml(path)
    assert GenerationParams.from_yaml(path) == params


@pytest.mark.parametrize(
    "text",
    [
        "room_count: [1,\n",
        "- 1\n- 2\n",
        "just a string\n",
    ],
)
def test_unusable_params_file_raises_config_error(tmp_path, text):
    p = tmp_path / "params.yaml"
    p.write_text(text, encoding="utf-8")
    with pytest.raises(GenerationConfigError) as exc:
        load_params(p)
    assert str(p) in str(exc.value)


def test_empty_params_file_keeps_defaults(tmp_path):
    p = tmp_path / "params.yaml"
    p.write_text("", encoding="utf-8")
    assert load_params(p).room_count == 10
