import json

import pytest

from pafscope.config import (
    CONFIG_FILE_NAME,
    AppConfig,
    app_dir,
    load_app_config,
    save_app_config,
)
from pafscope.draw import AnnotationDrawConfig


def test_defaults():
    config = AppConfig()
    assert config.alignment_line_width == 8.0
    assert config.grid_line_width == 1.0
    assert config.annotation_draw_config == AnnotationDrawConfig()


def test_dict_round_trip():
    config = AppConfig(
        alignment_line_width=3.5,
        grid_line_width=2.0,
        annotation_draw_config=AnnotationDrawConfig(0.25, False),
    )
    assert AppConfig.from_dict(config.to_dict()) == config


def test_from_dict_missing_field():
    data = AppConfig().to_dict()
    del data["grid_line_width"]
    with pytest.raises(ValueError):
        AppConfig.from_dict(data)


def test_from_dict_missing_nested_field():
    data = AppConfig().to_dict()
    del data["annotation_draw_config"]["color_region_border"]
    with pytest.raises(ValueError):
        AppConfig.from_dict(data)


def test_from_dict_wrong_type():
    data = AppConfig().to_dict()
    data["alignment_line_width"] = "wide"
    with pytest.raises(ValueError):
        AppConfig.from_dict(data)


def test_save_and_load_round_trip(tmp_path):
    config = AppConfig(alignment_line_width=4.0)
    path = save_app_config(config, tmp_path)
    assert path == tmp_path / CONFIG_FILE_NAME
    assert load_app_config(tmp_path) == config


def test_save_creates_directory(tmp_path):
    target = tmp_path / "cfg"
    save_app_config(AppConfig(), target)
    assert target.is_dir()
    assert json.loads((target / CONFIG_FILE_NAME).read_text())["grid_line_width"] == 1.0


def test_save_rejects_file_in_place_of_directory(tmp_path):
    blocker = tmp_path / "cfg"
    blocker.write_text("not a directory")
    with pytest.raises(NotADirectoryError):
        save_app_config(AppConfig(), blocker)


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_app_config(tmp_path)


def test_load_invalid_json(tmp_path):
    (tmp_path / CONFIG_FILE_NAME).write_text("{not json")
    with pytest.raises(ValueError):
        load_app_config(tmp_path)


def test_app_dir_name():
    assert app_dir().name == "PafView"