import logging

import pytest

from rrdchart.config import chart_options_from_config, load_config
from rrdchart.errors import ConfigError
from rrdchart.models import ChartOptions


def test_load_toml(tmp_path):
    path = tmp_path / 'chart.toml'
    path.write_text('[chart]\ntitle = "Power"\n', encoding='utf-8')

    assert chart_options_from_config(load_config(path)) == ChartOptions(title='Power')


def test_load_json(tmp_path):
    path = tmp_path / 'chart.json'
    path.write_text('{"title": "Power"}', encoding='utf-8')

    assert chart_options_from_config(load_config(path)) == ChartOptions(title='Power')


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError, match='does not exist'):
        load_config(tmp_path / 'nope.toml')


def test_unsupported_format(tmp_path):
    path = tmp_path / 'chart.yaml'
    path.write_text('title: x', encoding='utf-8')
    with pytest.raises(ConfigError, match='Unsupported'):
        load_config(path)


def test_invalid_toml(tmp_path):
    path = tmp_path / 'chart.toml'
    path.write_text('title = ', encoding='utf-8')
    with pytest.raises(ConfigError, match='Invalid'):
        load_config(path)


def test_absent_title_is_none():
    assert chart_options_from_config({}) == ChartOptions(title=None)


def test_non_string_title():
    with pytest.raises(ConfigError, match='title'):
        chart_options_from_config({'title': 3})


def test_unknown_keys_are_ignored_with_warning(caplog):
    with caplog.at_level(logging.WARNING, logger='rrdchart.config'):
        options = chart_options_from_config({'title': 'x', 'theme': 'dark'})

    assert options == ChartOptions(title='x')
    assert "Ignoring unknown config option 'theme'" in caplog.text
