import json
import re

from click.testing import CliRunner

from rrdchart.cli import main


def _figures(page):
    return json.loads(re.search(r'const figures = (.*);', page).group(1))


def test_generates_page_with_every_resolution(rrd4j_file, tmp_path):
    out = tmp_path / 'out' / 'chart.html'
    result = CliRunner().invoke(main, ['-rrd', str(rrd4j_file), '-o', str(out), '-title', 'Sensor'])

    assert result.exit_code == 0, result.output
    assert f'Generated chart: {out}' in result.output
    page = out.read_text(encoding='utf-8')
    assert '<title>Sensor</title>' in page
    figures = _figures(page)
    assert sorted(figures) == ['0', '1']
    labels = [b['label'] for b in figures['0']['layout']['updatemenus'][0]['buttons']]
    assert labels == ['5 min (25 min)', '1 hrs (3 hrs)']
    assert figures['1']['data'][0]['y'] == [1.5, None, 2.5]
    assert 'const initial = figures["0"];' in page


def test_initial_archive_and_dark_mode(rrd4j_file, tmp_path):
    out = tmp_path / 'chart.html'
    result = CliRunner().invoke(
        main, ['-rrd', str(rrd4j_file), '-o', str(out), '-archive', '1', '-mode', 'dark'])

    assert result.exit_code == 0, result.output
    page = out.read_text(encoding='utf-8')
    assert 'data-theme="dark"' in page
    assert 'const initial = figures["1"];' in page


def test_secondary_unit(rrd4j_file, tmp_path):
    out = tmp_path / 'chart.html'
    result = CliRunner().invoke(
        main, ['-rrd', str(rrd4j_file), '-o', str(out), '-secondary-unit', '%'])

    assert result.exit_code == 0, result.output
    data = _figures(out.read_text(encoding='utf-8'))['0']['data']
    assert [t['yaxis'] for t in data] == ['y', 'y2']


def test_title_from_config(rrd4j_file, tmp_path):
    config = tmp_path / 'chart.toml'
    config.write_text('[chart]\ntitle = "From config"\n', encoding='utf-8')
    out = tmp_path / 'chart.html'

    result = CliRunner().invoke(
        main, ['-rrd', str(rrd4j_file), '-o', str(out), '-config', str(config)])

    assert result.exit_code == 0, result.output
    assert '<title>From config</title>' in out.read_text(encoding='utf-8')


def test_bad_config(rrd4j_file, tmp_path):
    result = CliRunner().invoke(
        main, ['-rrd', str(rrd4j_file), '-o', str(tmp_path / 'x.html'),
               '-config', str(tmp_path / 'missing.toml')])

    assert result.exit_code == 1
    assert 'Error: Config path does not exist' in result.output


def test_unreadable_rrd(tmp_path):
    bad = tmp_path / 'bad.rrd'
    bad.write_bytes(b'\x00' * 16)
    out = tmp_path / 'chart.html'

    result = CliRunner().invoke(main, ['-rrd', str(bad), '-o', str(out)])

    assert result.exit_code == 1
    assert 'Error: Could not load rrd4j file' in result.output
    assert not out.exists()


def test_archive_out_of_range(rrd4j_file, tmp_path):
    result = CliRunner().invoke(
        main, ['-rrd', str(rrd4j_file), '-o', str(tmp_path / 'x.html'), '-archive', '9'])

    assert result.exit_code == 1
    assert 'archive index 9 out of range' in result.output


def test_rrd_without_archives(tmp_path):
    from tests.conftest import build_rrd4j

    empty = tmp_path / 'empty.rrd'
    empty.write_bytes(build_rrd4j(60, 600, ['x'], []))

    result = CliRunner().invoke(main, ['-rrd', str(empty), '-o', str(tmp_path / 'x.html')])

    assert result.exit_code == 1
    assert 'Error: Could not load rrd4j file' in result.output
    assert 'no archives' in result.output
