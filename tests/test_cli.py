"""
Tests for the command-line interface.
"""

import os
from pathlib import Path

import pytest

from pdupe.cache import cache_path_for
from pdupe.cli import EXIT_CONFIG_ERROR, main
from pdupe.cli.arg_parser import create_parser, parse_arguments, parse_grid
from pdupe.cli.reporting import format_match_line
from pdupe.models import MatchResult


def report_lines(capsys):
    return [line for line in capsys.readouterr().out.splitlines() if line.strip()]


class TestArgParser:
    """Test argument parsing."""

    def test_defaults(self):
        args = parse_arguments(['/photos'])
        assert args.paths == ['/photos']
        assert args.metric == 'simple'
        assert args.grid == (32, 32)
        assert not args.overwrite
        assert not args.fingerprint_only

    def test_options(self):
        args = parse_arguments([
            'a.jpg', 'b.jpg', '--metric', 'stddev', '--threshold', '2.5',
            '--overwrite', '--fingerprint-only', '-v', '-j', '8',
            '--reference', 'ref.jpg', '--grid', '16x8',
        ])
        assert args.metric == 'stddev'
        assert args.threshold == 2.5
        assert args.overwrite and args.fingerprint_only and args.verbose
        assert args.parallelism == 8
        assert args.reference == 'ref.jpg'
        assert args.grid == (16, 8)

    def test_unknown_metric_exits(self):
        with pytest.raises(SystemExit) as exc_info:
            parse_arguments(['a.jpg', '--metric', 'euclid'])
        assert exc_info.value.code != 0

    def test_parse_grid(self):
        assert parse_grid('4x6') == (4, 6)
        assert parse_grid('10X10') == (10, 10)

    def test_bad_grid_exits(self):
        with pytest.raises(SystemExit):
            parse_arguments(['a.jpg', '--grid', 'big'])


class TestReporting:
    """Test report line formatting."""

    def test_format_match_line(self, make_fingerprint):
        a = make_fingerprint(7, name="/small.jpg", size=1)
        b = make_fingerprint(7, name="/big.jpg", size=2)
        line = format_match_line(MatchResult(a=a, b=b, distance=1.25, matched=True))
        assert line == "1.250000 simple /big.jpg /small.jpg"

    def test_verbose_flag(self, make_fingerprint):
        a = make_fingerprint(7, name="/a.jpg")
        b = make_fingerprint(9, name="/b.jpg")
        result = MatchResult(a=a, b=b, distance=2.0, matched=False, metric='prism')
        assert format_match_line(result, verbose=True).endswith(" no-match")


class TestMain:
    """End-to-end CLI runs."""

    def test_all_pairs(self, sample_images, temp_dir, capsys):
        code = main([str(temp_dir), '--no-progress'])
        assert code == 0

        lines = report_lines(capsys)
        assert len(lines) == 3
        for line in lines:
            assert float(line.split()[0]) == 0.0
            assert 'unique.png' not in line
            assert 'gradient.png' not in line

    def test_writes_sidecars(self, sample_images, temp_dir, capsys):
        code = main([str(temp_dir), '--fingerprint-only', '--no-progress'])
        assert code == 0
        assert report_lines(capsys) == []
        assert os.path.exists(cache_path_for(Path(sample_images['unique']).resolve()))
        assert not os.path.exists(cache_path_for(Path(sample_images['corrupted']).resolve()))

    def test_compare_sidecars_directly(self, sample_images, temp_dir, capsys):
        main([sample_images['identical1'], sample_images['unique'], '--fingerprint-only', '--no-progress'])
        capsys.readouterr()

        sidecars = [
            cache_path_for(Path(sample_images[k]).resolve()) for k in ('identical1', 'unique')
        ]
        code = main(sidecars + ['-v', '--no-progress'])
        assert code == 0
        lines = report_lines(capsys)
        assert lines[0].endswith(" no-match")
        assert float(lines[0].split()[0]) == pytest.approx(170.0)
        # per-channel statistics follow in verbose mode
        assert any(line.strip().startswith('red') for line in lines[1:])

    def test_reference_mode(self, sample_images, temp_dir, capsys):
        code = main([
            str(temp_dir), '--reference', sample_images['identical1'], '--no-progress',
        ])
        assert code == 0
        lines = report_lines(capsys)
        # identical2 and red_large match; identical1 is not compared with itself
        assert len(lines) == 2
        assert all('identical1.png' in line for line in lines)

    def test_stddev_metric(self, sample_images, capsys):
        code = main([
            sample_images['identical1'], sample_images['unique'],
            '--metric', 'stddev', '--threshold', '0', '--no-progress',
        ])
        assert code == 0
        # solid colors differ by a constant per channel
        assert len(report_lines(capsys)) == 1

    def test_missing_files_are_not_fatal(self, sample_images, temp_dir, capsys):
        code = main([
            sample_images['identical1'], sample_images['identical2'],
            str(temp_dir / "missing.jpg"), sample_images['notes'], '--no-progress',
        ])
        assert code == 0
        assert len(report_lines(capsys)) == 1

    def test_no_inputs(self, temp_dir):
        assert main([]) == EXIT_CONFIG_ERROR
        assert main([str(temp_dir / "missing.jpg")]) == EXIT_CONFIG_ERROR

    def test_negative_threshold(self, sample_images):
        assert main([sample_images['unique'], '--threshold', '-1']) == EXIT_CONFIG_ERROR

    def test_zero_parallelism(self, sample_images):
        assert main([sample_images['unique'], '-j', '0']) == EXIT_CONFIG_ERROR

    def test_missing_reference(self, sample_images, temp_dir):
        code = main([sample_images['unique'], '--reference', str(temp_dir / "nope.jpg")])
        assert code == EXIT_CONFIG_ERROR

    def test_bad_config_value(self, sample_images, monkeypatch):
        monkeypatch.setenv('PDUPE_WORKERS', 'abc')
        assert main([sample_images['unique'], '--no-progress']) == EXIT_CONFIG_ERROR


class TestSmallImages:
    """Images with fewer pixels than grid cells."""

    @pytest.fixture
    def thumbnails(self, temp_dir):
        from PIL import Image
        paths = []
        for name in ("thumb1.png", "thumb2.png"):
            path = temp_dir / name
            Image.new('RGB', (20, 20), color='red').save(path)
            paths.append(str(path))
        return paths

    def test_fail_without_prescale(self, thumbnails, capsys):
        assert main(thumbnails + ['--no-progress']) == 0
        assert report_lines(capsys) == []
        assert not os.path.exists(cache_path_for(Path(thumbnails[0]).resolve()))

    def test_prescale_makes_them_usable(self, thumbnails, capsys):
        assert main(thumbnails + ['--prescale', '64', '--no-progress']) == 0
        lines = report_lines(capsys)
        assert len(lines) == 1
        assert float(lines[0].split()[0]) == 0.0

    def test_help_mentions_prescale_for_small_images(self):
        help_text = create_parser().format_help()
        assert 'thumbnails' in help_text
