# unit/test_cli.py

import json
from pathlib import Path

import pytest

from web_resource_checker.cli import EXIT_OPERATIONAL_FAILURE, build_parser, main

pytestmark = pytest.mark.unit

_COMPLETE_SITE = {
    "sitemap.xml": (
        b'<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">'
        b"<url><loc>https://example.com/</loc><lastmod>2026-01-01</lastmod>"
        b"<changefreq>weekly</changefreq><priority>1.0</priority></url></urlset>"
    ),
    "robots.txt": b"User-agent: *\nDisallow:\nSitemap: https://example.com/sitemap.xml\n",
}


def _site(tmp_path: Path, files: dict[str, bytes]) -> Path:
    for name, content in files.items():
        (tmp_path / name).write_bytes(content)
    return tmp_path


def test_build_parser_parses_only_into_key_set() -> None:
    """
    ARRANGE: --only with two keys
    ACT:     parse arguments
    ASSERT:  only is a frozenset of the keys
    """
    args = build_parser().parse_args([".", "--only", "robots,sitemap"])

    assert args.only == frozenset({"robots", "sitemap"})


def test_build_parser_rejects_unknown_only_key() -> None:
    """
    ARRANGE: --only naming an unknown file
    ACT:     parse arguments
    ASSERT:  argparse exits with usage error
    """
    with pytest.raises(SystemExit):
        build_parser().parse_args([".", "--only", "favicon"])


def test_build_parser_rejects_negative_timeout() -> None:
    """
    ARRANGE: --timeout -1
    ACT:     parse arguments
    ASSERT:  argparse exits with usage error
    """
    with pytest.raises(SystemExit):
        build_parser().parse_args([".", "--timeout", "-1"])


def test_build_parser_rejects_zero_timeout() -> None:
    """
    ARRANGE: --timeout 0
    ACT:     parse arguments
    ASSERT:  argparse exits with usage error
    """
    with pytest.raises(SystemExit):
        build_parser().parse_args([".", "--timeout", "0"])


def test_build_parser_rejects_non_numeric_timeout() -> None:
    """
    ARRANGE: --timeout soon
    ACT:     parse arguments
    ASSERT:  argparse exits with usage error
    """
    with pytest.raises(SystemExit):
        build_parser().parse_args([".", "--timeout", "soon"])


def test_build_parser_parses_timeout_as_seconds() -> None:
    """
    ARRANGE: --timeout 2.5
    ACT:     parse arguments
    ASSERT:  timeout is 2.5
    """
    args = build_parser().parse_args([".", "--timeout", "2.5"])

    assert args.timeout == 2.5


def test_main_clean_subset_exits_zero(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """
    ARRANGE: directory with valid sitemap.xml and robots.txt
    ACT:     run main on those two files
    ASSERT:  exit code 0 and text report printed
    """
    site = _site(tmp_path, _COMPLETE_SITE)

    actual = main([str(site), "--only", "sitemap,robots"])

    assert (actual, "# Web Resource Audit Report" in capsys.readouterr().out) == (
        0,
        True,
    )


def test_main_missing_file_exits_one(tmp_path: Path) -> None:
    """
    ARRANGE: empty directory
    ACT:     run main for sitemap only
    ASSERT:  exit code 1 for the critical not-found issue
    """
    assert main([str(tmp_path), "--only", "sitemap"]) == 1


def test_main_json_output_is_parsable(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """
    ARRANGE: empty directory
    ACT:     run main with --json
    ASSERT:  stdout is a JSON report with the requested file
    """
    main([str(tmp_path), "--only", "humans", "--json"])

    payload = json.loads(capsys.readouterr().out)

    assert list(payload["files"]) == ["humans"]


def test_main_unreachable_target_exits_two(tmp_path: Path) -> None:
    """
    ARRANGE: target path that is a regular file
    ACT:     run main
    ASSERT:  operational failure exit code
    """
    file_path = tmp_path / "robots.txt"
    file_path.write_bytes(b"User-agent: *\n")

    assert main([str(file_path)]) == EXIT_OPERATIONAL_FAILURE
