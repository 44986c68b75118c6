import json

import pytest

from sniffcheck.bundle import (
    BundleChunk,
    BundleError,
    BundleReport,
    BundleSummary,
    ChunkType,
)
from sniffcheck.bundle_report import format_report, format_summary, main, run


def _chunk(name, size, compressed=None):
    return BundleChunk(
        name=name,
        size_bytes=size,
        size_compressed=compressed,
        chunk_type=ChunkType.COMPONENT,
        path=f"dist/{name}",
    )


def _summary(total, compressed=0, largest=None, warnings=None, count=1):
    return BundleSummary(
        total_size=total,
        total_compressed=compressed,
        chunk_count=count,
        largest_chunk=largest,
        compression_ratio=1.0 if compressed == 0 else compressed / total,
        warnings=warnings or [],
    )


def test_run_without_build_output_raises(tmp_path):
    with pytest.raises(BundleError):
        run(quiet=True, root=tmp_path)


def test_main_without_build_output_reports_error(tmp_path, capsys):
    assert main(["--quiet", "--root", str(tmp_path)]) == 1
    assert "No build output found" in capsys.readouterr().err


def test_run_json_small_bundle(tmp_path, capsys):
    dist = tmp_path / "dist"
    dist.mkdir()
    (dist / "app.js").write_text("console.log(1);")
    code = run(json_output=True, quiet=True, root=tmp_path)
    data = json.loads(capsys.readouterr().out)
    assert code == 0
    assert data["summary"]["chunk_count"] == 1
    assert data["chunks"][0]["name"] == "app.js"
    assert data["chunks"][0]["chunk_type"] == "Component"
    assert data["summary"]["largest_chunk"] == "app.js"


def test_run_oversized_chunk_fails(tmp_path, capsys):
    dist = tmp_path / "dist"
    dist.mkdir()
    (dist / "big.js").write_bytes(b"x" * 600_000)
    assert run(quiet=True, root=tmp_path) == 1
    out = capsys.readouterr().out
    assert "Large chunk detected: big.js" in out


def test_main_text_output(tmp_path, capsys):
    dist = tmp_path / "dist"
    dist.mkdir()
    (dist / "index.html").write_text("<html></html>")
    assert main(["--root", str(tmp_path)]) == 0
    out = capsys.readouterr().out
    assert "Bundle Analysis Report" in out
    assert "index.html" in out


def test_format_report_orders_largest_first():
    chunks = [_chunk("small.js", 1000), _chunk("big.js", 90_000), _chunk("mid.js", 5000)]
    report = BundleReport(chunks, _summary(96_000, largest="big.js", count=3))
    text = format_report(report, quiet=True)
    assert text.index("big.js") < text.index("mid.js") < text.index("small.js")
    assert "1. big.js" in text


def test_format_report_limits_to_ten_chunks():
    chunks = [_chunk(f"c{i}.js", 1000 + i) for i in range(12)]
    report = BundleReport(chunks, _summary(20_000, count=12))
    text = format_report(report, quiet=True)
    assert "10. " in text
    assert "11. " not in text


def test_format_report_quiet_omits_header():
    report = BundleReport([_chunk("a.js", 10)], _summary(10))
    assert "Bundle Analysis Report" not in format_report(report, quiet=True)
    assert "Bundle Analysis Report" in format_report(report, quiet=False)


def test_format_report_empty_chunks():
    report = BundleReport([], _summary(0, count=0))
    text = format_report(report, quiet=True)
    assert "No bundle chunks found." in text
    assert "SUMMARY" not in text


def test_format_report_shows_compressed_and_sections():
    report = BundleReport(
        [_chunk("a.js", 2048, compressed=1024)],
        _summary(2048, warnings=["watch out"]),
        recommendations=["Consider using a CDN for static assets"],
    )
    text = format_report(report, quiet=True)
    assert "Compressed: 1 KB" in text
    assert "  • watch out" in text
    assert "  • Consider using a CDN for static assets" in text


def test_format_summary_large_bundle():
    text = format_summary(_summary(1_500_000, largest="vendor.js"))
    assert "Total bundle size: 1.50 MB" in text
    assert "PERFORMANCE IMPACT" in text
    assert "Largest chunk: vendor.js" in text
    assert "Compressed size" not in text


def test_format_summary_small_bundle_with_compression():
    text = format_summary(_summary(100_000, compressed=35_000))
    assert "PERFORMANCE IMPACT" not in text
    assert "Compressed size:" in text
    assert "Compression ratio: 65.0%" in text