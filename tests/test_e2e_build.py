"""
End-to-end build tests

Tests the full pipeline: entry file → Assembler → output file

Validates the ordering rules of the assembled document and that fatal
errors leave no output behind.
"""

import pytest

from rayonix.config import AppSettings
from rayonix.lib.assembler import Assembler
from rayonix.lib.errors import (
    ImportCycleError,
    ImportResolutionError,
    MetaFetchError,
    OutputWriteError,
    SourceReadError,
)
from rayonix.lib.fetcher import MetaFetcher


class StubFetcher(MetaFetcher):
    """Serves meta bodies from a dict instead of the network"""

    def __init__(self, bodies, settings=None):
        super().__init__(settings)
        self.bodies = bodies

    def body_get(self, url):
        if url not in self.bodies:
            raise MetaFetchError(url, "HTTP 404 Not Found")
        return self.bodies[url]


class TestPlainDocuments:

    def test_no_directives(self, tmp_path, write_file):
        """Output is the input lines, each with one LF"""
        main = write_file("main.bas", "print 1\nprint 2")
        out = tmp_path / "out.bas"
        result = Assembler(str(main)).build(str(out))
        assert out.read_bytes() == b"print 1\nprint 2\n"
        assert result['status'] is True
        assert result['line_count'] == 2
        assert result['import_count'] == 0

    def test_crlf_input_lf_output(self, tmp_path, write_file):
        main = write_file("main.bas", "a\r\nb\r\n")
        out = tmp_path / "out.bas"
        Assembler(str(main)).build(str(out))
        assert out.read_bytes() == b"a\nb\n\n"

    def test_configured_output_newline(self, tmp_path, write_file):
        main = write_file("main.bas", "a\nb")
        out = tmp_path / "out.bas"
        Assembler(str(main), settings=AppSettings(output_newline="\r\n")).build(str(out))
        assert out.read_bytes() == b"a\r\nb\r\n"

    def test_bytes_preserved(self, tmp_path, write_file):
        main = write_file("main.bas", b"print \"caf\xe9\"")
        out = tmp_path / "out.bas"
        Assembler(str(main)).build(str(out))
        assert out.read_bytes() == b"print \"caf\xe9\"\n"


class TestImportOrdering:
    """Resolved content always trails the entry file's own lines"""

    def test_import_at_top_still_trails(self, tmp_path, write_file, monkeypatch):
        write_file("main.bas", "'!rayonix import a.bas\nM1\nM2")
        write_file("a.bas", "A1\nA2")
        monkeypatch.chdir(tmp_path)
        lines = Assembler("main.bas").document_assemble()
        assert lines == ["M1", "M2", "A1", "A2"]

    def test_siblings_with_nested_content(self, tmp_path, write_file, monkeypatch):
        """Each import's nested content is contiguous before the next sibling"""
        write_file("main.bas", "'!rayonix import a.bas\n'!rayonix import b.bas\nM")
        write_file("a.bas", "'!rayonix import c.bas\nA")
        write_file("b.bas", "B")
        write_file("c.bas", "C")
        monkeypatch.chdir(tmp_path)
        assert Assembler("main.bas").document_assemble() == ["M", "A", "C", "B"]

    def test_indented_directive(self, tmp_path, write_file, monkeypatch):
        write_file("main.bas", "M\n\t  '!rayonix import lib\\a.bas")
        write_file("lib/a.bas", "A")
        monkeypatch.chdir(tmp_path)
        assert Assembler("main.bas").document_assemble() == ["M", "A"]

    def test_inert_directive_dropped(self, tmp_path, write_file, monkeypatch):
        write_file("main.bas", "M\n'!rayonix frobnicate x\n'!rayonix import")
        monkeypatch.chdir(tmp_path)
        assert Assembler("main.bas").document_assemble() == ["M"]

    def test_inline_mode(self, tmp_path, write_file, monkeypatch):
        write_file("main.bas", "M1\n'!rayonix import a.bas\nM2")
        write_file("a.bas", "A1\n'!rayonix import b.bas\nA2")
        write_file("b.bas", "B")
        monkeypatch.chdir(tmp_path)
        assembler = Assembler("main.bas", settings=AppSettings(inline_imports=True))
        assert assembler.document_assemble() == ["M1", "A1", "B", "A2", "M2"]

    def test_main_in_subdirectory(self, tmp_path, write_file, monkeypatch):
        """Imports resolve under the main file's folder from any cwd"""
        write_file("proj/main.bas", "M\n'!rayonix import lib/a.bas")
        write_file("proj/lib/a.bas", "A\n'!rayonix import b.bas")
        write_file("proj/lib/b.bas", "B")
        monkeypatch.chdir(tmp_path)
        assert Assembler("proj/main.bas").document_assemble() == ["M", "A", "B"]

    def test_counts(self, tmp_path, write_file, monkeypatch):
        write_file("main.bas", "'!rayonix import a.bas\n'!rayonix meta http://h/x.bas")
        write_file("a.bas", "'!rayonix import b.bas")
        write_file("b.bas", "B")
        monkeypatch.chdir(tmp_path)
        assembler = Assembler("main.bas", fetcher=StubFetcher({"http://h/x.bas": b"X"}))
        result = assembler.build(str(tmp_path / "out.bas"))
        assert result['import_count'] == 2
        assert result['meta_count'] == 1


class TestMetaDirectives:

    def test_meta_content_verbatim(self, tmp_path, write_file, monkeypatch):
        """A fetched import directive is text, not a nested import"""
        write_file("main.bas", "'!rayonix meta http://h/lib.bas\nM")
        monkeypatch.chdir(tmp_path)
        fetcher = StubFetcher({"http://h/lib.bas": b"'!rayonix import missing.bas\r\nL"})
        assert Assembler("main.bas", fetcher=fetcher).document_assemble() == [
            "M", "'!rayonix import missing.bas", "L",
        ]

    def test_meta_over_http(self, tmp_path, write_file, http_server, monkeypatch):
        http_server["routes"]["/lib.bas"] = b"L1\nL2"
        write_file("main.bas", f"M\n'!rayonix meta {http_server['url']}/lib.bas")
        monkeypatch.chdir(tmp_path)
        Assembler("main.bas").build("out.bas")
        assert (tmp_path / "out.bas").read_bytes() == b"M\nL1\nL2\n"

    def test_meta_inside_import(self, tmp_path, write_file, monkeypatch):
        write_file("main.bas", "'!rayonix import a.bas\nM")
        write_file("a.bas", "'!rayonix meta http://h/x.bas\nA")
        monkeypatch.chdir(tmp_path)
        fetcher = StubFetcher({"http://h/x.bas": b"X"})
        assert Assembler("main.bas", fetcher=fetcher).document_assemble() == ["M", "A", "X"]


class TestFatalErrors:
    """Every failure aborts the build and writes nothing"""

    def test_unresolvable_import(self, tmp_path, write_file, monkeypatch):
        write_file("main.bas", "M\n'!rayonix import missing.bas")
        monkeypatch.chdir(tmp_path)
        with pytest.raises(ImportResolutionError):
            Assembler("main.bas").build("out.bas")
        assert not (tmp_path / "out.bas").exists()

    def test_doubled_space_corrupts_argument(self, tmp_path, write_file, monkeypatch):
        write_file("main.bas", "'!rayonix import  a.bas")
        write_file("a.bas", "A")
        monkeypatch.chdir(tmp_path)
        with pytest.raises(ImportResolutionError) as excinfo:
            Assembler("main.bas").document_assemble()
        assert excinfo.value.argument == " a.bas"

    def test_cycle(self, tmp_path, write_file, monkeypatch):
        write_file("main.bas", "'!rayonix import a.bas")
        write_file("a.bas", "'!rayonix import b.bas")
        write_file("b.bas", "'!rayonix import a.bas")
        monkeypatch.chdir(tmp_path)
        with pytest.raises(ImportCycleError):
            Assembler("main.bas").build("out.bas")
        assert not (tmp_path / "out.bas").exists()

    def test_failed_meta(self, tmp_path, write_file, monkeypatch):
        write_file("main.bas", "'!rayonix meta http://h/missing.bas")
        monkeypatch.chdir(tmp_path)
        with pytest.raises(MetaFetchError):
            Assembler("main.bas", fetcher=StubFetcher({})).build("out.bas")
        assert not (tmp_path / "out.bas").exists()

    def test_missing_main_file(self, tmp_path):
        with pytest.raises(SourceReadError):
            Assembler(str(tmp_path / "nope.bas")).document_assemble()

    def test_unwritable_output(self, tmp_path, write_file):
        main = write_file("main.bas", "M")
        with pytest.raises(OutputWriteError):
            Assembler(str(main)).build(str(tmp_path / "no" / "such" / "dir" / "out.bas"))

    @pytest.mark.parametrize("url", ["data:,hello", "file:///etc/hostname"])
    def test_meta_with_non_http_scheme(self, tmp_path, write_file, monkeypatch, url):
        write_file("main.bas", f"M\n'!rayonix meta {url}")
        monkeypatch.chdir(tmp_path)
        with pytest.raises(MetaFetchError):
            Assembler("main.bas").build("out.bas")
        assert not (tmp_path / "out.bas").exists()

    def test_null_byte_in_import(self, tmp_path, write_file, monkeypatch):
        write_file("main.bas", "M\n'!rayonix import a\x00b.bas")
        monkeypatch.chdir(tmp_path)
        with pytest.raises(ImportResolutionError) as excinfo:
            Assembler("main.bas").build("out.bas")
        assert len(excinfo.value.attempts) == 3
        assert not (tmp_path / "out.bas").exists()


class TestBuildResult:

    def test_result_before_write(self, tmp_path, write_file, monkeypatch):
        write_file("main.bas", "M\n'!rayonix import a.bas")
        write_file("a.bas", "A")
        monkeypatch.chdir(tmp_path)
        assembler = Assembler("main.bas")
        lines = assembler.document_assemble()
        result = assembler.result_get(lines)
        assert result['status'] is False
        assert result['output_file'] is None
        assert result['line_count'] == 2
        assert result['import_count'] == 1

    def test_write_reuses_assembler(self, tmp_path, write_file, monkeypatch):
        write_file("main.bas", "M")
        monkeypatch.chdir(tmp_path)
        assembler = Assembler("main.bas")
        lines = assembler.document_assemble()
        output_file = assembler.output_write(lines, "out.bas")
        assert assembler.result_get(lines, output_file) == {
            'status': True,
            'output_file': "out.bas",
            'line_count': 1,
            'import_count': 0,
            'meta_count': 0,
        }
